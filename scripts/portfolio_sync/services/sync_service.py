#------------------------------------------------------------
#                       sync_service.py
#       Rebuilds personal projects from GitHub and merges
#            them with the hand-maintained records.

import dataclasses
import logging
from typing import Dict, List, Optional, Tuple
from ..config import PROJECT_CATEGORY_PERSONAL, PROJECT_CATEGORY_PROFESSIONAL, PROJECT_CATEGORIES
from ..errors import RateLimitError
from ..models import (
    OUTCOME_ADDED,
    OUTCOME_FAILED,
    OUTCOME_SKIPPED,
    OUTCOME_UPDATED,
    ParsedReadme,
    Project,
    RepoOutcome,
    SyncReport,
)
from .config_store import ConfigStore
from .description_service import has_description, optional_text, select_technologies
from .github_service import GitHubService
from .readme_service import parse_readme

logger = logging.getLogger(__name__)

SKIP_NOT_ACCESSIBLE = "repository not accessible (404)"
SKIP_NO_README = "no README found"
SKIP_NO_DESCRIPTION = "no Abstract/Overview/Description/Project Description section found"

# This function does build a fresh personal project from GitHub data.
# All GitHub and README sourced fields are taken from the inputs.
def build_project(repo: dict, parsed: ParsedReadme) -> Project:
    return Project(
        id=str(repo["id"]),
        name=repo.get("name") or "",
        category=PROJECT_CATEGORY_PERSONAL,
        description=repo.get("description") or "",
        abstract=parsed.abstract or "",
        overview=optional_text(parsed.overview),
        readme_description=optional_text(parsed.description),
        project_description=optional_text(parsed.project_description),
        image=parsed.image_url,
        technologies=select_technologies(parsed, repo),
        github_url=repo.get("html_url") or "",
        language=repo.get("language") or None,
        stars=repo.get("stargazers_count"),
        topics=list(repo.get("topics") or []),
        updated_at=repo.get("updated_at") or "",
        created_at=repo.get("created_at") or "",
    )

# This function does carry manual fields from a stored record.
# GitHub and README fields always come from the candidate.
def merge_project(candidate: Project, existing: Optional[Project] = None) -> Project:
    if existing is None:
        return candidate
    return dataclasses.replace(
        candidate,
        live_url=existing.live_url,
        extra=dict(existing.extra),
    )

def _split_owner_repo(repo: dict) -> Tuple[str, str]:
    full_name = repo.get("full_name") or ""
    if "/" in full_name:
        owner, name = full_name.split("/", 1)
        return owner, name
    owner = (repo.get("owner") or {}).get("login") or ""
    return owner, repo.get("name") or ""

class SyncService:
    """Runs one GitHub sync cycle against a config store.

    A cycle loads the portfolio and stored projects, lists the user's
    repositories, rebuilds a personal project for every repository whose
    README qualifies, and writes professional + personal projects back in a
    single call. Failures for one repository are contained; failures to
    load config, list repositories, or write the result abort the cycle.
    """

    def __init__(self, github_service: GitHubService, store: ConfigStore):
        self.github_service = github_service
        self.store = store

    def sync(self) -> SyncReport:
        logger.info("Starting sync...")
        try:
            portfolio = self.store.read_portfolio()
            existing_projects = self.store.read_projects()
            passthrough, existing_personal = self._partition(existing_projects)

            logger.info("Fetching repos for user: %s", portfolio.github_username)
            repos = self.github_service.list_user_repositories(portfolio.github_username)
            logger.info("Found %d repositories", len(repos))

            existing_by_id = {project.id: project for project in existing_personal}
            outcomes = [self.process_repository(repo, existing_by_id) for repo in repos]

            personal = [outcome.project for outcome in outcomes if outcome.project is not None]
            self.store.write_projects(passthrough + personal)
        except Exception as error:
            logger.error("Sync aborted; nothing was written: %s", error)
            raise

        report = self._summarize(outcomes, len(passthrough))
        logger.info(
            "Sync complete. Total projects: %d (%d professional, %d personal; "
            "%d added, %d updated, %d skipped, %d failed)",
            report.total, report.professional, report.personal,
            report.added, report.updated, report.skipped, report.failed,
        )
        return report

    # This function does process one repository into an outcome.
    # Exceptions other than rate limiting become a failed outcome.
    def process_repository(self, repo: dict, existing_by_id: Dict[str, Project]) -> RepoOutcome:
        repo_name = repo.get("name") or repo.get("full_name") or str(repo.get("id"))
        try:
            return self._build_outcome(repo, repo_name, existing_by_id)
        except RateLimitError:
            raise
        except Exception as error:
            logger.error(
                "Failed to process %s; will retry next cycle: %s",
                repo_name, error, exc_info=True,
            )
            return RepoOutcome(repo_name=repo_name, status=OUTCOME_FAILED, error=error)

    def _build_outcome(self, repo: dict, repo_name: str, existing_by_id: Dict[str, Project]) -> RepoOutcome:
        owner, name = _split_owner_repo(repo)
        full_name = f"{owner}/{name}"

        branch = self.github_service.get_default_branch(full_name)
        if not branch:
            return self._skip(repo_name, SKIP_NOT_ACCESSIBLE)

        readme = self.github_service.get_readme(full_name, branch=branch)
        if not readme:
            return self._skip(repo_name, SKIP_NO_README)

        parsed = parse_readme(readme, owner, name, branch)
        if not has_description(parsed):
            return self._skip(repo_name, SKIP_NO_DESCRIPTION)

        candidate = build_project(repo, parsed)
        existing = existing_by_id.get(candidate.id)
        project = merge_project(candidate, existing)
        if existing is not None:
            logger.info("Updating %s", repo_name)
            return RepoOutcome(repo_name=repo_name, status=OUTCOME_UPDATED, project=project)
        logger.info("Adding new project: %s", repo_name)
        return RepoOutcome(repo_name=repo_name, status=OUTCOME_ADDED, project=project)

    @staticmethod
    def _skip(repo_name: str, reason: str) -> RepoOutcome:
        logger.info("Skipping %s (did not qualify): %s", repo_name, reason)
        return RepoOutcome(repo_name=repo_name, status=OUTCOME_SKIPPED, reason=reason)

    @staticmethod
    def _partition(projects: List[Project]) -> Tuple[List[Project], List[Project]]:
        passthrough: List[Project] = []
        personal: List[Project] = []
        for project in projects:
            if project.category == PROJECT_CATEGORY_PERSONAL:
                personal.append(project)
                continue
            if project.category not in PROJECT_CATEGORIES:
                logger.warning(
                    "Project %s has unknown category %r; keeping it unchanged like %s projects",
                    project.id, project.category, PROJECT_CATEGORY_PROFESSIONAL,
                )
            passthrough.append(project)
        return passthrough, personal

    @staticmethod
    def _summarize(outcomes: List[RepoOutcome], passthrough_count: int) -> SyncReport:
        report = SyncReport(professional=passthrough_count)
        for outcome in outcomes:
            if outcome.status == OUTCOME_ADDED:
                report.added += 1
            elif outcome.status == OUTCOME_UPDATED:
                report.updated += 1
            elif outcome.status == OUTCOME_SKIPPED:
                report.skipped += 1
            elif outcome.status == OUTCOME_FAILED:
                report.failed += 1
        report.personal = report.added + report.updated
        return report

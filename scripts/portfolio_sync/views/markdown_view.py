#------------------------------------------------------------
#                      markdown_view.py
#           Orders persisted projects and renders them
#                as a markdown listing for operators.

from datetime import datetime, timezone
from typing import List, Optional
from dateutil import parser as date_parser
from dateutil import relativedelta
from ..config import PROJECT_CATEGORY_PERSONAL, PROJECT_CATEGORY_PROFESSIONAL
from ..models import Project

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

PROFESSIONAL_HEADING = "## Professional Projects"
PERSONAL_HEADING = "## Personal Projects"
EMPTY_PROFESSIONAL_MESSAGE = "_No professional projects configured._"
EMPTY_PERSONAL_MESSAGE = "_No personal projects synced yet._"
PROJECT_BLOCK_TEMPLATE = "**[{name}]({url})** - {summary}"
PROJECT_LINE_TEMPLATE = "- **{label}:** {value}"
NO_SUMMARY_LABEL = "No summary available."
UNKNOWN_TIME_LABEL = "unknown"

# This function does parse an ISO timestamp into an aware datetime.
# It returns None for blank or unparsable values.
def parse_timestamp(value: str) -> Optional[datetime]:
    if not value:
        return None
    try:
        parsed = date_parser.isoparse(value)
    except (ValueError, OverflowError):
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed

def _timestamp_key(value: str) -> datetime:
    return parse_timestamp(value) or EPOCH

def relative_time(dt: datetime, now: Optional[datetime] = None) -> str:
    """Return a human-friendly relative time string."""
    now = now or datetime.now(timezone.utc)
    delta = relativedelta.relativedelta(now, dt)
    if delta.years > 0:
        return f"{delta.years} year{'s' if delta.years != 1 else ''} ago"
    if delta.months > 0:
        return f"{delta.months} month{'s' if delta.months != 1 else ''} ago"
    if delta.days > 0:
        return f"{delta.days} day{'s' if delta.days != 1 else ''} ago"
    if delta.hours > 0:
        return f"{delta.hours} hour{'s' if delta.hours != 1 else ''} ago"
    return "just now"

# This function does order personal projects for display.
# Stars first, then most recently updated, then most recently created.
def sort_personal_projects(projects: List[Project]) -> List[Project]:
    return sorted(
        projects,
        key=lambda project: (
            project.stars or 0,
            _timestamp_key(project.updated_at),
            _timestamp_key(project.created_at),
        ),
        reverse=True,
    )

# This function does order professional projects for display.
# The most recently updated project comes first.
def sort_professional_projects(projects: List[Project]) -> List[Project]:
    return sorted(projects, key=lambda project: _timestamp_key(project.updated_at), reverse=True)

def _project_summary(project: Project) -> str:
    for value in (
        project.abstract,
        project.overview,
        project.readme_description,
        project.project_description,
        project.description,
    ):
        text = " ".join((value or "").split())
        if text:
            return text
    return NO_SUMMARY_LABEL

# This function does render one project markdown block.
# It includes summary, technologies, stars, and last update.
def render_project_block(project: Project, now: Optional[datetime] = None) -> str:
    lines = [
        PROJECT_BLOCK_TEMPLATE.format(
            name=project.name,
            url=project.github_url or project.live_url or "",
            summary=_project_summary(project),
        )
    ]
    if project.technologies:
        lines.append(PROJECT_LINE_TEMPLATE.format(label="Technologies", value=", ".join(project.technologies)))
    if project.stars is not None:
        lines.append(PROJECT_LINE_TEMPLATE.format(label="Stars", value=project.stars))
    if project.live_url:
        lines.append(PROJECT_LINE_TEMPLATE.format(label="Live", value=project.live_url))

    updated = parse_timestamp(project.updated_at)
    updated_label = relative_time(updated, now) if updated else UNKNOWN_TIME_LABEL
    lines.append(PROJECT_LINE_TEMPLATE.format(label="Updated", value=updated_label))
    return "\n".join(lines)

def _render_section(heading: str, projects: List[Project], empty_message: str, now: Optional[datetime]) -> str:
    if not projects:
        return f"{heading}\n\n{empty_message}"
    blocks = "\n\n".join(render_project_block(project, now) for project in projects)
    return f"{heading}\n\n{blocks}"

# This function does render the full project listing.
# Professional and personal projects are ordered and sectioned separately.
def render_project_list(projects: List[Project], now: Optional[datetime] = None) -> str:
    professional = sort_professional_projects(
        [project for project in projects if project.category == PROJECT_CATEGORY_PROFESSIONAL]
    )
    personal = sort_personal_projects(
        [project for project in projects if project.category == PROJECT_CATEGORY_PERSONAL]
    )
    return "\n\n".join(
        [
            _render_section(PROFESSIONAL_HEADING, professional, EMPTY_PROFESSIONAL_MESSAGE, now),
            _render_section(PERSONAL_HEADING, personal, EMPTY_PERSONAL_MESSAGE, now),
        ]
    )

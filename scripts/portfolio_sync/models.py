#------------------------------------------------------------
#                          models.py
#       Defines dataclasses used by the sync pipeline and
#            their JSON (camelCase) record mapping.

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
from .config import (
    DEFAULT_CONFIG_DIR,
    DEFAULT_LOG_LEVEL,
    DEFAULT_SYNC_INTERVAL_DAYS,
    PROJECT_CATEGORY_PERSONAL,
)

OUTCOME_ADDED = "added"
OUTCOME_UPDATED = "updated"
OUTCOME_SKIPPED = "skipped"
OUTCOME_FAILED = "failed"

# Stored JSON key -> dataclass attribute, in the order records are written.
PROJECT_FIELD_MAP = (
    ("id", "id"),
    ("name", "name"),
    ("description", "description"),
    ("abstract", "abstract"),
    ("overview", "overview"),
    ("readmeDescription", "readme_description"),
    ("projectDescription", "project_description"),
    ("category", "category"),
    ("image", "image"),
    ("technologies", "technologies"),
    ("githubUrl", "github_url"),
    ("liveUrl", "live_url"),
    ("language", "language"),
    ("stars", "stars"),
    ("topics", "topics"),
    ("updatedAt", "updated_at"),
    ("createdAt", "created_at"),
)
PROJECT_JSON_KEYS = frozenset(key for key, _ in PROJECT_FIELD_MAP)

PORTFOLIO_FIELD_MAP = (
    ("name", "name"),
    ("title", "title"),
    ("bio", "bio"),
    ("email", "email"),
    ("githubUsername", "github_username"),
)
PORTFOLIO_JSON_KEYS = frozenset(key for key, _ in PORTFOLIO_FIELD_MAP)

@dataclass
class SyncSettings:
    github_token: str = ""
    sync_interval_days: int = DEFAULT_SYNC_INTERVAL_DAYS
    config_dir: str = DEFAULT_CONFIG_DIR
    log_level: str = DEFAULT_LOG_LEVEL

@dataclass
class Portfolio:
    github_username: str
    name: str = ""
    title: str = ""
    bio: str = ""
    email: str = ""
    extra: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Portfolio":
        values = {attr: data[key] for key, attr in PORTFOLIO_FIELD_MAP if data.get(key) is not None}
        extra = {key: value for key, value in data.items() if key not in PORTFOLIO_JSON_KEYS}
        return cls(extra=extra, **values)

@dataclass
class Project:
    """One portfolio project record.

    Personal records are rebuilt from GitHub on every sync; professional
    records are maintained by hand. ``extra`` holds every stored key this
    class does not know about so hand-added fields survive a rewrite, and
    ``raw`` keeps the stored record so non-personal records are written back
    verbatim.
    """

    id: str
    name: str
    category: str = PROJECT_CATEGORY_PERSONAL
    description: Optional[str] = None
    abstract: Optional[str] = None
    overview: Optional[str] = None
    readme_description: Optional[str] = None
    project_description: Optional[str] = None
    image: Optional[str] = None
    technologies: Optional[List[str]] = None
    github_url: Optional[str] = None
    live_url: Optional[str] = None
    language: Optional[str] = None
    stars: Optional[int] = None
    topics: Optional[List[str]] = None
    updated_at: Optional[str] = None
    created_at: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)
    raw: Optional[Dict[str, Any]] = field(default=None, repr=False, compare=False)

    # This function does build a project from a stored record.
    # A record without a category is kept uncategorised, not personal.
    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Project":
        values = {attr: data[key] for key, attr in PROJECT_FIELD_MAP if data.get(key) is not None}
        values["id"] = str(values.get("id", ""))
        values.setdefault("name", "")
        values.setdefault("category", "")
        extra = {key: value for key, value in data.items() if key not in PROJECT_JSON_KEYS}
        return cls(extra=extra, raw=dict(data), **values)

    # This function does turn the project back into a stored record.
    # Records that sync does not own are returned exactly as they were read.
    def to_dict(self) -> Dict[str, Any]:
        if self.raw is not None and self.category != PROJECT_CATEGORY_PERSONAL:
            return dict(self.raw)
        record: Dict[str, Any] = {}
        for key, attr in PROJECT_FIELD_MAP:
            value = getattr(self, attr)
            if value is None:
                continue
            record[key] = list(value) if isinstance(value, list) else value
        for key, value in self.extra.items():
            record.setdefault(key, value)
        return record

@dataclass
class ParsedReadme:
    abstract: str = ""
    overview: str = ""
    description: str = ""
    project_description: str = ""
    image_url: Optional[str] = None
    technologies: Optional[List[str]] = None

@dataclass
class RepoOutcome:
    repo_name: str
    status: str
    project: Optional[Project] = None
    reason: str = ""
    error: Optional[BaseException] = None

@dataclass
class SyncReport:
    professional: int = 0
    personal: int = 0
    added: int = 0
    updated: int = 0
    skipped: int = 0
    failed: int = 0

    @property
    def total(self) -> int:
        return self.professional + self.personal

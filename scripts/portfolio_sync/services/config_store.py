#------------------------------------------------------------
#                       config_store.py
#       Reads the portfolio profile and reads/writes the
#              persisted project list as JSON files.

import json
import logging
import os
import stat
import tempfile
from typing import Any, List
from ..config import NEW_FILE_MODE, PORTFOLIO_FILENAME, PROJECTS_FILENAME, PROJECTS_JSON_INDENT
from ..errors import ConfigError
from ..models import Portfolio, Project

logger = logging.getLogger(__name__)

class ConfigStore:

    def __init__(self, config_dir: str):
        self.config_dir = config_dir

    @property
    def portfolio_path(self) -> str:
        return os.path.join(self.config_dir, PORTFOLIO_FILENAME)

    @property
    def projects_path(self) -> str:
        return os.path.join(self.config_dir, PROJECTS_FILENAME)

    # This function does load the portfolio profile.
    # It raises ConfigError when the file is missing or malformed.
    def read_portfolio(self) -> Portfolio:
        path = self.portfolio_path
        try:
            with open(path, "r", encoding="utf-8") as file_handle:
                data = json.load(file_handle)
        except (OSError, ValueError) as error:
            raise ConfigError(f"Failed to read {path}: {error}") from error

        if not isinstance(data, dict):
            raise ConfigError(f"Failed to read {path}: expected a JSON object")
        username = str(data.get("githubUsername") or "").strip()
        if not username:
            raise ConfigError(f"Failed to read {path}: githubUsername is not set")

        data = dict(data, githubUsername=username)
        return Portfolio.from_dict(data)

    # This function does load the persisted project list.
    # It returns an empty list when the file is absent or unparsable.
    def read_projects(self) -> List[Project]:
        data = self._load_json(self.projects_path)
        if not isinstance(data, list):
            return []

        projects = []
        for index, item in enumerate(data):
            if not isinstance(item, dict):
                logger.warning("Ignoring project entry %d in %s: not an object", index, self.projects_path)
                continue
            projects.append(Project.from_dict(item))
        return projects

    # This function does replace the persisted project list.
    # It writes a temporary file and renames it over the original.
    def write_projects(self, projects: List[Project]) -> None:
        path = self.projects_path
        payload = json.dumps(
            [project.to_dict() for project in projects],
            indent=PROJECTS_JSON_INDENT,
            ensure_ascii=False,
        )

        temp_path = None
        try:
            os.makedirs(self.config_dir, exist_ok=True)
            fd, temp_path = tempfile.mkstemp(prefix=".projects-", suffix=".json", dir=self.config_dir)
            with os.fdopen(fd, "w", encoding="utf-8") as file_handle:
                file_handle.write(payload)
            os.chmod(temp_path, self._target_mode(path))
            os.replace(temp_path, path)
        except OSError as error:
            if temp_path and os.path.exists(temp_path):
                os.remove(temp_path)
            raise ConfigError(f"Failed to write {path}: {error}") from error

    # This function does pick the permission bits for a rewritten file.
    # An existing file keeps its mode; a new one follows the process umask.
    @staticmethod
    def _target_mode(path: str) -> int:
        try:
            return stat.S_IMODE(os.stat(path).st_mode)
        except FileNotFoundError:
            umask = os.umask(0)
            os.umask(umask)
            return NEW_FILE_MODE & ~umask

    @staticmethod
    def _load_json(path: str) -> Any:
        if not os.path.exists(path):
            return None
        try:
            with open(path, "r", encoding="utf-8") as file_handle:
                return json.load(file_handle)
        except (OSError, ValueError) as error:
            logger.warning("Could not parse %s: %s", path, error)
            return None

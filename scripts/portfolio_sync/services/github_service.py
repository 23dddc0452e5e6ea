#------------------------------------------------------------
#                      github_service.py
#               Handles GitHub API requests and
#                 rate-limit bookkeeping.

import base64
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
import requests
from ..config import (
    GITHUB_API_ACCEPT_HEADER,
    GITHUB_API_BASE_URL,
    GITHUB_DEFAULT_BRANCH,
    GITHUB_MAX_REPO_PAGES,
    GITHUB_RATE_LIMIT_WARNING_THRESHOLD,
    GITHUB_REPOS_PER_PAGE,
    GITHUB_REQUEST_TIMEOUT_SECONDS,
)
from ..errors import GitHubApiError, RateLimitError

logger = logging.getLogger(__name__)

AUTH_REPOS_ENDPOINT = "/user/repos"
USER_REPOS_ENDPOINT_TEMPLATE = "/users/{username}/repos"
REPO_ENDPOINT_TEMPLATE = "/repos/{full_name}"
README_ENDPOINT_TEMPLATE = "/repos/{full_name}/readme"

RATE_LIMIT_REMAINING_HEADER = "X-RateLimit-Remaining"
RATE_LIMIT_RESET_HEADER = "X-RateLimit-Reset"
UNAUTHENTICATED_RATE_LIMIT = 60

AUTH_REPOS_MESSAGE = "Using authenticated /user/repos endpoint (owned repos, all visibilities)"
PUBLIC_REPOS_MESSAGE = "Using public-only /users/%s/repos endpoint"
PAGE_RESULT_MESSAGE = "Page %d: Found %d repositories"

README_EXPECTED_ENCODING = "base64"
README_DECODE_ENCODING = "utf-8"
README_DECODE_ERROR_MODE = "replace"

# This function does join owner and repo into an owner/repo path.
# It accepts either a combined full name or the two parts separately.
def _full_name(owner_or_full_name: str, repo: Optional[str] = None) -> str:
    if repo:
        return f"{owner_or_full_name}/{repo}"
    return owner_or_full_name

class GitHubService:

    def __init__(self, token: str = "", timeout: int = GITHUB_REQUEST_TIMEOUT_SECONDS):
        self.token = token
        self.timeout = timeout
        self.rate_limit_remaining: int = UNAUTHENTICATED_RATE_LIMIT
        self.rate_limit_reset: Optional[datetime] = None

    # This function does build request headers for GitHub API calls.
    # It adds auth headers when a token is configured.
    def headers(self) -> Dict[str, str]:
        headers = {"Accept": GITHUB_API_ACCEPT_HEADER}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    # This function does report the last seen rate-limit state.
    # The reset time is None until a response carried the header.
    def rate_limit_info(self) -> Dict[str, Any]:
        return {"remaining": self.rate_limit_remaining, "reset": self.rate_limit_reset}

    # This function does store rate-limit headers from a response.
    # It warns when few requests remain before the reset.
    def _record_rate_limit(self, response: requests.Response) -> None:
        remaining = response.headers.get(RATE_LIMIT_REMAINING_HEADER)
        reset = response.headers.get(RATE_LIMIT_RESET_HEADER)
        try:
            if remaining is not None:
                self.rate_limit_remaining = int(remaining)
            if reset is not None:
                self.rate_limit_reset = datetime.fromtimestamp(int(reset), tz=timezone.utc)
        except ValueError:
            logger.debug("Ignoring malformed rate-limit headers: %r / %r", remaining, reset)
            return

        if remaining is not None and self.rate_limit_remaining < GITHUB_RATE_LIMIT_WARNING_THRESHOLD:
            logger.warning(
                "GitHub rate limit low: %d requests remaining, resets at %s",
                self.rate_limit_remaining,
                self.rate_limit_reset.isoformat() if self.rate_limit_reset else "unknown",
            )

    # This function does perform one GET request against the API.
    # It records rate-limit headers and raises on any non-2xx status.
    def _request(self, endpoint: str, params: Optional[Dict[str, Any]] = None) -> Any:
        url = f"{GITHUB_API_BASE_URL}{endpoint}"
        response = requests.get(url, headers=self.headers(), params=params, timeout=self.timeout)
        self._record_rate_limit(response)

        if response.status_code == 403 and self.rate_limit_remaining == 0:
            raise RateLimitError(self.rate_limit_reset, url)
        if not response.ok:
            raise GitHubApiError(response.status_code, response.reason or "", url)
        return response.json()

    # This function does fetch every repository for a user.
    # It pages through API results until an empty page is returned.
    def list_user_repositories(self, username: str) -> List[dict]:
        repos: List[dict] = []

        if self.token:
            endpoint = AUTH_REPOS_ENDPOINT
            base_params: Dict[str, Any] = {"visibility": "all", "affiliation": "owner"}
            logger.info(AUTH_REPOS_MESSAGE)
        else:
            endpoint = USER_REPOS_ENDPOINT_TEMPLATE.format(username=username)
            base_params = {}
            logger.info(PUBLIC_REPOS_MESSAGE, username)

        page = 1
        while True:
            params = dict(base_params, sort="updated", per_page=GITHUB_REPOS_PER_PAGE, page=page)
            data = self._request(endpoint, params=params)
            if not data:
                break

            logger.debug(PAGE_RESULT_MESSAGE, page, len(data))
            repos.extend(data)
            page += 1
            if page > GITHUB_MAX_REPO_PAGES:
                logger.warning("Stopped listing repositories after %d pages", GITHUB_MAX_REPO_PAGES)
                break

        return repos

    # This function does look up a repository's default branch.
    # It returns None when the repository is not found (404).
    def get_default_branch(self, owner_or_full_name: str, repo: Optional[str] = None) -> Optional[str]:
        full_name = _full_name(owner_or_full_name, repo)
        try:
            data = self._request(REPO_ENDPOINT_TEMPLATE.format(full_name=full_name))
        except GitHubApiError as error:
            if error.status_code == 404:
                return None
            raise
        return data.get("default_branch") or GITHUB_DEFAULT_BRANCH

    # This function does fetch and decode repository README text.
    # It returns None when the repository has no README (404).
    def get_readme(
        self,
        owner_or_full_name: str,
        repo: Optional[str] = None,
        *,
        branch: Optional[str] = None,
    ) -> Optional[str]:
        full_name = _full_name(owner_or_full_name, repo)
        params = {"ref": branch} if branch else None
        try:
            data = self._request(README_ENDPOINT_TEMPLATE.format(full_name=full_name), params=params)
        except GitHubApiError as error:
            if error.status_code == 404:
                return None
            raise

        content = data.get("content") or ""
        if data.get("encoding") == README_EXPECTED_ENCODING:
            return base64.b64decode(content).decode(README_DECODE_ENCODING, errors=README_DECODE_ERROR_MODE)
        return content

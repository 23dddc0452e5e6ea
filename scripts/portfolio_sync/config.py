#------------------------------------------------------------
#                          config.py
#       Centralizes environment names, defaults, and
#                  API and file constants.

# Environment variable names for configuration
ENV_GITHUB_TOKEN = "GITHUB_TOKEN"
ENV_SYNC_INTERVAL_DAYS = "SYNC_INTERVAL_DAYS"
ENV_CONFIG_DIR = "PORTFOLIO_CONFIG_DIR"
ENV_LOG_LEVEL = "LOG_LEVEL"

# Default values for configuration parameters
DEFAULT_SYNC_INTERVAL_DAYS = 7
DEFAULT_CONFIG_DIR = "config"
DEFAULT_LOG_LEVEL = "INFO"
SECONDS_PER_DAY = 24 * 60 * 60

# Constants for GitHub API interaction
GITHUB_API_ACCEPT_HEADER = "application/vnd.github+json"
GITHUB_API_BASE_URL = "https://api.github.com"
GITHUB_RAW_CONTENT_BASE_URL = "https://raw.githubusercontent.com"
GITHUB_REPOS_PER_PAGE = 100
GITHUB_MAX_REPO_PAGES = 100
GITHUB_REQUEST_TIMEOUT_SECONDS = 30
GITHUB_RATE_LIMIT_WARNING_THRESHOLD = 10
GITHUB_DEFAULT_BRANCH = "main"

# File names inside the config directory.
PORTFOLIO_FILENAME = "portfolio.json"
PROJECTS_FILENAME = "projects.json"
PROJECTS_JSON_INDENT = 2
NEW_FILE_MODE = 0o666

# Project categories; sync only ever writes personal records.
PROJECT_CATEGORY_PROFESSIONAL = "professional"
PROJECT_CATEGORY_PERSONAL = "personal"
PROJECT_CATEGORIES = (PROJECT_CATEGORY_PROFESSIONAL, PROJECT_CATEGORY_PERSONAL)

# README extraction limits.
MAX_TECHNOLOGIES = 20
MAX_TECHNOLOGY_LENGTH = 50

# The message shown when no GITHUB_TOKEN is provided.
NO_GITHUB_TOKEN_MESSAGE = "No GITHUB_TOKEN found - only public repos will be synced"

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

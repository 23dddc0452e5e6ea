#------------------------------------------------------------
#                      readme_service.py
#        Extracts project summary sections, the lead image,
#              and technologies from README markdown.

import re
from typing import Iterable, List, Optional, Union
from ..config import GITHUB_RAW_CONTENT_BASE_URL, MAX_TECHNOLOGIES, MAX_TECHNOLOGY_LENGTH
from ..models import ParsedReadme
from .description_service import clean_markup

ABSTRACT_HEADING = "Abstract"
OVERVIEW_HEADING = "Overview"
DESCRIPTION_HEADING = "Description"
PROJECT_DESCRIPTION_HEADING = "Project Description"
SUMMARY_HEADINGS = (ABSTRACT_HEADING, OVERVIEW_HEADING, DESCRIPTION_HEADING, PROJECT_DESCRIPTION_HEADING)
TECHNOLOGY_HEADINGS = ("Technologies", "Technology", "Tech Stack", "Built With", "Stack")

SECTION_HEADING_TEMPLATE = r"^#{{2,3}}[ \t]+{name}[ \t]*$"
NEXT_HEADING_PATTERN = re.compile(r"^#{1,3}(?:[ \t]|$)", re.MULTILINE)
HTML_IMAGE_PATTERN = re.compile(r"<img[^>]+src=[\"']([^\"']+)[\"'][^>]*>", re.IGNORECASE)
FENCED_CODE_PATTERN = re.compile(r"```.*?```", re.DOTALL)
MARKDOWN_IMAGE_PATTERN = re.compile(r"!\[[^\]]*\]\(([^)]+)\)")
IMAGE_TITLE_PATTERN = re.compile(r"\s+[\"'][^\"']*[\"']\s*$")
BULLET_ITEM_PATTERN = re.compile(r"^[ \t]*[-*][ \t]+(.+)$", re.MULTILINE)
TOKEN_SPLIT_PATTERN = re.compile(r"[,\n]")
ABSOLUTE_URL_PATTERN = re.compile(r"^https?://", re.IGNORECASE)
LEADING_RELATIVE_PATTERN = re.compile(r"^\.?/")
RAW_CONTENT_URL_TEMPLATE = "{base}/{owner}/{repo}/{branch}/{path}"

def _normalize_newlines(markdown: str) -> str:
    return (markdown or "").replace("\r\n", "\n").replace("\r", "\n")

def _heading_pattern(name: str) -> "re.Pattern":
    words = r"[ \t]+".join(re.escape(word) for word in name.split())
    return re.compile(SECTION_HEADING_TEMPLATE.format(name=words), re.IGNORECASE | re.MULTILINE)

# This function does return the trimmed body under one heading.
# It returns None when the heading is absent.
def _section_body(markdown: str, name: str) -> Optional[str]:
    match = _heading_pattern(name).search(markdown)
    if not match:
        return None

    start = match.end()
    if markdown.startswith("\n", start):
        start += 1
    remaining = markdown[start:]
    next_heading = NEXT_HEADING_PATTERN.search(remaining)
    body = remaining[:next_heading.start()] if next_heading else remaining
    return body.strip()

def extract_section(markdown: str, heading_names: Union[str, Iterable[str]]) -> str:
    """Return the content of the first matching level-2/3 section.

    Heading names are tried in the order given and matched
    case-insensitively; the first one with a non-empty body wins. The body
    runs up to the next level-1/2/3 heading or the end of the document.
    Returns an empty string when no named section has content.
    """
    names = (heading_names,) if isinstance(heading_names, str) else tuple(heading_names)
    text = _normalize_newlines(markdown)
    for name in names:
        body = _section_body(text, name)
        if body:
            return body
    return ""

def extract_abstract(markdown: str) -> str:
    return extract_section(markdown, ABSTRACT_HEADING)

def extract_overview(markdown: str) -> str:
    return extract_section(markdown, OVERVIEW_HEADING)

def extract_description(markdown: str) -> str:
    return extract_section(markdown, DESCRIPTION_HEADING)

def extract_project_description(markdown: str) -> str:
    return extract_section(markdown, PROJECT_DESCRIPTION_HEADING)

# This function does find the first image referenced by a README.
# HTML img tags win; markdown images inside fenced code are ignored.
def extract_first_image(markdown: str) -> Optional[str]:
    text = markdown or ""
    html_match = HTML_IMAGE_PATTERN.search(text)
    if html_match and html_match.group(1).strip():
        return html_match.group(1).strip()

    without_code = FENCED_CODE_PATTERN.sub("", text)
    markdown_match = MARKDOWN_IMAGE_PATTERN.search(without_code)
    if markdown_match:
        target = IMAGE_TITLE_PATTERN.sub("", markdown_match.group(1).strip())
        return target or None
    return None

def _keep_token(token: str) -> bool:
    return 0 < len(token) < MAX_TECHNOLOGY_LENGTH

# This function does read the technologies list from a README.
# Bullet items are preferred; comma or newline tokens are the fallback.
def extract_technologies(markdown: str) -> List[str]:
    section = extract_section(markdown, TECHNOLOGY_HEADINGS)
    if not section:
        return []

    technologies = [clean_markup(item) for item in BULLET_ITEM_PATTERN.findall(section)]
    technologies = [item for item in technologies if _keep_token(item)]

    if not technologies:
        tokens = (clean_markup(token) for token in TOKEN_SPLIT_PATTERN.split(section))
        technologies = [token for token in tokens if _keep_token(token)]

    return technologies[:MAX_TECHNOLOGIES]

# This function does turn a README image path into an absolute URL.
# Relative paths are rewritten against raw.githubusercontent.com.
def resolve_image_url(path: str, owner: str, repo: str, branch: str) -> str:
    if ABSOLUTE_URL_PATTERN.match(path):
        return path
    clean_path = LEADING_RELATIVE_PATTERN.sub("", path, count=1)
    return RAW_CONTENT_URL_TEMPLATE.format(
        base=GITHUB_RAW_CONTENT_BASE_URL,
        owner=owner,
        repo=repo,
        branch=branch,
        path=clean_path,
    )

def parse_readme(markdown: str, owner: str, repo: str, branch: str) -> ParsedReadme:
    image_path = extract_first_image(markdown)
    technologies = extract_technologies(markdown)
    return ParsedReadme(
        abstract=extract_abstract(markdown),
        overview=extract_overview(markdown),
        description=extract_description(markdown),
        project_description=extract_project_description(markdown),
        image_url=resolve_image_url(image_path, owner, repo, branch) if image_path else None,
        technologies=technologies or None,
    )

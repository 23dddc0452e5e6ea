#------------------------------------------------------------
#                   description_service.py
#        Cleans markdown fragments and decides whether a
#             README describes a portfolio project.

import re
from typing import List, Optional
from ..models import ParsedReadme

MARKDOWN_IMAGE_PATTERN = r"!\[[^\]]*\]\([^)]*\)"
MARKDOWN_LINK_PATTERN = r"\[([^\]]+)\]\([^)]*\)"
INLINE_CODE_PATTERN = r"`+([^`]*)`+"
WHITESPACE_PATTERN = r"\s+"

# This function does strip image, link, and code markup from text.
# Link and code text is kept; images are dropped entirely.
def clean_markup(text: str) -> str:
    cleaned = text or ""
    cleaned = re.sub(MARKDOWN_IMAGE_PATTERN, "", cleaned)
    cleaned = re.sub(MARKDOWN_LINK_PATTERN, r"\1", cleaned)
    cleaned = re.sub(INLINE_CODE_PATTERN, r"\1", cleaned)
    cleaned = re.sub(WHITESPACE_PATTERN, " ", cleaned).strip()
    return cleaned

# This function does apply the project admission gate.
# Any one non-empty summary section is enough to qualify.
def has_description(parsed: ParsedReadme) -> bool:
    return any(
        (value or "").strip()
        for value in (
            parsed.abstract,
            parsed.overview,
            parsed.description,
            parsed.project_description,
        )
    )

# This function does choose the technology list for a project.
# README-declared technologies win over repository topics.
def select_technologies(parsed: ParsedReadme, repo: dict) -> List[str]:
    if parsed.technologies:
        return list(parsed.technologies)
    return list(repo.get("topics") or [])

def optional_text(value: str) -> Optional[str]:
    return value if (value or "").strip() else None

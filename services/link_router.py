"""
Link Router: decides whether a pasted link is Google-hosted and pulls the
Drive/Docs file ID out of it.

To support a new Google URL shape:
    1. Add a (name, pattern) pair to FILE_ID_PATTERNS at the right priority.
    2. Add a case to tests/test_link_router.py.
"""

import re
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

logger = logging.getLogger(__name__)

# Matches any http/https URL in text
URL_PATTERN = re.compile(
    r"https?://[^\s<>\"')\]]+",
    re.IGNORECASE,
)

GOOGLE_HOSTS = ("drive.google.com", "docs.google.com")

# Ordered, first match wins. "uc_id" can never fire before "id_param";
# it stays so the lookup order is identical to older links' handling.
FILE_ID_PATTERNS: tuple[tuple[str, re.Pattern], ...] = (
    ("file", re.compile(r"/file/d/([a-zA-Z0-9_-]+)")),
    ("presentation", re.compile(r"/presentation/d/([a-zA-Z0-9_-]+)")),
    ("document", re.compile(r"/document/d/([a-zA-Z0-9_-]+)")),
    ("spreadsheets", re.compile(r"/spreadsheets/d/([a-zA-Z0-9_-]+)")),
    ("id_param", re.compile(r"[?&]id=([a-zA-Z0-9_-]+)")),
    ("uc_id", re.compile(r"/uc\?id=([a-zA-Z0-9_-]+)")),
)


class LinkType(Enum):
    """Where a link points to."""
    GOOGLE = "google"
    DIRECT = "direct"


@dataclass(frozen=True)
class LinkClassification:
    is_google_hosted: bool
    file_id: Optional[str] = None

    @property
    def link_type(self) -> LinkType:
        return LinkType.GOOGLE if self.is_google_hosted else LinkType.DIRECT


def extract_urls(text: str) -> list[str]:
    """Extract all http/https URLs from arbitrary text."""
    raw = URL_PATTERN.findall(text)
    cleaned: list[str] = []
    for url in raw:
        url = url.rstrip(".,;:!?)")
        if url and len(url) > 10:
            cleaned.append(url)
    logger.debug(f"Extracted {len(cleaned)} URL(s) from input text")
    return cleaned


def is_google_link(text: str) -> bool:
    """Substring check, tolerant of tracking params and stray whitespace."""
    s = text.strip().lower()
    return any(host in s for host in GOOGLE_HOSTS)


def extract_file_id(text: str) -> Optional[str]:
    """Return the first file ID matched by FILE_ID_PATTERNS, or None."""
    url = text.strip()
    if not url:
        return None

    for name, pattern in FILE_ID_PATTERNS:
        match = pattern.search(url)
        if match:
            logger.debug(f"File ID matched by '{name}' pattern")
            return match.group(1)
    return None


def classify(text: str) -> LinkClassification:
    """Classify a single link as Google-hosted (with its file ID) or direct."""
    if not is_google_link(text):
        return LinkClassification(is_google_hosted=False)

    file_id = extract_file_id(text)
    if file_id is None:
        logger.debug("Google link without a recognisable file ID")
    return LinkClassification(is_google_hosted=True, file_id=file_id)

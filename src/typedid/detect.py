"""Identifier type detection from bare identifier strings."""

from __future__ import annotations

import logging
import re
from typing import Protocol

import msgspec

logger = logging.getLogger(__name__)


class DetectedIdentifier(msgspec.Struct, frozen=True):
    """Identifier type and canonical value inferred from a string."""

    itemtype: str
    itemvalue: str


class IdentifierDetector(Protocol):
    """Service that infers an identifier type from its value alone."""

    def detect(self, value: str) -> DetectedIdentifier | None: ...


_DOI_RE = re.compile(
    r"^(?:doi:\s*|https?://(?:dx\.)?doi\.org/)?(10\.\d{4,9}/\S+)$", re.IGNORECASE
)
_ORCID_RE = re.compile(
    r"^(?:https?://orcid\.org/)?(\d{4}-\d{4}-\d{4}-\d{3}[\dX])$", re.IGNORECASE
)
_OPENALEX_RE = re.compile(r"^(?:https?://openalex\.org/)?([WASICPFT]\d{6,})$", re.IGNORECASE)
_PMCID_RE = re.compile(
    r"^(?:https?://(?:www\.)?ncbi\.nlm\.nih\.gov/pmc/articles/)?(PMC\d+)/?$", re.IGNORECASE
)
_PMID_RE = re.compile(
    r"^(?:pmid:\s*|https?://pubmed\.ncbi\.nlm\.nih\.gov/)(\d+)/?$", re.IGNORECASE
)
_ARXIV_RE = re.compile(
    r"^(?:arxiv:\s*|https?://arxiv\.org/(?:abs|pdf)/)"
    r"(\d{4}\.\d{4,5}(?:v\d+)?|[a-z\-]+(?:\.[A-Z]{2})?/\d{7}(?:v\d+)?)(?:\.pdf)?$",
    re.IGNORECASE,
)


class PatternDetector:
    """Detect common scholarly identifiers with regular expressions.

    Patterns are tried in a fixed order: DOI, ORCID, OpenAlex, PMCID, PMID,
    arXiv, ISBN. The first match wins. OpenAlex ids need at least six digits,
    so short local ids such as ``T2021`` are not claimed. Any bare 10 or 13
    digit number with a valid ISBN check digit is reported as ``isbn``.
    """

    def detect(self, value: str) -> DetectedIdentifier | None:
        candidate = value.strip()
        if not candidate:
            return None

        if match := _DOI_RE.match(candidate):
            return DetectedIdentifier("doi", match.group(1))
        if match := _ORCID_RE.match(candidate):
            return DetectedIdentifier("orcid", f"https://orcid.org/{match.group(1).upper()}")
        if match := _OPENALEX_RE.match(candidate):
            return DetectedIdentifier("openalex", f"https://openalex.org/{match.group(1).upper()}")
        if match := _PMCID_RE.match(candidate):
            return DetectedIdentifier("pmcid", match.group(1).upper())
        if match := _PMID_RE.match(candidate):
            return DetectedIdentifier("pmid", match.group(1))
        if match := _ARXIV_RE.match(candidate):
            return DetectedIdentifier("arxiv", match.group(1))

        isbn = _normalize_isbn(candidate)
        if isbn is not None:
            return DetectedIdentifier("isbn", isbn)

        return None


def _normalize_isbn(value: str) -> str | None:
    """Return the compact form of a valid ISBN-10 or ISBN-13, else ``None``."""
    compact = re.sub(r"[-\s]", "", value).upper()
    if compact.startswith("ISBN"):
        compact = compact[4:].lstrip(":")

    if re.fullmatch(r"\d{9}[\dX]", compact):
        total = sum(
            (10 - i) * (10 if char == "X" else int(char)) for i, char in enumerate(compact)
        )
        return compact if total % 11 == 0 else None

    if re.fullmatch(r"97[89]\d{10}", compact):
        total = sum((1 if i % 2 == 0 else 3) * int(char) for i, char in enumerate(compact))
        return compact if total % 10 == 0 else None

    return None


def safe_detect(detector: IdentifierDetector, value: str) -> DetectedIdentifier | None:
    """Run ``detector`` and treat any failure or empty result as "no match"."""
    try:
        detected = detector.detect(value)
    except Exception as e:
        logger.debug("Identifier detection failed for %r: %s", value, e)
        return None

    if detected is not None and not (detected.itemtype and detected.itemvalue):
        logger.debug("Ignoring empty detection result for %r", value)
        return None
    return detected

import json
import logging
import re
from typing import List

from constants import ALTERNATIVE_PLACEHOLDER

logger = logging.getLogger(__name__)

TERM_RE = re.compile(r"\"([^\"]+)\"|'([^']+)'|([^,\"']+)")
SURROUNDING_QUOTES_RE = re.compile(r"^[\"'](.+)[\"']$")


def tokenize_avoid_terms(things_to_avoid: str) -> List[str]:
    """Split `a, "b c", 'd'` style lists, keeping spaces inside quoted terms."""
    terms: List[str] = []
    for match in TERM_RE.finditer(things_to_avoid):
        term = match.group(1) or match.group(2) or match.group(3)
        if term and term.strip():
            terms.append(term.strip())
    return terms


def parse_avoid_terms(things_to_avoid: str) -> List[str]:
    """Return the lowercase avoid-terms in the order they were written."""
    if not things_to_avoid:
        return []

    stripped = things_to_avoid.strip()
    raw_terms: List = []
    if stripped.startswith("[") and stripped.endswith("]"):
        try:
            parsed = json.loads(stripped)
        except ValueError:
            parsed = None
        if isinstance(parsed, list):
            raw_terms = [str(item) for item in parsed if item is not None]
        else:
            raw_terms = tokenize_avoid_terms(stripped[1:-1])
    else:
        raw_terms = tokenize_avoid_terms(things_to_avoid)

    terms: List[str] = []
    for term in raw_terms:
        cleaned = SURROUNDING_QUOTES_RE.sub(r"\1", term.strip()).lower()
        if cleaned:
            terms.append(cleaned)
    return terms


def suppress(text: str, things_to_avoid: str) -> str:
    """Replace every whole-word, case-insensitive avoid-term with a placeholder."""
    if not text or not things_to_avoid:
        return text

    terms = parse_avoid_terms(things_to_avoid)
    logger.debug(f"Terms to avoid: {terms}")
    for term in terms:
        pattern = re.compile(rf"\b{re.escape(term)}\b", re.I)
        text = pattern.sub(lambda _m: ALTERNATIVE_PLACEHOLDER, text)
    return text

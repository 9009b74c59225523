"""Post-recording cleanup that drops near-duplicate phrases.

Runs once when a session stops, on the already deduplicated transcript.
A phrase is a near duplicate when more than 80% of its words occur in a
phrase that was already kept.
"""
import re
import logging
from typing import List

logger = logging.getLogger(__name__)

PHRASE_BOUNDARY = re.compile(r"[.,!?;]\s+")
WHITESPACE = re.compile(r"\s+")
OVERLAP_THRESHOLD = 0.8


def _is_near_duplicate(candidate: str, accepted: List[str]) -> bool:
    candidate_words = candidate.lower().split()

    for existing in accepted:
        existing_words = set(existing.lower().split())
        matching = sum(1 for word in candidate_words if word in existing_words)
        if matching > 0 and matching / len(candidate_words) > OVERLAP_THRESHOLD:
            return True

    return False


def clean(text: str) -> str:
    """
    Remove near-duplicate phrases and normalize punctuation.

    Args:
        text: Deduplicated transcript

    Returns:
        Cleaned transcript ending with a period, or "" for empty input
    """
    if not text:
        return ""

    accepted: List[str] = []

    for phrase in PHRASE_BOUNDARY.split(text):
        phrase = phrase.strip()
        if not phrase:
            continue
        if not _is_near_duplicate(phrase, accepted):
            accepted.append(phrase)

    cleaned = WHITESPACE.sub(" ", ". ".join(accepted)).strip()

    if cleaned and not cleaned.endswith("."):
        cleaned += "."

    logger.debug(
        f"Transcript cleaned: phrases_kept={len(accepted)}, "
        f"input_length={len(text)}, output_length={len(cleaned)}"
    )

    return cleaned

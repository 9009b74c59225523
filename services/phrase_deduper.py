"""Repetition suppression for the running live transcript.

Speech recognizers that restart mid-session tend to re-emit words they have
already finalized. dedupe() drops any word that starts a 3-7 word phrase
already seen earlier in the text.
"""
import logging
from typing import List, Set

logger = logging.getLogger(__name__)

MIN_TOKENS = 5
MIN_PHRASE_LENGTH = 3
MAX_PHRASE_LENGTH = 7


def dedupe(full_text: str) -> str:
    """
    Remove repeated word sequences from a transcript.

    The scan is greedy and order-preserving: each position registers its
    lower-cased phrases of 3 to 7 words, and a position whose phrase of some
    length was already registered is dropped. Output tokens are joined by
    single spaces.

    Args:
        full_text: The joined transcript text

    Returns:
        Deduplicated text; inputs with fewer than 5 words are returned unchanged
    """
    if not full_text:
        return ""

    tokens = full_text.split()
    if len(tokens) < MIN_TOKENS:
        return full_text

    seen_phrases: Set[str] = set()
    kept: List[str] = []

    for i, token in enumerate(tokens):
        suppressed = False

        for length in range(MIN_PHRASE_LENGTH, MAX_PHRASE_LENGTH + 1):
            if i + length > len(tokens):
                break

            phrase = " ".join(tokens[i:i + length]).lower()
            if phrase in seen_phrases:
                suppressed = True
                break

            seen_phrases.add(phrase)

        if not suppressed:
            kept.append(token)

    dropped = len(tokens) - len(kept)
    if dropped:
        logger.debug(f"Suppressed repeated words: dropped={dropped}, kept={len(kept)}")

    return " ".join(kept)

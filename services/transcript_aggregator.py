"""TranscriptAggregator for building the live transcript of one recording session."""
import logging
from typing import List, Optional

from services.phrase_deduper import dedupe

logger = logging.getLogger(__name__)


class TranscriptAggregator:
    """Owns the finalized fragments of the active recording session.

    Fragments are append-only. reset() is the only clearing operation and is
    called when a new session starts, never when the recognition source
    restarts mid-session.
    """

    def __init__(self):
        self._fragments: List[str] = []

    @property
    def fragment_count(self) -> int:
        return len(self._fragments)

    def is_empty(self) -> bool:
        return not self._fragments

    def reset(self) -> None:
        """Discard all fragments of the previous session."""
        if self._fragments:
            logger.info(f"Resetting transcript buffer: fragments={len(self._fragments)}")
        self._fragments = []

    def append_final_fragment(self, text: Optional[str]) -> bool:
        """
        Append a finalized fragment.

        Args:
            text: Recognized text; empty or whitespace-only input is ignored

        Returns:
            True if the fragment was appended
        """
        if not text or not text.strip():
            return False

        self._fragments.append(text.strip())
        return True

    def current_transcript(self) -> str:
        """Join all fragments and suppress repeated phrases."""
        return dedupe(" ".join(self._fragments))

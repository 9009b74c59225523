"""RecordingSessionManager for the lifecycle of recording sessions on one connection.

Each start_recording issues a new session id and resets the transcript
buffer. Analysis results are keyed by session id so a result that arrives
after a newer session has started is discarded.
"""
import uuid
import logging
from dataclasses import dataclass
from typing import Optional

from services.transcript_aggregator import TranscriptAggregator
from services.transcript_cleaner import clean

logger = logging.getLogger(__name__)

# Audio levels below this count as silence (0-100 meter scale).
SILENCE_LEVEL = 1.0


@dataclass
class StopOutcome:
    """
    Result of stopping a recording session.

    Attributes:
        session_id: The session that was stopped
        transcript: Deduplicated transcript at stop time
        cleaned_transcript: Transcript after near-duplicate removal
        audio_detected: Whether the client reported a non-silent audio level
    """
    session_id: str
    transcript: str
    cleaned_transcript: str
    audio_detected: bool

    @property
    def has_speech(self) -> bool:
        return bool(self.transcript.strip())

    @property
    def no_speech(self) -> bool:
        """Nothing transcribed and nothing heard."""
        return not self.has_speech and not self.audio_detected

    @property
    def transcription_failed(self) -> bool:
        """Audio was heard but nothing could be transcribed."""
        return not self.has_speech and self.audio_detected


class RecordingSessionManager:
    """Tracks the active recording session and guards against stale results."""

    def __init__(self, aggregator: Optional[TranscriptAggregator] = None):
        self.aggregator = aggregator or TranscriptAggregator()
        self.current_session_id: Optional[str] = None
        self.is_recording = False
        self.last_audio_level = 0.0

    def start(self) -> str:
        """Start a new session; the previous buffer is discarded first."""
        self.aggregator.reset()
        self.current_session_id = str(uuid.uuid4())
        self.is_recording = True
        self.last_audio_level = 0.0
        logger.info(f"Recording session started: session_id={self.current_session_id}")
        return self.current_session_id

    def append_fragment(self, text: str) -> Optional[str]:
        """
        Append a finalized fragment to the active session.

        Returns:
            The updated deduplicated transcript, or None when not recording
            or the fragment was empty
        """
        if not self.is_recording:
            logger.warning("Fragment received while not recording, ignoring")
            return None

        if not self.aggregator.append_final_fragment(text):
            return None

        return self.aggregator.current_transcript()

    def record_audio_level(self, level: float) -> None:
        self.last_audio_level = level

    def stop(self) -> Optional[StopOutcome]:
        """
        Stop the active session.

        Returns:
            StopOutcome for the session, or None when nothing was recording
        """
        if not self.is_recording or self.current_session_id is None:
            return None

        self.is_recording = False
        transcript = self.aggregator.current_transcript()
        outcome = StopOutcome(
            session_id=self.current_session_id,
            transcript=transcript,
            cleaned_transcript=clean(transcript),
            audio_detected=self.last_audio_level >= SILENCE_LEVEL,
        )

        logger.info(
            f"Recording session stopped: session_id={outcome.session_id}, "
            f"fragments={self.aggregator.fragment_count}, "
            f"transcript_length={len(outcome.transcript)}, "
            f"cleaned_length={len(outcome.cleaned_transcript)}"
        )
        return outcome

    def is_current(self, session_id: str) -> bool:
        return session_id == self.current_session_id

    def accept_result(self, session_id: str) -> bool:
        """
        Check whether a finished analysis may be delivered.

        Returns:
            False when a newer session has started since session_id stopped
        """
        if self.is_current(session_id) and not self.is_recording:
            return True

        logger.warning(
            f"Discarding stale analysis result: session_id={session_id}, "
            f"current_session_id={self.current_session_id}"
        )
        return False

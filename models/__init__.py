"""Data models for the live meeting notes service."""
from .analysis_models import (
    NOT_SPECIFIED,
    UNSPECIFIED_PARTICIPANTS,
    NO_KEY_POINTS,
    NO_SUMMARY,
    ActionItem,
    CalendarEvent,
    MeetingDetails,
    AnalysisResult,
    HeuristicResult,
    default_analysis_result,
)
from .session_messages import (
    StartRecordingMessage,
    StopRecordingMessage,
    FragmentMessage,
    AudioLevelMessage,
    parse_client_message,
)
from .text_request import TextAnalysisRequest, TextAnalysisResponse

__all__ = [
    # Analysis models
    "NOT_SPECIFIED",
    "UNSPECIFIED_PARTICIPANTS",
    "NO_KEY_POINTS",
    "NO_SUMMARY",
    "ActionItem",
    "CalendarEvent",
    "MeetingDetails",
    "AnalysisResult",
    "HeuristicResult",
    "default_analysis_result",
    # Client messages
    "StartRecordingMessage",
    "StopRecordingMessage",
    "FragmentMessage",
    "AudioLevelMessage",
    "parse_client_message",
    # Text endpoint
    "TextAnalysisRequest",
    "TextAnalysisResponse",
]

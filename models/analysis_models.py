"""Pydantic models for meeting analysis results.

These models define the canonical AnalysisResult shape shared by the AI
extraction path, the heuristic fallback and the fixed default payload.
Attribute names are snake_case; the JSON aliases are the camelCase keys the
extraction prompt asks the model to produce.
"""
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import List, Optional


NOT_SPECIFIED = "Not specified"
UNSPECIFIED_PARTICIPANTS = "Unspecified participants"
NO_KEY_POINTS = "No key points detected"
NO_SUMMARY = "No summary available"


class ActionItem(BaseModel):
    """An actionable task mentioned in the meeting."""
    task: str = Field(
        description="Task to be completed, as phrased in the transcript"
    )
    deadline: str = Field(
        default=NOT_SPECIFIED,
        description="Deadline for the task, or 'Not specified'"
    )

    @field_validator("deadline", mode="before")
    @classmethod
    def deadline_defaults_to_sentinel(cls, v: Optional[str]) -> str:
        return v or NOT_SPECIFIED


class CalendarEvent(BaseModel):
    """A calendar event mentioned in the meeting."""
    title: str = Field(
        description="Short title of the event"
    )
    date: str = Field(
        default=NOT_SPECIFIED,
        description="Date of the event, or 'Not specified'"
    )
    time: str = Field(
        default=NOT_SPECIFIED,
        description="Time of the event, or 'Not specified'"
    )

    @field_validator("date", "time", mode="before")
    @classmethod
    def missing_values_become_sentinel(cls, v: Optional[str]) -> str:
        return v or NOT_SPECIFIED


class MeetingDetails(BaseModel):
    """When the meeting happens and who takes part.

    participants is never empty: an absent or empty list is replaced by
    the single 'Unspecified participants' entry.
    """
    date: str = Field(
        default=NOT_SPECIFIED,
        description="Meeting date, or 'Not specified'"
    )
    time: str = Field(
        default=NOT_SPECIFIED,
        description="Meeting time, or 'Not specified'"
    )
    participants: List[str] = Field(
        default_factory=lambda: [UNSPECIFIED_PARTICIPANTS],
        description="People taking part in the meeting"
    )

    @field_validator("date", "time", mode="before")
    @classmethod
    def missing_values_become_sentinel(cls, v: Optional[str]) -> str:
        return v or NOT_SPECIFIED

    @field_validator("participants", mode="before")
    @classmethod
    def participants_never_empty(cls, v: Optional[List[str]]) -> List[str]:
        return v or [UNSPECIFIED_PARTICIPANTS]

    def has_date(self) -> bool:
        return self.date != NOT_SPECIFIED

    def has_time(self) -> bool:
        return self.time != NOT_SPECIFIED

    def has_participants(self) -> bool:
        return self.participants[0] != UNSPECIFIED_PARTICIPANTS


class AnalysisResult(BaseModel):
    """Complete structured analysis of one recording session.

    All five fields are required when an AI payload is parsed into this
    model; a payload missing any of them is rejected as a schema mismatch.
    """
    model_config = ConfigDict(populate_by_name=True)

    action_items: List[ActionItem] = Field(
        alias="actionItems",
        description="Actionable tasks with deadlines"
    )
    meeting_details: MeetingDetails = Field(
        alias="meetingDetails",
        description="Meeting date, time and participants"
    )
    key_points: List[str] = Field(
        alias="keyPoints",
        description="Important points discussed"
    )
    calendar_events: List[CalendarEvent] = Field(
        alias="calendarEvents",
        description="Calendar events mentioned in the meeting"
    )
    summary: str = Field(
        description="Brief summary of the meeting"
    )

    @field_validator("action_items", "calendar_events", mode="before")
    @classmethod
    def null_lists_become_empty(cls, v):
        return [] if v is None else v

    @field_validator("meeting_details", mode="before")
    @classmethod
    def null_details_become_default(cls, v):
        return {} if v is None else v

    @field_validator("key_points", mode="before")
    @classmethod
    def key_points_never_empty(cls, v: Optional[List[str]]) -> List[str]:
        return v or [NO_KEY_POINTS]

    @field_validator("summary", mode="before")
    @classmethod
    def summary_defaults_to_sentinel(cls, v: Optional[str]) -> str:
        return v or NO_SUMMARY


class HeuristicResult(BaseModel):
    """Pattern-based extraction output handed to the reconciler."""
    meeting_details: MeetingDetails = Field(default_factory=MeetingDetails)
    calendar_events: List[CalendarEvent] = Field(default_factory=list)
    action_items: List[ActionItem] = Field(default_factory=list)


def default_analysis_result() -> AnalysisResult:
    """Build a fresh copy of the fixed payload used when AI output is unusable."""
    return AnalysisResult(
        action_items=[],
        meeting_details=MeetingDetails(),
        key_points=[NO_KEY_POINTS],
        calendar_events=[],
        summary=NO_SUMMARY,
    )

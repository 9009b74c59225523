"""
Text Preparation Utilities

Helpers that turn a cleaned transcript into the text sent to the AI
extraction client:

1. format_transcript: normalize capitalization of "i" and whitespace
2. build_structured_text: wrap the transcript with today's date and guidance
3. enhance_for_extraction: tag dates, times and likely names as hints
"""

import re
from datetime import date
from typing import Optional

WHITESPACE = re.compile(r"\s+")
LOWERCASE_I = re.compile(r"\bi\b")

EVENT_KEYWORDS = (
    "meeting", "appointment", "call", "conference", "session", "interview",
    "tomorrow", "today", "next week", "schedule", "calendar", "reminder",
)
ACTION_KEYWORDS = (
    "need to", "have to", "must", "should", "will", "going to",
    "task", "todo", "to do", "action item", "follow up", "deadline",
)

RELATIVE_DATE = re.compile(
    r"\b(tomorrow|today|next\s+(?:monday|tuesday|wednesday|thursday|friday|saturday|sunday))\b",
    re.IGNORECASE,
)
MONTH_DATE = re.compile(
    r"\b(january|february|march|april|may|june|july|august|september|october|november|december)"
    r"\s+\d{1,2}(?:st|nd|rd|th)?\b",
    re.IGNORECASE,
)
CLOCK_TIME = re.compile(r"\b(\d{1,2}(?::\d{2})?\s*(?:am|pm))\b", re.IGNORECASE)
NAME_CANDIDATE = re.compile(r"\b([A-Z][a-z]+(?:\s+[A-Z][a-z]+)?)\b")
NOT_A_NAME = re.compile(r"^(The|A|An|This|That|These|Those|It|We|I|You|He|She|They)$")

STRUCTURED_TEMPLATE = """
Date: {today}
Transcript: {transcript}

The transcript may contain:
1. Calendar events or meetings with dates, times, and participants
2. Action items or tasks with deadlines
3. Important meeting details and key points

IMPORTANT: Please extract meeting details (date, time, participants) from the transcript.

Please extract this information carefully.
"""


def format_transcript(text: str) -> str:
    """
    Normalize a transcript before analysis.

    Capitalizes the standalone pronoun "i" and collapses whitespace runs.

    Args:
        text: Cleaned transcript

    Returns:
        Normalized single-line transcript
    """
    text = LOWERCASE_I.sub("I", text)
    return WHITESPACE.sub(" ", text).strip()


def build_structured_text(transcript: str, today: Optional[date] = None) -> str:
    """
    Wrap a formatted transcript with today's date and extraction guidance.

    Args:
        transcript: Output of format_transcript
        today: Reference date (defaults to the current date)

    Returns:
        Multi-line text for enhance_for_extraction
    """
    today = today or date.today()
    return STRUCTURED_TEMPLATE.format(
        today=f"{today.month}/{today.day}/{today.year}",
        transcript=transcript,
    )


def _tag_name(match: re.Match) -> str:
    name = match.group(0)
    if len(name) > 2 and not NOT_A_NAME.match(name):
        return f"PERSON: {name}"
    return name


def enhance_for_extraction(text: str) -> str:
    """
    Add explicit hints that help the model find events and action items.

    Dates are prefixed with "EVENT_DATE:", clock times with "EVENT_TIME:" and
    capitalized words that look like names with "PERSON:". A sentence noting
    calendar or action-item content is appended when matching keywords occur.

    Args:
        text: Structured text from build_structured_text

    Returns:
        Enhanced text, or "" for empty input
    """
    if not text:
        return ""

    enhanced = WHITESPACE.sub(" ", text).strip()
    if not enhanced.endswith("."):
        enhanced += "."

    enhanced = "CALENDAR ANALYSIS REQUEST. " + enhanced

    lowered = enhanced.lower()
    if any(keyword in lowered for keyword in EVENT_KEYWORDS):
        enhanced += " IMPORTANT: This text contains CALENDAR EVENT information that should be extracted."
    if any(keyword in lowered for keyword in ACTION_KEYWORDS):
        enhanced += " IMPORTANT: This text contains ACTION ITEMS that should be extracted."

    enhanced = RELATIVE_DATE.sub(r"EVENT_DATE: \1", enhanced)
    enhanced = MONTH_DATE.sub(r"EVENT_DATE: \g<0>", enhanced)
    enhanced = CLOCK_TIME.sub(r"EVENT_TIME: \1", enhanced)
    enhanced = NAME_CANDIDATE.sub(_tag_name, enhanced)

    return enhanced

"""HeuristicExtractor for pattern-based meeting information extraction.

This is the deterministic complement to the AI extraction path. It never
raises: when nothing matches, the sentinel defaults of the analysis models
are returned.
"""
import os
import re
import logging
from datetime import date, timedelta
from typing import Callable, Iterable, List, Optional, Set

from models.analysis_models import (
    NOT_SPECIFIED,
    ActionItem,
    CalendarEvent,
    HeuristicResult,
    MeetingDetails,
)

logger = logging.getLogger(__name__)

WEEKDAYS = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]
MONTHS = [
    "January", "February", "March", "April", "May", "June", "July",
    "August", "September", "October", "November", "December",
]

DEFAULT_STOPLIST = frozenset(["I", *WEEKDAYS, *MONTHS, "The", "A", "An"])

TOMORROW_PATTERN = re.compile(r"\btomorrow\b", re.IGNORECASE)
TODAY_PATTERN = re.compile(r"\btoday\b", re.IGNORECASE)
WEEKDAY_PATTERN = re.compile(r"\b(" + "|".join(WEEKDAYS) + r")\b", re.IGNORECASE)
DAY_OF_MONTH_PATTERN = re.compile(
    r"\b(\d{1,2}(?:st|nd|rd|th)?\s+(?:of\s+)?(?:" + "|".join(MONTHS) + r"))\b",
    re.IGNORECASE,
)
TIME_PATTERN = re.compile(r"\b(\d{1,2}(?::\d{2})?\s*(?:am|pm))\b", re.IGNORECASE)

# Names are matched case-sensitively: a capital letter is the only signal.
WITH_NAME_PATTERN = re.compile(r"\bwith\s+([A-Z][a-z]+(?:\s+[A-Z][a-z]+)?)")
AND_NAME_PATTERN = re.compile(r"\band\s+([A-Z][a-z]+(?:\s+[A-Z][a-z]+)?)")
CAPITALIZED_WORD_PATTERN = re.compile(r"\b[A-Z][a-z]+\b")

EVENT_TOMORROW_PATTERN = re.compile(r"\b(meeting|appointment|call)\b.+?\btomorrow\b", re.IGNORECASE)

_ITEM_END = r"(?:\.|,|\band\b|$)"
OBLIGATION_PATTERN = re.compile(r"\b(need to|have to|must|should) ([a-z]+\s.+?)" + _ITEM_END, re.IGNORECASE)
BRING_PATTERN = re.compile(r"\bbring\s.+?" + _ITEM_END, re.IGNORECASE)


def _capitalize_first(word: str) -> str:
    return word[:1].upper() + word[1:]


def _format_date(day: date) -> str:
    """Render a date as M/D/YYYY without zero padding."""
    return f"{day.month}/{day.day}/{day.year}"


def load_stoplist_from_env() -> Set[str]:
    """Extra participant stopwords from PARTICIPANT_STOPLIST (comma separated)."""
    raw = os.getenv("PARTICIPANT_STOPLIST", "")
    return {word.strip() for word in raw.split(",") if word.strip()}


class HeuristicExtractor:
    """Regex-based extraction of meeting details, calendar events and action items.

    Participant detection is deliberately permissive: any capitalized word
    outside the stoplist is treated as a name, so sentence-initial words can
    show up as participants. Extend the stoplist rather than tightening the
    patterns.
    """

    def __init__(
        self,
        stoplist: Optional[Iterable[str]] = None,
        today: Callable[[], date] = date.today,
    ):
        words = set(DEFAULT_STOPLIST if stoplist is None else stoplist)
        words |= load_stoplist_from_env()
        self.stoplist = frozenset(words)
        self._today = today

    def extract(self, text: str) -> HeuristicResult:
        """Run all extractors over the formatted transcript."""
        result = HeuristicResult(
            meeting_details=self.extract_meeting_details(text),
            calendar_events=self.extract_calendar_events(text),
            action_items=self.extract_action_items(text),
        )
        logger.info(
            f"Heuristic extraction complete: date={result.meeting_details.date}, "
            f"time={result.meeting_details.time}, "
            f"participants={len(result.meeting_details.participants)}, "
            f"calendar_events={len(result.calendar_events)}, "
            f"action_items={len(result.action_items)}"
        )
        return result

    def extract_meeting_details(self, text: str) -> MeetingDetails:
        return MeetingDetails(
            date=self._find_date(text),
            time=self._find_time(text),
            participants=self._find_participants(text),
        )

    def extract_calendar_events(self, text: str) -> List[CalendarEvent]:
        events: List[CalendarEvent] = []

        if EVENT_TOMORROW_PATTERN.search(text):
            events.append(CalendarEvent(title="Meeting", date="Tomorrow", time=self._find_time(text)))

        weekday = WEEKDAY_PATTERN.search(text)
        if weekday:
            events.append(
                CalendarEvent(
                    title="Meeting",
                    date=_capitalize_first(weekday.group(1)),
                    time=self._find_time(text),
                )
            )

        return events

    def extract_action_items(self, text: str) -> List[ActionItem]:
        items = [
            ActionItem(task=match.group(0).strip(), deadline=NOT_SPECIFIED)
            for match in OBLIGATION_PATTERN.finditer(text)
        ]
        items.extend(
            ActionItem(task=match.group(0).strip(), deadline=NOT_SPECIFIED)
            for match in BRING_PATTERN.finditer(text)
        )
        return items

    def _find_date(self, text: str) -> str:
        if TOMORROW_PATTERN.search(text):
            return _format_date(self._today() + timedelta(days=1))
        if TODAY_PATTERN.search(text):
            return _format_date(self._today())

        weekday = WEEKDAY_PATTERN.search(text)
        if weekday:
            return _capitalize_first(weekday.group(1))

        day_of_month = DAY_OF_MONTH_PATTERN.search(text)
        if day_of_month:
            return day_of_month.group(1)

        return NOT_SPECIFIED

    def _find_time(self, text: str) -> str:
        match = TIME_PATTERN.search(text)
        return match.group(1) if match else NOT_SPECIFIED

    def _find_participants(self, text: str) -> List[str]:
        participants: List[str] = []

        for pattern in (WITH_NAME_PATTERN, AND_NAME_PATTERN):
            match = pattern.search(text)
            if match:
                participants.append(match.group(1))

        for name in CAPITALIZED_WORD_PATTERN.findall(text):
            if name not in self.stoplist and name not in participants:
                participants.append(name)

        # An empty list falls back to the sentinel in MeetingDetails.
        return participants

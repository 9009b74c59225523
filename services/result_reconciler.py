"""Reconciliation of AI-extracted and heuristic meeting information.

The precedence rules are applied in a fixed order. Rule 5 repeats rule 3
against the merged details so a sentinel date or time left by the merge can
still be filled from the first calendar event.
"""
import logging
from typing import Optional

from models.analysis_models import (
    NOT_SPECIFIED,
    AnalysisResult,
    HeuristicResult,
    MeetingDetails,
    default_analysis_result,
)

logger = logging.getLogger(__name__)


def _is_concrete(value: Optional[str]) -> bool:
    return bool(value) and value != NOT_SPECIFIED


def _fill_from_first_event(result: AnalysisResult, details: MeetingDetails) -> None:
    """Copy the first calendar event's date/time into sentinel meeting fields."""
    if not result.calendar_events:
        return

    event = result.calendar_events[0]
    if _is_concrete(event.date) and not details.has_date():
        details.date = event.date
    if _is_concrete(event.time) and not details.has_time():
        details.time = event.time


def reconcile(ai_result: Optional[AnalysisResult], heuristics: HeuristicResult) -> AnalysisResult:
    """
    Merge the AI result with heuristic extraction.

    Args:
        ai_result: Parsed AI result, or None when the AI call was unusable
        heuristics: Output of HeuristicExtractor.extract on the same transcript

    Returns:
        A new AnalysisResult; the inputs are not modified
    """
    if ai_result is None:
        logger.info("AI result unusable, returning default analysis")
        return default_analysis_result()

    result = ai_result.model_copy(deep=True)
    ai_details = ai_result.meeting_details

    # Rule 1: heuristic calendar events when the AI found none
    if not result.calendar_events and heuristics.calendar_events:
        result.calendar_events = [event.model_copy() for event in heuristics.calendar_events]
        logger.info(f"Using heuristic calendar events: count={len(result.calendar_events)}")

    # Rule 2: heuristic meeting details, independent of the AI output
    details = heuristics.meeting_details.model_copy(deep=True)

    # Rule 3
    _fill_from_first_event(result, details)

    # Rule 4: per field, heuristic value wins unless it is the sentinel
    result.meeting_details = MeetingDetails(
        date=details.date if details.has_date() else ai_details.date,
        time=details.time if details.has_time() else ai_details.time,
        participants=(
            list(details.participants) if details.has_participants()
            else list(ai_details.participants)
        ),
    )

    # Rule 5
    _fill_from_first_event(result, result.meeting_details)

    # Rule 6: heuristic action items when the AI found none
    if not result.action_items and heuristics.action_items:
        result.action_items = [item.model_copy() for item in heuristics.action_items]
        logger.info(f"Using heuristic action items: count={len(result.action_items)}")

    return result

"""AnalysisService for producing the final AnalysisResult of a recording session.

Pipeline:
1. Format the cleaned transcript and build the enhanced extraction text
2. Call the AI extraction client (any ExtractionError means "unusable")
3. Run heuristic extraction on the formatted transcript
4. Reconcile both sources
"""
import logging
from typing import Optional

from models.analysis_models import AnalysisResult
from services.errors import ExtractionError
from services.extraction_service import AIExtractionClient
from services.heuristic_extractor import HeuristicExtractor
from services.result_reconciler import reconcile
from utils.text_utils import build_structured_text, enhance_for_extraction, format_transcript

logger = logging.getLogger(__name__)


class AnalysisService:
    """Runs AI extraction with heuristic reconciliation.

    Extraction failures never reach the caller: they are logged and the
    reconciler substitutes the default payload.
    """

    def __init__(
        self,
        extraction_client: Optional[AIExtractionClient] = None,
        heuristic_extractor: Optional[HeuristicExtractor] = None
    ):
        self.extraction_client = extraction_client or AIExtractionClient()
        self.heuristic_extractor = heuristic_extractor or HeuristicExtractor()

    async def analyze(self, transcript: str, session_id: str) -> AnalysisResult:
        """Analyze a cleaned transcript.

        Args:
            transcript: Cleaned transcript of the session
            session_id: Session identifier for logging

        Returns:
            Reconciled AnalysisResult

        Raises:
            ValueError: If the transcript is empty
        """
        if not transcript or not transcript.strip():
            raise ValueError("No speech detected")

        formatted = format_transcript(transcript)
        enhanced = enhance_for_extraction(build_structured_text(formatted))

        logger.info(
            f"Starting analysis: session_id={session_id}, "
            f"transcript_length={len(formatted)}, enhanced_length={len(enhanced)}"
        )

        ai_result: Optional[AnalysisResult] = None
        try:
            ai_result = await self.extraction_client.extract(enhanced)
        except ExtractionError as e:
            logger.warning(
                f"AI extraction unusable, falling back to default: session_id={session_id}, "
                f"error={type(e).__name__}: {e}"
            )

        heuristics = self.heuristic_extractor.extract(formatted)
        result = reconcile(ai_result, heuristics)

        logger.info(
            f"Analysis complete: session_id={session_id}, "
            f"ai_usable={ai_result is not None}, "
            f"action_items={len(result.action_items)}, "
            f"calendar_events={len(result.calendar_events)}"
        )
        return result

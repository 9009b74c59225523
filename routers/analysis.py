"""
Text analysis router for transcripts captured outside the live session.

This router provides the POST /analysis/text endpoint, which runs a full
transcript through the same dedupe, clean and analysis steps used when a
live recording session stops.
"""

import uuid
import logging
from fastapi import APIRouter, HTTPException

from models.text_request import TextAnalysisRequest, TextAnalysisResponse
from services.analysis_service import AnalysisService
from services.phrase_deduper import dedupe
from services.transcript_cleaner import clean

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/analysis", tags=["analysis"])


@router.post("/text", response_model=TextAnalysisResponse, response_model_by_alias=True)
async def analyze_text(body: TextAnalysisRequest):
    """
    Clean a transcript and extract meeting information.

    Args:
        body: TextAnalysisRequest with the raw transcript

    Returns:
        TextAnalysisResponse with raw_text, cleaned_text and analysis

    Raises:
        HTTPException: 400 when nothing is left after cleaning
    """
    request_id = str(uuid.uuid4())
    logger.info(f"Text analysis started: request_id={request_id}, text_length={len(body.text)}")

    cleaned_text = clean(dedupe(body.text))
    if not cleaned_text:
        logger.warning(f"Empty transcript after cleaning: request_id={request_id}")
        raise HTTPException(status_code=400, detail="No speech detected in text")

    analysis_service = AnalysisService()
    analysis = await analysis_service.analyze(cleaned_text, request_id)

    logger.info(
        f"Text analysis complete: request_id={request_id}, "
        f"cleaned_length={len(cleaned_text)}, action_items={len(analysis.action_items)}"
    )

    return TextAnalysisResponse(
        raw_text=body.text,
        cleaned_text=cleaned_text,
        analysis=analysis
    )

"""AIExtractionClient for turning an enhanced transcript into an AnalysisResult.

This client calls OpenAI's chat completions API in JSON mode and validates
the reply against the AnalysisResult model. Every failure is raised as an
ExtractionError subclass so callers can fall back to the default payload.
"""
import os
import re
import json
import logging

from openai import AsyncOpenAI
from pydantic import ValidationError

from models.analysis_models import AnalysisResult
from services.errors import ModelError, ParseError, SchemaError


logger = logging.getLogger(__name__)

CODE_FENCE = re.compile(r"```(?:json)?")


class AIExtractionClient:
    """Client for structured meeting extraction using OpenAI.

    The model is asked for a bare JSON object with the camelCase
    AnalysisResult keys. Failures map to:
    - ModelError: the API call failed or returned no content
    - ParseError: the content is not a JSON object
    - SchemaError: the JSON object is missing fields or has wrong types
    """

    def __init__(self):
        """Initialize the AIExtractionClient with OpenAI client."""
        api_key = os.getenv("OPENAI_API_KEY")
        if not api_key:
            raise ValueError("OPENAI_API_KEY environment variable is required")

        self.model = os.getenv("OPENAI_MODEL", "gpt-4o")
        self.timeout = float(os.getenv("OPENAI_TIMEOUT", "60"))
        self.client = AsyncOpenAI(api_key=api_key)
        logger.info(f"AIExtractionClient initialized with model: {self.model}")

    async def extract(self, enhanced_text: str) -> AnalysisResult:
        """Extract structured meeting information.

        Args:
            enhanced_text: Transcript prepared by utils.text_utils

        Returns:
            AnalysisResult parsed from the model reply

        Raises:
            ValueError: If enhanced_text is empty
            ModelError, ParseError, SchemaError: see class docstring
        """
        if not enhanced_text or not enhanced_text.strip():
            raise ValueError("No text provided for analysis")

        logger.info(
            f"Requesting extraction: model={self.model}, "
            f"length={len(enhanced_text)} chars"
        )

        try:
            completion = await self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": self._get_system_prompt()},
                    {"role": "user", "content": f"Analyze this transcript:\n\n{enhanced_text}"}
                ],
                response_format={"type": "json_object"},
                temperature=0.2,
                timeout=self.timeout
            )
        except Exception as e:
            logger.error(f"Extraction request failed: model={self.model}, error={e}", exc_info=True)
            raise ModelError(str(e)) from e

        content = completion.choices[0].message.content if completion.choices else None
        if not content or not content.strip():
            raise ModelError("Model returned an empty response")

        result = self.parse_response(content)

        logger.info(
            f"Extraction complete: action_items={len(result.action_items)}, "
            f"calendar_events={len(result.calendar_events)}, "
            f"key_points={len(result.key_points)}"
        )
        return result

    @staticmethod
    def parse_response(content: str) -> AnalysisResult:
        """Parse raw model output into an AnalysisResult.

        Markdown code fences around the JSON are tolerated.

        Raises:
            ParseError: content is not a JSON object
            SchemaError: the object does not match AnalysisResult
        """
        json_string = CODE_FENCE.sub("", content).strip()

        try:
            payload = json.loads(json_string)
        except json.JSONDecodeError as e:
            logger.warning(f"Model response is not valid JSON: error={e}")
            raise ParseError(f"Invalid JSON in model response: {e}") from e

        if not isinstance(payload, dict):
            raise ParseError(f"Expected a JSON object, got {type(payload).__name__}")

        try:
            return AnalysisResult.model_validate(payload)
        except ValidationError as e:
            logger.warning(f"Model response does not match schema: errors={e.error_count()}")
            raise SchemaError(str(e)) from e

    def _get_system_prompt(self) -> str:
        """System prompt describing the exact JSON shape to return."""
        return """You are a meeting assistant AI that analyzes meeting transcripts and extracts structured information.
Return ONLY a JSON object with no additional text or formatting.

The JSON MUST follow this exact structure:
{
  "actionItems": [{"task": "string", "deadline": "string"}],
  "meetingDetails": {"date": "string", "time": "string", "participants": ["string"]},
  "keyPoints": ["string"],
  "calendarEvents": [{"title": "string", "date": "string", "time": "string"}],
  "summary": "string"
}

**Rules:**
1. Return ONLY valid JSON, no other text
2. Use "Not specified" for missing dates, times and deadlines
3. Use ["Unspecified participants"] when no participants are mentioned
4. If no action items are found, use an empty array []
5. If no calendar events are found, use an empty array []
6. Always include a brief summary
7. keyPoints must contain at least one item
8. All string values must be properly escaped

Markers such as "EVENT_DATE:", "EVENT_TIME:" and "PERSON:" are hints added by a preprocessor, not spoken words.
Only extract information explicitly present in the transcript."""

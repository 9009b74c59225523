"""Errors raised by the AI extraction client.

The analysis pipeline treats every ExtractionError as an unusable AI result
and falls back to the default payload.
"""


class ExtractionError(Exception):
    """Base class for AI extraction failures."""


class ModelError(ExtractionError):
    """The model call itself failed (transport, API error, timeout, empty reply)."""


class ParseError(ExtractionError):
    """The model replied with something that is not a JSON object."""


class SchemaError(ExtractionError):
    """The reply is valid JSON but does not match the AnalysisResult shape."""

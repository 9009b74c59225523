"""
WebSocket Session Message Models

Inbound control/data messages sent by the recording client over /listen.
The client runs speech recognition itself and forwards finalized text.
"""

from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field, TypeAdapter


class StartRecordingMessage(BaseModel):
    type: Literal["start_recording"]


class StopRecordingMessage(BaseModel):
    type: Literal["stop_recording"]


class FragmentMessage(BaseModel):
    """A recognized piece of speech. Only final fragments reach the transcript."""
    type: Literal["fragment"]
    text: str = ""
    is_final: bool = Field(
        default=True,
        description="Interim recognition results are ignored"
    )


class AudioLevelMessage(BaseModel):
    """Latest microphone level (0-100) reported by the client meter."""
    type: Literal["audio_level"]
    level: float = Field(ge=0)


ClientMessage = Annotated[
    Union[
        StartRecordingMessage,
        StopRecordingMessage,
        FragmentMessage,
        AudioLevelMessage,
    ],
    Field(discriminator="type"),
]

client_message_adapter = TypeAdapter(ClientMessage)


def parse_client_message(raw: str) -> Optional[ClientMessage]:
    """
    Parse a JSON text frame into a client message.

    Returns:
        The parsed message, or None when the frame is not valid JSON or
        does not match any known message type.
    """
    try:
        return client_message_adapter.validate_json(raw)
    except ValueError:
        return None

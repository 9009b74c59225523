from fastapi import FastAPI, WebSocket
from dotenv import load_dotenv
from typing import Optional, Set
import asyncio
import os
import sys
import logging
from models.analysis_models import default_analysis_result
from models.session_messages import (
    AudioLevelMessage,
    FragmentMessage,
    StartRecordingMessage,
    StopRecordingMessage,
    parse_client_message,
)
from services.analysis_service import AnalysisService
from services.event_publisher import EventPublisher
from services.session_manager import RecordingSessionManager, StopOutcome
from routers import analysis

load_dotenv()

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Validate required environment variables
REQUIRED_ENV_VARS = ["OPENAI_API_KEY"]

NO_SPEECH_MESSAGE = (
    "No speech was detected. Please check that your microphone is working and not muted. "
    "Try speaking louder or getting closer to the microphone."
)
TRANSCRIPTION_FAILED_MESSAGE = (
    "Speech was detected but could not be transcribed. "
    "Please try again, speaking clearly and slowly."
)


def validate_environment():
    """Validate that all required environment variables are set."""
    missing = [var for var in REQUIRED_ENV_VARS if not os.getenv(var)]
    if missing:
        logger.error(f"Missing required environment variables: {missing}")
        sys.exit(1)
    logger.info("Environment validation passed")


def log_publishing_status():
    """Log whether session events will be published to Redis."""
    if os.getenv("REDIS_URL"):
        logger.info("=" * 60)
        logger.info("Redis event publishing ENABLED")
        logger.info(f"  Stream: {os.getenv('ANALYSIS_STREAM_NAME', 'meeting_analysis_events')}")
        logger.info("=" * 60)
    else:
        logger.warning("=" * 60)
        logger.warning("Redis event publishing DISABLED (REDIS_URL not set)")
        logger.warning("Sessions will be analyzed without event publishing")
        logger.warning("=" * 60)


# Call validation at startup
validate_environment()
log_publishing_status()

app = FastAPI()

# Include routers
app.include_router(analysis.router)

event_publisher = EventPublisher()
analysis_service = AnalysisService()


async def send_error(websocket: WebSocket, code: str, message: str, session_id: Optional[str] = None):
    await websocket.send_json({
        "type": "error",
        "code": code,
        "message": message,
        "session_id": session_id
    })


async def finish_session(
    websocket: WebSocket,
    sessions: RecordingSessionManager,
    outcome: StopOutcome
) -> bool:
    """
    Analyze a stopped session and deliver the result if it is still current.

    Returns:
        True if the result was sent to the client
    """
    session_id = outcome.session_id

    try:
        result = await analysis_service.analyze(outcome.cleaned_transcript, session_id)
    except Exception as e:
        logger.error(
            f"Analysis failed, using default result: session_id={session_id}, error={e}",
            exc_info=True
        )
        result = default_analysis_result()

    # A new recording may have started while the analysis was running
    if not sessions.accept_result(session_id):
        return False

    await event_publisher.publish_analysis_completed(
        session_id=session_id,
        cleaned_transcript=outcome.cleaned_transcript,
        analysis=result
    )

    try:
        await websocket.send_json({
            "type": "session_complete",
            "session_id": session_id,
            "raw_transcript": outcome.transcript,
            "cleaned_transcript": outcome.cleaned_transcript,
            "analysis": result.model_dump(by_alias=True)
        })
        logger.info(
            f"Session complete message sent: session_id={session_id}, "
            f"action_items={len(result.action_items)}"
        )
        return True
    except Exception as e:
        logger.warning(
            f"Could not send session_complete (socket may be closed): "
            f"session_id={session_id}, error={e}"
        )
        return False


async def handle_stop(
    websocket: WebSocket,
    sessions: RecordingSessionManager,
    pending: Set[asyncio.Task]
) -> None:
    outcome = sessions.stop()
    if outcome is None:
        await send_error(websocket, "not_recording", "No recording in progress.")
        return

    if outcome.no_speech:
        logger.info(f"No transcript and no audio detected: session_id={outcome.session_id}")
        await send_error(websocket, "no_speech_detected", NO_SPEECH_MESSAGE, outcome.session_id)
        return

    if outcome.transcription_failed:
        logger.info(f"Audio detected but no transcript: session_id={outcome.session_id}")
        await send_error(websocket, "transcription_failed", TRANSCRIPTION_FAILED_MESSAGE, outcome.session_id)
        return

    await websocket.send_json({
        "type": "transcript_cleaned",
        "session_id": outcome.session_id,
        "cleaned_transcript": outcome.cleaned_transcript
    })

    task = asyncio.create_task(finish_session(websocket, sessions, outcome))
    pending.add(task)
    task.add_done_callback(pending.discard)


@app.get("/health")
def health():
    return {"status": "ok"}


@app.websocket("/listen")
async def websocket_endpoint(websocket: WebSocket):
    await websocket.accept()
    logger.info("WebSocket connection established")

    sessions = RecordingSessionManager()
    pending: Set[asyncio.Task] = set()

    try:
        while True:
            message = await websocket.receive()

            if message["type"] == "websocket.disconnect":
                logger.info(f"WebSocket disconnected: session_id={sessions.current_session_id}")
                break

            if "text" not in message or message["text"] is None:
                logger.warning("Received non-text frame, ignoring")
                continue

            data = parse_client_message(message["text"])
            if data is None:
                logger.warning(f"Received invalid message: {message['text'][:200]}")
                await send_error(websocket, "invalid_message", "Unrecognized message.")
                continue

            if isinstance(data, StartRecordingMessage):
                session_id = sessions.start()
                await event_publisher.publish_session_started(session_id)
                await websocket.send_json({"type": "session_started", "session_id": session_id})

            elif isinstance(data, FragmentMessage):
                if not data.is_final:
                    continue
                transcript = sessions.append_fragment(data.text)
                if transcript is not None:
                    await websocket.send_json({
                        "type": "transcript",
                        "session_id": sessions.current_session_id,
                        "transcript": transcript
                    })

            elif isinstance(data, AudioLevelMessage):
                sessions.record_audio_level(data.level)

            elif isinstance(data, StopRecordingMessage):
                logger.info(f"Stop signal received: session_id={sessions.current_session_id}")
                await handle_stop(websocket, sessions, pending)

    except Exception as e:
        logger.error(f"WebSocket error: session_id={sessions.current_session_id}, error={e}")
    finally:
        for task in pending:
            task.cancel()

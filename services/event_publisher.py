import redis.asyncio as redis
import json
import os
import logging
from datetime import datetime, timezone
from typing import Optional

from models.analysis_models import AnalysisResult

logger = logging.getLogger(__name__)


class EventPublisher:
    """Publishes session lifecycle events to a Redis Stream.

    Publishing is best effort: when REDIS_URL is unset the publisher is
    disabled, and Redis errors are logged without interrupting the session.
    """

    def __init__(self):
        redis_url = os.getenv("REDIS_URL")
        self.stream_name = os.getenv("ANALYSIS_STREAM_NAME", "meeting_analysis_events")

        if redis_url:
            self.redis_client = redis.from_url(
                redis_url,
                decode_responses=True,
                socket_timeout=5,
                socket_connect_timeout=5
            )
            logger.info(f"EventPublisher enabled: stream={self.stream_name}")
        else:
            self.redis_client = None
            logger.warning("REDIS_URL not set, event publishing disabled")

    async def publish_event(self, event_type: str, session_id: str, payload: Optional[dict] = None) -> bool:
        """Append one event to the stream. Returns True if it was written."""
        if self.redis_client is None:
            return False

        event_data = {
            "event_type": event_type,
            "session_id": session_id,
            "timestamp": datetime.now(timezone.utc).isoformat()
        }
        if payload is not None:
            event_data["payload"] = json.dumps(payload)

        try:
            await self.redis_client.xadd(
                self.stream_name,
                event_data,
                maxlen=10000
            )
            logger.info(f"Published {event_type} event: session_id={session_id}")
            return True
        except redis.RedisError as e:
            logger.error(f"Stream write failed: event_type={event_type}, session_id={session_id}, error={e}")
            return False

    async def publish_session_started(self, session_id: str) -> bool:
        return await self.publish_event("session_started", session_id)

    async def publish_analysis_completed(
        self,
        session_id: str,
        cleaned_transcript: str,
        analysis: AnalysisResult
    ) -> bool:
        """Publish the final transcript and analysis of a session."""
        return await self.publish_event(
            "analysis_completed",
            session_id,
            {
                "cleaned_transcript": cleaned_transcript,
                "analysis": analysis.model_dump(by_alias=True)
            }
        )

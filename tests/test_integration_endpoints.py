"""
Integration Tests for Endpoint Flows

This module contains integration tests for the HTTP and WebSocket endpoints,
testing the full request/response flow with a mocked analysis service.

Tests:
- /health returns ok
- /analysis/text cleans text and returns the analysis
- /listen drives start / fragment / stop through to session_complete
- /listen reports no_speech_detected, transcription_failed and bad messages
"""

import uuid
import pytest
from unittest.mock import patch, MagicMock, AsyncMock
from fastapi.testclient import TestClient

import main
from main import app
from models.analysis_models import ActionItem, default_analysis_result


# =============================================================================
# Test Client Fixture
# =============================================================================

@pytest.fixture
def client():
    """Create a test client for the FastAPI app."""
    return TestClient(app)


@pytest.fixture
def sample_analysis():
    analysis = default_analysis_result()
    analysis.action_items.append(ActionItem(task="need to send the agenda"))
    analysis.summary = "Kickoff planned."
    return analysis


@pytest.fixture
def mock_analyze(sample_analysis):
    """Replace the live-session analysis with a canned result."""
    with patch.object(main.analysis_service, "analyze", AsyncMock(return_value=sample_analysis)) as mock:
        yield mock


# =============================================================================
# HTTP Endpoint Tests
# =============================================================================

class TestHealthEndpoint:

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok"}


class TestTextAnalysisEndpoint:
    """Integration tests for POST /analysis/text endpoint."""

    def test_returns_cleaned_text_and_analysis(self, client, sample_analysis):
        with patch("routers.analysis.AnalysisService") as mock_service:
            mock_instance = MagicMock()
            mock_instance.analyze = AsyncMock(return_value=sample_analysis)
            mock_service.return_value = mock_instance

            response = client.post("/analysis/text", json={"text": "we met today. we met today"})

        assert response.status_code == 200, f"Expected 200, got {response.status_code}: {response.text}"

        data = response.json()
        assert data["raw_text"] == "we met today. we met today"
        assert data["cleaned_text"] == "we met today."
        assert data["analysis"]["actionItems"][0]["task"] == "need to send the agenda"
        assert data["analysis"]["summary"] == "Kickoff planned."

        mock_instance.analyze.assert_awaited_once()
        assert mock_instance.analyze.call_args.args[0] == "we met today."

    def test_whitespace_text_returns_422(self, client):
        response = client.post("/analysis/text", json={"text": "   "})

        assert response.status_code == 422

    def test_missing_text_returns_422(self, client):
        response = client.post("/analysis/text", json={})

        assert response.status_code == 422

    def test_nothing_left_after_cleaning_returns_400(self, client):
        with patch("routers.analysis.clean", return_value=""):
            response = client.post("/analysis/text", json={"text": "uh"})

        assert response.status_code == 400

    def test_model_failure_returns_default_payload(self, client):
        """The OpenAI call fails, so the fixed default analysis is returned."""
        with patch("services.extraction_service.AsyncOpenAI") as mock_openai:
            mock_openai.return_value.chat.completions.create = AsyncMock(side_effect=Exception("API Error"))

            response = client.post(
                "/analysis/text",
                json={"text": "i have a meeting tomorrow at 3pm with John"}
            )

        assert response.status_code == 200
        assert response.json()["analysis"] == default_analysis_result().model_dump(by_alias=True)


# =============================================================================
# WebSocket Session Tests
# =============================================================================

class TestListenWebSocket:

    def test_full_session_flow(self, client, mock_analyze):
        with client.websocket_connect("/listen") as websocket:
            websocket.send_json({"type": "start_recording"})
            started = websocket.receive_json()
            assert started["type"] == "session_started"
            session_id = started["session_id"]
            uuid.UUID(session_id)

            websocket.send_json({"type": "fragment", "text": "we met today.", "is_final": True})
            first = websocket.receive_json()
            assert first == {"type": "transcript", "session_id": session_id, "transcript": "we met today."}

            websocket.send_json({"type": "fragment", "text": "we met today", "is_final": True})
            second = websocket.receive_json()
            assert second["transcript"] == "we met today. we met today"

            websocket.send_json({"type": "stop_recording"})
            cleaned = websocket.receive_json()
            assert cleaned == {
                "type": "transcript_cleaned",
                "session_id": session_id,
                "cleaned_transcript": "we met today."
            }

            complete = websocket.receive_json()
            assert complete["type"] == "session_complete"
            assert complete["session_id"] == session_id
            assert complete["raw_transcript"] == "we met today. we met today"
            assert complete["cleaned_transcript"] == "we met today."
            assert complete["analysis"]["actionItems"][0]["task"] == "need to send the agenda"

        mock_analyze.assert_awaited_once_with("we met today.", session_id)

    def test_interim_fragments_are_ignored(self, client, mock_analyze):
        with client.websocket_connect("/listen") as websocket:
            websocket.send_json({"type": "start_recording"})
            websocket.receive_json()

            websocket.send_json({"type": "fragment", "text": "hel", "is_final": False})
            websocket.send_json({"type": "fragment", "text": "hello", "is_final": True})

            assert websocket.receive_json()["transcript"] == "hello"

    def test_stop_without_speech_or_audio(self, client, mock_analyze):
        with client.websocket_connect("/listen") as websocket:
            websocket.send_json({"type": "start_recording"})
            session_id = websocket.receive_json()["session_id"]

            websocket.send_json({"type": "stop_recording"})
            error = websocket.receive_json()

        assert error["type"] == "error"
        assert error["code"] == "no_speech_detected"
        assert error["session_id"] == session_id
        assert error["message"] == main.NO_SPEECH_MESSAGE
        mock_analyze.assert_not_called()

    def test_stop_with_audio_but_no_transcript(self, client, mock_analyze):
        with client.websocket_connect("/listen") as websocket:
            websocket.send_json({"type": "start_recording"})
            websocket.receive_json()

            websocket.send_json({"type": "audio_level", "level": 5})
            websocket.send_json({"type": "stop_recording"})
            error = websocket.receive_json()

        assert error["code"] == "transcription_failed"
        assert error["message"] == main.TRANSCRIPTION_FAILED_MESSAGE
        mock_analyze.assert_not_called()

    def test_stop_when_not_recording(self, client, mock_analyze):
        with client.websocket_connect("/listen") as websocket:
            websocket.send_json({"type": "stop_recording"})
            error = websocket.receive_json()

        assert error["code"] == "not_recording"
        assert error["session_id"] is None

    def test_invalid_message(self, client, mock_analyze):
        with client.websocket_connect("/listen") as websocket:
            websocket.send_text("not json at all")
            error = websocket.receive_json()

            assert error["code"] == "invalid_message"

            # The connection stays usable after a bad message
            websocket.send_json({"type": "start_recording"})
            assert websocket.receive_json()["type"] == "session_started"

    def test_new_session_after_completion(self, client, mock_analyze):
        with client.websocket_connect("/listen") as websocket:
            websocket.send_json({"type": "start_recording"})
            first_id = websocket.receive_json()["session_id"]
            websocket.send_json({"type": "fragment", "text": "first session words", "is_final": True})
            websocket.receive_json()
            websocket.send_json({"type": "stop_recording"})
            websocket.receive_json()
            assert websocket.receive_json()["type"] == "session_complete"

            websocket.send_json({"type": "start_recording"})
            second_id = websocket.receive_json()["session_id"]
            websocket.send_json({"type": "fragment", "text": "second", "is_final": True})

            assert second_id != first_id
            assert websocket.receive_json()["transcript"] == "second"

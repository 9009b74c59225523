"""Shared test configuration.

main.py validates the environment at import time, so the OpenAI key must be
present before any test module imports it. Redis publishing stays disabled
unless a test attaches a fake client.
"""
import os

os.environ.setdefault("OPENAI_API_KEY", "test-openai-key")
os.environ.pop("REDIS_URL", None)
os.environ.pop("PARTICIPANT_STOPLIST", None)

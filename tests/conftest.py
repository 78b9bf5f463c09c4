"""Shared fixtures: fake generation services standing in for Gemini."""

from __future__ import annotations

from typing import Iterator, List, Optional, Sequence

import pytest
from fastapi.testclient import TestClient

from agent.core.memory import Turn


class FakeStreamer:
    """Records every transcript it is called with and replays canned replies.

    Each entry in ``replies`` is either a list of fragments to stream or an
    exception instance to raise once the call starts.
    """

    def __init__(self, replies: Optional[List] = None) -> None:
        self.replies = list(replies or [])
        self.calls: List[List[dict]] = []

    async def __call__(self, turns: Sequence[Turn]):
        self.calls.append([turn.to_content() for turn in turns])
        reply = self.replies.pop(0) if self.replies else ["ok"]
        if isinstance(reply, BaseException):
            raise reply
        for fragment in reply:
            yield fragment


@pytest.fixture
def fake_streamer() -> FakeStreamer:
    return FakeStreamer()


@pytest.fixture
def client(fake_streamer: FakeStreamer) -> Iterator[TestClient]:
    from app.main import app, get_streamer

    app.dependency_overrides[get_streamer] = lambda: fake_streamer
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()

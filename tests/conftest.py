import pytest

from flowchartbot.errors import GenerationError


class FakeCompletionClient:
    """Stands in for CompletionClient; replies from a queue of canned results."""

    def __init__(self, *replies):
        self.replies = list(replies)
        self.requests = []

    async def complete(self, messages):
        self.requests.append(list(messages))
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply


@pytest.fixture
def fake_client():
    return FakeCompletionClient


@pytest.fixture
def generation_error():
    return GenerationError("API error: 503 Service Unavailable")

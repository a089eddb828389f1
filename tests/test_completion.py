import asyncio
from types import SimpleNamespace

import httpx
import openai
import pytest

from flowchartbot.completion import (
    DEFAULT_MAX_TOKENS,
    DEFAULT_MODEL,
    DEFAULT_TEMPERATURE,
    CompletionClient,
)
from flowchartbot.conversation import Message
from flowchartbot.errors import GenerationError

REQUEST = httpx.Request("POST", "https://api.groq.com/openai/v1/chat/completions")


class FakeCompletions:
    def __init__(self, result):
        self.result = result
        self.calls = []

    async def create(self, **kwargs):
        self.calls.append(kwargs)
        if isinstance(self.result, Exception):
            raise self.result
        return self.result


def fake_openai(result):
    completions = FakeCompletions(result)
    return SimpleNamespace(chat=SimpleNamespace(completions=completions)), completions


def completion_response(content, total_tokens=42):
    return SimpleNamespace(
        choices=[SimpleNamespace(message=SimpleNamespace(content=content))],
        usage=SimpleNamespace(total_tokens=total_tokens),
    )


MESSAGES = [Message("system", "sys"), Message("user", "draw a login flow")]


def test_request_body_and_reply():
    client, completions = fake_openai(completion_response("flowchart TD\nA-->B"))
    completion = CompletionClient(client=client)

    assert asyncio.run(completion.complete(MESSAGES)) == "flowchart TD\nA-->B"
    assert completions.calls == [
        {
            "model": DEFAULT_MODEL,
            "messages": [
                {"role": "system", "content": "sys"},
                {"role": "user", "content": "draw a login flow"},
            ],
            "temperature": DEFAULT_TEMPERATURE,
            "max_tokens": DEFAULT_MAX_TOKENS,
            "stream": False,
        }
    ]


def test_token_usage_accumulates():
    client, _ = fake_openai(completion_response("flowchart TD\nA-->B", total_tokens=10))
    completion = CompletionClient(client=client)

    asyncio.run(completion.complete(MESSAGES))
    asyncio.run(completion.complete(MESSAGES))

    assert completion.total_tokens == 20


def test_http_error_becomes_generation_error():
    response = httpx.Response(503, request=REQUEST)
    error = openai.APIStatusError("Service Unavailable", response=response, body=None)
    client, _ = fake_openai(error)

    with pytest.raises(GenerationError, match="503 Service Unavailable"):
        asyncio.run(CompletionClient(client=client).complete(MESSAGES))


def test_transport_error_becomes_generation_error():
    client, _ = fake_openai(openai.APIConnectionError(request=REQUEST))

    with pytest.raises(GenerationError, match="Connection error"):
        asyncio.run(CompletionClient(client=client).complete(MESSAGES))


def test_empty_choices_is_an_error():
    client, _ = fake_openai(SimpleNamespace(choices=[], usage=None))

    with pytest.raises(GenerationError):
        asyncio.run(CompletionClient(client=client).complete(MESSAGES))


def test_missing_content_is_an_error():
    client, _ = fake_openai(completion_response(None))

    with pytest.raises(GenerationError):
        asyncio.run(CompletionClient(client=client).complete(MESSAGES))


def test_custom_settings_are_sent():
    client, completions = fake_openai(completion_response("flowchart TD\nA"))
    completion = CompletionClient(
        client=client, model="other-model", temperature=0.0, max_tokens=50
    )

    asyncio.run(completion.complete(MESSAGES))

    call = completions.calls[0]
    assert (call["model"], call["temperature"], call["max_tokens"]) == ("other-model", 0.0, 50)

"""OpenRouter client end to end over ``httpx.MockTransport``.

Covers the wire request, event re-streaming, status and transport failures,
connection release on early close or cancellation, and the
``client.messages.create`` compatibility surface.
"""
from __future__ import annotations

import json

import httpx
import pytest
from pydantic import ValidationError

from taskmaster_providers.base.cancellation import CancellationToken, CancelledError
from taskmaster_providers.base.errors import ErrorCode, ProviderError
from taskmaster_providers.base.models import ChatRequest, Message
from taskmaster_providers.openrouter import MessageStream

from conftest import TEST_CREDENTIAL, TrackingStream, delta_record


def _request(**kwargs) -> ChatRequest:
    kwargs.setdefault("messages", [Message("user", "Expand task 7")])
    return ChatRequest(**kwargs)


def _collect(iterator):
    """Drain ``iterator``; return ``(events, error)``."""
    events = []
    try:
        for evt in iterator:
            events.append(evt)
    except (ProviderError, CancelledError) as e:
        return events, e
    return events, None


def test_request_shape_on_the_wire(make_client, sse_response):
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["request"] = request
        return sse_response("data: [DONE]\n")

    client = make_client(handler)
    list(client.create_chat_completion_stream(_request(system="Plan carefully.", model="claude-3-5-haiku")))

    req = seen["request"]
    assert req.method == "POST"
    assert str(req.url) == "https://openrouter.ai/api/v1/chat/completions"
    assert req.headers["Authorization"] == f"Bearer {TEST_CREDENTIAL}"
    assert req.headers["Content-Type"] == "application/json"
    assert req.headers["HTTP-Referer"] == "https://github.com/taskmaster-ai/taskmaster"
    assert req.headers["X-Title"] == "Task Master CLI"
    assert json.loads(req.content) == {
        "model": "anthropic/claude-3-5-haiku",
        "messages": [
            {"role": "system", "content": "Plan carefully."},
            {"role": "user", "content": "Expand task 7"},
        ],
        "stream": True,
        "temperature": 0.2,
        "max_tokens": 64000,
    }


def test_events_are_restreamed_in_order(make_client, sse_response):
    record = delta_record("Sub") + delta_record("task")
    client = make_client(lambda request: sse_response(record[:17], record[17:], delta_record("s"), "data: [DONE]\n"))
    events = list(client.create_chat_completion_stream(_request()))
    assert [e.delta.text for e in events] == ["Sub", "task", "s"]
    assert all(e.type == "content_block_delta" for e in events)


def test_no_request_until_iteration(make_client, sse_response):
    calls = []

    def handler(request):
        calls.append(request)
        return sse_response("data: [DONE]\n")

    client = make_client(handler)
    stream = client.create_chat_completion_stream(_request())
    assert calls == []
    list(stream)
    assert len(calls) == 1


def test_status_error_with_message_body(make_client):
    client = make_client(lambda request: httpx.Response(401, json={"message": "bad key"}))
    events, err = _collect(client.create_chat_completion_stream(_request()))
    assert events == []
    assert isinstance(err, ProviderError)
    assert err.message == "OpenRouter API error: bad key"
    assert err.code is ErrorCode.AUTH
    assert err.status == 401
    assert err.retryable is False


def test_status_error_with_nested_error_body(make_client):
    body = {"error": {"message": "Rate limit exceeded: free-models-per-day", "code": 429}}
    client = make_client(lambda request: httpx.Response(429, json=body))
    events, err = _collect(client.create_chat_completion_stream(_request()))
    assert events == []
    assert err.message == "OpenRouter API error: Rate limit exceeded: free-models-per-day"
    assert err.code is ErrorCode.RATE_LIMIT
    assert err.retryable is True


def test_status_error_with_unparseable_body_uses_reason_phrase(make_client):
    client = make_client(lambda request: httpx.Response(500, content=b"<html>oops</html>"))
    events, err = _collect(client.create_chat_completion_stream(_request()))
    assert events == []
    assert err.message == "OpenRouter API error: Internal Server Error"
    assert err.code is ErrorCode.SERVER_ERROR


def test_transport_error_is_wrapped(make_client):
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    client = make_client(handler)
    events, err = _collect(client.create_chat_completion_stream(_request()))
    assert events == []
    assert isinstance(err, ProviderError)
    assert err.code is ErrorCode.TRANSIENT
    assert isinstance(err.raw, httpx.ConnectError)
    assert "connection refused" in err.message


def test_done_stops_reading_and_closes_response(make_client):
    body = TrackingStream([delta_record("a").encode(), b"data: [DONE]\n", delta_record("ignored").encode()])
    client = make_client(lambda request: httpx.Response(200, stream=body))
    events = list(client.create_chat_completion_stream(_request()))
    assert [e.delta.text for e in events] == ["a"]
    assert body.yielded == 2
    assert body.closed is True


def test_early_close_releases_connection(make_client):
    body = TrackingStream([delta_record(str(i)).encode() for i in range(10)])
    client = make_client(lambda request: httpx.Response(200, stream=body))
    stream = client.create_chat_completion_stream(_request())
    assert next(stream).delta.text == "0"
    assert body.closed is False
    stream.close()
    assert body.closed is True
    assert body.yielded < 10


def test_cancellation_token_closes_connection(make_client):
    token = CancellationToken()
    body = TrackingStream([delta_record(str(i)).encode() for i in range(5)])
    client = make_client(lambda request: httpx.Response(200, stream=body))
    stream = client.create_chat_completion_stream(_request(), cancellation_token=token)
    assert next(stream).delta.text == "0"
    token.cancel("stop requested")
    events, err = _collect(stream)
    assert events == []
    assert isinstance(err, CancelledError)
    assert body.closed is True


def test_cancelled_before_start_makes_no_request(make_client, sse_response):
    calls = []

    def handler(request):
        calls.append(request)
        return sse_response("data: [DONE]\n")

    token = CancellationToken()
    token.cancel()
    client = make_client(handler)
    with pytest.raises(CancelledError):
        list(client.create_chat_completion_stream(_request(), cancellation_token=token))
    assert calls == []


def test_messages_create_facade(make_client, sse_response):
    seen = {}

    def handler(request):
        seen["body"] = json.loads(request.content)
        return sse_response(delta_record("Hello"), delta_record(" world"), "data: [DONE]\n")

    client = make_client(handler)
    stream = client.messages.create(
        model="claude-3-7-sonnet-20250219",
        max_tokens=1000,
        temperature=0.5,
        system="You are Task Master.",
        messages=[{"role": "user", "content": "hi"}],
        stream=True,
    )
    assert isinstance(stream, MessageStream)
    texts = [event.delta.text for event in stream if event.type == "content_block_delta"]
    assert texts == ["Hello", " world"]
    assert seen["body"]["max_tokens"] == 1000
    assert seen["body"]["temperature"] == 0.5
    assert seen["body"]["messages"][0] == {"role": "system", "content": "You are Task Master."}


def test_message_stream_text_and_single_use(make_client, sse_response):
    client = make_client(lambda request: sse_response(delta_record("a"), delta_record("b"), "data: [DONE]\n"))
    stream = client.messages.create(messages=[{"role": "user", "content": "hi"}])
    assert stream.text() == "ab"
    assert list(stream) == []


def test_message_stream_context_manager_closes(make_client):
    body = TrackingStream([delta_record(str(i)).encode() for i in range(3)])
    client = make_client(lambda request: httpx.Response(200, stream=body))
    with client.messages.create(messages=[{"role": "user", "content": "hi"}]) as stream:
        first = next(iter(stream))
    assert first.delta.text == "0"
    assert body.closed is True


def test_messages_create_validates_arguments(make_client, sse_response):
    client = make_client(lambda request: sse_response("data: [DONE]\n"))
    with pytest.raises(ValidationError):
        client.messages.create(messages=[{"role": "user", "content": "hi"}], temperature=5)
    with pytest.raises(ValidationError):
        client.messages.create(messages=[{"content": "no role"}])


def test_stream_logs_start_and_finalize_without_credential(make_client, sse_response, capsys):
    client = make_client(lambda request: sse_response(delta_record("a"), "data: nope\n", "data: [DONE]\n"))
    list(client.create_chat_completion_stream(_request()))
    err = capsys.readouterr().err
    events = [json.loads(line) for line in err.splitlines() if line.strip()]
    by_name = {e["event"]: e for e in events}
    assert by_name["stream.start"]["provider"] == "openrouter"
    assert by_name["stream.start"]["model"] == "anthropic/claude-3-7-sonnet-20250219"
    finalize = by_name["stream.finalize"]
    assert finalize["emitted_count"] == 1
    assert finalize["skipped_count"] == 1
    assert finalize["aborted"] is False
    assert TEST_CREDENTIAL not in err


def test_status_error_is_logged(make_client, capsys):
    client = make_client(lambda request: httpx.Response(403, json={"message": "forbidden model"}))
    _collect(client.create_chat_completion_stream(_request()))
    events = [json.loads(line) for line in capsys.readouterr().err.splitlines() if line.strip()]
    error = next(e for e in events if e["event"] == "stream.error")
    assert error["error_code"] == "auth"
    assert error["status"] == 403
    assert error["level"] == "ERROR"

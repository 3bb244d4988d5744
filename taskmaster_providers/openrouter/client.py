"""OpenRouter provider adapter with an Anthropic-style compatibility layer.

Summary:
- Callers build Anthropic-style requests (``system`` + ``messages``) and read
  ``content_block_delta`` events; OpenRouter speaks the OpenAI-style
  ``/chat/completions`` dialect. This module bridges the two for streaming.
- Translation lives in ``helpers``; decoding in ``stream_helpers``. This
  module only orchestrates I/O, logging and error normalization.

Errors & Observability:
- A non-success HTTP status raises ``ProviderError`` with
  ``"OpenRouter API error: <provider message>"`` before any event is yielded.
- Transport failures are classified with ``classify_exception`` and raised as
  ``ProviderError``.
- Structured ``stream.start`` / ``stream.error`` / ``stream.finalize`` events
  carry ``emitted_count``, ``skipped_count``, ``time_to_first_token_ms`` and
  ``total_duration_ms``.

Resources:
- Each stream owns one HTTP response. Closing the iterator (``close()``,
  leaving a ``with`` block, or cancelling its token) closes the response.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterator, Optional

import httpx

from ..base.cancellation import CancellationToken, CancelledError
from ..base.dto import ChatRequestDTO
from ..base.errors import ErrorCode, ProviderError, classify_exception, is_retryable, status_to_code
from ..base.http import get_httpx_client
from ..base.logging import LogContext, get_logger, normalized_log_event
from ..base.models import ChatRequest
from ..base.streaming import CallerEvent, StreamMetrics, accumulate_text
from .client_config import PROVIDER_NAME, ClientConfig
from .helpers import build_headers, build_provider_request, encode_provider_request
from .stream_helpers import decode_stream, extract_error_message

API_ERROR_PREFIX = "OpenRouter API error: "


class MessageStream:
    """Iterable of :class:`CallerEvent` returned by ``client.messages.create``.

    A thin pass-through over the client's event generator: events come out
    in arrival order, unmodified. The stream is single-use. Use it as a
    context manager (or call :meth:`close`) to release the connection when
    stopping early.
    """

    def __init__(self, events: Iterator[CallerEvent]) -> None:
        self._events = events

    def __iter__(self) -> "MessageStream":
        return self

    def __next__(self) -> CallerEvent:
        return next(self._events)

    def __enter__(self) -> "MessageStream":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        close = getattr(self._events, "close", None)
        if close is not None:
            close()

    def text(self) -> str:
        """Drain the remaining events and return their concatenated text."""
        with self:
            return accumulate_text(self)


class Messages:
    """``client.messages`` namespace mirroring the Anthropic SDK surface."""

    def __init__(self, client: "OpenRouterClient") -> None:
        self._client = client

    def create(self, *, cancellation_token: Optional[CancellationToken] = None, **params: Any) -> MessageStream:
        """Start a streaming completion from Anthropic-style keyword arguments.

        Parameters:
            cancellation_token: Optional token to abort the stream.
            **params: ``model``, ``messages``, ``system``, ``temperature``,
                ``max_tokens``; other keys (``stream``, ``metadata``...) are
                ignored.

        Raises:
            pydantic.ValidationError: When the arguments are malformed.
        """
        request = ChatRequestDTO.model_validate(params).to_request()
        return MessageStream(self._client.create_chat_completion_stream(request, cancellation_token=cancellation_token))


class OpenRouterClient:
    """Streaming chat-completion client for OpenRouter.

    Parameters:
        config: Immutable client configuration (credential, endpoint, default
            model).
        http_client: Optional ``httpx.Client`` to use instead of the shared
            pool (tests pass one backed by ``httpx.MockTransport``).
    """

    provider_name = PROVIDER_NAME

    def __init__(self, config: ClientConfig, http_client: Optional[httpx.Client] = None) -> None:
        self._config = config
        self._http_client = http_client
        self._logger = get_logger("taskmaster.providers.openrouter")
        self.messages = Messages(self)

    @classmethod
    def from_env(cls, **overrides: Any) -> "OpenRouterClient":
        return cls(ClientConfig.from_env(**overrides))

    @property
    def config(self) -> ClientConfig:
        return self._config

    def _client(self) -> httpx.Client:
        if self._http_client is not None:
            return self._http_client
        return get_httpx_client(self._config.endpoint_base, purpose="openrouter.stream")

    def create_chat_completion_stream(
        self,
        request: ChatRequest,
        *,
        cancellation_token: Optional[CancellationToken] = None,
    ) -> Iterator[CallerEvent]:
        """Stream a chat completion as caller-dialect events.

        The HTTP request is issued when iteration starts.

        Yields:
            ``CallerEvent`` per parseable stream record, in arrival order,
            until ``data: [DONE]`` or the end of the body.

        Raises:
            ProviderError: On a non-success status (before any event) or a
                transport failure.
            CancelledError: When ``cancellation_token`` is cancelled.
        """
        payload = build_provider_request(request, self._config)
        model = payload["model"]
        ctx = LogContext(provider=self.provider_name, model=model)
        metrics = StreamMetrics()
        self._log_stream_start(ctx, payload)
        try:
            if cancellation_token is not None:
                cancellation_token.raise_if_cancelled()
            with self._client().stream(
                "POST",
                self._config.chat_completions_url,
                content=encode_provider_request(payload),
                headers=build_headers(self._config),
            ) as resp:
                if not resp.is_success:
                    raise self._status_error(resp, model)
                yield from decode_stream(resp.iter_lines(), metrics=metrics, cancellation_token=cancellation_token)
        except GeneratorExit:
            metrics.finish()
            self._log_stream_finalize(ctx, metrics, aborted=True)
            raise
        except (ProviderError, CancelledError) as e:
            metrics.finish()
            self._log_stream_error(ctx, metrics, e)
            raise
        except httpx.HTTPError as e:
            metrics.finish()
            code = classify_exception(e)
            err = ProviderError(
                code=code,
                message=f"OpenRouter request failed: {str(e) or type(e).__name__}",
                provider=self.provider_name,
                model=model,
                retryable=is_retryable(code),
                raw=e,
            )
            self._log_stream_error(ctx, metrics, err)
            raise err from e
        metrics.finish()
        self._log_stream_finalize(ctx, metrics, aborted=False)

    def _status_error(self, resp: httpx.Response, model: str) -> ProviderError:
        """Build the terminal error for a non-success response."""
        body = resp.read()
        fallback = resp.reason_phrase or str(resp.status_code)
        code = status_to_code(resp.status_code)
        return ProviderError(
            code=code,
            message=API_ERROR_PREFIX + extract_error_message(body, fallback),
            provider=self.provider_name,
            model=model,
            status=resp.status_code,
            retryable=is_retryable(code),
        )

    def _log_stream_start(self, ctx: LogContext, payload: Dict[str, Any]) -> None:
        messages = payload["messages"]
        normalized_log_event(
            self._logger,
            "stream.start",
            ctx,
            phase="start",
            structured=False,
            message_count=len(messages),
            has_system=bool(messages) and messages[0]["role"] == "system",
            temperature=payload["temperature"],
            max_tokens=payload["max_tokens"],
        )

    def _log_stream_finalize(self, ctx: LogContext, metrics: StreamMetrics, *, aborted: bool) -> None:
        normalized_log_event(
            self._logger,
            "stream.finalize",
            ctx,
            phase="finalize",
            structured=False,
            emitted=metrics.emitted > 0,
            aborted=aborted,
            **metrics.to_log_fields(),
        )

    def _log_stream_error(self, ctx: LogContext, metrics: StreamMetrics, error: Exception) -> None:
        code = classify_exception(error)
        message = error.message if isinstance(error, ProviderError) else str(error)
        normalized_log_event(
            self._logger,
            "stream.error",
            ctx,
            phase="stream" if metrics.emitted else "start",
            structured=False,
            error_code=code.value,
            emitted=metrics.emitted > 0,
            level=logging.WARNING if code is ErrorCode.CANCELLED else logging.ERROR,
            error=message,
            status=getattr(error, "status", None),
            **metrics.to_log_fields(),
        )


__all__ = ["API_ERROR_PREFIX", "MessageStream", "Messages", "OpenRouterClient"]

"""Subcommand handlers for the ``taskmaster-providers`` CLI.

Exit codes: ``0`` success, ``1`` provider failure, ``2`` missing
configuration, ``130`` interrupted.
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any, Dict, Optional

from ..base.errors import ErrorCode, ProviderError
from ..base.logging import configure_logger
from ..base.models import ChatRequest, Message
from ..config.env import get_env_var_name
from ..openrouter import ClientConfig, OpenRouterClient, build_provider_request
from ..openrouter.client_config import PROVIDER_NAME


def build_request(args: argparse.Namespace) -> ChatRequest:
    return ChatRequest(
        messages=[Message(role="user", content=args.prompt)],
        model=args.model,
        system=args.system,
        temperature=args.temperature,
        max_tokens=args.max_tokens,
    )


def build_client(args: argparse.Namespace) -> OpenRouterClient:
    """Create the client from environment config plus CLI overrides."""
    return OpenRouterClient.from_env(base_url=args.base_url)


def apply_logging(args: argparse.Namespace) -> None:
    if args.log_level or args.log_file:
        configure_logger(level=args.log_level, file_path=args.log_file)


def _error(payload: Dict[str, Any]) -> None:
    print(json.dumps(payload), file=sys.stderr)


def handle_plan(args: argparse.Namespace) -> int:
    """Print the translated request; the credential is never shown."""
    config = ClientConfig.from_env(require_key=False, base_url=args.base_url)
    plan = {
        "url": config.chat_completions_url,
        "body": build_provider_request(build_request(args), config),
    }
    print(json.dumps(plan, indent=2, ensure_ascii=False))
    return 0


def handle_stream(args: argparse.Namespace) -> int:
    """Stream the completion to stdout, flushing after each delta."""
    try:
        client = build_client(args)
    except ProviderError as e:
        if e.code is not ErrorCode.AUTH:
            raise
        _error({"error": e.message, "set_env": get_env_var_name(PROVIDER_NAME)})
        return 2

    events = client.create_chat_completion_stream(build_request(args))
    try:
        for event in events:
            if args.json:
                sys.stdout.write(json.dumps(event.to_dict(), ensure_ascii=False) + "\n")
            else:
                sys.stdout.write(event.delta.text)
            sys.stdout.flush()
    except ProviderError as e:
        _error({"error": e.message, "code": e.code.value, "status": e.status})
        return 1
    except KeyboardInterrupt:
        return 130
    finally:
        events.close()
    if not args.json:
        sys.stdout.write("\n")
    return 0


def dispatch(args: argparse.Namespace) -> Optional[int]:
    apply_logging(args)
    if args.cmd == "plan":
        return handle_plan(args)
    return handle_stream(args)


__all__ = [
    "apply_logging",
    "build_client",
    "build_request",
    "dispatch",
    "handle_plan",
    "handle_stream",
]

"""CLI parser construction for ``taskmaster-providers``.

Wires subparsers only; handlers live in ``cli_actions``.
"""

from __future__ import annotations

import argparse


def _add_request_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--prompt", required=True, help="User message content")
    parser.add_argument("--system", default=None, help="Optional system prompt")
    parser.add_argument("--model", default=None, help="Model id; bare ids get the default namespace")
    parser.add_argument("--temperature", type=float, default=None)
    parser.add_argument("--max-tokens", dest="max_tokens", type=int, default=None)
    parser.add_argument("--base-url", dest="base_url", default=None, help="Override the OpenRouter endpoint")


def build_parser() -> argparse.ArgumentParser:
    """Construct the top-level parser.

    Subcommands:
        stream: send the prompt and print deltas as they arrive.
        plan: print the translated provider request without any network I/O.
    """
    p = argparse.ArgumentParser(
        prog="taskmaster-providers",
        description="Stream chat completions through the OpenRouter adapter",
    )
    p.add_argument("--log-level", dest="log_level", default=None, help="Override TASKMASTER_LOG_LEVEL")
    p.add_argument("--log-file", dest="log_file", default=None, help="Also write JSON logs to this file")
    sub = p.add_subparsers(dest="cmd")

    p_stream = sub.add_parser("stream", help="Stream a completion to stdout (default)")
    _add_request_args(p_stream)
    p_stream.add_argument("--json", action="store_true", help="Emit one JSON event per line")

    p_plan = sub.add_parser("plan", help="Show the provider request that would be sent")
    _add_request_args(p_plan)
    return p


__all__ = ["build_parser"]

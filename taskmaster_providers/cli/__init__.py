"""Task Master providers CLI (package entrypoint).

Usage::

    python -m taskmaster_providers.cli stream --prompt "Break task 4 into subtasks"
    python -m taskmaster_providers.cli plan --prompt "hi" --model gpt-4o

Provider logic stays in ``taskmaster_providers.openrouter``; this package only
parses arguments and prints.
"""

from __future__ import annotations

import sys
from typing import Optional

from .cli_actions import dispatch
from .cli_parser import build_parser


def main(argv: Optional[list[str]] = None) -> int:
    """CLI entrypoint.

    Parameters
    ----------
    argv: Optional[list[str]]
        Argument vector; when ``None`` uses ``sys.argv[1:]``.

    Returns
    -------
    int
        Process exit code.
    """
    p = build_parser()
    args = p.parse_args(list(sys.argv[1:] if argv is None else argv))
    if args.cmd is None:
        p.print_help(sys.stderr)
        return 2
    return dispatch(args) or 0


__all__ = ["main"]

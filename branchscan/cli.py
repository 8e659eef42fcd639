"""Command-line front door for branchscan.

Parses CLI options, merges them over persisted config defaults, and runs one
of: a full head crawl, a single-head revision lookup, or a UUID lookup.
"""

from __future__ import annotations

import argparse
import functools
import logging
import sys

from . import config
from .criteria import AllOfCriteria, RequiredPathsCriteria
from .errors import HeadNotFoundError, RemoteAccessError
from .observers import CollectingObserver, HeadSelectingObserver, LimitObserver
from .render import render_heads, sanitize_terminal_text
from .repository import SvnRepositoryView
from .source import HeadSource

URL_PREFIXES = ("http://", "https://", "svn://", "svn+", "file://")


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def _positive_float(value: str) -> float:
    """argparse type for positive timeouts."""
    try:
        parsed = float(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid number: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be > 0")
    return parsed


def _repository_url(value: str) -> str:
    if not value.startswith(URL_PREFIXES):
        raise argparse.ArgumentTypeError(f"not a Subversion URL: {value!r}")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="branchscan",
        description="Discover branch directories in a Subversion repository.",
    )
    parser.add_argument("url", type=_repository_url, help="Base URL of the project in the repository.")
    parser.add_argument("--includes", default=None, help="Comma-separated include globs (default from config).")
    parser.add_argument("--excludes", default=None, help="Comma-separated exclude globs (default from config).")
    parser.add_argument(
        "--require",
        metavar="PATH",
        action="append",
        default=[],
        help="Only accept heads containing PATH. Repeatable.",
    )
    parser.add_argument(
        "--require-any",
        metavar="PATH",
        action="append",
        default=[],
        help="Only accept heads containing at least one of the --require-any paths. Repeatable.",
    )
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--head", metavar="NAME", help="Print the current revision of one head and exit.")
    mode.add_argument(
        "--find",
        metavar="NAME",
        help="Crawl with the include/exclude patterns until head NAME is found.",
    )
    mode.add_argument("--uuid", action="store_true", help="Print the repository UUID and exit.")
    parser.add_argument("--limit", type=_positive_int, default=None, help="Stop after N heads.")
    parser.add_argument("--format", choices=("text", "json"), default="text", help="Output format.")
    parser.add_argument("--style", default=None, help="Pygments style name for JSON output.")
    parser.add_argument("--no-color", action="store_true", help="Disable color output even on TTY.")
    parser.add_argument("--svn", default=None, help="Path to the svn client.")
    parser.add_argument("--timeout", type=_positive_float, default=None, help="Seconds per svn call.")
    parser.add_argument(
        "--save-defaults",
        action="store_true",
        help="Persist the given --includes/--excludes/--svn/--timeout as config defaults.",
    )
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Log progress (-vv for debug).")
    return parser


def _configure_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s", stream=sys.stderr)


def _build_criteria(require_all: list[str], require_any: list[str]) -> AllOfCriteria | None:
    criteria = AllOfCriteria.of(
        [
            RequiredPathsCriteria(tuple(require_all), match="all") if require_all else None,
            RequiredPathsCriteria(tuple(require_any), match="any") if require_any else None,
        ]
    )
    return criteria if criteria.members else None


def _save_defaults(args: argparse.Namespace) -> None:
    data = config.load_config()
    for key, value in (
        ("includes", args.includes),
        ("excludes", args.excludes),
        ("svn_binary", args.svn),
        ("timeout_seconds", args.timeout),
    ):
        if value is not None:
            data[key] = value
    config.save_config(data)


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and run the requested lookup.

    Remote failures exit with status 2, a missing ``--head`` or ``--find``
    head with status 1.
    """
    args = build_parser().parse_args(argv)
    _configure_logging(args.verbose)

    if args.save_defaults:
        _save_defaults(args)
    settings = config.load_settings()

    criteria = _build_criteria(args.require, args.require_any)

    source = HeadSource(
        args.url,
        includes=args.includes if args.includes is not None else settings.includes,
        excludes=args.excludes if args.excludes is not None else settings.excludes,
        criteria=criteria,
        view_factory=functools.partial(
            SvnRepositoryView.open,
            svn_binary=args.svn or settings.svn_binary,
            timeout_seconds=args.timeout or settings.timeout_seconds,
        ),
    )

    try:
        if args.uuid:
            uuid = source.uuid
            if uuid is None:
                raise RemoteAccessError(f"could not determine UUID of {source.remote_base}")
            sys.stdout.write(uuid + "\n")
            return

        if args.head is not None:
            heads = [source.fetch_head(args.head)]
        elif args.find is not None:
            selected = source.fetch(HeadSelectingObserver(args.find.strip("/"))).head
            if selected is None:
                raise HeadNotFoundError(args.find)
            heads = [selected]
        else:
            observer = LimitObserver(args.limit) if args.limit else CollectingObserver()
            heads = source.fetch(observer).result()
    except HeadNotFoundError as exc:
        raise SystemExit(f"Head not found: {sanitize_terminal_text(exc.name)}") from exc
    except RemoteAccessError as exc:
        sys.stderr.write(f"branchscan: {sanitize_terminal_text(str(exc))}\n")
        raise SystemExit(2) from exc

    color = args.format == "json" and not args.no_color and sys.stdout.isatty()
    sys.stdout.write(render_heads(heads, args.format, color=color, style=args.style or settings.style))


if __name__ == "__main__":
    main()

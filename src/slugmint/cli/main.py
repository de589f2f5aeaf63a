# SPDX-License-Identifier: MIT
"""Command-line interface for the slug registry."""

from __future__ import annotations

import argparse
import sys
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
from typing import Any, Callable, Sequence

import logfire
from pydantic_core import to_json

from slugmint.errors import SlugmintError
from slugmint.observability.monitoring import init_logfire
from slugmint.runtime.environment import RuntimeEnv
from slugmint.runtime.settings import Settings, load_settings
from slugmint.utils.error_handler import LoggingErrorHandler

LOG_LEVELS = ["fatal", "error", "warn", "notice", "info", "debug", "trace"]

Handler = Callable[[argparse.Namespace, RuntimeEnv], Any]


def _print_version() -> None:
    """Print the installed package version."""
    try:
        pkg_version = version("slugmint")
    except PackageNotFoundError:  # pragma: no cover - fallback for editable installs
        pkg_version = "unknown"
    print(f"slugmint {pkg_version}")


def _configure_logging(args: argparse.Namespace, settings: Settings) -> None:
    """Configure Logfire based on verbosity flags."""
    level = settings.log_level.lower()
    index = LOG_LEVELS.index(level) if level in LOG_LEVELS else 2
    index = max(0, min(len(LOG_LEVELS) - 1, index + args.verbose - args.quiet))
    init_logfire(settings.logfire_token, LOG_LEVELS[index])  # type: ignore[arg-type]


def _emit(payload: Any) -> None:
    """Write ``payload`` to stdout as JSON."""
    print(to_json(payload, indent=2).decode("utf-8"))


def _non_negative_int(text: str) -> int:
    """Parse an amount argument, rejecting negative values."""
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: {text!r}") from None
    if value < 0:
        raise argparse.ArgumentTypeError(f"must be non-negative: {value}")
    return value


def _require_caller(args: argparse.Namespace) -> str:
    if not args.caller:
        raise SystemExit("--caller is required for this command")
    return args.caller


def _cmd_register(args: argparse.Namespace, env: RuntimeEnv) -> Any:
    return env.registry.register(
        _require_caller(args),
        args.destination,
        slug=args.slug,
        referrer=args.referrer,
        payment=args.payment,
    )


def _cmd_edit(args: argparse.Namespace, env: RuntimeEnv) -> Any:
    return env.registry.edit_destination(
        _require_caller(args), args.sequence_number, args.destination
    )


def _cmd_lookup(args: argparse.Namespace, env: RuntimeEnv) -> Any:
    sequence_number, destination = env.registry.lookup_by_slug(args.slug)
    return {
        "slug": args.slug,
        "sequence_number": sequence_number,
        "destination": destination,
    }


def _cmd_cost(args: argparse.Namespace, env: RuntimeEnv) -> Any:
    return {"length": args.length, "cost": env.registry.cost_of(args.length)}


def _cmd_balance(args: argparse.Namespace, env: RuntimeEnv) -> Any:
    address = args.address or _require_caller(args)
    return {"address": address, "balance": env.ledger.balance_of(address)}


def _cmd_withdraw(args: argparse.Namespace, env: RuntimeEnv) -> Any:
    address = _require_caller(args)
    return {"address": address, "withdrawn": env.ledger.withdraw(address)}


def _cmd_credit(args: argparse.Namespace, env: RuntimeEnv) -> Any:
    balance = env.ledger.credit_incoming(_require_caller(args), args.amount)
    return {"protocol_owner": env.ledger.protocol_owner, "balance": balance}


def _cmd_metadata(args: argparse.Namespace, env: RuntimeEnv) -> Any:
    document = env.registry.metadata(args.sequence_number)
    if args.data_uri:
        return {"uri": document.to_data_uri()}
    return document


def _cmd_audit(args: argparse.Namespace, env: RuntimeEnv) -> Any:
    return env.ledger.audit()


def _add_register_subparser(subparsers: Any) -> None:
    parser = subparsers.add_parser("register", help="Register a destination.")
    parser.add_argument("destination", help="Destination URL or string")
    parser.add_argument("--slug", default="", help="Custom slug (paid)")
    parser.add_argument("--referrer", help="Referrer address for a custom slug")
    parser.add_argument(
        "--payment", type=_non_negative_int, default=0, help="Amount paid"
    )
    parser.set_defaults(func=_cmd_register)


def _add_edit_subparser(subparsers: Any) -> None:
    parser = subparsers.add_parser("edit", help="Change a destination you own.")
    parser.add_argument("sequence_number", type=int)
    parser.add_argument("destination")
    parser.set_defaults(func=_cmd_edit)


def _add_read_subparsers(subparsers: Any) -> None:
    parser = subparsers.add_parser("lookup", help="Resolve a slug.")
    parser.add_argument("slug")
    parser.set_defaults(func=_cmd_lookup)

    parser = subparsers.add_parser("cost", help="Show the custom slug fee.")
    parser.add_argument("--length", type=int, default=8)
    parser.set_defaults(func=_cmd_cost)

    parser = subparsers.add_parser("balance", help="Show a ledger balance.")
    parser.add_argument("address", nargs="?", help="Defaults to --caller")
    parser.set_defaults(func=_cmd_balance)

    parser = subparsers.add_parser("metadata", help="Render slug metadata.")
    parser.add_argument("sequence_number", type=int)
    parser.add_argument(
        "--data-uri", action="store_true", help="Print as a base64 data URI"
    )
    parser.set_defaults(func=_cmd_metadata)

    parser = subparsers.add_parser("audit", help="Check ledger totals.")
    parser.set_defaults(func=_cmd_audit)


def _add_ledger_subparsers(subparsers: Any) -> None:
    parser = subparsers.add_parser("withdraw", help="Withdraw the caller's balance.")
    parser.set_defaults(func=_cmd_withdraw)

    parser = subparsers.add_parser(
        "credit", help="Credit incoming value to the protocol owner."
    )
    parser.add_argument("amount", type=_non_negative_int)
    parser.set_defaults(func=_cmd_credit)


def _build_parser() -> argparse.ArgumentParser:
    """Return an argument parser configured with subcommands."""
    parser = argparse.ArgumentParser(
        description=(
            "Register short slugs for destinations and manage the fee ledger. "
            "State is kept in memory unless --state-file is given."
        ),
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        "--version", action="store_true", help="Print the slugmint version and exit."
    )
    parser.add_argument("--config", help="Path to the YAML configuration file.")
    parser.add_argument("--state-file", help="JSON lines state snapshot to use.")
    parser.add_argument("--caller", help="Address acting on the registry.")
    parser.add_argument(
        "-v", "--verbose", action="count", default=0, help="Increase log output."
    )
    parser.add_argument(
        "-q", "--quiet", action="count", default=0, help="Decrease log output."
    )
    subparsers = parser.add_subparsers(dest="command")
    _add_register_subparser(subparsers)
    _add_edit_subparser(subparsers)
    _add_read_subparsers(subparsers)
    _add_ledger_subparsers(subparsers)
    return parser


def main(argv: Sequence[str] | None = None) -> None:
    """Parse arguments and dispatch to the requested subcommand."""
    parser = _build_parser()
    args = parser.parse_args(argv)
    if args.version:
        _print_version()
        return
    if args.command is None:
        parser.print_help()
        raise SystemExit(1)
    try:
        settings = load_settings(args.config)
    except RuntimeError as exc:
        LoggingErrorHandler().handle("Failed to load settings", exc)
        print(f"error: {exc}", file=sys.stderr)
        raise SystemExit(2) from exc
    if args.state_file:
        settings.state_file = Path(args.state_file)
    _configure_logging(args, settings)
    env = RuntimeEnv(settings)
    handler: Handler = args.func
    try:
        result = handler(args, env)
    except SlugmintError as exc:
        LoggingErrorHandler().handle(f"{args.command} failed", exc)
        print(f"error: {type(exc).__name__}: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
    finally:
        logfire.force_flush()
    _emit(result)


if __name__ == "__main__":
    main()

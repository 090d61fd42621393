# ruff: noqa: T201

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from currisync.app import create_domain, export_domain_json, import_domain_json
from currisync.config import configure_logging
from currisync.domain.tree_io import DocumentError

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Export and re-import curriculum domains")
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log individual writes and skipped nodes",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    domain = subparsers.add_parser("domain", help="Domain management commands")
    domain_sub = domain.add_subparsers(dest="domain_command", required=True)
    domain_create = domain_sub.add_parser("create", help="Create an empty domain")
    domain_create.add_argument(
        "--name",
        type=str,
        required=True,
        help="Display name for the domain",
    )
    domain_create.add_argument(
        "--color-code",
        type=str,
        help="Optional display colour, e.g. #22AA88",
    )

    export = subparsers.add_parser("export", help="Export a domain tree as JSON")
    export.add_argument(
        "--domain-id",
        type=str,
        required=True,
        help="Id of the domain to export",
    )
    export.add_argument(
        "--output",
        type=Path,
        help="File to write the JSON to (defaults to stdout)",
    )

    import_ = subparsers.add_parser("import", help="Merge a JSON tree into a domain")
    import_.add_argument("path", type=Path, help="JSON file produced by export")
    import_.add_argument(
        "--domain-id",
        type=str,
        required=True,
        help="Id of the domain to merge into",
    )
    import_.add_argument(
        "--timeout",
        type=float,
        help="Cancel the import after this many seconds (defaults to config)",
    )

    return parser.parse_args(list(argv))


def _validate_args(args: argparse.Namespace) -> None:
    if args.command == "domain" and not args.name.strip():
        raise ValueError("Domain name must not be blank")
    if args.command == "import" and args.timeout is not None and args.timeout <= 0:
        raise ValueError("Timeout must be positive")


def _read_document(path: Path) -> bytes:
    try:
        return path.read_bytes()
    except OSError as exc:
        raise ValueError(f"Cannot read import file {path}: {exc.strerror}") from exc


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args: argparse.Namespace
    try:
        parsed_args = _parse_args(args_list)
        _validate_args(parsed_args)
        raw = _read_document(parsed_args.path) if parsed_args.command == "import" else None
    except ValueError:
        configure_logging()
        log.exception("CLI validation error")
        sys.exit(2)

    configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO)

    try:
        if parsed_args.command == "domain" and parsed_args.domain_command == "create":
            domain = create_domain(name=parsed_args.name, color_code=parsed_args.color_code)
            print(domain.id)
        elif parsed_args.command == "export":
            rendered = export_domain_json(domain_id=parsed_args.domain_id)
            if parsed_args.output is None:
                print(rendered)
            else:
                parsed_args.output.write_text(rendered + "\n", encoding="utf-8")
                log.info("Wrote %s", parsed_args.output)
        elif parsed_args.command == "import" and raw is not None:
            summary = import_domain_json(
                raw,
                domain_id=parsed_args.domain_id,
                timeout_seconds=parsed_args.timeout,
            )
            print(json.dumps(summary.to_payload(), indent=2))
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301

    except DocumentError as exc:
        log.error("Import rejected: %s", exc)  # noqa: TRY400
        sys.exit(2)
    except Exception:
        log.exception("Fatal error during %s", parsed_args.command)
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()

"""CLI entrypoints for virejo commands."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from .config import ConfigError
from .logging import configure_logging, get_logger
from .orchestrator import Orchestrator, UnsupportedFileError


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=argparse.SUPPRESS if suppress_default else False,
        help="Increase log verbosity for troubleshooting.",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="virejo",
        description="Generate Vitest scaffolds for TypeScript and TSX source files.",
    )
    _add_verbose_option(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate_parser = subparsers.add_parser(
        "generate",
        help="Write a <name>.test.<ext> file next to a TypeScript source file.",
    )
    _add_verbose_option(generate_parser, suppress_default=True)
    generate_parser.add_argument("path", help="Path to the .ts or .tsx source file.")
    generate_parser.add_argument(
        "--force",
        action="store_true",
        help="Overwrite an existing test file without asking.",
    )
    generate_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the generated test file instead of writing it.",
    )
    generate_parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to a .virejo.yml file (defaults to the nearest one above the source).",
    )

    analyze_parser = subparsers.add_parser(
        "analyze",
        help="Print the structural model of a source file as JSON.",
    )
    _add_verbose_option(analyze_parser, suppress_default=True)
    analyze_parser.add_argument("path", help="Path to the .ts or .tsx source file.")

    serve_parser = subparsers.add_parser(
        "serve",
        help="Run the HTTP service used by editor integrations.",
    )
    _add_verbose_option(serve_parser, suppress_default=True)
    serve_parser.add_argument("--host", default="127.0.0.1", help="Interface to bind.")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port to listen on.")

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for virejo commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose))
    logger = get_logger("cli")

    if args.command == "generate":
        orchestrator = Orchestrator(
            confirm_overwrite=_prompt_overwrite if sys.stdin.isatty() else None,
            config_path=args.config,
        )
        try:
            outcome = orchestrator.run_generate(
                args.path,
                force=bool(args.force),
                dry_run=bool(args.dry_run),
            )
        except (UnsupportedFileError, FileNotFoundError, FileExistsError, ConfigError) as exc:
            logger.debug("generate failed", exc_info=True)
            parser.exit(1, f"{exc}\n")
        except Exception as exc:
            logger.debug("generate failed", exc_info=True)
            parser.exit(
                1, f"Failed to generate test file: {exc} (run with --verbose for details)\n"
            )
        if outcome is None:
            print("Test file left unchanged")
        elif not outcome.written:
            print(outcome.content)
        else:
            print(f"Test file generated: {outcome.path.name}")
    elif args.command == "analyze":
        try:
            result = Orchestrator().run_analyze(args.path)
        except (UnsupportedFileError, FileNotFoundError) as exc:
            logger.debug("analyze failed", exc_info=True)
            parser.exit(1, f"{exc}\n")
        except Exception as exc:
            logger.debug("analyze failed", exc_info=True)
            parser.exit(
                1, f"Failed to analyze {args.path}: {exc} (run with --verbose for details)\n"
            )
        print(json.dumps(result.to_dict(), indent=2))
    elif args.command == "serve":
        from .service import run_service

        run_service(host=args.host, port=args.port)
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _prompt_overwrite(target: Path) -> bool:
    answer = input(f"Test file {target.name} already exists. Overwrite? [y/N] ")
    return answer.strip().lower() in {"y", "yes"}


if __name__ == "__main__":
    main(sys.argv[1:])

"""Main entry point for Seller Tools."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from src.core.config import Settings, get_log_dir
from src.core.models import PipelineResult, ToolKind
from src.core.pipeline import BatchPipeline, PipelineError
from src.utils.export import Exporter

logger = logging.getLogger(__name__)


def setup_exception_handler() -> None:
    """Set up global exception handler for unhandled exceptions."""

    def handle_exception(exc_type, exc_value, exc_traceback):
        """Handle uncaught exceptions."""
        if issubclass(exc_type, KeyboardInterrupt):
            # Allow Ctrl+C to exit normally
            sys.__excepthook__(exc_type, exc_value, exc_traceback)
            return

        logger.critical(
            "Unhandled exception",
            exc_info=(exc_type, exc_value, exc_traceback),
        )

    sys.excepthook = handle_exception


def setup_logging(level: str = "INFO") -> None:
    """Configure application logging."""
    log_file = get_log_dir() / "seller-tools.log"

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[
            logging.FileHandler(log_file, encoding="utf-8"),
            logging.StreamHandler(sys.stderr),
        ],
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="seller-tools",
        description="Amazon seller tools: audit, calculate and export CSV data.",
    )
    parser.add_argument("--config", type=Path, help="Path to a settings JSON file")
    subparsers = parser.add_subparsers(dest="command", required=True)

    run = subparsers.add_parser("run", help="Run a tool over a CSV file")
    run.add_argument("tool", choices=ToolKind.values())
    run.add_argument("file", type=Path)
    run.add_argument("-o", "--output", type=Path, help="Write results to .csv or .xlsx")

    export = subparsers.add_parser("export", help="Run a tool and save a timestamped export")
    export.add_argument("tool", choices=ToolKind.values())
    export.add_argument("file", type=Path)
    export.add_argument("--format", choices=["csv", "xlsx"], default="csv")
    export.add_argument("--dir", type=Path, default=Path("."), help="Output directory")

    serve = subparsers.add_parser("serve", help="Start the JSON web API")
    serve.add_argument("--host", default="127.0.0.1")
    serve.add_argument("--port", type=int, default=5050)

    return parser


def write_results(result: PipelineResult, path: Path) -> None:
    """Write results to CSV or Excel depending on the file extension."""
    if path.suffix.lower() == ".xlsx":
        Exporter.export_to_xlsx(result.results, result.tool, path)
    else:
        Exporter.export_to_csv(result.results, result.tool, path)
    logger.info(f"Exported {result.rows_processed} rows to {path}")


def report_skipped(result: PipelineResult) -> None:
    for skipped in result.skipped:
        print(f"Row {skipped.index}: {skipped.reason}", file=sys.stderr)


def run_tool(args: argparse.Namespace, settings: Settings) -> int:
    tool = ToolKind.from_string(args.tool)
    try:
        result = BatchPipeline(tool, settings).run_file(args.file)
    except (PipelineError, FileNotFoundError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    report_skipped(result)
    print(result.summary(), file=sys.stderr)

    if args.command == "export":
        args.dir.mkdir(parents=True, exist_ok=True)
        write_results(result, args.dir / Exporter.generate_filename(tool, args.format))
    elif args.output:
        write_results(result, args.output)
    else:
        sys.stdout.write(Exporter.to_csv(result.results, tool))
    return 0


def serve(args: argparse.Namespace, settings: Settings) -> int:
    from src.web.server import create_app

    app = create_app(settings)
    logger.info(f"Starting web API on http://{args.host}:{args.port}")
    app.run(host=args.host, port=args.port, debug=False, use_reloader=False, threaded=True)
    return 0


def main(argv: list[str] | None = None) -> int:
    """Application entry point."""
    args = build_parser().parse_args(argv)
    settings = Settings.load(args.config)

    setup_logging(settings.log_level)
    setup_exception_handler()

    try:
        if args.command == "serve":
            return serve(args, settings)
        return run_tool(args, settings)
    except Exception as e:
        logger.exception("Command failed")
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())

# asview/cli.py

from __future__ import annotations
import argparse
import logging
import signal
import sys
from pathlib import Path

from asview.config import OUTPUT_MODES, resolve_config
from asview.engine.pool import build_views
from asview.errors import ConfigError, FeedFormatError
from asview.feeds.addresses import read_vantages
from asview.output.report import JSONReporter, TextReporter
from asview.routing.knowledge_base import KnowledgeBase

logger = logging.getLogger(__name__)


def configure_logging(verbosity: int, log_file: Path | None = None) -> None:
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        filename=str(log_file) if log_file else None,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main(argv: list[str] | None = None) -> int | None:
    parser = argparse.ArgumentParser(
        prog="asview",
        description=(
            "Infer AS paths from vantage points to weighted destinations and "
            "compare how differently each vantage sees the core"
        ),
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="YAML file with input paths and run settings",
    )
    parser.add_argument(
        "--relationships",
        type=Path,
        help="AS relationships file (as_a|as_b|code)",
    )
    parser.add_argument(
        "--bgp",
        type=Path,
        help="Pipe-delimited routing table dump",
    )
    parser.add_argument(
        "--destinations",
        type=Path,
        help="Destination addresses, one per line",
    )
    parser.add_argument(
        "--vantages",
        type=Path,
        help="Named vantages, one 'name,address' per line",
    )
    parser.add_argument(
        "--workers",
        type=int,
        help="Worker processes for path inference (default: 1)",
    )
    parser.add_argument(
        "--output",
        choices=list(OUTPUT_MODES),
        help="Output mode: 'cli' prints lines to stdout; 'json' writes a JSON report (default: cli)",
    )
    parser.add_argument(
        "--json-file",
        type=Path,
        help="Path to JSON output file if --output=json",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase log verbosity (-v info, -vv debug)",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        help="Write logs to this file instead of stderr",
    )

    args = parser.parse_args(argv)
    configure_logging(args.verbose, args.log_file)

    if args.config is not None and not args.config.exists():
        print(f"Config file not found: {args.config}", file=sys.stderr)
        return 1

    try:
        config = resolve_config(
            args.config,
            {
                "relationships": args.relationships,
                "bgp": args.bgp,
                "destinations": args.destinations,
                "vantages": args.vantages,
                "workers": args.workers,
                "output": args.output,
                "json_file": args.json_file,
            },
        )
        config.require_inputs()
    except ConfigError as exc:
        print(f"Invalid configuration: {exc}", file=sys.stderr)
        return 2

    for key in ("relationships", "bgp", "destinations", "vantages"):
        path = getattr(config, key)
        if not path.exists():
            print(f"Input file not found: {path}", file=sys.stderr)
            return 1

    # Build the shared knowledge base and the views
    try:
        knowledge_base = KnowledgeBase.build(
            config.relationships, config.bgp, config.destinations
        )
        vantages = read_vantages(config.vantages)
    except (FeedFormatError, ValueError) as exc:
        print(f"Failed to load inputs: {exc}", file=sys.stderr)
        return 2
    except OSError as exc:
        print(f"Failed to read inputs: {exc}", file=sys.stderr)
        return 1
    logger.info("Loaded %r", knowledge_base)

    try:
        views = build_views(knowledge_base, vantages, workers=config.workers)
    except Exception as exc:
        print(f"Analysis failed: {exc}", file=sys.stderr)
        return 3

    if config.output == "cli":
        for line in TextReporter().render(views):
            print(line)
        return 0

    try:
        JSONReporter().write(views, config.json_file)
        print(f"Report JSON dumped to {config.json_file}")
    except OSError as exc:
        print(f"Failed to write JSON file: {exc}", file=sys.stderr)
        return 4

    return 0  # success


def run() -> None:
    """Console script entry point."""
    if hasattr(signal, "SIGPIPE"):
        signal.signal(signal.SIGPIPE, signal.SIG_DFL)  # Ignore broken pipe
    sys.exit(main())


if __name__ == "__main__":
    run()

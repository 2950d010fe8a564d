"""Command line front end: print the date/time expressions found in a sentence."""

import argparse
import json
import sys
from dataclasses import fields
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional

from .core.config_manager import ConfigManager
from .core.error_handler import ChronoMatchError, ErrorHandler, ErrorSeverity
from .core.logging_manager import LoggingManager
from .processors.core.scanner import AttemptTrace
from .processors.core.temporal_extractor import TemporalExtractor
from .processors.core.tokens import Match, Token


def describe_token(token: Token) -> str:
    """Short form of a token: ``Hour(5)``, ``When(PM)``, ``Week``."""
    values = []
    for f in fields(token):
        value = getattr(token, f.name)
        values.append(value.name if isinstance(value, Enum) else str(value))
    name = type(token).__name__
    return f"{name}({', '.join(values)})" if values else name


def match_to_dict(match: Match) -> Dict[str, Any]:
    resolved = match.resolve()
    return {
        "rule": match.rule,
        "start": match.start,
        "end": match.end,
        "tokens": [describe_token(t) for t in match.tokens],
        "days": match.time_shift.days if match.time_shift else None,
        "seconds": match.time_shift.seconds if match.time_shift else None,
        "resolved": resolved.isoformat() if resolved else None,
        "error": str(match.error) if match.error else None,
    }


def format_match(match: Match) -> str:
    data = match_to_dict(match)
    line = f"[{data['start']}, {data['end']}] {data['rule']}: {' '.join(data['tokens'])}"
    if data["error"]:
        return f"{line} -> invalid: {data['error']}"
    return f"{line} -> {data['resolved']}"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="chronomatch", description="Find date/time expressions in a sentence"
    )
    parser.add_argument("text", help="Sentence to analyze")
    parser.add_argument("--tz", dest="timezone", help="Timezone of the reference time")
    parser.add_argument("--exact", action="store_true", default=None,
                        help="Disable typo tolerance")
    parser.add_argument("--config", help="Directory holding the YAML configuration")
    parser.add_argument("--json", action="store_true", help="Print matches as JSON")
    parser.add_argument("--trace", action="store_true", help="Show every rule attempt")
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose output")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point; returns the process exit code."""
    args = build_parser().parse_args(argv)
    error_handler = ErrorHandler()

    try:
        config_manager = ConfigManager(Path(args.config) if args.config else None)
        config = config_manager.load_config()

        if args.verbose:
            config.logging.level = "DEBUG"
        LoggingManager.configure(config.logging)

        traces: List[AttemptTrace] = []
        extractor = TemporalExtractor(config.matching)
        matches = extractor.extract(
            args.text,
            timezone=args.timezone,
            exact_match=args.exact,
            on_attempt=traces.append if args.trace else None,
        )
    except ChronoMatchError as e:
        severity = error_handler.handle_error(e, context="Extraction failed")
        print(f"error: {e}", file=sys.stderr)
        return 2 if severity in (ErrorSeverity.HIGH, ErrorSeverity.CRITICAL) else 1

    if args.trace:
        for trace in traces:
            outcome = "match" if trace.matched else trace.failure.value
            print(f"# {trace.rule} @ {trace.offset}: {outcome}", file=sys.stderr)

    if args.json:
        print(json.dumps([match_to_dict(m) for m in matches], indent=2))
    else:
        for match in matches:
            print(format_match(match))

    return 0


if __name__ == "__main__":
    sys.exit(main())

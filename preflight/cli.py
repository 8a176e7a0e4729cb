from __future__ import annotations
import argparse
import json
import logging
import sys
from dataclasses import asdict, dataclass, replace
from typing import Any, Dict, Optional, Sequence

from rich.console import Console
from rich.logging import RichHandler

from .commands import POWER, REMOVE, Advisory, classify
from .config import AdvisorConfig, config_from_env
from .console import (
    POWER_WARNING, REMOVE_WARNING, STILL_PROCEEDS, UNANALYZED_SUMMARY, UNKNOWN_MESSAGE, AdvisorConsole,
)
from .drives import VolumeUsage, volume_usage
from .report import Report, build_report, report_to_dict
from .scanner import ScanError, scan

APP_NAME = "preflight"
USAGE = f"Usage: {APP_NAME} <command> [args...]"

logger = logging.getLogger("preflight")


def setup_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    handler = RichHandler(console=Console(stderr=True), show_time=False, show_path=False, markup=False)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.handlers[:] = [handler]
    logger.setLevel(level)
    logger.propagate = False
    if verbose:
        logger.debug("Verbose logging enabled")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=APP_NAME,
        description="Explain what a destructive command would do, without running it.",
    )
    parser.add_argument("--json", action="store_true", help="Output a JSON summary.")
    parser.add_argument("--top", type=int, default=None, metavar="N",
                        help="Number of file types to list (default: 10).")
    parser.add_argument("--no-color", action="store_true", help="Disable colored output.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log skipped entries to stderr.")
    parser.add_argument("command", nargs="?", help="Command that would be run, e.g. rm, reboot.")
    parser.add_argument("args", nargs=argparse.REMAINDER, help="Arguments of that command.")
    return parser


def resolve_config(args: argparse.Namespace, base: AdvisorConfig) -> AdvisorConfig:
    config = base
    if args.top is not None:
        config = replace(config, top_extensions=max(0, args.top))
    if args.no_color:
        config = replace(config, color=False)
    if args.verbose:
        config = replace(config, verbose=True)
    if args.json:
        config = replace(config, json_output=True)
    return config


@dataclass
class TargetAnalysis:
    path: str
    report: Optional[Report] = None
    volume: Optional[VolumeUsage] = None
    error: Optional[ScanError] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "path": self.path,
            "report": report_to_dict(self.report) if self.report is not None else None,
            "volume": asdict(self.volume) if self.volume is not None else None,
            "error": {
                "kind": type(self.error).__name__,
                "reason": self.error.reason,
                "summary": UNANALYZED_SUMMARY,
                "note": STILL_PROCEEDS,
            }
            if self.error is not None
            else None,
        }


def analyze_target(target: str, config: AdvisorConfig, ui: Optional[AdvisorConsole] = None) -> TargetAnalysis:
    """Scan one removal target; failures are returned, never raised."""
    try:
        if ui is not None:
            with ui.scanning(target) as progress:
                result = scan(target, progress=progress)
        else:
            result = scan(target)
    except ScanError as e:
        logger.debug("scan of %s failed: %s", target, e)
        return TargetAnalysis(path=target, error=e)
    return TargetAnalysis(
        path=target,
        report=build_report(result, config.top_extensions),
        volume=volume_usage(target),
    )


def _run_json(advisory: Advisory, config: AdvisorConfig) -> None:
    payload: Dict[str, Any] = {"kind": advisory.kind, "command": advisory.command, "args": advisory.args}
    if advisory.kind == POWER:
        payload["warning"] = POWER_WARNING
    elif advisory.kind == REMOVE:
        payload["targets"] = [analyze_target(t, config).to_dict() for t in advisory.targets]
        payload["warning"] = REMOVE_WARNING
    else:
        payload["message"] = UNKNOWN_MESSAGE
    print(json.dumps(payload, indent=2))


def _run_console(advisory: Advisory, config: AdvisorConfig) -> None:
    ui = AdvisorConsole(color=config.color)
    if advisory.kind == POWER:
        ui.print_power(advisory)
    elif advisory.kind == REMOVE:
        for target in advisory.targets:
            ui.print_removal_request(target)
            analysis = analyze_target(target, config, ui)
            if analysis.error is not None:
                ui.print_scan_failure(analysis.error)
            else:
                ui.print_report(analysis.report, analysis.volume)
        ui.print_removal_warning()
    else:
        ui.print_unknown(advisory)


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        print(USAGE, file=sys.stderr)
        return 1

    try:
        base = config_from_env()
    except ValueError as e:
        print(str(e), file=sys.stderr)
        return 1
    config = resolve_config(args, base)
    setup_logging(config.verbose)

    advisory = classify([args.command, *args.args])
    logger.debug("classified %r as %s", advisory.command, advisory.kind)

    if config.json_output:
        _run_json(advisory, config)
    else:
        _run_console(advisory, config)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

#!/usr/bin/env python3
"""
hostfetch - A short, neofetch-style report of facts about this Linux host
"""

import argparse
import json
import logging
import sys
from typing import List

from rich.console import Console
from rich.text import Text
from rich.theme import Theme

from command_runner import CommandRunner, DEFAULT_COMMAND_TIMEOUT
from fact_collector import DEFAULT_HTTP_TIMEOUT, Fact, FactCollector, MandatorySourceError
import i18n

__version__ = "1.0"

# Font Awesome glyphs, one per fact key, in report order
ICONS = {
    "identity":     "\uf015",  # home
    "os":           "\uf17c",  # linux
    "uptime":       "\uf017",  # clock
    "install_date": "\uf073",  # calendar
    "packages":     "\uf187",  # archive
    "flatpak":      "\uf1b2",  # cube
    "shell":        "\uf120",  # terminal
    "cpu":          "\uf2db",  # microchip
    "memory":       "\uf538",  # memory
    "disk":         "\uf0a0",  # hdd
    "local_ip":     "\uf0ac",  # globe
    "public_ip":    "\uf0ac",  # globe
}

_hostfetch_theme = Theme({
    "fact.icon":        "bold #E95420",
    "fact.label":       "bold #E95420",
    "fact.value":       "#ebdbb2",
    "fact.unavailable": "dim italic",
    "error":            "bold red",
})


class Reporter:
    """Pairs each fact with its icon (or label) and prints one line per fact."""

    def __init__(self, console: Console, show_labels: bool = False):
        self.console = console
        self.show_labels = show_labels

    def _prefix(self, fact: Fact) -> str:
        if self.show_labels:
            width = max(len(i18n.t(f"label.{key}")) for key in ICONS)
            return f"{fact.label}:".ljust(width + 1)
        return ICONS.get(fact.key, "•")

    def format_line(self, fact: Fact) -> Text:
        style = "fact.value" if fact.available else "fact.unavailable"
        prefix_style = "fact.label" if self.show_labels else "fact.icon"
        return Text.assemble((self._prefix(fact), prefix_style), "  ", (fact.value, style))

    def print_report(self, facts: List[Fact]) -> None:
        for fact in facts:
            self.console.print(self.format_line(fact), soft_wrap=True)

    def print_json(self, facts: List[Fact]) -> None:
        payload = json.dumps([f.to_dict() for f in facts], indent=2, ensure_ascii=False)
        self.console.out(payload, highlight=False)


def positive_seconds(value: str) -> float:
    """argparse type for --timeout: a number of seconds greater than zero."""
    try:
        seconds = float(value)
    except ValueError:
        seconds = None
    if seconds is None or not seconds > 0:
        raise argparse.ArgumentTypeError(i18n.t('cli.timeout_positive', value=value))
    return seconds


def parse_arguments(argv: List[str] = None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="hostfetch",
        description=i18n.t('cli.arg_description'),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  hostfetch                      # icon report
  hostfetch --labels             # text labels instead of Font Awesome icons
  hostfetch --json --no-public-ip
        """,
    )
    parser.add_argument("--json", action="store_true", help=i18n.t('cli.arg_json'))
    parser.add_argument("--labels", action="store_true", help=i18n.t('cli.arg_labels'))
    parser.add_argument(
        "--no-public-ip", dest="public_ip", action="store_false",
        help=i18n.t('cli.arg_no_public_ip'),
    )
    parser.add_argument(
        "--timeout", type=positive_seconds, default=None, metavar="SECONDS",
        help=i18n.t('cli.arg_timeout'),
    )
    parser.add_argument("--strict", action="store_true", help=i18n.t('cli.arg_strict'))
    parser.add_argument("--no-color", action="store_true", help=i18n.t('cli.arg_no_color'))
    parser.add_argument("--lang", default=None, metavar="CODE", help=i18n.t('cli.arg_lang'))
    parser.add_argument("--debug", action="store_true", help=i18n.t('cli.arg_debug'))
    parser.add_argument("--version", action="store_true", help=i18n.t('cli.arg_version'))
    return parser.parse_args(argv)


def build_collector(args) -> FactCollector:
    """Create a FactCollector configured from the command line."""
    command_timeout = args.timeout if args.timeout is not None else DEFAULT_COMMAND_TIMEOUT
    http_timeout = args.timeout if args.timeout is not None else DEFAULT_HTTP_TIMEOUT
    return FactCollector(
        runner=CommandRunner(timeout=command_timeout),
        public_ip=args.public_ip,
        http_timeout=http_timeout,
        strict=args.strict,
    )


def main(argv: List[str] = None):
    """Entry point"""
    i18n.init()
    args = parse_arguments(argv)

    if args.version:
        print(f"hostfetch {__version__}")
        sys.exit(0)

    if args.lang:
        i18n.init(args.lang)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(name)s: %(levelname)s: %(message)s",
    )

    console = Console(theme=_hostfetch_theme, highlight=False, no_color=args.no_color)
    err_console = Console(theme=_hostfetch_theme, stderr=True, no_color=args.no_color)
    reporter = Reporter(console, show_labels=args.labels)

    try:
        facts = build_collector(args).collect()
    except MandatorySourceError as e:
        err_console.print(
            f"❌ {i18n.t('cli.mandatory_failed', source=e.source, error=e.error)}",
            style="error", markup=False,
        )
        sys.exit(1)
    except KeyboardInterrupt:
        err_console.print(f"\n{i18n.t('cli.interrupted')}", style="error")
        sys.exit(130)

    if args.json:
        reporter.print_json(facts)
    else:
        reporter.print_report(facts)


if __name__ == "__main__":
    main()

"""
Reference embedding application: the terminal emulator's command line.

    python -m treeargs capture logical timeout 2.5 output screen.vt lines 40

The root command carries global settings (debug tags, configuration file,
profile); the capture sub-command describes a screen capture and is turned
into a CaptureSettings record for the capture client. On any fault the
message is reported together with the usage of the innermost command reached.
"""
import logging
import sys
import warnings
from collections import namedtuple

from rich.console import Console
from rich.logging import RichHandler
from rich.pretty import pprint

from treeargs import *

logger = logging.getLogger("treeargs")

CONTOUR = Command("contour", "terminal emulator", options=[
    Option("debug", "", "enable debug logging for the given tags", placeholder="TAGS"),
    Option("config", "~/.config/contour/contour.yml", "path to the configuration file", placeholder="FILE"),
    Option("profile", "", "configuration profile to activate", placeholder="NAME"),
], children=[
    Command("capture", "capture the screen buffer into a file", options=[
        Option("logical", False, "count and capture logical lines instead of screen lines"),
        Option("timeout", 1.0, "seconds to wait for the terminal to respond", placeholder="SECONDS"),
        Option("output", "", "file written with the screen capture", placeholder="FILE", presence=Presence.REQUIRED),
        Option("lines", UInt(0), "number of lines to capture (0 for the whole screen)", placeholder="COUNT"),
    ]),
])

CaptureSettings = namedtuple("CaptureSettings", (
    "timeout",
    "output_file",
    "line_count",
    "logical_lines",
))


def capture_settings(flags, /):
    """
    build the capture client's settings record from a parsed flag store.
    """
    return CaptureSettings(
        timeout=flags.real("contour.capture.timeout"),
        output_file=flags.string("contour.capture.output"),
        line_count=flags.unsigned_integer("contour.capture.lines"),
        logical_lines=flags.boolean("contour.capture.logical"),
    )


def configure_logging(flags, /):
    level = logging.DEBUG if flags.string("contour.debug") else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def print_usage(command, /, *, console):
    console.print(
        "usage:\n" + usage_text(command, colorize=False, width=console.width),
        end="",
        highlight=False,
        markup=False,
        soft_wrap=True,
    )


def main(argv=None, /, *, console=None):
    """
    run the application; returns the process exit status.

    a value of the wrong kind (e.g. "timeout abc") is stored by the parser
    with a MismatchedValueWarning; the application treats it as a fault.
    """
    console = console or Console()
    try:
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always", MismatchedValueWarning)
            flags = parse_argv(CONTOUR, argv)
    except CommandException as fault:
        report(fault, colorful=console.is_terminal, console=console)
        print_usage(getattr(fault, "command", None) or CONTOUR, console=console)
        return 1

    mismatches = []
    for record in caught:
        if isinstance(record.message, MismatchedValueWarning):
            mismatches.append(record.message)
        else:
            warnings.showwarning(record.message, record.category, record.filename, record.lineno)

    if mismatches:
        for warning in mismatches:
            report(warning, colorful=console.is_terminal, console=console)
        print_usage(mismatches[-1].command or CONTOUR, console=console)
        return 1

    configure_logging(flags)
    logger.debug("resolved %d flags", len(flags))

    if "contour.capture.output" in flags:
        pprint(capture_settings(flags), console=console)
    else:
        pprint(flags.to_dict(), console=console)
    return 0


if __name__ == '__main__':
    sys.exit(main())

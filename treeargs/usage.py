"""
Treeargs usage renderer.

usage_text(command) walks the command tree and prints one line per path from
the given command down to every leaf:

    contour debug STRING config STRING capture [logical] timeout FLOAT output FILE

- boolean options render as "[name]";
- every other option renders as "name PLACEHOLDER", the placeholder being the
  option's own placeholder or its kind label (INT, UINT, FLOAT, STRING).

Colors
- colorize=True renders through rich and returns ANSI-styled text. The palette
  can be overridden from the host application with a __styles__ mapping on
  __main__ (keys: command-name, option-name, flag-name, placeholder,
  bracket).

Width
- width is validated but lines are never wrapped.
"""
import io
import sys
from collections import defaultdict

from rich.console import Console
from rich.text import Text

from .grammar import Command
from .values import Tag


def _check(function, command, colorize, width):
    if not isinstance(command, Command):
        raise TypeError(f"{function}() first argument must be a command")
    if not isinstance(colorize, bool):
        raise TypeError(f"{function}() 'colorize' must be a boolean")
    if not isinstance(width, int) or isinstance(width, bool):
        raise TypeError(f"{function}() 'width' must be an integer")
    if width < 1:
        raise ValueError(f"{function}() 'width' must be positive")


def _segment(command, styler):
    """
    "name [flag] option PLACEHOLDER ..." for a single command.
    """
    segment = Text(command.name, styler("command-name"))
    for option in command.options:
        segment.append(" ")
        if option.tag is Tag.BOOL:
            segment.append("[", styler("bracket"))
            segment.append(option.name, styler("flag-name"))
            segment.append("]", styler("bracket"))
        else:
            segment.append(option.name, styler("option-name"))
            segment.append(" ")
            segment.append(option.label, styler("placeholder"))
    return segment


def _lines(command, prefix, styler):
    line = prefix + _segment(command, styler)
    if command.leaf:
        yield line
        return
    for child in command.children:
        yield from _lines(child, line + Text(" "), styler)


def usage_text(command, /, colorize=False, width=80):
    """
    build the usage syntax of a command, one "\\n"-terminated line per leaf path.
    """
    _check("usage_text", command, colorize, width)

    styles = defaultdict(str, {
        "command-name": "bold #FF4D94",  # magenta-pink, like the program name in help
        "option-name": "bold #00E6FF",  # cyan for value-bearing options
        "flag-name": "bold #22C55E",  # green for boolean flags
        "placeholder": "bold #FFD600",  # amber for placeholders
        "bracket": "#9CA3AF",
    } | getattr(sys.modules.get("__main__"), "__styles__", {}))

    def styler(style):
        return styles[style] if colorize else ""

    lines = list(_lines(command, Text(), styler))

    if not colorize:
        return "".join(line.plain + "\n" for line in lines)

    console = Console(
        file=io.StringIO(),
        width=width,
        force_terminal=True,
        color_system="truecolor",
        no_color=False,
        legacy_windows=False,
    )
    with console.capture() as capture:
        for line in lines:
            console.print(line, soft_wrap=True, highlight=False)
    return capture.get()


def help_text(command, /, colorize=False, width=80):
    """
    reserved for a per-option help listing; currently always "".
    """
    _check("help_text", command, colorize, width)
    return ""


__all__ = (
    "usage_text",
    "help_text",
)

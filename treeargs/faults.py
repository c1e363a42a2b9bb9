"""
Treeargs faults (errors and warnings) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every user-facing issue.
- CommandException / CommandWarning: base types that carry a message plus
  context options and know how to render themselves through rich.
- report(): print any fault on a stderr console.

Error kinds
- MalformedGrammarError: the declared command tree violates a structural
  invariant (raised before any token is read).
- ParseError and its kinds: MissingValueError, UnknownTokenError,
  TrailingArgumentsError, RequiredOptionMissingError. All are terminal; no
  partial flag store is ever returned alongside them.

Warnings
- MismatchedValueWarning: a value was stored for an option but its kind differs
  from the option's declared kind (the coercion cascade degraded to a string).

Context options
- Faults raised by the parser carry: command (innermost command reached),
  path (its dotted path), token, index (1-based position), title, code and hint.
  Faults can be re-rendered with overrides via __replace__(**options).

Host configuration (read from __main__ when present)
- __styles__: palette overrides for rendering.
- __codes__: mapping FaultCode → label used instead of the numeric code.
- __prog__: program label shown in fault headers.
"""
import sys
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset, coalesce


class FaultCode(IntEnum):
    """
    canonical fault codes (stable identifiers).

    grouping
    - grammar (1100x): MALFORMED_GRAMMAR
    - parsing (1110x/1111x): UNKNOWN_TOKEN, MISSING_VALUE, REQUIRED_OPTION_MISSING,
      TRAILING_ARGUMENTS
    - warnings (12xxx): MISMATCHED_VALUE
    """
    # --- grammar errors (1100x) ---
    MALFORMED_GRAMMAR           = 11001

    # --- routing errors (1110x) ---
    UNKNOWN_TOKEN               = 11101

    # --- option errors (1111x) ---
    MISSING_VALUE               = 11111
    REQUIRED_OPTION_MISSING     = 11112

    # --- structural errors (1114x) ---
    TRAILING_ARGUMENTS          = 11141

    # --- warnings (12xxx) ---
    MISMATCHED_VALUE            = 12111

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels.
        """
        return str(getattr(sys.modules.get("__main__"), "__codes__", {}).get(self, self.value))


def _render(fault, palette, kind):
    """
    shared rich rendering for exceptions and warnings.

    palette keys: prog-name, code, <kind>-title, <kind>-message, hint-arrow, hint.
    """
    main = sys.modules.get("__main__")
    options = fault.options
    colorful = options.get("colorful", False)
    styles = defaultdict(str, palette | getattr(main, "__styles__", {}))

    def styler(style):
        return styles[style] if colorful else ""

    def text(fragment, style=""):
        if not fragment:
            return Text("")
        if not colorful:
            return Text(str(fragment))
        if isinstance(fragment, Text):
            return fragment
        return Text(str(fragment), style)

    command = options.get("command")
    prog = getattr(main, "__prog__", Unset)
    if prog is Unset:
        prog = str(options.get("path", getattr(command, "name", "treeargs"))).split(".")[0]

    code = options.get("code")
    header = Text.assemble(
        "[ ",
        text(prog, styler("prog-name")),
        " — ",
        text(code.normalize() if isinstance(code, FaultCode) else "?", styler("code")),
        " | ",
        text(str(options.get("title", kind)).title(), styler(f"{kind}-title")),
        " ]"
    )
    message = text(coalesce(fault.message, ""), styler(f"{kind}-message"))
    parts = [message]
    if hint := options.get("hint"):
        parts.append(Text.assemble(text(" → ", styler("hint-arrow")), text(hint, styler("hint"))))

    if options.get("fancy", False):
        return Panel(Group(*parts), title=header, title_align="left")
    return Group(header, *parts)


class CommandException(Exception):
    """
    base of every treeargs error; carries a message and read-only context options.
    """

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(*(() if message is Unset else (message,)))
        self.message = message
        self.options = MappingProxyType(options)

    def __getattr__(self, name):
        # context options double as attributes (fault.command, fault.token, ...)
        try:
            return self.__dict__["options"][name]
        except KeyError:
            raise AttributeError(name) from None

    def __rich__(self):
        return _render(self, {
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # pinky title
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",
            "hint": "italic #9CE19C",
        }, "error")

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class MalformedGrammarError(CommandException): ...


class ParseError(CommandException): ...
class MissingValueError(ParseError): ...
class UnknownTokenError(ParseError): ...
class TrailingArgumentsError(ParseError): ...
class RequiredOptionMissingError(ParseError): ...


class CommandWarning(Warning):
    """
    base of every treeargs warning; same shape as CommandException.
    """

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(*(() if message is Unset else (message,)))
        self.message = message
        self.options = MappingProxyType(options)

    def __getattr__(self, name):
        try:
            return self.__dict__["options"][name]
        except KeyError:
            raise AttributeError(name) from None

    def __rich__(self):
        return _render(self, {
            "prog-name": "bold #E6E6F0",
            "code": "bold #FFB400",  # amber fault code for warnings
            "warning-title": "bold #FFC2E0",
            "warning-message": "#D6D6DE",
            "hint-arrow": "#B8EFAF dim",
            "hint": "italic #B8EFAF",
        }, "warning")

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class MismatchedValueWarning(CommandWarning): ...


def report(fault, /, *, colorful=False, fancy=False, console=None):
    """
    print a fault (error or warning) on a rich console (stderr by default).

    colorful/fancy override whatever the fault was created with; a custom
    console can be passed to capture the output.
    """
    if not isinstance(fault, CommandException | CommandWarning):
        raise TypeError("report() argument must be a treeargs fault")
    if console is None:
        console = Console(stderr=True)
    console.print(fault.__replace__(colorful=colorful, fancy=fancy))


__all__ = (
    "FaultCode",
    "CommandException",
    "MalformedGrammarError",
    "ParseError",
    "MissingValueError",
    "UnknownTokenError",
    "TrailingArgumentsError",
    "RequiredOptionMissingError",
    "CommandWarning",
    "MismatchedValueWarning",
    "report",
)

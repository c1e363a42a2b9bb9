"""
Treeargs grammar model: options, commands and structural validation.

Overview
- Option: a named slot with a typed default (its Value variant fixes the kind
  the option accepts), help text, a usage placeholder and a presence.
- Command: a named node with help text, ordered options and ordered children.
  A tree of commands is the whole CLI surface of an application; the root is
  the program itself.
- validate(command): enforce the structural invariants of a tree.

Grammar
    CLI        := Command
    Command    := NAME Option* SubCommand?
    Option     := NAME [Value]
    SubCommand := Command

Declaration
    >>> tree = Command("contour", options=[
    ...     Option("debug", ""),
    ... ], children=[
    ...     Command("capture", options=[
    ...         Option("logical", False),
    ...         Option("timeout", 1.0),
    ...         Option("output", "", presence=Presence.REQUIRED),
    ...     ]),
    ... ])

Shape checks vs. structural invariants
- Wrong Python types or empty names are rejected on construction with
  TypeError/ValueError.
- Structural rules (reserved characters, duplicate names in one scope) are
  checked by validate(), which raises MalformedGrammarError naming the dotted
  path of the offending node. parse() always validates first.

Objects are read-only once built and can be shared across threads.
"""
import enum
import functools
import operator
import re
from collections.abc import Iterable

from rich.text import Text

from .faults import FaultCode, MalformedGrammarError
from .utils import *
from .values import Tag, Value

SEPARATOR = "."
PREFIX = "-"

_RESERVED = re.compile(r"[.=\s]")


class Presence(enum.Enum):
    OPTIONAL = "optional"
    REQUIRED = "required"


class GrammarType(type):
    """
    Metaclass giving grammar nodes stable, introspectable shapes.

    Responsibilities
    - Expose every name listed in __introspectable__ as a read-only property
      backed by "_{name}" (via mirror()).
    - Provide __repr__/__rich_repr__ built from __displayable__ (or
      __introspectable__ when unset) for diagnostics and rich pretty-printing.
    - Derive a human-friendly __typename__ used in error messages.
    """
    __introspectable__ = ()
    __displayable__ = Unset

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
        )

        def __repr__(self):
            return f"{type(self).__typename__}({', '.join(map(functools.partial(operator.mod, '%s=%r'), self.__rich_repr__()))})"
        self.__repr__ = __repr__

        def __rich_repr__(self):
            for name in coalesce(type(self).__displayable__, type(self).__introspectable__):
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


def _process_name(cls, name):
    if not isinstance(name, str):
        raise TypeError(f"{cls.__typename__} 'name' must be a string")
    elif not name:
        raise ValueError(f"{cls.__typename__} 'name' cannot be empty")
    return name


def _process_text(cls, label, object):
    """
    help and placeholder texts: str | Text | Unset; Unset collapses to "".
    """
    if not isinstance(object, str | Text | Unset):
        raise TypeError(f"{cls.__typename__} {label!r} must be a string")
    return coalesce(object, "")


class Option(metaclass=GrammarType):
    """
    A named, typed option declared on a command.

    Parameters
    - name: str — matched verbatim against tokens (no dashes, no '=').
    - default: Value | bool | int | float | str — the value prefilled before
      parsing; its variant fixes the kind of the option for good. Plain Python
      literals are promoted with Value.of() (use UInt(...) for unsigned).
    - help: str | Text — one-line help text.
    - placeholder: str — label shown after the name in usage text; defaults
      to the kind label (INT, UINT, FLOAT, STRING).
    - presence: Presence — REQUIRED options must appear explicitly.
    """
    __introspectable__ = (
        "name",
        "default",
        "help",
        "placeholder",
        "presence",
    )

    def __init__(self, name, default, /, help=Unset, placeholder=Unset, presence=Presence.OPTIONAL):
        self._name = _process_name(type(self), name)
        self._default = Value.of(default)
        self._help = _process_text(type(self), "help", help)
        self._placeholder = _process_text(type(self), "placeholder", placeholder)
        if not isinstance(presence, Presence):
            raise TypeError(f"{type(self).__typename__} 'presence' must be a presence")
        self._presence = presence

    @property
    def tag(self):
        return self._default.tag

    @property
    def required(self):
        return self._presence is Presence.REQUIRED

    @property
    def label(self):
        """
        usage placeholder: explicit placeholder, else the kind label (None for booleans).
        """
        if self.tag is Tag.BOOL:
            return None
        return self._placeholder or self.tag.label


class Command(metaclass=GrammarType):
    """
    A named node of the command tree.

    Parameters
    - name: str — the token that selects this command (ignored for the root).
    - help: str | Text — one-line help text.
    - options: Iterable[Option] — in declaration order.
    - children: Iterable[Command] — sub-commands, in declaration order; the
      first child whose name matches the next token wins.
    """
    __introspectable__ = (
        "name",
        "help",
        "options",
        "children",
    )

    def __init__(self, name, /, help=Unset, options=(), children=()):
        self._name = _process_name(type(self), name)
        self._help = _process_text(type(self), "help", help)

        for label, object, kind in (("options", options, Option), ("children", children, Command)):
            if not isinstance(object, Iterable) or isinstance(object, str | Text):
                raise TypeError(f"{type(self).__typename__} {label!r} must be an iterable of {kind.__typename__}s")
            object = tuple(object)
            if not all(isinstance(item, kind) for item in object):
                raise TypeError(f"{type(self).__typename__} {label!r} must be an iterable of {kind.__typename__}s")
            setattr(self, "_" + label, object)

    @property
    def leaf(self):
        return not self._children

    def option(self, name, /):
        """
        first option declared directly on this command with the given name, or None.
        """
        return next((option for option in self._options if option.name == name), None)

    def child(self, name, /):
        """
        first child command with the given name, or None.
        """
        return next((child for child in self._children if child.name == name), None)

    def walk(self, prefix=Unset, /):
        """
        yield (dotted path, command) for this command and every descendant, depth-first.
        """
        path = self._name if prefix is Unset else prefix + SEPARATOR + self._name
        yield path, self
        for child in self._children:
            yield from child.walk(path)

    def find(self, path, /):
        """
        resolve a dotted command path (starting with this command's name).

        raises KeyError when no command lives at that path.
        """
        if not isinstance(path, str):
            raise TypeError(f"{type(self).__typename__} path must be a string")
        head, *tail = path.split(SEPARATOR)
        if head != self._name:
            raise KeyError(path)
        command = self
        for name in tail:
            if (command := command.child(name)) is None:
                raise KeyError(path)
        return command


def _check_name(kind, name, path):
    if name.startswith(PREFIX):
        raise MalformedGrammarError(
            f"{kind} name {name!r} at {path!r} starts with {PREFIX!r}",
            title="malformed grammar",
            code=FaultCode.MALFORMED_GRAMMAR,
            path=path,
            hint="declare names without leading dashes; tokens are matched verbatim",
        )
    if match := _RESERVED.search(name):
        raise MalformedGrammarError(
            f"{kind} name {name!r} at {path!r} contains reserved character {match.group()!r}",
            title="malformed grammar",
            code=FaultCode.MALFORMED_GRAMMAR,
            path=path,
            hint="names cannot contain '.', '=' or whitespace",
        )


def _check_unique(kind, names, path):
    seen = set()
    for name in names:
        if name in seen:
            raise MalformedGrammarError(
                f"duplicated {kind} name {name!r} at {path!r}",
                title="malformed grammar",
                code=FaultCode.MALFORMED_GRAMMAR,
                path=path,
                hint=f"every {kind} name must be unique within its command",
            )
        seen.add(name)


def validate(command, /):
    """
    check the structural invariants of a command tree.

    rules (per command, recursively)
    - command and option names must not start with '-' and must not contain
      '.', '=' or whitespace;
    - option names are unique within the command;
    - child command names are unique within the command.

    an option may share its name with a sibling child command: options are
    matched first, children only once option consumption stops.

    raises MalformedGrammarError on the first violation found.
    """
    if not isinstance(command, Command):
        raise TypeError("validate() argument must be a command")

    for path, node in command.walk():
        _check_name("command", node.name, path)
        for option in node.options:
            _check_name("option", option.name, path + SEPARATOR + option.name)
        _check_unique("option", (option.name for option in node.options), path)
        _check_unique("command", (child.name for child in node.children), path)


__all__ = (
    "Presence",
    "Option",
    "Command",
    "validate",
    "SEPARATOR",
)

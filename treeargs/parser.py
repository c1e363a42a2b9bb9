"""
Treeargs recursive-descent parser.

parse(command, tokens) walks a flat token sequence against a command tree and
returns a FlagStore mapping every fully-qualified option path to its Value.

Walk (per command level)
1. consume the command-name token (the root's name is never checked, so a
   process's argv[0] can be passed as-is);
2. prefill every option declared on the command with its default;
3. while the next token names an option of this command, consume it and its
   value (booleans only take a following token when it is a boolean literal);
   the last occurrence of a repeated option wins;
4. check that every REQUIRED option of the command was given explicitly;
5. if the next token names a child command, descend into it (first match in
   declaration order); at most one child is entered per level.

Acceptance
- The parse succeeds only when every token was consumed.

Failures (raised immediately, no partial result)
- MissingValueError: a non-boolean option is the last token.
- RequiredOptionMissingError: a REQUIRED option was never given explicitly.
- UnknownTokenError: a leftover token at a command that has children but
  names neither one of its options nor one of its children.
- TrailingArgumentsError: tokens remain after a command without children
  finished its options.
- MalformedGrammarError: the command tree itself is invalid (checked before
  any token is read).

The parser keeps no state between calls; a command tree can be shared by
concurrent parses.
"""
import difflib
import logging
import sys
import warnings
from contextlib import contextmanager

from .faults import *
from .grammar import SEPARATOR, Command, validate
from .store import FlagStore
from .utils import *
from .values import Bool, Tag, coerce, is_boolean, is_true

logger = logging.getLogger(__name__)


class ParseContext:
    """
    per-call parser state: token cursor, ancestor stack and accumulating values.

    - tokens: the immutable token tuple.
    - position: index of the next unconsumed token.
    - ancestors: commands currently being parsed, innermost last.
    - values: dotted path → Value (prefilled defaults and explicit values).
    - explicit: paths written by an explicit occurrence in the input.
    - reached: (command, dotted path) of the innermost command entered so far.
    """
    __slots__ = ("tokens", "position", "ancestors", "values", "explicit", "reached")

    def __init__(self, tokens):
        self.tokens = tokens
        self.position = 0
        self.ancestors = []
        self.values = {}
        self.explicit = set()
        self.reached = (Unset, Unset)

    @property
    def command(self):
        return self.ancestors[-1]

    @property
    def prefix(self):
        return SEPARATOR.join(command.name for command in self.ancestors)

    @property
    def index(self):
        """
        1-based position of the next unconsumed token.
        """
        return self.position + 1

    def peek(self):
        if self.position >= len(self.tokens):
            return Unset
        return self.tokens[self.position]

    def consume(self):
        if (token := self.peek()) is Unset:
            return Unset
        logger.debug("consuming token %r at %s position", token, ordinal(self.index))
        self.position += 1
        return token

    @contextmanager
    def descend(self, command):
        self.ancestors.append(command)
        self.reached = (command, self.prefix)
        try:
            yield self
        finally:
            self.ancestors.pop()

    def fault(self, exception, message, /, **options):
        """
        build a parse fault carrying the innermost-command context.
        """
        command, path = self.reached
        return exception(
            message,
            command=coalesce(command),
            path=coalesce(path),
            **options,
        )


def _parse_value(option, token, index, context):
    if option.tag is Tag.BOOL:
        # a bare boolean option means true; only a boolean literal is taken as its value
        following = context.peek()
        if following is Unset or not is_boolean(following):
            return Bool(True)
        context.consume()
        return Bool(is_true(following))

    if (following := context.consume()) is Unset:
        raise context.fault(
            MissingValueError,
            "option %r at %s position requires a value" % (token, ordinal(index)),
            title="missing value",
            code=FaultCode.MISSING_VALUE,
            token=token,
            index=index,
            option=option,
            hint="provide a value after %s (e.g., %s %s)" % (token, token, option.label),
        )

    value = coerce(following, option.tag)
    if value.tag is not option.tag:
        warnings.warn(context.fault(
            MismatchedValueWarning,
            "value %r of option %r at %s position is not %s" % (
                following, token, ordinal(index + 1), option.tag.label.lower()
            ),
            title="mismatched value",
            code=FaultCode.MISMATCHED_VALUE,
            token=following,
            index=index + 1,
            option=option,
            hint="the value was kept as %s" % value.tag.value,
        ), stacklevel=2)
    return value


def _parse_options(command, context):
    prefix = context.prefix

    for option in command.options:
        context.values[prefix + SEPARATOR + option.name] = option.default

    while (token := context.peek()) is not Unset and (option := command.option(token)) is not None:
        index = context.index
        context.consume()
        path = prefix + SEPARATOR + option.name
        context.values[path] = value = _parse_value(option, token, index, context)
        context.explicit.add(path)
        logger.debug("option %s set to %r", path, value)


def _check_required(command, context):
    prefix = context.prefix
    for option in command.options:
        if option.required and (path := prefix + SEPARATOR + option.name) not in context.explicit:
            raise context.fault(
                RequiredOptionMissingError,
                "required option %r of %r is missing before %s position" % (
                    option.name, prefix, ordinal(context.index)
                ),
                title="required option missing",
                code=FaultCode.REQUIRED_OPTION_MISSING,
                token=context.peek(),
                index=context.index,
                option=option,
                hint="add '%s%s' after %r" % (
                    option.name, "" if option.label is None else " " + option.label, command.name
                ),
            )


def _parse_command(command, context):
    # the name was matched by the caller (or is argv[0] for the root)
    context.consume()

    with context.descend(command):
        logger.debug("entering command %s", context.prefix)
        _parse_options(command, context)
        _check_required(command, context)

        if (token := context.peek()) is Unset:
            return

        if (child := command.child(token)) is not None:
            _parse_command(child, context)
        elif command.children:
            names = [child.name for child in command.children]
            suggestions = difflib.get_close_matches(token, names + [option.name for option in command.options], 5)
            try:
                hint = "did you mean %r? expected one of: %s" % (suggestions[0], ", ".join(names))
            except IndexError:
                hint = "expected an option of %r or one of: %s" % (command.name, ", ".join(names))
            raise context.fault(
                UnknownTokenError,
                "unknown token %r at %s position" % (token, ordinal(context.index)),
                title="unknown token",
                code=FaultCode.UNKNOWN_TOKEN,
                token=token,
                index=context.index,
                suggestions=suggestions,
                hint=hint,
            )


def parse(command, tokens, /):
    """
    parse a token sequence against a command tree.

    parameters
    - command: Command — the root of the grammar.
    - tokens: Iterable[str] — the full argument vector, program name first.

    returns a FlagStore; raises a ParseError (or MalformedGrammarError) on failure.
    """
    if not isinstance(command, Command):
        raise TypeError("parse() first argument must be a command")
    validate(command)

    tokens = tuple(tokens)
    if not all(isinstance(token, str) for token in tokens):
        raise TypeError("parse() second argument must be an iterable of strings")

    context = ParseContext(tokens)
    logger.debug("parsing %d tokens against %r", len(tokens), command.name)
    _parse_command(command, context)

    if (token := context.peek()) is not Unset:
        _, path = context.reached
        raise context.fault(
            TrailingArgumentsError,
            "unexpected trailing token %r at %s position" % (token, ordinal(context.index)),
            title="trailing arguments",
            code=FaultCode.TRAILING_ARGUMENTS,
            token=token,
            index=context.index,
            trailing=tokens[context.position:],
            hint="remove %s or check the usage of %r" % (
                "it" if context.position + 1 == len(tokens) else "the extra tokens", path
            ),
        )

    return FlagStore(context.values)


def parse_argv(command, argv=None, /):
    """
    parse a process argument vector (sys.argv when omitted).

    argv[0], the program path, is treated like any other token: it stands for
    the root command's name and is not compared against it.
    """
    return parse(command, list(sys.argv if argv is None else argv))


__all__ = (
    "ParseContext",
    "parse",
    "parse_argv",
)

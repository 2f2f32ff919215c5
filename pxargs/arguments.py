r"""
pxargs argument descriptors.

Overview
- Descriptors
  • Flag: presence-only switch (e.g., -v/--verbose); becomes True when its tag appears.
  • Value[_T]: single typed value (e.g., -c 42) with default, requiredness, validator
    and optional write-through binding.
  • MultiValue[_T]: ordered list of typed values; every occurrence of the tag
    contributes one element, in token order.

- Capability contract (shared by all descriptors)
  • parse(tokens, index): inspect tokens[index:], consume what matches, return the
    new cursor position (unchanged when nothing matches).
  • is_valid(): pure predicate over the current state.
  • print_help(sink): write a single human-readable help line.

- Configuration
  Descriptors are configured through fluent set_* methods that return the descriptor
  itself, and read through read-only properties:

    >>> count = Value("count", int).set_tag("-c").set_long_tag("--count").set_default(0)
    >>> count.tags
    ('-c', '--count')

Binding
- bind(target, attribute) writes every resolved value with setattr(target, attribute, value).
- bind(callable) calls the target with every resolved value.
- MultiValue additionally accepts a mutable sequence, whose contents are replaced.
- Value/MultiValue copy their default into the bound storage as soon as both exist.

Conversion
- str converters take the token verbatim.
- bool uses a strict converter (1/0/true/false/yes/no/on/off, case-insensitive).
- int and float accept plain numeric literals only (no "_" separators).
- Any other callable is applied to the token. A conversion must consume the whole
  token: surrounding whitespace is rejected before the converter runs. ValueError,
  TypeError and ArithmeticError become a ConversionError that names the descriptor,
  the token and its position.

Public API
- Classes: Argument, Flag, Value, MultiValue
- Functions: accept
"""
import builtins
import functools
import operator
import re
from collections import defaultdict
from collections.abc import Iterable, MutableSequence

from rich.console import Console
from rich.text import Text

from .faults import ConfigurationError, ConversionError, MissingValueError, FaultCode
from .utils import *


def accept(value, /):
    """
    Default validator: every value is valid.
    """
    return True


def _boolean(token, /):
    match token.lower():
        case "1" | "true" | "yes" | "on":
            return True
        case "0" | "false" | "no" | "off":
            return False
        case _:
            raise ValueError(f"invalid boolean literal: {token!r}")


# Literal forms accepted for the builtin numeric types; their constructors also
# take "_" digit separators, which a command line token never carries.
_numerals = (
    (int, re.compile(r"[+-]?\d+")),
    (float, re.compile(r"[+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf|infinity|nan)", re.IGNORECASE)),
)


def _numeral(type, literal, token, /):
    if not literal.fullmatch(token):
        raise ValueError(f"invalid {type.__name__} literal: {token!r}")
    return type(token)


def _converter(type, /):
    # Identity checks only: converters are not required to be hashable.
    if type is bool:
        return _boolean
    for numeral, literal in _numerals:
        if type is numeral:
            return functools.partial(_numeral, numeral, literal)
    return type


def _typename(type, /):
    return getattr(type, "__name__", None) or repr(type)


class ArgumentType(type):
    """
    Metaclass providing introspection and representation for descriptors.

    Responsibilities
    - Expose every name listed in __introspectable__ as a read-only property mirroring
      the private "_{name}" attribute (see mirror()).
      A name the class body defines itself is left as written.
    - Provide stable __repr__/__rich_repr__ implementations for diagnostics.
    - Derive __typename__ from the class name ("MultiValue" -> "multi-value"), used in
      messages and help output.
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
                name: mirror(name) for name in namespace.get("__introspectable__", ()) if name not in namespace
            },
            **options,
        )

        @rename("__repr__")
        def __repr__(self):
            """
            Example
            - value(name='count', tag='-c', long_tag='--count', ...)
            """
            return f"{type(self).__typename__}({
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
            })"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for name in coalesce(type(self).__displayable__, type(self).__introspectable__):
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


def _sanitize_name(cls, name, /):
    if not isinstance(name, str):
        raise TypeError(f"{cls.__typename__} name must be a string")
    elif not (name := name.strip()):
        raise ValueError(f"{cls.__typename__} name cannot be empty")
    return name


def _sanitize_tag(cls, tag, /):
    # Tags are compared verbatim against tokens; an empty tag never matches.
    if not isinstance(tag, str):
        raise TypeError(f"{cls.__typename__} tag must be a string")
    return tag


def _sanitize_callable(cls, object, label, /):
    if not callable(object):
        raise TypeError(f"{cls.__typename__} {label!r} must be callable")
    return object


class Argument(metaclass=ArgumentType):
    """
    Shared state and capability contract of every descriptor.

    State
    - name: display name used in diagnostics and help (non-empty).
    - tag / long_tag: literal tokens identifying the descriptor ("-c", "--count").
      Both default to "" which never matches.
    - descr: free-text description for help.
    """

    __introspectable__ = (
        "name",
        "tag",
        "long_tag",
        "descr",
    )

    __styles__ = {
        "argument-name": "bold #FFFFFF",
        "tag": "bold #00E6FF",
        "metavar": "bold #FFD600",
        "argument-description": "#9CA3AF",
        "required": "bold #EF4444",
        "default": "italic #22C55E",
    }

    def __init__(self, name, /):
        self._name = _sanitize_name(type(self), name)
        self._tag = ""
        self._long_tag = ""
        self._descr = ""
        self._writer = Unset

    @property
    def tags(self):
        """
        Non-empty tags of this descriptor, short form first.
        """
        return tuple(tag for tag in (self._tag, self._long_tag) if tag)

    def set_name(self, name, /):
        self._name = _sanitize_name(type(self), name)
        return self

    def set_tag(self, tag, /):
        self._tag = _sanitize_tag(type(self), tag)
        return self

    def set_long_tag(self, tag, /):
        self._long_tag = _sanitize_tag(type(self), tag)
        return self

    def set_description(self, descr, /):
        if not isinstance(descr, str):
            raise TypeError(f"{type(self).__typename__} description must be a string")
        self._descr = descr.strip()
        return self

    def bind(self, target, attribute=Unset, /):
        """
        Mirror every resolved value into externally-owned storage.

        - bind(target, "attribute"): setattr(target, "attribute", value)
        - bind(callable): callable(value)

        The descriptor never owns the target; binding again replaces the previous target.
        """
        self._writer = self._bindable(target, attribute)
        return self

    def _bindable(self, target, attribute, /):
        if attribute is not Unset:
            if not isinstance(attribute, str):
                raise TypeError(f"{type(self).__typename__} bound attribute must be a string")
            return functools.partial(setattr, target, attribute)
        if callable(target):
            return target
        raise TypeError(f"{type(self).__typename__} cannot bind to {type(target).__name__!r} without an attribute")

    def _write(self, value, /):
        if self._writer is not Unset:
            self._writer(value)

    def _matches(self, token, /):
        return bool(token) and token in self.tags

    def parse(self, tokens, index, /):
        """
        Consume the tokens at tokens[index:] that belong to this descriptor.

        Returns the position right after the consumed tokens, or index itself when
        the token at index does not match.
        """
        raise NotImplementedError

    def is_valid(self):
        raise NotImplementedError

    def _metavar(self, styles, /):
        return Text("")

    def _notes(self, styles, /):
        return ()

    def __rich__(self):
        styles = defaultdict(str, type(self).__styles__ | getattr(__import__("__main__"), "__styles__", {}))

        padding = 2
        indent = 15

        line = Text(" " * padding)
        line.append(self._name, styles["argument-name"])
        line.append(" " * max(1, indent - len(line)))

        line.append(Text(" | ").join(Text(tag, styles["tag"]) for tag in self.tags))
        if metavar := self._metavar(styles):
            line.append(" " if self.tags else "").append(metavar)

        if self._descr:
            line.append("  ").append(self._descr, styles["argument-description"])

        for note in self._notes(styles):
            line.append(" ").append(note)

        return line

    def print_help(self, sink=Unset, /):
        """
        Write this descriptor's help line to a rich Console or a text stream
        (standard output when omitted).
        """
        console = sink if isinstance(sink, Console) else Console(file=coalesce(sink))
        console.print(self, soft_wrap=True, highlight=False)


class Flag(Argument):
    """
    Presence-only switch.

    The value starts as False and becomes True once one of the tags is seen. A flag
    consumes exactly its own token and never a following one. Flags are always valid.
    """

    __introspectable__ = (
        "name",
        "tag",
        "long_tag",
        "descr",
        "value",
    )

    def __init__(self, name, /):
        super().__init__(name)
        self._value = False

    def has_value(self):
        return True

    def get_value(self):
        return self._value

    def parse(self, tokens, index, /):
        if len(tokens) - index >= 1 and self._matches(tokens[index]):
            self._value = True
            self._write(True)
            return index + 1
        return index

    def is_valid(self):
        return True


class _Parametric(Argument):
    """
    Shared machinery of value-bearing descriptors: converter, default, requiredness,
    validator, and the tag + value matching rule.
    """

    def __init__(self, name, type=str, /):
        super().__init__(name)
        self._type = _sanitize_callable(builtins.type(self), type, "type")
        self._converter = _converter(self._type)
        self._default = Unset
        self._required = False
        self._validator = accept

    def set_default(self, default, /):
        if self._required:
            raise ConfigurationError(
                f"{type(self).__typename__} {self._name!r} is required and cannot have a default",
                argument=self._name,
                code=FaultCode.CONFLICTING_DEFAULT,
                hint="drop set_required(True) or the default",
            )
        self._default = self._sanitize_default(default)
        self._write(self._current())
        return self

    def set_required(self, required=True, /):
        if required and self._default is not Unset:
            raise ConfigurationError(
                f"{type(self).__typename__} {self._name!r} has a default and cannot be required",
                argument=self._name,
                code=FaultCode.CONFLICTING_REQUIRED,
                hint="drop the default or set_required(True)",
            )
        self._required = bool(required)
        return self

    def set_validator(self, validator, /):
        self._validator = _sanitize_callable(type(self), validator, "validator")
        return self

    def bind(self, target, attribute=Unset, /):
        super().bind(target, attribute)
        if self._resolved() or self._default is not Unset:
            self._write(self._current())
        return self

    def has_value(self):
        """
        True when get_value() would return instead of raising.
        """
        return self._resolved() or self._default is not Unset

    def get_value(self):
        if not self.has_value():
            raise MissingValueError(
                f"{type(self).__typename__} {self._name!r} does not have a value",
                argument=self._name,
                hint=f"pass {' or '.join(self.tags) or 'its tag'} or give it a default",
            )
        return self._current()

    def _sanitize_default(self, default, /):
        return default

    def _convert(self, token, position, /):
        if self._type is str:
            return token
        try:
            if token != token.strip():
                raise ValueError(f"surrounding whitespace in {token!r}")
            return self._converter(token)
        except (ValueError, TypeError, ArithmeticError) as error:
            raise ConversionError(
                f"cannot convert {token!r} from {ordinal(position + 1)} position to {_typename(self._type)}",
                argument=self._name,
                token=token,
                position=position,
                hint=f"{type(self).__typename__} {self._name!r} expects a {_typename(self._type)}",
            ) from error

    def parse(self, tokens, index, /):
        if len(tokens) - index > 1 and self._matches(tokens[index]):
            self._record(self._convert(tokens[index + 1], index + 1))
            self._write(self._current())
            return index + 2
        return index

    def _metavar(self, styles, /):
        return Text(f"<{_typename(self._type)}>", styles["metavar"])

    def _notes(self, styles, /):
        if self._required:
            yield Text("(required)", styles["required"])
        if self._default is not Unset:
            yield Text(f"[default: {self._default!r}]", styles["default"])


class Value[_T](_Parametric):
    """
    Single typed value.

    Resolution order for get_value(): the parsed value, then the default, otherwise
    MissingValueError. When the tag appears several times the last occurrence wins.

    Validity: the validator applied to the parsed value, else to the default, else
    "not required". Validity is advisory; nothing is raised for an invalid value.
    """

    __introspectable__ = (
        "name",
        "tag",
        "long_tag",
        "descr",
        "type",
        "default",
        "required",
        "validator",
    )

    def __init__(self, name, type=str, /):
        super().__init__(name, type)
        self._value = Unset

    @property
    def default(self):
        """
        The default exactly as given, or Unset when there is none (None is a valid default).
        """
        return self._default

    def _resolved(self):
        return self._value is not Unset

    def _current(self):
        return coalesce(self._value, self._default)

    def _record(self, value, /):
        self._value = value

    def is_valid(self):
        if self._value is not Unset:
            return bool(self._validator(self._value))
        elif self._default is not Unset:
            return bool(self._validator(self._default))
        return not self._required


class MultiValue[_T](_Parametric):
    """
    Ordered sequence of typed values.

    Every occurrence of the tag appends one converted element, preserving the order
    of appearance in the token stream. get_value() returns a new list: the parsed
    elements when there is at least one, else a copy of the default, otherwise
    MissingValueError.

    Validity: every parsed element passes the validator, else every default element
    passes, else "not required".
    """

    __introspectable__ = (
        "name",
        "tag",
        "long_tag",
        "descr",
        "type",
        "default",
        "required",
        "validator",
        "values",
    )

    def __init__(self, name, type=str, /):
        super().__init__(name, type)
        self._values = []

    @property
    def default(self):
        # A fresh list per read; Unset when no default was given.
        return self._default if self._default is Unset else list(self._default)

    def _sanitize_default(self, default, /):
        if isinstance(default, str | bytes) or not isinstance(default, Iterable):
            raise TypeError(f"{type(self).__typename__} default must be a non-string iterable")
        return list(default)

    def _bindable(self, target, attribute, /):
        if attribute is Unset and isinstance(target, MutableSequence):
            return functools.partial(operator.setitem, target, slice(None))
        return super()._bindable(target, attribute)

    def _resolved(self):
        return bool(self._values)

    def _current(self):
        return list(self._values if self._values else self._default)

    def _record(self, value, /):
        self._values.append(value)

    def _metavar(self, styles, /):
        return super()._metavar(styles).append(" ...")

    def is_valid(self):
        if self._values:
            return all(map(self._validator, self._values))
        elif self._default is not Unset:
            return all(map(self._validator, self._default))
        return not self._required


__all__ = (
    # Classes (descriptors)
    "Argument",
    "Flag",
    "Value",
    "MultiValue",

    # Functions
    "accept",
)


# Not part of the public API.
del ArgumentType

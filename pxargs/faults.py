"""
pxargs faults (errors and warnings) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every user-facing issue
  (errors and warnings), grouped by domain so logs and searches stay predictable.
- ArgumentFault / ArgumentWarning: base types that carry message + options and
  know how to render themselves through rich.
- trigger(): central entry point to surface any fault (raise, warn, or print and exit
  when the command line runs in shell mode).
- getdoc(): optional description lookup for a code from the host application.

Error kinds
- ConfigurationError: a descriptor was configured into an impossible state
  (required + default) or the command line was parsed twice.
- ConversionError: a matched value token could not be converted to the declared type.
- MissingValueError: a value was read from a descriptor that has neither a parsed
  value nor a default.

Validity failures (is_valid() == False) are never faults: they are advisory state
that the caller inspects after parsing.
"""
import copy
import os.path
import sys
import warnings
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset, coalesce

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes used across the engine (stable identifiers).

    grouping (by high-level domain)
    - configuration (2110x)
      • INVALID_CONFIGURATION, CONFLICTING_DEFAULT, CONFLICTING_REQUIRED, ALREADY_PARSED
    - parsing (2111x)
      • UNCONVERTIBLE_VALUE
    - resolution (2112x)
      • MISSING_VALUE
    - warnings (2211x)
      • UNTAGGED_ARGUMENT, DUPLICATED_TAG

    normalize() allows host remapping to custom labels while keeping codes stable.
    """
    # --- configuration errors (21xxx) ---
    INVALID_CONFIGURATION       = 21100
    CONFLICTING_DEFAULT         = 21101
    CONFLICTING_REQUIRED        = 21102
    ALREADY_PARSED              = 21103

    # --- parsing errors (21xxx) ---
    UNCONVERTIBLE_VALUE         = 21111

    # --- resolution errors (21xxx) ---
    MISSING_VALUE               = 21121

    # --- warnings (22xxx) ---
    UNTAGGED_ARGUMENT           = 22111
    DUPLICATED_TAG              = 22112

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


def _options(cls, options, /):
    # Fault defaults first, then whatever the raiser or trigger() supplied.
    return MappingProxyType({
        "code": cls.__code__,
        "title": cls.__title__,
        "hint": "",
        "prog": Unset,
        "shell": False,
        "fancy": False,
        "colorful": True,
    } | options)


def _render(self, styles, title):
    main = __import__("__main__")

    styles = defaultdict(str, styles | getattr(main, "__styles__", {}))

    def styler(style):
        return styles[style] if self.options["colorful"] else ""

    def text(fragment, style=""):
        if not fragment:
            return Text("")
        if not self.options["colorful"]:
            return Text(str(fragment))
        if isinstance(fragment, Text):
            return fragment
        return Text(str(fragment), style)

    prog = coalesce(self.options["prog"], os.path.basename(sys.argv[0]) or "pxargs")
    prog = text(getattr(main, "__prog__", prog), styler("prog-name"))

    header = Text.assemble(
        "[ ",
        prog,
        " — ",
        text(self.options["code"].normalize(), styler("code")),
        " | ",
        text(self.options["title"].title(), styler(title)),
        " ]"
    )
    message = text(self.message, styler(title.replace("title", "message")))
    parts = [message]
    if self.options["hint"]:
        parts.append(Text.assemble(text(" → ", styler("hint-arrow")), text(self.options["hint"], styler("hint"))))

    if self.options["fancy"]:
        return Panel(Group(*parts), title=header, title_align="left")

    return Group(header, *parts)


class ArgumentFault(Exception):
    """
    base error for every fault raised by the engine.

    carries
    - message: one lowercase sentence, position-first where a token is involved.
    - options: read-only mapping with code, title, hint and any context the raiser
      attached (argument name, token, position, prog, shell/fancy/colorful).
    """
    __code__ = Unset
    __title__ = "argument fault"

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(coalesce(message, ""))
        self.message = message
        self.options = _options(type(self), options)

    @property
    def code(self):
        return self.options["code"]

    @property
    def argument(self):
        """name of the descriptor involved, if any."""
        return self.options.get("argument")

    def __rich__(self):
        return _render(self, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        }, "error-title")

    def __trigger__(self):
        if not self.options["shell"]:
            raise self
        console.print(self)
        sys.exit(1)

    def __replace__(self, *unused, **overrides):
        assert not unused, "unused arguments are not allowed"
        fault = type(self)(self.message, **{**self.options, **overrides})
        fault.__cause__ = self.__cause__
        return fault


class ConfigurationError(ArgumentFault):
    __code__ = FaultCode.INVALID_CONFIGURATION
    __title__ = "invalid configuration"


class ConversionError(ArgumentFault):
    __code__ = FaultCode.UNCONVERTIBLE_VALUE
    __title__ = "unconvertible value"

    @property
    def token(self):
        """the raw token that failed to convert."""
        return self.options.get("token")

    @property
    def position(self):
        """0-based index of the token in the parsed sequence."""
        return self.options.get("position")


class MissingValueError(ArgumentFault):
    __code__ = FaultCode.MISSING_VALUE
    __title__ = "missing value"


class ArgumentWarning(Warning):
    """
    base warning for engine diagnostics that do not stop parsing.
    """
    __code__ = Unset
    __title__ = "argument warning"

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        super().__init__(coalesce(message, ""))
        self.message = message
        self.options = _options(type(self), options)

    @property
    def code(self):
        return self.options["code"]

    def __rich__(self):
        return _render(self, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #FFB400",  # amber fault code for warnings
            "warning-title": "bold #FFC2E0",  # softer pinky title for warnings

            # body
            "warning-message": "#D6D6DE",  # slightly lighter gray body
            "hint-arrow": "#B8EFAF dim",  # softer green arrow
            "hint": "italic #B8EFAF",  # softer green hint text
        }, "warning-title")

    def __trigger__(self):
        if not self.options["shell"]:
            return warnings.warn(self, stacklevel=self.options.get("stacklevel", 4))
        console.print(self)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class UntaggedArgumentWarning(ArgumentWarning):
    __code__ = FaultCode.UNTAGGED_ARGUMENT
    __title__ = "untagged argument"


class DuplicatedTagWarning(ArgumentWarning):
    __code__ = FaultCode.DUPLICATED_TAG
    __title__ = "duplicated tag"


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see base classes).
    - options are merged into the fault via copy.replace(fault, **options).
    - errors are raised, warnings go through warnings.warn; in shell mode both are
      rendered on stderr via rich and errors end the process with status 1.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    copy.replace(fault, **options).__trigger__()


def getdoc(code, /):
    """
    optional documentation fetch for a fault code.

    the host application may expose a __docs__ mapping in __main__ where keys
    are FaultCode instances and values are short documentation strings.
    when not found, returns None.
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    try:
        return getattr(__import__("__main__"), "__docs__", {})[code]
    except KeyError:
        return None


__all__ = (
    "ArgumentFault",
    "ConfigurationError",
    "ConversionError",
    "MissingValueError",
    "ArgumentWarning",
    "UntaggedArgumentWarning",
    "DuplicatedTagWarning",
    "FaultCode",
    "trigger",
    "getdoc",
)

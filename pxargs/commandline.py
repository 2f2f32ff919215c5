"""
pxargs command line context: register descriptors, parse tokens, render help.

What this module provides
- CommandLine: owns an ordered collection of descriptors (Flag, Value, MultiValue).
  • add_flag / add_value / add_multi_value register a descriptor and return it for
    further fluent configuration.
  • parse(tokens) performs one left-to-right pass over the token sequence.
  • print_help() renders the program name followed by one line per descriptor.

Parsing model
- A single cursor walks the tokens. At each position every descriptor is offered the
  token, in registration order. The first descriptor that consumes tokens claims
  them and the cursor moves past what it consumed; when nobody claims the token the
  cursor moves on by one. Unclaimed tokens (including the program name, if the
  caller passes it) are ignored.
- Cost is O(tokens × descriptors). Nothing is backtracked and there is no re-parse.
- Tags shared by several descriptors are a caller error: the first registered
  descriptor always claims the token and a DuplicatedTagWarning is emitted.

Quick start
    from pxargs import CommandLine

    line = CommandLine("tool")
    count = line.add_value("count", int).set_tag("-c").set_long_tag("--count").set_default(0)
    verbose = line.add_flag("verbose").set_long_tag("--verbose")

    line.parse(["-c", "42", "--verbose"])
    assert count.get_value() == 42 and verbose.get_value()

Faults
- ConversionError propagates out of parse() untouched (the whole parse failed).
- With shell=True faults are rendered on stderr with rich and the process exits with
  status 1; warnings are rendered instead of going through the warnings module.
"""
import functools
import operator
import os.path
import sys
from collections import defaultdict

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .arguments import Flag, Value, MultiValue
from .faults import *
from .utils import *


class CommandLine:
    """
    Ordered, owning registry of descriptors plus the parse pass over a token sequence.

    Options
    - name: program name shown in help and fault headers (defaults to sys.argv[0]).
    - descr: optional one-line program description.
    - shell: render faults with rich and exit instead of raising them.
    - fancy: draw help and faults inside rich panels.
    - colorful: style output; when False help and faults are plain text.
    """

    __introspectable__ = (
        "name",
        "descr",
        "arguments",
        "parsed",
        "shell",
        "fancy",
        "colorful",
    )

    name = mirror("name")
    descr = mirror("descr")
    parsed = mirror("parsed")
    shell = mirror("shell")
    fancy = mirror("fancy")
    colorful = mirror("colorful")

    def __init__(self, name=Unset, descr=Unset, /, *, shell=False, fancy=False, colorful=True):
        name = coalesce(name, os.path.basename(sys.argv[0]) or "pxargs")
        if not isinstance(name, str):
            raise TypeError("command line name must be a string")
        elif not (name := name.strip()):
            raise ValueError("command line name cannot be empty")

        descr = coalesce(descr, "")
        if not isinstance(descr, str):
            raise TypeError("command line description must be a string")

        self._name = name
        self._descr = descr.strip()
        self._arguments = []
        self._parsed = False
        self._shell = bool(shell)
        self._fancy = bool(fancy)
        self._colorful = bool(colorful)

    @property
    def arguments(self):
        """
        Registered descriptors in registration order (read-only tuple).
        """
        return tuple(self._arguments)

    def __len__(self):
        return len(self._arguments)

    def __iter__(self):
        return iter(tuple(self._arguments))

    def __getitem__(self, key, /):
        """
        Look a descriptor up by registration index or by display name.
        """
        if isinstance(key, str):
            for argument in self._arguments:
                if argument.name == key:
                    return argument
            raise KeyError(key)
        return self._arguments[key]

    def __repr__(self):
        return f"command-line({
            ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
        })"

    def __rich_repr__(self):
        for name in type(self).__introspectable__:
            yield name, getattr(self, name)

    def _register(self, argument, /):
        self._arguments.append(argument)
        return argument

    def add_flag(self, name, /):
        """
        Register a presence-only switch and return it.
        """
        return self._register(Flag(name))

    def add_value(self, name, type=str, /):
        """
        Register a single typed value and return it. `type` converts the raw token.
        """
        return self._register(Value(name, type))

    def add_multi_value(self, name, type=str, /):
        """
        Register an accumulating typed value and return it.
        """
        return self._register(MultiValue(name, type))

    def trigger(self, fault, /, **options):
        """
        Surface a fault with this command line's display options attached.
        """
        trigger(fault, **options, prog=self._name, shell=self._shell, fancy=self._fancy, colorful=self._colorful)

    def _inspect(self):
        owners = defaultdict(list)
        for argument in self._arguments:
            if not argument.tags:
                self.trigger(UntaggedArgumentWarning(
                    f"{type(argument).__typename__} {argument.name!r} has no tag and cannot match any token",
                    argument=argument.name,
                    hint="call set_tag() or set_long_tag() before parsing",
                ), stacklevel=6)
            for tag in dict.fromkeys(argument.tags):
                owners[tag].append(argument)

        for tag, arguments in owners.items():
            if len(arguments) > 1:
                self.trigger(DuplicatedTagWarning(
                    f"tag {tag!r} is shared by {", ".join(repr(argument.name) for argument in arguments)}; "
                    f"{arguments[0].name!r} claims it",
                    argument=arguments[0].name,
                    tag=tag,
                    hint="give every argument its own tags",
                ), stacklevel=6)

    def parse(self, tokens=Unset, /):
        """
        Match the token sequence against every registered descriptor.

        tokens defaults to sys.argv[1:]. Returns self so calls can chain
        (line.parse(argv).is_valid()).

        Raises
        - ConversionError when a matched value token cannot be converted.
        - ConfigurationError when the command line was already parsed.
        """
        if self._parsed:
            self.trigger(ConfigurationError(
                f"command line {self._name!r} was already parsed",
                code=FaultCode.ALREADY_PARSED,
                hint="create a new command line to parse another token sequence",
            ))
            return self

        tokens = tuple(coalesce(tokens, sys.argv[1:]))
        for token in tokens:
            if not isinstance(token, str):
                raise TypeError(f"parse() tokens must be strings, not {type(token).__name__!r}")

        self._inspect()
        self._parsed = True

        index = 0
        try:
            while index < len(tokens):
                for argument in self._arguments:
                    if (position := argument.parse(tokens, index)) != index:
                        index = position
                        break
                else:
                    index += 1
        except ArgumentFault as fault:
            if not self._shell:
                raise
            self.trigger(fault)

        return self

    def is_valid(self):
        """
        True when every descriptor is valid. Advisory, like each descriptor's own check.
        """
        return all(argument.is_valid() for argument in self._arguments)

    def invalid(self):
        """
        Descriptors whose is_valid() is False, in registration order.
        """
        return tuple(argument for argument in self._arguments if not argument.is_valid())

    def print_help(self, file=Unset, /):
        """
        Write the program name (and description) followed by one line per descriptor.

        file may be a rich Console or a text stream; standard output when omitted.
        """
        if isinstance(file, Console):
            console = file
        else:
            console = Console(file=coalesce(file), color_system="auto" if self._colorful else None)

        styles = defaultdict(str, {
            "program-name": "bold #FF4D94",  # MAGENTA-PINK → brand pop
            "description-section": "italic #A3A3A3",  # Neutral gray
            "panel-title": "bold #FF4D94",
        } | getattr(__import__("__main__"), "__styles__", {}))

        header = Text(self._name, styles["program-name"])
        if self._descr:
            header.append(" - ").append(self._descr, styles["description-section"])

        if self._fancy:
            console.print(Panel(
                Group(*self._arguments),
                title=Text.assemble("[ ", header, " ]"),
                title_align="left",
            ))
            return

        console.print(header, soft_wrap=True, highlight=False)
        for argument in self._arguments:
            argument.print_help(console)


__all__ = (
    "CommandLine",
)

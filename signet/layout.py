"""
Signet layout: compiled signatures as backend-neutral registrations.

Overview
- Argument: one positional registration (display term, description, choices,
  default, variadic flag).
- Switch: one flag registration (display term, aliases, description, choices,
  default).
- Route: one invocable command name with its arguments and switches.
- argument(option, parent) / switch(option, parent): map one CommandOption.
- routes(parsed): map a whole ParsedCommand.

An argument-parsing backend only needs these three records to register a
command; signet itself never parses argv.

Mapping rules
- Argument term: the placeholder, else "<name>" when required, else "[name]".
  Variadic arguments end with "..." inside the brackets ("<files...>").
- Switch term: the aliases joined by ", ", followed by the placeholder, or by
  "<type>" when the option is required without a placeholder.
- "[key]" tokens of a description are replaced by the matching field of the
  parent sub-command, when one is given and the field is set. Routes pass the
  sub-command as parent to the shared entries they carry.
- A simple command yields one route. A namespace command yields its base route
  (skipped when hidden) then one "base:sub" route per non-shared sub-command,
  each carrying the shared sub-commands, the shared options and the nested
  options of that sub-command. Arguments repeating an argument name, or
  switches repeating a switch name, are dropped; the first one wins.
"""
import re

from .descriptors import CommandOption
from .signatures import ParsedCommand
from .utils import *


class Argument(metaclass=RecordType):
    """
    Positional registration.
    """

    __introspectable__ = (
        "term",
        "description",
        "choices",
        "default",
        "multiple",
    )

    def __new__(cls, term, /, description="", choices=(), default=None, multiple=False):
        if not isinstance(term, str):
            raise TypeError(f"{cls.__typename__} 'term' must be a string")
        self = super().__new__(cls)
        self._term = term
        self._description = description
        self._choices = tuple(choices)
        self._default = default
        self._multiple = bool(multiple)
        self.__sealed__ = True
        return self


class Switch(metaclass=RecordType):
    """
    Flag registration.
    """

    __introspectable__ = (
        "term",
        "flags",
        "description",
        "choices",
        "default",
    )

    def __new__(cls, term, flags, /, description="", choices=(), default=None):
        if not isinstance(term, str):
            raise TypeError(f"{cls.__typename__} 'term' must be a string")
        self = super().__new__(cls)
        self._term = term
        self._flags = tuple(flags)
        self._description = description
        self._choices = tuple(choices)
        self._default = default
        self.__sealed__ = True
        return self


class Route(metaclass=RecordType):
    """
    One invocable command name ("base" or "base:sub").
    """

    __introspectable__ = (
        "name",
        "description",
        "arguments",
        "switches",
        "hidden",
    )

    def __new__(cls, name, /, description="", arguments=(), switches=(), hidden=False):
        if not isinstance(name, str):
            raise TypeError(f"{cls.__typename__} 'name' must be a string")
        self = super().__new__(cls)
        self._name = name
        self._description = description
        self._arguments = tuple(arguments)
        self._switches = tuple(switches)
        self._hidden = bool(hidden)
        self.__sealed__ = True
        return self


def _substitute(description, parent, /):
    """
    Replace "[key]" tokens with the parent's fields.
    """
    if not description:
        return ""

    def replace(match):
        if match[1] in CommandOption.__displayable__:
            value = getattr(parent, match[1])
            if value is not None:
                return str(value)
        return match[0]

    return re.sub(r"\[(\w+)\]", replace, description) if parent is not None else description


def argument(option, /, parent=None):
    """
    Map a positional CommandOption to an Argument.
    """
    if not isinstance(option, CommandOption):
        raise TypeError("argument() first argument must be a command-option")
    if option.is_flag:
        raise ValueError(f"argument() cannot map flag {option.name!r}")

    if not (term := option.placeholder):
        term = f"<{option.name}>" if option.required else f"[{option.name}]"
    if option.multiple:
        term = term[:-1] + "..." + term[-1:]

    return Argument(
        term,
        _substitute(option.description, parent),
        option.choices,
        option.default,
        option.multiple,
    )


def switch(option, /, parent=None):
    """
    Map a flag CommandOption to a Switch.
    """
    if not isinstance(option, CommandOption):
        raise TypeError("switch() first argument must be a command-option")
    if not option.is_flag:
        raise ValueError(f"switch() cannot map positional {option.name!r}")

    term = ", ".join(option.flags)
    if option.placeholder:
        term += " " + option.placeholder
    elif option.required:
        # descriptor() never marks flags required; hand-built options may be.
        term += f" <{option.name.replace('-', '')}>"

    return Switch(
        term,
        option.flags,
        _substitute(option.description, parent),
        option.choices,
        option.default,
    )


def _route(name, description, entries, /, hidden=False):
    """
    Build one route from (option, parent) pairs.
    """
    seen = set()
    arguments = []
    switches = []
    for option, parent in entries:
        if (key := (option.is_flag, option.name)) in seen:
            continue
        seen.add(key)
        if option.is_flag:
            switches.append(switch(option, parent))
        else:
            arguments.append(argument(option, parent))
    return Route(name, description or "", arguments, switches, hidden)


def routes(parsed, /):
    """
    Map a ParsedCommand to its routes, in registration order.

    Returns
    - tuple[Route, ...]; see the module documentation for the rules.
    """
    if not isinstance(parsed, ParsedCommand):
        raise TypeError("routes() argument must be a parsed-command")

    if not parsed.namespace:
        return (_route(
            parsed.base,
            parsed.description,
            ((option, None) for option in parsed.options),
            hidden=parsed.hidden,
        ),)

    result = []
    if not parsed.hidden:
        result.append(_route(parsed.base, parsed.description, ((option, None) for option in parsed.options)))

    shared = [option for option in parsed.subcommands if option.shared]
    options = [option for option in parsed.options if option.shared]
    seen = set()

    for sub in parsed.subcommands:
        if sub.shared or sub.name in seen:
            continue
        seen.add(sub.name)
        result.append(_route(
            f"{parsed.base}:{sub.name}",
            sub.description,
            [
                *((option, sub) for option in (*shared, *options)),
                *((option, None) for option in sub.nested or ()),
            ],
        ))

    return tuple(result)


__all__ = (
    # Types
    "Argument",
    "Switch",
    "Route",

    # Functions
    "argument",
    "switch",
    "routes",
)

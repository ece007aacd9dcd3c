r"""
Signet descriptors: one block of a signature, fully normalized.

Overview
- CommandOption: immutable record for one positional argument or flag option.
- Default / DefaultKind: the tagged default value of a descriptor
  (string, number, boolean or list; None stands for “no default”).
- descriptor(content): compile the inner text of one block.
- descriptors(text): compile every top-level block of a text, in order.
- normalize_flag(token, required): normalize one flag alias and type its
  inline default.

Block grammar

    [#|^]<name>[?|*|?*][=<default>] : <description>[ : <choices>][ | {<nested>}...]

The compiler is a fixed pipeline; later steps consume what earlier steps
normalized:
1. markers      leading "^" → shared; leading "#" or ":#"/":^" → hidden.
2. split        first ":" separates the name from the rest.
3. nested       a "|" in the rest starts nested blocks, compiled recursively.
4. default      "name=value" sets a string default and a placeholder.
5. modifiers    "?*" optional+multiple, "*" multiple, "?" optional.
6. required     bare positional identifiers are required.
7. flags        "--" names split on "|" into normalized aliases.
8. choices      "text : a, b" or "text : [a, b]" becomes choices.
9. multiple     a scalar default of a multiple descriptor becomes a list.

Malformed blocks never raise; they degrade to simpler descriptors.

Quick example
    >>> option = descriptor("--o|out=txt : The output format : [txt, json]")
    >>> option.name, option.flags, option.default, option.choices
    ('out', ['-o', '--out'], 'txt', ['txt', 'json'])
"""
import enum
import re

from .blocks import blocks
from .utils import *

MARKERS = "#^"

# Characters allowed in a required positional name.
IDENTIFIER = re.compile(r"[A-Za-z0-9_|-]+")

# "text : v1, v2" or "text : [v1, v2]"; neither part may hold another ":".
CHOICES = re.compile(r"([^:]+?)\s*:\s*\[?([^:\[\]]+?)\]?\s*")

NUMBER = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


class DefaultKind(enum.Enum):
    """
    Tag of a Default value.
    """
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    LIST = "list"


class Default(metaclass=RecordType):
    """
    Tagged default value of a descriptor.

    The kind and the Python type of the value always agree:
    STRING → str, NUMBER → int | float, BOOLEAN → bool, LIST → list[str].
    Descriptors without a default carry None instead of a Default.
    """

    __introspectable__ = (
        "kind",
        "value",
    )

    def __new__(cls, kind, value, /):
        if not isinstance(kind, DefaultKind):
            raise TypeError(f"{cls.__typename__} 'kind' must be a DefaultKind")

        match kind:
            case DefaultKind.STRING if not isinstance(value, str):
                raise TypeError(f"{cls.__typename__} string values must be strings")
            case DefaultKind.NUMBER if isinstance(value, bool) or not isinstance(value, int | float):
                raise TypeError(f"{cls.__typename__} number values must be integers or floats")
            case DefaultKind.BOOLEAN if not isinstance(value, bool):
                raise TypeError(f"{cls.__typename__} boolean values must be booleans")
            case DefaultKind.LIST:
                if isinstance(value, str):
                    raise TypeError(f"{cls.__typename__} list values must be iterables of strings")
                value = tuple(value)
                if not all(isinstance(item, str) for item in value):
                    raise TypeError(f"{cls.__typename__} list values must be iterables of strings")

        self = super().__new__(cls)
        self._kind = kind
        self._value = value
        self.__sealed__ = True
        return self

    @classmethod
    def parse(cls, text, /, required=False):
        """
        Type a raw default the way inline flag defaults are typed.

        - "*"                         → LIST []
        - "true" / "false"            → BOOLEAN
        - "" when not required        → BOOLEAN False
        - numeric-looking ("5", "1.5", "-2e3"; "" when required) → NUMBER
        - anything else               → STRING
        """
        if not isinstance(text, str):
            raise TypeError(f"{cls.__typename__}.parse() argument must be a string")

        if text == "*":
            return cls(DefaultKind.LIST, ())
        if text in ("true", "false") or (not text and not required):
            return cls(DefaultKind.BOOLEAN, text == "true")
        if not (stripped := text.strip()):
            return cls(DefaultKind.NUMBER, 0)
        if NUMBER.fullmatch(stripped):
            try:
                return cls(DefaultKind.NUMBER, int(stripped))
            except ValueError:
                return cls(DefaultKind.NUMBER, float(stripped))
        return cls(DefaultKind.STRING, text)


class CommandOption(metaclass=RecordType):
    """
    One positional argument or flag option of a compiled signature.

    Fields
    - name: normalized identifier; for flags, the last alias without dashes.
    - flags: normalized aliases (flags only, None for positionals).
    - is_flag: True iff flags were declared.
    - required / multiple: arity of the value.
    - placeholder: explicit display token ("<x>" / "[x]") or None.
    - description: free text with any choice suffix stripped, or None.
    - default_value: Default | None; `default` exposes the bare value.
    - choices: allowed literal values (empty when none were declared).
    - hidden / shared: visibility markers (mutually exclusive).
    - nested: nested descriptors declared after "|", or None.

    Records are built by descriptor(); they compare by value and are read-only.
    """

    __introspectable__ = (
        "name",
        "flags",
        "is_flag",
        "required",
        "multiple",
        "placeholder",
        "description",
        "default_value",
        "choices",
        "hidden",
        "shared",
        "nested",
    )

    __displayable__ = (
        "name",
        "flags",
        "required",
        "multiple",
        "placeholder",
        "description",
        "default",
        "choices",
        "hidden",
        "shared",
        "nested",
    )

    def __new__(
            cls,
            name,
            /,
            flags=None,
            required=False,
            multiple=False,
            placeholder=None,
            description=None,
            default=None,
            choices=(),
            *,
            hidden=False,
            shared=False,
            nested=None
    ):
        if not isinstance(name, str):
            raise TypeError(f"{cls.__typename__} 'name' must be a string")
        if flags is not None:
            if isinstance(flags, str) or not (flags := tuple(flags)):
                raise TypeError(f"{cls.__typename__} 'flags' must be a non-empty iterable of strings")
        if not isinstance(default, Default | None):
            raise TypeError(f"{cls.__typename__} 'default' must be a Default")
        if hidden and shared:
            raise ValueError(f"{cls.__typename__} cannot be both hidden and shared")
        if multiple and default is not None and default.kind is not DefaultKind.LIST:
            raise ValueError(f"{cls.__typename__} multiple defaults must be lists")
        if nested is not None:
            nested = tuple(nested)
            if not all(isinstance(option, CommandOption) for option in nested):
                raise TypeError(f"{cls.__typename__} 'nested' must hold command options")

        self = super().__new__(cls)
        self._name = name
        self._flags = flags
        self._is_flag = flags is not None
        self._required = bool(required)
        self._multiple = bool(multiple)
        self._placeholder = placeholder
        self._description = description
        self._default_value = default
        self._choices = tuple(choices)
        self._hidden = bool(hidden)
        self._shared = bool(shared)
        self._nested = nested
        self.__sealed__ = True
        return self

    @property
    def default(self):
        """
        The bare default value (str, int, float, bool or list), or None.
        """
        if self._default_value is None:
            return None
        return self._default_value.value


def normalize_flag(token, /, required=False):
    """
    Normalize one flag alias and type its inline default.

    Rules
    - "--x"   → "-x"      (long form reduced to one character)
    - "-xyz"  → "--xyz"   (short form longer than one character)
    - "xyz"   → "--xyz"   (bare token longer than one character)
    - "alias=value" keeps the alias part and types the value (see Default.parse).

    Returns
    - (alias, Default | None)
    """
    if not isinstance(token, str):
        raise TypeError("normalize_flag() argument must be a string")

    alias, assigned, value = token.strip().partition("=")

    if alias.startswith("--"):
        if len(alias) == 3:
            alias = "-" + alias[2:]
    elif alias.startswith("-"):
        if len(alias) > 2:
            alias = "-" + alias
    elif len(alias) > 1:
        alias = "--" + alias

    return alias, Default.parse(value, required) if assigned else None


def _markers(content, /):
    """
    Resolve visibility markers; return (shared, hidden, stripped content).
    """
    content = content.strip()
    head = content.partition("{")[0]

    if shared := content.startswith("^"):
        hidden = False
    else:
        hidden = content.startswith("#") or re.search(r":[#^]", head) is not None

    if content[:1] in tuple(MARKERS):
        content = content[1:]
    elif match := re.search(r":[#^]", head):
        content = content[:match.start() + 1] + content[match.end():]

    return shared, hidden, content.strip()


def descriptor(content, /):
    """
    Compile the inner text of one block into a CommandOption.

    Examples
    - "name=help : The command name"
        → positional 'name', default 'help', not required, placeholder '[name]'
    - "--opts? : The command options : [opt1, opt2]"
        → flag 'opts', choices ['opt1', 'opt2'], not required
    - "install : Install | {--force : Force}"
        → positional 'install' with one nested flag 'force'
    - "default"
        → required positional 'default', no description
    """
    if not isinstance(content, str):
        raise TypeError("descriptor() argument must be a string")

    shared, hidden, content = _markers(content)

    name, colon, rest = content.partition(":")
    name = name.strip()
    description = nested = None

    if colon:
        description, pipe, tail = rest.partition("|")
        description = description.strip()
        if pipe:
            tail = tail.strip().removeprefix("{").strip()
            nested = descriptors("{" + tail + "}")

    placeholder = raw = None
    required = Unset
    multiple = False

    # Defaults
    if "=" in name:
        name, raw = name.split("=")[:2]
        name = name.strip()
        raw = raw.strip()
        holder = name.split("|")[-1].replace("--", "", 1).rstrip("?*")
        placeholder = f"[{holder}]" if raw else f"<{holder}>"
        required = False

    # Modifiers
    if name.endswith("?*"):
        required = False
        multiple = True
        name = name[:-2]
    elif name.endswith("*"):
        multiple = True
        name = name[:-1]
    elif name.endswith("?"):
        required = False
        name = name[:-1]
        placeholder = "[%s]" % name.split("|")[-1].lstrip("-")

    flags = None
    if is_flag := name.startswith("--"):
        required = False
    elif required is Unset:
        required = IDENTIFIER.fullmatch(name) is not None

    default = None
    if raw is not None:
        default = Default.parse(raw, required) if is_flag else Default(DefaultKind.STRING, raw)

    # Flags
    if is_flag:
        flags = []
        for part in name.split("|"):
            alias, inline = normalize_flag(part, required)
            flags.append(alias)
            if inline is not None:
                default = inline
        name = flags[-1].lstrip("-")

    # Choices
    choices = ()
    if description and (match := CHOICES.fullmatch(description)):
        description = match[1].strip()
        choices = tuple(filter(None, map(str.strip, match[2].split(","))))

    # Multiple defaults are lists
    if multiple and default is not None and default.kind is not DefaultKind.LIST:
        text = raw if raw is not None else str(default.value)
        default = Default(DefaultKind.LIST, filter(None, map(str.strip, text.split(","))))

    return CommandOption(
        name,
        flags,
        required,
        multiple,
        placeholder,
        description,
        default,
        choices,
        hidden=hidden,
        shared=shared,
        nested=nested,
    )


def descriptors(text, /):
    """
    Compile every top-level block of `text`, in order of appearance.
    """
    return tuple(map(descriptor, blocks(text)))


__all__ = (
    # Types
    "DefaultKind",
    "Default",
    "CommandOption",

    # Functions
    "descriptor",
    "descriptors",
    "normalize_flag",
)

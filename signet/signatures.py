"""
Signet signature compiler.

What this module provides
- ParsedCommand: the compiled, immutable specification of one signature.
- compile_signature(signature, handler): header + blocks → ParsedCommand.
- diagnose(signature): list the lenient repairs the compiler would make,
  as fault objects (see signet.faults), without emitting anything.

Signature layout

    [#|^]name[:]
        {<block>}
        {<block>}

- The first non-blank line is the header. A leading "#"/"^" or a ":#"/":^"
  marks the command hidden; a trailing ":" makes it a namespace command.
- Remaining lines are joined with single spaces and compiled block by block.
- Namespace commands split their descriptors: positionals that are not hidden
  become sub-commands, flags become the command's own options.

The compiler is pure: it keeps no state between calls and only reads the
handler (for its description); the handler is referenced, never copied or
mutated.

Quick example
    >>> parsed = compile_signature('''
    ...     hello
    ...         {name=help : The command name}
    ...         {--o|out=txt : The output format}
    ... ''', None)
    >>> parsed.base, [option.name for option in parsed.options]
    ('hello', ['name', 'out'])
"""
import re

from .blocks import spans
from .descriptors import CHOICES, descriptors
from .faults import *
from .utils import *


class ParsedCommand(metaclass=RecordType):
    """
    Compiled specification of one signature.

    Fields
    - base: command token (namespace ":" stripped).
    - description: taken from the handler, never from the signature text.
    - hidden: header carried a hidden marker.
    - namespace: header ended with ":".
    - subcommands: positional descriptors of a namespace command, else None.
    - options: flag descriptors of a namespace command, else every descriptor.
    - handler: the caller's handler object, referenced as-is.
    """

    __introspectable__ = (
        "base",
        "description",
        "hidden",
        "namespace",
        "subcommands",
        "options",
        "handler",
    )

    __displayable__ = (
        "base",
        "description",
        "hidden",
        "namespace",
        "subcommands",
        "options",
    )

    def __new__(
            cls,
            base,
            /,
            description=None,
            hidden=False,
            namespace=False,
            subcommands=None,
            options=(),
            handler=None
    ):
        if not isinstance(base, str):
            raise TypeError(f"{cls.__typename__} 'base' must be a string")
        if namespace and subcommands is None:
            raise TypeError(f"{cls.__typename__} namespace commands must declare 'subcommands'")

        self = super().__new__(cls)
        self._base = base
        self._description = description
        self._hidden = bool(hidden)
        self._namespace = bool(namespace)
        self._subcommands = None if subcommands is None else tuple(subcommands)
        self._options = tuple(options)
        self._handler = handler
        self.__sealed__ = True
        return self

    @property
    def handler(self):
        """
        The handler object supplied to compile_signature() (not a copy).
        """
        return self._handler


def _describe(handler, /):
    """
    Read a handler's description without touching anything else.
    """
    getter = getattr(handler, "get_description", None)
    if callable(getter):
        return getter()
    return getattr(handler, "description", None)


def _lines(signature, /):
    return [line for line in map(str.strip, signature.splitlines()) if line]


def _hidden(header, /):
    return header[:1] in ("#", "^") or re.search(r":[#^]", header) is not None


def compile_signature(signature, handler=None, /):
    """
    Compile a signature string into a ParsedCommand.

    Parameters
    - signature: str
      The declarative signature (header line followed by blocks).
    - handler: any
      The command handler; its `get_description()` (or `description`
      attribute) supplies the description. Kept by reference.

    Returns
    - ParsedCommand. An empty or blank signature yields an empty base and no
      options; malformed blocks degrade silently.

    Raises
    - TypeError: when signature is not a string.
    """
    if not isinstance(signature, str):
        raise TypeError("compile_signature() first argument must be a string")

    description = _describe(handler)

    if not (lines := _lines(signature)):
        return ParsedCommand("", description, handler=handler)

    header, *rest = lines
    base = re.sub(r"[^\w:-]", "", header.partition("{")[0].strip(), flags=re.ASCII)
    options = descriptors(" ".join(rest))

    if namespace := base.endswith(":"):
        return ParsedCommand(
            base[:-1],
            description,
            _hidden(header),
            namespace,
            tuple(option for option in options if not option.flags and not option.hidden),
            tuple(option for option in options if option.flags),
            handler,
        )

    return ParsedCommand(base, description, _hidden(header), namespace, None, options, handler)


def diagnose(signature, /):
    """
    Return the faults describing every lenient repair compile_signature()
    would silently apply to `signature`.

    Reported
    - EmptySignatureWarning: no header line at all.
    - UnbalancedBlockWarning: a "{" that never forms a block.
    - StrayTextWarning: non-blank text outside any block.
    - BareDescriptorWarning: a block without ":" (name-only descriptor).
    - AmbiguousChoicesWarning: a description holding extra ":" that therefore
      yields no choices.

    The faults are returned, not emitted; pass them to trigger() to surface them.
    """
    if not isinstance(signature, str):
        raise TypeError("diagnose() argument must be a string")

    if not (lines := _lines(signature)):
        return [EmptySignatureWarning(
            "the signature has no header line",
            code=FaultCode.EMPTY_SIGNATURE,
            title="empty signature",
            hint="start the signature with the command name",
        )]

    faults = []
    body = " ".join(lines[1:])
    cursor = 0

    for position, (start, end) in enumerate(spans(body), start=1):
        faults.extend(_gaps(body[cursor:start], position))
        content = body[start + 1:end - 1]
        name, colon, rest = content.partition(":")

        if not colon:
            faults.append(BareDescriptorWarning(
                f"block {position} {{{content.strip()}}} has no description",
                code=FaultCode.BARE_DESCRIPTOR,
                title="bare descriptor",
                hint="add ' : <description>' after the name",
                position=position,
            ))
        elif ":" in (text := rest.partition("|")[0].strip()) and not CHOICES.fullmatch(text):
            faults.append(AmbiguousChoicesWarning(
                f"block {position} description {text!r} yields no choices",
                code=FaultCode.AMBIGUOUS_CHOICES,
                title="ambiguous choices",
                hint="keep a single ':' between the description and its choices",
                position=position,
            ))
        cursor = end

    faults.extend(_gaps(body[cursor:], None))
    return faults


def _gaps(text, position, /):
    """
    Classify the text found between two blocks.
    """
    if "{" in text or "}" in text:
        yield UnbalancedBlockWarning(
            f"unbalanced braces in {text.strip()!r}",
            code=FaultCode.UNBALANCED_BLOCK,
            title="unbalanced block",
            hint="close every '{' and nest blocks at most one level deep",
            position=position,
        )
    elif text.strip():
        yield StrayTextWarning(
            f"text outside blocks: {text.strip()!r}",
            code=FaultCode.STRAY_TEXT,
            title="stray text",
            hint="wrap arguments and options in '{...}'",
            position=position,
        )


__all__ = (
    "ParsedCommand",
    "compile_signature",
    "diagnose",
)

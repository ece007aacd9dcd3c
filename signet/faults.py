"""
Signet faults (signature diagnostics) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every signature
  diagnostic. Codes are grouped by domain so logs and searches stay predictable.
- SignatureWarning: base type carrying a message plus options, able to render
  itself through rich in a short, lowercased and actionable way.
- trigger(): central entry point to surface a fault (respecting shell/fancy/colorful).
- getdoc(): optional description lookup for a code from the host application.

The compiler never raises for malformed signatures; it repairs them silently.
These faults describe those repairs (see signet.signatures.diagnose) so that
hosts such as the Registry can report them to command authors.

Integration
- Faults are plain objects until triggered. In non-shell mode they are emitted
  through warnings.warn; in shell mode they are printed on a rich stderr console.
- Host overrides come from __main__: __styles__ (style names), __codes__
  (code labels), __prog__ (program name) and __docs__ (code documentation).
"""
import warnings
from abc import ABC
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

from .utils import Unset

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes used across signet (stable identifiers).

    grouping (by high-level domain)
    - signatures (2110x)
      • EMPTY_SIGNATURE
    - blocks (2111x)
      • UNBALANCED_BLOCK, STRAY_TEXT
    - descriptors (2112x)
      • BARE_DESCRIPTOR, AMBIGUOUS_CHOICES
    - registry (2113x)
      • DUPLICATED_COMMAND
    """
    # --- signature warnings (21xxx) ---
    EMPTY_SIGNATURE     = 21101

    # --- block warnings ---
    UNBALANCED_BLOCK    = 21111
    STRAY_TEXT          = 21112

    # --- descriptor warnings ---
    BARE_DESCRIPTOR     = 21121
    AMBIGUOUS_CHOICES   = 21122

    # --- registry warnings ---
    DUPLICATED_COMMAND  = 21131

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class SignatureWarning(ABC, Warning):
    """
    base signature fault.

    options (all optional)
    - code: FaultCode, title: str, hint: str, position: int | None
    - prog: program name shown in the header (defaults to __main__.__prog__ or "signet")
    - shell, fancy, colorful: rendering switches (see trigger())
    """

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str) or message is Unset
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType(options)

    def __str__(self):
        return str(self.message) if self.message is not Unset else ""

    def __rich__(self):
        main = __import__("__main__")
        colorful = self.options.get("colorful", True)
        fancy = self.options.get("fancy", False)

        styles = defaultdict(str, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #FFB400",  # amber fault code
            "warning-title": "bold #FFC2E0",  # soft pinky title

            # body
            "warning-message": "#D6D6DE",  # light gray body
            "hint-arrow": "#B8EFAF dim",  # soft green arrow
            "hint": "italic #B8EFAF",  # soft green hint text
        } | getattr(main, "__styles__", {}))

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

        prog = text(self.options.get("prog", getattr(main, "__prog__", "signet")), styler("prog-name"))
        code = self.options.get("code")

        header = Text.assemble(
            "[ ",
            prog,
            " — ",
            text(code.normalize() if code is not None else "?", styler("code")),
            " | ",
            text(str(self.options.get("title", type(self).__name__)).title(), styler("warning-title")),
            " ]"
        )
        message = text(str(self), styler("warning-message"))
        hint = Text.assemble(text(" → ", styler("hint-arrow")), text(self.options.get("hint"), styler("hint")))

        if fancy:
            return Panel(Group(message, hint), title=header, title_align="left")

        return Group(header, message, hint)

    def __trigger__(self) -> None:
        if not self.options.get("shell", False):
            return warnings.warn(self, stacklevel=3)
        console.print(self)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class EmptySignatureWarning(SignatureWarning): ...
class UnbalancedBlockWarning(SignatureWarning): ...
class StrayTextWarning(SignatureWarning): ...
class BareDescriptorWarning(SignatureWarning): ...
class AmbiguousChoicesWarning(SignatureWarning): ...
class DuplicatedCommandWarning(SignatureWarning): ...


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see SignatureWarning).
    - options are merged into the fault via __replace__(**options) before triggering.
    - in shell mode, rendering happens via the rich console; otherwise, warnings are emitted.

    typical options
    - shell, fancy, colorful, prog, and any context the renderer may show.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    fault.__replace__(**options).__trigger__()


def getdoc(code, /):
    """
    optional documentation fetch for a fault code.

    the host application may expose a __docs__ mapping in __main__ where keys
    are FaultCode instances and values are short documentation strings.
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    try:
        return getattr(__import__("__main__"), "__docs__", {})[code]
    except KeyError:
        return None


__all__ = (
    "FaultCode",
    "SignatureWarning",
    "EmptySignatureWarning",
    "UnbalancedBlockWarning",
    "StrayTextWarning",
    "BareDescriptorWarning",
    "AmbiguousChoicesWarning",
    "DuplicatedCommandWarning",
    "trigger",
    "getdoc",
)

r"""
Signet command handlers and registry.

Overview
- Command: base class for command handlers. A handler declares its
  `signature` and `description` as class attributes; compile() turns them
  into a ParsedCommand bound to the handler.
- Registry: an explicit collection of compiled handlers. It compiles on
  registration, reports the lenient repairs found by diagnose() as faults
  (respecting shell/fancy/colorful/deferred), discovers handlers in modules
  and exposes the backend-neutral routes of everything it holds.

Quick example
    >>> class Hello(Command):
    ...     signature = "hello\n    {name=world : Who to greet}"
    ...     description = "Say hello"
    >>> registry = Registry().register(Hello)
    >>> registry.find("hello").description
    'Say hello'
"""
import importlib
import inspect
from types import MappingProxyType

from . import faults
from .faults import *
from .layout import routes
from .signatures import compile_signature, diagnose
from .utils import *


class Command:
    """
    Base class for command handlers.

    Class attributes
    - signature: str
      The declarative signature (see signet.signatures).
    - description: str | None
      Shown in listings and help; never read from the signature text.
    - dictionary: Mapping[str, str]
      Free-form lookup table available to the handler (empty by default).

    Subclasses override get_signature()/get_description() when either is
    computed rather than constant.
    """
    signature = ""
    description = None
    dictionary = MappingProxyType({})

    def get_signature(self):
        return self.signature

    def get_description(self):
        return self.description

    def compile(self):
        """
        Compile this handler's signature into a ParsedCommand that references
        this handler.
        """
        return compile_signature(self.get_signature(), self)


class Registry:
    """
    Collection of compiled command handlers.

    Options (keyword-only)
    - shell: print faults on the rich stderr console instead of emitting warnings.
    - fancy: render faults inside a panel.
    - colorful: style fault output.
    - deferred: collect faults and surface them on finalize().

    Registration order is preserved. A handler whose routes collide with an
    already registered one is reported with DuplicatedCommandWarning and
    skipped; the first registration wins.
    """

    def __init__(self, *, shell=False, fancy=False, colorful=True, deferred=False):
        self.shell = bool(shell)
        self.fancy = bool(fancy)
        self.colorful = bool(colorful)
        self.deferred = bool(deferred)
        self._commands = []
        self._faults = []

    def __repr__(self):
        return f"registry({', '.join(parsed.base for parsed in self._commands)})"

    def __len__(self):
        return len(self._commands)

    @property
    def commands(self):
        """
        Registered ParsedCommands, in registration order.
        """
        return tuple(self._commands)

    @property
    def faults(self):
        """
        Deferred faults waiting for finalize().
        """
        return tuple(self._faults)

    def register(self, *handlers):
        """
        Compile and register command handlers.

        Contract
        - handlers: Command instances or Command subclasses (classes are
          instantiated without arguments).

        Behavior
        - Faults reported by diagnose() for each signature are triggered.
        - A handler whose routes are already taken is triggered as
          DuplicatedCommandWarning and not registered.

        Returns
        - The registry itself, so calls can be chained.

        Raises
        - TypeError: when a handler is neither a Command nor a Command subclass.
        """
        for handler in handlers:
            if isinstance(handler, type) and issubclass(handler, Command):
                handler = handler()
            elif not isinstance(handler, Command):
                raise TypeError(f"register() argument must be a command, not {type(handler).__name__!r}")

            for fault in diagnose(handler.get_signature()):
                self.trigger(fault, handler=handler)

            parsed = handler.compile()
            taken = {route.name for route in self.routes()}
            if duplicated := sorted({route.name for route in routes(parsed)} & taken):
                self.trigger(DuplicatedCommandWarning(
                    f"command {', '.join(map(repr, duplicated))} is already registered",
                    code=FaultCode.DUPLICATED_COMMAND,
                    title="duplicated command",
                    hint="rename the command or remove one of the handlers",
                ), handler=handler)
                continue

            self._commands.append(parsed)
        return self

    def include(self, source, /):
        """
        Discover and register Command subclasses from external modules.

        Parameters
        - source: str
          Module glob pattern expanded via mglob(...) (e.g. "app.commands.*").

        Behavior
        - Imports every matched module (ImportError is reported as TypeError).
        - Registers the concrete Command subclasses defined in each module
          (imported names and classes without a signature are skipped), in
          module then definition order.

        Returns
        - The registry itself.
        """
        if not isinstance(source, str):
            raise TypeError("include() argument must be a string")

        def imp(module):
            try:
                return importlib.import_module(module)
            except ImportError:
                raise TypeError(f"unable to import module {module!r}")

        for module in map(imp, mglob(source)):
            handlers = [
                object for name, object in vars(module).items()
                if inspect.isclass(object)
                and issubclass(object, Command)
                and object.__module__ == module.__name__
                and not inspect.isabstract(object)
                and object.signature
            ]
            self.register(*handlers)
        return self

    def find(self, name, /):
        """
        Return the ParsedCommand answering to `name` ("base" or "base:sub"),
        or None.
        """
        if not isinstance(name, str):
            raise TypeError("find() argument must be a string")
        for parsed in self._commands:
            if parsed.base == name or any(route.name == name for route in routes(parsed)):
                return parsed
        return None

    def routes(self):
        """
        Routes of every registered command, in registration order.
        """
        return tuple(route for parsed in self._commands for route in routes(parsed))

    def trigger(self, fault, /, **options):
        """
        Surface a fault with this registry's options, or keep it for
        finalize() when deferred.
        """
        fault = fault.__replace__(
            **options,
            shell=self.shell,
            fancy=self.fancy,
            colorful=self.colorful,
        )
        if self.deferred:
            return self._faults.append(fault)
        faults.trigger(fault)

    def finalize(self):
        """
        Surface every deferred fault, in the order it was found.

        Returns
        - tuple of the surfaced faults (empty when nothing was deferred).
        """
        surfaced, self._faults = tuple(self._faults), []
        for fault in surfaced:
            faults.trigger(fault)
        return surfaced


__all__ = (
    "Command",
    "Registry",
)

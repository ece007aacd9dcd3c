"""
Signet utilities (internal helpers, carefully exposed)

Scope
- Small building blocks shared by the compiler, the registry and the layout
  helpers.

Overview
- Unset: sentinel for “value not provided”, told apart from None.
- coalesce(value, default): materialize Unset.
- rename(name): decorator giving generated callables a stable name.
- mirror(name): read-only property over a "_name" field that hands out list
  copies of stored tuples.
- RecordType: metaclass of the immutable records produced by the compiler
  (CommandOption, ParsedCommand, layout entries).
- mglob(pattern): expand "app.commands.*" style patterns into the module names
  Registry.include() imports.
"""
import functools
import importlib
import operator
import pkgutil
import re
from typing import final


@final
class UnsetType:
    """
    Type of the Unset sentinel: a falsey singleton printed as "Unset".
    """

    @functools.cache
    def __new__(cls):
        return super().__new__(cls)

    def __bool__(self):
        return False

    def __repr__(self):
        return "Unset"

    def __init_subclass__(cls, **options):
        raise TypeError("type 'UnsetType' is not an acceptable base type")


def coalesce(object, default=None, /):
    """
    Return `object`, or `default` when it is Unset (None and other falsey
    values are kept).
    """
    return object if object is not Unset else default


def rename(name, /):
    """
    Decorator setting __name__ and __qualname__ of the decorated callable.
    """
    if not isinstance(name, str):
        raise TypeError("@rename() argument must be a string")

    def decorator(function):
        function.__name__ = function.__qualname__ = name
        return function

    return decorator


def _copy(value):
    # Records keep tuples; callers get lists they may freely mutate.
    if isinstance(value, tuple | list):
        return [_copy(item) for item in value]
    return value


def mirror(name, /):
    """
    Read-only property exposing "_{name}" of the instance.
    """
    if not isinstance(name, str):
        raise TypeError("mirror() argument must be a string")

    @rename(name)
    def getter(self):
        return _copy(getattr(self, "_" + name))

    return property(getter)


class RecordType(type):
    """
    Metaclass for the immutable records produced by signet.

    Responsibilities
    - Derive __typename__ from the class name ("CommandOption" becomes
      "command-option"), used in representations and messages.
    - Expose every name listed in __introspectable__ as a mirror() property,
      unless the class defines that name itself.
    - Provide value equality over the introspectable fields, so compiling the
      same text twice yields equal records.
    - Provide stable __repr__/__rich_repr__ for diagnostics and rich.pretty.

    Conventions
    - __displayable__ (if set) narrows the fields shown by __rich_repr__;
      otherwise __introspectable__ is used.
    - Instances reject attribute assignment once the constructor sets
      __sealed__.
    """
    __introspectable__ = ()
    __displayable__ = None

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
        )

        @rename("__repr__")
        def __repr__(self):
            return "{}({})".format(
                type(self).__typename__,
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__())),
            )
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for name in type(self).__displayable__ or type(self).__introspectable__:
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        @rename("__eq__")
        def __eq__(self, other):
            if type(other) is not type(self):
                return NotImplemented
            return all(
                getattr(self, "_" + name) == getattr(other, "_" + name)
                for name in type(self).__introspectable__
            )
        self.__eq__ = __eq__
        self.__hash__ = None

        @rename("__setattr__")
        def __setattr__(self, name, value):
            if getattr(self, "__sealed__", False):
                raise AttributeError(f"{type(self).__typename__} records are read-only")
            object.__setattr__(self, name, value)
        self.__setattr__ = __setattr__

        return self


@functools.cache
def _pattern(source, /):
    # "*" and "?" stay inside one segment; ".**" spans zero or more segments.
    body = re.escape(source).replace(r"\.\*\*", r"(?:\.[^.]+)*")
    return re.compile(body.replace(r"\*", r"[^.]*").replace(r"\?", r"[^.]"))


def mglob(source, /):
    """
    expand a dotted module pattern into the names of matching modules.

    rules
    - "*" matches within one segment, "?" matches one character and a ".**"
      segment matches any depth (including none).
    - the pattern must start with a concrete package; it is imported and its
      submodules are walked. A missing package yields no modules.
    - without wildcards, the source itself is returned (import errors are left
      to the caller).

    examples
    - "app.commands.*"     → direct children of app.commands
    - "app.**.commands"    → app.commands and any nested commands module
    """
    if not isinstance(source, str):
        raise TypeError("mglob() argument must be a string")
    if not (source := source.strip()):
        raise ValueError("mglob() argument must be a non-empty string")

    segments = source.split(".")
    prefix = []
    for segment in segments:
        if "*" in segment or "?" in segment:
            break
        prefix.append(segment)

    if len(prefix) == len(segments):
        return [source]
    if not prefix:
        raise ValueError("mglob() pattern must start with a concrete package segment")

    try:
        package = importlib.import_module(prefix := ".".join(prefix))
    except ImportError:
        return []

    pattern = _pattern(source)
    names = [prefix]
    if hasattr(package, "__path__"):
        names += [module.name for module in pkgutil.walk_packages(package.__path__, prefix + ".")]

    return sorted(name for name in names if pattern.fullmatch(name))


Unset = UnsetType()


__all__ = (
    # Functions
    "coalesce",
    "rename",
    "mirror",
    "mglob",

    # Types
    "UnsetType",
    "RecordType",

    # Constants
    "Unset",
)

r"""
Tabargs option descriptors, tables and groups.

Overview
- Kinds
  • ArgKind: whether an option consumes the following token (NO_ARGUMENT / REQUIRED_ARGUMENT).
  • ValueKind: how a matched token is decoded (FLAG, STRING, ENUM, FLOAT, INT, UINT,
    UINT32, UINT64, HEXUINT8/16/32/64, FUNCTION).

- Destinations (one cell type per family of ValueKind)
  • FlagCell: bool, set to True when the option is present.
  • TextBuffer: bounded text; values are truncated to its capacity.
  • EnumCell: int, stored offset by one so 0 keeps meaning “unset”.
  • FloatCell: float.
  • NumberCell: int; width, signedness and radix come from the option's ValueKind.
  • Handler: identifies a function option by id and optionally wraps a callback.

- Descriptors
  • Option: one static option description plus its mutable parsed bit and optional
    link to a handler-specific OptionGroup.
  • OptionTable: ordered, immutable sequence of Options with named accessors.
  • OptionGroup: a named OptionTable plus extended help; the unit of registration.

- Factories
  • flag(...), option(...): build an Option and its destination in one call.
  • @handler(...): turn a callback into a FUNCTION option.

Validation
- Names must be non-empty and written without leading dashes.
- The ArgKind/ValueKind pairing and the destination type are checked when the
  group is registered (see tabargs.registry), not at construction, so tables can
  be declared statically and fixed up before registration.

Quick example:
    >>> from tabargs.options import OptionGroup, flag, option, ValueKind
    >>> verbose = flag("verbose", "print more")
    >>> name = option("name", "who to greet", capacity=16)
    >>> group = OptionGroup("Program Options", [verbose, name])
"""
import inspect
import re
from enum import IntEnum

from .utils import *

MAX_PARSED_STRING_LEN = 1023


class ArgKind(IntEnum):
    """
    whether an option expects the next token as its argument.
    """
    NO_ARGUMENT = 0
    REQUIRED_ARGUMENT = 1


class ValueKind(IntEnum):
    """
    semantic type of an option; decides decoding and the destination type.

    NONE is never valid on a registered option. it exists so a zeroed
    descriptor can be told apart from a real one.
    """
    NONE = 0
    FLAG = 1
    STRING = 2
    ENUM = 3
    FLOAT = 4
    INT = 5
    UINT = 6
    UINT32 = 7
    UINT64 = 8
    HEXUINT8 = 9
    HEXUINT16 = 10
    HEXUINT32 = 11
    HEXUINT64 = 12
    FUNCTION = 13

    @property
    def label(self):
        return "FUNC_PTR" if self is ValueKind.FUNCTION else self.name

    @property
    def layout(self):
        """
        (width, signed, radix) for integer kinds, None otherwise.
        """
        return _LAYOUTS.get(self)

    @property
    def cell(self):
        """
        destination type this kind writes through.
        """
        return _CELLS.get(self)

    def wrap(self, value, /):
        """
        integer value cut to this kind's width (two's complement for signed kinds).
        """
        if self.layout is None:
            raise ValueError("%s is not an integer kind" % self.label)
        width, signed, _ = self.layout
        value = int(value) & (1 << width) - 1
        if signed and value >> width - 1:
            value -= 1 << width
        return value

    def __str__(self):
        return self.label


_LAYOUTS = {
    ValueKind.ENUM: (32, True, 10),
    ValueKind.INT: (32, True, 10),
    ValueKind.UINT: (32, False, 10),
    ValueKind.UINT32: (32, False, 10),
    ValueKind.UINT64: (64, False, 10),
    ValueKind.HEXUINT8: (8, False, 16),
    ValueKind.HEXUINT16: (16, False, 16),
    ValueKind.HEXUINT32: (32, False, 16),
    ValueKind.HEXUINT64: (64, False, 16),
}


class Cell:
    """
    a writable slot owned by the caller; the engine only writes .value.
    """
    __slots__ = ("value",)
    default = None

    def __init__(self, value=Unset, /):
        self.value = coalesce(value, self.default)

    def __repr__(self):
        return "%s(%r)" % (type(self).__name__, self.value)


class FlagCell(Cell):
    __slots__ = ()
    default = False

    def __bool__(self):
        return bool(self.value)


class TextBuffer(Cell):
    """
    fixed-capacity text destination; longer values are cut at capacity.
    """
    __slots__ = ("capacity",)
    default = ""

    def __init__(self, value=Unset, /, capacity=MAX_PARSED_STRING_LEN):
        if not isinstance(capacity, int) or capacity < 1:
            raise ValueError("text buffer capacity must be a positive integer")
        self.capacity = capacity
        super().__init__(coalesce(value, "")[:capacity])

    def __str__(self):
        return self.value


class EnumCell(Cell):
    __slots__ = ()
    default = 0


class FloatCell(Cell):
    __slots__ = ()
    default = 0.0


class NumberCell(Cell):
    __slots__ = ()
    default = 0


class Handler:
    """
    function option destination.

    id is the lookup key used to link a handler-specific group at registration
    and to request that group at parse time. callback is optional; calling the
    handler forwards to it.
    """
    __slots__ = ("id", "callback")

    def __init__(self, id, /, callback=None):
        if not isinstance(id, str) or not id:
            raise TypeError("handler id must be a non-empty string")
        if callback is not None and not callable(callback):
            raise TypeError("handler callback must be callable")
        self.id = id
        self.callback = callback

    def __call__(self, *args, **kwargs):
        if self.callback is None:
            return None
        return self.callback(*args, **kwargs)

    def __eq__(self, other):
        if isinstance(other, Handler):
            return self.id == other.id
        return NotImplemented

    def __hash__(self):
        return hash(self.id)

    def __repr__(self):
        return "Handler(%r)" % self.id


_CELLS = {
    ValueKind.FLAG: FlagCell,
    ValueKind.STRING: TextBuffer,
    ValueKind.ENUM: EnumCell,
    ValueKind.FLOAT: FloatCell,
    ValueKind.FUNCTION: Handler,
} | dict.fromkeys(
    (
        ValueKind.INT,
        ValueKind.UINT,
        ValueKind.UINT32,
        ValueKind.UINT64,
        ValueKind.HEXUINT8,
        ValueKind.HEXUINT16,
        ValueKind.HEXUINT32,
        ValueKind.HEXUINT64,
    ),
    NumberCell
)


def handler_id(x, /):
    """
    normalize a handler reference (Handler, id string or None) to its id.
    """
    if x is None or x is Unset:
        return None
    if isinstance(x, Handler):
        return x.id
    if isinstance(x, str) and x:
        return x
    raise TypeError("handler reference must be a Handler or a non-empty id string")


class Option:
    """
    Static description of one command line option.

    Fields
    - name: str, matched against tokens with their one or two leading dashes removed.
    - description: str, help text.
    - arg: ArgKind.
    - kind: ValueKind.
    - destination: Cell | Handler | None, written when the option is matched.
    - defined: FlagCell | None, set to True when the option is matched so a caller
      can tell “supplied” from “left at default”.
    - parsed: bool, mutable; True once matched (or once its group finished a scan).
    - linked: OptionGroup | None, handler-specific options (FUNCTION only; set by
      registration).
    """
    __slots__ = ("_name", "_description", "_arg", "_kind", "destination", "defined", "parsed", "linked")

    name = mirror("name")
    description = mirror("description")
    arg = mirror("arg")
    kind = mirror("kind")

    def __init__(
            self,
            name,
            description=Unset,
            /,
            arg=ArgKind.NO_ARGUMENT,
            kind=ValueKind.FLAG,
            destination=None,
            defined=None,
            *,
            parsed=False
    ):
        if not isinstance(name, str):
            raise TypeError("option name must be a string")
        elif not (name := name.strip()):
            raise ValueError("option name must be a non-empty string")
        elif not re.fullmatch(r"\w[\w.-]*", name):
            raise ValueError("option name %r must be written without dashes and contain no spaces" % name)
        description = coalesce(description, "")
        if not isinstance(description, str):
            raise TypeError("option description must be a string")
        if defined is not None and not isinstance(defined, FlagCell):
            raise TypeError("option 'defined' must be a FlagCell")

        self._name = name
        self._description = description
        self._arg = ArgKind(arg)
        self._kind = ValueKind(kind)
        self.destination = destination
        self.defined = defined
        self.parsed = bool(parsed)
        self.linked = None

    @property
    def consistent(self):
        """
        whether arg and kind agree: flags and functions take no argument,
        everything else requires one.
        """
        presence = self.kind in (ValueKind.FLAG, ValueKind.FUNCTION)
        if self.arg is ArgKind.NO_ARGUMENT:
            return presence
        return not presence

    @property
    def tag(self):
        if self.arg is ArgKind.REQUIRED_ARGUMENT:
            return "[arg]"
        if self.kind is ValueKind.FUNCTION:
            return "[fnc]"
        return "....."

    def binds(self, id, /):
        """
        whether this is a FUNCTION option bound to the handler with this id.
        """
        return (
            self.kind is ValueKind.FUNCTION and
            isinstance(self.destination, Handler) and
            self.destination.id == id
        )

    def __repr__(self):
        return "Option(%r, arg=%s, kind=%s, parsed=%r)" % (self.name, self.arg.name, self.kind.label, self.parsed)


class OptionTable:
    """
    Ordered sequence of Options.

    The order is the match order: when two options share a name, the first one
    wins. The sequence itself is immutable; each Option's parsed bit is not.
    """
    __slots__ = ("_options",)

    def __init__(self, options=(), /):
        options = tuple(options)
        for option in options:
            if not isinstance(option, Option):
                raise TypeError("option table items must be Option instances")
        self._options = options

    def __iter__(self):
        return iter(self._options)

    def __len__(self):
        return len(self._options)

    def __getitem__(self, index):
        return self._options[index]

    def __repr__(self):
        return "OptionTable(%r)" % (list(self._options),)

    def find(self, name, /):
        """
        first option with this name, or None.
        """
        for option in self._options:
            if option.name == name:
                return option
        return None

    # ── destination accessors ────────────────────────────────────────────────

    def destination(self, name, /):
        option = self.find(name)
        return option.destination if option else None

    def get_value(self, name, /):
        """
        current value of the named option's destination (None when unknown or unbound).
        a handler destination is returned as-is.
        """
        destination = self.destination(name)
        if isinstance(destination, Cell):
            return destination.value
        return destination

    def set_value(self, name, value, /):
        """
        overwrite the named option's destination value; unknown names are ignored.
        text values are cut to the buffer capacity; integers are cut to the
        width of the option's kind.
        """
        option = self.find(name)
        if option is None:
            return
        destination = option.destination
        match destination:
            case TextBuffer(capacity=capacity):
                destination.value = str(value)[:capacity]
            case FlagCell():
                destination.value = bool(value)
            case NumberCell() | EnumCell() if option.kind.layout is not None:
                destination.value = option.kind.wrap(value)
            case FloatCell():
                destination.value = float(value)
            case Cell():
                destination.value = value

    # ── parsed / defined bookkeeping ─────────────────────────────────────────

    def set_all_parsed(self, state, /):
        for option in self._options:
            option.parsed = bool(state)

    def set_parsed(self, name, state, /):
        if option := self.find(name):
            option.parsed = bool(state)

    def all_parsed(self):
        return all(option.parsed for option in self._options)

    def is_parsed(self, name, /):
        option = self.find(name)
        return bool(option and option.parsed)

    def set_defined(self, name, state, /, sink=None):
        """
        set the named option's defined cell. returns False (and warns through
        the sink when given) if the option has no defined cell.
        """
        option = self.find(name)
        if option is None:
            return False
        if option.defined is None:
            if sink is not None:
                sink.warn("option %r does not have a defined flag associated; cannot set its defined state" % name)
            return False
        option.defined.value = bool(state)
        if sink is not None:
            sink.debug("option %r set as defined" % name)
        return True

    def is_defined(self, name, /):
        option = self.find(name)
        return bool(option and option.defined is not None and option.defined.value)

    def check_bindings(self, sink=None, /):
        """
        False (with an error line through the sink) when any destination is unbound.
        """
        for index, option in enumerate(self._options):
            if option.destination is None:
                if sink is not None:
                    sink.error("unbound destination for option %r (entry %d)" % (option.name, index))
                return False
        return True


class OptionGroup:
    """
    Named OptionTable plus extended help; registered as a unit.
    """
    __slots__ = ("_name", "_help", "_table")

    name = mirror("name")
    help = mirror("help")
    table = mirror("table")

    def __init__(self, name, options=(), /, help=None):
        if not isinstance(name, str) or not name.strip():
            raise ValueError("option group name must be a non-empty string")
        if help is not None and not isinstance(help, str):
            raise TypeError("option group help must be a string")
        self._name = name.strip()
        self._help = help
        self._table = options if isinstance(options, OptionTable) else OptionTable(options)

    @property
    def options(self):
        return tuple(self._table)

    @property
    def functional(self):
        """
        True when every option in the group is a FUNCTION option.
        """
        return len(self._table) > 0 and all(option.kind is ValueKind.FUNCTION for option in self._table)

    def __repr__(self):
        return "OptionGroup(%r, %d options)" % (self._name, len(self._table))


def flag(name, description=Unset, /, destination=Unset, defined=None):
    """
    build a presence-only FLAG option; a FlagCell is created when none is given.
    """
    return Option(
        name,
        description,
        ArgKind.NO_ARGUMENT,
        ValueKind.FLAG,
        coalesce(destination, FlagCell()),
        defined
    )


def option(name, description=Unset, /, kind=ValueKind.STRING, destination=Unset, defined=None, *, capacity=MAX_PARSED_STRING_LEN):
    """
    build an argument-taking option; the matching cell is created when none is given.
    """
    kind = ValueKind(kind)
    if kind in (ValueKind.NONE, ValueKind.FLAG, ValueKind.FUNCTION):
        raise ValueError("option() builds argument-taking options; use flag() or handler() for %s" % kind.label)
    if destination is Unset:
        destination = TextBuffer(capacity=capacity) if kind is ValueKind.STRING else kind.cell()
    return Option(name, description, ArgKind.REQUIRED_ARGUMENT, kind, destination, defined)


def handler(name, description=Unset, /, id=Unset, defined=None):
    """
    decorator: turn a callback into a FUNCTION option.

        @handler("hello", "say hello")
        def hello(): ...

    the result is the Option; its destination is a Handler whose id defaults to
    the option name and whose callback is the decorated function.
    """
    @rename("handler")
    def wrapper(callback, /):
        if not callable(callback):
            raise TypeError("@handler() must be applied to a callable")
        return Option(
            name,
            coalesce(description, next(iter(inspect.cleandoc(callback.__doc__ or "").splitlines()), "")),
            ArgKind.NO_ARGUMENT,
            ValueKind.FUNCTION,
            Handler(coalesce(id, name), callback),
            defined
        )

    return wrapper


__all__ = (
    "MAX_PARSED_STRING_LEN",
    "ArgKind",
    "ValueKind",
    "Cell",
    "FlagCell",
    "TextBuffer",
    "EnumCell",
    "FloatCell",
    "NumberCell",
    "Handler",
    "handler_id",
    "Option",
    "OptionTable",
    "OptionGroup",
    "flag",
    "option",
    "handler",
)

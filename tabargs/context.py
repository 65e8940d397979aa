"""
Parsing context: everything one parsing session shares.

A Context owns the option registry, the argument ledger, the scan cursor, the
"last parsed" table and the print sink. Build one per program (or per REPL
session) and pass it to register(), parse() and print_help().

Runtime flags
- shell: faults are printed and the process exits (help with status 0, faults
  with status 1). When False (the default) faults are raised to the caller.
- colorful: styled output for faults and, when no sink is given, for the sink.
- strict: malformed numeric/enum text is an InvalidValueError. When False the
  legacy lenient decoding is used (numeric prefix, zero fallback, C-style wrap).
- capacity: maximum number of registered groups.
- slots: ledger capacity, i.e. the longest argument vector accepted.
"""
from .console import ConsoleSink
from .faults import trigger
from .ledger import MAX_CLI_ARGS, ArgumentLedger
from .utils import *

MAX_OPTION_GROUPS = 10


class Context:
    groups = mirror("groups")

    def __init__(
            self,
            sink=Unset,
            /,
            *,
            shell=False,
            colorful=False,
            strict=True,
            capacity=MAX_OPTION_GROUPS,
            slots=MAX_CLI_ARGS
    ):
        if not isinstance(capacity, int) or capacity < 1:
            raise ValueError("registry capacity must be a positive integer")
        self.shell = bool(shell)
        self.colorful = bool(colorful)
        self.strict = bool(strict)
        self.capacity = capacity
        self.sink = coalesce(sink, ConsoleSink(colorful=self.colorful))
        self.ledger = ArgumentLedger(slots)
        self.cursor = 1
        self.last_parsed = None
        self.deferred = set()
        self._groups = []

    def trigger(self, fault, /, **options):
        """
        report a fault through the sink, then surface it with this context's flags.
        """
        if fault.status:
            self.sink.error(fault.message)
        trigger(fault, **options, shell=self.shell, colorful=self.colorful)

    def set_last_parsed(self, state, /):
        """
        flip every parsed bit of the table the last completed group scan touched.
        """
        if self.last_parsed is not None:
            self.last_parsed.set_all_parsed(state)

    def find_handler(self, id, /):
        """
        first registered FUNCTION option bound to the handler id, or None.
        """
        for group in self._groups:
            for option in group.table:
                if option.binds(id):
                    return option
        return None

    def reset(self):
        """
        start a new session: clear the ledger, the cursor, the deferred positions
        and every parsed bit (including handler-specific groups linked from
        registered options).
        """
        self.ledger.reset()
        self.cursor = 1
        self.last_parsed = None
        self.deferred.clear()
        for group in self._groups:
            group.table.set_all_parsed(False)
            for option in group.table:
                if option.linked is not None:
                    option.linked.table.set_all_parsed(False)

    def __repr__(self):
        return "Context(groups=%r, shell=%r, strict=%r)" % ([group.name for group in self._groups], self.shell, self.strict)


__all__ = (
    "MAX_OPTION_GROUPS",
    "Context",
)

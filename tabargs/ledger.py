"""
Argument ledger: which argument-vector positions have been consumed.

One bit per position. A bit is set the moment a token is classified as an
option or as an option's argument and is never cleared by parsing; only
reset() clears it, for hosts that run several independent sessions.
Position 0 (the program name) is never scanned and so never marked.
"""

MAX_CLI_ARGS = 128


class ArgumentLedger:
    """
    fixed-capacity bitset over argument positions.

        >>> ledger = ArgumentLedger()
        >>> ledger.mark(1)
        >>> ledger[1], ledger[2]
        (True, False)
    """
    __slots__ = ("_bits", "_capacity")

    def __init__(self, capacity=MAX_CLI_ARGS, /):
        if not isinstance(capacity, int) or capacity < 1:
            raise ValueError("ledger capacity must be a positive integer")
        self._bits = 0
        self._capacity = capacity

    @property
    def capacity(self):
        return self._capacity

    def _check(self, position):
        if not isinstance(position, int):
            raise TypeError("ledger positions must be integers")
        if not 0 <= position < self._capacity:
            raise IndexError("ledger position %d out of range (capacity %d)" % (position, self._capacity))

    def __getitem__(self, position):
        self._check(position)
        return bool(self._bits >> position & 1)

    def mark(self, position, /):
        self._check(position)
        self._bits |= 1 << position

    def unmarked(self, count, /):
        """
        positions 1..count-1 that are still unconsumed, in order.
        """
        return [position for position in range(1, min(count, self._capacity)) if not self[position]]

    def full(self, count, /):
        return not self.unmarked(count)

    def reset(self):
        self._bits = 0

    def __len__(self):
        return self._capacity

    def __repr__(self):
        marked = [position for position in range(self._capacity) if self._bits >> position & 1]
        return "ArgumentLedger(capacity=%d, marked=%r)" % (self._capacity, marked)


__all__ = (
    "MAX_CLI_ARGS",
    "ArgumentLedger",
)

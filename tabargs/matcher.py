"""
Token matcher: find the next unconsumed option of one table in an argument vector.

getopt_index(context, argv, table) resumes the scan at context.cursor and
returns a Match whose result is one of
- OK:          an option matched; index is its table position, argument the
               captured token (REQUIRED_ARGUMENT) or None.
- HELP:        a literal --help / -help token was met and consumed.
- STRAY_ARG:   a bare (dash-less) token stood where an option was expected.
- MISSING_ARG: a REQUIRED_ARGUMENT option had no usable argument after it.
- END:         nothing left to match; the cursor is moved to len(argv).

Positions already marked in the context's ledger are skipped, so a token
consumed by one table is never seen again by another. Options whose parsed bit
is set are skipped too. The first unparsed option in table order wins.

A bare token directly after a dash token that this table does not own is left
alone: it may be the argument of an option registered in a later group. Its
position is recorded in context.deferred; parse() reports it as a stray
argument when no group claims it.
"""
from enum import IntEnum
from typing import NamedTuple

from .options import ArgKind

HELP_TOKENS = ("--help", "-help")


class GetOpt(IntEnum):
    OK = 0
    STRAY_ARG = 1
    MISSING_ARG = 2
    HELP = 3
    END = 4


class Match(NamedTuple):
    result: GetOpt
    index: int | None = None
    argument: str | None = None
    position: int | None = None


def strip_dashes(token, /):
    """
    option name written in a token: one or two leading dashes removed.
    """
    if token.startswith("--"):
        return token[2:]
    if token.startswith("-"):
        return token[1:]
    return token


def _deferred(context, argv, position):
    previous = position - 1
    return (
        previous >= 1 and
        not context.ledger[previous] and
        argv[previous].startswith("-") and
        argv[previous] not in HELP_TOKENS
    )


def getopt_index(context, argv, table, /):
    sink = context.sink
    ledger = context.ledger

    for position in range(context.cursor, len(argv)):
        if ledger[position]:
            continue
        token = argv[position]
        sink.debug("parsing argument %r..." % token)

        if token in HELP_TOKENS:
            sink.debug("help requested!")
            ledger.mark(position)
            return Match(GetOpt.HELP, position=position)

        if not token.startswith("-"):
            if _deferred(context, argv, position):
                sink.debug("argument %r follows an option of another group; leaving it" % token)
                context.deferred.add(position)
                continue
            sink.debug("stray argument %r found" % token)
            return Match(GetOpt.STRAY_ARG, argument=token, position=position)

        name = strip_dashes(token)
        for index, option in enumerate(table):
            if option.parsed or option.name != name:
                continue

            if option.arg is ArgKind.NO_ARGUMENT:
                option.parsed = True
                ledger.mark(position)
                context.cursor = position + 1
                sink.debug("found option %r" % option.name)
                return Match(GetOpt.OK, index, None, position)

            following = position + 1
            if following < len(argv) and not argv[following].startswith("-"):
                option.parsed = True
                ledger.mark(position)
                ledger.mark(following)
                context.cursor = position + 2
                sink.debug("found option %r with required argument %r" % (option.name, argv[following]))
                return Match(GetOpt.OK, index, argv[following], position)

            sink.debug("option %r requires an argument" % option.name)
            return Match(GetOpt.MISSING_ARG, index, None, position)

    context.cursor = len(argv)
    return Match(GetOpt.END)


__all__ = (
    "HELP_TOKENS",
    "GetOpt",
    "Match",
    "strip_dashes",
    "getopt_index",
)

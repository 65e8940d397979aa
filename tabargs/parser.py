"""
Dispatch loop: turn an argument vector into destination values.

parse(context, argv, handler=None, help=True)
- visits every registered group in order, then (when a handler is given) the
  group linked to that handler's FUNCTION option.
- skips groups whose options are all parsed already, so a second parse over
  the same vector re-binds nothing.
- scans each remaining group with getopt_index() from the start of the vector,
  decoding every match into its destination.
- stops early on a FUNCTION match (returned to the caller so it can parse the
  handler's own options next) or on --help.
- once every group was scanned (no FUNCTION matched, no --help met), a bare
  token left behind an unknown option is a stray argument whether or not help
  is enabled.
- after such a complete scan with help enabled, every position of the vector
  must have been consumed; leftovers are reported as unrecognized options.
  when --help stopped the scan early, help is shown without that check.

run(context, argv, handler=None, help=True)
- the two-phase top-level caller: program options first, then the matched
  handler's options, then the handler's callback.

Every failure surfaces through context.trigger(): raised to the caller by
default, printed with an exit status in shell mode.
"""
import sys

from .decoding import *
from .faults import *
from .helper import print_help
from .matcher import HELP_TOKENS, GetOpt, getopt_index
from .options import *
from .utils import *


def _assign(context, option, argument, position):
    """
    write one matched option through its destination; a Handler is returned.
    """
    sink = context.sink
    destination = option.destination
    sink.debug("found %s option %r (argument %r)" % (option.kind.label, option.name, argument))
    try:
        match destination:
            case FlagCell():
                destination.value = True
            case TextBuffer(capacity=capacity):
                destination.value = decode_text(argument, capacity)
            case EnumCell():
                destination.value = decode_enum(argument, context.strict)
            case FloatCell():
                destination.value = decode_float(argument, context.strict)
            case NumberCell():
                destination.value = decode_integer(option.kind, argument, context.strict)
            case Handler():
                return destination
            case _:
                context.trigger(InvalidDestinationError(
                    "option %r of kind %s cannot write through %s" % (
                        option.name, option.kind.label, type(destination).__name__
                    ),
                    title="invalid destination",
                    option=option,
                ))
    except InvalidValueError as fault:
        context.trigger(fault, option=option, position=position)
    return None


def _define(context, option):
    if option.defined is None:
        context.sink.debug("option %r does not have a defined flag associated" % option.name)
        return
    option.defined.value = True
    context.sink.debug("option %r set as defined" % option.name)


def _stray(context, token, position):
    context.trigger(StrayArgumentError(
        "stray argument %r found in the %s position" % (token, ordinal(position)),
        title="stray argument",
        hint="every argument must be an option (--name) or the value of one",
        token=token,
        position=position,
    ))


def _scan(context, argv, group):
    """
    scan one group to its end. returns (matched handler | None, help wanted).
    """
    table = group.table
    context.cursor = 1
    while True:
        found = getopt_index(context, argv, table)
        match found.result:
            case GetOpt.END:
                context.sink.debug("reached end of %r" % group.name)
                return None, False
            case GetOpt.HELP:
                context.sink.debug("help wanted! help's on the way")
                return None, True
            case GetOpt.STRAY_ARG:
                _stray(context, found.argument, found.position)
            case GetOpt.MISSING_ARG:
                option = table[found.index]
                context.trigger(MissingArgumentError(
                    "option %r in the %s position requires an argument" % (option.name, ordinal(found.position)),
                    title="missing argument",
                    hint="pass a value after --%s" % option.name,
                    option=option,
                    position=found.position,
                ))

        option = table[found.index]
        matched = _assign(context, option, found.argument, found.position)
        _define(context, option)
        if matched is not None:
            return matched, False


def parse(context, argv, handler=None, /, help=True):
    """
    parse argv against the registry (and the handler's linked group).

    returns the matched Handler, or None when no FUNCTION option was given.
    """
    argv = list(argv)
    sink = context.sink
    id = handler_id(handler)

    if len(argv) < 2:
        sink.warn("no arguments to parse!")
        return None
    if len(argv) > context.ledger.capacity:
        context.trigger(TooManyArgumentsError(
            "too many arguments to parse (%d > %d)" % (len(argv), context.ledger.capacity),
            title="too many arguments",
            hint="raise the context slots or pass fewer arguments",
            count=len(argv),
        ))

    sink.debug("command line arguments detected, will try to parse them")
    groups = list(context.groups)
    total = len(groups) + (id is not None)
    linked = None
    matched = None
    wanted = False

    for number in range(total):
        if number == len(groups):
            if linked is None:
                sink.warn("function %r does not have options to parse" % id)
                break
            group = linked
        else:
            group = groups[number]
        sink.debug("parsing options group %r [%d/%d]" % (group.name, number + 1, total))

        if id is not None and linked is None:
            for option in group.table:
                if not option.binds(id):
                    continue
                if option.linked is not None:
                    sink.debug("found options %r for function %r" % (option.linked.name, option.name))
                    linked = option.linked
                    break
                sink.warn("found function %r but it does not have options associated with it" % option.name)

        if group.table.all_parsed():
            sink.debug("already parsed, moving on...")
            continue

        if not group.table.check_bindings(sink):
            context.trigger(UnboundDestinationError(
                "option group %r has an unbound destination" % group.name,
                title="unbound destination",
                hint="give every option a destination before parsing",
                group=group,
            ))

        matched, wanted = _scan(context, argv, group)
        context.last_parsed = group.table
        group.table.set_all_parsed(True)
        if matched is not None or wanted:
            break

    if matched is None and not wanted:
        for position in sorted(context.deferred):
            if position < len(argv) and not context.ledger[position]:
                _stray(context, argv[position], position)

    unrecognized = []
    if help and matched is None and not wanted:
        for position in context.ledger.unmarked(len(argv)):
            if argv[position] in HELP_TOKENS:
                context.ledger.mark(position)
                wanted = True
                continue
            sink.error("%r is not a recognized option!" % argv[position])
            unrecognized.append(argv[position])
            wanted = True

    if wanted and help and matched is None:
        print_help(context, id)
        if unrecognized:
            context.trigger(UnrecognizedOptionError(
                "unrecognized option%s: %s" % ("s" if len(unrecognized) > 1 else "", ", ".join(unrecognized)),
                title="unrecognized option",
                hint="see the help above for the accepted options",
                tokens=tuple(unrecognized),
            ))
        context.trigger(HelpRequested("help requested", title="help"))

    return matched


def run(context, argv=Unset, handler=None, /, help=True):
    """
    parse program options, then the matched handler's options, then call it.

    argv defaults to sys.argv. returns whatever the handler's callback returns
    (None when no FUNCTION option was given).
    """
    argv = list(coalesce(argv, sys.argv))
    matched = parse(context, argv, handler, help)
    if matched is None:
        return None
    if matched.id != handler_id(handler):
        parse(context, argv, matched, help)
    context.sink.debug("dispatching to handler %r" % matched.id)
    return matched()


__all__ = (
    "parse",
    "run",
)

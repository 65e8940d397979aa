"""
Help rendering through the context's sink.

print_help(context) lists every registered group, leaving out groups made only
of FUNCTION options. print_help(context, handler) lists that handler's option
first, then its linked group (extended help and options) when it has one, then
the registered groups that are not entirely FUNCTION options.
"""
from .options import handler_id

INTRODUCTION = (
    "The following are the options for this program. If the option represents a function "
    "that directly executes an internal function, it will be proceeded by a [fnc] tag. If the "
    "option expects an argument, it will be proceeded by an [arg] tag. For further help on a "
    "function, --help can be appended after a function for specific help on that function."
)


def print_option(sink, option, /):
    """
    one help line: --name, its tag and its description.
    """
    sink.option_line("--" + option.name, option.tag, option.description)


def print_group(sink, group, /):
    sink.sub_header(group.name)
    for option in group.table:
        print_option(sink, option)


def print_help(context, handler=None, /):
    sink = context.sink
    id = handler_id(handler)
    sink.header("Help")

    if id is not None:
        parent = context.find_handler(id)
        linked = parent.linked if parent is not None else None
        if linked is None:
            sink.block("The following function does not have specific arguments:")
        else:
            sink.block("The following are options for the following function:")
        sink.new_line()
        if parent is not None:
            print_option(sink, parent)
        if linked is not None:
            if linked.help:
                sink.sub_header("Extended Help")
                sink.block(linked.help)
            print_group(sink, linked)
    else:
        sink.block(INTRODUCTION)

    for group in context.groups:
        if id is not None and group.functional:
            continue
        print_group(sink, group)
    sink.new_line()


__all__ = (
    "INTRODUCTION",
    "print_option",
    "print_group",
    "print_help",
)

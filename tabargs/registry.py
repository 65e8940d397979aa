"""
Option group registration.

register(context, group) appends a group to the context's registry.
register(context, group, handler) instead links the group to the FUNCTION
option bound to that handler, so it is parsed (and shown in help) only when
that handler is the target.

Every option of the incoming group is validated first:
- NO_ARGUMENT options must be FLAG or FUNCTION; REQUIRED_ARGUMENT options must not be.
- a bound destination must be the cell type of the option's kind.
Violations are setup faults and surface before any token is read.
"""
from .faults import *
from .options import *


def _validate(context, group):
    for option in group.table:
        if not option.consistent:
            if option.arg is ArgKind.NO_ARGUMENT:
                message = "option %r is not a FLAG or FUNC_PTR but was declared with NO_ARGUMENT" % option.name
            else:
                message = "option %r is a %s but was declared with REQUIRED_ARGUMENT" % (option.name, option.kind.label)
            context.trigger(MalformedOptionError(
                message,
                title="malformed option",
                hint="flags and functions take no argument; every other kind requires one",
                option=option,
                group=group,
            ))
        if option.kind.cell is None:
            context.trigger(MalformedOptionError(
                "option %r has no value kind" % option.name,
                title="malformed option",
                hint="give the option one of the ValueKind members other than NONE",
                option=option,
                group=group,
            ))
        if option.destination is not None and not isinstance(option.destination, option.kind.cell):
            context.trigger(InvalidDestinationError(
                "option %r of kind %s cannot write through %s" % (
                    option.name, option.kind.label, type(option.destination).__name__
                ),
                title="invalid destination",
                hint="bind a %s to this option" % option.kind.cell.__name__,
                option=option,
                group=group,
            ))


def register(context, group, handler=None, /):
    """
    register an option group with the context.

    parameters
    - group: OptionGroup
    - handler: Handler | str | None
      • None → the group joins the registry (no-op when already there).
      • otherwise → the group is linked to the FUNCTION option bound to that
        handler id in any already registered group. the group itself does not
        join the registry.

    raises (via context.trigger)
    - MalformedOptionError / InvalidDestinationError for bad options.
    - RegistryFullError when the registry is at capacity.
    - UnresolvedHandlerError when no registered option is bound to the handler.
    """
    if not isinstance(group, OptionGroup):
        raise TypeError("register() argument must be an option group")
    id = handler_id(handler)
    sink = context.sink

    sink.debug("attempting to register %r to options registry" % group.name)
    _validate(context, group)

    if id is not None:
        sink.debug("looking for option bound to handler %r" % id)
        parent = None
        for registered in context._groups:
            for option in registered.table:
                if option.binds(id):
                    option.linked = group
                    parent = option
                    break
        if parent is None:
            context.trigger(UnresolvedHandlerError(
                "couldn't find an option bound to handler %r for %r" % (id, group.name),
                title="unresolved handler",
                hint="register the group holding the function option first",
                handler=id,
                group=group,
            ))
        sink.debug("registered options %r to function %r" % (group.name, parent.name))
        return

    if any(registered is group for registered in context._groups):
        sink.debug("options %r were already in the registry; nothing happened" % group.name)
        return

    if len(context._groups) >= context.capacity:
        context.trigger(RegistryFullError(
            "can't register any more option groups (capacity %d)" % context.capacity,
            title="registry full",
            hint="raise the context capacity or merge option groups",
            group=group,
        ))

    context._groups.append(group)
    sink.debug("registered options %r; registry now has %d groups" % (group.name, len(context._groups)))


__all__ = (
    "register",
)

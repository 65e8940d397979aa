"""
Tabargs faults (setup errors, parse errors, help requests) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for every way a registration
  or a parse can end early. Codes are grouped by domain so logs stay searchable.
- ArgsFault: base type carrying message + options; knows how to render itself
  with rich and how to surface itself (raise, or print and exit).
- SetupError / ParseError: the two fatal families. Setup errors are programmer
  errors in option tables; parse errors are user errors on the command line.
- HelpRequested: not an error. It ends a parse after help was rendered and
  exits with a success status in shell mode.
- trigger(): central entry point to surface any fault.

Exit statuses
- HelpRequested → 0
- every other fault → 1

Integration
- The engine never calls sys.exit itself. It builds a fault and hands it to
  Context.trigger(), which merges the context's runtime flags (shell, colorful)
  and calls trigger(). Outside shell mode the fault is raised so callers (and
  tests) can catch it; in shell mode it is printed and the process exits.
"""
import os
import sys
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.text import Text

from .utils import *

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes (stable identifiers).

    grouping
    - setup (2110x)
      • MALFORMED_OPTION, INVALID_DESTINATION, REGISTRY_FULL,
        UNRESOLVED_HANDLER, UNBOUND_DESTINATION
    - parse (2111x)
      • STRAY_ARGUMENT, MISSING_ARGUMENT, UNRECOGNIZED_OPTION,
        INVALID_VALUE, TOO_MANY_ARGUMENTS
    - help (2120x)
      • HELP_REQUESTED

    normalize() lets the host remap codes through a __codes__ mapping in __main__.
    """
    # --- setup errors (2110x) ---
    MALFORMED_OPTION    = 21101
    INVALID_DESTINATION = 21102
    REGISTRY_FULL       = 21103
    UNRESOLVED_HANDLER  = 21104
    UNBOUND_DESTINATION = 21105

    # --- parse errors (2111x) ---
    STRAY_ARGUMENT      = 21111
    MISSING_ARGUMENT    = 21112
    UNRECOGNIZED_OPTION = 21113
    INVALID_VALUE       = 21114
    TOO_MANY_ARGUMENTS  = 21115

    # --- help (2120x) ---
    HELP_REQUESTED      = 21201

    def normalize(self):
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class ArgsFault(Exception):
    """
    base fault.

    message is the one-line, lowercased description. options carry rendering
    context: code, title, hint, and whatever the raising site knows (token,
    index, option, group...). options are read-only; use __replace__ to derive
    a copy with more of them.
    """
    status = 1
    code = Unset

    def __init__(self, message=Unset, /, **options):
        assert isinstance(message, str | Unset)
        self.message = message
        self.options = MappingProxyType(options)

    def __str__(self):
        return coalesce(self.message, "")

    def __getattr__(self, name):
        # token/index/option/... context reads straight from options
        try:
            return self.__dict__["options"][name]
        except KeyError:
            raise AttributeError(name) from None

    def __rich__(self):
        main = __import__("__main__")
        colorful = self.options.get("colorful", False)

        styles = defaultdict(str, {
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "title": "bold #FF4DA6",  # friendly pinky title
            "message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        } | getattr(main, "__styles__", {}))

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if not colorful:
                return Text(str(fragment))
            return Text(str(fragment), styles[style])

        prog = getattr(main, "__prog__", os.path.basename(sys.argv[0]) or "tabargs")
        code = self.options.get("code", self.code)

        header = Text.assemble(
            "[ ",
            text(prog, "prog-name"),
            " — ",
            text(code.normalize() if code else "", "code"),
            " | ",
            text(str(self.options.get("title", "")).title(), "title"),
            " ]"
        )
        renders = [header, text(self.message, "message")]
        if hint := self.options.get("hint"):
            renders.append(Text.assemble(text(" → ", "hint-arrow"), text(hint, "hint")))
        return Group(*renders)

    def __trigger__(self):
        if not self.options.get("shell", False):
            raise self from None
        console.print(self)
        sys.exit(self.status)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})


class SetupError(ArgsFault):
    """
    malformed option tables and registry misuse (raised before any token is read).
    """


class MalformedOptionError(SetupError):
    code = FaultCode.MALFORMED_OPTION


class InvalidDestinationError(SetupError):
    code = FaultCode.INVALID_DESTINATION


class RegistryFullError(SetupError):
    code = FaultCode.REGISTRY_FULL


class UnresolvedHandlerError(SetupError):
    code = FaultCode.UNRESOLVED_HANDLER


class UnboundDestinationError(SetupError):
    code = FaultCode.UNBOUND_DESTINATION


class ParseError(ArgsFault):
    """
    user errors found while consuming the argument vector.
    """


class StrayArgumentError(ParseError):
    code = FaultCode.STRAY_ARGUMENT


class MissingArgumentError(ParseError):
    code = FaultCode.MISSING_ARGUMENT


class UnrecognizedOptionError(ParseError):
    code = FaultCode.UNRECOGNIZED_OPTION


class InvalidValueError(ParseError):
    code = FaultCode.INVALID_VALUE


class TooManyArgumentsError(ParseError):
    code = FaultCode.TOO_MANY_ARGUMENTS


class HelpRequested(ArgsFault):
    """
    help was rendered; the run ends successfully.

    in shell mode the help text is already on screen, so nothing is printed again.
    """
    status = 0
    code = FaultCode.HELP_REQUESTED

    def __trigger__(self):
        if not self.options.get("shell", False):
            raise self from None
        sys.exit(self.status)


def trigger(fault, /, **options):
    """
    surface a fault with the given runtime options.

    contract
    - fault must provide __trigger__ and __replace__ methods (see ArgsFault).
    - options are merged into the fault via __replace__(**options) before triggering.
    - in shell mode faults are printed and the process exits with fault.status;
      otherwise they are raised.
    """
    if (
        not hasattr(fault, "__trigger__") or
        not callable(fault.__trigger__) or
        not hasattr(fault, "__replace__") or
        not callable(fault.__replace__)
    ):
        raise TypeError("trigger() argument must have a __trigger__ and __replace__ methods")
    fault.__replace__(**options).__trigger__()


__all__ = (
    "FaultCode",
    "ArgsFault",
    "SetupError",
    "MalformedOptionError",
    "InvalidDestinationError",
    "RegistryFullError",
    "UnresolvedHandlerError",
    "UnboundDestinationError",
    "ParseError",
    "StrayArgumentError",
    "MissingArgumentError",
    "UnrecognizedOptionError",
    "InvalidValueError",
    "TooManyArgumentsError",
    "HelpRequested",
    "trigger",
)

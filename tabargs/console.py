"""
Tabargs print sink: severity-gated output for the option engine.

Scope
- Severity: ordered levels used to gate every line the engine produces.
- Sink: abstract collaborator the engine talks to. Implementations only have to
  provide emit(); headers, blocks and option lines are assembled on top of it.
- ConsoleSink: the default implementation, printing through rich consoles
  (stdout for regular lines, stderr for warnings and errors).

Styling
- ConsoleSink is plain by default. With colorful=True the palette below is
  applied; a host may override entries with a __styles__ mapping in __main__.

Layout constants
- NAME_WIDTH / TAG_WIDTH pad the help columns; descriptions are not padded:
  "    --name..................... [arg] description".
- CONSOLE_WIDTH bounds header rules.
"""
from abc import ABC, abstractmethod
from collections import defaultdict
from enum import IntEnum

from rich.console import Console
from rich.text import Text

from .utils import *

NAME_WIDTH = 25
TAG_WIDTH = 5
CONSOLE_WIDTH = 80


class Severity(IntEnum):
    """
    output severities, lowest first.

    a sink drops every line whose severity is below its configured level.
    help and regular program output use INFO, so the default level (INFO)
    keeps them and hides the engine's debug trace.
    """
    DEBUG = 10
    INFO = 20
    WARNING = 30
    ERROR = 40


class Sink(ABC):
    """
    Abstract print sink.

    Subclasses implement emit(); everything else is built from it so that a
    minimal sink (e.g. one collecting lines in a list) still renders help.
    """
    level = Severity.INFO

    @abstractmethod
    def emit(self, severity, text, /):
        """
        write one already formatted line at the given severity.
        """
        raise NotImplementedError

    def enabled(self, severity, /):
        return severity >= self.level

    def debug(self, text, /):
        self.emit(Severity.DEBUG, text)

    def info(self, text, /):
        self.emit(Severity.INFO, text)

    def warn(self, text, /):
        self.emit(Severity.WARNING, text)

    def error(self, text, /):
        self.emit(Severity.ERROR, text)

    def new_line(self):
        self.emit(Severity.INFO, "")

    def header(self, title, /):
        head = "═[ %s ]" % title
        self.emit(Severity.INFO, head + "═" * max(CONSOLE_WIDTH - len(head), 0))

    def sub_header(self, title, /):
        head = "─[ %s ]" % title
        self.emit(Severity.INFO, head + "─" * max(CONSOLE_WIDTH - len(head), 0))

    def block(self, text, /):
        self.emit(Severity.INFO, text)

    def option_line(self, name, tag, description, /):
        """
        one column-aligned help line: indent, name, tag, description.
        """
        self.emit(Severity.INFO, "    %-*s %-*s %s" % (NAME_WIDTH, name, TAG_WIDTH, tag, description or ""))


class ConsoleSink(Sink):
    """
    rich-backed sink.

    parameters
    - console: Console | Unset
      console used for every line. when Unset, stdout and stderr consoles are
      created (warnings and errors go to stderr).
    - level: Severity
      minimum severity that is printed.
    - colorful: bool
      apply the palette; otherwise lines are printed unstyled.
    """

    def __init__(self, console=Unset, /, *, level=Severity.INFO, colorful=False):
        self.level = Severity(level)
        self.colorful = bool(colorful)
        self.console = coalesce(console, Console(highlight=False))
        self.errors = coalesce(console, Console(stderr=True, highlight=False))
        self.styles = defaultdict(str, {
            "debug": "dim",
            "warning": "bold #FFB400",  # amber
            "error": "bold #FF4DA6",  # pinky red
            "header": "bold #FFD600",
            "rule": "#6B6F7A",
            "option-name": "bold #E6E6F0",
            "arg-tag": "#00E5FF",  # cyan, like [arg] in help
            "fnc-tag": "#22C55E",  # green, like [fnc] in help
            "filler": "dim",
            "description": "#C8C8D0",
        } | getattr(__import__("__main__"), "__styles__", {}))

    def _text(self, fragment, style="", /):
        if isinstance(fragment, Text):
            return fragment if self.colorful else Text(fragment.plain)
        if not self.colorful:
            return Text(str(fragment))
        return Text(str(fragment), self.styles[style])

    def emit(self, severity, text, /):
        if not self.enabled(severity):
            return
        match Severity(severity):
            case Severity.DEBUG:
                line = Text.assemble(self._text("debug: ", "debug"), self._text(text, "debug"))
            case Severity.WARNING:
                line = Text.assemble(self._text("warning: ", "warning"), self._text(text))
            case Severity.ERROR:
                line = Text.assemble(self._text("error: ", "error"), self._text(text))
            case _:
                line = self._text(text)
        console = self.errors if severity >= Severity.WARNING else self.console
        console.print(line, highlight=False, soft_wrap=True)

    def header(self, title, /):
        head = Text.assemble("═[ ", self._text(title, "header"), " ]")
        rule = self._text("═" * max(CONSOLE_WIDTH - len(head), 0), "rule")
        self.emit(Severity.INFO, Text.assemble(head, rule))

    def sub_header(self, title, /):
        head = Text.assemble("─[ ", self._text(title, "header"), " ]")
        rule = self._text("─" * max(CONSOLE_WIDTH - len(head), 0), "rule")
        self.emit(Severity.INFO, Text.assemble(head, rule))

    def option_line(self, name, tag, description, /):
        style = {"[arg]": "arg-tag", "[fnc]": "fnc-tag"}.get(tag, "filler")
        self.emit(Severity.INFO, Text.assemble(
            "    ",
            self._text(name.ljust(NAME_WIDTH), "option-name"),
            " ",
            self._text(tag.ljust(TAG_WIDTH), style),
            " ",
            self._text(description or "", "description"),
        ))


__all__ = (
    "Severity",
    "Sink",
    "ConsoleSink",
    "NAME_WIDTH",
    "TAG_WIDTH",
    "CONSOLE_WIDTH",
)

"""User-facing CLI output: data on stdout, diagnostics on stderr.

``specmock resolve`` and ``specmock routes`` are meant to be piped, so the
two streams never mix:

* **stdout** carries the data only: the resolved example or the route table.
* **stderr** carries everything else: the serve banner, errors, hints and
  ``--verbose`` detail.

The format is picked once per invocation. ``--json`` and ``--plain`` force
one; otherwise Rich is used when stdout is a terminal and colour is allowed
(``NO_COLOR``, ``TERM=dumb`` and ``--no-color`` all switch it off).

:func:`~specmock.app.main_callback` builds an :class:`OutputManager` and
installs it with :func:`set_output`; commands call the module-level helpers.
Request logs of the running server go through :mod:`logging` instead.
"""

from __future__ import annotations

import json
import os
import sys
from enum import Enum
from typing import Any, Optional

from rich.console import Console
from rich.syntax import Syntax
from rich.table import Table

from specmock.models import json_default


class OutputFormat(str, Enum):
    """How stdout data is rendered. ``AUTO`` becomes ``RICH`` or ``PLAIN``."""

    AUTO = "auto"
    JSON = "json"
    PLAIN = "plain"
    RICH = "rich"


# kind -> (plain template, rich template, hidden by --quiet)
_DIAGNOSTICS: dict[str, tuple[str, str, bool]] = {
    "info": ("{}", "{}", True),
    "success": ("{}", "[green]{}[/green]", True),
    "suggest": ("→ {}", "[dim]→ {}[/dim]", True),
    "error": ("Error: {}", "[bold red]Error:[/bold red] {}", False),
    "debug": ("[debug] {}", "[dim]\\[debug] {}[/dim]", False),
}


class OutputManager:
    """Renders data to stdout and diagnostics to stderr.

    Args:
        format: Requested format; ``AUTO`` is resolved immediately.
        no_color: Never emit colour or Rich markup.
        quiet: Hide info, success and suggestion lines.
        verbose: Show debug lines.
    """

    def __init__(
        self,
        format: OutputFormat = OutputFormat.AUTO,
        no_color: bool = False,
        quiet: bool = False,
        verbose: bool = False,
    ) -> None:
        self._no_color = no_color or _should_disable_color()
        self._quiet = quiet
        self._verbose = verbose
        self._format = _resolve_format(format, self._no_color)

        self._stdout = Console(
            file=sys.stdout,
            no_color=self._no_color,
            force_terminal=self._format is OutputFormat.RICH,
        )
        self._stderr = Console(file=sys.stderr, no_color=self._no_color, stderr=True)

    @property
    def format(self) -> OutputFormat:
        return self._format

    # --- stdout ---

    def format_response(self, data: Any) -> None:
        """Print a resolved example value.

        JSON mode always prints one valid JSON document, including for
        strings and ``None``, so the output can go straight into ``jq``.
        """
        if self._format is OutputFormat.JSON:
            self._write(_dumps(data))
        elif self._format is OutputFormat.RICH:
            if isinstance(data, str):
                self._stdout.print(data, markup=False)
            else:
                self._stdout.print(Syntax(_dumps(data), "json", word_wrap=True))
        else:
            for line in _plain_lines(data):
                self._write(line)

    def print_table(
        self,
        headers: list[str],
        rows: list[list[str]],
        title: Optional[str] = None,
    ) -> None:
        """Print rows as a Rich table, JSON records or tab-separated lines."""
        if self._format is OutputFormat.JSON:
            self._write(_dumps([dict(zip(headers, row)) for row in rows]))
            return

        if self._format is OutputFormat.PLAIN:
            for row in [headers, *rows]:
                self._write("\t".join(row))
            return

        table = Table(title=title, header_style="bold cyan")
        for header in headers:
            table.add_column(header)
        for row in rows:
            table.add_row(*row)
        self._stdout.print(table)

    # --- stderr ---

    def info(self, message: str) -> None:
        self._diagnostic("info", message)

    def success(self, message: str) -> None:
        self._diagnostic("success", message)

    def suggest(self, message: str) -> None:
        """Print a next-step hint, e.g. a ``curl`` line to try."""
        self._diagnostic("suggest", message)

    def error(self, message: str) -> None:
        """Print an error. Shown even with ``--quiet``."""
        self._diagnostic("error", message)

    def debug(self, message: str) -> None:
        """Print a detail line; only with ``--verbose``."""
        if self._verbose:
            self._diagnostic("debug", message)

    def _diagnostic(self, kind: str, message: str) -> None:
        plain, markup, quietable = _DIAGNOSTICS[kind]
        if quietable and self._quiet:
            return
        if self._no_color:
            print(plain.format(message), file=sys.stderr, flush=True)
        else:
            self._stderr.print(markup.format(message))

    def _write(self, text: str) -> None:
        print(text, file=sys.stdout, flush=True)


def _resolve_format(requested: OutputFormat, no_color: bool) -> OutputFormat:
    if requested is not OutputFormat.AUTO:
        return requested
    if _is_tty() and not no_color:
        return OutputFormat.RICH
    return OutputFormat.PLAIN


def _dumps(data: Any) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False, default=json_default)


def _plain_lines(data: Any) -> list[str]:
    """Flatten an example for ``--plain``: strings verbatim, objects as ``key<TAB>value``."""
    if isinstance(data, str):
        return [data]
    if isinstance(data, dict):
        return [f"{key}\t{_cell(value)}" for key, value in data.items()]
    if isinstance(data, list):
        return [
            "\t".join(_cell(v) for v in item.values()) if isinstance(item, dict) else _cell(item)
            for item in data
        ]
    return [_dumps(data)]


def _cell(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, (dict, list)):
        return json.dumps(value, ensure_ascii=False, default=json_default)
    return json_default(value)


def _is_tty() -> bool:
    return hasattr(sys.stdout, "isatty") and sys.stdout.isatty()


def _should_disable_color() -> bool:
    """True when ``NO_COLOR`` is set (to anything) or ``TERM=dumb``."""
    return "NO_COLOR" in os.environ or os.environ.get("TERM") == "dumb"


# --- global instance ---

_output: Optional[OutputManager] = None


def get_output() -> OutputManager:
    """Return the installed :class:`OutputManager`, creating a default one."""
    global _output
    if _output is None:
        _output = OutputManager()
    return _output


def set_output(output: OutputManager) -> None:
    global _output
    _output = output


def reset_output() -> None:
    """Forget the installed manager; the next :func:`get_output` builds a new one."""
    global _output
    _output = None


def format_response(data: Any) -> None:
    get_output().format_response(data)


def print_table(headers: list[str], rows: list[list[str]], title: Optional[str] = None) -> None:
    get_output().print_table(headers, rows, title)


def info(message: str) -> None:
    get_output().info(message)


def success(message: str) -> None:
    get_output().success(message)


def suggest(message: str) -> None:
    get_output().suggest(message)


def error(message: str) -> None:
    get_output().error(message)


def debug(message: str) -> None:
    get_output().debug(message)

"""Output of command results to the terminal.

JSON output is plain `json.dumps` on stdout so it can be piped. Text output
is a rich table projected onto the command's default properties.
"""

from __future__ import annotations

import json
import sys
from collections.abc import Mapping, Sequence
from typing import Any

from rich.console import Console
from rich.table import Table


def _cell(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, (dict, list)):
        return json.dumps(value)
    return str(value)


class ConsoleLogger:
    """CommandLogger writing to stdout/stderr.

    Args:
        output: "json" or "text".
        default_properties: Columns of text output; None shows every field
            of the first item.
        console: Console for text output (tests pass one with a StringIO file).
    """

    def __init__(
        self,
        output: str = "json",
        default_properties: Sequence[str] | None = None,
        console: Console | None = None,
    ) -> None:
        self._output = output
        self._default_properties = list(default_properties) if default_properties else None
        self._console = console or Console(highlight=False)

    def log(self, value: Any) -> None:
        if self._output == "json":
            self._console.print(json.dumps(value, indent=2), markup=False, soft_wrap=True)
            return
        self._console.print(self._render_text(value))

    def log_raw(self, value: Any) -> None:
        self._console.print(_cell(value), markup=False, soft_wrap=True)

    def log_to_stderr(self, value: Any) -> None:
        print(_cell(value), file=sys.stderr)

    def _render_text(self, value: Any) -> Any:
        if isinstance(value, Mapping):
            value = [value]
        if not isinstance(value, list) or not all(isinstance(v, Mapping) for v in value):
            return _cell(value)
        if not value:
            return ""

        columns = self._default_properties or list(value[0].keys())
        table = Table(show_header=True, header_style="bold")
        for column in columns:
            table.add_column(column)
        for item in value:
            table.add_row(*(_cell(item.get(column)) for column in columns))
        return table

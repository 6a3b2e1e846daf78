"""Console protocol shared by the deployment layer.

Deployment code only needs a handful of output methods; the CLI passes its
CLIConsole, anything else falls back to PlainConsole.
"""

from __future__ import annotations

from typing import Protocol

from rich.console import Console, ConsoleRenderable


class ConsoleLike(Protocol):
    def print(self, msg: ConsoleRenderable | str | None = None) -> None: ...

    def info(self, msg: str) -> None: ...

    def warn(self, msg: str) -> None: ...

    def error(self, msg: str) -> None: ...

    def ok(self, msg: str) -> None: ...


class PlainConsole:
    """Undecorated rich output; warnings and errors go to stderr."""

    def __init__(self) -> None:
        self._out = Console()
        self._err = Console(stderr=True)

    def print(self, msg: ConsoleRenderable | str | None = None) -> None:
        self._out.print(msg)

    def info(self, msg: str) -> None:
        self._out.print(msg, markup=False)

    def warn(self, msg: str) -> None:
        self._err.print(f"warning: {msg}", markup=False)

    def error(self, msg: str) -> None:
        self._err.print(f"error: {msg}", markup=False)

    def ok(self, msg: str) -> None:
        self._out.print(msg, markup=False)


def coalesce_console(console: ConsoleLike | None) -> ConsoleLike:
    return console if console is not None else PlainConsole()

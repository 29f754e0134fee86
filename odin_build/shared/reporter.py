"""Console reporting: labeled log lines and a single progress spinner.

Every line is rendered as ``[ORIGIN] > message`` so the operator can tell
which stage produced it. Debug lines are only printed when the reporter was
created in debug mode.
"""

from __future__ import annotations

from typing import Any

from rich.console import Console
from rich.status import Status
from rich.text import Text

SPINNER_NAME = "dots2"
SPINNER_STYLE = "red"
SPINNER_INDENT = 5
SUCCEED_SYMBOL = "✔"
FAIL_SYMBOL = "✖"

stdout_console = Console(highlight=False, soft_wrap=True)
stderr_console = Console(stderr=True, highlight=False, soft_wrap=True)


def _join(message: Any, args: tuple[Any, ...]) -> str:
    return " ".join(str(part) for part in (message, *args))


class Reporter:
    """Leveled writer bound to an origin label."""

    def __init__(
        self,
        origin: str,
        debug: bool = False,
        *,
        console: Console | None = None,
        err_console: Console | None = None,
    ) -> None:
        self.origin = origin
        self.debug_mode = debug
        self._console = console or stdout_console
        self._err_console = err_console or stderr_console

    def _format(self, message: str, style: str) -> Text:
        return Text.assemble(
            (f"[{self.origin}]", "bright_black"),
            (" > ", "bold"),
            (message, style),
        )

    def plain(self, message: Any, *args: Any) -> None:
        self._console.print(self._format(_join(message, args), "bright_black"))

    def info(self, message: Any, *args: Any) -> None:
        self._console.print(self._format(_join(message, args), "bright_cyan"))

    def error(self, message: Any, *args: Any) -> None:
        self._err_console.print(self._format(_join(message, args), "bright_red"))

    def debug(self, message: Any, *args: Any) -> None:
        if not self.debug_mode:
            return
        line = Text("(DEBUG) ", style="dim")
        line.append_text(self._format(_join(message, args), "bright_blue"))
        self._console.print(line)

    def blank(self, lines: int = 1) -> None:
        for _ in range(lines):
            self._console.print()


class Spinner:
    """Start/succeed/fail progress indicator.

    The animated part is transient and only drawn on a terminal; the
    succeed/fail lines are always printed.
    """

    def __init__(self, console: Console | None = None) -> None:
        self._console = console or stdout_console
        self._status: Status | None = None
        self.text = ""

    @property
    def active(self) -> bool:
        return self._status is not None

    def start(self, text: str) -> None:
        self.text = text
        if self._status is None:
            self._status = Status(
                text,
                console=self._console,
                spinner=SPINNER_NAME,
                spinner_style=SPINNER_STYLE,
            )
            self._status.start()
        else:
            self._status.update(text)

    def stop(self) -> None:
        if self._status is not None:
            self._status.stop()
            self._status = None

    def _finish(self, symbol: str, style: str, text: str | None) -> None:
        self.stop()
        line = Text(" " * SPINNER_INDENT)
        line.append(symbol, style=style)
        line.append(f" {text or self.text}")
        self._console.print(line)

    def succeed(self, text: str | None = None) -> None:
        self._finish(SUCCEED_SYMBOL, "green", text)

    def fail(self, text: str | None = None) -> None:
        self._finish(FAIL_SYMBOL, "red", text)

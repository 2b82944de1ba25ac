"""The top-level application and the terminal loop that drives it."""

from __future__ import annotations

import os
import posixpath
import queue
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any

import blessed

from homegoing.config_model import ConfigModel
from homegoing.tui import (
    Cmd,
    KeyBinding,
    KeyMsg,
    QuitMsg,
    Style,
    WindowSizeMsg,
    help_view,
    quit_cmd,
)

VERSION_TEXT = "homegoing v0.1.1"


@dataclass(frozen=True)
class AppKeys:
    """Key bindings handled by the application itself."""

    quit: KeyBinding = KeyBinding(("q", "ctrl+c"), "q", "quit")
    help: KeyBinding = KeyBinding(("?",), "?", "toggle help")


@dataclass
class App:
    """Root model: the configuration view, help line and error reporting."""

    config_path: str
    keys: AppKeys = field(default_factory=AppKeys)
    height: int = 0
    help_width: int = 0
    error: Exception | None = None
    quitting: bool = False
    config: ConfigModel = field(init=False)

    def __post_init__(self) -> None:
        self.config = ConfigModel(self.config_path)

    def short_help(self) -> list[KeyBinding]:
        ck = self.config.keys
        return [self.keys.quit, ck.up, ck.down, ck.refresh, ck.link, ck.unlink]

    def full_help(self) -> list[list[KeyBinding]]:
        ck = self.config.keys
        return [[self.keys.quit, self.keys.help], [ck.refresh], [ck.link, ck.unlink]]

    def init(self) -> Cmd:
        return self.config.init()

    def update(self, msg: Any) -> Cmd | None:
        """Apply a message; returns the follow-up command, if any."""
        if isinstance(msg, Exception):
            self.error = msg
            return None
        if isinstance(msg, WindowSizeMsg):
            self.height = msg.height
            self.help_width = msg.width
        elif isinstance(msg, KeyMsg):
            self.error = None
            if self.keys.quit.matches(msg):
                self.quitting = True
                return quit_cmd
        return self.config.update(msg)

    def view(self) -> str:
        version_view = Style(foreground="0", align="right", width=self.help_width).render(
            VERSION_TEXT
        )
        head = version_view + "\n"
        if self.quitting:
            return f"{head}A fatal error occurred: {self.error}" if self.error else ""

        config_view = self.config.view()
        help_text = help_view(self.short_help(), self.help_width)
        error_text = f"  An error has occurred:\n  {self.error}" if self.error else ""
        padding = self.height - 2 - sum(
            text.count("\n") for text in (config_view, version_view, help_text)
        ) - (1 if self.error else 0)
        return head + config_view + error_text + "\n" * max(padding, 0) + help_text


def _key_name(key: Any) -> str:
    if key.is_sequence:
        return (key.name or "").removeprefix("KEY_").lower()
    text = str(key)
    if len(text) == 1 and ord(text) < 32:
        return "ctrl+" + chr(ord(text) + 96)
    return text


def run(app: App) -> App:
    """Drive ``app`` in the terminal's alternate screen until it quits."""
    term = blessed.Terminal()
    messages: queue.Queue[Any] = queue.Queue()

    with ThreadPoolExecutor(max_workers=8) as executor:

        def execute(cmd: Cmd) -> None:
            try:
                result = cmd()
            except Exception as exc:
                result = exc
            if isinstance(result, tuple):
                for sub in result:
                    dispatch(sub)
            elif result is not None:
                messages.put(result)

        def dispatch(cmd: Cmd | None) -> None:
            if cmd is not None:
                executor.submit(execute, cmd)

        with term.fullscreen(), term.cbreak(), term.hidden_cursor():
            size = (term.width, term.height)
            messages.put(WindowSizeMsg(*size))
            dispatch(app.init())
            shown = None
            running = True
            while running:
                while running and not messages.empty():
                    msg = messages.get()
                    if isinstance(msg, QuitMsg):
                        running = False
                    else:
                        dispatch(app.update(msg))

                screen = app.view()
                if screen != shown:
                    print(term.home + term.clear + screen, end="", flush=True)
                    shown = screen
                if not running:
                    break

                if (term.width, term.height) != size:
                    size = (term.width, term.height)
                    messages.put(WindowSizeMsg(*size))
                try:
                    key = term.inkey(timeout=0.05)
                except KeyboardInterrupt:
                    messages.put(KeyMsg("ctrl+c"))
                    continue
                if key:
                    messages.put(KeyMsg(_key_name(key)))
    return app


def main(argv: list[str] | None = None) -> int:
    """Start the interface on the configuration in the working directory."""
    try:
        cwd = os.getcwd()
    except OSError as exc:
        print(f"Error while getting current working directory: {exc}", end="")
        return 1
    try:
        run(App(posixpath.join(cwd, "dotfiles.toml")))
    except Exception as exc:
        print(f"Unexpected error occured: {exc}", end="")
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
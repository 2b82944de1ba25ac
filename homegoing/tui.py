"""Small building blocks for the terminal interface: keys, messages, commands and styles.

A command is a callable taking no arguments that returns a message (or None).
A message may be any object. One produced by ``batch`` is a tuple of
commands, which the runner executes one by one.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any

Cmd = Callable[[], Any]

_RESET = "\x1b[0m"
_ALIGNMENTS = ("left", "right", "center")


@dataclass(frozen=True)
class KeyMsg:
    """A key press, named the way bindings name keys ("q", "ctrl+c", ...)."""

    key: str


@dataclass(frozen=True)
class WindowSizeMsg:
    """The terminal's current size."""

    width: int
    height: int


@dataclass(frozen=True)
class QuitMsg:
    """Asks the program to stop."""


def quit_cmd() -> QuitMsg:
    """Command that stops the program."""
    return QuitMsg()


def batch(*args: Cmd | None) -> Cmd | None:
    """Combine commands into one; ``None`` entries are dropped."""
    cmds = tuple(cmd for cmd in args if cmd is not None)
    if not cmds:
        return None
    if len(cmds) == 1:
        return cmds[0]

    def run_all() -> tuple[Cmd, ...]:
        return cmds

    return run_all


@dataclass(frozen=True)
class KeyBinding:
    """A set of keys that trigger one action, with its help text."""

    keys: tuple[str, ...]
    help_key: str = ""
    help_desc: str = ""

    def matches(self, key: KeyMsg | str) -> bool:
        name = key.key if isinstance(key, KeyMsg) else key
        return name in self.keys


def _sgr_color(color: str, background: bool) -> str:
    number = int(color)
    if number < 8:
        return str((40 if background else 30) + number)
    if number < 16:
        return str((100 if background else 90) + number - 8)
    return f"{48 if background else 38};5;{number}"


@dataclass(frozen=True)
class Style:
    """Terminal text style: colours as ANSI palette numbers, faintness, width and alignment."""

    foreground: str | None = None
    background: str | None = None
    faint: bool = False
    width: int = 0
    align: str = "left"

    def __post_init__(self) -> None:
        if self.align not in _ALIGNMENTS:
            raise ValueError(f"unknown alignment: {self.align!r}")

    def _codes(self) -> list[str]:
        codes = []
        if self.faint:
            codes.append("2")
        if self.foreground is not None:
            codes.append(_sgr_color(self.foreground, background=False))
        if self.background is not None:
            codes.append(_sgr_color(self.background, background=True))
        return codes

    def _pad(self, line: str) -> str:
        if self.width <= len(line):
            return line
        if self.align == "right":
            return line.rjust(self.width)
        if self.align == "center":
            return line.center(self.width)
        return line.ljust(self.width)

    def render(self, text: str) -> str:
        """Apply the style to every line of ``text``, padding lines to the width."""
        codes = self._codes()
        prefix = f"\x1b[{';'.join(codes)}m" if codes else ""
        lines = []
        for line in text.split("\n"):
            padded = self._pad(line)
            lines.append(f"{prefix}{padded}{_RESET}" if prefix else padded)
        return "\n".join(lines)


def help_view(bindings: Iterable[KeyBinding], width: int) -> str:
    """One-line help: "key desc" entries separated by bullets, cut to ``width``."""
    separator = " • "
    ellipsis = " …"
    out: list[str] = []
    total = 0
    for binding in bindings:
        if not binding.help_key and not binding.help_desc:
            continue
        sep = separator if out else ""
        item = f"{sep}{binding.help_key} {binding.help_desc}"
        if width > 0 and total + len(item) > width:
            if total + len(ellipsis) < width:
                out.append(ellipsis)
            break
        total += len(item)
        out.append(item)
    return "".join(out)
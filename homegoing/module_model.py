"""Interface model for a single dotfile module."""

from __future__ import annotations

import itertools
import threading
from dataclasses import dataclass, field
from typing import Any

from homegoing.module import DotModule, LinkStatus
from homegoing.tui import Cmd, Style

_ids = itertools.count(1)
_id_lock = threading.Lock()


def next_id() -> int:
    """Return a fresh identifier, unique within the process."""
    with _id_lock:
        return next(_ids)


@dataclass(frozen=True)
class StatusMsg:
    """The link status of the model with the given id has been read."""

    id: int
    status: LinkStatus


@dataclass(frozen=True)
class LinkedMsg:
    """A link or unlink of the model with the given id has finished."""

    id: int


_MARKERS = {
    LinkStatus.UNLINKED: "[ ] ",
    LinkStatus.LINKED: "[\U000f012c] ",
    LinkStatus.EXISTS_CONFLICT: "[!] ",
    LinkStatus.TARGET_CONFLICT: "[!] ",
    LinkStatus.UNKNOWN: "[?] ",
}

_TAG_STYLE = Style(foreground="7", faint=True)


@dataclass
class ModuleModel:
    """A dotfile module together with its last known link status."""

    module: DotModule
    id: int = field(default_factory=next_id)
    status: LinkStatus = LinkStatus.UNKNOWN

    @property
    def name(self) -> str:
        return self.module.name

    @property
    def tags(self) -> tuple[str, ...]:
        return self.module.tags

    def status_cmd(self) -> Cmd:
        def read_status() -> StatusMsg:
            return StatusMsg(self.id, self.module.link_status())

        return read_status

    def link_cmd(self, force: bool) -> Cmd:
        def link() -> Any:
            try:
                self.module.link(force)
            except OSError as exc:
                return exc
            return LinkedMsg(self.id)

        return link

    def unlink_cmd(self) -> Cmd:
        def unlink() -> Any:
            try:
                self.module.unlink()
            except OSError as exc:
                return exc
            return LinkedMsg(self.id)

        return unlink

    def init(self) -> Cmd:
        return self.status_cmd()

    def update(self, msg: Any) -> Cmd | None:
        """Apply a message; returns the follow-up command, if any."""
        if isinstance(msg, StatusMsg):
            if msg.id == self.id:
                self.status = msg.status
            return None
        if isinstance(msg, LinkedMsg):
            return self.status_cmd()
        return None

    def view(self) -> str:
        marker = _MARKERS.get(self.status, "")
        tags = _TAG_STYLE.render(f" [{', '.join(self.tags)}]")
        return f"{marker}{self.name}{tags}"
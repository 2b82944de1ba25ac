"""Interface model for the modules that share one tag."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from homegoing.module import LinkStatus
from homegoing.module_model import ModuleModel, next_id
from homegoing.tui import Cmd, KeyMsg, batch


@dataclass(frozen=True)
class InitTagMsg:
    """Asks the tag model with the given id to refresh its modules."""

    id: int


@dataclass
class TagModel:
    """A selectable list of modules under one tag.

    ``keys`` must provide ``up``, ``down``, ``link`` and ``unlink`` bindings.
    """

    tag: str
    modules: list[ModuleModel]
    keys: Any
    id: int = field(default_factory=next_id)
    status: LinkStatus = LinkStatus.UNKNOWN
    index: int = 0

    def init(self) -> Cmd:
        def start() -> InitTagMsg:
            return InitTagMsg(self.id)

        return start

    def update(self, msg: Any) -> Cmd | None:
        """Apply a message; returns the follow-up command, if any."""
        if isinstance(msg, InitTagMsg):
            if msg.id != self.id:
                return None
            self.index = 0
            return batch(*(module.init() for module in self.modules))

        if isinstance(msg, KeyMsg):
            keys = self.keys
            if keys.up.matches(msg):
                self.index = max(0, self.index - 1)
            elif keys.down.matches(msg):
                self.index = min(len(self.modules) - 1, self.index + 1)
            elif keys.link.matches(msg) and self.modules:
                return self.modules[self.index].link_cmd(False)
            elif keys.unlink.matches(msg) and self.modules:
                return self.modules[self.index].unlink_cmd()
        return None

    def view(self) -> str:
        markers = [">" if i == self.index else "" for i, _ in enumerate(self.modules)]
        width = max((len(m) for m in markers), default=0)
        lines = [
            f"{marker.rjust(width)} {module.view()}"
            for marker, module in zip(markers, self.modules)
        ]
        return "\n".join(lines) + "\n\n"
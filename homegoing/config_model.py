"""Interface model for a whole configuration: tag tabs over the module lists."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from homegoing.config import ConfigError, DotConfig, load_config
from homegoing.module_model import ModuleModel
from homegoing.tag_model import TagModel
from homegoing.tui import Cmd, KeyBinding, KeyMsg, Style, batch

_SELECTED_TAG_STYLE = Style(foreground="0", background="4")
_TAG_STYLE = Style(background="8")


@dataclass(frozen=True)
class ConfigLoadedMsg:
    """A configuration file has been read."""

    config: DotConfig


@dataclass(frozen=True)
class ConfigKeys:
    """Key bindings understood by the configuration view."""

    refresh: KeyBinding = KeyBinding(("r",), "r", "refresh")
    link: KeyBinding = KeyBinding(("i",), "i", "link")
    unlink: KeyBinding = KeyBinding(("u",), "u", "unlink")
    up: KeyBinding = KeyBinding(("k",), "k", "up")
    down: KeyBinding = KeyBinding(("j",), "j", "down")
    left: KeyBinding = KeyBinding(("h",), "h", "left")
    right: KeyBinding = KeyBinding(("l",), "l", "right")


@dataclass
class ConfigModel:
    """Loads a configuration file and shows its modules grouped by tag."""

    filepath: str
    keys: ConfigKeys = field(default_factory=ConfigKeys)
    config: DotConfig | None = None
    modules: list[ModuleModel] = field(default_factory=list)
    tags: list[TagModel] = field(default_factory=list)
    index: int = 0
    tag_index: int = 0

    def load_cmd(self) -> Cmd:
        def load() -> Any:
            try:
                return ConfigLoadedMsg(load_config(self.filepath))
            except ConfigError as exc:
                return exc

        return load

    def init(self) -> Cmd:
        return self.load_cmd()

    def _current(self) -> TagModel | None:
        return self.tags[self.tag_index] if 0 <= self.tag_index < len(self.tags) else None

    def _select_tag(self, tag_index: int) -> None:
        if not self.tags:
            return
        self.tag_index = tag_index
        current = self.tags[tag_index]
        self.index = min(self.index, len(current.modules) - 1)
        current.index = self.index

    def update(self, msg: Any) -> Cmd | None:
        """Apply a message; returns the follow-up command, if any."""
        current = self._current()
        if isinstance(msg, KeyMsg):
            keys = self.keys
            if keys.refresh.matches(msg):
                return self.load_cmd()
            if keys.left.matches(msg):
                self._select_tag(max(0, self.tag_index - 1))
                return None
            if keys.right.matches(msg):
                self._select_tag(min(len(self.tags) - 1, self.tag_index + 1))
                return None
            if keys.up.matches(msg) or keys.down.matches(msg):
                if current is None:
                    return None
                if keys.up.matches(msg):
                    self.index = max(0, self.index - 1)
                else:
                    self.index = min(len(current.modules) - 1, self.index + 1)
                return current.update(msg)
        elif isinstance(msg, ConfigLoadedMsg):
            return self._init_config(msg.config)

        tag_cmd = current.update(msg) if current is not None else None
        return batch(tag_cmd, batch(*(module.update(msg) for module in self.modules)))

    def _init_config(self, config: DotConfig) -> Cmd | None:
        self.config = config
        self.modules = [ModuleModel(module) for module in config]
        grouped: dict[str, list[ModuleModel]] = {"All": list(self.modules)}
        for model in self.modules:
            for tag in model.tags:
                grouped.setdefault(tag, []).append(model)
        self.tags = [TagModel(tag, grouped[tag], self.keys) for tag in sorted(grouped)]
        return batch(*(model.init() for model in self.modules))

    def view(self) -> str:
        parts = [" "]
        for i, tag in enumerate(self.tags):
            style = _SELECTED_TAG_STYLE if i == self.tag_index else _TAG_STYLE
            parts.append(style.render(f" {tag.tag} ({len(tag.modules)}) ") + " ")
        parts.append("\n\n")
        current = self._current()
        if current is not None:
            parts.append(current.view())
        return "".join(parts)
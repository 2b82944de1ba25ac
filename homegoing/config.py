"""Loading dotfile modules from a TOML configuration file."""

from __future__ import annotations

import os
import posixpath
import re
import tomllib
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from typing import Any

from homegoing.module import DotModule


class ConfigError(Exception):
    """The configuration file could not be read or is invalid."""


@dataclass(frozen=True)
class DotConfig:
    """The modules described by a configuration file, in file order."""

    modules: tuple[DotModule, ...] = ()

    def __len__(self) -> int:
        return len(self.modules)

    def __iter__(self) -> Iterator[DotModule]:
        return iter(self.modules)


_ENV = re.compile(r"\$(?:\{([^}]*)\}|(\{)|([*#$@!?\-0-9])|([A-Za-z0-9_]+))")


def _expand_env(text: str) -> str:
    """Replace $VAR and ${VAR} with environment values; unset ones become empty."""

    def replace(match: re.Match[str]) -> str:
        braced, bad, special, plain = match.groups()
        if bad is not None:
            return ""
        return os.environ.get(braced if braced is not None else special or plain, "")

    return _ENV.sub(replace, text)


def _join(*parts: str) -> str:
    present = "/".join(part for part in parts if part)
    if not present:
        return ""
    cleaned = posixpath.normpath(present)
    return "/" + cleaned.lstrip("/") if cleaned.startswith("//") else cleaned


def _base(p: str) -> str:
    if not p:
        return "."
    return p.rstrip("/").rsplit("/", 1)[-1] or "/"


def _resolve(p: str, parent: str) -> str:
    return _join(p) if posixpath.isabs(p) else _join(parent, p)


def _field(table: Mapping[str, Any], name: str, kind: type, default: Any) -> Any:
    value = table.get(name)
    if value is None:
        value = next((v for k, v in table.items() if k.lower() == name), None)
    if value is None:
        return default
    ok = isinstance(value, kind) if kind is str else (
        isinstance(value, list) and all(isinstance(v, kind) for v in value)
    )
    if not ok:
        raise ConfigError(f'Error loading config: field "{name}" has the wrong type.')
    return value


def _load_modules(
    group: Mapping[str, Any], parent_src: str, parent_dest: str
) -> Iterator[DotModule]:
    group_src = _resolve(_expand_env(_field(group, "src", str, "")), parent_src)
    group_dest = _resolve(_expand_env(_field(group, "dest", str, "")), parent_dest)

    for entry in _field(group, "modules", dict, []):
        raw_src = _field(entry, "src", str, "")
        if not raw_src:
            raise ConfigError(
                'Error loading modules from config: Missing field "src" on module object.'
            )
        src = _resolve(_expand_env(raw_src), group_src)
        dest = _expand_env(_field(entry, "dest", str, ""))
        name = _field(entry, "name", str, "") or _base(src)
        target = _field(entry, "target", str, "") or _base(src)
        dest = _join(dest, target) if posixpath.isabs(dest) else _join(group_dest, dest, target)
        tags = tuple(_field(entry, "tags", str, []))
        yield DotModule(src=src, dest=dest, name=name, target=target, tags=tags)

    for subgroup in _field(group, "groups", dict, []):
        yield from _load_modules(subgroup, group_src, group_dest)


def load_config(filepath: str | os.PathLike[str]) -> DotConfig:
    """Read a configuration file; relative paths in it are resolved against its directory."""
    path = os.fspath(filepath)
    if not posixpath.isabs(path):
        path = _join(os.getcwd(), path)
    try:
        with open(path, "rb") as handle:
            data = tomllib.load(handle)
    except (tomllib.TOMLDecodeError, OSError) as exc:
        raise ConfigError(f"Error loading config {path}: {exc}") from exc

    src_dir = posixpath.dirname(path) or "."
    return DotConfig(modules=tuple(_load_modules(data, src_dir, src_dir)))
"""Dotfile modules and the state of their symbolic links."""

from __future__ import annotations

import os
import posixpath
import shutil
import stat
from dataclasses import dataclass
from enum import IntEnum


class LinkStatus(IntEnum):
    """State of a module's destination relative to its source."""

    UNLINKED = 0
    EXISTS_CONFLICT = 1
    TARGET_CONFLICT = 2
    LINKED = 3
    UNKNOWN = 4

    def __str__(self) -> str:
        return _DESCRIPTIONS.get(self, "Unknown")


_DESCRIPTIONS = {
    LinkStatus.UNLINKED: "Unlinked",
    LinkStatus.EXISTS_CONFLICT: "A file or directory at the destination already exists",
    LinkStatus.TARGET_CONFLICT: "A symbolic link at the destination already exists",
    LinkStatus.LINKED: "Linked",
}


def _remove_all(target: str) -> None:
    """Remove a file, link or directory tree, ignoring failures."""
    try:
        if os.path.islink(target) or not os.path.isdir(target):
            os.remove(target)
        else:
            shutil.rmtree(target)
    except OSError:
        pass


@dataclass(frozen=True)
class DotModule:
    """A single dotfile: a source path that should be linked at a destination."""

    src: str
    dest: str
    name: str
    target: str
    tags: tuple[str, ...] = ()

    def link_status(self) -> LinkStatus:
        """Inspect the destination and report how it relates to the source."""
        try:
            info = os.lstat(self.dest)
        except OSError:
            return LinkStatus.UNLINKED

        if not stat.S_ISLNK(info.st_mode):
            return LinkStatus.EXISTS_CONFLICT

        try:
            pointee = os.readlink(self.dest)
        except OSError:
            return LinkStatus.TARGET_CONFLICT

        if pointee != self.src:
            return LinkStatus.TARGET_CONFLICT
        return LinkStatus.LINKED

    @property
    def is_linked(self) -> bool:
        return self.link_status() is LinkStatus.LINKED

    def link(self, force: bool = False) -> None:
        """Create the symbolic link, replacing whatever is there when forced.

        Raises OSError (FileExistsError when the destination is taken and
        ``force`` is false).
        """
        parent = posixpath.dirname(self.dest) or "."
        os.makedirs(parent, mode=0o700, exist_ok=True)

        try:
            os.symlink(self.src, self.dest)
        except FileExistsError:
            if not force:
                raise
            _remove_all(self.dest)
            os.symlink(self.src, self.dest)

    def unlink(self) -> None:
        """Remove the destination, but only if it is a link to this module."""
        if not self.is_linked:
            return
        os.remove(self.dest)
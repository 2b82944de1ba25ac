# homegoing

homegoing keeps your dotfiles in one place and links them into place with
symbolic links. You describe your files in a `dotfiles.toml` file, start
`homegoing` in that directory, and it shows each file with its link status
in a full-screen terminal interface. From there you link or unlink them.

## Installation

```
pip install .
```

Python 3.11 or later is required. The interface uses `blessed`.

## Configuration

Put a `dotfiles.toml` next to your dotfiles. Relative `src` paths are
resolved against the directory of the file, and so are relative `dest`
paths. Absolute paths are used as they are. Environment variables written
as `$NAME` or `${NAME}` are expanded; unset variables become empty.

```toml
dest = "$HOME"

[[modules]]
src = "bashrc"
target = ".bashrc"
tags = ["shell"]

[[groups]]
src = "config"
dest = "$HOME/.config"

  [[groups.modules]]
  src = "nvim"
  tags = ["editor"]

  [[groups.modules]]
  src = "alacritty"
  name = "terminal"
  tags = ["terminal"]
```

Each module has these fields:

- `src`: the file or directory to link. This field is required.
- `dest`: the directory to put the link in. A relative `dest` is joined to
  the group's `dest`; an absolute one is used alone.
- `target`: the file name of the link. It defaults to the base name of `src`.
- `name`: the name shown in the list. It defaults to the base name of `src`.
- `tags`: labels that group modules together in the interface.

The top level of the file is itself a group. A group can set its own `src`
and `dest`, relative to those of the group around it, and can hold further
`modules` and `groups`. A group's own modules come before those of its
subgroups.

## Usage

Run this in the directory that holds `dotfiles.toml`:

```
homegoing
```

Modules are shown under tabs, one for each tag plus an `All` tab, sorted by
name. The marks mean:

- `[ ]`: not linked
- `[󰄬]`: linked to this module's source
- `[!]`: a file, directory or other link is already at the destination
- `[?]`: status not yet known

Keys:

| key          | action                          |
|--------------|---------------------------------|
| `j`, `k`     | move down / up                  |
| `h`, `l`     | previous / next tag             |
| `i`          | link the selected module        |
| `u`          | unlink the selected module      |
| `r`          | reload `dotfiles.toml`          |
| `q`, `ctrl+c`| quit                            |

A help line at the bottom of the screen lists the main keys. Errors, such
as a destination that is already taken, are shown above it and cleared by
the next key press.

Linking from the interface never replaces what is already at the
destination. Unlinking removes a link only if it points at the module's
source; it never removes a real file.

## Library use

The linking logic works without the interface:

```python
from homegoing.config import load_config
from homegoing.module import LinkStatus

config = load_config("dotfiles.toml")
for module in config:
    print(module.name, module.link_status())
    if module.link_status() is LinkStatus.UNLINKED:
        module.link(force=False)
```

- `load_config(filepath)` returns a `DotConfig`, whose `modules` is a tuple
  of `DotModule` in file order; `len()` and iteration work on it directly.
  It raises `ConfigError` when the file cannot be read or parsed, when a
  module has no `src`, or when a field has the wrong type.
- `DotModule` has `src`, `dest`, `name`, `target` and `tags`.
- `DotModule.link_status()` returns a `LinkStatus`: `UNLINKED`,
  `EXISTS_CONFLICT`, `TARGET_CONFLICT` or `LINKED`.
- `DotModule.link(force)` creates the destination's parent directories and
  the link. It raises `FileExistsError` when the destination is taken,
  unless `force` is true, in which case whatever is there is removed first.
- `DotModule.unlink()` removes the link if it points at the source and
  does nothing otherwise.

## What it does not do

The `?` key is shown among the bindings but does nothing: there is no
expanded help view. The interface does not offer forced linking; use
`DotModule.link(force=True)` from Python for that.
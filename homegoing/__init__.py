"""Link dotfiles described in a TOML file, from Python or a terminal interface."""

__version__ = "0.1.1"
"""Screen-oriented terminal text editor."""

__all__ = [
    "actions",
    "buffer",
    "editor",
    "keymaps",
    "keys",
    "persistence",
    "runtime",
    "terminal",
    "view",
]

__version__ = "0.0.1"

"""Editor core of a graphical Neovim front-end: settings, redraw events and editor state."""

__version__ = "0.1.0"
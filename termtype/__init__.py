"""termtype: a terminal typing-speed trainer."""

__version__ = "0.3.0"

# app/errors.py


class TermtypeError(Exception):
    """Base class for errors raised by termtype."""


class ConfigurationError(TermtypeError):
    """Bad user choice, word list or settings file. Reported, then exit 1."""


class RenderFault(TermtypeError):
    """The terminal could not be drawn to. Not retried."""

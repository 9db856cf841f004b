"""Exceptions raised by the story engine."""


class StoryEngineError(Exception):
    """Base class for story engine errors."""


class ConfigurationError(StoryEngineError, ValueError):
    """
    Setup or content problem the engine cannot fix on its own.

    Raised for unknown story types, catalogs with no matching triad,
    missing beat templates and malformed triad records. Never retried.
    """

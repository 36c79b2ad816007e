"""Errors raised by ccbell."""


class ConfigError(ValueError):
    """Invalid ccbell configuration.

    Raised while loading configuration, never while deciding an event.
    The message names the offending field, e.g.
    ``events.stop.filters.pattern.regex: Input should be a valid regular expression``.
    """

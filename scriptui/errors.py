"""Exception types raised by scriptui."""


class ScriptUIError(Exception):
    """Base error for scriptui programmer errors."""


class UnknownThemeError(ScriptUIError, KeyError):
    """A theme name is not in the built-in theme table."""

    def __init__(self, name, available):
        self.name = name
        self.available = tuple(available)
        super().__init__(name)

    def __str__(self):
        return f"Unknown theme '{self.name}'. Available: {', '.join(self.available)}"


class DuplicateFieldKeyError(ScriptUIError, ValueError):
    """A keyed field was registered under a key that is already taken."""


class ConfigTypeError(ScriptUIError, TypeError):
    """A config value does not match the declared type of its field."""

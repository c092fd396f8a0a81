"""Exceptions raised while validating and resolving generation settings."""


class WorldGenError(Exception):
    """Base class for all world generation errors."""


class SettingsError(WorldGenError, ValueError):
    """Raised when generation settings are degenerate or inconsistent."""


class UnknownReferenceError(SettingsError, KeyError):
    """Raised when a settings entry references a name that was never declared."""

    def __init__(self, kind: str, name: str):
        self.kind = kind
        self.name = name
        super().__init__(f"unknown reference: {name}")

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return f"unknown reference: {self.name} ({self.kind})"

from __future__ import annotations


class ConfigError(ValueError):
    """Raised when a configuration cannot start a world."""

    def __init__(self, field: str, predicate: str):
        super().__init__(f"{field} must satisfy {predicate}")
        self.field = field
        self.predicate = predicate

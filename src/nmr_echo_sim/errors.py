from __future__ import annotations


class InvalidParameter(ValueError):
    """A simulation parameter that would make the model undefined (NaN/inf)."""

    def __init__(self, name: str, value, reason: str = "must be > 0"):
        self.name = name
        self.value = value
        super().__init__(f"{name}={value!r}: {reason}")

from __future__ import annotations


class DataError(Exception):
    """Base class for expected failures while loading dashboard data."""


class SourceUnavailable(DataError):
    def __init__(self, path: str, reason: str = "") -> None:
        self.path = path
        self.reason = reason
        message = f"Source unavailable: {path}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class MalformedSchema(DataError):
    def __init__(self, missing: list[str]) -> None:
        self.missing = list(missing)
        super().__init__(f"Missing expected columns: {self.missing}")


class UnparseableValue(DataError):
    def __init__(self, value: object) -> None:
        self.value = value
        super().__init__(f"Cannot parse number from {value!r}")

"""Sizing engine exceptions."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class ValidationIssue(BaseModel):
    """A business-rule violation found in caller input."""

    model_config = ConfigDict(frozen=True)

    code: str
    field: str
    message: str

    def __str__(self) -> str:
        return f"[{self.code}] {self.field}: {self.message}"


class SizingError(Exception):
    """Base exception for sizing engine errors."""


class TableLookupError(SizingError, LookupError):
    """Raised when a lookup table has no entry for a key.

    Signals a table configuration defect rather than bad caller input.
    """

    def __init__(self, table: str, key: object) -> None:
        self.table = table
        self.key = key
        label = getattr(key, "value", key)
        super().__init__(f"No entry for {label!r} in {table} table")


class SizingInputError(SizingError, ValueError):
    """Raised when caller input violates a business rule."""

    def __init__(self, issues: list[ValidationIssue] | ValidationIssue) -> None:
        if isinstance(issues, ValidationIssue):
            issues = [issues]
        self.issues = list(issues)
        super().__init__("; ".join(str(issue) for issue in self.issues))

    @property
    def fields(self) -> list[str]:
        return [issue.field for issue in self.issues]

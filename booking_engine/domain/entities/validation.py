from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class ErrorKind(str, Enum):
    VALIDATION = "validation"  # pick a different slot
    QUOTA_EXCEEDED = "quota_exceeded"  # pick a different day


@dataclass(frozen=True)
class ValidationResult:
    is_valid: bool
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    kind: ErrorKind | None = None

    @classmethod
    def ok(cls, warnings: list[str] | None = None) -> "ValidationResult":
        return cls(is_valid=True, errors=[], warnings=list(warnings or []))

    @classmethod
    def reject(cls, message: str, kind: ErrorKind = ErrorKind.VALIDATION) -> "ValidationResult":
        return cls(is_valid=False, errors=[message], warnings=[], kind=kind)

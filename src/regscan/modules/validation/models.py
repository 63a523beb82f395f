"""Structural validation results."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ValidationIssue:
    """One markup problem at a 1-based source position."""

    rule: str
    message: str
    line: int
    column: int
    selector: str | None = None


@dataclass(frozen=True, slots=True)
class ValidationResult:
    valid: bool
    errors: tuple[ValidationIssue, ...] = ()

    @classmethod
    def from_issues(cls, issues: list[ValidationIssue]) -> ValidationResult:
        ordered = tuple(sorted(issues, key=lambda issue: (issue.line, issue.column, issue.rule)))
        return cls(valid=not ordered, errors=ordered)

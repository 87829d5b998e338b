"""
Validation models — individual check results and the aggregate report.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class CheckStatus(str, Enum):
    PASS = "pass"
    WARNING = "warning"
    FAIL = "fail"


class CheckResult(BaseModel):
    """Outcome of one validation rule."""

    name: str
    status: CheckStatus
    message: str
    remedy: str | None = None

    @property
    def passed(self) -> bool:
        return self.status == CheckStatus.PASS

    @classmethod
    def ok(cls, name: str, message: str) -> CheckResult:
        return cls(name=name, status=CheckStatus.PASS, message=message)

    @classmethod
    def warn(cls, name: str, message: str, remedy: str | None = None) -> CheckResult:
        return cls(name=name, status=CheckStatus.WARNING, message=message, remedy=remedy)

    @classmethod
    def fail(cls, name: str, message: str, remedy: str | None = None) -> CheckResult:
        return cls(name=name, status=CheckStatus.FAIL, message=message, remedy=remedy)


class ValidationReport(BaseModel):
    """Ordered check results.

    A report is valid when no check failed. Warnings never flip validity.
    """

    checks: list[CheckResult] = Field(default_factory=list)

    @property
    def overall_valid(self) -> bool:
        return not any(c.status == CheckStatus.FAIL for c in self.checks)

    @property
    def errors(self) -> list[CheckResult]:
        return [c for c in self.checks if c.status == CheckStatus.FAIL]

    @property
    def warnings(self) -> list[CheckResult]:
        return [c for c in self.checks if c.status == CheckStatus.WARNING]

    def get(self, name: str) -> CheckResult | None:
        """Look up a check by name."""
        for check in self.checks:
            if check.name == name:
                return check
        return None

    def to_dict(self) -> dict:
        return {
            "valid": self.overall_valid,
            "errors": len(self.errors),
            "warnings": len(self.warnings),
            "checks": [c.model_dump(mode="json") for c in self.checks],
        }

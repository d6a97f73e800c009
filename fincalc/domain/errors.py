"""Recoverable business-rule failures raised by the calculation engine.

Every failure carries a short machine-readable ``kind`` so the HTTP layer can
report it next to the form without parsing messages.
"""

from __future__ import annotations


class CalculationError(ValueError):
    kind = "CalculationError"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"error": self.kind, "message": self.message}


class InvalidRate(CalculationError):
    kind = "InvalidRate"


class DegenerateLoan(CalculationError):
    kind = "DegenerateLoan"


class InvalidHorizon(CalculationError):
    kind = "InvalidHorizon"


class NoRealSolution(CalculationError):
    kind = "NoRealSolution"


class NotSupported(CalculationError):
    kind = "NotSupported"


class InvalidGoal(CalculationError):
    kind = "InvalidGoal"


class IncompleteParameters(CalculationError):
    """Raised when a solve request leaves more than one variable unknown."""

    kind = "IncompleteParameters"

    def __init__(self, missing: list[str]):
        super().__init__("missing values for: " + ", ".join(missing))
        self.missing = missing

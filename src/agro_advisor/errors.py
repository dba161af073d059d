"""Exception hierarchy for the decision engine.

Incomplete weather data is never an exception: accumulation flags such days
and the suitability evaluator reports their factors as ``Unknown``. The errors
below are reserved for lookup mistakes, malformed configuration, and
programming errors.
"""

from __future__ import annotations


class AgroAdvisorError(Exception):
    """Base class for all engine errors."""


class PestModelNotFoundError(AgroAdvisorError, LookupError):
    """Raised when a pest/disease identifier is not in the registry."""

    def __init__(self, pest_id: str, available: list[str] | None = None) -> None:
        self.pest_id = pest_id
        self.available = sorted(available or [])
        msg = f"Unknown pest/disease model: {pest_id!r}"
        if self.available:
            msg += f" (available: {', '.join(self.available)})"
        super().__init__(msg)


class StageTableError(AgroAdvisorError, ValueError):
    """Raised when a pest model's stage table fails load-time validation."""


class ThresholdGapError(AgroAdvisorError, RuntimeError):
    """Raised when a value matches no tier of a threshold guideline.

    Threshold tables are validated to cover the whole real line, so this
    signals a bug in the table or the classifier rather than bad input.
    """

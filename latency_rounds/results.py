from typing import List, Optional, Sequence

from pydantic import BaseModel, Field, model_validator


class RequestResult(BaseModel):
    """Outcome of a single timed request: a status code or an error, never both."""

    id: int = Field(ge=1)
    round: int = Field(ge=1)
    duration_ms: float = Field(ge=0)
    status: Optional[int] = None
    error: Optional[str] = None

    @model_validator(mode="after")
    def _exactly_one_outcome(self):
        if (self.status is None) == (self.error is None):
            raise ValueError("exactly one of status or error must be set")
        return self

    @property
    def ok(self) -> bool:
        return self.status is not None

    def is_slow(self, threshold_ms: float) -> bool:
        return self.duration_ms > threshold_ms


class RoundSummary(BaseModel):
    round: int
    total: int
    slow_count: int
    average_ms: float
    max_ms: float
    error_count: int
    threshold_ms: float

    @classmethod
    def from_results(
        cls, round: int, results: Sequence[RequestResult], threshold_ms: float
    ) -> "RoundSummary":
        """Aggregate a settled batch. Failed requests still count toward the average."""
        if not results:
            raise ValueError(f"round {round} produced no results")
        durations: List[float] = [r.duration_ms for r in results]
        return cls(
            round=round,
            total=len(results),
            slow_count=sum(1 for r in results if r.is_slow(threshold_ms)),
            average_ms=sum(durations) / len(durations),
            max_ms=max(durations),
            error_count=sum(1 for r in results if not r.ok),
            threshold_ms=threshold_ms,
        )

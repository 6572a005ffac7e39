"""
Result envelope returned by fit().

The envelope is the same for every run; what a run learned lives in the
typed `params` payload, so LogisticSolution can expose it with properties.
"""

from dataclasses import dataclass, field
from typing import TypeVar, Generic, Any

P = TypeVar('P')  # payload


@dataclass(frozen=True)
class Result(Generic[P]):
    """
    Frozen record of one training run.

    Attributes:
        params: What the run produced (LogisticParams for fit())
        info: Run settings, e.g. {'method': 'gradient_ascent', 'steps': 2000}
        timing: Timer.result() of the run, or None when untimed
        backend_name: Name of the routine that did the work
        warnings: Messages for problems that did not stop the run, such as
            a log-likelihood that went to -inf
    """
    params: P
    info: dict[str, Any]
    timing: dict[str, float] | None
    backend_name: str
    warnings: tuple[str, ...] = field(default_factory=tuple)

    def has_warning(self, substring: str) -> bool:
        """True if some warning message contains `substring`."""
        return any(substring in message for message in self.warnings)

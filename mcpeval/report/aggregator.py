"""
Result Aggregator - Collect outcomes, summarize them, write the artifact

The console summary and the JSON artifact are both derived from the same
outcome list held by the aggregator.
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

from ..runner.outcome import (
    ErrorOutcome,
    FailedOutcome,
    FailureReason,
    PassedOutcome,
    TestOutcome,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SuiteSummary:
    """Counts over a run's outcomes"""
    total: int
    passed: int
    failed_message: int
    failed_tool: int
    failed_parameters: int
    errored: int

    @property
    def failed(self) -> int:
        return self.failed_message + self.failed_tool + self.failed_parameters

    @property
    def accuracy(self) -> Optional[int]:
        """Pass percentage rounded to an integer, None when there are no outcomes"""
        if self.total == 0:
            return None
        return round(100 * self.passed / self.total)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total": self.total,
            "passed": self.passed,
            "failed": {
                FailureReason.MESSAGE.value: self.failed_message,
                FailureReason.TOOL.value: self.failed_tool,
                FailureReason.PARAMETERS.value: self.failed_parameters,
            },
            "errored": self.errored,
            "accuracy": self.accuracy,
        }


class ResultAggregator:
    """
    Accumulates one outcome per test case.

    Example:
        aggregator = ResultAggregator()
        aggregator.extend(await runner.run_all(cases))
        print(aggregator.render_summary())
        aggregator.write_results("mcp-eval-results.json")
    """

    def __init__(self, outcomes: Optional[Iterable[TestOutcome]] = None):
        self._outcomes: List[TestOutcome] = []
        if outcomes:
            self.extend(outcomes)

    def add(self, outcome: TestOutcome) -> None:
        if not isinstance(outcome, (PassedOutcome, FailedOutcome, ErrorOutcome)):
            raise TypeError(f"Unknown outcome type: {type(outcome).__name__}")
        self._outcomes.append(outcome)

    def extend(self, outcomes: Iterable[TestOutcome]) -> None:
        for outcome in outcomes:
            self.add(outcome)

    @property
    def outcomes(self) -> Tuple[TestOutcome, ...]:
        return tuple(self._outcomes)

    def __len__(self) -> int:
        return len(self._outcomes)

    def summary(self) -> SuiteSummary:
        passed = errored = 0
        failed = {reason: 0 for reason in FailureReason}

        for outcome in self._outcomes:
            if isinstance(outcome, PassedOutcome):
                passed += 1
            elif isinstance(outcome, FailedOutcome):
                failed[outcome.reason] += 1
            elif isinstance(outcome, ErrorOutcome):
                errored += 1
            else:
                raise TypeError(f"Unknown outcome type: {type(outcome).__name__}")

        return SuiteSummary(
            total=len(self._outcomes),
            passed=passed,
            failed_message=failed[FailureReason.MESSAGE],
            failed_tool=failed[FailureReason.TOOL],
            failed_parameters=failed[FailureReason.PARAMETERS],
            errored=errored,
        )

    def render_summary(self) -> str:
        """Human-readable summary with a categorized failure breakdown"""
        summary = self.summary()
        accuracy = "n/a" if summary.accuracy is None else f"{summary.accuracy}%"

        lines = [
            "",
            "=" * 70,
            "TEST RESULTS SUMMARY",
            "=" * 70,
            f"Accuracy: {accuracy}",
            f"Total: {summary.total}  |  Passed: {summary.passed}  |  "
            f"Failed: {summary.failed}  |  Errors: {summary.errored}",
            f"  No tool called:      {summary.failed_message}",
            f"  Wrong tool:          {summary.failed_tool}",
            f"  Wrong parameters:    {summary.failed_parameters}",
        ]

        sections = [
            (FailureReason.MESSAGE, "NO TOOL CALLED"),
            (FailureReason.TOOL, "WRONG TOOL"),
            (FailureReason.PARAMETERS, "WRONG PARAMETERS"),
        ]
        for reason, title in sections:
            failures = [
                o for o in self._outcomes
                if isinstance(o, FailedOutcome) and o.reason == reason
            ]
            if not failures:
                continue
            lines.append("")
            lines.append(f"{title}:")
            for outcome in failures:
                lines.append(f"  {outcome.name}")
                lines.append(f"    expected: {_format_value(outcome.expected)}")
                lines.append(f"    actual:   {_format_value(outcome.actual)}")

        errors = [o for o in self._outcomes if isinstance(o, ErrorOutcome)]
        if errors:
            lines.append("")
            lines.append("ERRORS:")
            for outcome in errors:
                lines.append(f"  {outcome.name}: {outcome.message}")

        lines.append("=" * 70)
        return "\n".join(lines)

    def to_records(self) -> List[Dict[str, Any]]:
        return [outcome.to_dict() for outcome in self._outcomes]

    def write_results(self, path: Union[str, Path]) -> Path:
        """
        Write every outcome as a JSON array, overwriting any previous file.

        Returns:
            The path written to
        """
        path = Path(path)
        if path.parent != Path("."):
            path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(self.to_records(), f, indent=2, ensure_ascii=False, default=str)
            f.write("\n")
        logger.info(f"Results written to {path}")
        return path


def _format_value(value: Any, limit: int = 300) -> str:
    text = value if isinstance(value, str) else json.dumps(value, ensure_ascii=False, default=str)
    if len(text) > limit:
        return text[:limit] + "..."
    return text

"""Collapse duplicate outcome rows into one record per outcome."""

from __future__ import annotations

import logging
import statistics
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field

from outcome_map.config import AGG_METHODS
from outcome_map.exceptions import ConfigurationError
from outcome_map.schema import AggregatedOutcome, NormalizedRow

logger = logging.getLogger(__name__)

Reducer = Callable[[Sequence[float]], float]

REDUCERS: dict[str, Reducer] = {
    "average": statistics.fmean,
    "median": statistics.median,
    "first": lambda values: values[0],
    "max": max,
    "min": min,
}


@dataclass
class _Group:
    outcome_text: str
    focus_label: str = ""
    importance: list[float] = field(default_factory=list)
    satisfaction: list[float] = field(default_factory=list)
    sample_size: int = 0

    def add(self, row: NormalizedRow) -> None:
        self.sample_size += 1
        if not self.focus_label and row.focus_label:
            self.focus_label = row.focus_label
        if row.importance is not None:
            self.importance.append(row.importance)
        if row.satisfaction is not None:
            self.satisfaction.append(row.satisfaction)


def outcome_key(text: str) -> str:
    """Grouping key: trimmed, single-spaced, case-folded."""
    return " ".join(text.split()).casefold()


def aggregate(rows: Iterable[NormalizedRow], method: str = "average") -> list[AggregatedOutcome]:
    """Merge rows sharing an outcome key, in first-appearance order.

    Importance and satisfaction are reduced independently over the values
    actually present; a field with no values at all becomes ``0.0`` and is
    flagged in ``warnings``.
    """
    reducer = _reducer(method)
    groups: dict[str, _Group] = {}
    for row in rows:
        key = outcome_key(row.outcome_text)
        group = groups.get(key)
        if group is None:
            group = groups[key] = _Group(outcome_text=row.outcome_text)
        group.add(row)

    return [_collapse(group, reducer) for group in groups.values()]


def passthrough(rows: Iterable[NormalizedRow]) -> list[AggregatedOutcome]:
    """One outcome per row, used when aggregation is disabled."""
    outcomes = []
    for row in rows:
        group = _Group(outcome_text=row.outcome_text)
        group.add(row)
        outcomes.append(_collapse(group, REDUCERS["first"]))
    return outcomes


def _reducer(method: str) -> Reducer:
    name = (method or "").strip().lower()
    if name not in REDUCERS:
        raise ConfigurationError(
            f"Unsupported aggregation method: {method!r} (expected one of {', '.join(AGG_METHODS)})"
        )
    return REDUCERS[name]


def _collapse(group: _Group, reducer: Reducer) -> AggregatedOutcome:
    warnings: list[str] = []
    importance = _reduce(group.importance, reducer)
    if importance is None:
        warnings.append("importance_missing")
    satisfaction = _reduce(group.satisfaction, reducer)
    if satisfaction is None:
        warnings.append("satisfaction_missing")
    if warnings:
        logger.warning("outcome %r has no usable values for %s", group.outcome_text, ", ".join(warnings))

    return AggregatedOutcome(
        outcome_text=group.outcome_text,
        focus_label=group.focus_label,
        importance=importance if importance is not None else 0.0,
        satisfaction=satisfaction if satisfaction is not None else 0.0,
        sample_size=group.sample_size,
        warnings=tuple(warnings),
    )


def _reduce(values: list[float], reducer: Reducer) -> float | None:
    if not values:
        return None
    return float(reducer(values))

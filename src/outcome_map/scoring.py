"""Opportunity scoring."""

from collections.abc import Iterable

from outcome_map.schema import AggregatedOutcome, ScoredOutcome


def opportunity_score(importance: float, satisfaction: float) -> float:
    """Importance plus the unmet gap, clamped so over-satisfaction never subtracts.

    No range check here: out-of-scale inputs give out-of-scale scores.
    """
    return importance + max(importance - satisfaction, 0.0)


def score(outcome: AggregatedOutcome) -> float:
    return opportunity_score(outcome.importance, outcome.satisfaction)


def score_outcomes(outcomes: Iterable[AggregatedOutcome]) -> list[ScoredOutcome]:
    """Attach the opportunity score to each outcome, keeping order."""
    return [
        ScoredOutcome(**outcome.model_dump(), opportunity_score=score(outcome))
        for outcome in outcomes
    ]

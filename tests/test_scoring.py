"""Tests for opportunity scoring."""

import pytest

from outcome_map.schema import AggregatedOutcome
from outcome_map.scoring import opportunity_score, score, score_outcomes


@pytest.mark.parametrize(
    ("importance", "satisfaction"),
    [(5.0, 5.0), (5.0, 9.0), (1.0, 10.0), (7.25, 7.5)],
)
def test_no_bonus_when_satisfied(importance, satisfaction):
    """Over-satisfied outcomes should score exactly their importance."""
    assert opportunity_score(importance, satisfaction) == importance


@pytest.mark.parametrize(
    ("importance", "satisfaction"),
    [(9.0, 2.0), (7.75, 3.75), (5.0, 4.5), (10.0, 0.0)],
)
def test_gap_bonus_when_underserved(importance, satisfaction):
    """Underserved outcomes should get the unmet gap as a bonus."""
    assert opportunity_score(importance, satisfaction) == 2 * importance - satisfaction


def test_out_of_scale_inputs_are_not_validated():
    assert opportunity_score(20.0, 5.0) == 35.0


def test_score_outcomes_keeps_order_and_fields():
    outcomes = [
        AggregatedOutcome(outcome_text="a", importance=5.0, satisfaction=8.0, sample_size=1),
        AggregatedOutcome(outcome_text="b", focus_label="Job", importance=9.0, satisfaction=2.0, sample_size=3),
    ]

    scored = score_outcomes(outcomes)

    assert [item.outcome_text for item in scored] == ["a", "b"]
    assert scored[0].opportunity_score == 5.0
    assert scored[1].opportunity_score == 16.0
    assert scored[1].focus_label == "Job"
    assert scored[1].sample_size == 3
    assert score(outcomes[1]) == 16.0

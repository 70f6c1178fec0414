"""Tests for schema models."""

import pytest
from pydantic import ValidationError

from outcome_map import AggregatedOutcome, MapDataset, NormalizedRow


def test_normalized_row_requires_outcome_text():
    with pytest.raises(ValidationError):
        NormalizedRow(outcome_text="")


def test_normalized_row_scores_default_to_absent():
    row = NormalizedRow(outcome_text="Find nearby options")

    assert row.focus_label == ""
    assert row.importance is None
    assert row.satisfaction is None


def test_aggregated_outcome_sample_size_must_be_positive():
    with pytest.raises(ValidationError):
        AggregatedOutcome(outcome_text="a", importance=1.0, satisfaction=1.0, sample_size=0)


def test_map_dataset_json_round_trip():
    payload = {
        "outcomes": [
            {
                "outcome_text": "Find nearby options",
                "focus_label": "Viajar",
                "importance": 7.75,
                "satisfaction": 3.75,
                "sample_size": 2,
                "warnings": [],
                "opportunity_score": 11.75,
            }
        ],
        "metadata": {
            "source_name": "resultado.csv",
            "generated_at": "2026-03-01T00:00:00Z",
            "encoding": "utf-8",
            "rows_read": 2,
            "rows_dropped": 0,
            "outcomes_after_aggregation": 1,
        },
    }

    dataset = MapDataset.model_validate(payload)

    assert dataset.outcomes[0].opportunity_score == 11.75
    assert dataset.metadata.sort_by == "input"
    assert MapDataset.model_validate_json(dataset.model_dump_json()) == dataset

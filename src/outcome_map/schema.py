"""Data models for outcome-map."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

SortKey = Literal["input", "opportunity_score", "importance", "satisfaction"]


class NormalizedRow(BaseModel):
    """One survey response after header matching and number coercion."""

    model_config = ConfigDict(frozen=True)

    outcome_text: str = Field(min_length=1)
    focus_label: str = ""
    importance: float | None = None
    satisfaction: float | None = None
    line_number: int | None = None


class AggregatedOutcome(BaseModel):
    """One record per distinct outcome."""

    model_config = ConfigDict(frozen=True)

    outcome_text: str
    focus_label: str = ""
    importance: float
    satisfaction: float
    sample_size: int = Field(ge=1)
    warnings: tuple[str, ...] = ()


class ScoredOutcome(AggregatedOutcome):
    """Aggregated outcome with its opportunity score attached."""

    opportunity_score: float


class MapMetadata(BaseModel):
    """Build information shipped alongside the outcomes."""

    model_config = ConfigDict(frozen=True)

    source_name: str
    generated_at: datetime
    encoding: str
    rows_read: int = Field(ge=0)
    rows_dropped: int = Field(ge=0)
    outcomes_after_aggregation: int = Field(ge=0)
    aggregated: bool = True
    agg_method: str | None = "average"
    sort_by: SortKey = "input"


class MapDataset(BaseModel):
    """Terminal artifact handed to the renderer."""

    model_config = ConfigDict(frozen=True)

    outcomes: tuple[ScoredOutcome, ...]
    metadata: MapMetadata

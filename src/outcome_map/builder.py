"""Assemble the dataset consumed by the renderer."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime, timezone

from outcome_map.exceptions import ConfigurationError, EmptyDatasetError
from outcome_map.schema import MapDataset, MapMetadata, ScoredOutcome, SortKey

SORT_KEYS: tuple[str, ...] = ("input", "opportunity_score", "importance", "satisfaction")


@dataclass(frozen=True)
class SourceMeta:
    source_name: str
    encoding: str
    rows_read: int
    rows_dropped: int
    aggregated: bool = True
    agg_method: str | None = "average"


def build_map(
    outcomes: Sequence[ScoredOutcome],
    source: SourceMeta,
    *,
    sort_by: SortKey | None = None,
    generated_at: datetime | None = None,
) -> MapDataset:
    """Build the final dataset.

    Outcome order is kept unless ``sort_by`` names a field, in which case
    outcomes are sorted by it, highest first. Ties keep input order.

    Raises:
        EmptyDatasetError: If no outcome survived the pipeline.
    """
    if not outcomes:
        raise EmptyDatasetError(
            f"No outcomes left in {source.source_name}: "
            f"{source.rows_read} rows read, {source.rows_dropped} dropped"
        )

    sort_key = sort_by or "input"
    if sort_key not in SORT_KEYS:
        raise ConfigurationError(f"Unsupported sort key: {sort_by!r} (expected one of {', '.join(SORT_KEYS)})")

    ordered = list(outcomes)
    if sort_key != "input":
        ordered.sort(key=lambda item: getattr(item, sort_key), reverse=True)

    metadata = MapMetadata(
        source_name=source.source_name,
        generated_at=generated_at or datetime.now(timezone.utc),
        encoding=source.encoding,
        rows_read=source.rows_read,
        rows_dropped=source.rows_dropped,
        outcomes_after_aggregation=len(ordered),
        aggregated=source.aggregated,
        agg_method=source.agg_method if source.aggregated else None,
        sort_by=sort_key,
    )
    return MapDataset(outcomes=tuple(ordered), metadata=metadata)

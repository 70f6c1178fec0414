"""outcome-map: Turn survey exports into scored outcome-map datasets."""

from outcome_map.config import ParserConfig
from outcome_map.core import build_outcome_map, generate, parse_bytes, parse_file
from outcome_map.schema import AggregatedOutcome, MapDataset, MapMetadata, NormalizedRow, ScoredOutcome

__version__ = "0.1.0"

__all__ = [
    "build_outcome_map",
    "generate",
    "parse_bytes",
    "parse_file",
    "AggregatedOutcome",
    "MapDataset",
    "MapMetadata",
    "NormalizedRow",
    "ParserConfig",
    "ScoredOutcome",
    "__version__",
]

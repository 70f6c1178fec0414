"""Header matching rules for survey exports."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

Field = Literal["focus", "outcome", "importance", "satisfaction"]
MatchType = Literal["contains", "exact"]


@dataclass(frozen=True)
class HeaderRule:
    field: Field
    stem: str
    match_type: MatchType = "contains"

    def matches(self, normalized_header: str) -> bool:
        if self.match_type == "exact":
            return normalized_header == self.stem
        return self.stem in normalized_header


# Evaluated top to bottom. A header claimed by an earlier rule is not
# offered to later ones, so "Satisfaction score" never feeds importance
# through the "score" fallback.
HEADER_RULES: tuple[HeaderRule, ...] = (
    HeaderRule("focus", "focus job", "exact"),
    HeaderRule("focus", "focus"),
    HeaderRule("satisfaction", "satisf"),
    HeaderRule("importance", "import"),
    HeaderRule("outcome", "outcom"),
    HeaderRule("importance", "score"),
)

FIELDS: tuple[Field, ...] = ("focus", "outcome", "importance", "satisfaction")

"""Parser configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace

from outcome_map.exceptions import ConfigurationError

ENCODING_MODES = ("auto", "utf-8", "iso-8859-1")
DECIMAL_SEPARATORS = (",", ".")
AGG_METHODS = ("average", "median", "first", "max", "min")
DELIMITERS = (",", ";", "\t", "|")

_ENCODING_ALIASES = {
    "utf8": "utf-8",
    "utf_8": "utf-8",
    "latin-1": "iso-8859-1",
    "latin1": "iso-8859-1",
    "iso8859-1": "iso-8859-1",
    "iso-8859_1": "iso-8859-1",
}
_METHOD_ALIASES = {"mean": "average", "avg": "average"}
_DELIMITER_ALIASES = {"tab": "\t", "\\t": "\t", "comma": ",", "semicolon": ";", "pipe": "|"}


def _parse_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class ParserConfig:
    """Options consumed by the parser stage.

    The same immutable value is handed to every stage of a build, so two
    builds with different settings never share state.
    """

    encoding: str = "auto"
    decimal_sep: str = ","
    aggregate: bool = True
    agg_method: str = "average"
    delimiter: str | None = None

    def __post_init__(self) -> None:
        encoding = (self.encoding or "auto").strip().lower()
        encoding = _ENCODING_ALIASES.get(encoding, encoding)
        if encoding not in ENCODING_MODES:
            raise ConfigurationError(
                f"Unsupported encoding: {self.encoding!r} (expected one of {', '.join(ENCODING_MODES)})"
            )

        if self.decimal_sep not in DECIMAL_SEPARATORS:
            raise ConfigurationError(f"Unsupported decimal separator: {self.decimal_sep!r} (expected ',' or '.')")

        method = (self.agg_method or "average").strip().lower()
        method = _METHOD_ALIASES.get(method, method)
        if method not in AGG_METHODS:
            raise ConfigurationError(
                f"Unsupported aggregation method: {self.agg_method!r} (expected one of {', '.join(AGG_METHODS)})"
            )

        delimiter = self.delimiter
        if delimiter is not None:
            delimiter = _DELIMITER_ALIASES.get(delimiter.lower(), delimiter) if delimiter else None
            if delimiter is not None and delimiter not in DELIMITERS:
                raise ConfigurationError(f"Unsupported delimiter: {self.delimiter!r}")

        # frozen dataclass: canonical values are written back through object.__setattr__
        object.__setattr__(self, "encoding", encoding)
        object.__setattr__(self, "agg_method", method)
        object.__setattr__(self, "delimiter", delimiter)
        object.__setattr__(self, "aggregate", bool(self.aggregate))

    def replace(self, **changes: object) -> "ParserConfig":
        return replace(self, **changes)

    @classmethod
    def from_env(cls) -> "ParserConfig":
        return cls(
            encoding=os.getenv("OUTCOME_MAP_ENCODING", "auto"),
            decimal_sep=os.getenv("OUTCOME_MAP_DECIMAL_SEP", ","),
            aggregate=_parse_bool(os.getenv("OUTCOME_MAP_AGGREGATE"), True),
            agg_method=os.getenv("OUTCOME_MAP_AGG_METHOD", "average"),
            delimiter=os.getenv("OUTCOME_MAP_DELIMITER") or None,
        )

"""Tests for byte decoding."""

import pytest

from outcome_map.encoding import decode, resolve
from outcome_map.exceptions import EncodingError


def test_utf8_mode_decodes_accents():
    raw = "Satisfação;Importância\n".encode("utf-8")

    assert resolve(raw, "utf-8") == "Satisfação;Importância\n"


def test_utf8_mode_rejects_latin1_bytes():
    raw = "Satisfação".encode("latin-1")

    with pytest.raises(EncodingError):
        resolve(raw, "utf-8")


def test_latin1_mode_always_decodes():
    raw = bytes(range(256))

    text = resolve(raw, "iso-8859-1")

    assert len(text) == 256


def test_auto_prefers_utf8():
    raw = "Importância".encode("utf-8")

    result = decode(raw, "auto")

    assert result.text == "Importância"
    assert result.encoding == "utf-8"
    assert result.fallback is False


def test_auto_falls_back_to_latin1():
    raw = "Importância".encode("latin-1")

    result = decode(raw, "auto")

    assert result.text == "Importância"
    assert result.encoding == "iso-8859-1"
    assert result.fallback is True


def test_auto_matches_forced_latin1():
    raw = "Outcome;Satisfação\nAchar opções;7\n".encode("latin-1")

    assert resolve(raw, "auto") == resolve(raw, "iso-8859-1")


def test_utf8_bom_is_removed():
    raw = "\ufeffOutcome,Importance\n".encode("utf-8")

    assert resolve(raw, "auto").startswith("Outcome")
    assert resolve(raw, "utf-8").startswith("Outcome")

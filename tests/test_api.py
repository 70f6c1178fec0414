"""Tests for the HTTP upload endpoint."""

from fastapi.testclient import TestClient

from api.index import app

client = TestClient(app)

CSV = "Outcomes;Importância;Satisfação\nFind nearby options;7,5;3\nfind nearby options;8;4,5\nComparar preços;9;2\n"


def _upload(raw, filename="resultado.csv", **params):
    files = {"file": (filename, raw, "text/csv")}
    return client.post("/outcome-map", files=files, params=params)


def test_health():
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"ok": True}


def test_outcome_map_latin1_upload():
    """Latin-1 uploads should decode and aggregate like files on disk."""
    r = _upload(CSV.encode("latin-1"))

    assert r.status_code == 200
    data = r.json()
    assert data["metadata"]["source_name"] == "resultado.csv"
    assert data["metadata"]["encoding"] == "iso-8859-1"
    assert [item["outcome_text"] for item in data["outcomes"]] == ["Find nearby options", "Comparar preços"]
    assert data["outcomes"][0]["opportunity_score"] == 11.75


def test_outcome_map_sorted():
    r = _upload(CSV.encode("utf-8"), sort="opportunity_score")

    assert r.status_code == 200
    assert r.json()["outcomes"][0]["outcome_text"] == "Comparar preços"


def test_outcome_map_rejects_non_csv():
    r = _upload(b"irrelevant", filename="resultado.xlsx")

    assert r.status_code == 422


def test_outcome_map_rejects_empty_upload():
    r = _upload(b"")

    assert r.status_code == 400


def test_outcome_map_bad_config():
    r = _upload(CSV.encode("utf-8"), agg_method="mode")

    assert r.status_code == 400


def test_outcome_map_empty_dataset():
    r = _upload(b"Outcome;Importance\n;8\n")

    assert r.status_code == 422


def test_outcome_map_unexpected_error(mocker):
    mocker.patch("api.index.build_outcome_map", side_effect=RuntimeError("boom"))

    r = _upload(CSV.encode("utf-8"))

    assert r.status_code == 500
    assert r.json() == {"detail": "internal_error"}


def test_outcome_map_malformed_csv():
    r = _upload(b"Outcome;Importance\n" + b"x" * 200_000 + b";8\n", delimiter=";")

    assert r.status_code == 422

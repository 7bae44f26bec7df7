"""Tests for the api/sbt.py serverless handler."""

import importlib.util
import io
import json
from pathlib import Path

import pytest

_API_PATH = Path(__file__).parent.parent / "api" / "sbt.py"
_spec = importlib.util.spec_from_file_location("sbt_api", _API_PATH)
sbt_api = importlib.util.module_from_spec(_spec)
_spec.loader.exec_module(sbt_api)

CSV = (
    "depth,qt,fs,u2,sigma_vo_eff\n"
    "1.0,100,2,10,50\n"
    "2.0,200,1,20,80\n"
)


def _post(body):
    """Run do_POST on a handler wired to in-memory streams; return (status, payload)."""
    raw = body if isinstance(body, bytes) else json.dumps(body).encode()
    h = sbt_api.handler.__new__(sbt_api.handler)
    h.headers = {"Content-Length": str(len(raw))}
    h.rfile = io.BytesIO(raw)
    h.wfile = io.BytesIO()
    sent = {}
    h.send_response = lambda code, message=None: sent.setdefault("status", code)
    h.send_header = lambda key, value: None
    h.end_headers = lambda: None

    h.do_POST()
    return sent["status"], json.loads(h.wfile.getvalue())


class TestSuccess:
    def test_records(self):
        status, payload = _post({"records": [
            {"depth": 1.0, "qt": 100, "fs": 2, "u2": 10, "sigma_vo_eff": 50},
        ]})

        assert status == 200
        assert [len(s["x"]) for s in payload["series"]] == [1, 49, 41, 37]
        assert payload["series"][0]["x"] == [pytest.approx(2.0)]
        assert payload["warnings"] == []

    def test_csv(self):
        status, payload = _post({"csv": CSV, "name": "cpt1.csv"})

        assert status == 200
        assert [s["name"] for s in payload["series"]] == ["CPTu Data", "CD = 70", "IB = 22", "IB = 32"]
        assert payload["series"][0]["y"] == [pytest.approx(2.0), pytest.approx(2.5)]

    def test_custom_ib_values(self):
        status, payload = _post({"csv": CSV, "ib_values": [22]})
        assert status == 200
        assert len(payload["series"]) == 3


class TestClientErrors:
    def test_empty_records(self):
        status, payload = _post({"records": []})
        assert status == 400
        assert "No data" in payload["error"]

    def test_unparseable_csv(self):
        status, payload = _post({"csv": ""})
        assert status == 400
        assert payload["error"]

    @pytest.mark.parametrize("body", [
        {"records": [{"depth": 1, "qt": 1, "fs": 1, "u2": 1, "sigma_vo_eff": 1}], "ib_values": 22},
        {"records": [{"qt": 1}], "ib_values": ["abc"]},
        {"records": 5},
        {"records": [1, 2]},
        {"csv": 42},
        [1, 2, 3],
        b"not json",
    ])
    def test_malformed_body(self, body):
        status, payload = _post(body)
        assert status == 400
        assert payload["error"]


class TestServerError:
    def test_unexpected_exception(self, monkeypatch):
        def boom(dataset, settings):
            raise RuntimeError("renderer exploded")

        monkeypatch.setattr(sbt_api, "sbt_payload", boom)
        status, payload = _post({"csv": CSV})

        assert status == 500
        assert payload["error"] == "renderer exploded"

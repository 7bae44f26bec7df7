"""Vercel serverless function: SBT chart series for CPTu data."""

import json
import logging
import sys
from pathlib import Path
from http.server import BaseHTTPRequestHandler

# Add project root so we can import shared cptu_sbt/
sys.path.insert(0, str(Path(__file__).parent.parent))

from cptu_sbt.chart import NoDataLoadedError, sbt_payload
from cptu_sbt.config import ChartSettings
from cptu_sbt.loader import load_dataset
from cptu_sbt.sounding import Dataset

logger = logging.getLogger("cptu_sbt.api")


class BadRequest(ValueError):
    """Request body is not a usable SBT request."""


def parse_request(raw: bytes):
    """Decode a request body into (dataset, settings).

    Raises:
        BadRequest: Malformed JSON, wrong field types, or an unparseable csv.
    """
    try:
        body = json.loads(raw)
        if not isinstance(body, dict):
            raise BadRequest("Request body must be a JSON object")
        settings = ChartSettings(
            delimiter=body.get("delimiter"),
            ib_values=tuple(float(v) for v in body.get("ib_values", ChartSettings().ib_values)),
        )
        name = str(body.get("name", "request"))

        # Either inline records or raw delimited text
        if "csv" in body:
            if not isinstance(body["csv"], str):
                raise BadRequest("'csv' must be a string")
            result = load_dataset(body["csv"], source=name, settings=settings)
            if not result.success:
                raise BadRequest("; ".join(result.errors))
            return result.dataset, settings

        records = body.get("records", [])
        if not isinstance(records, list) or not all(isinstance(r, dict) for r in records):
            raise BadRequest("'records' must be a list of objects")
        return Dataset.from_dicts(records, source=name), settings

    except BadRequest:
        raise
    except (TypeError, AttributeError, ValueError) as e:
        raise BadRequest(f"Invalid request: {e}") from e


class handler(BaseHTTPRequestHandler):
    def do_POST(self):
        content_length = int(self.headers.get("Content-Length", 0))

        try:
            dataset, settings = parse_request(self.rfile.read(content_length))
            response = sbt_payload(dataset, settings)
            response["warnings"] = list(dataset.warnings)
            self._send(200, response)

        except (BadRequest, NoDataLoadedError) as e:
            self._send(400, {"error": str(e)})
        except Exception as e:
            logger.exception("SBT request failed")
            self._send(500, {"error": str(e)})

    def _send(self, status, payload):
        self.send_response(status)
        self.send_header("Content-Type", "application/json")
        self.end_headers()
        self.wfile.write(json.dumps(payload).encode())

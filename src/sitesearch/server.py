"""Local index endpoint: rebuilds the search index on every GET"""

import json
import logging
from datetime import datetime, timezone
from http.server import BaseHTTPRequestHandler, HTTPServer
from urllib.parse import parse_qs, urlparse

from pydantic import ValidationError

from sitesearch.config import Settings
from sitesearch.core.emit import IndexResponse, to_json
from sitesearch.core.log import GroupLogger
from sitesearch.core.models import ErrorPayload, IndexFilters
from sitesearch.core.pipeline import build_response


log = logging.getLogger(__name__)


def _json_error(status: int, error: str, message: str) -> IndexResponse:
    payload = ErrorPayload(error=error, message=message, timestamp=datetime.now(timezone.utc).isoformat())
    return IndexResponse(
        status=status,
        body=to_json(payload.model_dump()),
        headers={"Content-Type": "application/json"},
    )


def make_handler(settings: Settings, logger: GroupLogger) -> type[BaseHTTPRequestHandler]:
    """Request handler class bound to settings; paths mirror the generated artifact names."""
    envelope_route = "/" + settings.comprehensive_file.lstrip("/")
    index_route = "/" + settings.index_file.lstrip("/")

    class IndexRequestHandler(BaseHTTPRequestHandler):

        def send_index(self, response: IndexResponse) -> None:
            body = response.body.encode("utf-8")
            self.send_response(response.status)
            for name, value in response.headers.items():
                self.send_header(name, value)
            self.send_header("Content-Length", str(len(body)))
            self.send_header("Connection", "close")
            self.end_headers()
            self.wfile.write(body)

        def do_GET(self):
            parsed = urlparse(self.path)
            if parsed.path not in (envelope_route, index_route):
                self.send_index(_json_error(404, "not_found", f"No route for {parsed.path}"))
                return
            try:
                filters = IndexFilters.from_query(parse_qs(parsed.query))
            except ValidationError as e:
                self.send_index(_json_error(400, "invalid_filter", str(e)))
                return

            response = build_response(settings, filters, logger)
            if response.ok and parsed.path == index_route:
                response = IndexResponse(
                    status=200,
                    body=to_json(json.loads(response.body)["data"]),
                    headers=response.headers,
                )
            self.send_index(response)

        def log_message(self, format, *args):
            log.info("%s - %s", self.address_string(), format % args)

    return IndexRequestHandler


def make_server(settings: Settings, host: str = "127.0.0.1", port: int = 4321) -> HTTPServer:
    return HTTPServer((host, port), make_handler(settings, GroupLogger()))

"""PDF export endpoint for the task log and the maintenance schedule."""

from http.server import BaseHTTPRequestHandler
import json
from urllib.parse import parse_qs, urlparse

from equipcare.services.exports import export_view_pdf
from equipcare.services.record_store import get_record_store
from equipcare.utils.errors import ExportError
from equipcare.utils.logging import correlation_context, get_structured_logger, setup_logging

setup_logging()
logger = get_structured_logger(__name__)


class handler(BaseHTTPRequestHandler):
    """Vercel serverless function handler for PDF downloads."""

    def _send_error_json(self, status: int, message: str) -> None:
        self.send_response(status)
        self.send_header('Content-Type', 'application/json')
        self.end_headers()
        self.wfile.write(json.dumps({"error": message}).encode('utf-8'))

    def do_GET(self):
        """Handle GET ``?view=log|schedule``."""
        with correlation_context(self.headers.get('X-Correlation-ID')) as correlation_id:
            query = parse_qs(urlparse(self.path).query)
            view = query.get("view", ["log"])[0]
            try:
                filename, pdf = export_view_pdf(get_record_store(), view)
            except ExportError as e:
                logger.warning("Rejected export request", view=view, error=str(e))
                self._send_error_json(400, str(e))
                return
            except Exception as e:
                logger.error("Error rendering export", view=view, error=str(e), exc_info=True)
                self._send_error_json(500, "internal server error")
                return

            self.send_response(200)
            self.send_header('Content-Type', 'application/pdf')
            self.send_header('Content-Disposition', f'attachment; filename="{filename}"')
            self.send_header('Content-Length', str(len(pdf)))
            self.send_header('X-Correlation-ID', correlation_id)
            self.end_headers()
            self.wfile.write(pdf)
            logger.info("Export served", view=view, export_filename=filename, size_bytes=len(pdf))

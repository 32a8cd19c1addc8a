"""Maintenance task endpoint: list boards and the log, save and delete tasks."""

from http.server import BaseHTTPRequestHandler
import json
from typing import Any, Optional
from urllib.parse import parse_qs, urlparse

from equipcare.models.task import Cadence
from equipcare.services.record_store import get_record_store
from equipcare.services.task_collections import CadenceBoard, TaskCollection
from equipcare.services.task_log import TaskLogView
from equipcare.utils.errors import FormValidationError, RecordNotFoundError, RecordStoreError
from equipcare.utils.logging import correlation_context, get_structured_logger, setup_logging

setup_logging()
logger = get_structured_logger(__name__)


class BadRequest(ValueError):
    pass


class handler(BaseHTTPRequestHandler):
    """Vercel serverless function handler for maintenance tasks."""

    def _query(self) -> dict[str, str]:
        return {key: values[0] for key, values in parse_qs(urlparse(self.path).query).items()}

    def _cadence(self, query: dict[str, str], required: bool = True) -> Optional[Cadence]:
        raw = query.get("cadence")
        if not raw:
            if required:
                raise BadRequest("cadence is required")
            return None
        try:
            return Cadence.parse(raw)
        except ValueError as e:
            raise BadRequest(str(e)) from e

    def _read_json_body(self) -> dict[str, Any]:
        content_length = int(self.headers.get('Content-Length', 0))
        raw_body = self.rfile.read(content_length).decode('utf-8') if content_length > 0 else ""
        try:
            body = json.loads(raw_body) if raw_body else {}
        except json.JSONDecodeError as e:
            raise BadRequest(f"invalid JSON body: {e.msg}") from e
        if not isinstance(body, dict):
            raise BadRequest("JSON body must be an object")
        return body

    def _send_json(self, status: int, payload: dict[str, Any], correlation_id: str) -> None:
        body = json.dumps(payload).encode('utf-8')
        self.send_response(status)
        self.send_header('Content-Type', 'application/json')
        self.send_header('Content-Length', str(len(body)))
        self.send_header('X-Correlation-ID', correlation_id)
        self.end_headers()
        self.wfile.write(body)

    def _dispatch(self, action) -> None:
        with correlation_context(self.headers.get('X-Correlation-ID')) as correlation_id:
            try:
                status, payload = action()
            except BadRequest as e:
                logger.warning("Rejected maintenance task request", method=self.command, error=str(e))
                status, payload = 400, {"error": str(e)}
            except FormValidationError as e:
                logger.info("Task form rejected", method=self.command, invalid_fields=sorted(e.field_errors))
                status, payload = 422, {"errors": e.field_errors}
            except RecordNotFoundError as e:
                status, payload = 404, {"error": str(e)}
            except RecordStoreError as e:
                logger.error("Record store failure", method=self.command, error=str(e), exc_info=True)
                status, payload = 500, {"error": "storage failure"}
            except Exception as e:
                logger.error("Error handling maintenance task request", method=self.command, error=str(e), exc_info=True)
                status, payload = 500, {"error": "internal server error"}
            self._send_json(status, payload, correlation_id)

    def do_GET(self):
        """List one cadence board, or the sorted task log when no cadence is given."""
        def action():
            store = get_record_store()
            cadence = self._cadence(self._query(), required=False)
            if cadence is None:
                with TaskLogView(store) as log_view:
                    return 200, {"tasks": [entry.to_record() for entry in log_view.items]}
            with CadenceBoard(store, cadence) as board:
                return 200, {"cadence": cadence.value, "tasks": [task.to_record() for task in board.items]}

        self._dispatch(action)

    def do_POST(self):
        """Create a task, or update it when ``id`` is given."""
        def action():
            query = self._query()
            cadence = self._cadence(query)
            body = self._read_json_body()
            result = TaskCollection(get_record_store(), cadence).save(body, existing_id=query.get("id"))
            return (201 if result.created else 200), {
                "task": result.record.to_record(),
                "notice": result.notice.model_dump(),
                "redirectTo": result.redirect_to,
            }

        self._dispatch(action)

    def do_DELETE(self):
        """Delete a task from its board."""
        def action():
            query = self._query()
            cadence = self._cadence(query)
            task_id = query.get("id")
            if not task_id:
                raise BadRequest("id is required")
            notice = CadenceBoard(get_record_store(), cadence).delete(task_id)
            return 200, {"deleted": task_id, "notice": notice.model_dump()}

        self._dispatch(action)

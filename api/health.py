"""Health check endpoint."""

from http.server import BaseHTTPRequestHandler
import json

from equipcare.services.record_store import get_record_store


class handler(BaseHTTPRequestHandler):
    """Health check handler for Vercel serverless function; reports the storage backend in use."""

    def do_GET(self):
        store = get_record_store()
        payload = {
            "status": "ok",
            "service": "equipcare-hub",
            "storage": type(store.storage).__name__,
            "collections": len(store.storage.keys()),
        }
        body = json.dumps(payload).encode('utf-8')
        self.send_response(200)
        self.send_header('Content-Type', 'application/json')
        self.send_header('Content-Length', str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def do_POST(self):
        self.do_GET()

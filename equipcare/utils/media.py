"""Image upload helpers."""

import base64
import mimetypes
from pathlib import Path
from typing import Optional, Union

DEFAULT_MIME_TYPE = "application/octet-stream"


def encode_data_uri(source: Union[bytes, str, Path], mime_type: Optional[str] = None) -> str:
    """
    Encode an uploaded file as a ``data:`` URI for preview and storage.

    ``source`` is either raw bytes or a path; for paths the MIME type is
    guessed from the file name when not given.
    """
    if isinstance(source, (str, Path)):
        path = Path(source)
        payload = path.read_bytes()
        if mime_type is None:
            mime_type, _ = mimetypes.guess_type(path.name)
    else:
        payload = bytes(source)

    encoded = base64.b64encode(payload).decode("ascii")
    return f"data:{mime_type or DEFAULT_MIME_TYPE};base64,{encoded}"


def is_data_uri(value: Optional[str]) -> bool:
    """True for inline ``data:`` URIs."""
    return bool(value) and value.startswith("data:")

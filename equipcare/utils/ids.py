"""Record ID generation."""

from typing import Container

from ulid import ULID


def generate_record_id(prefix: str, taken: Container[str] = ()) -> str:
    """
    Generate a timestamp-derived record ID (ULID) with an entity prefix.

    ``taken`` holds the IDs already present in the target collection; a
    fresh ULID is drawn until the result is unused there.
    """
    while True:
        record_id = f"{prefix}{ULID()}"
        if record_id not in taken:
            return record_id

from __future__ import annotations

import uuid


def new_uuid() -> str:
    """Generate a UUID4 string."""
    return str(uuid.uuid4())


def new_local_id() -> str:
    """Generate a local_id for an upload queue item."""
    return new_uuid()


def new_batch_id() -> str:
    """Generate an id grouping the uploads of one enqueue() call."""
    return new_uuid()

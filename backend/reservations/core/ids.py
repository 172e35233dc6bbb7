"""Record id generation."""

from __future__ import annotations

import time
from uuid import uuid4


def new_id(prefix: str = "") -> str:
    """Return ``<prefix><epoch-ms>-<random suffix>``.

    The millisecond part keeps ids roughly sortable by creation time, the
    uuid4 suffix keeps two ids minted in the same millisecond distinct.
    """
    return f"{prefix}{int(time.time() * 1000)}-{uuid4().hex[:8]}"

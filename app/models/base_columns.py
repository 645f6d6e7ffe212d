from __future__ import annotations

import uuid
from datetime import datetime


def new_uuid() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.utcnow()

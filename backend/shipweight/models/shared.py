"""Column types and defaults shared by all models."""

import uuid
from typing import Any

from sqlalchemy import String, TypeDecorator
from sqlalchemy.engine import Dialect

DEFAULT_ORGANIZATION_ID = uuid.UUID("00000000-0000-0000-0000-000000000001")


class UUIDType(TypeDecorator[uuid.UUID]):
    """UUID stored as its 36-character string form, so SQLite and PostgreSQL agree."""

    impl = String(36)
    cache_ok = True

    def process_bind_param(self, value: Any, dialect: Dialect) -> str | None:
        if value is None:
            return None
        return str(value if isinstance(value, uuid.UUID) else uuid.UUID(value))

    def process_result_value(self, value: Any, dialect: Dialect) -> uuid.UUID | None:
        if value is None or isinstance(value, uuid.UUID):
            return value
        return uuid.UUID(value)


def generate_uuid() -> uuid.UUID:
    return uuid.uuid4()

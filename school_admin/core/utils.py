from typing import Optional
from uuid import UUID


def parse_id(value) -> Optional[UUID]:
    """Record id from a query string value; None when it is not a valid id."""
    if value is None:
        return None
    if isinstance(value, UUID):
        return value
    try:
        return UUID(str(value))
    except ValueError:
        return None

from fastapi import Depends, HTTPException, Request

from school_admin.core.exceptions import ServiceError, StoreUnavailableError
from school_admin.db.connection import ConnectionManager


def get_connection(request: Request) -> ConnectionManager:
    """Connection manager created by the application lifespan."""
    return request.app.state.connection


def require_store(connection: ConnectionManager = Depends(get_connection)) -> ConnectionManager:
    """Fail fast with 503 when the record store is not connected. Use on mutating routes."""
    if not connection.is_ready:
        e = StoreUnavailableError()
        raise HTTPException(status_code=e.status_code, detail=e.message)
    return connection


async def service_http_error(e: ServiceError, connection: ConnectionManager) -> HTTPException:
    """HTTPException for a failed service call. A lost store also moves the connection out of READY."""
    if isinstance(e, StoreUnavailableError):
        await connection.mark_unavailable()
    return HTTPException(status_code=e.status_code, detail=e.message)

"""Liveness and record store status."""

from fastapi import APIRouter, Depends

from school_admin.api.dependencies import get_connection
from school_admin.db.connection import ConnectionManager

from .schemas import HealthResponse

router = APIRouter(prefix="/health", tags=["health"])


@router.get("", response_model=HealthResponse)
async def health(connection: ConnectionManager = Depends(get_connection)) -> HealthResponse:
    return HealthResponse(
        status="OK",
        message="Server is running",
        store_connected="Yes" if connection.is_ready else "No",
        connection_state=connection.state.value,
    )

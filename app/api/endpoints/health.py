import logging
from typing import Any, Dict

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from app.db.async_session import check_async_database_health

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/health", response_model=Dict[str, Any])
async def health_check():
    """
    Basic health check endpoint.

    Returns:
        dict: Service and database status; 503 when the database is unreachable
    """
    health_status = await check_async_database_health()
    health_status["service"] = "user-management-api"

    if health_status["status"] != "healthy":
        logger.error(f"Health check failed: {health_status}")
        return JSONResponse(status_code=503, content=health_status)
    return health_status

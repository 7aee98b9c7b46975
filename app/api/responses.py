from typing import Any, Dict, List, Optional

from fastapi import status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse


def api_response(data: Any, message: str, status_code: int = status.HTTP_200_OK) -> JSONResponse:
    """Wrap a successful payload in the standard envelope."""
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder({"success": True, "data": data, "message": message}),
    )


def error_response(
    status_code: int,
    message: str,
    errors: Optional[Dict[str, List[str]]] = None,
    headers: Optional[Dict[str, str]] = None,
) -> JSONResponse:
    content: Dict[str, Any] = {"success": False, "data": None, "message": message}
    if errors:
        content["errors"] = errors
    return JSONResponse(status_code=status_code, content=content, headers=headers)

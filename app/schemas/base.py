from typing import Dict, Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field

DataT = TypeVar("DataT")


class BaseSchema(BaseModel):
    """Base schema for all models."""
    model_config = ConfigDict(from_attributes=True)


class ApiResponse(BaseModel, Generic[DataT]):
    """Envelope wrapping every response body."""
    success: bool = True
    data: Optional[DataT] = None
    message: str
    errors: Optional[Dict[str, List[str]]] = None


class PaginationLinks(BaseModel):
    first: str
    last: str
    prev: Optional[str] = None
    next: Optional[str] = None


class PaginationMeta(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    current_page: int
    from_: Optional[int] = Field(default=None, alias="from")
    to: Optional[int] = None
    last_page: int
    per_page: int
    total: int

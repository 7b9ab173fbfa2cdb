from typing import List, TypeVar, Generic
from pydantic import BaseModel

T = TypeVar('T')

class PaginatedResponse(BaseModel, Generic[T]):
    results: List[T]
    count: int
    page: int
    page_size: int
    total_pages: int

from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field

from ..core.data_models import PlaidModel, PlaidResponse


class GetCategoriesRequest(BaseModel):
    """``categories/get`` is public and takes an empty body."""


class Category(PlaidModel):
    category_id: str
    # "place" for physical transactions, "special" for everything else
    group: str
    hierarchy: List[str] = Field(default_factory=list)


class GetCategoriesResponse(PlaidResponse):
    categories: List[Category]

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from ..core.data_models import PlaidModel, PlaidRequest, PlaidResponse


class Institution(PlaidModel):
    institution_id: str
    name: str
    products: List[str] = Field(default_factory=list)
    country_codes: List[str] = Field(default_factory=list)
    url: Optional[str] = None
    primary_color: Optional[str] = None
    # base64 encoded PNG, only with include_optional_metadata
    logo: Optional[str] = None
    routing_numbers: Optional[List[str]] = None
    oauth: bool = False


class GetInstitutionsOptions(BaseModel):
    products: Optional[List[str]] = None
    routing_numbers: Optional[List[str]] = None
    oauth: Optional[bool] = None
    include_optional_metadata: bool = False


class GetInstitutionByIdOptions(BaseModel):
    include_optional_metadata: bool = False
    include_status: bool = False


class SearchInstitutionsOptions(BaseModel):
    include_optional_metadata: bool = False
    oauth: Optional[bool] = None


class GetInstitutionsRequest(PlaidRequest):
    count: int
    offset: int
    country_codes: List[str]
    options: Optional[GetInstitutionsOptions] = None


class GetInstitutionByIdRequest(PlaidRequest):
    institution_id: str
    country_codes: List[str]
    options: Optional[GetInstitutionByIdOptions] = None


class SearchInstitutionsRequest(PlaidRequest):
    query: str
    products: List[str]
    country_codes: List[str]
    options: Optional[SearchInstitutionsOptions] = None


class GetInstitutionsResponse(PlaidResponse):
    institutions: List[Institution]
    total: int


class GetInstitutionByIdResponse(PlaidResponse):
    institution: Institution


class SearchInstitutionsResponse(PlaidResponse):
    institutions: List[Institution]

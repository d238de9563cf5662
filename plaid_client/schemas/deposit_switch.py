from __future__ import annotations

import datetime as dt
from typing import Optional

from ..core.data_models import PlaidRequest, PlaidResponse


class GetDepositSwitchRequest(PlaidRequest):
    deposit_switch_id: str


class CreateDepositSwitchRequest(PlaidRequest):
    target_access_token: str
    target_account_id: str


class GetDepositSwitchResponse(PlaidResponse):
    deposit_switch_id: str
    target_account_id: Optional[str] = None
    target_item_id: Optional[str] = None
    # initialized, completed, error
    state: str
    account_has_multiple_allocations: Optional[bool] = None
    is_allocated_remainder: Optional[bool] = None
    percent_allocated: Optional[float] = None
    amount_allocated: Optional[float] = None
    date_created: dt.date
    date_completed: Optional[dt.date] = None


class CreateDepositSwitchResponse(PlaidResponse):
    deposit_switch_id: str

from __future__ import annotations

import datetime as dt
from typing import List, Optional

from pydantic import BaseModel

from ..core.data_models import Account, Item, PlaidModel, PlaidRequest, PlaidResponse


class APR(PlaidModel):
    apr_percentage: float
    # balance_transfer_apr, cash_apr, purchase_apr, special
    apr_type: str
    balance_subject_to_apr: Optional[float] = None
    interest_charge_amount: Optional[float] = None


class CreditLiability(PlaidModel):
    account_id: Optional[str] = None
    aprs: List[APR]
    is_overdue: Optional[bool] = None
    last_payment_amount: Optional[float] = None
    last_payment_date: Optional[dt.date] = None
    last_statement_balance: Optional[float] = None
    last_statement_issue_date: Optional[dt.date] = None
    minimum_payment_amount: Optional[float] = None
    next_payment_due_date: Optional[dt.date] = None


class MortgageInterestRate(PlaidModel):
    percentage: Optional[float] = None
    # fixed, variable
    type: Optional[str] = None


class MortgagePropertyAddress(PlaidModel):
    city: Optional[str] = None
    country: Optional[str] = None
    postal_code: Optional[str] = None
    region: Optional[str] = None
    street: Optional[str] = None


class MortgageLiability(PlaidModel):
    account_id: Optional[str] = None
    account_number: Optional[str] = None
    current_late_fee: Optional[float] = None
    escrow_balance: Optional[float] = None
    has_pmi: Optional[bool] = None
    has_prepayment_penalty: Optional[bool] = None
    interest_rate: MortgageInterestRate
    last_payment_amount: Optional[float] = None
    last_payment_date: Optional[dt.date] = None
    loan_type_description: Optional[str] = None
    loan_term: Optional[str] = None
    maturity_date: Optional[dt.date] = None
    next_monthly_payment: Optional[float] = None
    next_payment_due_date: Optional[dt.date] = None
    origination_date: Optional[dt.date] = None
    origination_principal_amount: Optional[float] = None
    past_due_amount: Optional[float] = None
    property_address: MortgagePropertyAddress
    ytd_interest_paid: Optional[float] = None
    ytd_principal_paid: Optional[float] = None


class StudentLoanStatus(PlaidModel):
    end_date: Optional[dt.date] = None
    type: Optional[str] = None


class PSLFStatus(PlaidModel):
    estimated_eligibility_date: Optional[dt.date] = None
    payments_made: Optional[int] = None
    payments_remaining: Optional[int] = None


class StudentLoanRepaymentPlan(PlaidModel):
    description: Optional[str] = None
    type: Optional[str] = None


class StudentLoanServicerAddress(PlaidModel):
    city: Optional[str] = None
    region: Optional[str] = None
    country: Optional[str] = None
    postal_code: Optional[str] = None
    street: Optional[str] = None


class StudentLoanLiability(PlaidModel):
    account_id: Optional[str] = None
    account_number: Optional[str] = None
    disbursement_dates: Optional[List[dt.date]] = None
    expected_payoff_date: Optional[dt.date] = None
    guarantor: Optional[str] = None
    interest_rate_percentage: float
    is_overdue: Optional[bool] = None
    last_payment_amount: Optional[float] = None
    last_payment_date: Optional[dt.date] = None
    last_statement_balance: Optional[float] = None
    last_statement_issue_date: Optional[dt.date] = None
    loan_name: Optional[str] = None
    loan_status: StudentLoanStatus
    minimum_payment_amount: Optional[float] = None
    next_payment_due_date: Optional[dt.date] = None
    origination_date: Optional[dt.date] = None
    origination_principal_amount: Optional[float] = None
    outstanding_interest_amount: Optional[float] = None
    payment_reference_number: Optional[str] = None
    pslf_status: PSLFStatus
    repayment_plan: StudentLoanRepaymentPlan
    sequence_number: Optional[str] = None
    servicer_address: StudentLoanServicerAddress
    ytd_interest_paid: Optional[float] = None
    ytd_principal_paid: Optional[float] = None


class Liabilities(PlaidModel):
    credit: Optional[List[CreditLiability]] = None
    mortgage: Optional[List[MortgageLiability]] = None
    student: Optional[List[StudentLoanLiability]] = None


class GetLiabilitiesOptions(BaseModel):
    account_ids: List[str]


class GetLiabilitiesRequest(PlaidRequest):
    access_token: str
    options: Optional[GetLiabilitiesOptions] = None


class GetLiabilitiesResponse(PlaidResponse):
    accounts: List[Account]
    item: Item
    liabilities: Liabilities

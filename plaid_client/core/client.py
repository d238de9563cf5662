import datetime as dt
import functools
import logging
from typing import Any, Dict, Optional, Sequence, Type, TypeVar, Union

import httpx
from pydantic import BaseModel, TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError, to_jsonable_python

from ..config import Settings
from ..schemas.accounts import (
    GetAccountsOptions,
    GetAccountsRequest,
    GetAccountsResponse,
    GetBalancesOptions,
    GetBalancesRequest,
    GetBalancesResponse,
)
from ..schemas.auth import GetAuthOptions, GetAuthRequest, GetAuthResponse
from ..schemas.categories import GetCategoriesRequest, GetCategoriesResponse
from ..schemas.deposit_switch import (
    CreateDepositSwitchRequest,
    CreateDepositSwitchResponse,
    GetDepositSwitchRequest,
    GetDepositSwitchResponse,
)
from ..schemas.identity import GetIdentityOptions, GetIdentityRequest, GetIdentityResponse
from ..schemas.institutions import (
    GetInstitutionByIdOptions,
    GetInstitutionByIdRequest,
    GetInstitutionByIdResponse,
    GetInstitutionsOptions,
    GetInstitutionsRequest,
    GetInstitutionsResponse,
    SearchInstitutionsOptions,
    SearchInstitutionsRequest,
    SearchInstitutionsResponse,
)
from ..schemas.investments import (
    GetHoldingsOptions,
    GetHoldingsRequest,
    GetHoldingsResponse,
    GetInvestmentTransactionsOptions,
    GetInvestmentTransactionsRequest,
    GetInvestmentTransactionsResponse,
)
from ..schemas.items import (
    AccessTokenRequest,
    CreatePublicTokenResponse,
    ExchangePublicTokenRequest,
    ExchangePublicTokenResponse,
    GetItemResponse,
    InvalidateAccessTokenResponse,
    RemoveItemResponse,
    UpdateItemWebhookRequest,
    UpdateItemWebhookResponse,
)
from ..schemas.liabilities import GetLiabilitiesOptions, GetLiabilitiesRequest, GetLiabilitiesResponse
from ..schemas.link_token import (
    CreateLinkTokenRequest,
    CreateLinkTokenResponse,
    GetLinkTokenRequest,
    GetLinkTokenResponse,
    LinkTokenConfigs,
)
from ..schemas.processor import CreateProcessorTokenRequest, CreateProcessorTokenResponse
from ..schemas.sandbox import (
    CreateSandboxPublicTokenRequest,
    CreateSandboxPublicTokenResponse,
    FireWebhookRequest,
    FireWebhookResponse,
    ResetSandboxItemRequest,
    ResetSandboxItemResponse,
    SandboxPublicTokenOptions,
    SetSandboxVerificationStatusRequest,
    SetSandboxVerificationStatusResponse,
)
from ..schemas.transactions import (
    GetTransactionsOptions,
    GetTransactionsRequest,
    GetTransactionsResponse,
    RefreshTransactionsRequest,
    RefreshTransactionsResponse,
    SyncTransactionsRequest,
    SyncTransactionsResponse,
)
from ..schemas.webhooks import GetWebhookVerificationKeyRequest, GetWebhookVerificationKeyResponse
from .environment import Environment
from .errors import ConfigurationError, ErrorResponse, PlaidDecodeError, PlaidError, PlaidRequestError

logger = logging.getLogger(__name__)
DEFAULT_TIMEOUT = httpx.Timeout(30.0, connect=5.0)

T = TypeVar("T")

_ERROR_ADAPTER = TypeAdapter(ErrorResponse)


def _serialize(request: Any) -> Dict[str, Any]:
    if isinstance(request, BaseModel):
        return request.model_dump(mode="json", exclude_none=True)
    try:
        body = to_jsonable_python(request, exclude_none=True)
    except (TypeError, ValueError, PydanticSerializationError) as exc:
        raise PlaidRequestError(f"Request of type {type(request).__name__} is not JSON serializable: {exc}") from exc
    if not isinstance(body, dict):
        raise PlaidRequestError(f"Request of type {type(request).__name__} does not serialize to a JSON object")
    return body


@functools.lru_cache(maxsize=None)
def _adapter(response_type: Any) -> TypeAdapter:
    return TypeAdapter(response_type)


class PlaidClient:
    """Async Plaid API client.

    Every endpoint method funnels through :meth:`send_request`, which POSTs a
    JSON body carrying the credentials and decodes either the expected
    response model or Plaid's error envelope.
    """

    def __init__(
        self,
        client_id: str,
        secret: str,
        environment: Union[Environment, str],
        timeout: httpx.Timeout = DEFAULT_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        if not all([client_id, secret]):
            raise ConfigurationError("client_id and secret are required.")

        self.client_id = client_id
        self.secret = secret
        self.environment = Environment.parse(environment)
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(timeout=timeout, transport=transport)
        logger.info("Plaid client created for %s (client_id=%s)", self.environment.host, self.client_id)

    @classmethod
    def from_env(cls, **kwargs: Any) -> "PlaidClient":
        """Build a client from PLAID_CLIENT_ID, PLAID_SECRET and PLAID_ENVIRONMENT."""
        settings = Settings.from_env()
        return cls(settings.client_id, settings.secret, settings.environment, **kwargs)

    def __repr__(self) -> str:
        return f"PlaidClient(client_id={self.client_id!r}, secret='***', environment={self.environment.value!r})"

    async def __aenter__(self) -> "PlaidClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def close(self) -> None:
        """Dispose the underlying HTTP client, unless it was supplied by the caller."""
        if self._owns_client:
            await self._client.aclose()

    def build_url(self, endpoint: str) -> str:
        return f"{self.environment.host}/{endpoint.lstrip('/')}"

    async def send_request(
        self,
        endpoint: str,
        request: Any,
        response_type: Type[T],
    ) -> T:
        """POST ``request`` to ``endpoint`` and decode the reply as ``response_type``.

        Raises :class:`PlaidError` when Plaid answers with an error envelope,
        :class:`PlaidDecodeError` when a body does not match the expected
        schema and :class:`PlaidRequestError` when the call itself fails.
        """
        url = self.build_url(endpoint)
        body = _serialize(request)
        logger.debug("POST %s", url)
        try:
            response = await self._client.post(url, json=body)
        except httpx.HTTPError as exc:
            logger.error("Request to %s failed: %s", url, exc)
            raise PlaidRequestError(f"Request to {url} failed: {exc}") from exc

        status_code = response.status_code
        logger.debug("Response %s from %s", status_code, url)

        if status_code == httpx.codes.OK:
            try:
                return _adapter(response_type).validate_json(response.content)
            except ValidationError as exc:
                logger.error("Could not decode %s response from %s: %s", response_type, url, exc)
                raise PlaidDecodeError(
                    f"Unexpected response body from {endpoint}: {exc}", status_code, response.text
                ) from exc

        try:
            error_payload = _ERROR_ADAPTER.validate_json(response.content)
        except ValidationError as exc:
            logger.error("Could not decode error body (status %s) from %s: %s", status_code, url, exc)
            raise PlaidDecodeError(
                f"Unexpected error body from {endpoint} with status {status_code}", status_code, response.text
            ) from exc

        logger.warning(
            "Plaid error on %s: status=%s type=%s code=%s request_id=%s",
            endpoint,
            status_code,
            error_payload.error_type,
            error_payload.error_code,
            error_payload.request_id,
        )
        raise PlaidError.from_response(error_payload, status_code)

    def _credentials(self) -> dict:
        return {"client_id": self.client_id, "secret": self.secret}

    # Accounts

    async def get_accounts(
        self, access_token: str, options: Optional[GetAccountsOptions] = None
    ) -> GetAccountsResponse:
        """Retrieve the accounts of an Item, using cached balances."""
        request = GetAccountsRequest(**self._credentials(), access_token=access_token, options=options)
        return await self.send_request("accounts/get", request, GetAccountsResponse)

    async def get_balances(
        self, access_token: str, options: Optional[GetBalancesOptions] = None
    ) -> GetBalancesResponse:
        """Retrieve real-time balances for each of an Item's accounts."""
        request = GetBalancesRequest(**self._credentials(), access_token=access_token, options=options)
        return await self.send_request("accounts/balance/get", request, GetBalancesResponse)

    async def get_auth(self, access_token: str, options: Optional[GetAuthOptions] = None) -> GetAuthResponse:
        """Retrieve account and routing numbers for checking and savings accounts."""
        request = GetAuthRequest(**self._credentials(), access_token=access_token, options=options)
        return await self.send_request("auth/get", request, GetAuthResponse)

    async def get_categories(self) -> GetCategoriesResponse:
        return await self.send_request("categories/get", GetCategoriesRequest(), GetCategoriesResponse)

    async def get_identity(
        self, access_token: str, options: Optional[GetIdentityOptions] = None
    ) -> GetIdentityResponse:
        """Retrieve names, emails, phone numbers and addresses held by the institution."""
        request = GetIdentityRequest(**self._credentials(), access_token=access_token, options=options)
        return await self.send_request("identity/get", request, GetIdentityResponse)

    # Institutions

    async def get_institutions(
        self,
        count: int,
        offset: int,
        country_codes: Sequence[str],
        options: Optional[GetInstitutionsOptions] = None,
    ) -> GetInstitutionsResponse:
        request = GetInstitutionsRequest(
            **self._credentials(),
            count=count,
            offset=offset,
            country_codes=list(country_codes),
            options=options,
        )
        return await self.send_request("institutions/get", request, GetInstitutionsResponse)

    async def get_institution_by_id(
        self,
        institution_id: str,
        country_codes: Sequence[str],
        options: Optional[GetInstitutionByIdOptions] = None,
    ) -> GetInstitutionByIdResponse:
        request = GetInstitutionByIdRequest(
            **self._credentials(),
            institution_id=institution_id,
            country_codes=list(country_codes),
            options=options,
        )
        return await self.send_request("institutions/get_by_id", request, GetInstitutionByIdResponse)

    async def search_institutions(
        self,
        query: str,
        products: Sequence[str],
        country_codes: Sequence[str],
        options: Optional[SearchInstitutionsOptions] = None,
    ) -> SearchInstitutionsResponse:
        request = SearchInstitutionsRequest(
            **self._credentials(),
            query=query,
            products=list(products),
            country_codes=list(country_codes),
            options=options,
        )
        return await self.send_request("institutions/search", request, SearchInstitutionsResponse)

    # Items

    async def get_item(self, access_token: str) -> GetItemResponse:
        request = AccessTokenRequest(**self._credentials(), access_token=access_token)
        return await self.send_request("item/get", request, GetItemResponse)

    async def remove_item(self, access_token: str) -> RemoveItemResponse:
        """Remove an Item; its access token becomes unusable."""
        request = AccessTokenRequest(**self._credentials(), access_token=access_token)
        return await self.send_request("item/remove", request, RemoveItemResponse)

    async def update_item_webhook(self, access_token: str, webhook: str) -> UpdateItemWebhookResponse:
        request = UpdateItemWebhookRequest(**self._credentials(), access_token=access_token, webhook=webhook)
        return await self.send_request("item/webhook/update", request, UpdateItemWebhookResponse)

    async def invalidate_access_token(self, access_token: str) -> InvalidateAccessTokenResponse:
        """Rotate an access token; the old one stops working immediately."""
        request = AccessTokenRequest(**self._credentials(), access_token=access_token)
        return await self.send_request("item/access_token/invalidate", request, InvalidateAccessTokenResponse)

    async def create_public_token(self, access_token: str) -> CreatePublicTokenResponse:
        request = AccessTokenRequest(**self._credentials(), access_token=access_token)
        return await self.send_request("item/public_token/create", request, CreatePublicTokenResponse)

    async def exchange_public_token(self, public_token: str) -> ExchangePublicTokenResponse:
        """Exchange a Link public token for a long-lived access token."""
        request = ExchangePublicTokenRequest(**self._credentials(), public_token=public_token)
        return await self.send_request("item/public_token/exchange", request, ExchangePublicTokenResponse)

    # Link

    async def create_link_token(self, configs: LinkTokenConfigs) -> CreateLinkTokenResponse:
        request = CreateLinkTokenRequest(**self._credentials(), **configs.model_dump())
        return await self.send_request("link/token/create", request, CreateLinkTokenResponse)

    async def get_link_token(self, link_token: str) -> GetLinkTokenResponse:
        request = GetLinkTokenRequest(**self._credentials(), link_token=link_token)
        return await self.send_request("link/token/get", request, GetLinkTokenResponse)

    # Liabilities and investments

    async def get_liabilities(
        self, access_token: str, options: Optional[GetLiabilitiesOptions] = None
    ) -> GetLiabilitiesResponse:
        """Retrieve credit card, mortgage and student loan details."""
        request = GetLiabilitiesRequest(**self._credentials(), access_token=access_token, options=options)
        return await self.send_request("liabilities/get", request, GetLiabilitiesResponse)

    async def get_holdings(
        self, access_token: str, options: Optional[GetHoldingsOptions] = None
    ) -> GetHoldingsResponse:
        request = GetHoldingsRequest(**self._credentials(), access_token=access_token, options=options)
        return await self.send_request("investments/holdings/get", request, GetHoldingsResponse)

    async def get_investment_transactions(
        self,
        access_token: str,
        start_date: dt.date,
        end_date: dt.date,
        options: Optional[GetInvestmentTransactionsOptions] = None,
    ) -> GetInvestmentTransactionsResponse:
        request = GetInvestmentTransactionsRequest(
            **self._credentials(),
            access_token=access_token,
            start_date=start_date,
            end_date=end_date,
            options=options,
        )
        return await self.send_request(
            "investments/transactions/get", request, GetInvestmentTransactionsResponse
        )

    async def create_processor_token(
        self, access_token: str, account_id: str, processor: str
    ) -> CreateProcessorTokenResponse:
        request = CreateProcessorTokenRequest(
            **self._credentials(), access_token=access_token, account_id=account_id, processor=processor
        )
        return await self.send_request("processor/token/create", request, CreateProcessorTokenResponse)

    # Sandbox

    async def create_sandbox_public_token(
        self,
        institution_id: str,
        initial_products: Sequence[str],
        options: Optional[SandboxPublicTokenOptions] = None,
    ) -> CreateSandboxPublicTokenResponse:
        """Create a public token for a test Item without going through Link."""
        request = CreateSandboxPublicTokenRequest(
            **self._credentials(),
            institution_id=institution_id,
            initial_products=list(initial_products),
            options=options,
        )
        return await self.send_request("sandbox/public_token/create", request, CreateSandboxPublicTokenResponse)

    async def reset_sandbox_item(self, access_token: str) -> ResetSandboxItemResponse:
        """Force a sandbox Item into ITEM_LOGIN_REQUIRED."""
        request = ResetSandboxItemRequest(**self._credentials(), access_token=access_token)
        return await self.send_request("sandbox/item/reset_login", request, ResetSandboxItemResponse)

    async def set_sandbox_verification_status(
        self, access_token: str, account_id: str, verification_status: str
    ) -> SetSandboxVerificationStatusResponse:
        request = SetSandboxVerificationStatusRequest(
            **self._credentials(),
            access_token=access_token,
            account_id=account_id,
            verification_status=verification_status,
        )
        return await self.send_request(
            "sandbox/item/set_verification_status", request, SetSandboxVerificationStatusResponse
        )

    async def fire_webhook(self, access_token: str, webhook_code: str) -> FireWebhookResponse:
        request = FireWebhookRequest(**self._credentials(), access_token=access_token, webhook_code=webhook_code)
        return await self.send_request("sandbox/item/fire_webhook", request, FireWebhookResponse)

    # Transactions

    async def get_transactions(
        self,
        access_token: str,
        start_date: dt.date,
        end_date: dt.date,
        options: Optional[GetTransactionsOptions] = None,
    ) -> GetTransactionsResponse:
        """Fetch one page of transactions between two dates (inclusive)."""
        request = GetTransactionsRequest(
            **self._credentials(),
            access_token=access_token,
            start_date=start_date,
            end_date=end_date,
            options=options,
        )
        return await self.send_request("transactions/get", request, GetTransactionsResponse)

    async def sync_transactions(
        self, access_token: str, cursor: Optional[str] = None, count: int = 100
    ) -> SyncTransactionsResponse:
        """
        Fetch one page of incremental transaction updates.

        Pass ``None`` as cursor for the full history, then the returned
        ``next_cursor`` for every following page while ``has_more`` is true.
        """
        request = SyncTransactionsRequest(
            **self._credentials(), access_token=access_token, cursor=cursor, count=count
        )
        return await self.send_request("transactions/sync", request, SyncTransactionsResponse)

    async def refresh_transactions(self, access_token: str) -> RefreshTransactionsResponse:
        request = RefreshTransactionsRequest(**self._credentials(), access_token=access_token)
        return await self.send_request("transactions/refresh", request, RefreshTransactionsResponse)

    # Webhooks and deposit switch

    async def get_webhook_verification_key(self, key_id: str) -> GetWebhookVerificationKeyResponse:
        request = GetWebhookVerificationKeyRequest(**self._credentials(), key_id=key_id)
        return await self.send_request(
            "webhook_verification_key/get", request, GetWebhookVerificationKeyResponse
        )

    async def get_deposit_switch(self, deposit_switch_id: str) -> GetDepositSwitchResponse:
        request = GetDepositSwitchRequest(**self._credentials(), deposit_switch_id=deposit_switch_id)
        return await self.send_request("deposit_switch/get", request, GetDepositSwitchResponse)

    async def create_deposit_switch(
        self, target_account_id: str, target_access_token: str
    ) -> CreateDepositSwitchResponse:
        request = CreateDepositSwitchRequest(
            **self._credentials(),
            target_account_id=target_account_id,
            target_access_token=target_access_token,
        )
        return await self.send_request("deposit_switch/create", request, CreateDepositSwitchResponse)

import asyncio
import datetime as dt
import json

import httpx
import pytest

from conftest import (
    SANDBOX_INSTITUTION,
    SANDBOX_INSTITUTION_QUERY,
    TEST_CLIENT_ID,
    TEST_PRODUCTS,
    TEST_SECRET,
    error_body,
)
from plaid_client import PlaidError
from plaid_client.schemas.accounts import GetAccountsOptions, GetBalancesOptions
from plaid_client.schemas.institutions import GetInstitutionByIdOptions
from plaid_client.schemas.investments import GetHoldingsOptions
from plaid_client.schemas.link_token import LinkTokenConfigs, LinkTokenUser

CATEGORIES = {
    "request_id": "req-cat",
    "categories": [
        {"category_id": "10000000", "group": "special", "hierarchy": ["Bank Fees"]},
        {"category_id": "10001000", "group": "special", "hierarchy": ["Bank Fees", "Overdraft"]},
        {"category_id": "12001000", "group": "place", "hierarchy": ["Community", "Animal Shelter"]},
    ],
}

TRANSACTION = {
    "transaction_id": "lPNjeW1nR6CDn5okmGQ6hEpMo4lLNoSrzqDje",
    "account_id": "BxBXxLj1m4HMXBm9WZZmCWVbPjX16EHwv99vp",
    "amount": 2307.21,
    "iso_currency_code": "USD",
    "unofficial_currency_code": None,
    "category": ["Shops", "Computers and Electronics"],
    "category_id": "19013000",
    "date": "2017-01-29",
    "datetime": "2017-01-27T11:00:00Z",
    "authorized_date": "2017-01-27",
    "authorized_datetime": None,
    "location": {"address": "300 Post St", "city": "San Francisco", "lat": 40.740352, "lon": -74.001761},
    "merchant_name": "Apple",
    "name": "Apple Store",
    "payment_meta": {"reference_number": None},
    "payment_channel": "in store",
    "pending": False,
    "pending_transaction_id": None,
    "account_owner": None,
    "transaction_code": None,
}


def test_get_categories_posts_empty_body(make_client):
    client, handler = make_client({"/categories/get": httpx.Response(200, json=CATEGORIES)})

    resp = asyncio.run(client.get_categories())

    assert handler.bodies == [{}]
    assert resp.categories
    for category in resp.categories:
        assert category.category_id
        assert category.group in {"place", "special"}
    assert resp.categories[0].category_id == "10000000"


def test_get_accounts_with_invalid_token_then_valid_call(make_client, account_payload, item_payload):
    def accounts(request):
        body = json.loads(request.content)
        if body["access_token"] == "bad-token":
            return httpx.Response(400, json=error_body())
        return httpx.Response(200, json={"request_id": "req-ok", "accounts": [account_payload], "item": item_payload})

    client, handler = make_client({"/accounts/get": accounts})

    async def scenario():
        with pytest.raises(PlaidError) as excinfo:
            await client.get_accounts("bad-token")
        ok = await client.get_accounts(
            "access-sandbox-1", GetAccountsOptions(account_ids=[account_payload["account_id"]])
        )
        return excinfo.value, ok

    err, ok = asyncio.run(scenario())

    assert err.error_code == "INVALID_ACCESS_TOKEN"
    assert err.status_code == 400
    assert ok.accounts[0].balances.current == 110
    assert ok.item.item_id == item_payload["item_id"]
    assert handler.bodies[1]["options"] == {"account_ids": [account_payload["account_id"]]}
    assert handler.bodies[1]["client_id"] == TEST_CLIENT_ID
    assert handler.bodies[1]["secret"] == TEST_SECRET


def test_get_transactions_serializes_dates(make_client, account_payload, item_payload):
    payload = {
        "request_id": "req-tx",
        "accounts": [account_payload],
        "transactions": [TRANSACTION],
        "total_transactions": 1,
        "item": item_payload,
    }
    client, handler = make_client({"/transactions/get": httpx.Response(200, json=payload)})

    resp = asyncio.run(client.get_transactions("access-sandbox-1", dt.date(2017, 1, 1), dt.date(2017, 2, 1)))

    body = handler.bodies[0]
    assert body["start_date"] == "2017-01-01"
    assert body["end_date"] == "2017-02-01"
    tx = resp.transactions[0]
    assert tx.date == dt.date(2017, 1, 29)
    assert tx.datetime == dt.datetime(2017, 1, 27, 11, 0, tzinfo=dt.timezone.utc)
    assert tx.location.city == "San Francisco"
    assert resp.total_transactions == 1


def test_sync_transactions_omits_cursor_on_first_page(make_client):
    pages = {
        None: {"request_id": "r1", "added": [TRANSACTION], "next_cursor": "c1", "has_more": True},
        "c1": {
            "request_id": "r2",
            "modified": [TRANSACTION],
            "removed": [{"transaction_id": "gone"}],
            "next_cursor": "c2",
            "has_more": False,
        },
    }

    def sync(request):
        return httpx.Response(200, json=pages[json.loads(request.content).get("cursor")])

    client, handler = make_client({"/transactions/sync": sync})

    async def scenario():
        first = await client.sync_transactions("access-sandbox-1", count=50)
        second = await client.sync_transactions("access-sandbox-1", cursor=first.next_cursor)
        return first, second

    first, second = asyncio.run(scenario())

    assert "cursor" not in handler.bodies[0]
    assert handler.bodies[0]["count"] == 50
    assert handler.bodies[1]["cursor"] == "c1"
    assert first.has_more and len(first.added) == 1 and first.modified == []
    assert not second.has_more
    assert second.removed[0].transaction_id == "gone"


def test_create_link_token_flattens_configs(make_client):
    client, handler = make_client(
        {
            "/link/token/create": httpx.Response(
                200,
                json={
                    "request_id": "req-link",
                    "link_token": "link-sandbox-af1a0311",
                    "expiration": "2020-03-27T12:56:34Z",
                },
            )
        }
    )
    configs = LinkTokenConfigs(
        user=LinkTokenUser(client_user_id="user-1"),
        client_name="Budget App",
        products=["transactions"],
        account_filters={"depository": {"account_subtypes": ["checking"]}},
    )

    resp = asyncio.run(client.create_link_token(configs))

    assert handler.bodies[0] == {
        "client_id": TEST_CLIENT_ID,
        "secret": TEST_SECRET,
        "user": {"client_user_id": "user-1"},
        "client_name": "Budget App",
        "language": "en",
        "country_codes": ["US"],
        "products": ["transactions"],
        "account_filters": {"depository": {"account_subtypes": ["checking"]}},
    }
    assert resp.link_token == "link-sandbox-af1a0311"
    assert resp.expiration.year == 2020


def test_get_institution_by_id_is_stable_across_calls(make_client):
    institution = {
        "institution_id": SANDBOX_INSTITUTION,
        "name": "First Platypus Bank",
        "products": ["auth", "balance", "identity", "transactions"],
        "country_codes": ["US"],
        "url": None,
        "primary_color": None,
        "logo": None,
        "routing_numbers": [],
        "oauth": False,
    }
    counter = {"n": 0}

    def by_id(request):
        counter["n"] += 1
        return httpx.Response(200, json={"request_id": f"req-{counter['n']}", "institution": institution})

    client, handler = make_client({"/institutions/get_by_id": by_id})

    async def scenario():
        options = GetInstitutionByIdOptions(include_status=True)
        first = await client.get_institution_by_id(SANDBOX_INSTITUTION, ["US"], options)
        second = await client.get_institution_by_id(SANDBOX_INSTITUTION, ["US"], options)
        return first, second

    first, second = asyncio.run(scenario())

    assert first.request_id != second.request_id
    assert first.institution == second.institution
    assert handler.bodies[0]["options"] == {"include_optional_metadata": False, "include_status": True}


def test_sandbox_token_exchange_flow(make_client):
    client, handler = make_client(
        {
            "/sandbox/public_token/create": httpx.Response(
                200, json={"request_id": "r1", "public_token": "public-sandbox-123"}
            ),
            "/item/public_token/exchange": httpx.Response(
                200, json={"request_id": "r2", "access_token": "access-sandbox-123", "item_id": "item-1"}
            ),
        }
    )

    async def scenario():
        public = await client.create_sandbox_public_token(SANDBOX_INSTITUTION, TEST_PRODUCTS)
        return await client.exchange_public_token(public.public_token)

    exchanged = asyncio.run(scenario())

    assert handler.bodies[0]["initial_products"] == list(TEST_PRODUCTS)
    assert handler.bodies[1]["public_token"] == "public-sandbox-123"
    assert exchanged.access_token == "access-sandbox-123"


def test_get_liabilities_decodes_nested_records(make_client, account_payload, item_payload):
    liabilities = {
        "credit": [
            {
                "account_id": "acc-credit",
                "aprs": [{"apr_percentage": 15.24, "apr_type": "balance_transfer_apr", "balance_subject_to_apr": 1562.32}],
                "is_overdue": False,
                "last_payment_amount": 168.25,
                "last_payment_date": "2019-05-22",
                "last_statement_balance": 1708.77,
                "last_statement_issue_date": "2019-05-28",
                "minimum_payment_amount": 20,
                "next_payment_due_date": "2020-05-28",
            }
        ],
        "mortgage": None,
        "student": None,
    }
    client, _ = make_client(
        {
            "/liabilities/get": httpx.Response(
                200,
                json={"request_id": "r", "accounts": [account_payload], "item": item_payload, "liabilities": liabilities},
            )
        }
    )

    resp = asyncio.run(client.get_liabilities("access-sandbox-1"))

    credit = resp.liabilities.credit[0]
    assert credit.aprs[0].balance_subject_to_apr == 1562.32
    assert credit.next_payment_due_date == dt.date(2020, 5, 28)
    assert resp.liabilities.mortgage is None


@pytest.mark.parametrize(
    "method, args, path",
    [
        ("get_item", ("tok",), "/item/get"),
        ("remove_item", ("tok",), "/item/remove"),
        ("refresh_transactions", ("tok",), "/transactions/refresh"),
        ("reset_sandbox_item", ("tok",), "/sandbox/item/reset_login"),
        ("get_deposit_switch", ("ds-1",), "/deposit_switch/get"),
    ],
)
def test_endpoint_errors_propagate_unchanged(make_client, method, args, path):
    client, handler = make_client({path: httpx.Response(400, json=error_body(error_code="ITEM_NOT_FOUND"))})

    with pytest.raises(PlaidError) as excinfo:
        asyncio.run(getattr(client, method)(*args))

    assert excinfo.value.error_code == "ITEM_NOT_FOUND"
    assert handler.requests[0].url.path == path


def test_get_auth_decodes_account_numbers(make_client, account_payload, item_payload):
    numbers = {
        "ach": [
            {
                "account_id": account_payload["account_id"],
                "account": "9900009606",
                "routing": "011401533",
                "wire_routing": "021000021",
            }
        ],
        "eft": [],
        "international": [],
        "bacs": [],
    }
    client, handler = make_client(
        {
            "/auth/get": httpx.Response(
                200, json={"request_id": "r", "accounts": [account_payload], "numbers": numbers, "item": item_payload}
            )
        }
    )

    resp = asyncio.run(client.get_auth("access-sandbox-1"))

    assert resp.numbers.ach[0].routing == "011401533"
    assert resp.numbers.bacs == []
    assert handler.requests[0].url.path == "/auth/get"


def test_get_identity_decodes_owners(make_client, account_payload, item_payload):
    owner = {
        "names": ["Alberta Bobbeth Charleson"],
        "phone_numbers": [{"data": "1112223333", "primary": False, "type": "home"}],
        "emails": [{"data": "accountholder0@example.com", "primary": True, "type": "primary"}],
        "addresses": [
            {
                "data": {
                    "city": "Malakoff",
                    "region": "NY",
                    "street": "2992 Cameron Road",
                    "postal_code": "14236",
                    "country": "US",
                },
                "primary": True,
            }
        ],
    }
    account = {**account_payload, "owners": [owner]}
    client, _ = make_client(
        {"/identity/get": httpx.Response(200, json={"request_id": "r", "accounts": [account], "item": item_payload})}
    )

    resp = asyncio.run(client.get_identity("access-sandbox-1"))

    owners = resp.accounts[0].owners
    assert owners[0].names == ["Alberta Bobbeth Charleson"]
    assert owners[0].addresses[0].data.city == "Malakoff"


def test_get_investment_transactions_decodes_securities(make_client, account_payload, item_payload):
    security = {
        "security_id": "sec-1",
        "name": "Nflx Feb 01'18 $355 Call",
        "ticker_symbol": "NFLX180201C00355000",
        "is_cash_equivalent": False,
        "type": "derivative",
        "close_price": 0.011,
        "iso_currency_code": "USD",
    }
    investment_tx = {
        "investment_transaction_id": "inv-tx-1",
        "account_id": account_payload["account_id"],
        "security_id": "sec-1",
        "date": "2020-05-29",
        "name": "BUY Nflx Feb 01'18 $355 Call",
        "quantity": 2,
        "amount": 0.02,
        "price": 0.01,
        "fees": 0,
        "type": "buy",
        "subtype": "buy",
        "iso_currency_code": "USD",
    }
    client, handler = make_client(
        {
            "/investments/transactions/get": httpx.Response(
                200,
                json={
                    "request_id": "r",
                    "accounts": [account_payload],
                    "securities": [security],
                    "investment_transactions": [investment_tx],
                    "total_investment_transactions": 1,
                    "item": item_payload,
                },
            )
        }
    )

    resp = asyncio.run(
        client.get_investment_transactions("access-sandbox-1", dt.date(2020, 1, 1), dt.date(2020, 6, 1))
    )

    assert resp.investment_transactions[0].date == dt.date(2020, 5, 29)
    assert resp.securities[0].ticker_symbol == "NFLX180201C00355000"
    assert handler.bodies[0]["start_date"] == "2020-01-01"


@pytest.mark.parametrize(
    "method, args, path, reply, field, expected_body",
    [
        (
            "invalidate_access_token",
            ("tok",),
            "/item/access_token/invalidate",
            {"new_access_token": "tok-2"},
            "new_access_token",
            {"access_token": "tok"},
        ),
        (
            "create_public_token",
            ("tok",),
            "/item/public_token/create",
            {"public_token": "public-1"},
            "public_token",
            {"access_token": "tok"},
        ),
        (
            "create_processor_token",
            ("tok", "acc-1", "dwolla"),
            "/processor/token/create",
            {"processor_token": "processor-sandbox-1"},
            "processor_token",
            {"access_token": "tok", "account_id": "acc-1", "processor": "dwolla"},
        ),
        (
            "fire_webhook",
            ("tok", "DEFAULT_UPDATE"),
            "/sandbox/item/fire_webhook",
            {"webhook_fired": True},
            "webhook_fired",
            {"access_token": "tok", "webhook_code": "DEFAULT_UPDATE"},
        ),
        (
            "create_deposit_switch",
            ("acc-1", "tok"),
            "/deposit_switch/create",
            {"deposit_switch_id": "ds-1"},
            "deposit_switch_id",
            {"target_account_id": "acc-1", "target_access_token": "tok"},
        ),
        (
            "get_institutions",
            (10, 0, ["US"]),
            "/institutions/get",
            {"institutions": [], "total": 11500},
            "total",
            {"count": 10, "offset": 0, "country_codes": ["US"]},
        ),
        (
            "search_institutions",
            (SANDBOX_INSTITUTION_QUERY, ["transactions"], ["US"]),
            "/institutions/search",
            {"institutions": []},
            "institutions",
            {"query": SANDBOX_INSTITUTION_QUERY, "products": ["transactions"], "country_codes": ["US"]},
        ),
        (
            "get_link_token",
            ("link-sandbox-1",),
            "/link/token/get",
            {"link_token": "link-sandbox-1", "metadata": {"initial_products": ["auth"], "client_name": "Budget App"}},
            "link_token",
            {"link_token": "link-sandbox-1"},
        ),
        (
            "set_sandbox_verification_status",
            ("tok", "acc-1", "automatically_verified"),
            "/sandbox/item/set_verification_status",
            {"request_id": "req-verify"},
            "request_id",
            {"access_token": "tok", "account_id": "acc-1", "verification_status": "automatically_verified"},
        ),
    ],
)
def test_simple_endpoints_build_expected_bodies(make_client, method, args, path, reply, field, expected_body):
    client, handler = make_client({path: httpx.Response(200, json={"request_id": "r", **reply})})

    resp = asyncio.run(getattr(client, method)(*args))

    assert getattr(resp, field) == reply[field]
    assert handler.bodies[0] == {"client_id": TEST_CLIENT_ID, "secret": TEST_SECRET, **expected_body}


def test_get_balances_sends_freshness_option(make_client, account_payload):
    client, handler = make_client(
        {"/accounts/balance/get": httpx.Response(200, json={"request_id": "r", "accounts": [account_payload]})}
    )
    options = GetBalancesOptions(min_last_updated_datetime="2020-01-01T00:00:00Z")

    resp = asyncio.run(client.get_balances("access-sandbox-1", options))

    assert handler.requests[0].url.path == "/accounts/balance/get"
    assert handler.bodies[0]["options"] == {"min_last_updated_datetime": "2020-01-01T00:00:00Z"}
    assert resp.accounts[0].balances.available == 100
    assert resp.item is None


def test_update_item_webhook_returns_item(make_client, item_payload):
    new_hook = "https://example.com/plaid/webhook"
    client, handler = make_client(
        {
            "/item/webhook/update": httpx.Response(
                200, json={"request_id": "r", "item": {**item_payload, "webhook": new_hook}}
            )
        }
    )

    resp = asyncio.run(client.update_item_webhook("access-sandbox-1", new_hook))

    assert handler.bodies[0] == {
        "client_id": TEST_CLIENT_ID,
        "secret": TEST_SECRET,
        "access_token": "access-sandbox-1",
        "webhook": new_hook,
    }
    assert resp.item.webhook == new_hook


def test_get_holdings_decodes_positions(make_client, account_payload, item_payload):
    holding = {
        "account_id": account_payload["account_id"],
        "security_id": "sec-1",
        "institution_price": 10.42,
        "institution_price_as_of": None,
        "institution_value": 20.84,
        "cost_basis": None,
        "quantity": 2,
        "iso_currency_code": "USD",
    }
    client, handler = make_client(
        {
            "/investments/holdings/get": httpx.Response(
                200,
                json={
                    "request_id": "r",
                    "accounts": [account_payload],
                    "holdings": [holding],
                    "securities": [{"security_id": "sec-1", "ticker_symbol": "NFLX"}],
                    "item": item_payload,
                },
            )
        }
    )

    resp = asyncio.run(
        client.get_holdings("access-sandbox-1", GetHoldingsOptions(account_ids=[account_payload["account_id"]]))
    )

    assert handler.bodies[0]["options"] == {"account_ids": [account_payload["account_id"]]}
    assert resp.holdings[0].quantity == 2
    assert resp.holdings[0].institution_value == 20.84
    assert resp.securities[0].ticker_symbol == "NFLX"

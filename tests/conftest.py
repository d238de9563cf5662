"""Shared pytest fixtures: Plaid clients backed by httpx.MockTransport."""
import json

import httpx
import pytest

from plaid_client import Environment, PlaidClient

TEST_CLIENT_ID = "test-client-id"
TEST_SECRET = "test-secret"

SANDBOX_INSTITUTION = "ins_109508"
SANDBOX_INSTITUTION_QUERY = "Platypus"
TEST_PRODUCTS = ("auth", "identity", "transactions")


def error_body(error_code="INVALID_ACCESS_TOKEN", error_type="INVALID_INPUT", display_message=None):
    return {
        "request_id": "req-error-1",
        "error_type": error_type,
        "error_code": error_code,
        "error_message": "provided access token is in an invalid format",
        "display_message": display_message,
    }


class RecordingHandler:
    """MockTransport handler that records requests and replies from a route table."""

    def __init__(self, routes):
        self.routes = routes
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        reply = self.routes[request.url.path]
        if callable(reply):
            return reply(request)
        return reply

    @property
    def bodies(self):
        return [json.loads(req.content) for req in self.requests]


@pytest.fixture()
def make_client():
    def _make(routes, environment=Environment.SANDBOX):
        handler = RecordingHandler(routes)
        client = PlaidClient(
            TEST_CLIENT_ID,
            TEST_SECRET,
            environment,
            transport=httpx.MockTransport(handler),
        )
        return client, handler

    return _make


@pytest.fixture()
def account_payload():
    return {
        "account_id": "BxBXxLj1m4HMXBm9WZZmCWVbPjX16EHwv99vp",
        "balances": {
            "available": 100,
            "current": 110,
            "limit": None,
            "iso_currency_code": "USD",
            "unofficial_currency_code": None,
        },
        "mask": "0000",
        "name": "Plaid Checking",
        "official_name": "Plaid Gold Standard 0% Interest Checking",
        "type": "depository",
        "subtype": "checking",
    }


@pytest.fixture()
def item_payload():
    return {
        "item_id": "eVBnVMp7zdTJLkRNr33Rs6zr7KNJqBFL9DrE6",
        "institution_id": "ins_109508",
        "webhook": "https://www.genericwebhookurl.com/webhook",
        "error": None,
        "available_products": ["balance", "identity"],
        "billed_products": ["auth", "transactions"],
        "consent_expiration_time": None,
        "update_type": "background",
    }

"""Tests for the concurrent token + balances fetch."""

import asyncio
import logging

import pytest

from adapters.onesource import GraphQLRequestError
from models.nft_models import ResponseShapeError
from services.fetch_service import FetchError, FetchService
from conftest import CONTRACT, OWNER


def test_fetch_token_and_balances(fake_adapter_factory, token_data, balances_data):
    adapter = fake_adapter_factory({"token": token_data, "balances": balances_data})
    service = FetchService(adapter)

    token, page = asyncio.run(
        service.fetch_token_and_balances(CONTRACT, "29", OWNER, first=3, skip=6)
    )

    assert token.token_id == "29"
    assert len(page.entries) == 3
    assert dict(adapter.calls) == {
        "token": {"contract": CONTRACT, "tokenID": "29"},
        "balances": {"owner": OWNER, "contract": CONTRACT, "first": 3, "skip": 6},
    }


def test_queries_run_concurrently(fake_adapter_factory, token_data, balances_data):
    balances_started = None

    async def token_response():
        # Only completes if the balances query is issued while this one waits
        await asyncio.wait_for(balances_started.wait(), timeout=1)
        return token_data

    async def balances_response():
        balances_started.set()
        return balances_data

    adapter = fake_adapter_factory(
        {"token": token_response, "balances": balances_response}
    )

    async def go():
        nonlocal balances_started
        balances_started = asyncio.Event()
        return await FetchService(adapter).fetch_token_and_balances(
            CONTRACT, "29", OWNER
        )

    token, page = asyncio.run(go())
    assert token is not None
    assert page.count == 5


def test_token_failure_discards_balances(fake_adapter_factory, balances_data, caplog):
    adapter = fake_adapter_factory(
        {
            "token": GraphQLRequestError("connection reset"),
            "balances": balances_data,
        }
    )

    with caplog.at_level(logging.ERROR, logger="services.fetch_service"):
        with pytest.raises(FetchError) as excinfo:
            asyncio.run(
                FetchService(adapter).fetch_token_and_balances(CONTRACT, "29", OWNER)
            )

    assert excinfo.value.message == "Failed to fetch NFT"
    # The balances query still ran to completion before the failure surfaced
    assert [name for name, _ in adapter.calls] == ["token", "balances"]
    assert "connection reset" in caplog.text


def test_balances_failure_fails_whole_fetch(fake_adapter_factory, token_data):
    adapter = fake_adapter_factory(
        {"token": token_data, "balances": GraphQLRequestError("GraphQL errors: bad owner")}
    )
    with pytest.raises(FetchError):
        asyncio.run(
            FetchService(adapter).fetch_token_and_balances(CONTRACT, "29", OWNER)
        )


def test_missing_token_is_none(fake_adapter_factory):
    adapter = fake_adapter_factory({"token": {"token": None}})
    assert asyncio.run(FetchService(adapter).fetch_token(CONTRACT, "999")) is None


def test_null_balances_is_empty_page(fake_adapter_factory):
    adapter = fake_adapter_factory({"balances": {"balances": None}})
    page = asyncio.run(FetchService(adapter).fetch_balances(OWNER))
    assert page.entries == ()
    assert page.count == 0


def test_shape_errors_are_not_fetch_failures(fake_adapter_factory, token_data, balances_data):
    del token_data["token"]["contract"]
    adapter = fake_adapter_factory({"token": token_data, "balances": balances_data})
    with pytest.raises(ResponseShapeError):
        asyncio.run(
            FetchService(adapter).fetch_token_and_balances(CONTRACT, "29", OWNER)
        )


@pytest.mark.parametrize("first, skip", [(0, 0), (10, -1)])
def test_invalid_pagination_is_rejected(fake_adapter_factory, first, skip):
    adapter = fake_adapter_factory({})
    with pytest.raises(ValueError):
        asyncio.run(FetchService(adapter).fetch_balances(OWNER, first=first, skip=skip))
    assert adapter.calls == []

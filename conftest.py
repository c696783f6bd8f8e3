"""Shared fixtures: canned OneSource responses and fake transports."""

import copy

import pytest

from config import Config

API_URL = "https://api.onesource.io/v1/ethereum/graphql"
CONTRACT = "0xc9041f80dce73721a5f6a779672ec57ef255d27c"
OWNER = "0x6c34c667632dc1aaf04f362516e6f44d006a58fa"

TOKEN_DATA = {
    "token": {
        "contract": {
            "id": CONTRACT,
            "type": "ERC721",
            "name": "Sample Punks",
            "symbol": "SPUNK",
            "decimals": None,
        },
        "tokenID": "29",
        "tokenURI": "https://api.example.com/meta/29",
        "tokenURIStatus": "OK",
        "image": {
            "status": "OK",
            "url": "https://api.onesource.io/images/29.png",
            "contentType": "image/png",
            "width": 600,
            "height": 600,
            "thumbnails": [
                {
                    "preset": "SMALL",
                    "status": "OK",
                    "url": "QmSmallThumb",
                    "width": 150,
                    "height": 150,
                    "contentType": "image/png",
                    "createdAt": "2021-06-15T12:00:00Z",
                },
                {
                    "preset": "MEDIUM",
                    "status": "PENDING",
                    "url": "",
                    "width": None,
                    "height": None,
                    "contentType": "",
                    "createdAt": "2021-06-15T12:00:00Z",
                },
            ],
            "createdAt": "2021-06-15T12:00:00Z",
            "errorMsg": None,
        },
        "createdAt": "2021-06-15T12:00:00Z",
        "createdBlock": 12640000,
        "ownerCount": 1,
    }
}


def balance_entry(token_id, value="1", image_status="OK"):
    return {
        "owner": OWNER,
        "contractType": "ERC721",
        "contract": {
            "id": CONTRACT,
            "type": "ERC721",
            "name": "Sample Punks",
            "symbol": "SPUNK",
            "decimals": None,
        },
        "token": {
            "tokenID": token_id,
            "image": {
                "status": image_status,
                "url": f"Qm{token_id}hash",
                "thumbnails": [],
            },
        },
        "value": value,
    }


BALANCES_DATA = {
    "balances": {
        "count": 5,
        "remaining": 2,
        "cursor": "Y3Vyc29yOjM=",
        "balances": [
            balance_entry("7"),
            balance_entry("3", image_status="FAILED"),
            balance_entry("7", value="2"),
        ],
    }
}


@pytest.fixture
def config():
    return Config(bp_token="test-token", api_url=API_URL, owner=OWNER)


@pytest.fixture
def token_data():
    return copy.deepcopy(TOKEN_DATA)


@pytest.fixture
def balances_data():
    return copy.deepcopy(BALANCES_DATA)


class FakeOneSourceAdapter:
    """Stands in for OneSourceAdapter; answers by query operation name."""

    def __init__(self, responses):
        self.responses = responses
        self.calls = []
        self.entered = False
        self.exited = False

    async def __aenter__(self):
        self.entered = True
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        self.exited = True

    async def execute_async(self, query, variables=None):
        name = "token" if "GetTokenWithImage" in query else "balances"
        self.calls.append((name, variables))
        response = self.responses[name]
        if callable(response):
            response = await response()
        if isinstance(response, BaseException):
            raise response
        return copy.deepcopy(response)


@pytest.fixture
def fake_adapter_factory():
    return FakeOneSourceAdapter

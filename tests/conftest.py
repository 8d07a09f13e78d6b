from unittest.mock import AsyncMock, MagicMock

import pytest
import rsa

from aiosteamtrade import SteamClient

from data import MOCK_API_KEY


@pytest.fixture()
def session() -> MagicMock:
    """`aiohttp.ClientSession` replacement. Set `session.request.side_effect` to responses in test"""

    s = MagicMock()
    s.headers = {}
    s.request = AsyncMock()
    return s


@pytest.fixture()
def client(session) -> SteamClient:
    return SteamClient(MOCK_API_KEY, session=session)


@pytest.fixture(scope="session")
def rsa_keys() -> tuple[rsa.PublicKey, rsa.PrivateKey]:
    return rsa.newkeys(512)


@pytest.fixture()
def rsa_payload(rsa_keys) -> dict:
    pub, _ = rsa_keys
    return {
        "success": True,
        "publickey_mod": format(pub.n, "x"),
        "publickey_exp": format(pub.e, "x"),
        "timestamp": "238563050000",
    }

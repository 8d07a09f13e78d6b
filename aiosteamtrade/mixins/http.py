import asyncio
import logging
from json import JSONDecodeError
from warnings import warn
from http.cookies import Morsel

from yarl import URL
from aiohttp import ClientSession, ClientResponse, ClientError, InvalidURL

try:
    from aiohttp_socks import ProxyConnector
except ImportError:
    ProxyConnector = None

from ..constants import STEAM_URL, HttpMethod, T_PAYLOAD, T_HEADERS
from ..exceptions import RequestError, DecodeError
from ..utils import (
    get_cookie_value_from_session,
    get_cookies_from_session,
    add_cookie_to_session,
    add_morsel_to_session,
    patch_session_with_http_proxy,
)

logger = logging.getLogger(__name__)

SESSION_ID_COOKIE = "sessionid"
AUTH_COOKIE_PREFIX = "steam"

COMMUNITY_HEADERS = {
    "Accept": "text/javascript, text/html, application/xml, text/xml, */*",
    "Content-Type": "application/x-www-form-urlencoded; charset=UTF-8",
    "Host": STEAM_URL.COMMUNITY.host,
    "Referer": str(STEAM_URL.TRADE / "1"),
}
AJAX_HEADERS = {
    "X-Requested-With": "XMLHttpRequest",
    "X-Prototype-Version": "1.7",
}


class SteamHTTPTransportMixin:
    """Handler of session instance, proxy, helper cookies getters/setters."""

    __slots__ = ()

    # required instance attributes
    session: ClientSession  # to use proxy session need to be patched

    @property
    def user_agent(self) -> str | None:
        return self.session.headers.get("User-Agent")

    @user_agent.setter
    def user_agent(self, value: str | None):
        if value is None:
            self.session.headers.pop("User-Agent", None)
        else:
            self.session.headers["User-Agent"] = value

    @property
    def session_id(self) -> str | None:
        """`sessionid` cookie value for `Steam Community` domain (https://steamcommunity.com)"""

        return get_cookie_value_from_session(self.session, STEAM_URL.COMMUNITY, SESSION_ID_COOKIE)

    @property
    def auth_cookies(self) -> dict[str, str]:
        """`Steam Community` cookies related to authorization (`steamLogin`, `steamLoginSecure`, ...)"""

        cookies = get_cookies_from_session(self.session, STEAM_URL.COMMUNITY)
        return {k: v for k, v in cookies.items() if k.startswith(AUTH_COOKIE_PREFIX)}

    def add_cookie(self, name: str, value: str, secure=False):
        """Add cookie for `Steam Community` domain with `/` path"""

        add_cookie_to_session(self.session, STEAM_URL.COMMUNITY, name, value, secure=secure)

    def add_morsel(self, morsel: Morsel):
        """Add ready cookie morsel. Domain and path default to `Steam Community` and `/`"""

        add_morsel_to_session(self.session, STEAM_URL.COMMUNITY, morsel)

    async def _request(
        self,
        method: HttpMethod | str,
        url: URL | str,
        *,
        data: T_PAYLOAD = None,
        headers: T_HEADERS = None,
    ) -> ClientResponse:
        """Make request through the session, wrap transport failures and timeouts to `RequestError`"""

        logger.debug("%s %s", method, URL(url).with_query(None))
        try:
            return await self.session.request(str(method), url, data=data, headers=headers)
        # aiohttp raises bare `asyncio.TimeoutError` when total timeout is exceeded
        except (ClientError, asyncio.TimeoutError) as e:
            raise RequestError(f"HTTP request to '{URL(url).with_query(None)}' failed: {e!r}") from e

    @staticmethod
    async def _read_json(r: ClientResponse):
        """Load json from response body regardless of content type. Empty body gives `None`"""

        try:
            return await r.json(content_type=None)
        except (JSONDecodeError, UnicodeDecodeError) as e:
            raise DecodeError(f"Response is not a valid json: {e}") from e

    async def community_request(
        self,
        url: URL | str,
        method: HttpMethod | str = HttpMethod.POST,
        data: T_PAYLOAD = None,
        *,
        ajax=False,
    ):
        """
        Make request to `Steam Community` with browser-like headers.

        :param url:
        :param method: http request method
        :param data: form data to send with request
        :param ajax: add headers of the ajax request
        :return: json-loaded data
        :raises RequestError: transport failure
        :raises DecodeError: response is not a valid json
        """

        headers = {**COMMUNITY_HEADERS, **AJAX_HEADERS} if ajax else COMMUNITY_HEADERS
        r = await self._request(method, url, data=data, headers=headers)
        return await self._read_json(r)

    @staticmethod
    def _session_helper(session: ClientSession = None, proxy: str = None) -> ClientSession:
        """
        Helper function. Creates new `ClientSession` instance, patch/bound it to proxy if needed.
        Check passed session for `raise_for_status`.
        """

        if proxy and session:
            raise ValueError("You need to handle proxy connection by yourself with predefined session instance")
        elif proxy:
            if "socks" in proxy:
                if ProxyConnector is None:
                    raise TypeError(
                        """
                        To use `socks` type proxies you need `aiohttp_socks` package.
                        You can do this with `aiosteamtrade[socks]` dependency install target.
                        """
                    )

                # let aiohttp_socks parse url by herself
                session = ClientSession(connector=ProxyConnector.from_url(proxy), raise_for_status=True)
            else:  # http/s
                try:
                    proxy = URL(proxy)
                except ValueError as e:
                    raise InvalidURL(proxy) from e

                session = patch_session_with_http_proxy(ClientSession(raise_for_status=True), proxy)

        elif session:
            if not session._raise_for_status:
                warn(
                    "A session instance must be created with `raise_for_status=True` for client to work properly",
                    category=UserWarning,
                )
        else:  # nothing passed
            session = ClientSession(raise_for_status=True)

        return session

from re import compile

from yarl import URL

from ..constants import STEAM_URL, HttpMethod, EResult, T_PARAMS
from ..exceptions import ApiUrlError, EResultError
from .http import SteamHTTPTransportMixin

API_METHOD_RE = compile(r"^[A-Za-z]+$")
RESERVED_PARAMS = ("key", "format")


class SteamWebApiMixin(SteamHTTPTransportMixin):
    """
    Contain methods related to `Steam Web API` `IEconService` interface.
    Depends on `SteamHTTPTransportMixin`.

    .. seealso:: https://steamapi.xpaw.me/#IEconService
    """

    __slots__ = ()

    # required instance attributes
    _api_key: str

    @property
    def api_key(self) -> str:
        return self._api_key

    def _build_api_url(self, method: str, params: T_PARAMS = None) -> URL:
        """
        Build `IEconService` method url with `key` and `format` query params.

        :raises ApiUrlError: invalid method name or params
        """

        # accept `GetTradeOffers` as well as `GetTradeOffers/v1`
        name, _, version = str(method).partition("/")
        if not API_METHOD_RE.match(name) or version not in ("", STEAM_URL.API.VERSION):
            raise ApiUrlError(f"Invalid Steam Web API method name: '{method}'")

        query = {**(params or {}), "key": self._api_key, "format": "json"}
        try:
            return (STEAM_URL.API.IEconService._Base / name / STEAM_URL.API.VERSION).with_query(query)
        except (TypeError, ValueError) as e:
            raise ApiUrlError(f"Invalid params for Steam Web API method '{method}': {e}") from e

    async def call_web_api(
        self,
        method: str,
        http_method: HttpMethod | str = HttpMethod.GET,
        params: T_PARAMS = None,
    ):
        """
        Make request to a `Steam Web API` `IEconService` interface method.
        `key` and `format` params are always set by client.

        :param method: interface method name, like `GetTradeOffers`
        :param http_method: `GET` (params go to query) or `POST` (params go to form body)
        :param params: method params
        :return: json-loaded data
        :raises ApiUrlError: invalid method name or params
        :raises RequestError: transport failure
        :raises DecodeError: response is not a valid json
        """

        params = {k: v for k, v in (params or {}).items() if k not in RESERVED_PARAMS}
        try:
            http_method = HttpMethod(str(http_method).upper())
        except ValueError:
            raise ApiUrlError(f"Unsupported http method: {http_method}") from None

        if http_method is HttpMethod.GET:
            r = await self._request(http_method, self._build_api_url(method, params))
        else:
            r = await self._request(http_method, self._build_api_url(method), data=params)

        result = self._eresult_from_header(r.headers.get("X-eresult"))
        if result is not EResult.OK:
            raise EResultError(f"Failed to make {http_method} request to '{method}'", result)

        data = await self._read_json(r)
        return {} if data is None else data

    @staticmethod
    def _eresult_from_header(value: str | None) -> EResult:
        """Absent header means success, malformed one is `UNKNOWN`"""

        if value is None:
            return EResult.OK
        try:
            return EResult.get(int(value))
        except ValueError:
            return EResult.UNKNOWN

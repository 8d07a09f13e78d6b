"""Constants and enums, some types"""

from sys import version_info
from typing import TypeAlias, Mapping
from enum import Enum

from yarl import URL


if version_info < (3, 11):

    class StrEnum(str, Enum):
        """Enum with possibility to be a query param serializable"""

        def __str__(self):
            return self.value

else:
    from enum import StrEnum


class Language(StrEnum):
    """
    Steam languages.

    .. seealso:: https://partner.steamgames.com/doc/store/localization/languages
    """

    ARABIC = "arabic"
    BULGARIAN = "bulgarian"
    SIMPLIFIED_CHINESE = "schinese"
    TRADITIONAL_CHINESE = "tchinese"
    CZECH = "czech"
    DANISH = "danish"
    DUTCH = "dutch"
    ENGLISH = "english"
    FINNISH = "finnish"
    FRENCH = "french"
    GERMAN = "german"
    GREEK = "greek"
    HUNGARIAN = "hungarian"
    ITALIAN = "italian"
    JAPANESE = "japanese"
    KOREAN = "koreana"
    NORWEGIAN = "norwegian"
    POLISH = "polish"
    PORTUGUESE = "portuguese"
    PORTUGUESE_BRAZIL = "brazilian"
    ROMANIAN = "romanian"
    RUSSIAN = "russian"
    SPANISH = "spanish"
    SPANISH_LATIN_AMERICAN = "latam"
    SWEDISH = "swedish"
    THAI = "thai"
    TURKISH = "turkish"
    UKRAINIAN = "ukrainian"
    VIETNAMESE = "vietnamese"


# closed set, unknown codes must not be coerced
class TradeOfferStatus(Enum):
    """
    `trade_offer_state` field of the trade offer.

    .. seealso:: https://developer.valvesoftware.com/wiki/Steam_Web_API/IEconService#ETradeOfferState
    """

    INVALID = 1
    ACTIVE = 2
    ACCEPTED = 3
    COUNTERED = 4
    EXPIRED = 5
    CANCELED = 6
    DECLINED = 7
    INVALID_ITEMS = 8
    CONFIRMATION_NEED = 9
    CANCELED_BY_SECONDARY_FACTOR = 10
    STATE_IN_ESCROW = 11
    TRADE_REVERSED = 12


class WebState(Enum):
    """Web authorization state of the client on `Steam Community`"""

    NOT_LOGGED_IN = "not_logged_in"
    GET_RSA_FAILED = "get_rsa_failed"
    CAPTCHA_NEEDED = "captcha_needed"
    STEAM_GUARD_NEEDED = "steam_guard_needed"
    LOGIN_FAILED = "login_failed"
    LOGGED_IN = "logged_in"


class HttpMethod(StrEnum):
    GET = "GET"
    POST = "POST"


# https://github.com/DoctorMcKay/node-steamcommunity/blob/master/resources/EResult.js
class EResult(Enum):
    """
    `success` field or `X-eresult` header in response from Steam.
    Only the codes met around trade offers are listed, anything else is `UNKNOWN`.

    .. seealso:: https://steamerrors.com
    """

    UNKNOWN = None  # special case

    INVALID = 0
    OK = 1
    FAIL = 2
    NO_CONNECTION = 3
    INVALID_PARAM = 8
    BUSY = 10
    INVALID_STATE = 11
    ACCESS_DENIED = 15
    TIMEOUT = 16
    SERVICE_UNAVAILABLE = 20
    NOT_LOGGED_ON = 21
    PENDING = 22
    LIMIT_EXCEEDED = 25
    REVOKED = 26
    EXPIRED = 27
    DUPLICATE_REQUEST = 29
    RATE_LIMIT_EXCEEDED = 84

    @classmethod
    def get(cls, v) -> "EResult":
        if v is True:  # due to Steam
            return cls.OK
        try:
            return cls(v)
        except ValueError:
            return cls.UNKNOWN


_API_BASE = URL("https://api.steampowered.com")
_v = "v1"


class STEAM_URL:
    COMMUNITY = URL("https://steamcommunity.com")  # use this domain in methods
    TRADE = COMMUNITY / "tradeoffer"
    CAPTCHA = COMMUNITY / "public/captcha.php"

    class LOGIN:
        GET_RSA_KEY = URL("https://steamcommunity.com/login/getrsakey")
        DO_LOGIN = URL("https://steamcommunity.com/login/dologin/")
        LOGOUT = URL("https://steamcommunity.com/login/logout/")

    class API:
        BASE = _API_BASE
        VERSION = _v

        # interfaces
        class IEconService:
            _Base = _API_BASE / "IEconService"

            GetTradeOffer = _Base / "GetTradeOffer" / _v
            GetTradeOffers = _Base / "GetTradeOffers" / _v
            CancelTradeOffer = _Base / "CancelTradeOffer" / _v


T_PARAMS: TypeAlias = Mapping[str, int | str | float]
T_PAYLOAD: TypeAlias = Mapping[str, str | int | float]
T_HEADERS: TypeAlias = Mapping[str, str]

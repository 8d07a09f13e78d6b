import logging

from yarl import URL

from ..constants import STEAM_URL, WebState
from ..decoders import decode_rsa_key, decode_login_result
from ..exceptions import RequestError
from ..models import LoginResult
from ..utils import encrypt_password
from .http import SteamHTTPTransportMixin

logger = logging.getLogger(__name__)

NO_CAPTCHA_GID = "-1"
REFERER_HEADER = {"Referer": str(STEAM_URL.COMMUNITY) + "/"}


class LoginMixin(SteamHTTPTransportMixin):
    """
    Mixin with legacy `Steam Community` web login logic.
    Depends on `SteamHTTPTransportMixin`.
    """

    __slots__ = ()

    # required instance attributes
    _web_state: WebState
    _last_login_result: LoginResult | None

    @property
    def web_state(self) -> WebState:
        """Current web authorization state"""
        return self._web_state

    @property
    def is_logged(self) -> bool:
        return self._web_state is WebState.LOGGED_IN

    @property
    def last_login_result(self) -> LoginResult | None:
        """Decoded response of the last `dologin` request"""
        return self._last_login_result

    @property
    def captcha_url(self) -> URL | None:
        """Url of the captcha image to solve, if the last login attempt requires it"""

        if self._last_login_result is not None and self._last_login_result.captcha_needed:
            return self._last_login_result.captcha_url

    async def login(self, username: str, password: str, steam_guard_code="", captcha_text="") -> WebState:
        """
        Perform login to `Steam Community` (https://steamcommunity.com).

        Captcha and `Steam Guard` challenges are not solved here: when one of them is returned,
        call this method again with `captcha_text` or `steam_guard_code` filled.

        :param username:
        :param password:
        :param steam_guard_code: code from email
        :param captcha_text: answer to the captcha from `captcha_url`
        :return: new web state
        :raises EncryptionError: malformed rsa key or failure to encrypt password
        :raises RequestError: transport failure
        :raises DecodeError: malformed response
        """

        rsa_key = decode_rsa_key(
            await self.community_request(STEAM_URL.LOGIN.GET_RSA_KEY, data={"username": username})
        )
        if not rsa_key.success:
            logger.info("Failed to obtain rsa key for '%s'", username)
            self._web_state = WebState.GET_RSA_FAILED
            return self._web_state

        encrypted_password = encrypt_password(password, rsa_key.publickey_mod, rsa_key.publickey_exp)

        previous = self._last_login_result
        data = {
            "password": encrypted_password,
            "username": username,
            "captchagid": previous.captcha_gid if previous is not None else NO_CAPTCHA_GID,
            "captcha_text": captcha_text,
            "emailauth": steam_guard_code,
            "emailsteamid": previous.emailsteamid if previous is not None else "",
            "rsatimestamp": rsa_key.timestamp,
        }
        result = decode_login_result(await self.community_request(STEAM_URL.LOGIN.DO_LOGIN, data=data))
        self._last_login_result = result

        if result.captcha_needed:
            logger.info("Captcha is needed, gid: %s", result.captcha_gid)
            logger.info("Captcha image: %s", result.captcha_url)
            self._web_state = WebState.CAPTCHA_NEEDED
        elif result.emailauth_needed:
            logger.info("Steam Guard code is needed")
            self._web_state = WebState.STEAM_GUARD_NEEDED
        elif result.success:
            await self._perform_transfer(result)
            logger.info("Logged in as '%s'", username)
            self._web_state = WebState.LOGGED_IN
        else:
            logger.info("Login failed: %s", result.message or "no message")
            self._web_state = WebState.LOGIN_FAILED

        return self._web_state

    async def _perform_transfer(self, result: LoginResult):
        """Post transfer parameters to install session cookies. Outcome of the request does not matter"""

        if not result.transfer_url:
            logger.warning("No transfer url in login response, session cookies may be incomplete")
            return

        try:
            await self._request("POST", result.transfer_url, data=result.transfer_parameters, headers=REFERER_HEADER)
        except RequestError as e:
            logger.warning("Transfer request failed: %s", e)

    async def logout(self):
        """Logout from `Steam Community` and reset web state"""

        await self._request(
            "POST",
            STEAM_URL.LOGIN.LOGOUT,
            data={"sessionid": self.session_id or ""},
            headers=REFERER_HEADER,
        )
        self._web_state = WebState.NOT_LOGGED_IN
        self._last_login_result = None

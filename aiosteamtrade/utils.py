"""Abstract utils within `Steam` context and not"""

from base64 import b64encode
from functools import partial
from typing import TypeAlias
from http.cookies import SimpleCookie, Morsel

from aiohttp import ClientSession
from yarl import URL
from rsa import PublicKey, encrypt

from .exceptions import EncryptionError

__all__ = (
    "encrypt_password",
    "get_cookie_value_from_session",
    "get_cookies_from_session",
    "add_cookie_to_session",
    "add_morsel_to_session",
    "get_jsonable_cookies",
    "update_session_cookies",
    "patch_session_with_http_proxy",
)


def encrypt_password(password: str, publickey_mod: str, publickey_exp: str) -> str:
    """
    Encrypt password with rsa public key (PKCS#1 v1.5) and encode result to base64.

    :param password: raw password
    :param publickey_mod: hexadecimal modulus
    :param publickey_exp: hexadecimal exponent
    :raises EncryptionError: malformed key or encryption failure
    """

    try:
        key = PublicKey(int(publickey_mod, 16), int(publickey_exp, 16))
        encrypted = encrypt(password.encode("utf-8"), key)
    except (ValueError, TypeError, OverflowError) as e:
        raise EncryptionError(f"Failed to encrypt password with rsa key: {e}") from e

    return b64encode(encrypted).decode()


def get_cookie_value_from_session(session: ClientSession, url: URL | str, field: str) -> str | None:
    """Get value from session cookies. Passed `url` must include scheme (for ex. `https://url.com`)."""

    c = session.cookie_jar.filter_cookies(URL(url))
    return c[field].value if field in c else None


def get_cookies_from_session(session: ClientSession, url: URL | str) -> dict[str, str]:
    return {k: m.value for k, m in session.cookie_jar.filter_cookies(URL(url)).items()}


def add_cookie_to_session(
    session: ClientSession,
    url: URL | str,
    name: str,
    value: str,
    *,
    path="/",
    secure: bool = False,
    httponly: bool = False,
):
    if isinstance(url, str):
        url = URL(url)

    c = SimpleCookie()
    c[name] = value
    c[name]["path"] = path
    c[name]["domain"] = url.host
    if secure:
        c[name]["secure"] = secure
    if httponly:
        c[name]["httponly"] = httponly

    session.cookie_jar.update_cookies(cookies=c, response_url=url)


def add_morsel_to_session(session: ClientSession, url: URL | str, morsel: Morsel):
    """Put ready morsel to session cookies. Empty `domain` and `path` fields are filled from `url`"""

    if isinstance(url, str):
        url = URL(url)

    m = morsel.copy()
    if not m["domain"]:
        m["domain"] = url.host
    if not m["path"]:
        m["path"] = "/"

    c = SimpleCookie()
    c[m.key] = m
    session.cookie_jar.update_cookies(cookies=c, response_url=url)


JSONABLE_COOKIE_JAR: TypeAlias = list[dict[str, dict[str, str | bool | None]]]


def update_session_cookies(session: ClientSession, cookies: JSONABLE_COOKIE_JAR):
    """Update the session cookies from jsonable cookie jar."""

    for cookie_data in cookies:
        c = SimpleCookie()
        for k, v in cookie_data.items():
            copied = dict(**v)  # copy to avoid modification of the arg
            m = Morsel()
            m.set(copied.pop("key"), copied.pop("value"), copied.pop("coded_value"))
            m.update(copied)
            c[k] = m

        session.cookie_jar.update_cookies(c)


def get_jsonable_cookies(session: ClientSession) -> JSONABLE_COOKIE_JAR:
    """Extract and convert cookies to dict object."""

    return [
        {
            field_key: {
                "coded_value": morsel.coded_value,
                "key": morsel.key,
                "value": morsel.value,
                "expires": morsel["expires"],
                "path": morsel["path"],
                "comment": morsel["comment"],
                "domain": morsel["domain"],
                "max-age": morsel["max-age"],
                "secure": morsel["secure"],
                "httponly": morsel["httponly"],
                "version": morsel["version"],
                "samesite": morsel["samesite"],
            }
            for field_key, morsel in cookie.items()
        }
        for cookie in session.cookie_jar._cookies.values()
        if cookie  # skip empty cookies
    ]


def patch_session_with_http_proxy(session: ClientSession, proxy: str | URL) -> ClientSession:
    """Patch `aiohttp.ClientSession` to make all requests go through web proxy"""

    session._request = partial(session._request, proxy=proxy)
    return session

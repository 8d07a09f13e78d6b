from .constants import EResult


class SteamError(Exception):
    """All errors related to Steam"""


class RequestError(SteamError):
    """Raised when HTTP request to Steam failed. Original `aiohttp` error is available as `__cause__`"""


class ApiUrlError(SteamError):
    """Raised when `Steam Web API` url can't be built from passed method name or params"""


class DecodeError(SteamError):
    """Raised when Steam response data can't be decoded to expected shape"""

    def __init__(self, msg: str, data=None):
        self.msg = msg
        self.data = data

    def __str__(self):
        return self.msg


class EResultError(SteamError):
    """Raised when Steam response data contain `success` field with error code"""

    def __init__(self, msg: str, result: EResult, data=None):
        self.msg = msg
        self.result = result
        self.data = data

    def __str__(self):
        return self.msg


class LoginError(SteamError):
    """Raised when a problem with login process occurred"""


class EncryptionError(LoginError):
    """Raised when password can't be encrypted with rsa key obtained from Steam"""

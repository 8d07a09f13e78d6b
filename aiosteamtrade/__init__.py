"""
Login to steam community and manage trade offers with steam web api.
"""

from .exceptions import (
    SteamError,
    RequestError,
    ApiUrlError,
    DecodeError,
    EResultError,
    LoginError,
    EncryptionError,
)
from .constants import STEAM_URL, Language, TradeOfferStatus, WebState, EResult
from .client import SteamClient
from .models import TradeOffer, TradeOfferItem, LoginResult, RsaKey

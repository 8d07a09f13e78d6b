from dataclasses import dataclass, field
from datetime import datetime

from yarl import URL

from .constants import STEAM_URL, TradeOfferStatus


@dataclass(slots=True, frozen=True, kw_only=True)
class RsaKey:
    """Public key material from `getrsakey` endpoint. Used once per login attempt."""

    success: bool
    publickey_mod: str = ""  # hexadecimal
    publickey_exp: str = ""  # hexadecimal
    timestamp: str = ""


@dataclass(slots=True, frozen=True, kw_only=True)
class LoginResult:
    """Decoded response of `dologin` endpoint"""

    success: bool = False
    captcha_needed: bool = False
    captcha_gid: str = "-1"
    emailauth_needed: bool = False
    emailsteamid: str = ""
    login_complete: bool = False
    transfer_url: str | None = None
    transfer_parameters: dict[str, str] = field(default_factory=dict)
    message: str = ""

    @property
    def captcha_url(self) -> URL | None:
        if self.captcha_gid and self.captcha_gid != "-1":
            return STEAM_URL.CAPTCHA % {"gid": self.captcha_gid}


@dataclass(eq=False, slots=True, kw_only=True)
class TradeOfferItem:
    app_id: int
    context_id: int
    asset_id: int
    class_id: int
    instance_id: int
    amount: int = 1
    missing: bool = False

    def __hash__(self):
        return self.asset_id


@dataclass(eq=False, slots=True, kw_only=True)
class TradeOffer:
    """Steam Trade Offer entity."""

    trade_offer_id: int
    """The trade offer's unique numeric ID"""
    partner_id: int
    """Account id (id32) of the other party"""

    status: TradeOfferStatus

    is_our_offer: bool

    expiration_time: datetime
    time_created: datetime
    time_updated: datetime

    items_to_give: list[TradeOfferItem] = field(default_factory=list)
    items_to_receive: list[TradeOfferItem] = field(default_factory=list)

    message: str = ""
    from_real_time_trade: bool = False
    escrow_end_date: datetime | None = None
    confirmation_method: int = 0

    def __hash__(self):
        return self.trade_offer_id

    @property
    def id(self) -> int:
        """Alias for `trade_offer_id`"""
        return self.trade_offer_id

    @property
    def active(self) -> bool:
        return self.status is TradeOfferStatus.ACTIVE

    @property
    def accepted(self) -> bool:
        return self.status is TradeOfferStatus.ACCEPTED

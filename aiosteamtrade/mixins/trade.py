import logging

from ..constants import HttpMethod, EResult, Language, T_PARAMS
from ..decoders import decode_trade_offers, decode_trade_offer_envelope
from ..exceptions import EResultError
from ..models import TradeOffer
from .web_api import SteamWebApiMixin

logger = logging.getLogger(__name__)

SENT_OFFERS_PARAM = "get_sent_offers"
RECEIVED_OFFERS_PARAM = "get_received_offers"


class TradeMixin(SteamWebApiMixin):
    """
    Mixin with trade offers related methods.
    Depends on `SteamWebApiMixin`.
    """

    __slots__ = ()

    async def get_trade_offers(self, params: T_PARAMS = None) -> list[TradeOffer]:
        """
        Fetch trade offers from `Steam Web Api`.
        When neither `get_sent_offers` nor `get_received_offers` is passed, both are requested.

        .. seealso:: https://steamapi.xpaw.me/#IEconService/GetTradeOffers

        :param params: params (filters) to pass to url
        :return: list of trade offers, sent first
        :raises RequestError: transport failure
        :raises DecodeError: payload does not match trade offers shape
        """

        params = dict(params or {})  # do not touch caller mapping
        if SENT_OFFERS_PARAM not in params and RECEIVED_OFFERS_PARAM not in params:
            params[SENT_OFFERS_PARAM] = "true"
            params[RECEIVED_OFFERS_PARAM] = "true"

        rj = await self.call_web_api("GetTradeOffers", HttpMethod.GET, params)
        return decode_trade_offers(rj)

    async def get_trade_offer(self, offer_id: int | str, language: Language | str = Language.ENGLISH) -> TradeOffer:
        """
        Fetch trade offer from `Steam Web Api`.

        :param offer_id:
        :param language: language of item descriptions
        :raises RequestError: transport failure
        :raises DecodeError: payload does not match trade offer shape
        """

        params = {"tradeofferid": str(offer_id), "language": str(language)}
        rj = await self.call_web_api("GetTradeOffer", HttpMethod.GET, params)
        return decode_trade_offer_envelope(rj)

    async def cancel_trade_offer(self, offer_id: int | str):
        """
        Cancel outgoing trade offer.

        :param offer_id:
        :raises RequestError: transport failure or bad http status
        :raises EResultError: Steam reported failure in `X-eresult` header or response body
        """

        rj = await self.call_web_api("CancelTradeOffer", HttpMethod.POST, {"tradeofferid": str(offer_id)})
        if isinstance(rj, dict) and "success" in rj:
            success = EResult.get(rj["success"])
            if success is not EResult.OK:
                raise EResultError(rj.get("message", f"Failed to cancel trade offer {offer_id}"), success, rj)

        logger.debug("Trade offer %s canceled", offer_id)

    async def get_incoming_trade_offers(self) -> list[TradeOffer]:
        """Fetch received trade offers only"""

        return await self.get_trade_offers({RECEIVED_OFFERS_PARAM: "true"})

    async def get_outgoing_trade_offers(self) -> list[TradeOffer]:
        """Fetch sent trade offers only"""

        return await self.get_trade_offers({SENT_OFFERS_PARAM: "true"})

"""Decode raw `Steam` json payloads to models"""

from datetime import datetime

from .constants import TradeOfferStatus
from .exceptions import DecodeError
from .models import RsaKey, LoginResult, TradeOffer, TradeOfferItem

__all__ = (
    "trade_offer_status_from_code",
    "decode_rsa_key",
    "decode_login_result",
    "decode_trade_offer",
    "decode_trade_offers",
    "decode_trade_offer_envelope",
)


def trade_offer_status_from_code(code: int) -> TradeOfferStatus:
    """
    Map `trade_offer_state` integer code to `TradeOfferStatus`.

    :raises DecodeError: when code is not an integer or not known
    """

    if isinstance(code, bool) or not isinstance(code, int):
        raise DecodeError(f"Trade offer state code must be an integer, got {code!r}", code)

    try:
        return TradeOfferStatus(code)
    except ValueError:
        raise DecodeError(f"Unmapped trade offer state code: {code}", code) from None


def decode_rsa_key(data: dict) -> RsaKey:
    if not isinstance(data, dict):
        raise DecodeError("Malformed rsa key response", data)

    return RsaKey(
        success=bool(data.get("success")),
        publickey_mod=data.get("publickey_mod") or "",
        publickey_exp=data.get("publickey_exp") or "",
        timestamp=str(data.get("timestamp") or ""),
    )


def decode_login_result(data: dict) -> LoginResult:
    if not isinstance(data, dict):
        raise DecodeError("Malformed login response", data)

    transfer_parameters = data.get("transfer_parameters") or {}
    if not isinstance(transfer_parameters, dict):
        raise DecodeError("Malformed `transfer_parameters` in login response", data)

    captcha_gid = data.get("captcha_gid")  # steam sends -1 as number

    return LoginResult(
        success=bool(data.get("success")),
        captcha_needed=bool(data.get("captcha_needed")),
        captcha_gid=str(captcha_gid) if captcha_gid is not None else "-1",
        emailauth_needed=bool(data.get("emailauth_needed")),
        emailsteamid=str(data.get("emailsteamid") or ""),
        login_complete=bool(data.get("login_complete")),
        transfer_url=data.get("transfer_url"),
        transfer_parameters={k: str(v) for k, v in transfer_parameters.items()},
        message=data.get("message") or "",
    )


def _decode_items(items: list[dict]) -> list[TradeOfferItem]:
    return [
        TradeOfferItem(
            app_id=int(i_data["appid"]),
            context_id=int(i_data["contextid"]),
            asset_id=int(i_data["assetid"]),
            class_id=int(i_data["classid"]),
            instance_id=int(i_data["instanceid"]),
            amount=int(i_data.get("amount", 1)),
            missing=bool(i_data.get("missing", False)),
        )
        for i_data in items
    ]


def decode_trade_offer(data: dict) -> TradeOffer:
    """
    Create `TradeOffer` from raw offer data.

    :raises DecodeError: when data does not match the trade offer shape or state code is unmapped
    """

    try:
        escrow_end_date = data.get("escrow_end_date", 0)
        return TradeOffer(
            trade_offer_id=int(data["tradeofferid"]),
            partner_id=int(data["accountid_other"]),
            status=trade_offer_status_from_code(data["trade_offer_state"]),
            is_our_offer=bool(data["is_our_offer"]),
            expiration_time=datetime.fromtimestamp(data["expiration_time"]),
            time_created=datetime.fromtimestamp(data["time_created"]),
            time_updated=datetime.fromtimestamp(data["time_updated"]),
            items_to_give=_decode_items(data.get("items_to_give", ())),
            items_to_receive=_decode_items(data.get("items_to_receive", ())),
            message=data.get("message", ""),
            from_real_time_trade=bool(data.get("from_real_time_trade", False)),
            escrow_end_date=datetime.fromtimestamp(escrow_end_date) if escrow_end_date else None,
            confirmation_method=int(data.get("confirmation_method", 0)),
        )
    except (KeyError, TypeError, ValueError, AttributeError, OverflowError, OSError) as e:
        raise DecodeError(f"Malformed trade offer data: {e!r}", data) from e


def decode_trade_offers(data) -> list[TradeOffer]:
    """
    Decode list of trade offers. Accepts bare json array or `Steam Web API` envelope,
    in which case sent offers go first, then received.
    """

    if isinstance(data, list):
        return [decode_trade_offer(o) for o in data]

    if isinstance(data, dict) and isinstance(data.get("response"), dict):
        response = data["response"]
        sent = response.get("trade_offers_sent", [])
        received = response.get("trade_offers_received", [])
        if not isinstance(sent, list) or not isinstance(received, list):
            raise DecodeError("Expected lists of sent and received trade offers", data)

        return [decode_trade_offer(o) for o in (*sent, *received)]

    raise DecodeError("Expected list of trade offers", data)


def decode_trade_offer_envelope(data) -> TradeOffer:
    """Decode single trade offer from bare object or `Steam Web API` envelope"""

    if isinstance(data, dict) and isinstance(data.get("response"), dict):
        if "offer" not in data["response"]:
            raise DecodeError("Trade offer is missing in response", data)
        data = data["response"]["offer"]

    if not isinstance(data, dict):
        raise DecodeError("Expected trade offer object", data)

    return decode_trade_offer(data)

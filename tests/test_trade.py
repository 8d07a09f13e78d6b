import asyncio

import pytest
from aiohttp import ClientConnectionError

from aiosteamtrade import TradeOfferStatus, DecodeError, RequestError, ApiUrlError, EResultError, EResult
from aiosteamtrade.constants import STEAM_URL

from data import MOCK_API_KEY, RAW_OFFER, make_offer, make_response


def query_of(session) -> dict:
    return dict(session.request.call_args.args[1].query)


async def test_get_trade_offers_defaults_both_filters(client, session):
    session.request.side_effect = [make_response([])]
    params = {"active_only": "1"}

    assert await client.get_trade_offers(params) == []

    method, url = session.request.call_args.args
    assert method == "GET"
    assert url.with_query(None) == STEAM_URL.API.IEconService.GetTradeOffers
    query = query_of(session)
    assert query["get_sent_offers"] == "true"
    assert query["get_received_offers"] == "true"
    assert query["active_only"] == "1"
    assert query["key"] == MOCK_API_KEY
    assert query["format"] == "json"
    assert params == {"active_only": "1"}  # caller mapping untouched


async def test_get_trade_offers_keeps_passed_filter(client, session):
    session.request.side_effect = [make_response([])]

    await client.get_trade_offers({"get_sent_offers": "false"})

    query = query_of(session)
    assert query["get_sent_offers"] == "false"
    assert "get_received_offers" not in query


async def test_incoming_and_outgoing(client, session):
    session.request.side_effect = [make_response([]), make_response([])]

    await client.get_incoming_trade_offers()
    query = query_of(session)
    assert query["get_received_offers"] == "true"
    assert "get_sent_offers" not in query

    await client.get_outgoing_trade_offers()
    query = query_of(session)
    assert query["get_sent_offers"] == "true"
    assert "get_received_offers" not in query


async def test_key_and_format_can_not_be_overridden(client, session):
    session.request.side_effect = [make_response([])]

    await client.get_trade_offers({"key": "stolen", "format": "xml"})

    query = query_of(session)
    assert query["key"] == MOCK_API_KEY
    assert query["format"] == "json"


async def test_decode_bare_array(client, session):
    session.request.side_effect = [make_response([make_offer(1), make_offer(2, state=3)])]

    offers = await client.get_trade_offers()

    assert [o.id for o in offers] == [1, 2]
    assert offers[0].status is TradeOfferStatus.ACTIVE
    assert offers[0].active
    assert offers[1].accepted
    item = offers[0].items_to_give[0]
    assert (item.app_id, item.context_id, item.asset_id) == (730, 2, 28375628376)
    assert offers[0].escrow_end_date is None


async def test_decode_web_api_envelope(client, session):
    payload = {
        "response": {
            "trade_offers_sent": [make_offer(10)],
            "trade_offers_received": [make_offer(20, state=7, is_our_offer=False)],
            "next_cursor": 0,
        }
    }
    session.request.side_effect = [make_response(payload)]

    offers = await client.get_trade_offers()

    assert [o.id for o in offers] == [10, 20]
    assert offers[1].status is TradeOfferStatus.DECLINED
    assert not offers[1].is_our_offer


async def test_unknown_state_code_fails(client, session):
    session.request.side_effect = [make_response([make_offer(1, state=42)])]

    with pytest.raises(DecodeError, match="42"):
        await client.get_trade_offers()


async def test_unexpected_shape_fails(client, session):
    session.request.side_effect = [make_response({"trade_offers": "nope"})]

    with pytest.raises(DecodeError):
        await client.get_trade_offers()


async def test_missing_field_fails(client, session):
    broken = {k: v for k, v in RAW_OFFER.items() if k != "tradeofferid"}
    session.request.side_effect = [make_response([broken])]

    with pytest.raises(DecodeError):
        await client.get_trade_offers()


async def test_envelope_with_non_list_offers(client, session):
    session.request.side_effect = [make_response({"response": {"trade_offers_sent": 5}})]

    with pytest.raises(DecodeError):
        await client.get_trade_offers()


async def test_out_of_range_timestamp_fails(client, session):
    session.request.side_effect = [make_response([make_offer(1, expiration_time=10**20)])]

    with pytest.raises(DecodeError):
        await client.get_trade_offers()


async def test_transport_error(client, session):
    session.request.side_effect = [ClientConnectionError("timeout")]

    with pytest.raises(RequestError):
        await client.get_trade_offers()


async def test_timeout_is_request_error(client, session):
    session.request.side_effect = [asyncio.TimeoutError()]

    with pytest.raises(RequestError):
        await client.get_trade_offers()


async def test_invalid_json_body(client, session):
    session.request.side_effect = [make_response(text="<html>Service Unavailable</html>")]

    with pytest.raises(DecodeError):
        await client.get_trade_offers()


async def test_get_trade_offer(client, session):
    session.request.side_effect = [make_response({"response": {"offer": make_offer(777), "descriptions": []}})]

    offer = await client.get_trade_offer(777, "russian")

    assert offer.id == 777
    assert offer.partner_id == RAW_OFFER["accountid_other"]
    query = query_of(session)
    assert query["tradeofferid"] == "777"
    assert query["language"] == "russian"
    assert session.request.call_args.args[1].with_query(None) == STEAM_URL.API.IEconService.GetTradeOffer


async def test_get_trade_offer_bare_object(client, session):
    session.request.side_effect = [make_response(make_offer(778, state=6))]

    offer = await client.get_trade_offer(778)

    assert offer.status is TradeOfferStatus.CANCELED
    assert query_of(session)["language"] == "english"


async def test_get_trade_offer_missing_in_response(client, session):
    session.request.side_effect = [make_response({"response": {}})]

    with pytest.raises(DecodeError):
        await client.get_trade_offer(1)


async def test_cancel_trade_offer(client, session):
    session.request.side_effect = [make_response({"response": {}}, headers={"X-eresult": "1"})]

    assert await client.cancel_trade_offer(5432167890) is None

    method, url = session.request.call_args.args
    assert method == "POST"
    assert url.with_query(None) == STEAM_URL.API.IEconService.CancelTradeOffer
    assert dict(url.query) == {"key": MOCK_API_KEY, "format": "json"}
    assert session.request.call_args.kwargs["data"] == {"tradeofferid": "5432167890"}


async def test_cancel_trade_offer_failed_by_header(client, session):
    session.request.side_effect = [make_response(text="", headers={"X-eresult": "11"})]

    with pytest.raises(EResultError) as exc_info:
        await client.cancel_trade_offer(1)

    assert exc_info.value.result is EResult.INVALID_STATE


async def test_cancel_trade_offer_failed_by_body(client, session):
    session.request.side_effect = [make_response({"success": 2, "message": "no such offer"})]

    with pytest.raises(EResultError, match="no such offer") as exc_info:
        await client.cancel_trade_offer(1)

    assert exc_info.value.result is EResult.FAIL


async def test_cancel_trade_offer_malformed_eresult_header(client, session):
    session.request.side_effect = [make_response({"response": {}}, headers={"X-eresult": "busy"})]

    with pytest.raises(EResultError) as exc_info:
        await client.cancel_trade_offer(1)

    assert exc_info.value.result is EResult.UNKNOWN


async def test_cancel_trade_offer_empty_body(client, session):
    session.request.side_effect = [make_response(text="", headers={"X-eresult": "1"})]

    assert await client.cancel_trade_offer(1) is None


async def test_invalid_method_name(client, session):
    with pytest.raises(ApiUrlError):
        await client.call_web_api("Get Trade Offers")

    with pytest.raises(ApiUrlError):
        await client.call_web_api("GetTradeOffers", "DELETE")

    session.request.assert_not_called()


async def test_method_name_with_version(client, session):
    session.request.side_effect = [make_response({"response": {}})]

    assert await client.call_web_api("GetTradeOffersSummary/v1") == {"response": {}}
    assert session.request.call_args.args[1].path == "/IEconService/GetTradeOffersSummary/v1"

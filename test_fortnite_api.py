"""Tests for the upstream API client."""
from unittest.mock import Mock, patch

import pytest
import requests

import fortnite_api


def _response(status=200, payload=None, text=None):
    r = Mock(status_code=status)
    r.json.return_value = payload
    r.text = text if text is not None else ""
    if status >= 400:
        r.raise_for_status.side_effect = requests.HTTPError(f"{status} Error")
    return r


@patch("fortnite_api.requests.get")
def test_upstream_get_sends_credential(mock_get):
    mock_get.return_value = _response()
    with patch("fortnite_api.FORTNITE_API_KEY", "secret-key"):
        fortnite_api.upstream_get("/v2/shop", params={"lang": "en"})

    args, kwargs = mock_get.call_args
    assert args[0].endswith("/v2/shop")
    assert kwargs["headers"] == {"Authorization": "secret-key"}
    assert kwargs["params"] == {"lang": "en"}
    assert kwargs["timeout"] > 0


@patch("fortnite_api.requests.get")
def test_missing_key_sends_empty_header(mock_get):
    mock_get.return_value = _response()
    with patch("fortnite_api.FORTNITE_API_KEY", ""):
        fortnite_api.upstream_get("/v2/shop")
    assert mock_get.call_args.kwargs["headers"] == {"Authorization": ""}


@patch("fortnite_api.requests.get")
def test_fetch_shop_raises_on_http_error(mock_get):
    mock_get.return_value = _response(status=401)
    with pytest.raises(requests.HTTPError):
        fortnite_api.fetch_shop("en")


@patch("fortnite_api.requests.get")
def test_get_item_details_ok(mock_get):
    mock_get.return_value = _response(payload={"result": True, "item": {"id": "A"}})
    assert fortnite_api.get_item_details("A") == {"result": True, "item": {"id": "A"}}
    assert mock_get.call_args.kwargs["params"]["id"] == "A"


@pytest.mark.parametrize("response", [
    _response(status=404),
    _response(status=429),
    _response(payload=["not", "a", "dict"]),
])
@patch("fortnite_api.requests.get")
def test_get_item_details_returns_none(mock_get, response):
    mock_get.return_value = response
    assert fortnite_api.get_item_details("A") is None


@patch("fortnite_api.requests.get", side_effect=requests.Timeout("slow"))
def test_get_item_details_transport_error(mock_get):
    assert fortnite_api.get_item_details("A") is None


@patch("fortnite_api.requests.get")
def test_invalid_json_detail(mock_get):
    r = _response()
    r.json.side_effect = ValueError("Expecting value")
    mock_get.return_value = r
    assert fortnite_api.get_item_details("A") is None


@patch("fortnite_api.requests.get")
def test_api_call_counter(mock_get):
    mock_get.return_value = _response(payload={})
    fortnite_api.reset_api_call_count()
    fortnite_api.get_item_details("A")
    fortnite_api.get_item_details("B")
    assert fortnite_api.get_api_call_count() == 2

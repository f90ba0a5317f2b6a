"""Tests for the shared transport client."""

import httpx
import pytest

from xrel_client.errors.exceptions import APIError, TransportError
from xrel_client.transport.client import BASE_URL, TransportClient


@pytest.mark.unit
def test_requests_use_base_url(make_http, json_response):
    http, handler = make_http(json_response([]))

    http.request("GET", "release/categories.json")

    assert str(handler.last.url) == f"{BASE_URL}release/categories.json"
    assert handler.last.method == "GET"


@pytest.mark.unit
def test_base_url_gets_trailing_slash():
    http = TransportClient(base_url="https://xrel.example/v2", wrapped_transport=httpx.MockTransport(lambda r: None))

    assert http.base_url == "https://xrel.example/v2/"


@pytest.mark.unit
def test_none_params_are_dropped(make_http, json_response):
    http, handler = make_http(json_response({}))

    http.request("GET", "release/info.json", params={"id": "abc", "dirname": None})

    assert dict(handler.last.url.params) == {"id": "abc"}


@pytest.mark.unit
def test_post_is_form_encoded(make_http, json_response):
    http, handler = make_http(json_response({}))

    http.request("POST", "ext_info/rate.json", data={"id": "e1", "rating": 7, "skip": None})

    assert handler.last.headers["content-type"] == "application/x-www-form-urlencoded"
    assert handler.form() == {"id": ["e1"], "rating": ["7"]}


@pytest.mark.unit
def test_list_form_values_repeat(make_http, json_response):
    http, handler = make_http(json_response({}))

    http.request("POST", "release/addproof.json", data={"id": ["a", "b"], "image": "aW1n"})

    assert handler.form()["id"] == ["a", "b"]


@pytest.mark.unit
def test_network_failure_wrapped_with_cause():
    def handler(request):
        raise httpx.ConnectTimeout("timed out", request=request)

    http = TransportClient(wrapped_transport=httpx.MockTransport(handler))

    with pytest.raises(TransportError) as exc_info:
        http.request("GET", "release/filters.json")

    assert isinstance(exc_info.value.__cause__, httpx.ConnectTimeout)
    assert exc_info.value.status_code is None


@pytest.mark.unit
def test_api_errors_are_not_wrapped(make_http, json_response):
    http, _ = make_http(json_response({"error": "x", "error_description": "y"}))

    with pytest.raises(APIError):
        http.request("GET", "release/filters.json")


@pytest.mark.unit
def test_rate_limit_exposed(make_http, json_response):
    http, _ = make_http(json_response([], headers={"X-RateLimit-Limit": "900", "X-RateLimit-Remaining": "899"}))

    http.request("GET", "release/filters.json")

    assert http.rate_limit.limit == 900
    assert http.rate_limit.remaining == 899


@pytest.mark.unit
def test_context_manager_closes_client(make_http, json_response):
    http, _ = make_http(json_response([]))

    with http:
        pass

    assert http._client.is_closed

# tests/test_client.py
# SPDX-License-Identifier: Apache-2.0
import pytest
import requests

from pointnow_console.api.client import ApiClient, with_query
from pointnow_console.api.errors import (
    ApiClientError,
    InvalidResponseError,
    NetworkError,
    RequestCancelled,
)
from pointnow_console.core.cancel import CancellationToken

from .conftest import BASE_URL


class TestStatusHandling:
    def test_created_is_success(self, api_client, fake_session):
        fake_session.reply(201, {"message": "created", "data": {"branch": {"id": "br-1"}}})
        assert api_client.post("/branchs", {"name": "KL"})["data"]["branch"]["id"] == "br-1"

    def test_empty_success_body_is_empty_dict(self, api_client, fake_session):
        fake_session.reply(204)
        assert api_client.delete("/branchs/br-1") == {}

    def test_error_body_message_and_field_errors(self, api_client, fake_session):
        fake_session.reply(
            422, {"message": "Validation failed", "errors": {"email": ["Email already taken"]}}
        )
        with pytest.raises(ApiClientError) as exc:
            api_client.post("/auth/register", {"email": "a@b.co"})
        assert exc.value.status == 422
        assert exc.value.message == "Validation failed"
        assert exc.value.field_errors("email") == ["Email already taken"]
        assert exc.value.field_errors("password") == []

    def test_error_without_message_uses_status(self, api_client, fake_session):
        fake_session.reply(404, {"detail": "nope"})
        with pytest.raises(ApiClientError, match="Request failed with status 404"):
            api_client.get("/point_rewards/missing")

    def test_empty_error_body(self, api_client, fake_session):
        fake_session.reply(500)
        with pytest.raises(ApiClientError) as exc:
            api_client.get("/business")
        assert exc.value.status == 500

    def test_non_json_body(self, api_client, fake_session):
        fake_session.reply(502, raw=b"<html>Bad gateway</html>")
        with pytest.raises(InvalidResponseError) as exc:
            api_client.get("/business")
        assert exc.value.status == 502

    def test_non_json_success_body_is_also_invalid(self, api_client, fake_session):
        fake_session.reply(200, raw=b"OK")
        with pytest.raises(InvalidResponseError):
            api_client.get("/business")

    def test_connection_failure_is_network_error(self, api_client, fake_session):
        fake_session.fail(requests.ConnectionError("refused"))
        with pytest.raises(NetworkError) as exc:
            api_client.get("/business")
        assert exc.value.status == 0

    def test_timeout_is_network_error(self, api_client, fake_session):
        fake_session.fail(requests.Timeout("slow"))
        with pytest.raises(NetworkError):
            api_client.get("/business")

    def test_missing_base_url_fails_without_request(self, fake_session):
        client = ApiClient("", session=fake_session)
        with pytest.raises(ApiClientError) as exc:
            client.get("/business")
        assert exc.value.status == 0
        assert fake_session.calls == []


class TestRequestShape:
    def test_url_and_timeout(self, api_client, fake_session):
        api_client.get("/business?page=1")
        call = fake_session.calls[0]
        assert call["method"] == "GET"
        assert call["url"] == f"{BASE_URL}/business?page=1"
        assert call["timeout"] == 5

    def test_trailing_slash_on_base_url(self, fake_session):
        ApiClient(BASE_URL + "/", session=fake_session).get("/regions/country-code")
        assert fake_session.calls[0]["url"] == f"{BASE_URL}/regions/country-code"

    def test_bearer_token_attached(self, api_client, fake_session, token_box):
        token_box["token"] = "abc"
        api_client.get("/users/me")
        assert fake_session.calls[0]["headers"]["Authorization"] == "Bearer abc"

    def test_no_token_no_header(self, api_client, fake_session):
        api_client.get("/business")
        assert "Authorization" not in fake_session.calls[0]["headers"]

    def test_token_read_per_request(self, api_client, fake_session, token_box):
        api_client.get("/a")
        token_box["token"] = "fresh"
        api_client.get("/b")
        assert "Authorization" not in fake_session.calls[0]["headers"]
        assert fake_session.calls[1]["headers"]["Authorization"] == "Bearer fresh"

    def test_json_body(self, api_client, fake_session):
        api_client.post("/auth/login", {"email": "a@b.co", "password": "x"})
        call = fake_session.calls[0]
        assert call["json"] == {"email": "a@b.co", "password": "x"}
        assert call["headers"]["Content-Type"] == "application/json"

    def test_multipart_leaves_content_type_to_requests(self, api_client, fake_session, token_box):
        token_box["token"] = "abc"
        files = {"file": ("logo.png", b"\x89PNG", "image/png")}
        api_client.post("/file/upload", files=files)
        call = fake_session.calls[0]
        assert call["files"] == files
        assert "json" not in call
        assert "Content-Type" not in call["headers"]
        assert call["headers"]["Authorization"] == "Bearer abc"


class TestCancellation:
    def test_cancelled_before_send(self, api_client, fake_session):
        token = CancellationToken()
        token.cancel()
        with pytest.raises(RequestCancelled):
            api_client.get("/customers/search?query=a", cancel_token=token)
        assert fake_session.calls == []

    def test_cancelled_while_in_flight(self, api_client, fake_session):
        token = CancellationToken()
        fake_session.on_request = token.cancel
        fake_session.reply(200, {"data": {"customers": []}})
        with pytest.raises(RequestCancelled):
            api_client.get("/customers/search?query=a", cancel_token=token)
        assert len(fake_session.calls) == 1

    def test_live_token_returns_data(self, api_client, fake_session):
        fake_session.reply(200, {"data": {"ok": True}})
        assert api_client.get("/x", cancel_token=CancellationToken()) == {"data": {"ok": True}}


class TestWithQuery:
    def test_none_values_dropped(self):
        assert with_query("/customers", {"business_id": "b1", "page": None, "limit": 10}) == (
            "/customers?business_id=b1&limit=10"
        )

    def test_empty_params_leave_path_alone(self):
        assert with_query("/business") == "/business"
        assert with_query("/business", {"page": None}) == "/business"

    def test_booleans_render_lowercase(self):
        assert with_query("/p", {"is_trial": False, "with_x": True}) == "/p?is_trial=false&with_x=true"

    def test_values_are_encoded(self):
        assert with_query("/business/search", {"query": "kopi & tea"}) == (
            "/business/search?query=kopi+%26+tea"
        )

    def test_zero_is_kept(self):
        assert with_query("/p", {"page": 0}) == "/p?page=0"


def test_invalid_json_keeps_status_and_generic_message(api_client, fake_session):
    fake_session.reply(200, raw=b"{truncated")
    with pytest.raises(InvalidResponseError) as exc:
        api_client.get("/business")
    assert exc.value.status == 200
    assert exc.value.message == "Invalid response format from server."


def test_not_found_message_verbatim(api_client, fake_session):
    fake_session.reply(404, {"message": "not found"})
    with pytest.raises(ApiClientError) as exc:
        api_client.get("/point_rewards/x")
    assert (exc.value.status, exc.value.message) == (404, "not found")

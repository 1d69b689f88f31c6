"""Tests for the OAuth authorization code flow."""

from urllib.parse import parse_qs

import pytest

from instagram_client.auth.exceptions import CredentialNotFoundError, InvalidScopeError, OAuthExchangeError
from instagram_client.auth.oauth import Scope, TokenExchange, TokenResponse
from instagram_client.config import ClientConfig
from instagram_client.errors.exceptions import TransportError
from instagram_client.testing import RecordingTransport, build_raw_response

TOKEN_PAYLOAD = {
    "access_token": "fb2e77d.47a0479900504cb3ab4a1f626d174d2d",
    "user": {"id": "1574083", "username": "snoopdogg", "full_name": "Snoop Dogg"},
}


class TestScope:
    @pytest.mark.unit
    def test_validate_accepts_strings(self):
        assert Scope.validate("likes") is Scope.LIKES

    @pytest.mark.unit
    def test_validate_rejects_unknown(self):
        with pytest.raises(InvalidScopeError) as exc_info:
            Scope.validate("bogus")

        assert exc_info.value.scope == "bogus"


class TestBuildLoginUrl:
    """Test TokenExchange.build_login_url."""

    @pytest.mark.unit
    def test_basic_scope(self, config):
        url = TokenExchange(config, RecordingTransport()).build_login_url({"basic"})

        assert url == (
            "https://api.instagram.com/oauth/authorize"
            "?client_id=test-client-id"
            "&redirect_uri=https%3A%2F%2Fexample.com%2Fcallback"
            "&scope=basic"
            "&response_type=code"
        )

    @pytest.mark.unit
    def test_default_scope_is_basic(self, config):
        url = TokenExchange(config, RecordingTransport()).build_login_url()

        assert "&scope=basic&" in url

    @pytest.mark.unit
    def test_multiple_scopes_comma_joined_in_order(self, config):
        url = TokenExchange(config, RecordingTransport()).build_login_url(
            ["basic", Scope.COMMENTS, "likes", "basic"]
        )

        assert "&scope=basic,comments,likes&" in url

    @pytest.mark.unit
    @pytest.mark.parametrize("scope", ["likes", Scope.LIKES])
    def test_single_scope_not_split_into_characters(self, config, scope):
        url = TokenExchange(config, RecordingTransport()).build_login_url(scope)

        assert "&scope=likes&" in url

    @pytest.mark.unit
    def test_unknown_scope_rejected(self, config):
        with pytest.raises(InvalidScopeError):
            TokenExchange(config, RecordingTransport()).build_login_url({"bogus"})

    @pytest.mark.unit
    def test_one_bad_scope_rejects_all(self, config):
        with pytest.raises(InvalidScopeError) as exc_info:
            TokenExchange(config, RecordingTransport()).build_login_url(["basic", "public_content"])

        assert exc_info.value.scope == "public_content"

    @pytest.mark.unit
    def test_requires_callback(self):
        config = ClientConfig(api_key="cid", api_secret="secret")

        with pytest.raises(CredentialNotFoundError, match="callback_url"):
            TokenExchange(config, RecordingTransport()).build_login_url()


class TestExchangeCode:
    """Test TokenExchange.exchange_code."""

    @pytest.mark.unit
    async def test_success(self, config):
        transport = RecordingTransport(build_raw_response(200, TOKEN_PAYLOAD))

        token = await TokenExchange(config, transport).exchange_code("abc")

        assert isinstance(token, TokenResponse)
        assert token.access_token == TOKEN_PAYLOAD["access_token"]
        assert token.user["username"] == "snoopdogg"
        assert token.raw == TOKEN_PAYLOAD

    @pytest.mark.unit
    async def test_posts_form_to_token_endpoint(self, config):
        transport = RecordingTransport(build_raw_response(200, TOKEN_PAYLOAD))

        await TokenExchange(config, transport).exchange_code("abc")

        call = transport.last_call
        assert call.url == "https://api.instagram.com/oauth/access_token"
        assert call.method == "POST"
        assert call.headers["Accept"] == "application/json"
        assert call.connect_timeout == 20
        assert call.total_timeout == 90
        assert parse_qs(call.body.decode()) == {
            "grant_type": ["authorization_code"],
            "client_id": ["test-client-id"],
            "client_secret": ["test-secret"],
            "redirect_uri": ["https://example.com/callback"],
            "code": ["abc"],
        }

    @pytest.mark.unit
    async def test_empty_body_fails(self, config):
        transport = RecordingTransport(build_raw_response(200))

        with pytest.raises(OAuthExchangeError, match="empty body"):
            await TokenExchange(config, transport).exchange_code("abc")

    @pytest.mark.unit
    async def test_transport_failure_carries_transport_text(self, config):
        transport = RecordingTransport(TransportError("Could not resolve host: api.instagram.com"))

        with pytest.raises(OAuthExchangeError) as exc_info:
            await TokenExchange(config, transport).exchange_code("abc")

        assert "Could not resolve host" in str(exc_info.value)
        assert isinstance(exc_info.value.__cause__, TransportError)

    @pytest.mark.unit
    async def test_foreign_transport_exception_wrapped(self, config):
        transport = RecordingTransport(OSError("socket closed"))

        with pytest.raises(OAuthExchangeError, match="socket closed"):
            await TokenExchange(config, transport).exchange_code("abc")

    @pytest.mark.unit
    async def test_invalid_json_fails(self, config):
        transport = RecordingTransport(build_raw_response(200, "<html>oops</html>"))

        with pytest.raises(OAuthExchangeError, match="invalid body"):
            await TokenExchange(config, transport).exchange_code("abc")

    @pytest.mark.unit
    async def test_rejected_code(self, config):
        payload = {"code": 400, "error_type": "OAuthException", "error_message": "No matching code found."}
        transport = RecordingTransport(build_raw_response(400, payload))

        with pytest.raises(OAuthExchangeError) as exc_info:
            await TokenExchange(config, transport).exchange_code("stale")

        assert exc_info.value.error_type == "OAuthException"
        assert "No matching code found." in str(exc_info.value)

    @pytest.mark.unit
    async def test_body_without_token_fails(self, config):
        transport = RecordingTransport(build_raw_response(200, {"user": {}}))

        with pytest.raises(OAuthExchangeError):
            await TokenExchange(config, transport).exchange_code("abc")

    @pytest.mark.unit
    async def test_missing_secret_fails_before_sending(self):
        config = ClientConfig(api_key="cid", callback_url="https://example.com/cb")
        transport = RecordingTransport(build_raw_response(200, TOKEN_PAYLOAD))

        with pytest.raises(CredentialNotFoundError, match="api_secret"):
            await TokenExchange(config, transport).exchange_code("abc")

        assert transport.call_count == 0

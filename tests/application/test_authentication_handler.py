from unittest.mock import AsyncMock, Mock

import pytest

from userfront_core.application.authentication import (
    AuthOutcome,
    AuthResponseHooks,
    classify_response,
    handle_login_response,
    send_auth_request,
)
from userfront_core.domain.errors import PkceRedirectError


ACCESS_COOKIE = "access.demo1234"
ID_COOKIE = "id.demo1234"
REFRESH_COOKIE = "refresh.demo1234"

MFA_RESPONSE = {
    "message": "MFA required",
    "isMfaRequired": True,
    "firstFactorToken": "uf_ff_1",
    "authentication": {
        "secondFactors": [{"strategy": "totp", "channel": "authenticator"}],
    },
}


class TestClassifyResponse:
    def test_mfa_wins_over_everything(self):
        data = {**MFA_RESPONSE, "tokens": {}, "authorizationCode": "c"}
        assert classify_response(data) == AuthOutcome.MFA_REQUIRED

    def test_tokens_win_over_pkce(self):
        assert (
            classify_response({"tokens": {}, "authorizationCode": "c"})
            == AuthOutcome.TOKENS_ISSUED
        )

    def test_pkce(self):
        assert classify_response({"authorizationCode": "c"}) == AuthOutcome.PKCE_REQUIRED

    def test_redirect(self):
        assert classify_response({"redirectTo": "/x"}) == AuthOutcome.REDIRECT
        assert classify_response({}) == AuthOutcome.REDIRECT

    def test_falsy_mfa_flags_do_not_count(self):
        assert (
            classify_response({"isMfaRequired": False, "firstFactorToken": None})
            == AuthOutcome.REDIRECT
        )


class TestMfaBranch:
    @pytest.mark.asyncio
    async def test_records_state_without_side_effects(self, session, cookie_jar, location):
        result = await handle_login_response(session, MFA_RESPONSE)

        assert result is MFA_RESPONSE
        assert session.authentication.first_factor_token == "uf_ff_1"
        assert cookie_jar.all() == []
        assert location.navigations == []

    @pytest.mark.asyncio
    async def test_hook_replaces_default(self, session):
        hook = Mock()
        await handle_login_response(
            session, MFA_RESPONSE, hooks=AuthResponseHooks(handle_mfa_required=hook)
        )
        hook.assert_called_once_with("uf_ff_1", MFA_RESPONSE)
        assert session.authentication.first_factor_token is None


class TestTokensBranch:
    @pytest.mark.asyncio
    async def test_persists_tokens_and_redirects(
        self, session, cookie_jar, location, issued_tokens
    ):
        tokens = issued_tokens()
        data = {"message": "OK", "tokens": tokens, "redirectTo": "/dashboard"}

        result = await handle_login_response(session, data)

        assert result is data
        assert cookie_jar.get(ACCESS_COOKIE) == tokens["access"]["value"]
        assert cookie_jar.get(ID_COOKIE) == tokens["id"]["value"]
        assert cookie_jar.get(REFRESH_COOKIE) == tokens["refresh"]["value"]
        assert session.tokens.access_token == tokens["access"]["value"]
        assert location.navigations == ["/dashboard"]

    @pytest.mark.asyncio
    async def test_clears_pending_mfa(self, session, issued_tokens):
        await handle_login_response(session, MFA_RESPONSE)
        await handle_login_response(session, {"tokens": issued_tokens()}, redirect=False)
        assert not session.authentication.is_mfa_required()

    @pytest.mark.asyncio
    async def test_tokens_take_precedence_over_pkce(self, session, location, issued_tokens):
        data = {
            "tokens": issued_tokens(),
            "authorizationCode": "code-1",
            "redirectTo": "/dashboard",
        }
        await handle_login_response(session, data)
        assert location.navigations == ["/dashboard"]

    @pytest.mark.asyncio
    async def test_async_hook_replaces_default(self, session, cookie_jar, issued_tokens):
        hook = AsyncMock()
        data = {"tokens": issued_tokens()}

        await handle_login_response(
            session, data, redirect=False, hooks=AuthResponseHooks(handle_tokens=hook)
        )

        hook.assert_awaited_once_with(data["tokens"], data)
        assert cookie_jar.all() == []


class TestPkceBranch:
    @pytest.mark.asyncio
    async def test_redirects_with_authorization_code(self, session, location):
        data = {"message": "OK", "authorizationCode": "code-1"}

        result = await handle_login_response(
            session, data, redirect="https://app.example.com/callback"
        )

        assert result is data
        assert location.navigations == [
            "https://app.example.com/callback?authorization_code=code-1"
        ]

    @pytest.mark.asyncio
    async def test_falls_back_to_redirect_to(self, session, location):
        data = {"authorizationCode": "code-1", "redirectTo": "https://app.example.com/cb"}
        await handle_login_response(session, data)
        assert location.navigations == ["https://app.example.com/cb?authorization_code=code-1"]

    @pytest.mark.asyncio
    async def test_missing_url_raises(self, session, location):
        with pytest.raises(PkceRedirectError, match="Missing PKCE redirect url"):
            await handle_login_response(session, {"authorizationCode": "code-1"})
        assert location.navigations == []

    @pytest.mark.asyncio
    async def test_redirect_false_is_not_a_url(self, session):
        with pytest.raises(PkceRedirectError):
            await handle_login_response(
                session, {"authorizationCode": "code-1"}, redirect=False
            )

    @pytest.mark.asyncio
    async def test_hook_receives_code_and_url(self, session, location):
        hook = Mock()
        data = {"authorizationCode": "code-1", "redirectTo": "https://app.example.com/cb"}

        await handle_login_response(
            session, data, hooks=AuthResponseHooks(handle_pkce_required=hook)
        )

        hook.assert_called_once_with("code-1", "https://app.example.com/cb", data)
        assert location.navigations == []


class TestRedirectBranch:
    @pytest.mark.asyncio
    async def test_explicit_redirect_wins(self, make_session):
        session = make_session("https://example.com/login?redirect=/from-query")
        await handle_login_response(
            session, {"redirectTo": "/from-server"}, redirect="/explicit"
        )
        assert session.location.navigations == ["/explicit"]

    @pytest.mark.asyncio
    async def test_query_redirect_beats_server(self, make_session):
        session = make_session("https://example.com/login?redirect=/from-query")
        await handle_login_response(session, {"redirectTo": "/from-server"})
        assert session.location.navigations == ["/from-query"]

    @pytest.mark.asyncio
    async def test_server_redirect(self, session, location):
        await handle_login_response(session, {"redirectTo": "/from-server"}, redirect=True)
        assert location.navigations == ["/from-server"]

    @pytest.mark.asyncio
    async def test_defaults_to_root(self, session, location):
        await handle_login_response(session, {"message": "OK"})
        assert location.navigations == ["/"]

    @pytest.mark.asyncio
    async def test_redirect_false_suppresses_navigation(self, session, location):
        hook = Mock()
        await handle_login_response(
            session,
            {"redirectTo": "/dashboard"},
            redirect=False,
            hooks=AuthResponseHooks(handle_redirect=hook),
        )
        assert location.navigations == []
        hook.assert_not_called()

    @pytest.mark.asyncio
    async def test_same_path_does_not_navigate(self, session, location):
        await handle_login_response(session, {"redirectTo": "/login"})
        assert location.navigations == []

    @pytest.mark.asyncio
    async def test_hook_receives_resolved_target(self, session, location):
        hook = AsyncMock()
        data = {"redirectTo": "/dashboard"}

        await handle_login_response(
            session, data, hooks=AuthResponseHooks(handle_redirect=hook)
        )

        hook.assert_awaited_once_with("/dashboard", data)
        assert location.navigations == []


class TestUpstreamResponse:
    @pytest.mark.asyncio
    async def test_hook_runs_first(self, session):
        calls = []
        hooks = AuthResponseHooks(
            handle_upstream_response=lambda upstream, data: calls.append(("upstream", upstream)),
            handle_redirect=lambda target, data: calls.append(("redirect", target)),
        )

        await handle_login_response(
            session, {"upstreamResponse": {"id": 7}, "redirectTo": "/x"}, hooks=hooks
        )

        assert calls == [("upstream", {"id": 7}), ("redirect", "/x")]

    @pytest.mark.asyncio
    async def test_runs_before_mfa_branch(self, session):
        hook = Mock()
        data = {**MFA_RESPONSE, "upstreamResponse": {"id": 7}}

        await handle_login_response(
            session, data, hooks=AuthResponseHooks(handle_upstream_response=hook)
        )

        hook.assert_called_once_with({"id": 7}, data)
        assert session.authentication.first_factor_token == "uf_ff_1"


class TestAuthResponseHooks:
    def test_from_kwargs_ignores_none(self):
        hook = Mock()
        hooks = AuthResponseHooks.from_kwargs(handle_tokens=hook, handle_redirect=None)
        assert hooks.handle_tokens is hook
        assert hooks.handle_redirect is None


class TestSendAuthRequest:
    @pytest.mark.asyncio
    async def test_empty_response_does_not_navigate(self, session, api, location, caplog):
        api.add("POST", "auth/basic", None, 204)

        result = await send_auth_request(session, "POST", "auth/basic", {"password": "p"})

        assert result == {}
        assert location.navigations == []
        assert "Empty response from POST auth/basic" in caplog.text

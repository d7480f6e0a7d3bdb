import httpx
import pytest

from userfront_core.application.link import login_with_link, send_login_link
from userfront_core.application.password import (
    login_with_password_migrate,
    reset_password,
    send_reset_link,
    update_password,
)
from userfront_core.application.saml import complete_saml_login
from userfront_core.application.signup import signup
from userfront_core.application.sso import get_provider_link
from userfront_core.application.totp import get_totp, login_with_totp
from userfront_core.application.verification_code import (
    login_with_verification_code,
    send_verification_code,
)
from userfront_core.context import SessionContext
from userfront_core.domain.errors import (
    AuthenticationError,
    ConfigurationError,
    UserInputError,
)

from conftest import request_json


# ═══════════════════════════════════════════════════════════════
# SIGNUP
# ═══════════════════════════════════════════════════════════════


class TestSignup:
    @pytest.mark.asyncio
    async def test_missing_and_invalid_method(self, session):
        with pytest.raises(UserInputError, match='without "method"'):
            await signup(session)
        with pytest.raises(UserInputError, match='invalid "method"'):
            await signup(session, method="totp")

    @pytest.mark.asyncio
    async def test_password(self, session, api, cookie_jar, location, issued_tokens):
        tokens = issued_tokens()
        api.add("POST", "auth/create", {"message": "OK", "tokens": tokens, "redirectTo": "/welcome"})

        await signup(
            session,
            method="password",
            email="u@x.com",
            name="Jane",
            password="p",
            data={"plan": "pro"},
        )

        assert request_json(api.last_request) == {
            "email": "u@x.com",
            "name": "Jane",
            "password": "p",
            "data": {"plan": "pro"},
            "tenantId": "demo1234",
        }
        assert cookie_jar.get("id.demo1234") == tokens["id"]["value"]
        assert location.navigations == ["/welcome"]

    @pytest.mark.asyncio
    async def test_passwordless(self, session, api):
        api.add("POST", "auth/link", {"message": "OK"})
        await signup(session, method="passwordless", email="u@x.com", username="jdoe")
        assert request_json(api.last_request) == {
            "email": "u@x.com",
            "username": "jdoe",
            "tenantId": "demo1234",
        }

    @pytest.mark.asyncio
    async def test_verification_code(self, session, api):
        api.add("POST", "auth/code", {"message": "OK"})
        await signup(session, method="verificationCode", phone_number="+15555550100")
        assert request_json(api.last_request) == {
            "channel": "sms",
            "phoneNumber": "+15555550100",
            "tenantId": "demo1234",
        }

    @pytest.mark.asyncio
    async def test_sso(self, session, location):
        await signup(session, method="github")
        assert "/auth/github/login" in location.navigations[0]


# ═══════════════════════════════════════════════════════════════
# PASSWORD
# ═══════════════════════════════════════════════════════════════


class TestPasswordMigrate:
    @pytest.mark.asyncio
    async def test_no_reset_email(self, session, api):
        api.add("POST", "auth/password/migrate", {"message": "OK"})
        await login_with_password_migrate(
            session, email="u@x.com", password="p", no_reset_email=True, redirect=False
        )
        assert request_json(api.last_request) == {
            "emailOrUsername": "u@x.com",
            "password": "p",
            "options": {"noResetEmail": True},
            "tenantId": "demo1234",
        }

    @pytest.mark.asyncio
    async def test_default_sends_no_options(self, session, api):
        api.add("POST", "auth/password/migrate", {"message": "OK"})
        await login_with_password_migrate(session, username="jdoe", password="p", redirect=False)
        assert "options" not in request_json(api.last_request)


class TestPasswordReset:
    @pytest.mark.asyncio
    async def test_send_reset_link(self, session, api):
        api.add("POST", "auth/reset/link", {"message": "OK"})
        assert await send_reset_link(session, "u@x.com") == {"message": "OK"}
        assert request_json(api.last_request) == {"email": "u@x.com", "tenantId": "demo1234"}

    @pytest.mark.asyncio
    async def test_link_credentials_from_url(
        self, make_session, api, cookie_jar, issued_tokens
    ):
        session = make_session("https://example.com/reset?token=t1&uuid=u1")
        tokens = issued_tokens()
        api.add("PUT", "auth/reset", {"message": "OK", "tokens": tokens, "redirectTo": "/home"})

        await update_password(session, password="new")

        assert request_json(api.last_request) == {
            "tenantId": "demo1234",
            "uuid": "u1",
            "token": "t1",
            "password": "new",
        }
        assert cookie_jar.get("access.demo1234") == tokens["access"]["value"]
        assert session.location.navigations == ["/home"]

    @pytest.mark.asyncio
    async def test_link_without_tokens(self, session, api):
        api.add("PUT", "auth/reset", {"message": "OK"})
        with pytest.raises(AuthenticationError, match="problem resetting your password"):
            await update_password(session, method="link", token="t", uuid="u", password="x")

    @pytest.mark.asyncio
    async def test_link_missing_credentials(self, session, api):
        with pytest.raises(UserInputError, match="Missing token or uuid"):
            await update_password(session, method="link", password="x")
        assert api.requests == []

    @pytest.mark.asyncio
    async def test_jwt(self, session, api):
        session.tokens.access_token = "a1"
        api.add("PUT", "auth/basic", {"message": "OK"})

        await update_password(session, password="new", existing_password="old")

        request = api.last_request
        assert request.headers["authorization"] == "Bearer a1"
        assert request_json(request) == {
            "tenantId": "demo1234",
            "password": "new",
            "existingPassword": "old",
        }

    @pytest.mark.asyncio
    async def test_jwt_without_token(self, session):
        with pytest.raises(UserInputError, match="without a JWT access token"):
            await update_password(session, method="jwt", password="new")

    @pytest.mark.asyncio
    async def test_nothing_to_authorize_with(self, session):
        with pytest.raises(UserInputError):
            await reset_password(session, password="new")


# ═══════════════════════════════════════════════════════════════
# LINK
# ═══════════════════════════════════════════════════════════════


class TestLink:
    @pytest.mark.asyncio
    async def test_login_from_query(self, make_session, api, issued_tokens):
        session = make_session("https://example.com/login?token=t1&uuid=u1")
        api.add("PUT", "auth/link", {"message": "OK", "tokens": issued_tokens()})

        await login_with_link(session, redirect=False)

        assert api.last_request.method == "PUT"
        assert request_json(api.last_request) == {
            "token": "t1",
            "uuid": "u1",
            "tenantId": "demo1234",
        }
        assert session.tokens.access_token

    @pytest.mark.asyncio
    async def test_missing_credentials_is_noop(self, session, api):
        assert await login_with_link(session) is None
        assert api.requests == []

    @pytest.mark.asyncio
    async def test_send_login_link(self, session, api):
        api.add("POST", "auth/link", {"message": "OK"})
        await send_login_link(session, "u@x.com")
        assert api.last_request.method == "POST"
        assert request_json(api.last_request) == {"email": "u@x.com", "tenantId": "demo1234"}


# ═══════════════════════════════════════════════════════════════
# VERIFICATION CODE
# ═══════════════════════════════════════════════════════════════


class TestVerificationCode:
    @pytest.mark.asyncio
    async def test_channel_requirements(self, session):
        with pytest.raises(UserInputError, match="phoneNumber"):
            await send_verification_code(session, channel="sms")
        with pytest.raises(UserInputError, match="email"):
            await send_verification_code(session, channel="email")
        with pytest.raises(UserInputError, match="verification_code"):
            await login_with_verification_code(session, phone_number="+15555550100")

    @pytest.mark.asyncio
    async def test_send_carries_first_factor_token(self, session, api):
        session.authentication.first_factor_token = "uf_ff_1"
        api.add("POST", "auth/code", {"message": "OK"})

        await send_verification_code(session, channel="email", email="u@x.com")

        assert api.last_request.headers["authorization"] == "Bearer uf_ff_1"
        assert request_json(api.last_request) == {
            "channel": "email",
            "email": "u@x.com",
            "tenantId": "demo1234",
        }

    @pytest.mark.asyncio
    async def test_login(self, session, api, location, issued_tokens):
        api.add("PUT", "auth/code", {"message": "OK", "tokens": issued_tokens(), "redirectTo": "/d"})

        await login_with_verification_code(
            session, channel="sms", phone_number="+15555550100", verification_code="123456"
        )

        assert request_json(api.last_request) == {
            "channel": "sms",
            "verificationCode": "123456",
            "phoneNumber": "+15555550100",
            "tenantId": "demo1234",
        }
        assert session.tokens.id_token
        assert location.navigations == ["/d"]


# ═══════════════════════════════════════════════════════════════
# TOTP
# ═══════════════════════════════════════════════════════════════


class TestTotp:
    @pytest.mark.asyncio
    async def test_requires_a_code(self, session, api):
        with pytest.raises(UserInputError, match="totp_code"):
            await login_with_totp(session)
        assert api.requests == []

    @pytest.mark.asyncio
    async def test_backup_code_as_first_factor(self, session, api):
        api.add("POST", "auth/totp", {"message": "OK"})
        await login_with_totp(session, backup_code="aaaa-bbbb", email="u@x.com", redirect=False)
        assert request_json(api.last_request) == {
            "backupCode": "aaaa-bbbb",
            "email": "u@x.com",
            "tenantId": "demo1234",
        }
        assert "authorization" not in api.last_request.headers

    @pytest.mark.asyncio
    async def test_get_totp(self, session, api):
        with pytest.raises(UserInputError):
            await get_totp(session)

        session.tokens.access_token = "a1"
        api.add("GET", "auth/totp", {"qrCode": "data:image/png;base64,..."})
        assert (await get_totp(session))["qrCode"].startswith("data:")
        assert api.last_request.headers["authorization"] == "Bearer a1"


# ═══════════════════════════════════════════════════════════════
# SSO
# ═══════════════════════════════════════════════════════════════


class TestProviderLink:
    def test_link(self, make_session):
        session = make_session("https://example.com/login?redirect=/after&code_challenge=abc")
        url = httpx.URL(get_provider_link(session, "google"))

        assert url.host == "api.userfront.com"
        assert url.path == "/v0/auth/google/login"
        assert url.params["tenant_id"] == "demo1234"
        assert url.params["origin"] == "https://example.com"
        assert url.params["redirect"] == "/after"
        assert url.params["code_challenge"] == "abc"

    def test_redirect_false_returns_to_current_page(self, session):
        url = httpx.URL(get_provider_link(session, "azure", redirect=False))
        assert url.params["redirect"] == "/login"

    def test_explicit_redirect(self, session):
        url = httpx.URL(get_provider_link(session, "okta", redirect="/x"))
        assert url.params["redirect"] == "/x"
        assert "code_challenge" not in url.params

    def test_errors(self, session):
        with pytest.raises(UserInputError, match="Missing provider"):
            get_provider_link(session, "")
        with pytest.raises(ConfigurationError):
            get_provider_link(SessionContext(), "google")


# ═══════════════════════════════════════════════════════════════
# SAML
# ═══════════════════════════════════════════════════════════════


class TestSaml:
    @pytest.mark.asyncio
    async def test_complete(self, session, api, location, make_token):
        session.tokens.access_token = make_token({"userId": 1})
        session.tokens.id_token = make_token({"userId": 1, "userUuid": "uuid-1"})
        api.add("GET", "auth/saml/idp/token", {"token": "saml-1"})

        await complete_saml_login(session)

        assert api.last_request.headers["authorization"].startswith("Bearer ")
        url = httpx.URL(location.navigations[0])
        assert url.path == "/v0/auth/saml/idp/login"
        assert dict(url.params) == {
            "tenant_id": "demo1234",
            "token": "saml-1",
            "uuid": "uuid-1",
        }

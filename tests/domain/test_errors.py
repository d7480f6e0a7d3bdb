from userfront_core.domain.errors import (
    AuthDomainError,
    AuthenticationError,
    ConfigurationError,
    InvalidTokenError,
    PkceRedirectError,
    ServerError,
    UserInputError,
)


class TestErrorHierarchy:
    def test_all_errors_share_base(self):
        for error in (
            UserInputError("x"),
            ConfigurationError(),
            ServerError("x"),
            AuthenticationError(),
            InvalidTokenError(),
            PkceRedirectError(),
        ):
            assert isinstance(error, AuthDomainError)

    def test_codes(self):
        assert UserInputError("x").code == "INVALID_INPUT"
        assert ConfigurationError().code == "NOT_INITIALIZED"
        assert ServerError("x").code == "SERVER_ERROR"
        assert AuthenticationError().code == "AUTHENTICATION_FAILED"
        assert InvalidTokenError().code == "INVALID_TOKEN"
        assert PkceRedirectError().code == "PKCE_REDIRECT_MISSING"

    def test_default_messages(self):
        assert ConfigurationError().message == "Missing tenant ID"
        assert PkceRedirectError().message == "Missing PKCE redirect url"
        assert str(PkceRedirectError()) == "Missing PKCE redirect url"

    def test_invalid_token_is_authentication_error(self):
        assert isinstance(InvalidTokenError(), AuthenticationError)

    def test_server_error_carries_status_and_details(self):
        error = ServerError("Bad password", status_code=401, details={"body": {}})
        assert error.message == "Bad password"
        assert error.status_code == 401
        assert error.details == {"body": {}}

    def test_details_default_to_empty_dict(self):
        assert UserInputError("x").details == {}

from api.middleware.logging import LoggingMiddleware
from core.logging_config import redact_secrets


def test_redact_secrets_masks_sensitive_keys():
    event = {"event": "user_login", "password": "p1", "Token": "abc", "email": "a@x.com"}
    out = redact_secrets(None, "info", event)
    assert out["password"] == "***"
    assert out["Token"] == "***"
    assert out["email"] == "a@x.com"


def test_request_body_sanitizer_is_recursive():
    mw = LoggingMiddleware.__new__(LoggingMiddleware)
    body = {"email": "a@x.com", "password": "p1", "nested": [{"token": "t"}]}
    assert mw._sanitize_data(body) == {
        "email": "a@x.com",
        "password": "***",
        "nested": [{"token": "***"}],
    }

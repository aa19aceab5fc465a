"""
Tests for the session cookie accessor.
"""
from starlette.requests import Request
from starlette.responses import Response

from app.config import get_settings
from app.utils.session import clear_session, get_session, set_session


def _request_with_cookie(header: str | None) -> Request:
    headers = [(b'cookie', header.encode())] if header else []
    return Request({'type': 'http', 'method': 'GET', 'path': '/', 'headers': headers})


def test_set_session_cookie_attributes():
    response = Response()
    set_session(response, 'token-value')
    cookie = response.headers['set-cookie']
    assert cookie.startswith('auth-token=token-value')
    assert 'HttpOnly' in cookie
    assert 'Max-Age=86400' in cookie
    assert 'Path=/' in cookie
    assert 'SameSite=strict' in cookie
    assert 'Secure' not in cookie


def test_secure_flag_only_in_production(monkeypatch):
    monkeypatch.setattr(get_settings(), 'ENVIRONMENT', 'production')
    response = Response()
    set_session(response, 'token-value')
    assert 'Secure' in response.headers['set-cookie']


def test_clear_session_expires_cookie():
    response = Response()
    clear_session(response)
    cookie = response.headers['set-cookie']
    assert cookie.startswith('auth-token=""') or cookie.startswith('auth-token=;')
    assert 'Max-Age=0' in cookie
    assert 'HttpOnly' in cookie


def test_get_session_reads_raw_value():
    assert get_session(_request_with_cookie('auth-token=abc.def.ghi')) == 'abc.def.ghi'


def test_get_session_without_cookie():
    assert get_session(_request_with_cookie(None)) is None
    assert get_session(_request_with_cookie('other=1')) is None

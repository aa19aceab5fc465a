"""
Tests for the page auth gate.

The client fixture does not follow redirects, so each test sees the gate's
decision directly.
"""
from datetime import timedelta

import pytest

from app.utils.security import issue_token


def _valid_token() -> str:
    return issue_token({'sub': '1'})


class TestProtectedPages:
    def test_no_cookie_redirects_to_sign_in(self, client):
        response = client.get('/')
        assert response.status_code == 307
        assert response.headers['location'] == '/auth/sign-in'

    def test_invalid_cookie_redirects_to_sign_in(self, client):
        client.cookies.set('auth-token', 'not-a-token')
        response = client.get('/')
        assert response.status_code == 307
        assert response.headers['location'] == '/auth/sign-in'

    def test_expired_cookie_redirects_to_sign_in(self, client):
        client.cookies.set('auth-token', issue_token({'sub': '1'}, expires_delta=timedelta(seconds=-5)))
        response = client.get('/')
        assert response.status_code == 307
        assert response.headers['location'] == '/auth/sign-in'

    def test_valid_cookie_passes_through(self, client):
        client.cookies.set('auth-token', _valid_token())
        response = client.get('/')
        assert response.status_code == 200
        assert 'text/html' in response.headers['content-type']

    def test_gate_never_rewrites_cookie(self, client):
        client.cookies.set('auth-token', _valid_token())
        response = client.get('/')
        assert 'set-cookie' not in response.headers

    def test_unknown_protected_path_is_still_gated(self, client):
        response = client.get('/programs')
        assert response.status_code == 307
        assert response.headers['location'] == '/auth/sign-in'


class TestPublicPages:
    @pytest.mark.parametrize('path', ['/auth/sign-in', '/auth/sign-up'])
    def test_public_page_without_session_renders(self, client, path):
        response = client.get(path)
        assert response.status_code == 200

    def test_public_page_with_invalid_session_renders(self, client):
        client.cookies.set('auth-token', 'garbage')
        response = client.get('/auth/sign-in')
        assert response.status_code == 200

    def test_signed_in_visitor_is_sent_home(self, client):
        client.cookies.set('auth-token', _valid_token())
        response = client.get('/auth/sign-in')
        assert response.status_code == 307
        assert response.headers['location'] == '/'


class TestBypassedPaths:
    @pytest.mark.parametrize('path', ['/api/health', '/openapi.json'])
    def test_bypassed_paths_are_not_redirected(self, client, path):
        response = client.get(path)
        assert response.status_code == 200

    def test_api_route_without_cookie_gets_json_401_not_redirect(self, client):
        response = client.get('/api/master/category-programs')
        assert response.status_code == 401
        assert response.json() == {'error': 'Unauthorized'}

    def test_framework_asset_prefix_is_not_redirected(self, client):
        response = client.get('/_next/static/missing.css')
        assert response.status_code == 404

    def test_unserved_static_path_is_gated(self, client):
        response = client.get('/static/missing.css')
        assert response.status_code == 307
        assert response.headers['location'] == '/auth/sign-in'

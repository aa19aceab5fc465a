"""
Tests for the credential-check routes under /api/auth.
"""
import pytest

from app.models import Department, Role, User
from app.utils.security import verify_password, verify_token
from tests.conftest import TEST_PASSWORD


class TestLogin:
    def test_login_success_sets_session_cookie(self, client, test_user):
        response = client.post('/api/auth/login', json={'email': test_user.email, 'password': TEST_PASSWORD})

        assert response.status_code == 200
        body = response.json()
        assert body['success'] is True
        assert body['message'] == 'Login successful'
        assert body['data']['id'] == test_user.id
        assert body['data']['email'] == test_user.email
        assert body['data']['role'] == test_user.role.name
        assert body['data']['department'] == test_user.department.name
        assert 'password' not in str(body['data']).lower()

        set_cookie = response.headers['set-cookie']
        assert 'auth-token=' in set_cookie
        assert 'HttpOnly' in set_cookie
        assert 'SameSite=strict' in set_cookie
        claims = verify_token(response.cookies['auth-token'])
        assert claims['sub'] == str(test_user.id)

    def test_login_updates_last_login(self, client, db_session, test_user):
        assert test_user.last_login is None
        client.post('/api/auth/login', json={'email': test_user.email, 'password': TEST_PASSWORD})
        db_session.expire_all()
        assert db_session.get(User, test_user.id).last_login is not None

    def test_unknown_email_and_wrong_password_share_message(self, client, test_user):
        unknown = client.post('/api/auth/login', json={'email': 'nobody@example.com', 'password': TEST_PASSWORD})
        wrong = client.post('/api/auth/login', json={'email': test_user.email, 'password': 'wrong-password'})

        assert unknown.status_code == wrong.status_code == 401
        assert unknown.json() == wrong.json() == {'success': False, 'message': 'Invalid email or password'}
        assert 'set-cookie' not in unknown.headers
        assert 'set-cookie' not in wrong.headers

    @pytest.mark.parametrize('payload', [
        {},
        {'email': 'a@example.com'},
        {'password': 'password123'},
        {'email': '   ', 'password': 'password123'},
        {'email': 'a@example.com', 'password': ''},
    ])
    def test_missing_fields_return_400(self, client, payload):
        response = client.post('/api/auth/login', json=payload)
        assert response.status_code == 400
        assert response.json() == {'success': False, 'message': 'Email and password are required'}

    def test_inactive_account_returns_403(self, client, make_user):
        user = make_user(status='inactive')
        response = client.post('/api/auth/login', json={'email': user.email, 'password': TEST_PASSWORD})
        assert response.status_code == 403
        assert response.json()['success'] is False
        assert 'set-cookie' not in response.headers

    def test_inactive_account_with_wrong_password_returns_401(self, client, make_user):
        user = make_user(status='inactive')
        response = client.post('/api/auth/login', json={'email': user.email, 'password': 'wrong-password'})
        assert response.status_code == 401

    def test_malformed_json_returns_400(self, client):
        response = client.post(
            '/api/auth/login',
            content='{not json',
            headers={'content-type': 'application/json'},
        )
        assert response.status_code == 400
        assert response.json()['success'] is False


class TestRegister:
    def test_register_creates_account_with_defaults(self, client, db_session):
        response = client.post(
            '/api/auth/register',
            json={'name': 'Ayu Lestari', 'email': 'ayu@example.com', 'password': 'rahasia123'},
        )

        assert response.status_code == 201
        body = response.json()
        assert body['success'] is True
        assert body['data']['email'] == 'ayu@example.com'
        assert body['data']['role'] == 'User'
        assert body['data']['department'] == 'General'
        assert verify_token(response.cookies['auth-token']) is not None

        user = db_session.query(User).filter(User.email == 'ayu@example.com').one()
        assert user.status == 'active'
        assert user.password_hash != 'rahasia123'
        assert verify_password('rahasia123', user.password_hash)
        assert user.role.level == 'user'

    def test_register_reuses_existing_defaults(self, client, db_session, make_department, make_role):
        department = make_department(name='CSR & Community Development', code='CSR')
        role = make_role(name='Basic', level='user')

        client.post('/api/auth/register', json={'name': 'A', 'email': 'a@example.com', 'password': 'password123'})
        client.post('/api/auth/register', json={'name': 'B', 'email': 'b@example.com', 'password': 'password123'})

        users = db_session.query(User).all()
        assert {u.department_id for u in users} == {department.id}
        assert {u.role_id for u in users} == {role.id}
        assert db_session.query(Department).count() == 1
        assert db_session.query(Role).count() == 1

    def test_duplicate_email_returns_409(self, client, test_user):
        response = client.post(
            '/api/auth/register',
            json={'name': 'Copy', 'email': test_user.email, 'password': 'password123'},
        )
        assert response.status_code == 409
        assert response.json()['success'] is False
        assert 'set-cookie' not in response.headers

    def test_short_password_returns_400(self, client, db_session):
        response = client.post(
            '/api/auth/register',
            json={'name': 'Short', 'email': 'short@example.com', 'password': 'abc1234'},
        )
        assert response.status_code == 400
        assert db_session.query(User).count() == 0

    @pytest.mark.parametrize('password', ['p' * 80, 'é' * 40])
    def test_password_over_72_bytes_returns_400(self, client, db_session, password):
        response = client.post(
            '/api/auth/register',
            json={'name': 'Long', 'email': 'long@example.com', 'password': password},
        )
        assert response.status_code == 400
        assert response.json() == {'success': False, 'message': 'Password must be at most 72 bytes'}
        assert db_session.query(User).count() == 0

    @pytest.mark.parametrize('missing', ['name', 'email', 'password'])
    def test_missing_field_returns_400(self, client, missing):
        payload = {'name': 'Someone', 'email': 'someone@example.com', 'password': 'password123'}
        payload.pop(missing)
        response = client.post('/api/auth/register', json=payload)
        assert response.status_code == 400
        assert response.json()['message'] == 'Name, email, and password are required'


class TestLogoutAndMe:
    def test_logout_clears_cookie(self, auth_client):
        response = auth_client.post('/api/auth/logout')
        assert response.status_code == 200
        assert response.json() == {'success': True, 'message': 'Logged out successfully'}
        assert 'Max-Age=0' in response.headers['set-cookie']

    def test_logout_without_session_succeeds(self, client):
        response = client.post('/api/auth/logout')
        assert response.status_code == 200

    def test_me_returns_current_user(self, auth_client, test_user):
        response = auth_client.get('/api/auth/me')
        assert response.status_code == 200
        assert response.json()['data']['id'] == test_user.id

    def test_me_without_session_returns_401(self, client):
        response = client.get('/api/auth/me')
        assert response.status_code == 401
        assert response.json() == {'success': False, 'message': 'Unauthorized'}

    def test_me_after_logout_returns_401(self, auth_client):
        auth_client.post('/api/auth/logout')
        assert auth_client.get('/api/auth/me').status_code == 401

    def test_me_for_deactivated_user_returns_401(self, auth_client, db_session, test_user):
        test_user.status = 'inactive'
        db_session.commit()
        assert auth_client.get('/api/auth/me').status_code == 401

"""
Tests for /api/master/users.
"""
import pytest

from app.models import User
from app.utils.security import verify_password

PATH = '/api/master/users'


@pytest.fixture
def assignment(make_department, make_role):
    return {'department_id': make_department().id, 'role_id': make_role().id}


def test_list_users_hides_password_hash(auth_client, test_user):
    response = auth_client.get(PATH)
    assert response.status_code == 200
    body = response.json()
    assert body['total'] == 1
    row = body['data'][0]
    assert row['email'] == test_user.email
    assert row['role']['id'] == test_user.role_id
    assert row['department']['id'] == test_user.department_id
    assert 'password_hash' not in row
    assert 'password' not in row


def test_create_user_with_default_password(auth_client, db_session, assignment):
    response = auth_client.post(PATH, json={'email': 'budi@example.com', 'name': 'Budi Santoso', **assignment})

    assert response.status_code == 201
    body = response.json()
    assert body['status'] == 'active'
    assert body['department_id'] == assignment['department_id']

    user = db_session.get(User, body['id'])
    assert user.password_hash != 'password123'
    assert verify_password('password123', user.password_hash)


def test_created_user_can_sign_in_with_default_password(auth_client, client, assignment):
    auth_client.post(PATH, json={'email': 'siti@example.com', 'name': 'Siti', **assignment})
    response = client.post('/api/auth/login', json={'email': 'siti@example.com', 'password': 'password123'})
    assert response.status_code == 200


def test_create_user_with_explicit_password(auth_client, db_session, assignment):
    body = auth_client.post(
        PATH, json={'email': 'x@example.com', 'name': 'X', 'password': 'explicit-pass', **assignment}
    ).json()
    assert verify_password('explicit-pass', db_session.get(User, body['id']).password_hash)


@pytest.mark.parametrize('missing, message', [
    ('email', 'Email user wajib diisi'),
    ('name', 'Nama user wajib diisi'),
    ('department_id', 'Department dan Role wajib dipilih'),
    ('role_id', 'Department dan Role wajib dipilih'),
])
def test_create_requires_fields(auth_client, assignment, missing, message):
    payload = {'email': 'baru@example.com', 'name': 'Baru', **assignment}
    payload.pop(missing)
    response = auth_client.post(PATH, json=payload)
    assert response.status_code == 400
    assert response.json()['error'] == message


def test_create_with_unknown_role_returns_400(auth_client, assignment):
    payload = {'email': 'baru@example.com', 'name': 'Baru', **assignment, 'role_id': 999}
    assert auth_client.post(PATH, json=payload).status_code == 400


def test_duplicate_email_returns_400(auth_client, test_user, assignment):
    response = auth_client.post(PATH, json={'email': test_user.email, 'name': 'Copy', **assignment})
    assert response.status_code == 400
    assert response.json()['error'] == 'User dengan email tersebut sudah ada'


def test_update_keeps_omitted_assignment(auth_client, make_user):
    user = make_user()
    response = auth_client.put(
        f'{PATH}/{user.id}', json={'email': user.email, 'name': 'Nama Baru', 'position': 'Manager'}
    )
    assert response.status_code == 200
    body = response.json()
    assert body['name'] == 'Nama Baru'
    assert body['position'] == 'Manager'
    assert body['role_id'] == user.role_id
    assert body['department_id'] == user.department_id
    assert body['status'] == 'active'


def test_update_to_taken_email_returns_400(auth_client, make_user, test_user):
    other = make_user()
    response = auth_client.put(f'{PATH}/{other.id}', json={'email': test_user.email, 'name': 'X'})
    assert response.status_code == 400


def test_update_unknown_user_returns_404(auth_client):
    response = auth_client.put(f'{PATH}/999', json={'email': 'a@example.com', 'name': 'A'})
    assert response.status_code == 404
    assert response.json() == {'error': 'User tidak ditemukan'}


def test_invalid_status_returns_400(auth_client, make_user):
    user = make_user()
    response = auth_client.put(f'{PATH}/{user.id}', json={'email': user.email, 'name': 'A', 'status': 'banned'})
    assert response.status_code == 400


def test_delete_blocked_by_references(
    auth_client, db_session, make_user, make_program, make_activity, make_stakeholder, make_stakeholder_link
):
    user = make_user()
    program = make_program(created_by_id=user.id)
    make_activity(assigned_to_id=user.id, program_id=program.id)
    make_stakeholder_link(program_id=program.id, stakeholder_id=make_stakeholder().id, user_id=user.id)

    response = auth_client.delete(f'{PATH}/{user.id}')

    assert response.status_code == 400
    assert response.json() == {
        'error': 'Tidak dapat menghapus user yang sedang digunakan',
        'details': 'User ini terkait dengan: 1 Program, 1 Activity, 1 Stakeholder',
    }
    assert db_session.get(User, user.id) is not None


def test_delete_unused_user(auth_client, db_session, make_user):
    user = make_user()
    response = auth_client.delete(f'{PATH}/{user.id}')
    assert response.status_code == 200
    assert response.json() == {'message': 'User berhasil dihapus', 'deleted_id': user.id}
    assert db_session.get(User, user.id) is None


def test_create_with_password_over_72_bytes_returns_400(auth_client, db_session, assignment):
    response = auth_client.post(
        PATH, json={'email': 'long@example.com', 'name': 'Long', 'password': 'p' * 80, **assignment}
    )
    assert response.status_code == 400
    assert response.json() == {'error': 'Password maksimal 72 byte'}
    assert db_session.query(User).filter(User.email == 'long@example.com').first() is None


def test_delete_blocked_while_stakeholder_contact(auth_client, make_user, make_stakeholder):
    user = make_user()
    make_stakeholder(contact_person_id=user.id)

    response = auth_client.delete(f'{PATH}/{user.id}')

    assert response.status_code == 400
    assert response.json()['details'] == 'User ini terkait dengan: 1 Stakeholder contact'

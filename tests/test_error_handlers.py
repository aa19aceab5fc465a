"""
Tests for the JSON error bodies.
"""
from fastapi.testclient import TestClient

from app.main import app


def test_unhandled_error_returns_generic_500(client, monkeypatch):
    from app.services import master_data_service

    def boom(db):
        raise RuntimeError('database exploded with secret details')

    monkeypatch.setattr(master_data_service, 'list_roles', boom)
    client.post('/api/auth/register', json={'name': 'A', 'email': 'a@example.com', 'password': 'password123'})

    with TestClient(app, raise_server_exceptions=False, cookies=client.cookies) as raw_client:
        response = raw_client.get('/api/master/roles')

    assert response.status_code == 500
    assert response.json() == {'error': 'Internal server error'}
    assert 'secret' not in response.text


def test_validation_error_details_name_the_field(auth_client):
    response = auth_client.post('/api/master/departments', json={'name': 'X', 'code': 'Y', 'parent_id': 'abc'})
    assert response.status_code == 400
    body = response.json()
    assert body['error'] == 'Invalid request'
    assert body['details'].startswith('parent_id')


def test_unhandled_error_keeps_cors_headers(client, monkeypatch):
    from app.services import master_data_service

    def boom(db):
        raise RuntimeError('database exploded')

    monkeypatch.setattr(master_data_service, 'list_roles', boom)
    client.post('/api/auth/register', json={'name': 'A', 'email': 'a@example.com', 'password': 'password123'})

    with TestClient(app, raise_server_exceptions=False, cookies=client.cookies) as raw_client:
        response = raw_client.get('/api/master/roles', headers={'Origin': 'http://localhost:3000'})

    assert response.status_code == 500
    assert response.json() == {'error': 'Internal server error'}
    assert response.headers['access-control-allow-origin'] == 'http://localhost:3000'
    assert response.headers['access-control-allow-credentials'] == 'true'

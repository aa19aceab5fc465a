"""
Tests for /api/stakeholders/categories.
"""
from app.models import StakeholderCategory

PATH = '/api/stakeholders/categories'


def test_create_requires_name_and_type(auth_client, db_session):
    assert auth_client.post(PATH, json={'name': 'Komunitas'}).status_code == 400
    assert auth_client.post(PATH, json={'type': 'community'}).status_code == 400
    assert db_session.query(StakeholderCategory).count() == 0


def test_create_returns_201(auth_client):
    response = auth_client.post(
        PATH, json={'name': 'Pemerintah', 'description': 'Government institutions', 'type': 'government'}
    )
    assert response.status_code == 201
    body = response.json()
    assert body['name'] == 'Pemerintah'
    assert body['type'] == 'government'
    assert body['description'] == 'Government institutions'


def test_list_includes_stakeholder_counts(auth_client, make_stakeholder_category, make_stakeholder):
    used = make_stakeholder_category(name='Community')
    make_stakeholder_category(name='Internal', type='internal')
    make_stakeholder(category_id=used.id)
    make_stakeholder(category_id=used.id)

    response = auth_client.get(PATH)

    assert response.status_code == 200
    body = response.json()
    assert body['total'] == 2
    counts = {row['name']: row['stakeholder_count'] for row in body['data']}
    assert counts == {'Community': 2, 'Internal': 0}


def test_duplicate_name_returns_400(auth_client, make_stakeholder_category):
    make_stakeholder_category(name='NGO/Yayasan')
    response = auth_client.post(PATH, json={'name': 'NGO/Yayasan', 'type': 'external'})
    assert response.status_code == 400
    assert response.json()['error'] == 'Kategori dengan nama tersebut sudah ada'


def test_update_keeps_type_when_omitted(auth_client, make_stakeholder_category):
    category = make_stakeholder_category(name='Mitra', type='external')
    response = auth_client.put(f'{PATH}/{category.id}', json={'name': 'Mitra Strategis'})
    assert response.status_code == 200
    assert response.json()['name'] == 'Mitra Strategis'
    assert response.json()['type'] == 'external'


def test_update_unknown_returns_404(auth_client):
    response = auth_client.put(f'{PATH}/404', json={'name': 'Apa saja'})
    assert response.status_code == 404
    assert response.json() == {'error': 'Kategori tidak ditemukan'}


def test_delete_blocked_while_in_use(auth_client, db_session, make_stakeholder_category, make_stakeholder):
    category = make_stakeholder_category(name='Community')
    make_stakeholder(category_id=category.id)

    response = auth_client.delete(f'{PATH}/{category.id}')

    assert response.status_code == 400
    assert response.json() == {
        'error': 'Kategori tidak dapat dihapus karena masih digunakan oleh 1 stakeholder',
        'details': 'Kategori ini digunakan oleh 1 stakeholder',
    }
    assert db_session.get(StakeholderCategory, category.id) is not None


def test_delete_unused(auth_client, db_session, make_stakeholder_category):
    category = make_stakeholder_category()
    response = auth_client.delete(f'{PATH}/{category.id}')
    assert response.status_code == 200
    assert response.json() == {'message': 'Kategori berhasil dihapus', 'deleted_id': category.id}
    assert db_session.get(StakeholderCategory, category.id) is None

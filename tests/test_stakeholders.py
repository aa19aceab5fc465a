"""
Tests for /api/stakeholders (the stakeholders themselves; categories are
covered in test_stakeholder_categories).
"""
import pytest

from app.models import ProgramStakeholder, Stakeholder

PATH = '/api/stakeholders'


@pytest.fixture
def category(make_stakeholder_category):
    return make_stakeholder_category(name='Pemerintah', type='government')


def test_without_session_returns_401(client):
    assert client.get(PATH).status_code == 401
    assert client.put(f'{PATH}/1', json={}).status_code == 401


class TestCreate:
    def test_create_applies_defaults(self, auth_client, category):
        response = auth_client.post(PATH, json={
            'name': 'Dinas Pendidikan Kabupaten',
            'type': 'government',
            'category_id': category.id,
            'contact': '  Ibu Sari ',
        })

        assert response.status_code == 201
        body = response.json()
        assert body['importance'] == 'medium'
        assert body['influence'] == 'medium'
        assert body['relationship'] == 'neutral'
        assert body['contact'] == 'Ibu Sari'
        assert body['category'] == {'id': category.id, 'name': 'Pemerintah', 'type': 'government'}

    def test_category_is_required(self, auth_client, db_session):
        response = auth_client.post(PATH, json={'name': 'Tanpa kategori', 'type': 'community'})
        assert response.status_code == 400
        assert response.json()['error'] == 'Tipe dan kategori stakeholder wajib diisi'
        assert db_session.query(Stakeholder).count() == 0

    def test_unknown_category_returns_400(self, auth_client):
        response = auth_client.post(PATH, json={'name': 'X', 'type': 'community', 'category_id': 999})
        assert response.status_code == 400
        assert response.json()['error'] == 'Kategori stakeholder tidak ditemukan'

    def test_unknown_relationship_returns_400(self, auth_client, category):
        response = auth_client.post(PATH, json={
            'name': 'X', 'type': 'community', 'category_id': category.id, 'relationship': 'enemy',
        })
        assert response.status_code == 400
        assert response.json()['error'] == 'Hubungan harus salah satu dari: supporter, neutral, opponent'


class TestListAndUpdate:
    def test_search_and_program_counts(
        self, auth_client, category, make_stakeholder, make_program, make_stakeholder_link
    ):
        linked = make_stakeholder(category_id=category.id, name='Yayasan Pelita', type='organization')
        make_stakeholder(category_id=category.id, name='Karang Taruna', type='community')
        make_stakeholder_link(program_id=make_program().id, stakeholder_id=linked.id)

        response = auth_client.get(PATH, params={'search': 'pelita'})

        assert response.status_code == 200
        body = response.json()
        assert body['pagination']['total_items'] == 1
        assert body['data'][0]['name'] == 'Yayasan Pelita'
        assert body['data'][0]['counts'] == {'programs': 1}

    def test_filter_by_type(self, auth_client, category, make_stakeholder):
        make_stakeholder(category_id=category.id, name='Pemkab', type='government')
        make_stakeholder(category_id=category.id, name='Warga', type='community')

        response = auth_client.get(PATH, params={'type': 'community'})

        assert [row['name'] for row in response.json()['data']] == ['Warga']

    def test_update_relationship(self, auth_client, category, make_stakeholder):
        stakeholder = make_stakeholder(category_id=category.id, name='Tetap', type='community')

        response = auth_client.put(f'{PATH}/{stakeholder.id}', json={'relationship': 'supporter'})

        assert response.status_code == 200
        assert response.json()['relationship'] == 'supporter'
        assert response.json()['name'] == 'Tetap'

    def test_categories_route_is_not_read_as_an_id(self, auth_client, category):
        response = auth_client.get(f'{PATH}/categories')
        assert response.status_code == 200
        assert response.json()['total'] == 1


class TestDelete:
    def test_program_link_blocks_delete(
        self, auth_client, category, make_stakeholder, make_program, make_stakeholder_link
    ):
        stakeholder = make_stakeholder(category_id=category.id)
        make_stakeholder_link(program_id=make_program().id, stakeholder_id=stakeholder.id)

        response = auth_client.delete(f'{PATH}/{stakeholder.id}')

        assert response.status_code == 400
        assert response.json() == {
            'error': 'Tidak dapat menghapus stakeholder yang masih memiliki program terkait',
            'details': 'Stakeholder ini terkait dengan: 1 Program',
        }

    def test_force_removes_links(
        self, auth_client, db_session, category, make_stakeholder, make_program, make_stakeholder_link
    ):
        stakeholder = make_stakeholder(category_id=category.id)
        make_stakeholder_link(program_id=make_program().id, stakeholder_id=stakeholder.id)

        response = auth_client.delete(f'{PATH}/{stakeholder.id}', params={'force': 'true'})

        assert response.status_code == 200
        assert response.json()['message'] == 'Stakeholder berhasil dihapus'
        assert db_session.get(Stakeholder, stakeholder.id) is None
        assert db_session.query(ProgramStakeholder).count() == 0

    def test_delete_unknown_returns_404(self, auth_client):
        response = auth_client.delete(f'{PATH}/404')
        assert response.status_code == 404
        assert response.json() == {'error': 'Stakeholder tidak ditemukan'}

"""
Tests for /api/programs and the /api/master/programs dropdown.
"""
from datetime import date

import pytest

from app.models import Activity, Program, ProgramStakeholder, SubProgram

PATH = '/api/programs'


@pytest.fixture
def program_body(make_category_program, make_type_program, make_department):
    return {
        'name': 'Beasiswa Anak Nelayan',
        'category_id': make_category_program().id,
        'type_id': make_type_program().id,
        'department_id': make_department().id,
        'start_date': '2024-01-01',
        'end_date': '2024-12-31',
    }


class TestAuthRequired:
    @pytest.mark.parametrize('method, path', [
        ('get', PATH),
        ('post', PATH),
        ('get', f'{PATH}/1'),
        ('put', f'{PATH}/1'),
        ('delete', f'{PATH}/1'),
        ('get', '/api/master/programs'),
    ])
    def test_without_session_returns_401(self, client, method, path):
        response = client.request(method.upper(), path, json={} if method in ('post', 'put') else None)
        assert response.status_code == 401


class TestCreate:
    def test_create_returns_draft_owned_by_caller(self, auth_client, program_body, test_user):
        response = auth_client.post(PATH, json={**program_body, 'status': 'active'})

        assert response.status_code == 201
        body = response.json()
        assert body['name'] == 'Beasiswa Anak Nelayan'
        assert body['status'] == 'draft'
        assert body['priority'] == 'medium'
        assert body['created_by']['id'] == test_user.id
        assert body['category']['id'] == program_body['category_id']

    def test_missing_references_return_400(self, auth_client, db_session):
        response = auth_client.post(PATH, json={'name': 'Tanpa kategori'})
        assert response.status_code == 400
        assert response.json()['error'] == (
            'Kategori, tipe, departemen, tanggal mulai dan tanggal selesai wajib diisi'
        )
        assert db_session.query(Program).count() == 0

    def test_blank_name_returns_400(self, auth_client, program_body):
        response = auth_client.post(PATH, json={**program_body, 'name': '   '})
        assert response.status_code == 400
        assert response.json()['error'] == 'Nama program wajib diisi'

    def test_unknown_category_returns_400(self, auth_client, program_body):
        response = auth_client.post(PATH, json={**program_body, 'category_id': 999})
        assert response.status_code == 400
        assert response.json()['error'] == 'Kategori program tidak ditemukan'

    def test_end_before_start_returns_400(self, auth_client, program_body):
        response = auth_client.post(
            PATH, json={**program_body, 'start_date': '2024-12-31', 'end_date': '2024-01-01'}
        )
        assert response.status_code == 400
        assert response.json()['error'] == 'End date must be after start date'

    def test_unknown_priority_returns_400(self, auth_client, program_body):
        response = auth_client.post(PATH, json={**program_body, 'priority': 'urgent'})
        assert response.status_code == 400
        assert response.json()['error'].startswith('Prioritas harus salah satu dari')


class TestList:
    def test_pagination_meta(self, auth_client, make_program):
        for _ in range(3):
            make_program()

        response = auth_client.get(PATH, params={'page': 2, 'limit': 2})

        assert response.status_code == 200
        body = response.json()
        assert len(body['data']) == 1
        assert body['pagination'] == {
            'current_page': 2,
            'total_pages': 2,
            'total_items': 3,
            'items_per_page': 2,
        }

    def test_search_and_sort_by_name(self, auth_client, make_program):
        make_program(name='Beasiswa SMA')
        make_program(name='Air Bersih Desa')
        make_program(name='Beasiswa Kuliah')

        response = auth_client.get(
            PATH, params={'search': 'beasiswa', 'sort': 'name', 'order': 'asc'}
        )

        names = [row['name'] for row in response.json()['data']]
        assert names == ['Beasiswa Kuliah', 'Beasiswa SMA']

    def test_status_filter(self, auth_client, make_program):
        make_program(name='Aktif', status='active')
        make_program(name='Draf')

        response = auth_client.get(PATH, params={'status': 'active'})

        assert [row['name'] for row in response.json()['data']] == ['Aktif']

    def test_unknown_sort_key_falls_back(self, auth_client, make_program):
        make_program()
        response = auth_client.get(PATH, params={'sort': 'password_hash'})
        assert response.status_code == 200
        assert response.json()['pagination']['total_items'] == 1

    def test_counts_related_records(self, auth_client, make_program, make_sub_program, make_budget):
        program = make_program()
        make_sub_program(program_id=program.id)
        make_budget(program_id=program.id)

        response = auth_client.get(f'{PATH}/{program.id}')

        assert response.status_code == 200
        assert response.json()['counts'] == {
            'sub_programs': 1,
            'activities': 0,
            'budgets': 1,
            'stakeholders': 0,
        }


class TestUpdate:
    def test_partial_update_keeps_other_fields(self, auth_client, make_program):
        program = make_program(name='Tetap', priority='high')

        response = auth_client.put(f'{PATH}/{program.id}', json={'status': 'approved'})

        assert response.status_code == 200
        body = response.json()
        assert body['status'] == 'approved'
        assert body['name'] == 'Tetap'
        assert body['priority'] == 'high'

    def test_date_order_checked_against_stored_dates(self, auth_client, make_program):
        program = make_program(start_date=date(2024, 6, 1), end_date=date(2024, 12, 1))
        response = auth_client.put(f'{PATH}/{program.id}', json={'end_date': '2024-01-01'})
        assert response.status_code == 400
        assert response.json()['error'] == 'End date must be after start date'

    def test_clearing_required_reference_returns_400(self, auth_client, make_program):
        program = make_program()
        response = auth_client.put(f'{PATH}/{program.id}', json={'department_id': None})
        assert response.status_code == 400
        assert response.json()['error'] == 'department_id tidak boleh kosong'

    def test_unknown_program_returns_404(self, auth_client):
        response = auth_client.put(f'{PATH}/404', json={'name': 'Apa saja'})
        assert response.status_code == 404
        assert response.json() == {'error': 'Program tidak ditemukan'}


class TestDelete:
    def test_related_records_block_delete(self, auth_client, db_session, make_program, make_sub_program):
        program = make_program()
        make_sub_program(program_id=program.id)

        response = auth_client.delete(f'{PATH}/{program.id}')

        assert response.status_code == 400
        assert response.json() == {
            'error': 'Program memiliki data terkait yang harus dihapus terlebih dahulu',
            'details': 'Program ini terkait dengan: 1 Sub program',
        }
        assert db_session.get(Program, program.id) is not None

    def test_force_removes_related_records(
        self, auth_client, db_session, make_program, make_sub_program, make_activity
    ):
        program = make_program()
        sub_program = make_sub_program(program_id=program.id)
        activity = make_activity(program_id=program.id, sub_program_id=sub_program.id)

        response = auth_client.delete(f'{PATH}/{program.id}', params={'force': 'true'})

        assert response.status_code == 200
        assert response.json() == {'message': 'Program berhasil dihapus', 'deleted_id': program.id}
        assert db_session.get(SubProgram, sub_program.id) is None
        assert db_session.get(Activity, activity.id) is None

    def test_stakeholder_links_do_not_block(
        self, auth_client, db_session, make_program, make_stakeholder, make_stakeholder_link
    ):
        program = make_program()
        make_stakeholder_link(program_id=program.id, stakeholder_id=make_stakeholder().id)

        response = auth_client.delete(f'{PATH}/{program.id}')

        assert response.status_code == 200
        assert db_session.query(ProgramStakeholder).count() == 0


class TestProgramDropdown:
    def test_lists_approved_and_active_by_name(self, auth_client, make_program):
        make_program(name='Zebra Cross', status='active')
        make_program(name='Draf', status='draft')
        make_program(name='Air Bersih', status='approved')

        response = auth_client.get('/api/master/programs')

        assert response.status_code == 200
        body = response.json()
        assert body['total'] == 2
        assert [row['name'] for row in body['data']] == ['Air Bersih', 'Zebra Cross']

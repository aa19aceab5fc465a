"""
Tests for /api/sub-programs and the /api/master/projects dropdown.
"""
import pytest

from app.models import Activity, Budget, SubProgram

PATH = '/api/sub-programs'


@pytest.fixture
def program(make_program):
    return make_program(name='Beasiswa Anak Nelayan', status='active')


def test_without_session_returns_401(client):
    assert client.get(PATH).status_code == 401
    assert client.get('/api/master/projects').status_code == 401


class TestCreate:
    def test_create_returns_201(self, auth_client, program):
        response = auth_client.post(PATH, json={
            'name': 'Pendampingan Belajar',
            'program_id': program.id,
            'start_date': '2024-02-01',
            'end_date': '2024-06-30',
            'budget': 25000000,
        })

        assert response.status_code == 201
        body = response.json()
        assert body['status'] == 'planned'
        assert body['progress'] == 0
        assert body['budget'] == 25000000
        assert body['program'] == {'id': program.id, 'name': 'Beasiswa Anak Nelayan'}

    def test_program_is_required(self, auth_client, db_session):
        response = auth_client.post(PATH, json={
            'name': 'Tanpa program', 'start_date': '2024-02-01', 'end_date': '2024-06-30',
        })
        assert response.status_code == 400
        assert response.json()['error'] == 'Program, tanggal mulai dan tanggal selesai wajib diisi'
        assert db_session.query(SubProgram).count() == 0

    def test_unknown_program_returns_400(self, auth_client):
        response = auth_client.post(PATH, json={
            'name': 'Yatim', 'program_id': 999, 'start_date': '2024-02-01', 'end_date': '2024-06-30',
        })
        assert response.status_code == 400
        assert response.json()['error'] == 'Program tidak ditemukan'

    @pytest.mark.parametrize('progress', [-1, 100.5])
    def test_progress_out_of_range_returns_400(self, auth_client, program, progress):
        response = auth_client.post(PATH, json={
            'name': 'Di luar rentang',
            'program_id': program.id,
            'start_date': '2024-02-01',
            'end_date': '2024-06-30',
            'progress': progress,
        })
        assert response.status_code == 400
        assert response.json()['error'] == 'Progress must be between 0 and 100'


class TestListAndUpdate:
    def test_filter_by_program(self, auth_client, program, make_program, make_sub_program):
        make_sub_program(program_id=program.id, name='Milik program')
        make_sub_program(program_id=make_program().id, name='Program lain')

        response = auth_client.get(PATH, params={'program_id': program.id})

        assert response.status_code == 200
        body = response.json()
        assert [row['name'] for row in body['data']] == ['Milik program']
        assert body['pagination']['total_items'] == 1

    def test_update_progress(self, auth_client, program, make_sub_program):
        sub_program = make_sub_program(program_id=program.id)

        response = auth_client.put(f'{PATH}/{sub_program.id}', json={'progress': 40, 'status': 'active'})

        assert response.status_code == 200
        assert response.json()['progress'] == 40
        assert response.json()['status'] == 'active'

    def test_get_unknown_returns_404(self, auth_client):
        response = auth_client.get(f'{PATH}/404')
        assert response.status_code == 404
        assert response.json() == {'error': 'Sub program tidak ditemukan'}


class TestDelete:
    def test_activities_block_delete(self, auth_client, program, make_sub_program, make_activity):
        sub_program = make_sub_program(program_id=program.id)
        make_activity(program_id=program.id, sub_program_id=sub_program.id)

        response = auth_client.delete(f'{PATH}/{sub_program.id}')

        assert response.status_code == 400
        assert response.json()['details'] == 'Sub program ini terkait dengan: 1 Activity'

    def test_force_removes_activities_and_budgets(
        self, auth_client, db_session, program, make_sub_program, make_activity, make_budget
    ):
        sub_program = make_sub_program(program_id=program.id)
        activity = make_activity(program_id=program.id, sub_program_id=sub_program.id)
        budget = make_budget(program_id=program.id, sub_program_id=sub_program.id)

        response = auth_client.delete(f'{PATH}/{sub_program.id}', params={'force': True})

        assert response.status_code == 200
        assert response.json()['message'] == 'Sub program berhasil dihapus'
        assert db_session.get(Activity, activity.id) is None
        assert db_session.get(Budget, budget.id) is None


def test_project_dropdown_lists_planned_and_active(auth_client, program, make_sub_program):
    make_sub_program(program_id=program.id, name='Selesai', status='completed')
    make_sub_program(program_id=program.id, name='Berjalan', status='active')
    make_sub_program(program_id=program.id, name='Akan datang', status='planned')

    response = auth_client.get('/api/master/projects')

    assert response.status_code == 200
    assert [row['name'] for row in response.json()['data']] == ['Akan datang', 'Berjalan']

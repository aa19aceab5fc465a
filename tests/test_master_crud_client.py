"""
Tests for MasterCrudClient, run against the app through the test client.
"""
import httpx

from app.clients.master_crud import MasterCrudClient

PATH = '/api/master/category-programs'


def test_create_update_delete_cycle(auth_client):
    crud = MasterCrudClient(auth_client, PATH, 'Kategori')

    created = crud.create({'name': 'Pendidikan'})
    assert created['name'] == 'Pendidikan'
    assert crud.error is None

    updated = crud.update(created['id'], {'name': 'Pendidikan Dasar'})
    assert updated['name'] == 'Pendidikan Dasar'

    assert [row['name'] for row in crud.list()] == ['Pendidikan Dasar']

    assert crud.delete(created['id']) is True
    assert crud.list() == []
    assert crud.loading is False


def test_server_error_message_is_kept(auth_client):
    crud = MasterCrudClient(auth_client, PATH, 'Kategori')
    crud.create({'name': 'Kesehatan'})

    assert crud.create({'name': 'Kesehatan'}) is None
    assert crud.error == 'Kategori dengan nama tersebut sudah ada'

    crud.clear_error()
    assert crud.error is None


def test_delete_blocked_returns_false(auth_client, make_category_program, make_program):
    category = make_category_program()
    make_program(category_id=category.id)
    crud = MasterCrudClient(auth_client, PATH, 'Kategori')

    assert crud.delete(category.id) is False
    assert crud.error == 'Tidak dapat menghapus kategori yang sedang digunakan oleh program'


def test_successful_call_resets_previous_error(auth_client):
    crud = MasterCrudClient(auth_client, PATH, 'Kategori')
    crud.update(999, {'name': 'X'})
    assert crud.error == 'Kategori tidak ditemukan'

    crud.create({'name': 'Baru'})
    assert crud.error is None


def test_default_message_when_body_has_no_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, text='upstream failure')

    with httpx.Client(transport=httpx.MockTransport(handler), base_url='http://csr.test') as http:
        crud = MasterCrudClient(http, '/api/master/type-programs', 'Tipe Program')
        assert crud.create({'name': 'X'}) is None
        assert crud.error == 'Gagal membuat tipe program'
        assert crud.update(1, {'name': 'X'}) is None
        assert crud.error == 'Gagal mengupdate tipe program'
        assert crud.delete(1) is False
        assert crud.error == 'Gagal menghapus tipe program'


def test_transport_error_is_captured():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError('connection refused', request=request)

    with httpx.Client(transport=httpx.MockTransport(handler), base_url='http://csr.test') as http:
        crud = MasterCrudClient(http, PATH, 'Kategori')
        assert crud.list() is None
        assert crud.error == 'Gagal memuat kategori'
        assert crud.loading is False


def test_success_with_non_json_body_is_captured():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text='<html>ok</html>')

    with httpx.Client(transport=httpx.MockTransport(handler), base_url='http://csr.test') as http:
        crud = MasterCrudClient(http, PATH, 'Kategori')
        assert crud.create({'name': 'X'}) is None
        assert crud.error == 'Gagal membuat kategori'
        assert crud.list() is None
        assert crud.error == 'Gagal memuat kategori'
        assert crud.loading is False


def test_list_with_unexpected_json_shape_is_captured():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=[{'id': 1, 'name': 'Pendidikan'}])

    with httpx.Client(transport=httpx.MockTransport(handler), base_url='http://csr.test') as http:
        crud = MasterCrudClient(http, PATH, 'Kategori')
        assert crud.list() is None
        assert crud.error == 'Gagal memuat kategori'

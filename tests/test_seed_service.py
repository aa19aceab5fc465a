"""
Tests for default-record provisioning.
"""
import json

from app.models import Company, Department, Role
from app.services.seed_service import (
    ensure_default_department,
    ensure_default_role,
    seed_defaults,
)


def test_seed_defaults_creates_each_record_once(db_session):
    seed_defaults(db_session)
    seed_defaults(db_session)

    assert db_session.query(Role).count() == 1
    assert db_session.query(Department).count() == 1
    assert db_session.query(Company).count() == 1

    role = db_session.query(Role).one()
    assert role.name == 'User'
    assert role.level == 'user'
    assert json.loads(role.permissions) == ['view_programs', 'view_stakeholders']
    assert db_session.query(Department).one().code == 'GEN'


def test_existing_user_level_role_is_reused(db_session, make_role):
    make_role(name='Manager', level='manager')
    existing = make_role(name='Staff', level='user')
    assert ensure_default_role(db_session).id == existing.id


def test_first_department_is_reused(db_session, make_department):
    first = make_department(code='CSR')
    make_department(code='HR')
    assert ensure_default_department(db_session).id == first.id
    assert db_session.query(Department).count() == 2

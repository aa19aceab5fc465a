"""
CSR Dashboard - Test Configuration and Fixtures
"""
import os
from typing import Generator

import pytest
from faker import Faker
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

# Set testing environment before the app reads its settings
os.environ['DATABASE_URL'] = 'sqlite://'
os.environ['JWT_SECRET'] = 'test-jwt-secret-for-testing-only'
os.environ['ENVIRONMENT'] = 'test'
os.environ['SEED_ON_STARTUP'] = 'false'

from app.main import app  # noqa: E402
from app.database import Base, get_db  # noqa: E402
from app.models import (  # noqa: E402
    Activity,
    Budget,
    CategoryProgram,
    Department,
    Program,
    ProgramStakeholder,
    Role,
    Stakeholder,
    StakeholderCategory,
    SubProgram,
    TypeProgram,
    User,
)
from app.utils.security import hash_password  # noqa: E402

fake = Faker()

TEST_PASSWORD = 'testpassword123'

# In-memory database shared by every connection of the pool
test_engine = create_engine(
    'sqlite://',
    connect_args={'check_same_thread': False},
    poolclass=StaticPool,
)
TestSessionLocal = sessionmaker(bind=test_engine, autocommit=False, autoflush=False)


@pytest.fixture(scope='function')
def db_session() -> Generator[Session, None, None]:
    """Create a fresh database session for each test"""
    Base.metadata.create_all(bind=test_engine)
    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()
        Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def client(db_session: Session) -> Generator[TestClient, None, None]:
    """Create test client with database override"""
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app, follow_redirects=False) as test_client:
        yield test_client
    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# Factories
# ---------------------------------------------------------------------------


@pytest.fixture
def make_role(db_session: Session):
    def _make(name: str | None = None, level: str = 'user', permissions: str = '[]') -> Role:
        role = Role(name=name or fake.unique.job()[:100], level=level, permissions=permissions)
        db_session.add(role)
        db_session.commit()
        db_session.refresh(role)
        return role
    return _make


@pytest.fixture
def make_department(db_session: Session):
    def _make(name: str | None = None, code: str | None = None, parent_id: int | None = None) -> Department:
        department = Department(
            name=name or fake.unique.company(),
            code=code or fake.unique.bothify('D-###??').upper(),
            parent_id=parent_id,
        )
        db_session.add(department)
        db_session.commit()
        db_session.refresh(department)
        return department
    return _make


@pytest.fixture
def make_user(db_session: Session, make_role, make_department):
    def _make(
        email: str | None = None,
        password: str = TEST_PASSWORD,
        status: str = 'active',
        role: Role | None = None,
        department: Department | None = None,
    ) -> User:
        user = User(
            name=fake.name(),
            email=email or fake.unique.email(),
            password_hash=hash_password(password),
            status=status,
            role_id=(role or make_role()).id,
            department_id=(department or make_department()).id,
        )
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user
    return _make


@pytest.fixture
def make_category_program(db_session: Session):
    def _make(name: str | None = None) -> CategoryProgram:
        category = CategoryProgram(name=name or fake.unique.word().title())
        db_session.add(category)
        db_session.commit()
        db_session.refresh(category)
        return category
    return _make


@pytest.fixture
def make_type_program(db_session: Session):
    def _make(name: str | None = None) -> TypeProgram:
        type_program = TypeProgram(name=name or fake.unique.word().title())
        db_session.add(type_program)
        db_session.commit()
        db_session.refresh(type_program)
        return type_program
    return _make


@pytest.fixture
def make_program(db_session: Session):
    def _make(name: str | None = None, **fields) -> Program:
        program = Program(name=name or fake.catch_phrase(), **fields)
        db_session.add(program)
        db_session.commit()
        db_session.refresh(program)
        return program
    return _make


@pytest.fixture
def make_sub_program(db_session: Session):
    def _make(program_id: int, name: str | None = None, **fields) -> SubProgram:
        sub_program = SubProgram(name=name or fake.catch_phrase(), program_id=program_id, **fields)
        db_session.add(sub_program)
        db_session.commit()
        db_session.refresh(sub_program)
        return sub_program
    return _make


@pytest.fixture
def make_activity(db_session: Session):
    def _make(name: str | None = None, **fields) -> Activity:
        activity = Activity(name=name or fake.bs(), **fields)
        db_session.add(activity)
        db_session.commit()
        db_session.refresh(activity)
        return activity
    return _make


@pytest.fixture
def make_budget(db_session: Session):
    def _make(name: str | None = None, amount: float = 1000, **fields) -> Budget:
        budget = Budget(name=name or fake.bs(), amount=amount, **fields)
        db_session.add(budget)
        db_session.commit()
        db_session.refresh(budget)
        return budget
    return _make


@pytest.fixture
def make_stakeholder_category(db_session: Session):
    def _make(name: str | None = None, type: str = 'community') -> StakeholderCategory:
        category = StakeholderCategory(name=name or fake.unique.word().title(), type=type)
        db_session.add(category)
        db_session.commit()
        db_session.refresh(category)
        return category
    return _make


@pytest.fixture
def make_stakeholder(db_session: Session):
    def _make(category_id: int | None = None, name: str | None = None, **fields) -> Stakeholder:
        stakeholder = Stakeholder(name=name or fake.company(), category_id=category_id, **fields)
        db_session.add(stakeholder)
        db_session.commit()
        db_session.refresh(stakeholder)
        return stakeholder
    return _make


@pytest.fixture
def make_stakeholder_link(db_session: Session):
    def _make(program_id: int, stakeholder_id: int, user_id: int | None = None) -> ProgramStakeholder:
        link = ProgramStakeholder(program_id=program_id, stakeholder_id=stakeholder_id, user_id=user_id)
        db_session.add(link)
        db_session.commit()
        db_session.refresh(link)
        return link
    return _make


# ---------------------------------------------------------------------------
# Authenticated client
# ---------------------------------------------------------------------------


@pytest.fixture
def test_user(make_user) -> User:
    """Create an active test user"""
    return make_user()


@pytest.fixture
def auth_client(client: TestClient, test_user: User) -> TestClient:
    """Test client holding a session cookie for ``test_user``"""
    response = client.post(
        '/api/auth/login',
        json={'email': test_user.email, 'password': TEST_PASSWORD},
    )
    assert response.status_code == 200, response.text
    return client

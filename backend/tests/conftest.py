"""
Campus CMS - Test Configuration and Fixtures
"""
import os
from typing import AsyncGenerator, Awaitable, Callable, Optional
import pytest
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import NullPool
from faker import Faker

# Set testing environment before the app reads its settings
TEST_DATABASE_URL = 'sqlite+aiosqlite:///./test_campus_cms.db'
os.environ['ENVIRONMENT'] = 'test'
os.environ['DATABASE_URL'] = TEST_DATABASE_URL
os.environ['JWT_SECRET_KEY'] = 'test-jwt-secret-key-for-testing'
os.environ['BCRYPT_ROUNDS'] = '4'
os.environ['ADMIN_USERNAME'] = 'admin'
os.environ['ADMIN_PASSWORD'] = 'test-admin-password'
os.environ['ADMIN_EMAIL'] = 'admin@cms.test'
os.environ['LOG_LEVEL'] = 'WARNING'

from app.main import app
from app.core.database import Base, get_db
from app.core.security import get_password_hash
from app.models.user import User, UserRole, UserStatus, Department
from app.modules.auth.identity import AdminIdentity, UserIdentity, issue_token

fake = Faker()

DEFAULT_PASSWORD = 'password123'
DEFAULT_PASSWORD_HASH = get_password_hash(DEFAULT_PASSWORD)

test_engine = create_async_engine(TEST_DATABASE_URL, echo=False, poolclass=NullPool)
TestSessionLocal = async_sessionmaker(
    test_engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False
)


def campus_email() -> str:
    return f"{fake.unique.user_name()}@campus.edu".lower()


def auth_headers(user: User) -> dict:
    """Bearer headers for a persisted user"""
    return {'Authorization': f'Bearer {issue_token(UserIdentity(user))}'}


@pytest.fixture(scope='function')
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Create a fresh database for each test"""
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    async with TestSessionLocal() as session:
        yield session
        await session.rollback()

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest.fixture
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Create test client with database override"""
    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url='http://test') as ac:
        yield ac

    app.dependency_overrides.clear()


UserFactory = Callable[..., Awaitable[User]]


@pytest.fixture
def make_user(db_session: AsyncSession) -> UserFactory:
    """Persist a user; approved BCA student unless told otherwise"""
    async def _make_user(
        role: UserRole = UserRole.STUDENT,
        department: Department = Department.BCA,
        status: UserStatus = UserStatus.APPROVED,
        password: Optional[str] = None,
        email: Optional[str] = None,
        full_name: Optional[str] = None,
    ) -> User:
        user = User(
            full_name=full_name or fake.name(),
            email=email or campus_email(),
            phone=fake.numerify('9#########'),
            department=department,
            role=role,
            hashed_password=get_password_hash(password) if password else DEFAULT_PASSWORD_HASH,
            status=status,
        )
        db_session.add(user)
        await db_session.commit()
        return user

    return _make_user


@pytest.fixture
def admin_headers() -> dict:
    """Authentication headers for the environment-configured admin"""
    return {'Authorization': f'Bearer {issue_token(AdminIdentity())}'}


@pytest.fixture
async def student(make_user: UserFactory) -> User:
    return await make_user(UserRole.STUDENT, Department.BCA)


@pytest.fixture
async def teacher(make_user: UserFactory) -> User:
    return await make_user(UserRole.TEACHER, Department.BCA)


@pytest.fixture
async def hod(make_user: UserFactory) -> User:
    return await make_user(UserRole.HOD, Department.BCA)


@pytest.fixture
def headers_for() -> Callable[[User], dict]:
    """Header builder for users created inside a test"""
    return auth_headers

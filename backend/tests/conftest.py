"""
Kindred - Test Configuration and Fixtures
"""
import os
from typing import AsyncGenerator, List
import pytest
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import NullPool
from faker import Faker

# Set testing environment
os.environ['TESTING'] = 'true'
os.environ['DATABASE_URL'] = 'sqlite+aiosqlite:///./test.db'
os.environ['SECRET_KEY'] = 'test-secret-key-for-testing-only'
os.environ['JWT_SECRET_KEY'] = 'test-jwt-secret-key-for-testing'
os.environ['SITE_URL'] = 'http://kindred.test'
os.environ['SMTP_HOST'] = 'localhost'
os.environ['BCRYPT_ROUNDS'] = '4'
os.environ['RATE_LIMIT_ENABLED'] = 'false'
os.environ['LOG_FILE'] = ''
os.environ['DEFAULT_LANGUAGE'] = 'en'

from kindred.main import app
from kindred.core.database import Base, get_db
from kindred.core.i18n import I18N
from kindred.core.security import get_password_hash, create_access_token
from kindred.models.user import User, UserRole
from kindred.services.mail_service import MailService, get_mail_service

fake = Faker()

# Test database setup
TEST_DATABASE_URL = 'sqlite+aiosqlite:///./test.db'
test_engine = create_async_engine(TEST_DATABASE_URL, echo=False, poolclass=NullPool)
TestSessionLocal = async_sessionmaker(
    bind=test_engine,
    class_=AsyncSession,
    expire_on_commit=False
)

TEST_PASSWORD = 'testpassword123'


class RecordingMailService(MailService):
    """Mail service that keeps messages instead of talking to SMTP"""

    def __init__(self, accept: bool = True):
        super().__init__()
        self.accept = accept
        self.outbox: List[dict] = []

    async def send(self, sender, recipient, reply_to, subject, text, html) -> bool:
        self.outbox.append({
            'sender': sender,
            'recipient': recipient,
            'reply_to': reply_to,
            'subject': subject,
            'text': text,
            'html': html,
        })
        return self.accept


@pytest.fixture(autouse=True)
def default_language():
    """Every test starts in the default language"""
    I18N.set_language(None)
    yield


@pytest.fixture(scope='function')
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Create a fresh database session for each test"""
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with TestSessionLocal() as session:
        yield session
        await session.rollback()

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest.fixture
def mail() -> RecordingMailService:
    return RecordingMailService()


@pytest.fixture
async def client(db_session: AsyncSession, mail: RecordingMailService) -> AsyncGenerator[AsyncClient, None]:
    """Create test client with database and mail overrides"""
    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_mail_service] = lambda: mail

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url='http://test') as ac:
        yield ac

    app.dependency_overrides.clear()


async def create_user(db_session: AsyncSession, role: UserRole = UserRole.MEMBER, **fields) -> User:
    values = {
        'user_name': fake.unique.user_name(),
        'real_name': fake.name(),
        'email': fake.unique.email(),
        'hashed_password': get_password_hash(TEST_PASSWORD),
        'role': role,
        'is_active': True,
        'verified': True,
        'approved': True,
    }
    values.update(fields)
    user = User(**values)
    db_session.add(user)
    await db_session.commit()
    await db_session.refresh(user)
    return user


@pytest.fixture
async def test_user(db_session: AsyncSession) -> User:
    """Create a test user"""
    return await create_user(db_session)


@pytest.fixture
async def admin_user(db_session: AsyncSession) -> User:
    """Create an admin test user"""
    return await create_user(db_session, role=UserRole.ADMIN)


@pytest.fixture
def user_factory(db_session: AsyncSession):
    """Create users with particular account flags"""
    async def factory(**fields) -> User:
        return await create_user(db_session, **fields)
    return factory


@pytest.fixture
def auth_headers(test_user: User) -> dict:
    """Generate authentication headers for test user"""
    token = create_access_token({'sub': str(test_user.id), 'role': test_user.role.value})
    return {'Authorization': f'Bearer {token}'}


@pytest.fixture
def admin_auth_headers(admin_user: User) -> dict:
    """Generate authentication headers for admin user"""
    token = create_access_token({'sub': str(admin_user.id), 'role': admin_user.role.value})
    return {'Authorization': f'Bearer {token}'}

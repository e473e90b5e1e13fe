"""
STATS API - Test Configuration and Fixtures
"""
import os
from typing import AsyncGenerator, Optional
import pytest
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import NullPool
from faker import Faker

# Set testing environment before anything reads settings
os.environ['ENVIRONMENT'] = 'testing'
os.environ['DATABASE_URL'] = 'sqlite+aiosqlite:///./test_stats.db'
os.environ['SECRET_KEY'] = 'test-secret-key-for-testing-only'
os.environ['JWT_SECRET_KEY'] = 'test-jwt-secret-key-for-testing'
os.environ['ANTHROPIC_API_KEY'] = ''
os.environ['REDIS_URL'] = ''
os.environ['RATE_LIMIT_ENABLED'] = 'false'
os.environ['BCRYPT_ROUNDS'] = '4'
os.environ['LOG_LEVEL'] = 'WARNING'

from stats_api.main import app
from stats_api.core.database import Base, get_db
from stats_api.core.security import get_password_hash, create_access_token
from stats_api.models.user import User
from stats_api.models.profile import Profile
from stats_api.models.social import PrivacySettings
from stats_api.utils.claude_client import get_claude_client_factory
from mocks.mock_claude import MockClaudeClient

fake = Faker()

TEST_PASSWORD = 'testpassword123'

# Test database setup
TEST_DATABASE_URL = 'sqlite+aiosqlite:///./test_stats.db'
test_engine = create_async_engine(TEST_DATABASE_URL, echo=False, poolclass=NullPool)
TestSessionLocal = async_sessionmaker(
    bind=test_engine,
    class_=AsyncSession,
    expire_on_commit=False
)


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
def mock_claude() -> MockClaudeClient:
    """Fresh mock language model client per test"""
    return MockClaudeClient()


@pytest.fixture
async def client(db_session: AsyncSession, mock_claude: MockClaudeClient) -> AsyncGenerator[AsyncClient, None]:
    """Create test client with database and language model overrides"""
    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_claude_client_factory] = lambda: (lambda: mock_claude)

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url='http://test') as ac:
        yield ac

    app.dependency_overrides.clear()


async def create_user(
    db: AsyncSession,
    email: Optional[str] = None,
    username: Optional[str] = None,
    is_active: bool = True,
    **profile_fields,
) -> User:
    """Create a user with its profile and default privacy settings"""
    user = User(
        email=email or fake.unique.email(),
        hashed_password=get_password_hash(TEST_PASSWORD),
        is_active=is_active,
        is_verified=True
    )
    db.add(user)
    await db.flush()

    profile_fields.setdefault('first_name', fake.first_name())
    profile_fields.setdefault('last_name', fake.last_name())
    db.add(Profile(
        id=user.id,
        username=username or fake.unique.user_name().replace('-', '_'),
        **profile_fields
    ))
    db.add(PrivacySettings(user_id=user.id))
    await db.commit()
    await db.refresh(user)
    return user


def headers_for(user: User) -> dict:
    """Bearer header for a user"""
    token = create_access_token({'sub': str(user.id), 'email': user.email})
    return {'Authorization': f'Bearer {token}'}


@pytest.fixture
async def test_user(db_session: AsyncSession) -> User:
    """Create a test user"""
    return await create_user(db_session)


@pytest.fixture
async def other_user(db_session: AsyncSession) -> User:
    """A second user for friend / privacy tests"""
    return await create_user(db_session)


@pytest.fixture
def auth_headers(test_user: User) -> dict:
    """Generate authentication headers for test user"""
    return headers_for(test_user)


@pytest.fixture
def other_auth_headers(other_user: User) -> dict:
    return headers_for(other_user)


@pytest.fixture
def test_user_data() -> dict:
    """Registration payload"""
    return {
        'email': fake.unique.email(),
        'password': TEST_PASSWORD,
        'username': fake.unique.user_name().replace('-', '_')[:30],
        'first_name': fake.first_name(),
        'last_name': fake.last_name(),
    }


@pytest.fixture
def harmony_payload() -> dict:
    """A metrics snapshot as the dashboard submits it"""
    return {
        'health_records': {
            'sleep': [
                {'date': '2025-12-30', 'duration': 480, 'quality': 'excellent'},
                {'date': '2025-12-29', 'duration': 432, 'quality': 'good'},
            ],
            'activity': [
                {'date': '2025-12-29', 'type': 'running', 'duration': 45, 'intensity': 'high'},
            ],
            'measurements': {'weight': 74.5, 'hrv': None, 'resting_heart_rate': 54},
        },
        'assets': {'total': 922450, 'liquid': 154450, 'real_estate': 680000, 'investments': 88000},
        'liabilities': {'total': 425000, 'mortgages': 410000, 'other_debt': 15000},
        'career': {'position': 'Lead Developer', 'years_experience': 5, 'industry': 'Tech / SaaS'},
        'connections': {'total': 10, 'inner_circle': 4, 'active_monthly': 10},
        'social_activities': [],
        'achievements': [],
        'visited_countries': 12,
        'language': 'fr',
    }

import asyncio
import inspect
import os
import sys
import tempfile
from datetime import datetime, timedelta, timezone
from pathlib import Path

# Configure the environment before any application module reads Settings
_test_tmp_dir = tempfile.mkdtemp(prefix="net6jwt_test_")
os.environ.setdefault("DATABASE_URL", f"sqlite+aiosqlite:///{_test_tmp_dir}/test.db")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-for-testing-only-do-not-use-in-production")
os.environ.setdefault("JWT_ISSUER", "net6jwt-test")
os.environ.setdefault("JWT_AUDIENCE", "net6jwt-test-users")

ROOT = Path(__file__).resolve().parent.parent
APP_DIR = ROOT / "backend" / "app"
if str(APP_DIR) not in sys.path:
    sys.path.insert(0, str(APP_DIR))

import pytest  # noqa: E402

from core.config import settings  # noqa: E402
from core.database import AsyncSessionLocal, drop_db, init_db  # noqa: E402
from models.user import UserRole  # noqa: E402
from schemas.token import TokenConfig  # noqa: E402
from services.user.general import user_general_service  # noqa: E402
from services.user.lifecycle import TokenLifecycleService  # noqa: E402


class FakeClock:
    """Controllable clock; starts at the current wall time."""

    def __init__(self, start: datetime | None = None):
        self.now = start or datetime.now(timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)


async def _reset_database():
    await drop_db()
    await init_db()


@pytest.fixture(autouse=True)
def reset_database():
    asyncio.run(_reset_database())
    yield


@pytest.fixture
def session_factory():
    return AsyncSessionLocal


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def token_config():
    return TokenConfig.from_settings(settings)


@pytest.fixture
def token_service(token_config, clock):
    return TokenLifecycleService(token_config, clock=clock)


@pytest.fixture
def user_password():
    return "P@ssw0rd-Test"


@pytest.fixture
def student_user(user_password):
    async def _create():
        async with AsyncSessionLocal() as db:
            return await user_general_service.create_user(
                db,
                username="student1",
                email="student1@example.com",
                password=user_password,
                role=UserRole.STUDENT,
                first_name="Stu",
                last_name="Dent",
            )

    return asyncio.run(_create())


@pytest.fixture
def manager_user(user_password):
    async def _create():
        async with AsyncSessionLocal() as db:
            return await user_general_service.create_user(
                db,
                username="manager1",
                email="manager1@example.com",
                password=user_password,
                role=UserRole.MANAGER,
            )

    return asyncio.run(_create())


def pytest_pyfunc_call(pyfuncitem):
    if inspect.iscoroutinefunction(pyfuncitem.obj):
        call_kwargs = {
            name: pyfuncitem.funcargs[name]
            for name in pyfuncitem._fixtureinfo.argnames
            if name in pyfuncitem.funcargs
        }
        asyncio.run(pyfuncitem.obj(**call_kwargs))
        return True
    return None


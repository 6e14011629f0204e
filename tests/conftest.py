import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")

from datetime import date
from typing import AsyncGenerator, Callable, Dict, Iterable

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from meritboard.auth.models import User
from meritboard.auth.security import create_access_token, hash_password
from meritboard.core.enums import Role, RuleType
from meritboard.core.models import Rule, SchoolClass, Student
from meritboard.db.session import Base, get_db
from meritboard.main import app


TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

# Academic year 2025: week 1 is Mon 8 Sep - Sun 14 Sep 2025 (ISO 2025-W37)
TERM_YEAR = 2025
WEEK1_DAY = date(2025, 9, 10)
WEEK2_DAY = date(2025, 9, 17)


@pytest.fixture()
async def engine():
    """Fresh in-memory database per test; StaticPool keeps the single connection shared."""
    test_engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        future=True,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield test_engine
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await test_engine.dispose()


@pytest.fixture()
def session_factory(engine) -> async_sessionmaker:
    return async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture()
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Session for arranging data and checking results from the test body."""
    async with session_factory() as session:
        yield session


@pytest.fixture()
async def client(session_factory) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client bound to the FastAPI app; each request gets its own DB session."""

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


def make_token(role, assigned_classes: Iterable[str] = (), user_id: str = "01TESTUSER000000000000000") -> str:
    claims = {
        "sub": user_id,
        "type": "access",
        "email": f"{user_id.lower()}@school.edu.vn",
        "name": "Test User",
        "role": role.value if isinstance(role, Role) else role,
        "assigned_classes": list(assigned_classes),
    }
    return create_access_token(subject=claims)


@pytest.fixture()
def auth_headers() -> Callable[..., Dict[str, str]]:
    """Factory: auth_headers(Role.PROCTOR) -> {"Authorization": "Bearer ..."}."""

    def _headers(role, assigned_classes: Iterable[str] = (), user_id: str = "01TESTUSER000000000000000") -> Dict[str, str]:
        return {"Authorization": f"Bearer {make_token(role, assigned_classes, user_id)}"}

    return _headers


@pytest.fixture()
def admin_headers(auth_headers) -> Dict[str, str]:
    return auth_headers(Role.ADMIN, user_id="01ADMIN0000000000000000000")


@pytest.fixture()
async def school(session_factory) -> Dict[str, str]:
    """Classes 6/1, 6/2, 6/10 and 7/1, one student in each, and three rules."""
    async with session_factory() as session:
        for grade, name in [(6, "6/1"), (6, "6/2"), (6, "6/10"), (7, "7/1")]:
            session.add(
                SchoolClass(
                    id="class_" + name.replace("/", "_"),
                    grade=grade,
                    class_name=name,
                    total_merit_points=0,
                    total_demerit_points=0,
                )
            )
        students = {
            "s61": Student(id="01STUDENT61000000000000000", school_id="HS0601", full_name="Nguyen Van An", class_id="class_6_1"),
            "s62": Student(id="01STUDENT62000000000000000", school_id="HS0602", full_name="Tran Thi Binh", class_id="class_6_2"),
            "s610": Student(id="01STUDENT610000000000000AA", school_id="HS0610", full_name="Le Van Cuong", class_id="class_6_10"),
            "s71": Student(id="01STUDENT71000000000000000", school_id="HS0701", full_name="Pham Thi Dung", class_id="class_7_1"),
        }
        for s in students.values():
            s.total_merit_points = 0
            s.total_demerit_points = 0
            session.add(s)
        session.add_all(
            [
                Rule(code="KT001", category="Nề nếp", description="Hoàn thành tốt nhiệm vụ sao đỏ", type=RuleType.MERIT.value, points=5, is_active=True),
                Rule(code="VP001", category="Nề nếp", description="Đi trễ", type=RuleType.DEMERIT.value, points=-5, is_active=True),
                Rule(code="VP099", category="Nề nếp", description="Retired rule", type=RuleType.DEMERIT.value, points=-20, is_active=False),
            ]
        )
        await session.commit()
    return {key: s.id for key, s in students.items()}


@pytest.fixture()
async def admin_user(session_factory) -> User:
    async with session_factory() as session:
        user = User(
            display_name="Administrator",
            email="admin@school.edu.vn",
            password_hash=hash_password("AdminPass123"),
            role=Role.ADMIN.value,
            assigned_classes=[],
            claims={"role": Role.ADMIN.value, "assigned_classes": []},
            status="ACTIVE",
        )
        session.add(user)
        await session.commit()
        return user

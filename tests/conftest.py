from __future__ import annotations

from collections.abc import AsyncIterator, Callable, Iterator

import httpx
import pytest
import pytest_asyncio
from fastapi import FastAPI
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession

from admin_console.api.app import create_app
from admin_console.auth.deps import jwt_config
from admin_console.auth.jwt import issue_token
from admin_console.db.repositories.accounts import AccountRepo
from admin_console.settings import Settings


class WriteCounter:
    """Counts INSERT/UPDATE/DELETE statements reaching the store."""

    def __init__(self) -> None:
        self.statements: list[str] = []

    def on_execute(self, conn, cursor, statement, parameters, context, executemany) -> None:
        if statement.lstrip().split(" ", 1)[0].upper() in {"INSERT", "UPDATE", "DELETE"}:
            self.statements.append(statement)

    @property
    def count(self) -> int:
        return len(self.statements)

    def reset(self) -> None:
        self.statements.clear()


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        env="test",
        log_level="WARNING",
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'console.db'}",
        public_lookup_max_attempts=5,
    )


@pytest_asyncio.fixture
async def app(settings: Settings) -> AsyncIterator[FastAPI]:
    app = create_app(settings=settings)
    # httpx ASGITransport does not run lifespan; drive it explicitly.
    async with app.router.lifespan_context(app):
        yield app


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncIterator[httpx.AsyncClient]:
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest_asyncio.fixture
async def db(app: FastAPI) -> AsyncIterator[AsyncSession]:
    async with app.state.sessionmaker() as session:
        yield session


@pytest.fixture
def writes(app: FastAPI) -> Iterator[WriteCounter]:
    counter = WriteCounter()
    listener = counter.on_execute
    event.listen(app.state.engine.sync_engine, "before_cursor_execute", listener)
    yield counter
    event.remove(app.state.engine.sync_engine, "before_cursor_execute", listener)


@pytest.fixture
def mint(settings: Settings) -> Callable[..., str]:
    cfg = jwt_config(settings)

    def _mint(email: str, *, admin: bool = False, **kwargs) -> str:
        return issue_token(cfg=cfg, email=email, admin=admin, **kwargs)

    return _mint


@pytest.fixture
def auth(mint) -> Callable[..., dict[str, str]]:
    """Authorization headers for a freshly minted identity token."""

    def _auth(email: str, *, admin: bool = False, **kwargs) -> dict[str, str]:
        return {"Authorization": f"Bearer {mint(email, admin=admin, **kwargs)}"}

    return _auth


@pytest.fixture
def block(app: FastAPI):
    async def _block(email: str) -> None:
        async with app.state.sessionmaker() as session:
            repo = AccountRepo(session)
            account = await repo.get_by_email(email)
            assert account is not None and not account.blocked
            await repo.toggle_blocked(account.id)
            await session.commit()

    return _block

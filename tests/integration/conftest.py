"""Fixtures for integration tests: seeded SQLite database via aiosqlite.

Each test gets its own database file under tmp_path; the engine is disposed
after the test.
"""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from sample_models import Article, Page, SampleBase, Tag


@pytest.fixture
async def session_factory(tmp_path) -> async_sessionmaker[AsyncSession]:
    """Session factory over a seeded SQLite database (5 articles, 2 pages, 2 tags)."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'search.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(SampleBase.metadata.create_all)
    factory = async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        session.add_all([Page(id=1, title="Home"), Page(id=2, title="Blog")])
        session.add_all(
            [
                Article(
                    id=i,
                    slug=f"article-{i}",
                    title=f"Article {i}",
                    body=f"Body {i}",
                    page_id=1 if i % 2 else 2,
                    optional_attributes={"rank": i} if i == 1 else None,
                )
                for i in range(1, 6)
            ]
        )
        session.add_all([Tag(id="t1", name="python"), Tag(id="t2", name="search")])
        await session.commit()
    yield factory
    await engine.dispose()

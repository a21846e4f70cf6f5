"""HitResolver unit tests with AsyncMock repositories."""

import pytest

from fakes import Article, Product
from search_registry.application.dtos.search import SearchHit
from search_registry.application.services.type_registry import TypeRegistry
from search_registry.application.use_cases.search import HitResolver, group_keys_by_type
from search_registry.core.config import get_settings
from search_registry.domain.exceptions import (
    TypeConfigNotFoundException,
    ValidationException,
)


def _article_hits(count: int) -> list[SearchHit]:
    return [SearchHit(type_id="uid-article", private_key=str(i)) for i in range(count)]


def _fetch_articles(keys, **kwargs):
    return [Article(id=int(k), title=f"Article {k}") for k in keys]


def _fetch_products(keys, **kwargs):
    return [Product(id=100 + i, sku=k) for i, k in enumerate(keys)]


@pytest.fixture
def registry(search_config, repository_factory) -> TypeRegistry:
    registry = TypeRegistry(search_config, repository_factory)
    repository_factory.repositories["Article"].find_by_keys.side_effect = _fetch_articles
    repository_factory.repositories["Product"].find_by_keys.side_effect = _fetch_products
    return registry


@pytest.fixture
def article_repo(registry, repository_factory):
    return repository_factory.repositories["Article"]


@pytest.fixture
def product_repo(registry, repository_factory):
    return repository_factory.repositories["Product"]


@pytest.fixture
def resolver(registry) -> HitResolver:
    return HitResolver(registry)


class TestResolveOne:
    async def test_fetches_by_private_key(self, resolver, article_repo) -> None:
        article_repo.find_by_key.return_value = Article(id=5)

        entity = await resolver.resolve_one(SearchHit(type_id="uid-article", private_key="5"))

        assert entity == Article(id=5)
        article_repo.find_by_key.assert_awaited_once_with("5", key_field="id")

    async def test_uses_configured_private_key_field(self, resolver, product_repo) -> None:
        product_repo.find_by_key.return_value = Product(id=1, sku="p-1")

        await resolver.resolve_one(SearchHit(type_id="uid-product", private_key="p-1"))

        product_repo.find_by_key.assert_awaited_once_with("p-1", key_field="sku")

    async def test_stale_key_returns_none(self, resolver, article_repo) -> None:
        article_repo.find_by_key.return_value = None

        entity = await resolver.resolve_one(SearchHit(type_id="uid-article", private_key="404"))

        assert entity is None

    async def test_unregistered_type_raises(self, resolver, article_repo) -> None:
        with pytest.raises(TypeConfigNotFoundException):
            await resolver.resolve_one(SearchHit(type_id="uid-other", private_key="1"))
        article_repo.find_by_key.assert_not_awaited()


class TestResolveMany:
    async def test_window_fetches_only_the_page(self, resolver, article_repo) -> None:
        """offset=5, limit=10 over 20 hits fetches keys 5..14 in one batch."""
        result = await resolver.resolve_many(_article_hits(20), offset=5, limit=10)

        assert result.total_count == 20
        assert [a.id for a in result.entities] == list(range(5, 15))
        assert result.stale_hits == []
        article_repo.find_by_keys.assert_awaited_once_with(
            [str(i) for i in range(5, 15)], key_field="id", eager_load=("page",)
        )

    async def test_without_window_resolves_every_hit(self, resolver, article_repo) -> None:
        result = await resolver.resolve_many(_article_hits(4))

        assert result.total_count == 4
        assert [a.id for a in result.entities] == [0, 1, 2, 3]
        article_repo.find_by_keys.assert_awaited_once()

    async def test_offset_without_limit_is_not_a_window(self, resolver) -> None:
        result = await resolver.resolve_many(_article_hits(4), offset=2)

        assert result.total_count == 4
        assert len(result.entities) == 4

    async def test_offset_past_end_yields_empty_page(self, resolver, article_repo) -> None:
        result = await resolver.resolve_many(_article_hits(3), offset=10, limit=5)

        assert result.total_count == 3
        assert result.entities == []
        article_repo.find_by_keys.assert_not_awaited()

    async def test_partial_window_is_truncated(self, resolver) -> None:
        result = await resolver.resolve_many(_article_hits(8), offset=6, limit=5)

        assert [a.id for a in result.entities] == [6, 7]

    async def test_negative_window_raises(self, resolver) -> None:
        with pytest.raises(ValidationException) as exc_info:
            await resolver.resolve_many(_article_hits(3), offset=-1, limit=2)
        assert exc_info.value.details == {"field": "offset"}

    async def test_two_types_keep_hit_order(self, resolver, article_repo, product_repo) -> None:
        hits = [
            SearchHit(type_id="uid-article", private_key="1"),
            SearchHit(type_id="uid-product", private_key="p-1"),
            SearchHit(type_id="uid-article", private_key="2"),
            SearchHit(type_id="uid-product", private_key="p-2"),
            SearchHit(type_id="uid-article", private_key="3"),
        ]

        result = await resolver.resolve_many(hits, offset=0, limit=4)

        assert result.total_count == 5
        assert len(result.entities) <= 4
        assert [type(e).__name__ for e in result.entities] == [
            "Article",
            "Product",
            "Article",
            "Product",
        ]
        article_repo.find_by_keys.assert_awaited_once_with(
            ["1", "2"], key_field="id", eager_load=("page",)
        )
        product_repo.find_by_keys.assert_awaited_once_with(
            ["p-1", "p-2"], key_field="sku", eager_load=()
        )

    async def test_grouped_by_type_when_order_not_preserved(self, registry) -> None:
        resolver = HitResolver(registry, preserve_hit_order=False)
        hits = [
            SearchHit(type_id="uid-article", private_key="1"),
            SearchHit(type_id="uid-product", private_key="p-1"),
            SearchHit(type_id="uid-article", private_key="2"),
        ]

        result = await resolver.resolve_many(hits, offset=0, limit=3)

        assert [type(e).__name__ for e in result.entities] == [
            "Article",
            "Article",
            "Product",
        ]

    async def test_order_setting_read_from_environment(self, monkeypatch, registry) -> None:
        monkeypatch.setenv("SEARCH_PRESERVE_HIT_ORDER", "false")
        get_settings.cache_clear()

        assert HitResolver(registry).preserve_hit_order is False

    async def test_stale_hits_are_dropped_and_reported(self, resolver, article_repo) -> None:
        article_repo.find_by_keys.side_effect = lambda keys, **kw: [Article(id=1)]
        hits = _article_hits(3)

        result = await resolver.resolve_many(hits)

        assert [a.id for a in result.entities] == [1]
        assert result.stale_hits == [hits[0], hits[2]]
        assert result.total_count == 3

    async def test_non_canonical_key_matches_fetched_entity(
        self, resolver, article_repo
    ) -> None:
        """"05" finds the record stored as 5; it is returned, not reported stale."""
        article_repo.normalize_key.side_effect = lambda key, key_field="id": int(key)
        article_repo.find_by_keys.side_effect = lambda keys, **kw: [Article(id=5)]
        hit = SearchHit(type_id="uid-article", private_key="05")

        result = await resolver.resolve_many([hit])

        assert [a.id for a in result.entities] == [5]
        assert result.stale_hits == []

    async def test_unconvertible_key_is_stale(self, resolver, article_repo) -> None:
        article_repo.normalize_key.side_effect = lambda key, key_field="id": None
        article_repo.find_by_keys.side_effect = lambda keys, **kw: []
        hit = SearchHit(type_id="uid-article", private_key="abc")

        result = await resolver.resolve_many([hit])

        assert result.entities == []
        assert result.stale_hits == [hit]

    async def test_duplicate_hits_fetch_and_return_once(self, resolver, article_repo) -> None:
        hits = [
            SearchHit(type_id="uid-article", private_key="1"),
            SearchHit(type_id="uid-article", private_key="1"),
        ]

        result = await resolver.resolve_many(hits)

        assert [a.id for a in result.entities] == [1]
        article_repo.find_by_keys.assert_awaited_once_with(
            ["1"], key_field="id", eager_load=("page",)
        )

    async def test_unregistered_type_raises_before_any_fetch(
        self, resolver, article_repo
    ) -> None:
        hits = [
            SearchHit(type_id="uid-article", private_key="1"),
            SearchHit(type_id="uid-other", private_key="1"),
        ]

        with pytest.raises(TypeConfigNotFoundException):
            await resolver.resolve_many(hits)
        article_repo.find_by_keys.assert_not_awaited()

    async def test_batch_failure_propagates(self, resolver, product_repo) -> None:
        product_repo.find_by_keys.side_effect = RuntimeError("connection lost")
        hits = [
            SearchHit(type_id="uid-article", private_key="1"),
            SearchHit(type_id="uid-product", private_key="p-1"),
        ]

        with pytest.raises(RuntimeError, match="connection lost"):
            await resolver.resolve_many(hits, offset=0, limit=2)

    async def test_empty_hits(self, resolver) -> None:
        result = await resolver.resolve_many([], offset=0, limit=10)
        assert result.entities == []
        assert result.total_count == 0


def test_group_keys_by_type_keeps_first_seen_order() -> None:
    hits = [
        SearchHit(type_id="b", private_key="2"),
        SearchHit(type_id="a", private_key="1"),
        SearchHit(type_id="b", private_key="1"),
        SearchHit(type_id="b", private_key="2"),
    ]
    assert group_keys_by_type(hits) == {"b": ["2", "1"], "a": ["1"]}

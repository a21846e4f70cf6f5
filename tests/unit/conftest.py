"""Fixtures for unit tests: fake repository factory and a two-type configuration."""

from typing import Any

import pytest

from fakes import Article, FakeRepositoryFactory, Product, Unregistered


@pytest.fixture
def repository_factory() -> FakeRepositoryFactory:
    return FakeRepositoryFactory(
        {"Article": Article, "Product": Product, "Unregistered": Unregistered}
    )


@pytest.fixture
def search_config() -> dict[str, dict[str, Any]]:
    return {
        "Article": {"fields": ["title", "body"], "optional_attributes": True},
        "Product": {
            "fields": ["name"],
            "optional_attributes": {"field": "specs"},
            "private_key": "sku",
            "eager_load": [],
        },
    }

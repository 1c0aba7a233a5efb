"""Unit tests for ProductRepository against SQLite."""

from __future__ import annotations

import pytest
from sqlalchemy.exc import IntegrityError

from product_api.db.models.product import Product
from product_api.db.repository import MAX_ID

pytestmark = pytest.mark.unit


class TestCreate:
    def test_assigns_id_and_defaults_availability(self, repo):
        product = repo.create(name="Mouse", price=10)

        assert product.id is not None
        assert product.availability is True
        assert product.created_at is not None

    def test_rejects_non_positive_price(self, repo, db_session):
        with pytest.raises(IntegrityError):
            repo.create(name="Mouse", price=0)

        # Session is usable again after the rollback
        assert repo.list() == []


class TestFindById:
    def test_returns_none_when_absent(self, repo):
        assert repo.find_by_id(1) is None

    def test_returns_none_outside_id_range(self, repo):
        assert repo.find_by_id(MAX_ID + 1) is None

    def test_returns_product(self, repo, sample_product):
        found = repo.find_by_id(sample_product.id)

        assert isinstance(found, Product)
        assert found.name == "Monitor Led 42"


class TestSaveAndDestroy:
    def test_save_persists_changes(self, repo, db_session, sample_product):
        sample_product.availability = False
        repo.save(sample_product)

        db_session.expire_all()
        assert repo.find_by_id(sample_product.id).availability is False

    def test_destroy_removes_row(self, repo, sample_product):
        repo.destroy(sample_product)

        assert repo.find_by_id(sample_product.id) is None
        assert repo.list() == []


class TestList:
    def test_orders_by_id_descending(self, repo):
        first = repo.create(name="Mouse", price=10)
        second = repo.create(name="Teclado", price=20)

        assert [p.id for p in repo.list()] == [second.id, first.id]

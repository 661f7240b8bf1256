"""
Tests for the generic repository.
"""

import uuid
from unittest.mock import AsyncMock

import pytest
from sqlalchemy.exc import OperationalError

from vet_records.exceptions import (
    DataConflictException,
    InvalidArgumentException,
    NotFoundException,
    StorageFailureException,
)
from vet_records.models import Owner, Pet
from vet_records.repositories import Repository, escape_like
from vet_records.utils.pagination import PageRequest

from .conftest import OwnerFactory, PetFactory


@pytest.mark.parametrize(
    "raw, escaped",
    [
        ("plain", "plain"),
        ("50%", "50\\%"),
        ("a_b", "a\\_b"),
        ("back\\slash", "back\\\\slash"),
    ],
)
def test_escape_like(raw, escaped):
    assert escape_like(raw) == escaped


class TestRepositoryCrud:
    """Test cases for single-record operations."""

    @pytest.mark.asyncio
    async def test_save_and_get_by_id(self, async_session):
        repository = Repository(async_session, Owner)
        owner = OwnerFactory.build(name="Marta")

        await repository.save(owner)
        loaded = await repository.get_by_id(owner.id)

        assert loaded is owner
        assert await repository.exists(owner.id) is True

    @pytest.mark.asyncio
    async def test_get_by_id_missing(self, async_session):
        repository = Repository(async_session, Owner)
        missing_id = uuid.uuid4()

        with pytest.raises(NotFoundException) as exc_info:
            await repository.get_by_id(missing_id)

        assert exc_info.value.entity_kind == "Owner"
        assert exc_info.value.entity_id == missing_id

    @pytest.mark.asyncio
    async def test_find_by_id_missing_returns_none(self, async_session):
        repository = Repository(async_session, Owner)

        assert await repository.find_by_id(uuid.uuid4()) is None
        assert await repository.exists(uuid.uuid4()) is False

    @pytest.mark.asyncio
    async def test_save_duplicate_is_conflict(self, async_session):
        await OwnerFactory.create(async_session, email="dup@example.com")
        repository = Repository(async_session, Owner)

        with pytest.raises(DataConflictException) as exc_info:
            await repository.save(OwnerFactory.build(email="dup@example.com"))

        assert exc_info.value.details["entity_kind"] == "Owner"
        await async_session.rollback()

    @pytest.mark.asyncio
    async def test_store_failure_is_translated(self, async_session):
        repository = Repository(async_session, Owner)
        async_session.get = AsyncMock(
            side_effect=OperationalError("SELECT", {}, Exception("disk I/O error"))
        )

        with pytest.raises(StorageFailureException) as exc_info:
            await repository.find_by_id(uuid.uuid4())

        assert exc_info.value.details["operation"] == "load"

    @pytest.mark.asyncio
    async def test_delete_by_id(self, async_session):
        owner = await OwnerFactory.create(async_session)
        repository = Repository(async_session, Owner)

        await repository.delete_by_id(owner.id)

        assert await repository.find_by_id(owner.id) is None

    @pytest.mark.asyncio
    async def test_delete_by_id_missing(self, async_session):
        repository = Repository(async_session, Owner)

        with pytest.raises(NotFoundException):
            await repository.delete_by_id(uuid.uuid4())

    @pytest.mark.asyncio
    async def test_delete_referenced_record_is_conflict(self, async_session):
        pet = await PetFactory.create(async_session)
        repository = Repository(async_session, Owner)

        with pytest.raises(DataConflictException):
            await repository.delete_by_id(pet.owner_id)
        await async_session.rollback()


class TestRepositoryQueries:
    """Test cases for paged and field lookups."""

    @pytest.mark.asyncio
    async def test_find_page_orders_by_id(self, async_session):
        for _ in range(5):
            await OwnerFactory.create(async_session)
        repository = Repository(async_session, Owner)

        first = await repository.find_page(PageRequest.of(0, 3))
        second = await repository.find_page(PageRequest.of(1, 3))

        assert first.total_elements == 5
        assert len(first.items) == 3
        assert len(second.items) == 2
        ids = [owner.id for owner in first.items + second.items]
        assert ids == sorted(ids)

    @pytest.mark.asyncio
    async def test_find_by_substring_case_insensitive(self, async_session):
        await OwnerFactory.create(async_session, lastname="Gonzalez")
        await OwnerFactory.create(async_session, lastname="Alvarez")
        await OwnerFactory.create(async_session, lastname="Smith")
        repository = Repository(async_session, Owner)

        page = await repository.find_by_substring("lastname", "EZ", PageRequest())

        assert [owner.lastname for owner in page.items] == ["Alvarez", "Gonzalez"]

    @pytest.mark.asyncio
    async def test_find_by_substring_treats_wildcards_literally(self, async_session):
        await OwnerFactory.create(async_session, lastname="100%_Real")
        await OwnerFactory.create(async_session, lastname="1000 Reals")
        repository = Repository(async_session, Owner)

        page = await repository.find_by_substring("lastname", "0%_", PageRequest())

        assert [owner.lastname for owner in page.items] == ["100%_Real"]

    @pytest.mark.asyncio
    async def test_find_by_substring_empty_query_matches_all(self, async_session):
        for _ in range(3):
            await OwnerFactory.create(async_session)
        repository = Repository(async_session, Owner)

        page = await repository.find_by_substring("lastname", "", PageRequest())

        assert page.total_elements == 3

    @pytest.mark.asyncio
    async def test_unknown_field_rejected(self, async_session):
        repository = Repository(async_session, Owner)

        with pytest.raises(InvalidArgumentException, match="no field 'nickname'"):
            await repository.find_by_substring("nickname", "x", PageRequest())

    @pytest.mark.asyncio
    async def test_find_by_foreign_key(self, async_session):
        owner = await OwnerFactory.create(async_session)
        await PetFactory.create(async_session, owner=owner, name="Luna")
        await PetFactory.create(async_session, owner=owner, name="Milo")
        await PetFactory.create(async_session)
        repository = Repository(async_session, Pet)

        page = await repository.find_by_foreign_key("owner_id", owner.id, PageRequest())

        assert page.total_elements == 2
        assert {pet.name for pet in page.items} == {"Luna", "Milo"}

    @pytest.mark.asyncio
    async def test_field_lookups(self, async_session):
        owner = await OwnerFactory.create(async_session, lastname="Unique")
        repository = Repository(async_session, Owner)

        assert await repository.find_one_by("lastname", "Unique") is owner
        assert await repository.find_one_by("lastname", "Nobody") is None
        assert await repository.exists_by("lastname", "Unique") is True
        assert await repository.find_all_by("lastname", "Unique") == [owner]

    @pytest.mark.asyncio
    async def test_save_all(self, async_session):
        repository = Repository(async_session, Owner)

        await repository.save_all([OwnerFactory.build(), OwnerFactory.build()])
        await repository.save_all([])

        page = await repository.find_page(PageRequest())
        assert page.total_elements == 2

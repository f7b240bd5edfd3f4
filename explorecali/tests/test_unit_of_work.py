import pytest

from explorecali.db.unit_of_work import UnitOfWork
from explorecali.models.tour import TourPackage


@pytest.mark.asyncio
async def test_commit_on_success(uow: UnitOfWork, async_session_maker):
    async with uow:
        await uow.packages.save(TourPackage(code="NW", name="Nature Watch"))

    async with async_session_maker() as other_session:
        assert await other_session.get(TourPackage, "NW") is not None


@pytest.mark.asyncio
async def test_rollback_on_error(uow: UnitOfWork, async_session_maker):
    with pytest.raises(RuntimeError):
        async with uow:
            await uow.packages.save(TourPackage(code="NW", name="Nature Watch"))
            raise RuntimeError("boom")

    async with async_session_maker() as other_session:
        assert await other_session.get(TourPackage, "NW") is None
    assert not uow.active


@pytest.mark.asyncio
async def test_nested_blocks_join_outer_transaction(uow: UnitOfWork, async_session_maker):
    with pytest.raises(RuntimeError):
        async with uow:
            async with uow:
                await uow.packages.save(TourPackage(code="NW", name="Nature Watch"))
            assert uow.active
            raise RuntimeError("boom")

    async with async_session_maker() as other_session:
        assert await other_session.get(TourPackage, "NW") is None

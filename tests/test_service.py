from datetime import date, datetime

import pytest

from models import FailureKind, Success, TimePeriod
from services import RoundService
from tests.fakes import InMemoryStore, StaticExtractor, make_draft as _draft


# ================================================================
# Extraction and parsing
# ================================================================

@pytest.mark.asyncio
async def test_extract_rejects_empty_text():
    extractor = StaticExtractor()
    service = RoundService(InMemoryStore(), extractor)

    result = await service.extract("   ")

    assert not result.success
    assert result.kind == FailureKind.VALIDATION
    assert extractor.calls == []


@pytest.mark.asyncio
async def test_extract_passes_trimmed_text():
    extractor = StaticExtractor(Success(data=_draft()))
    service = RoundService(InMemoryStore(), extractor)

    result = await service.extract("  Lushan 88  ")

    assert result.success
    assert extractor.calls == ["Lushan 88"]


def test_parse_bulk_delegates_to_parser():
    service = RoundService(InMemoryStore(), StaticExtractor())
    result = service.parse_bulk("2025-03-01, Lushan, 400, 50, 100, 88", today=date(2025, 6, 1))
    assert result.success
    assert result.data.count == 1


# ================================================================
# Saving
# ================================================================

@pytest.mark.asyncio
async def test_save_requires_course():
    store = InMemoryStore()
    service = RoundService(store, StaticExtractor())

    result = await service.save(_draft(course=""))

    assert not result.success
    assert result.kind == FailureKind.VALIDATION
    assert store.rounds == {}


@pytest.mark.asyncio
async def test_save_many_in_order():
    store = InMemoryStore()
    service = RoundService(store, StaticExtractor())

    result = await service.save_many([_draft(course="A"), _draft(course="B")])

    assert result.success
    assert result.data.saved == 2
    assert [store.rounds[i].course for i in result.data.ids] == ["A", "B"]


@pytest.mark.asyncio
async def test_save_many_validates_before_writing():
    store = InMemoryStore()
    service = RoundService(store, StaticExtractor())

    result = await service.save_many([_draft(course="A"), _draft(course=" ")])

    assert not result.success
    assert result.error.startswith("Round 2:")
    assert store.rounds == {}


@pytest.mark.asyncio
async def test_save_many_stops_at_first_store_failure():
    store = InMemoryStore(fail_after=1)
    service = RoundService(store, StaticExtractor())

    result = await service.save_many([_draft(course="A"), _draft(course="B"), _draft(course="C")])

    assert not result.success
    assert "Saved 1 of 3" in result.error
    assert len(store.rounds) == 1


@pytest.mark.asyncio
async def test_save_many_empty():
    service = RoundService(InMemoryStore(), StaticExtractor())
    result = await service.save_many([])
    assert not result.success
    assert result.kind == FailureKind.VALIDATION


# ================================================================
# Editing and deleting
# ================================================================

@pytest.mark.asyncio
async def test_edit_applies_changes():
    store = InMemoryStore()
    service = RoundService(store, StaticExtractor())
    round_id = (await service.save(_draft(green_fee=400))).data

    result = await service.edit(round_id, {"score": 79, "green_fee": -380, "date": "2025-03-02"})

    assert result.success
    assert result.data.score == 79
    assert result.data.green_fee == 380
    stored = store.rounds[round_id]
    assert stored.score == 79
    assert stored.date == date(2025, 3, 2)
    assert stored.created_at == datetime(2025, 1, 1)


@pytest.mark.asyncio
async def test_edit_rejects_id_change():
    store = InMemoryStore()
    service = RoundService(store, StaticExtractor())
    round_id = (await service.save(_draft())).data

    result = await service.edit(round_id, {"id": "hijack"})

    assert not result.success
    assert result.kind == FailureKind.VALIDATION
    assert round_id in store.rounds


@pytest.mark.asyncio
async def test_edit_rejects_blank_course():
    store = InMemoryStore()
    service = RoundService(store, StaticExtractor())
    round_id = (await service.save(_draft())).data

    result = await service.edit(round_id, {"course": "  "})

    assert not result.success
    assert store.rounds[round_id].course == "Lushan"


@pytest.mark.asyncio
async def test_edit_missing_round():
    service = RoundService(InMemoryStore(), StaticExtractor())
    result = await service.edit("nope", {"score": 80})
    assert result.kind == FailureKind.NOT_FOUND


@pytest.mark.asyncio
async def test_delete():
    store = InMemoryStore()
    service = RoundService(store, StaticExtractor())
    round_id = (await service.save(_draft())).data

    assert (await service.delete(round_id)).success
    assert (await service.delete(round_id)).kind == FailureKind.NOT_FOUND


# ================================================================
# Reports
# ================================================================

@pytest.mark.asyncio
async def test_statistics_and_periods():
    store = InMemoryStore()
    service = RoundService(store, StaticExtractor())
    await service.save_many([
        _draft(day=date(2025, 3, 1), score=90),
        _draft(day=date(2025, 3, 9), score=84),
        _draft(day=date(2025, 4, 2), score=88),
    ])

    stats = await service.statistics(TimePeriod.for_month(2025, 3), today=date(2025, 6, 1))
    assert stats.success
    assert stats.data.total_rounds == 2
    assert stats.data.best_score == 84

    periods = await service.periods()
    assert periods.data == ["2025-04", "2025-03"]

from datetime import date, datetime

import pytest
from sqlalchemy import select

from meritboard.core.models import Record
from meritboard.scripts.backfill_record_weeks import backfill_record_weeks


def _legacy_record(record_id: str, day: date) -> Record:
    return Record(
        id=record_id,
        rule_code="KT001",
        rule_type="merit",
        points_applied=5,
        quantity=1,
        student_id="01STUDENT61000000000000000",
        class_id="class_6_1",
        record_date=day,
        week=None,
        created_by="01ADMIN0000000000000000000",
        created_at=datetime(2025, 10, 1),
    )


@pytest.fixture()
async def legacy_records(session_factory):
    async with session_factory() as session:
        session.add_all(
            [
                _legacy_record("01LEGACY000000000000000001", date(2025, 9, 10)),
                _legacy_record("01LEGACY000000000000000002", date(2025, 10, 20)),
                # summer: outside the 35 teaching weeks
                _legacy_record("01LEGACY000000000000000003", date(2026, 7, 15)),
            ]
        )
        await session.commit()


async def _weeks(session_factory):
    async with session_factory() as session:
        rows = await session.execute(select(Record.id, Record.week).order_by(Record.id))
        return dict(rows.all())


@pytest.mark.asyncio
async def test_dry_run_changes_nothing(session_factory, legacy_records) -> None:
    async with session_factory() as session:
        result = await backfill_record_weeks(session, apply=False)
    assert result.updates == [("01LEGACY000000000000000001", 1), ("01LEGACY000000000000000002", 7)]
    assert [r[0] for r in result.skipped] == ["01LEGACY000000000000000003"]
    assert result.applied is False
    assert set((await _weeks(session_factory)).values()) == {None}


@pytest.mark.asyncio
async def test_apply_writes_weeks(session_factory, legacy_records) -> None:
    async with session_factory() as session:
        result = await backfill_record_weeks(session, apply=True)
    assert result.applied is True
    assert await _weeks(session_factory) == {
        "01LEGACY000000000000000001": 1,
        "01LEGACY000000000000000002": 7,
        "01LEGACY000000000000000003": None,
    }

    # second run has nothing left to do
    async with session_factory() as session:
        again = await backfill_record_weeks(session, apply=True)
    assert again.updates == []

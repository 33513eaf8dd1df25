import asyncio

import pytest
from httpx import AsyncClient
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from school_admin.api.academic_year import service as rollover_service
from school_admin.core.enums import ConnectionState
from school_admin.core.exceptions import ServiceError
from school_admin.core.grades import next_grade
from school_admin.core.models import Learner, LearnerArchive


async def _set_term(client: AsyncClient, term: str = "Term 3", year: int = 2024) -> None:
    response = await client.post("/termSettings", json={"currentTerm": term, "currentYear": year})
    assert response.status_code == 200


@pytest.mark.asyncio
async def test_rollover_promotes_graduates_and_archives(client: AsyncClient, make_learner) -> None:
    await _set_term(client)
    leaving = await make_learner(fullName="Chege Kamau", grade="Grade 9")
    staying = await make_learner(fullName="Dalia Hassan", grade="Grade 3")

    response = await client.post("/newAcademicYear")
    assert response.status_code == 200
    assert response.json() == {
        "archivedYear": 2024,
        "currentYear": 2025,
        "currentTerm": "Term 1",
        "archivedLearners": 2,
        "promotedLearners": 1,
        "graduatedLearners": 1,
        "unchangedLearners": 0,
    }

    learners = (await client.get("/learners")).json()
    assert [learner["admissionNo"] for learner in learners] == [staying["admissionNo"]]
    assert learners[0]["grade"] == "Grade 4"

    archived = (await client.get("/learnerArchives?year=2024")).json()
    assert {a["admissionNo"]: a["grade"] for a in archived} == {
        leaving["admissionNo"]: "Grade 9",
        staying["admissionNo"]: "Grade 3",
    }
    assert (await client.get("/learnerArchives")).json() == [2024]

    term = (await client.get("/termSettings")).json()
    assert term["currentTerm"] == "Term 1"
    assert term["currentYear"] == 2025


@pytest.mark.asyncio
async def test_rollover_advances_every_grade(client: AsyncClient, make_learner) -> None:
    await _set_term(client)
    grades = ["Playgroup", "PP1", "PP2", "Grade 1", "Grade 5", "Grade 8"]
    for grade in grades:
        await make_learner(grade=grade)

    assert (await client.post("/newAcademicYear")).status_code == 200

    learners = (await client.get("/learners")).json()
    assert [learner["grade"] for learner in learners] == [next_grade(g) for g in grades]


@pytest.mark.asyncio
async def test_archive_is_a_snapshot(client: AsyncClient, make_learner) -> None:
    await _set_term(client)
    learner = await make_learner(grade="Grade 2")
    assert (await client.post("/newAcademicYear")).status_code == 200

    await client.put(f"/learners?id={learner['id']}", json={"fullName": "Renamed Learner"})

    archived = (await client.get("/learnerArchives?year=2024")).json()
    assert archived[0]["fullName"] == "Amani Wanjiru"
    assert archived[0]["grade"] == "Grade 2"


@pytest.mark.asyncio
async def test_year_increments_once_per_rollover(client: AsyncClient, make_learner) -> None:
    await _set_term(client, term="Term 2", year=2020)
    await make_learner(grade="Playgroup")
    for expected in (2021, 2022, 2023):
        response = await client.post("/newAcademicYear")
        assert response.status_code == 200
        assert response.json()["currentYear"] == expected
    assert (await client.get("/learnerArchives")).json() == [2020, 2021, 2022]
    assert (await client.get("/learners")).json()[0]["grade"] == "Grade 1"


@pytest.mark.asyncio
async def test_rollover_without_term_settings_changes_nothing(
    client: AsyncClient, make_learner, db_session: AsyncSession
) -> None:
    await make_learner(grade="Grade 9")

    response = await client.post("/newAcademicYear")
    assert response.status_code == 400
    assert response.json()["detail"] == "Term settings not found"

    learners = (await client.get("/learners")).json()
    assert [learner["grade"] for learner in learners] == ["Grade 9"]
    archives = (await db_session.execute(select(func.count(LearnerArchive.id)))).scalar_one()
    assert archives == 0


@pytest.mark.asyncio
async def test_rollover_refuses_already_archived_year(client: AsyncClient, make_learner) -> None:
    await _set_term(client)
    await make_learner(grade="Grade 1")
    assert (await client.post("/newAcademicYear")).status_code == 200

    # Operator sets the year back by hand; rolling over 2024 a second time must not happen.
    await _set_term(client, year=2024)
    response = await client.post("/newAcademicYear")
    assert response.status_code == 409

    learners = (await client.get("/learners")).json()
    assert learners[0]["grade"] == "Grade 2"
    assert (await client.get("/termSettings")).json()["currentYear"] == 2024


@pytest.mark.asyncio
async def test_failed_rollover_leaves_everything_unchanged(
    client: AsyncClient, make_learner, monkeypatch
) -> None:
    await _set_term(client)
    await make_learner(grade="Grade 3")
    await make_learner(grade="Grade 5")
    await make_learner(grade="Grade 9")

    def failing_next_grade(grade: str):
        if grade == "Grade 5":
            raise SQLAlchemyError("write failed")
        return next_grade(grade)

    monkeypatch.setattr(rollover_service, "next_grade", failing_next_grade)

    response = await client.post("/newAcademicYear")
    assert response.status_code == 500
    assert response.json()["detail"] == "Failed to start new academic year"

    learners = (await client.get("/learners")).json()
    assert [learner["grade"] for learner in learners] == ["Grade 3", "Grade 5", "Grade 9"]
    assert (await client.get("/learnerArchives")).json() == []
    term = (await client.get("/termSettings")).json()
    assert term == {"id": term["id"], "currentTerm": "Term 3", "currentYear": 2024}


@pytest.mark.asyncio
async def test_unknown_grade_is_left_unchanged(
    client: AsyncClient, db_session: AsyncSession
) -> None:
    await _set_term(client)
    db_session.add(
        Learner(
            admission_no="MPA-500",
            full_name="Legacy Record",
            gender="Male",
            dob="2010-01-01",
            grade="Form 1",
            parent_name="Parent",
            parent_phone="0700",
            parent_email="p@example.com",
        )
    )
    await db_session.commit()

    response = await client.post("/newAcademicYear")
    assert response.status_code == 200
    assert response.json()["unchangedLearners"] == 1
    assert (await client.get("/learners")).json()[0]["grade"] == "Form 1"


@pytest.mark.asyncio
async def test_rollover_with_no_learners(client: AsyncClient) -> None:
    await _set_term(client)
    response = await client.post("/newAcademicYear")
    assert response.status_code == 200
    assert response.json()["archivedLearners"] == 0
    assert (await client.get("/learnerArchives?year=2024")).json() == []


@pytest.mark.asyncio
async def test_rollover_requires_store(client: AsyncClient, connection) -> None:
    connection.state = ConnectionState.DEGRADED
    assert (await client.post("/newAcademicYear")).status_code == 503


@pytest.mark.asyncio
async def test_rollover_is_post_only(client: AsyncClient) -> None:
    assert (await client.get("/newAcademicYear")).status_code == 405


@pytest.mark.asyncio
async def test_concurrent_rollovers_apply_once(
    client: AsyncClient, make_learner, engine: AsyncEngine, monkeypatch
) -> None:
    await _set_term(client)
    await make_learner(grade="Grade 4")
    monkeypatch.setattr(rollover_service, "_rollover_lock", asyncio.Lock())
    sessions = async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)

    async def rollover() -> int:
        async with sessions() as session:
            try:
                await rollover_service.start_new_academic_year(session)
            except ServiceError as e:
                return e.status_code
            return 200

    assert sorted(await asyncio.gather(rollover(), rollover())) == [200, 409]

    async with sessions() as session:
        grades = (await session.execute(select(Learner.grade))).scalars().all()
        years = (await session.execute(select(LearnerArchive.year))).scalars().all()
    assert grades == ["Grade 5"]
    assert years == [2024]


@pytest.mark.asyncio
async def test_archive_conflict_at_write_is_a_conflict(
    client: AsyncClient, make_learner, db_session: AsyncSession, monkeypatch
) -> None:
    await _set_term(client)
    await make_learner(grade="Grade 6")
    assert (await client.post("/newAcademicYear")).status_code == 200
    await _set_term(client, year=2024)

    # Another process archived 2024 after this one checked for it.
    async def no_archive(db, year):
        return None

    monkeypatch.setattr(rollover_service, "get_archive", no_archive)
    response = await client.post("/newAcademicYear")
    assert response.status_code == 409
    assert response.json()["detail"] == "Academic year has already been archived"

    assert (await client.get("/learners")).json()[0]["grade"] == "Grade 7"
    assert (await client.get("/termSettings")).json()["currentYear"] == 2024
    archives = (await db_session.execute(select(func.count(LearnerArchive.id)))).scalar_one()
    assert archives == 1

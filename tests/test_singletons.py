from datetime import date

import pytest
from httpx import AsyncClient
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from school_admin.core.enums import ConnectionState
from school_admin.core.models import FeeStructure, TermSettings


@pytest.mark.asyncio
async def test_fee_structure_is_empty_until_saved(client: AsyncClient) -> None:
    response = await client.get("/feeStructure")
    assert response.status_code == 200
    assert response.json() == {}


@pytest.mark.asyncio
async def test_fee_structure_upsert_keeps_one_row(client: AsyncClient, db_session: AsyncSession) -> None:
    first = await client.post("/feeStructure", json={"playgroup": 8000, "grade1": 10000})
    assert first.status_code == 200
    assert first.json()["playgroup"] == 8000
    assert first.json()["grade1"] == 10000

    second = await client.post("/feeStructure", json={"grade1": 11000, "grade9": 15000})
    assert second.status_code == 200
    data = second.json()
    assert data["playgroup"] == 8000
    assert data["grade1"] == 11000
    assert data["grade9"] == 15000
    assert data["id"] == first.json()["id"]

    count = (await db_session.execute(select(func.count(FeeStructure.id)))).scalar_one()
    assert count == 1

    fetched = (await client.get("/feeStructure")).json()
    assert fetched["grade9"] == 15000
    assert "pp1" not in fetched


@pytest.mark.asyncio
async def test_term_settings_default(client: AsyncClient) -> None:
    response = await client.get("/termSettings")
    assert response.status_code == 200
    assert response.json() == {"currentTerm": "Term 1", "currentYear": date.today().year}


@pytest.mark.asyncio
async def test_term_settings_upsert(client: AsyncClient, db_session: AsyncSession) -> None:
    created = await client.post("/termSettings", json={"currentTerm": "Term 2", "currentYear": 2024})
    assert created.status_code == 200
    assert created.json()["currentTerm"] == "Term 2"
    assert created.json()["currentYear"] == 2024

    updated = await client.post("/termSettings", json={"currentTerm": "Term 3"})
    assert updated.status_code == 200
    assert updated.json()["currentTerm"] == "Term 3"
    assert updated.json()["currentYear"] == 2024

    count = (await db_session.execute(select(func.count(TermSettings.id)))).scalar_one()
    assert count == 1


@pytest.mark.asyncio
async def test_term_settings_first_save_needs_both_fields(client: AsyncClient) -> None:
    response = await client.post("/termSettings", json={"currentTerm": "Term 1"})
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_term_settings_rejects_unknown_term(client: AsyncClient) -> None:
    response = await client.post("/termSettings", json={"currentTerm": "Term 5", "currentYear": 2024})
    assert response.status_code == 500


@pytest.mark.asyncio
async def test_singletons_when_store_unavailable(client: AsyncClient, connection) -> None:
    connection.state = ConnectionState.DEGRADED
    assert (await client.get("/feeStructure")).json() == {}
    assert (await client.get("/termSettings")).json()["currentTerm"] == "Term 1"
    assert (await client.post("/feeStructure", json={"pp1": 1})).status_code == 503
    assert (await client.post("/termSettings", json={"currentTerm": "Term 1", "currentYear": 2024})).status_code == 503

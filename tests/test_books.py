from uuid import uuid4

import pytest
from httpx import AsyncClient

from school_admin.core.enums import ConnectionState


@pytest.mark.asyncio
async def test_book_crud(client: AsyncClient, make_learner) -> None:
    learner = await make_learner()
    created = await client.post(
        "/books",
        json={"admissionNo": learner["admissionNo"], "subject": "Mathematics", "bookTitle": "Primary Maths 3"},
    )
    assert created.status_code == 200
    book = created.json()
    assert book["bookTitle"] == "Primary Maths 3"

    updated = await client.put(f"/books?id={book['id']}", json={"bookTitle": "Primary Maths 3 (Revised)"})
    assert updated.status_code == 200
    assert updated.json()["bookTitle"] == "Primary Maths 3 (Revised)"
    assert updated.json()["subject"] == "Mathematics"

    assert len((await client.get("/books")).json()) == 1
    assert (await client.delete(f"/books?id={book['id']}")).status_code == 204
    assert (await client.get("/books")).json() == []


@pytest.mark.asyncio
async def test_book_requires_known_learner(client: AsyncClient) -> None:
    response = await client.post(
        "/books",
        json={"admissionNo": "MPA-123", "subject": "English", "bookTitle": "Reader"},
    )
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_missing_book_returns_404(client: AsyncClient) -> None:
    assert (await client.put(f"/books?id={uuid4()}", json={"subject": "Kiswahili"})).status_code == 404
    assert (await client.delete(f"/books?id={uuid4()}")).status_code == 404


@pytest.mark.asyncio
async def test_books_when_store_unavailable(client: AsyncClient, make_learner, connection) -> None:
    learner = await make_learner()
    created = await client.post(
        "/books",
        json={"admissionNo": learner["admissionNo"], "subject": "Science", "bookTitle": "Science Explorer"},
    )
    book = created.json()
    connection.state = ConnectionState.DEGRADED

    response = await client.get("/books")
    assert response.status_code == 200
    assert response.json() == []

    payload = {"admissionNo": learner["admissionNo"], "subject": "English", "bookTitle": "Reader"}
    assert (await client.post("/books", json=payload)).status_code == 503
    assert (await client.put(f"/books?id={book['id']}", json={"subject": "Art"})).status_code == 503
    assert (await client.delete(f"/books?id={book['id']}")).status_code == 503

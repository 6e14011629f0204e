import pytest
from httpx import AsyncClient

from meritboard.core.enums import Role

from conftest import TERM_YEAR


@pytest.mark.asyncio
async def test_upsert_merges_fields(client: AsyncClient, school, admin_headers) -> None:
    url = "/api/v1/weekly-scores/2/class_6_1"
    first = await client.put(url, params={"term_year": TERM_YEAR}, json={"study": 320, "comment": "Good"}, headers=admin_headers)
    assert first.status_code == 200
    assert first.json()["id"] == "2025-W38_class_6_1"

    second = await client.put(url, params={"term_year": TERM_YEAR}, json={"hygiene": 300}, headers=admin_headers)
    body = second.json()
    assert (body["study"], body["discipline"], body["hygiene"], body["comment"]) == (320, None, 300, "Good")

    listed = await client.get("/api/v1/weekly-scores", params={"week": 2, "term_year": TERM_YEAR}, headers=admin_headers)
    assert [s["class_id"] for s in listed.json()] == ["class_6_1"]


@pytest.mark.asyncio
async def test_upsert_validation(client: AsyncClient, school, admin_headers, auth_headers) -> None:
    missing = await client.put(
        "/api/v1/weekly-scores/2/class_9_9", params={"term_year": TERM_YEAR}, json={"study": 1}, headers=admin_headers
    )
    assert missing.status_code == 404

    negative = await client.put(
        "/api/v1/weekly-scores/2/class_6_1", params={"term_year": TERM_YEAR}, json={"study": -1}, headers=admin_headers
    )
    assert negative.status_code == 422

    teacher = auth_headers(Role.HOMEROOM_TEACHER, assigned_classes=["class_6_1"])
    denied = await client.put(
        "/api/v1/weekly-scores/2/class_6_1", params={"term_year": TERM_YEAR}, json={"study": 1}, headers=teacher
    )
    assert denied.status_code == 403

"""Tests for the admin console endpoints and data export."""
import json

import pytest
from httpx import AsyncClient

from tests.conftest import ADMIN_HEADERS, make_property_payload


@pytest.mark.asyncio
async def test_admin_requires_api_key(client: AsyncClient):
    resp = await client.get("/api/v1/admin/form-schema")
    assert resp.status_code == 401


@pytest.mark.asyncio
async def test_form_schemas(client: AsyncClient):
    resp = await client.get("/api/v1/admin/form-schema", headers=ADMIN_HEADERS)
    assert resp.status_code == 200
    schemas = {s["property_type"]: s for s in resp.json()["data"]}
    assert set(schemas) == {"apartment", "villa", "building", "hotel", "office", "land"}
    assert [f["key"] for f in schemas["land"]["fields"]] == ["area"]


@pytest.mark.asyncio
async def test_form_schema_for_type(client: AsyncClient):
    resp = await client.get("/api/v1/admin/form-schema/hotel", params={"lang": "ar"}, headers=ADMIN_HEADERS)
    data = resp.json()["data"]
    assert data["label"] == "فندق"
    assert [f["key"] for f in data["fields"]] == ["floors", "rooms", "studios", "total_area", "parking"]
    assert {"total_area", "floors", "rooms"} <= set(data["required"])


@pytest.mark.asyncio
async def test_form_schema_unknown_type(client: AsyncClient):
    resp = await client.get("/api/v1/admin/form-schema/castle", headers=ADMIN_HEADERS)
    assert resp.status_code == 200
    assert [f["key"] for f in resp.json()["data"]["fields"]] == ["area", "bedrooms", "bathrooms"]


@pytest.mark.asyncio
async def test_quality_check(client: AsyncClient):
    resp = await client.post(
        "/api/v1/admin/quality-check",
        json={"title": "Flat", "description": "Nice.", "location": "Beirut"},
        headers=ADMIN_HEADERS,
    )
    assert resp.status_code == 200
    report = resp.json()["data"]
    assert report["has_issues"] is True
    assert report["score"] == 40
    assert "Title is too short" in report["issues"]


@pytest.mark.asyncio
async def test_guidelines(client: AsyncClient):
    resp = await client.get("/api/v1/admin/guidelines", params={"lang": "ar"}, headers=ADMIN_HEADERS)
    assert resp.json()["data"]["title"] == "إرشادات المحتوى المهني"


@pytest.mark.asyncio
async def test_stats(client: AsyncClient):
    await client.post("/api/v1/properties", json=make_property_payload(is_featured=True), headers=ADMIN_HEADERS)
    await client.post(
        "/api/v1/properties",
        json=make_property_payload(property_type="land", bedrooms=None, bathrooms=None, status="for_rent"),
        headers=ADMIN_HEADERS,
    )

    resp = await client.get("/api/v1/admin/stats", headers=ADMIN_HEADERS)
    data = resp.json()["data"]
    assert data["total_properties"] == 2
    assert data["featured"] == 1
    assert data["by_property_type"] == {"apartment": 1, "land": 1}
    assert data["by_status"] == {"for_sale": 1, "for_rent": 1}
    assert data["by_governorate"] == {"Beirut": 2}


@pytest.mark.asyncio
async def test_export_json(client: AsyncClient):
    await client.post("/api/v1/properties", json=make_property_payload(), headers=ADMIN_HEADERS)

    resp = await client.get("/api/v1/export/json", headers=ADMIN_HEADERS)
    assert resp.status_code == 200
    rows = json.loads(resp.text)
    assert len(rows) == 1
    assert rows[0]["contact_phone"] == "+961 76 340 101"
    assert rows[0]["features"] == ["Balcony", "Generator", "Elevator"]


@pytest.mark.asyncio
async def test_export_csv(client: AsyncClient):
    await client.post("/api/v1/properties", json=make_property_payload(), headers=ADMIN_HEADERS)

    resp = await client.get("/api/v1/export/csv", params={"property_type": "apartment"}, headers=ADMIN_HEADERS)
    assert resp.status_code == 200
    lines = resp.text.strip().splitlines()
    assert lines[0].startswith("id,title,")
    assert len(lines) == 2
    assert "Balcony | Generator | Elevator" in lines[1]


@pytest.mark.asyncio
async def test_export_excel(client: AsyncClient):
    resp = await client.get("/api/v1/export/excel", headers=ADMIN_HEADERS)
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith(
        "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
    )
    assert resp.content[:2] == b"PK"


@pytest.mark.asyncio
async def test_export_requires_api_key(client: AsyncClient):
    resp = await client.get("/api/v1/export/json")
    assert resp.status_code == 401

from __future__ import annotations

import pytest


@pytest.mark.asyncio
async def test_type_crud_and_field_replacement(app_client):
    created = await app_client.post(
        "/equipment-types", json={"name": "Transformer", "description": "Power transformers"}
    )
    assert created.status_code == 201
    type_id = created.json()["id"]
    assert created.json()["fieldsConfig"] == []

    fields = await app_client.patch(
        f"/equipment-types/{type_id}/fields",
        json={
            "fieldsConfig": [
                {
                    "label": "Cooling Type",
                    "dataKey": "coolingType",
                    "inputType": "select",
                    "options": ["ONAN", "ONAF"],
                    "order": 5,
                },
                {
                    "id": "fld-voltage",
                    "label": "Primary Voltage",
                    "dataKey": "primaryVoltage",
                    "inputType": "text",
                    "isRequired": True,
                },
            ]
        },
    )
    assert fields.status_code == 200
    config = fields.json()["fieldsConfig"]
    assert [(f["dataKey"], f["order"]) for f in config] == [
        ("coolingType", 0),
        ("primaryVoltage", 1),
    ]
    assert config[0]["id"]
    assert config[1]["id"] == "fld-voltage"
    assert config[1]["options"] is None

    renamed = await app_client.patch(f"/equipment-types/{type_id}", json={"description": "HV"})
    assert renamed.json()["description"] == "HV"
    assert renamed.json()["name"] == "Transformer"

    listed = await app_client.get("/equipment-types")
    assert [t["name"] for t in listed.json()] == ["Transformer"]

    assert (await app_client.delete(f"/equipment-types/{type_id}")).status_code == 204
    assert (await app_client.get(f"/equipment-types/{type_id}")).status_code == 404


@pytest.mark.asyncio
async def test_field_edits_apply_to_the_next_validation(app_client, equipment_payload):
    type_id = (await app_client.post("/equipment-types", json={"name": "Transformer"})).json()["id"]
    assert (await app_client.post("/equipment", json=equipment_payload())).status_code == 201

    await app_client.patch(
        f"/equipment-types/{type_id}/fields",
        json={"fieldsConfig": [{"label": "Oil Volume", "dataKey": "oilVolume", "isRequired": True}]},
    )
    resp = await app_client.post("/equipment", json=equipment_payload(equipmentId="TRF-101-NYC"))

    assert resp.status_code == 400
    assert resp.json()["errors"] == ["Oil Volume is required"]


@pytest.mark.asyncio
async def test_deleted_type_leaves_equipment_in_place(app_client, equipment_payload):
    type_id = (await app_client.post("/equipment-types", json={"name": "Transformer"})).json()["id"]
    pk = (await app_client.post("/equipment", json=equipment_payload())).json()["id"]

    await app_client.delete(f"/equipment-types/{type_id}")

    assert (await app_client.get(f"/equipment/{pk}")).status_code == 200
    resp = await app_client.patch(f"/equipment/{pk}", json={"typeSpecificData": {}})
    assert resp.status_code == 400
    assert resp.json()["errors"] == ["Equipment type 'Transformer' not found"]


@pytest.mark.asyncio
async def test_type_validation_errors(app_client):
    assert (await app_client.post("/equipment-types", json={"name": " "})).status_code == 400
    assert (await app_client.post("/equipment-types", json={})).status_code == 400

    await app_client.post("/equipment-types", json={"name": "Generator"})
    assert (await app_client.post("/equipment-types", json={"name": "Generator"})).status_code == 409


@pytest.mark.asyncio
async def test_field_replacement_errors(app_client):
    type_id = (await app_client.post("/equipment-types", json={"name": "Generator"})).json()["id"]

    dupes = await app_client.patch(
        f"/equipment-types/{type_id}/fields",
        json={
            "fieldsConfig": [
                {"label": "Fuel", "dataKey": "fuel"},
                {"label": "Fuel 2", "dataKey": "fuel"},
            ]
        },
    )
    bad_shape = await app_client.patch(
        f"/equipment-types/{type_id}/fields",
        json={"fieldsConfig": [{"label": "", "dataKey": "fuel", "inputType": "slider"}]},
    )
    missing = await app_client.patch("/equipment-types/nope/fields", json={"fieldsConfig": []})

    assert dupes.status_code == 400
    assert dupes.json()["errors"] == ["Duplicate dataKey 'fuel'"]
    assert bad_shape.status_code == 400
    assert len(bad_shape.json()["errors"]) == 2
    assert missing.status_code == 404


@pytest.mark.asyncio
async def test_field_replacement_renumbers_negative_order(app_client):
    type_id = (await app_client.post("/equipment-types", json={"name": "Breaker"})).json()["id"]

    resp = await app_client.patch(
        f"/equipment-types/{type_id}/fields",
        json={
            "fieldsConfig": [
                {"label": "Rating", "dataKey": "rating", "order": -3},
                {"label": "Poles", "dataKey": "poles", "order": -7},
            ]
        },
    )

    assert resp.status_code == 200
    assert [(f["dataKey"], f["order"]) for f in resp.json()["fieldsConfig"]] == [
        ("rating", 0),
        ("poles", 1),
    ]

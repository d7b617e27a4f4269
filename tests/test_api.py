import uuid


async def _setup(client):
    wh = (await client.post("/api/warehouses", json={"code": "WH-A", "name": "Warehouse A"})).json()
    l1 = (await client.post("/api/locations", json={"code": "R1-A1-01", "warehouseId": wh["id"]})).json()
    l2 = (await client.post("/api/locations", json={"code": "R1-A1-02", "warehouseId": wh["id"]})).json()
    item = (await client.post("/api/items", json={"sku": "SKU-X", "name": "Item X"})).json()
    return wh, l1, l2, item


async def _quantity(client, item_id, location_id):
    rows = (await client.get("/api/inventory", params={"itemId": item_id, "locationId": location_id})).json()
    return rows[0]["quantity"] if rows else 0


async def test_health(client):
    resp = await client.get("/api/health")
    assert resp.status_code == 200
    assert resp.json() == {"ok": True}


async def test_create_and_list_masters(client):
    wh, l1, l2, item = await _setup(client)

    assert wh["code"] == "WH-A"
    assert "createdAt" in wh
    assert l1["warehouseId"] == wh["id"]
    assert item["sku"] == "SKU-X"
    assert item["barcode"] is None

    locations = (await client.get("/api/locations")).json()
    assert [loc["code"] for loc in locations] == ["R1-A1-01", "R1-A1-02"]
    assert locations[0]["warehouse"]["code"] == "WH-A"

    warehouses = (await client.get("/api/warehouses")).json()
    assert [w["code"] for w in warehouses] == ["WH-A"]

    items = (await client.get("/api/items")).json()
    assert [i["sku"] for i in items] == ["SKU-X"]


async def test_duplicate_masters_conflict(client):
    wh, _l1, _l2, _item = await _setup(client)

    resp = await client.post("/api/warehouses", json={"code": "WH-A", "name": "Again"})
    assert resp.status_code == 409

    resp = await client.post("/api/locations", json={"code": "R1-A1-01", "warehouseId": wh["id"]})
    assert resp.status_code == 409
    assert "R1-A1-01" in resp.json()["error"]

    resp = await client.post("/api/items", json={"sku": "SKU-X", "name": "Other"})
    assert resp.status_code == 409
    assert resp.json() == {"error": "SKU already exists"}


async def test_same_location_code_allowed_in_other_warehouse(client):
    await _setup(client)
    wh_b = (await client.post("/api/warehouses", json={"code": "WH-B", "name": "Warehouse B"})).json()
    resp = await client.post("/api/locations", json={"code": "R1-A1-01", "warehouseId": wh_b["id"]})
    assert resp.status_code == 201


async def test_location_requires_existing_warehouse(client):
    resp = await client.post("/api/locations", json={"code": "R9", "warehouseId": str(uuid.uuid4())})
    assert resp.status_code == 404
    assert resp.json() == {"error": "Warehouse not found"}


async def test_blank_required_fields_are_validation_errors(client):
    resp = await client.post("/api/items", json={"sku": "   ", "name": "Item"})
    assert resp.status_code == 400
    assert resp.json()["error"] == "Validation error"

    resp = await client.post("/api/warehouses", json={"name": "No code"})
    assert resp.status_code == 400


async def test_scenarios_a_to_e(client):
    _wh, l1, l2, item = await _setup(client)

    # A: place 300 into an empty location
    resp = await client.post("/api/placement", json={"itemId": item["id"], "locationId": l1["id"], "qty": 300})
    assert resp.status_code == 200
    body = resp.json()
    assert body["quantity"] == 300
    assert body["itemId"] == item["id"]
    assert body["locationId"] == l1["id"]

    # B: retrieve 50
    resp = await client.post("/api/retrieval", json={"itemId": item["id"], "locationId": l1["id"], "qty": 50})
    assert resp.status_code == 200
    assert resp.json()["quantity"] == 250

    # C: retrieve more than available
    resp = await client.post("/api/retrieval", json={"itemId": item["id"], "locationId": l1["id"], "qty": 500})
    assert resp.status_code == 400
    assert resp.json() == {"error": "Insufficient quantity"}
    assert await _quantity(client, item["id"], l1["id"]) == 250

    # D: transfer 100 to an empty location
    resp = await client.post(
        "/api/transfer",
        json={"itemId": item["id"], "fromLocationId": l1["id"], "toLocationId": l2["id"], "qty": 100},
    )
    assert resp.status_code == 200
    body = resp.json()
    assert body["ok"] is True
    assert body["from"]["quantity"] == 150
    assert body["to"]["quantity"] == 100
    assert await _quantity(client, item["id"], l1["id"]) == 150
    assert await _quantity(client, item["id"], l2["id"]) == 100

    # E: same-location transfer
    resp = await client.post(
        "/api/transfer",
        json={"itemId": item["id"], "fromLocationId": l1["id"], "toLocationId": l1["id"], "qty": 1},
    )
    assert resp.status_code == 400
    assert resp.json() == {"error": "Source and destination cannot be the same"}

    movements = (await client.get("/api/movements")).json()
    assert sorted(m["type"] for m in movements) == ["PLACEMENT", "RETRIEVAL", "TRANSFER"]
    transfer = next(m for m in movements if m["type"] == "TRANSFER")
    assert transfer["fromLocationId"] == l1["id"]
    assert transfer["toLocationId"] == l2["id"]
    assert transfer["quantity"] == 100


async def test_transfer_insufficient_source(client):
    _wh, l1, l2, item = await _setup(client)
    resp = await client.post(
        "/api/transfer",
        json={"itemId": item["id"], "fromLocationId": l1["id"], "toLocationId": l2["id"], "qty": 1},
    )
    assert resp.status_code == 400
    assert resp.json() == {"error": "Insufficient quantity"}
    assert (await client.get("/api/inventory")).json() == []
    assert (await client.get("/api/movements")).json() == []


async def test_quantity_must_be_positive_integer(client):
    _wh, l1, _l2, item = await _setup(client)
    for qty in (0, -1, 1.5, "5", True, None):
        resp = await client.post("/api/placement", json={"itemId": item["id"], "locationId": l1["id"], "qty": qty})
        assert resp.status_code == 400, qty
        assert resp.json()["error"] == "Validation error"

    resp = await client.post("/api/placement", json={"itemId": "not-a-uuid", "locationId": l1["id"], "qty": 1})
    assert resp.status_code == 400
    assert (await client.get("/api/movements")).json() == []


async def test_quantity_above_column_range_is_validation_error(client):
    _wh, l1, l2, item = await _setup(client)
    for qty in (2**70, 2_147_483_648):
        resp = await client.post("/api/placement", json={"itemId": item["id"], "locationId": l1["id"], "qty": qty})
        assert resp.status_code == 400, qty
        assert resp.json()["error"] == "Validation error"

        resp = await client.post(
            "/api/transfer",
            json={"itemId": item["id"], "fromLocationId": l1["id"], "toLocationId": l2["id"], "qty": qty},
        )
        assert resp.status_code == 400, qty

    resp = await client.post(
        "/api/placement", json={"itemId": item["id"], "locationId": l1["id"], "qty": 2_147_483_647}
    )
    assert resp.status_code == 200

    resp = await client.post("/api/placement", json={"itemId": item["id"], "locationId": l1["id"], "qty": 1})
    assert resp.status_code == 400
    assert resp.json() == {"error": "Resulting quantity would exceed 2147483647"}
    assert await _quantity(client, item["id"], l1["id"]) == 2_147_483_647
    assert len((await client.get("/api/movements")).json()) == 1


async def test_placement_unknown_item(client):
    _wh, l1, _l2, _item = await _setup(client)
    resp = await client.post("/api/placement", json={"itemId": str(uuid.uuid4()), "locationId": l1["id"], "qty": 1})
    assert resp.status_code == 404
    assert resp.json() == {"error": "Item not found"}


async def test_inventory_includes_item_and_location(client):
    _wh, l1, _l2, item = await _setup(client)
    await client.post("/api/placement", json={"itemId": item["id"], "locationId": l1["id"], "qty": 12})

    rows = (await client.get("/api/inventory")).json()
    assert len(rows) == 1
    assert rows[0]["item"]["sku"] == "SKU-X"
    assert rows[0]["location"]["code"] == "R1-A1-01"
    assert rows[0]["quantity"] == 12


async def test_repeated_reads_are_identical(client):
    _wh, l1, _l2, item = await _setup(client)
    await client.post("/api/placement", json={"itemId": item["id"], "locationId": l1["id"], "qty": 9})

    for path in ("/api/inventory", "/api/locations", "/api/items", "/api/warehouses", "/api/movements"):
        first = (await client.get(path)).json()
        second = (await client.get(path)).json()
        assert first == second, path


async def test_search(client):
    await client.post("/api/items", json={"sku": "SKU-001", "name": "Blue Widget", "barcode": "1234567890123"})
    await client.post("/api/items", json={"sku": "SKU-002", "name": "Red Gadget"})
    await client.post("/api/items", json={"sku": "PAL_50%", "name": "Pallet"})

    assert [i["sku"] for i in (await client.get("/api/search", params={"q": "widget"})).json()] == ["SKU-001"]
    assert [i["sku"] for i in (await client.get("/api/search", params={"q": "sku-00"})).json()] == ["SKU-001", "SKU-002"]
    assert [i["sku"] for i in (await client.get("/api/search", params={"q": "78901"})).json()] == ["SKU-001"]
    assert [i["sku"] for i in (await client.get("/api/search", params={"q": "_50%"})).json()] == ["PAL_50%"]
    assert (await client.get("/api/search", params={"q": "   "})).json() == []
    assert (await client.get("/api/search")).json() == []


async def test_search_is_capped_at_twenty(client):
    for n in range(25):
        await client.post("/api/items", json={"sku": f"BULK-{n:02d}", "name": "Bulk item"})
    results = (await client.get("/api/search", params={"q": "bulk"})).json()
    assert len(results) == 20


async def test_dashboard_and_export(client):
    _wh, l1, l2, item = await _setup(client)
    await client.post("/api/placement", json={"itemId": item["id"], "locationId": l1["id"], "qty": 30})
    await client.post(
        "/api/transfer",
        json={"itemId": item["id"], "fromLocationId": l1["id"], "toLocationId": l2["id"], "qty": 10},
    )

    summary = (await client.get("/api/dashboard")).json()
    assert summary == {
        "totalSkus": 1,
        "totalLocations": 2,
        "totalWarehouses": 1,
        "totalQuantity": 30,
        "movementCount": 2,
    }

    snapshot = (await client.get("/api/export")).json()
    assert "exportedAt" in snapshot
    assert [w["code"] for w in snapshot["warehouses"]] == ["WH-A"]
    assert len(snapshot["locations"]) == 2
    assert [i["sku"] for i in snapshot["items"]] == ["SKU-X"]
    assert sorted(r["quantity"] for r in snapshot["inventory"]) == [10, 20]


async def test_movements_filters(client):
    _wh, l1, l2, item = await _setup(client)
    await client.post("/api/placement", json={"itemId": item["id"], "locationId": l1["id"], "qty": 5})
    await client.post("/api/retrieval", json={"itemId": item["id"], "locationId": l1["id"], "qty": 2})

    resp = await client.get("/api/movements", params={"type": "RETRIEVAL"})
    assert [m["type"] for m in resp.json()] == ["RETRIEVAL"]

    resp = await client.get("/api/movements", params={"locationId": l2["id"]})
    assert resp.json() == []

    resp = await client.get("/api/movements", params={"type": "ADJUST"})
    assert resp.status_code == 400

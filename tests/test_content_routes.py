from sqlalchemy import text


async def test_get_content_on_empty_table_returns_empty_object(client):
    r = await client.get("/api/content")
    assert r.status_code == 200
    assert r.json() == {}


async def test_save_then_read_content(client, admin_headers):
    body = {
        "hero": {"heading": "Hi", "subheading": "I build things"},
        "projects": [{"title": "Site", "tags": ["next", "postgres"]}],
        "somethingNew": {"free": "form"},
    }
    r = await client.post("/api/content", json=body, headers=admin_headers)
    assert r.status_code == 200
    assert r.json() == {"message": "Content saved successfully!"}

    r = await client.get("/api/content")
    assert r.json() == body


async def test_save_only_touches_sections_in_body(client, store, admin_headers):
    await store.upsert_many({"hero": {"heading": "Hi"}, "footer": {"text": "bye"}})

    r = await client.post("/api/content", json={"modelSettings": {"scale": 1.5}}, headers=admin_headers)
    assert r.status_code == 200

    r = await client.get("/api/content")
    assert r.json() == {
        "hero": {"heading": "Hi"},
        "footer": {"text": "bye"},
        "modelSettings": {"scale": 1.5},
    }


async def test_save_requires_admin(client):
    r = await client.post("/api/content", json={"hero": {}})
    assert r.status_code == 401
    assert r.json()["message"] == "Not authenticated"


async def test_save_rejects_non_object_body(client, admin_headers):
    r = await client.post("/api/content", json=[{"hero": {}}], headers=admin_headers)
    assert r.status_code == 400
    assert r.json() == {"message": "Content body must be a JSON object."}


async def test_read_skips_undecodable_section(client, store, session):
    await store.upsert_many({"hero": {"heading": "Hi"}})
    await session.execute(text("INSERT INTO config (key, value) VALUES ('broken', '{oops')"))
    await session.commit()

    r = await client.get("/api/content")
    assert r.status_code == 200
    assert r.json() == {"hero": {"heading": "Hi"}}


async def test_storage_failure_returns_message_and_error(client, session, admin_headers):
    await session.execute(text("DROP TABLE config"))
    await session.commit()

    r = await client.get("/api/content")
    assert r.status_code == 500
    assert r.json()["message"] == "Failed to fetch content."
    assert r.json()["error"]

    r = await client.post("/api/content", json={"hero": {}}, headers=admin_headers)
    assert r.status_code == 500
    assert r.json()["message"] == "Failed to save content."


async def test_health(client):
    r = await client.get("/api/health")
    assert r.json() == {"status": "ok", "database": "ok"}


async def test_save_rejects_null_body(client, admin_headers):
    headers = {**admin_headers, "Content-Type": "application/json"}
    r = await client.post("/api/content", content=b"null", headers=headers)
    assert r.status_code == 400
    assert r.json() == {"message": "Content body must be a JSON object."}

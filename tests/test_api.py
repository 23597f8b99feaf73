def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_parse_preview(client, whatsapp_export):
    with whatsapp_export.open("rb") as handle:
        resp = client.post(
            "/transcripts/parse",
            files={"file": ("chat.txt", handle, "text/plain")},
            data={"timezone_name": "UTC"},
        )
    assert resp.status_code == 200, resp.text
    payload = resp.json()
    assert payload["participants"] == ["Alice", "Bob"]
    assert payload["total_messages"] == 4
    assert payload["message_count"]["Bob"] == 3


def test_parse_rejects_exports_without_messages(client):
    resp = client.post("/transcripts/parse", files={"file": ("chat.txt", b"nothing to see here\n", "text/plain")})
    assert resp.status_code == 422
    assert resp.json()["detail"] == "No valid messages found in the export."


def test_parse_rejects_empty_and_wrong_files(client):
    assert client.post("/transcripts/parse", files={"file": ("chat.txt", b"", "text/plain")}).status_code == 400
    assert client.post("/transcripts/parse", files={"file": ("chat.json", b"{}", "application/json")}).status_code == 400


def test_parse_rejects_unknown_timezone(client):
    resp = client.post(
        "/transcripts/parse",
        files={"file": ("chat.txt", b"[01/02/2023, 09:30:00] Alice: hi\n", "text/plain")},
        data={"timezone_name": "Mars/Olympus"},
    )
    assert resp.status_code == 400


def test_profile_lifecycle(client, whatsapp_export):
    with whatsapp_export.open("rb") as handle:
        created = client.post(
            "/profiles",
            files={"file": ("chat.txt", handle, "text/plain")},
            data={"person": "Alice", "name": "Alice", "relationship": "friend", "timezone_name": "UTC"},
        )
    assert created.status_code == 201, created.text
    profile = created.json()
    profile_id = profile["id"]
    assert profile["training_status"] == "completed"
    assert profile["total_messages"] == 2
    assert "hey" in profile["greeting_patterns"]

    listed = client.get("/profiles")
    assert [p["id"] for p in listed.json()] == [profile_id]

    messages = client.get(f"/profiles/{profile_id}/messages")
    assert messages.status_code == 200
    assert [m["content"] for m in messages.json()] == [
        "Hey Bob! How are you doing?",
        "Pretty good, see you later at the park\nI will bring snacks",
    ]

    prompt = client.get(f"/profiles/{profile_id}/prompt")
    assert prompt.status_code == 200
    assert "Hey Bob! How are you doing?" in prompt.json()["prompt"]

    patched = client.patch(f"/profiles/{profile_id}", json={"description": "college roommate"})
    assert patched.status_code == 200
    assert patched.json()["description"] == "college roommate"

    assert client.patch(f"/profiles/{profile_id}", json={"training_status": "bogus"}).status_code == 422
    assert client.patch(f"/profiles/{profile_id}", json={"training_status": None}).status_code == 400
    assert client.get(f"/profiles/{profile_id}").json()["training_status"] == "completed"

    assert client.delete(f"/profiles/{profile_id}").status_code == 204
    assert client.get(f"/profiles/{profile_id}").status_code == 404


def test_profile_for_unknown_person(client, whatsapp_export):
    with whatsapp_export.open("rb") as handle:
        resp = client.post(
            "/profiles",
            files={"file": ("chat.txt", handle, "text/plain")},
            data={"person": "Carol", "name": "Carol"},
        )
    assert resp.status_code == 400


def test_missing_profile_routes(client):
    assert client.get("/profiles/missing").status_code == 404
    assert client.get("/profiles/missing/messages").status_code == 404
    assert client.get("/profiles/missing/prompt").status_code == 404
    assert client.patch("/profiles/missing", json={"name": "x"}).status_code == 404
    assert client.delete("/profiles/missing").status_code == 404

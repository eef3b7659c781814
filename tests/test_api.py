from pathlib import Path

from chat_summarizer.core.config import get_settings
from chat_summarizer.core.errors import UpstreamError

CHAT = "12/5/23, 9:05 - Alice: hello there\n12/5/23, 9:06 - Bob: hi!"
MESSAGES = [
    {"date": "12/5/23", "time": "9:05", "sender": "Alice", "message": "hello there"},
    {"date": "12/5/23", "time": "9:06", "sender": "Bob", "message": "hi!"},
]


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_parse_pasted_text(client):
    resp = client.post("/chats/parse", data={"text": CHAT})

    assert resp.status_code == 200, resp.text
    payload = resp.json()
    assert payload["messages"] == MESSAGES
    assert payload["stats"] == {
        "total": 2,
        "senders": {"Alice": 1, "Bob": 1},
        "dateRange": {"from": "12/5/23", "to": "12/5/23"},
    }
    assert payload["truncated"] == 0


def test_parse_uploaded_file(client):
    fixture = Path(__file__).parent / "fixtures" / "whatsapp_chat.txt"
    with fixture.open("rb") as handle:
        resp = client.post("/chats/parse", files={"file": ("whatsapp_chat.txt", handle, "text/plain")})

    assert resp.status_code == 200, resp.text
    assert resp.json()["stats"]["total"] == 4


def test_parse_without_recognisable_messages(client):
    resp = client.post("/chats/parse", data={"text": "nothing to see\nhere"})

    assert resp.status_code == 200
    assert resp.json()["messages"] == []
    assert resp.json()["stats"] == {"total": 0, "senders": {}}


def test_parse_ignores_headers_with_blank_sender(client):
    resp = client.post("/chats/parse", data={"text": "12/5/23, 9:05 -  : hi\n[12/5/23, 9:06]  : yo"})

    assert resp.status_code == 200, resp.text
    assert resp.json()["stats"] == {"total": 0, "senders": {}}

    resp = client.post("/chats/parse", data={"text": f"{CHAT}\n12/5/23, 9:07 -  : hi"})

    assert resp.status_code == 200, resp.text
    assert resp.json()["messages"][-1]["message"] == "hi!\n12/5/23, 9:07 -  : hi"


def test_parse_rejects_missing_input(client):
    resp = client.post("/chats/parse", data={"text": "   "})

    assert resp.status_code == 400


def test_parse_rejects_non_txt_upload(client):
    resp = client.post("/chats/parse", files={"file": ("chat.json", b"{}", "application/json")})

    assert resp.status_code == 400
    assert resp.json()["detail"] == "Please upload a .txt file"


def test_parse_preview_is_limited(client, monkeypatch):
    monkeypatch.setattr(get_settings(), "preview_limit", 1)

    resp = client.post("/chats/parse", data={"text": CHAT})

    payload = resp.json()
    assert len(payload["messages"]) == 1
    assert payload["truncated"] == 1
    assert payload["stats"]["total"] == 2


def test_settings_are_masked_and_merged(client):
    resp = client.put("/settings", json={"geminiKey": "  gemini-secret-1234  ", "sheetId": "sheet-1"})

    assert resp.status_code == 200, resp.text
    config = resp.json()["config"]
    assert config["sheetId"] == "sheet-1"
    assert config["geminiKey"].endswith("1234")
    assert "secret" not in config["geminiKey"]

    client.put("/settings", json={"sheetId": "sheet-2"})
    read = client.get("/settings").json()
    assert read["provider"] == "firebase"
    assert read["config"]["sheetId"] == "sheet-2"
    assert read["config"]["geminiKey"].endswith("1234")


def test_settings_reject_unknown_keys(client):
    resp = client.put("/settings", json={"openaiKey": "x"})

    assert resp.status_code == 422


def test_provider_switch(client):
    assert client.get("/settings/provider").json() == {"provider": "firebase"}

    resp = client.put("/settings/provider", json={"provider": "supabase"})
    assert resp.status_code == 200
    assert client.get("/settings/provider").json() == {"provider": "supabase"}

    assert client.put("/settings/provider", json={"provider": "mongodb"}).status_code == 422


def test_summarize_uses_stored_key(client, monkeypatch):
    captured = {}

    def _fake_summarize_chat(messages, config):
        captured["messages"] = messages
        captured["config"] = config
        return "### Overview\nA short chat."

    monkeypatch.setattr("chat_summarizer.routers.chats.summarize_chat", _fake_summarize_chat)
    client.put("/settings", json={"geminiKey": "gem-key"})

    resp = client.post("/chats/summarize", json={"messages": MESSAGES})

    assert resp.status_code == 200, resp.text
    assert resp.json()["summary"] == "### Overview\nA short chat."
    assert captured["config"]["geminiKey"] == "gem-key"
    assert [m.sender for m in captured["messages"]] == ["Alice", "Bob"]


def test_summarize_without_key_is_a_client_error(client):
    resp = client.post("/chats/summarize", json={"messages": MESSAGES})

    assert resp.status_code == 400
    assert resp.json()["detail"] == "Gemini API key not configured. Go to Settings."


def test_export_rejects_empty_message_list(client):
    for path in ("/chats/summarize", "/chats/export/sheets", "/chats/export/db"):
        resp = client.post(path, json={"messages": []})
        assert resp.status_code == 400, path


def test_sheets_upstream_failure_is_bad_gateway(client, monkeypatch):
    def _failing_append(messages, config):
        raise UpstreamError("Quota exceeded", status_code=429)

    monkeypatch.setattr("chat_summarizer.routers.chats.append_rows", _failing_append)

    resp = client.post("/chats/export/sheets", json={"messages": MESSAGES})

    assert resp.status_code == 502
    assert resp.json()["detail"] == "Quota exceeded"


def test_document_export_routes_by_provider(client, monkeypatch):
    async def _fake_save(messages, config, provider):
        return {"saved": len(messages), "provider": provider}

    monkeypatch.setattr("chat_summarizer.routers.chats.save_messages", _fake_save)
    client.put("/settings/provider", json={"provider": "supabase"})

    resp = client.post("/chats/export/db", json={"messages": MESSAGES})

    assert resp.status_code == 200, resp.text
    assert resp.json() == {"saved": 2, "provider": "supabase"}


def test_document_export_without_credentials(client):
    resp = client.post("/chats/export/db", json={"messages": MESSAGES})

    assert resp.status_code == 400
    assert resp.json()["detail"] == "Firebase not configured. Go to Settings."

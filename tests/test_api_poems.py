"""API-level tests for the /api/poems endpoints."""

from fastapi.testclient import TestClient

from exquisite_corpse.api import app

# Module-level client (DB configured in conftest.py)
client = TestClient(app)


def _create_poem(total_lines: int = 5) -> dict:
    resp = client.post("/api/poems", json={"total_lines": total_lines})
    assert resp.status_code == 201, resp.text
    return resp.json()


def _append(poem_id: str, text: str, expected_version: int):
    return client.post(
        f"/api/poems/{poem_id}/lines",
        json={"text": text, "expected_version": expected_version},
    )


def _complete_poem(total_lines: int = 5) -> dict:
    poem = _create_poem(total_lines)
    version = poem["version"]
    for i in range(total_lines - 1):
        resp = _append(poem["id"], f"lantern number {i} hums softly", version)
        assert resp.status_code == 201, resp.text
        version = resp.json()["version"]
    return poem


class TestCreatePoem:
    def test_create(self):
        data = _create_poem(7)

        assert len(data["id"]) == 12
        assert data["total_lines"] == 7
        assert data["status"] == "active"
        assert data["version"] == 0
        assert data["seed_line"]
        assert data["seed_line"].endswith(data["seed_hint"])
        assert len(data["seed_hint"].split(" ")) == 3

    def test_rejects_bad_total_lines(self):
        resp = client.post("/api/poems", json={"total_lines": 6})

        assert resp.status_code == 400
        error = resp.json()["detail"]["error"]
        assert error["code"] == "INVALID_ARGUMENT"
        assert error["details"]["allowed"] == [5, 7, 11, 13]
        assert client.get("/api/poems").json() == []

    def test_rejects_malformed_payload(self):
        resp = client.post("/api/poems", json={"lines": 5})

        assert resp.status_code == 400
        error = resp.json()["detail"]["error"]
        assert error["code"] == "INVALID_INPUT"
        assert error["message"] == "Malformed request payload"
        assert error["details"]["errors"]
        assert client.get("/api/poems").json() == []


class TestListAndGet:
    def test_list_with_status_filter(self):
        active = _create_poem(7)
        complete = _complete_poem(5)

        all_poems = client.get("/api/poems").json()
        assert {p["id"] for p in all_poems} == {active["id"], complete["id"]}

        resp = client.get("/api/poems", params={"status": "complete"})
        assert resp.status_code == 200
        summaries = resp.json()
        assert [p["id"] for p in summaries] == [complete["id"]]
        assert summaries[0]["current_line_count"] == 5
        assert set(summaries[0]) == {
            "id",
            "total_lines",
            "current_line_count",
            "status",
            "seed_line",
            "created_at",
        }

    def test_list_with_unknown_status(self):
        _create_poem(5)

        for status in ("Active", "foo"):
            resp = client.get("/api/poems", params={"status": status})
            assert resp.status_code == 200
            assert resp.json() == []

    def test_get_hides_full_text_before_reveal(self):
        poem = _create_poem(5)
        _append(poem["id"], "a secret that nobody should read", 0)

        resp = client.get(f"/api/poems/{poem['id']}")

        assert resp.status_code == 200
        data = resp.json()
        assert data["current_line_count"] == 2
        assert data["version"] == 1
        assert data["title"] == ""
        assert data["seed_line"] is None
        assert all(line["full_text"] is None for line in data["lines"])
        assert data["lines"][1]["visible_hint"] == "nobody should read"
        assert "a secret that" not in resp.text

    def test_get_unknown(self):
        resp = client.get("/api/poems/doesnotexist")
        assert resp.status_code == 404
        assert resp.json()["detail"]["error"]["code"] == "NOT_FOUND"


class TestAddLine:
    def test_append(self):
        poem = _create_poem(5)

        resp = _append(poem["id"], "  moths negotiate with the lamp  ", 0)

        assert resp.status_code == 201
        data = resp.json()
        assert data["poem_id"] == poem["id"]
        assert data["version"] == 1
        assert data["is_complete"] is False
        assert data["line"]["line_number"] == 2
        assert data["line"]["full_text"] == "moths negotiate with the lamp"
        assert data["line"]["visible_hint"] == "with the lamp"

    def test_empty_text(self):
        poem = _create_poem(5)

        resp = _append(poem["id"], "    ", 0)

        assert resp.status_code == 400
        error = resp.json()["detail"]["error"]
        assert error["code"] == "INVALID_INPUT"
        assert error["message"] == "Line text cannot be empty"
        assert client.get(f"/api/poems/{poem['id']}").json()["current_line_count"] == 1

    def test_missing_expected_version(self):
        poem = _create_poem(5)
        resp = client.post(f"/api/poems/{poem['id']}/lines", json={"text": "hello"})

        assert resp.status_code == 400
        assert resp.json()["detail"]["error"]["code"] == "INVALID_INPUT"
        assert client.get(f"/api/poems/{poem['id']}").json()["version"] == 0

    def test_version_conflict(self):
        poem = _create_poem(5)
        assert _append(poem["id"], "first in line", 0).status_code == 201

        resp = _append(poem["id"], "second place", 0)

        assert resp.status_code == 409
        error = resp.json()["detail"]["error"]
        assert error["code"] == "VERSION_CONFLICT"
        assert error["details"]["current_version"] == 1

    def test_unknown_poem(self):
        resp = _append("doesnotexist", "hello there", 0)
        assert resp.status_code == 404

    def test_final_line_completes_poem(self):
        poem = _create_poem(5)
        version = 0
        for i in range(4):
            resp = _append(poem["id"], f"line {i} of the dream", version)
            assert resp.status_code == 201
            version = resp.json()["version"]

        assert resp.json()["is_complete"] is True
        assert client.get(f"/api/poems/{poem['id']}").json()["status"] == "complete"

        resp = _append(poem["id"], "one more", version)
        assert resp.status_code == 409
        error = resp.json()["detail"]["error"]
        assert error["code"] == "INVALID_STATE"
        assert "already complete" in error["message"]


class TestReveal:
    def test_reveal_active_poem(self):
        poem = _create_poem(5)

        resp = client.post(f"/api/poems/{poem['id']}/reveal")

        assert resp.status_code == 409
        error = resp.json()["detail"]["error"]
        assert error["code"] == "INVALID_STATE"
        assert "not yet complete" in error["message"]

    def test_reveal_is_idempotent(self):
        poem = _complete_poem(5)

        first = client.post(f"/api/poems/{poem['id']}/reveal")
        second = client.post(f"/api/poems/{poem['id']}/reveal")

        assert first.status_code == 200
        assert second.status_code == 200
        assert first.json()["title"]
        assert second.json()["title"] == first.json()["title"]
        assert second.json()["status"] == "revealed"

    def test_reveal_exposes_all_lines(self):
        poem = _complete_poem(5)

        data = client.post(f"/api/poems/{poem['id']}/reveal").json()

        assert len(data["lines"]) == 5
        assert data["lines"][0]["full_text"] == poem["seed_line"]
        assert data["lines"][4]["full_text"] == "lantern number 3 hums softly"

        detail = client.get(f"/api/poems/{poem['id']}").json()
        assert detail["status"] == "revealed"
        assert detail["title"] == data["title"]
        assert detail["seed_line"] == poem["seed_line"]
        assert all(line["full_text"] for line in detail["lines"])

    def test_reveal_unknown(self):
        resp = client.post("/api/poems/doesnotexist/reveal")
        assert resp.status_code == 404

"""Integration tests for the /api/v1/children endpoints."""

import uuid

from tests.conftest import API


class TestCreateChild:
    async def test_create_child(self, client, account):
        resp = await client.post(
            f"{API}/children/",
            headers=account["headers"],
            json={"name": "  Max ", "birthdate": "2018-04-02"},
        )
        assert resp.status_code == 201
        data = resp.json()
        assert data["name"] == "Max"
        assert data["birthdate"] == "2018-04-02"
        assert data["created_by"] == account["user_id"]
        assert data["family_id"] is None
        assert data["has_measurements"] is False

    async def test_create_child_in_family(self, client, family_admin):
        resp = await client.post(
            f"{API}/children/",
            headers=family_admin["headers"],
            json={"name": "Lisa", "birthdate": "2020-01-15"},
        )
        assert resp.status_code == 201
        assert resp.json()["family_id"] == family_admin["family_id"]

    async def test_name_required(self, client, account):
        resp = await client.post(
            f"{API}/children/",
            headers=account["headers"],
            json={"name": "   ", "birthdate": "2020-01-15"},
        )
        assert resp.status_code == 422
        assert resp.json() == {
            "detail": "Name and birthdate are required.",
            "code": "validation_error",
        }

    async def test_birthdate_required(self, client, account):
        resp = await client.post(
            f"{API}/children/", headers=account["headers"], json={"name": "Max"},
        )
        assert resp.status_code == 422
        assert resp.json()["code"] == "validation_error"

    async def test_name_too_long(self, client, account):
        resp = await client.post(
            f"{API}/children/",
            headers=account["headers"],
            json={"name": "M" * 101, "birthdate": "2020-01-15"},
        )
        assert resp.status_code == 422


class TestListChildren:
    async def test_list_ordered_by_birthdate(self, client, account):
        for name, birthdate in [("Young", "2021-06-01"), ("Old", "2015-02-10"), ("Mid", "2018-09-09")]:
            await client.post(
                f"{API}/children/",
                headers=account["headers"],
                json={"name": name, "birthdate": birthdate},
            )

        resp = await client.get(f"{API}/children/", headers=account["headers"])
        assert resp.status_code == 200
        assert [c["name"] for c in resp.json()] == ["Old", "Mid", "Young"]

    async def test_only_own_children(self, client, account, other_account):
        await client.post(
            f"{API}/children/",
            headers=other_account["headers"],
            json={"name": "Theirs", "birthdate": "2019-01-01"},
        )
        resp = await client.get(f"{API}/children/", headers=account["headers"])
        assert resp.status_code == 200
        assert resp.json() == []


class TestChildMeasurements:
    async def _create_child(self, client, acc) -> str:
        resp = await client.post(
            f"{API}/children/",
            headers=acc["headers"],
            json={"name": "Max", "birthdate": "2018-04-02"},
        )
        return resp.json()["id"]

    async def test_owner_can_upsert(self, client, account):
        child_id = await self._create_child(client, account)
        resp = await client.put(
            f"{API}/children/{child_id}/measurements",
            headers=account["headers"],
            json={"height_cm": 120, "shoe_size": "31"},
        )
        assert resp.status_code == 200
        assert resp.json()["height_cm"] == 120.0

        children = (await client.get(f"{API}/children/", headers=account["headers"])).json()
        assert children[0]["has_measurements"] is True
        assert children[0]["measurements"]["shoe_size"] == 31.0
        assert children[0]["measurements"]["waist_cm"] is None

    async def test_second_upsert_replaces(self, client, account):
        child_id = await self._create_child(client, account)
        url = f"{API}/children/{child_id}/measurements"
        await client.put(url, headers=account["headers"], json={"height_cm": 120, "chest_cm": 60})
        resp = await client.put(url, headers=account["headers"], json={"chest_cm": 61})
        assert resp.json()["height_cm"] is None
        assert resp.json()["chest_cm"] == 61.0

    async def test_other_account_forbidden(self, client, account, other_account):
        child_id = await self._create_child(client, account)
        resp = await client.put(
            f"{API}/children/{child_id}/measurements",
            headers=other_account["headers"],
            json={"height_cm": 1},
        )
        assert resp.status_code == 403
        assert resp.json()["code"] == "permission_denied"

    async def test_unknown_child(self, client, account):
        resp = await client.put(
            f"{API}/children/{uuid.uuid4()}/measurements",
            headers=account["headers"],
            json={},
        )
        assert resp.status_code == 404

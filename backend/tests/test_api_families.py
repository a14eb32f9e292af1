"""Integration tests for the /api/v1/families endpoints."""

import uuid

from sqlalchemy import func, select

from tests.conftest import API, sign_up


class TestCreateFamily:
    async def test_create_family(self, client, db_session, account):
        from app.models.family import Family, FamilyMember

        resp = await client.post(
            f"{API}/families/", headers=account["headers"], json={"name": "  Smiths "},
        )
        assert resp.status_code == 201
        data = resp.json()
        assert data["name"] == "Smiths"
        family_id = uuid.UUID(data["id"])

        me = (await client.get(f"{API}/auth/me", headers=account["headers"])).json()
        assert me["family_id"] == data["id"]

        families = await db_session.scalar(
            select(func.count()).select_from(Family).where(Family.id == family_id)
        )
        assert families == 1
        members = (
            await db_session.execute(
                select(FamilyMember).where(FamilyMember.family_id == family_id)
            )
        ).scalars().all()
        assert [(str(m.profile_id), m.role) for m in members] == [(account["user_id"], "admin")]

    async def test_empty_name_rejected(self, client, db_session, account):
        from app.models.family import Family

        before = await db_session.scalar(select(func.count()).select_from(Family))
        resp = await client.post(
            f"{API}/families/", headers=account["headers"], json={"name": "   "},
        )
        assert resp.status_code == 422
        assert resp.json() == {"detail": "Family name is required.", "code": "validation_error"}

        after = await db_session.scalar(select(func.count()).select_from(Family))
        assert after == before

    async def test_name_too_long_rejected(self, client, db_session, account):
        from app.models.family import Family

        before = await db_session.scalar(select(func.count()).select_from(Family))
        resp = await client.post(
            f"{API}/families/", headers=account["headers"], json={"name": "S" * 101},
        )
        assert resp.status_code == 422
        assert await db_session.scalar(select(func.count()).select_from(Family)) == before

    async def test_name_at_column_limit(self, client, account):
        resp = await client.post(
            f"{API}/families/", headers=account["headers"], json={"name": "S" * 100},
        )
        assert resp.status_code == 201
        assert resp.json()["name"] == "S" * 100

    async def test_unauthenticated(self, client):
        resp = await client.post(f"{API}/families/", json={"name": "Smiths"})
        assert resp.status_code == 401


class TestGroupView:
    async def test_without_family(self, client, account):
        resp = await client.get(f"{API}/families/me", headers=account["headers"])
        assert resp.status_code == 200
        assert resp.json() == {"family": None, "members": [], "selected": None}

    async def test_admin_view(self, client, family_admin):
        resp = await client.get(f"{API}/families/me", headers=family_admin["headers"])
        assert resp.status_code == 200
        data = resp.json()
        assert data["family"]["name"] == "Smiths"
        assert [(m["label"], m["role"]) for m in data["members"]] == [("Alex Smith", "admin")]
        assert data["selected"]["profile"]["id"] == family_admin["user_id"]
        assert data["selected"]["measurements"]["height_cm"] is None

    async def test_select_other_member_read_only(self, client, family_admin):
        joiner = await sign_up(client, full_name="Jordan")
        invite = (
            await client.post(f"{API}/families/me/invites", headers=family_admin["headers"])
        ).json()
        await client.post(
            f"{API}/invites/accept", headers=joiner["headers"], json={"token": invite["token"]},
        )
        await client.put(
            f"{API}/profiles/me/measurements", headers=joiner["headers"], json={"height_cm": 180},
        )
        child = (
            await client.post(
                f"{API}/children/",
                headers=joiner["headers"],
                json={"name": "Kit", "birthdate": "2019-05-05"},
            )
        ).json()
        await client.put(
            f"{API}/children/{child['id']}/measurements",
            headers=joiner["headers"],
            json={"inseam_cm": 50},
        )

        resp = await client.get(
            f"{API}/families/me",
            headers=family_admin["headers"],
            params={"member": joiner["user_id"]},
        )
        assert resp.status_code == 200
        data = resp.json()
        assert [m["role"] for m in data["members"]] == ["admin", "member"]
        selected = data["selected"]
        assert selected["profile"]["id"] == joiner["user_id"]
        assert selected["measurements"]["height_cm"] == 180.0
        assert [c["name"] for c in selected["children"]] == ["Kit"]
        assert selected["children"][0]["measurements"]["inseam_cm"] == 50.0

        # The admin cannot write the joiner's child
        resp = await client.put(
            f"{API}/children/{child['id']}/measurements",
            headers=family_admin["headers"],
            json={"inseam_cm": 1},
        )
        assert resp.status_code == 403

    async def test_non_member_selection_falls_back_to_viewer(self, client, family_admin, other_account):
        resp = await client.get(
            f"{API}/families/me",
            headers=family_admin["headers"],
            params={"member": other_account["user_id"]},
        )
        assert resp.status_code == 200
        assert resp.json()["selected"]["profile"]["id"] == family_admin["user_id"]

    async def test_children_outside_family_not_shared(self, client, account):
        # Child added before the family existed keeps family_id = null
        await client.post(
            f"{API}/children/",
            headers=account["headers"],
            json={"name": "Early", "birthdate": "2017-01-01"},
        )
        await client.post(f"{API}/families/", headers=account["headers"], json={"name": "Later"})

        resp = await client.get(f"{API}/families/me", headers=account["headers"])
        assert resp.json()["selected"]["children"] == []

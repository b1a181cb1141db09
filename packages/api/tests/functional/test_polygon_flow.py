# This project was developed with assistance from AI tools.
"""Functional tests: polygon endpoints under tenant scope.

The scoped query decides what comes back; these tests check that routes pass
the caller's scope through, stamp the caller as owner on create, and answer
404 (never 403) when the scoped query finds nothing.
"""

import uuid

import pytest

from .data_factory import make_point, make_polygon
from .mock_db import make_mock_session
from .personas import (
    HARVESTER_GROUP,
    U1_ID,
    U2_ID,
    outsider_u3,
    scope_for,
    worker_u1,
    worker_u2,
)

pytestmark = pytest.mark.functional


class TestListPolygons:
    def test_lists_group_polygons_with_pagination(self, make_client):
        polygons = [make_polygon(U1_ID, "P"), make_polygon(U2_ID, "Q")]
        client = make_client(
            worker_u2(),
            make_mock_session(items=polygons),
            scope_for(worker_u2(), HARVESTER_GROUP),
        )

        resp = client.get("/api/polygons/")

        assert resp.status_code == 200
        body = resp.json()
        assert [p["name"] for p in body["data"]] == ["P", "Q"]
        assert body["pagination"] == {"total": 2, "offset": 0, "limit": 20, "has_more": False}

    def test_points_returned_in_order(self, make_client):
        polygon = make_polygon(U1_ID)
        client = make_client(worker_u1(), make_mock_session(items=[polygon]))

        resp = client.get("/api/polygons/")

        orders = [p["order"] for p in resp.json()["data"][0]["points"]]
        assert orders == [0, 1, 2]

    def test_empty_scope_empty_list(self, make_client):
        client = make_client(outsider_u3(), make_mock_session(items=[]))

        resp = client.get("/api/polygons/")

        assert resp.status_code == 200
        assert resp.json()["data"] == []
        assert resp.json()["pagination"]["total"] == 0

    def test_limit_is_bounded(self, make_client):
        client = make_client(worker_u1(), make_mock_session(items=[]))
        assert client.get("/api/polygons/?limit=0").status_code == 422
        assert client.get("/api/polygons/?limit=101").status_code == 422

    def test_names_endpoint(self, make_client):
        pid = uuid.uuid4()
        client = make_client(worker_u1(), make_mock_session(rows=[(pid, "North field")]))

        resp = client.get("/api/polygons/names")

        assert resp.status_code == 200
        assert resp.json() == [{"id": str(pid), "name": "North field"}]


class TestGetPolygon:
    def test_visible_polygon_returned(self, make_client):
        polygon = make_polygon(U1_ID, "P")
        client = make_client(
            worker_u2(),
            make_mock_session(single=polygon),
            scope_for(worker_u2(), HARVESTER_GROUP),
        )

        resp = client.get(f"/api/polygons/{polygon.polygon_id}")

        assert resp.status_code == 200
        assert resp.json()["created_by_user_id"] == str(U1_ID)

    def test_out_of_scope_polygon_is_404_not_403(self, make_client):
        client = make_client(outsider_u3(), make_mock_session(single=None))

        resp = client.get(f"/api/polygons/{uuid.uuid4()}")

        assert resp.status_code == 404
        body = resp.json()
        assert body["detail"] == "Polygon not found"
        assert body["status"] == 404
        assert body["title"] == "Not Found"

    def test_id_by_name(self, make_client):
        polygon = make_polygon(U1_ID, "P")
        client = make_client(worker_u1(), make_mock_session(single=polygon))

        resp = client.get("/api/polygons/id-by-name", params={"polygon_name": "P"})

        assert resp.status_code == 200
        assert resp.json() == {"id": str(polygon.polygon_id)}

    def test_id_by_name_not_visible(self, make_client):
        client = make_client(outsider_u3(), make_mock_session(single=None))

        resp = client.get("/api/polygons/id-by-name", params={"polygon_name": "P"})

        assert resp.status_code == 404

    def test_malformed_id_is_422(self, make_client):
        client = make_client(worker_u1(), make_mock_session(single=None))
        assert client.get("/api/polygons/not-a-uuid").status_code == 422


class TestWritePolygon:
    def test_create_owned_by_caller(self, make_client):
        created = make_polygon(U1_ID, "P", points=[make_point(0), make_point(1)])
        session = make_mock_session(single=created)
        client = make_client(worker_u1(), session)

        resp = client.post(
            "/api/polygons/",
            json={
                "name": "P",
                "points": [
                    {"latitude": "45.1", "longitude": "19.8"},
                    {"latitude": "45.2", "longitude": "19.9"},
                ],
            },
        )

        assert resp.status_code == 201
        added = session.add.call_args.args[0]
        assert added.created_by_user_id == U1_ID
        assert added.polygon_name == "P"
        assert [p.order for p in added.points] == [0, 1]
        session.commit.assert_awaited_once()

    def test_create_rejects_blank_name(self, make_client):
        client = make_client(worker_u1(), make_mock_session())
        resp = client.post("/api/polygons/", json={"name": "", "points": []})
        assert resp.status_code == 422

    def test_create_rejects_out_of_range_coordinates(self, make_client):
        client = make_client(worker_u1(), make_mock_session())
        resp = client.post(
            "/api/polygons/",
            json={"name": "P", "points": [{"latitude": "91", "longitude": "0"}]},
        )
        assert resp.status_code == 422

    def test_update_by_group_member(self, make_client):
        polygon = make_polygon(U1_ID, "P")
        session = make_mock_session(single=polygon)
        client = make_client(worker_u2(), session, scope_for(worker_u2(), HARVESTER_GROUP))

        resp = client.put(
            f"/api/polygons/{polygon.polygon_id}",
            json={"name": "P2", "points": [{"latitude": "1", "longitude": "2", "order": 5}]},
        )

        assert resp.status_code == 200
        assert resp.json()["name"] == "P2"
        assert resp.json()["points"][0]["order"] == 5
        # Ownership does not move to the editor
        assert resp.json()["created_by_user_id"] == str(U1_ID)

    def test_update_out_of_scope_is_404(self, make_client):
        session = make_mock_session(single=None)
        client = make_client(outsider_u3(), session)

        resp = client.put(f"/api/polygons/{uuid.uuid4()}", json={"name": "X", "points": []})

        assert resp.status_code == 404
        session.commit.assert_not_awaited()

    def test_delete_visible_polygon(self, make_client):
        polygon = make_polygon(U1_ID)
        session = make_mock_session(single=polygon)
        client = make_client(worker_u1(), session)

        resp = client.delete(f"/api/polygons/{polygon.polygon_id}")

        assert resp.status_code == 204
        session.delete.assert_awaited_once_with(polygon)

    def test_delete_out_of_scope_is_404(self, make_client):
        session = make_mock_session(single=None)
        client = make_client(outsider_u3(), session)

        resp = client.delete(f"/api/polygons/{uuid.uuid4()}")

        assert resp.status_code == 404
        session.delete.assert_not_awaited()

    def test_delete_by_name(self, make_client):
        polygon = make_polygon(U1_ID, "P")
        session = make_mock_session(single=polygon)
        client = make_client(worker_u1(), session)

        resp = client.delete("/api/polygons/by-name/P")

        assert resp.status_code == 204
        session.delete.assert_awaited_once_with(polygon)

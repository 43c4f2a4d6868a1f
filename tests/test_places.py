from conftest import create_place
from domain.headcount.headcount_model import Headcount
from domain.marker.marker_model import Marker


class TestCreatePlace:

    def test_new_coordinates_create_marker_and_sentinel(self, client, session_factory, auth_headers):
        place = create_place(client, auth_headers)

        markers = client.get("/api/markers").json()
        assert len(markers) == 1
        assert place["marker_id"] == markers[0]["id"]
        assert place["marker"] == {"id": markers[0]["id"], "latitude": "37.5665", "longitude": "126.9780"}
        with session_factory() as db:
            headcounts = db.query(Headcount).filter(Headcount.place_id == place["id"]).all()
            assert [headcount.headcount for headcount in headcounts] == [-1]

    def test_existing_coordinates_reuse_marker(self, client, auth_headers):
        first = create_place(client, auth_headers, place_name="카페")
        second = create_place(client, auth_headers, place_name="서점")

        assert first["marker_id"] == second["marker_id"]
        assert len(client.get("/api/markers").json()) == 1

    def test_coordinates_compared_as_exact_strings(self, client, auth_headers):
        first = create_place(client, auth_headers, latitude="37.5")
        second = create_place(client, auth_headers, latitude="37.50")

        assert first["marker_id"] != second["marker_id"]

    def test_numeric_coordinates_are_rejected(self, client, auth_headers):
        response = client.post("/api/places", json={
            "place_name": "시청역",
            "address": "서울 중구",
            "detail_address": "1번 출구",
            "latitude": 37.5665,
            "longitude": 126.978,
        }, headers=auth_headers)

        assert response.status_code == 400

    def test_missing_field(self, client, auth_headers):
        response = client.post("/api/places", json={"place_name": "시청역"}, headers=auth_headers)

        assert response.status_code == 400

    def test_requires_authentication(self, client):
        response = client.post("/api/places", json={
            "place_name": "시청역",
            "address": "서울 중구",
            "detail_address": "1번 출구",
            "latitude": "37.5665",
            "longitude": "126.9780",
        })

        assert response.status_code == 401


class TestReadPlace:

    def test_list_and_fetch(self, client, auth_headers):
        place = create_place(client, auth_headers)

        assert [item["id"] for item in client.get("/api/places").json()] == [place["id"]]
        response = client.get(f"/api/places/{place['id']}")
        assert response.status_code == 200
        assert response.json()["place_name"] == "시청역"

    def test_malformed_id(self, client):
        response = client.get("/api/places/not-an-id")

        assert response.status_code == 415
        assert response.json() == {"error": "Unsupported Media Type"}

    def test_non_ascii_digits_are_malformed(self, client):
        response = client.get("/api/places/²")

        assert response.status_code == 415
        assert response.json() == {"error": "Unsupported Media Type"}

    def test_out_of_range_id_is_malformed(self, client):
        response = client.get("/api/places/99999999999999999999999")

        assert response.status_code == 415
        assert response.json() == {"error": "Unsupported Media Type"}

    def test_missing_place(self, client):
        response = client.get("/api/places/12345")

        assert response.status_code == 404
        assert response.json() == {"error": "Not Found"}


class TestUpdatePlace:

    def test_update_name_and_detail_address(self, client, auth_headers):
        place = create_place(client, auth_headers)

        response = client.put(f"/api/places/{place['id']}", json={
            "place_name": "시청역 2호선",
            "detail_address": "2번 출구",
        }, headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["place_name"] == "시청역 2호선"
        assert response.json()["detail_address"] == "2번 출구"
        assert response.json()["address"] == place["address"]

    def test_update_missing_place(self, client, auth_headers):
        response = client.put("/api/places/999", json={
            "place_name": "x", "detail_address": "y"
        }, headers=auth_headers)

        assert response.status_code == 404

    def test_update_requires_both_fields(self, client, auth_headers):
        place = create_place(client, auth_headers)

        response = client.put(f"/api/places/{place['id']}", json={"place_name": "x"}, headers=auth_headers)

        assert response.status_code == 400


class TestDeletePlace:

    def test_last_place_removes_marker(self, client, session_factory, auth_headers):
        place = create_place(client, auth_headers)

        response = client.delete(f"/api/places/{place['id']}", headers=auth_headers)

        assert response.status_code == 200
        assert response.json() == {"remaining_places_cnt": 0}
        assert client.get("/api/markers").json() == []
        with session_factory() as db:
            assert db.query(Marker).count() == 0

    def test_shared_marker_survives(self, client, auth_headers):
        first = create_place(client, auth_headers, place_name="카페")
        create_place(client, auth_headers, place_name="서점")

        response = client.delete(f"/api/places/{first['id']}", headers=auth_headers)

        assert response.json() == {"remaining_places_cnt": 1}
        markers = client.get("/api/markers").json()
        assert [marker["id"] for marker in markers] == [first["marker_id"]]

    def test_headcounts_are_deleted(self, client, session_factory, auth_headers):
        place = create_place(client, auth_headers)
        other = create_place(client, auth_headers, latitude="35.1")
        client.post(f"/api/headcounts/places/{place['id']}", json={"headcount": 12}, headers=auth_headers)

        client.delete(f"/api/places/{place['id']}", headers=auth_headers)

        with session_factory() as db:
            assert db.query(Headcount).filter(Headcount.place_id == place["id"]).count() == 0
            assert db.query(Headcount).filter(Headcount.place_id == other["id"]).count() == 1

    def test_delete_missing_place(self, client, auth_headers):
        assert client.delete("/api/places/777", headers=auth_headers).status_code == 404

    def test_delete_requires_authentication(self, client, auth_headers):
        place = create_place(client, auth_headers)

        assert client.delete(f"/api/places/{place['id']}").status_code == 401

from datetime import timedelta

from conftest import create_place
from domain.common import utcnow
from domain.headcount.headcount_model import Headcount


def add_reading(session_factory, place_id, headcount, seconds_ago):
    with session_factory() as db:
        db.add(Headcount(place_id=place_id, headcount=headcount, created_at=utcnow() - timedelta(seconds=seconds_ago)))
        db.commit()


class TestReportHeadcount:

    def test_report_records_user(self, client, user_and_headers):
        user, headers = user_and_headers
        place = create_place(client, headers)

        response = client.post(f"/api/headcounts/places/{place['id']}", json={"headcount": 15}, headers=headers)

        assert response.status_code == 201
        body = response.json()
        assert body["place_id"] == place["id"]
        assert body["headcount"] == 15
        assert body["user_id"] == user["id"]

    def test_zero_is_allowed(self, client, auth_headers):
        place = create_place(client, auth_headers)

        response = client.post(f"/api/headcounts/places/{place['id']}", json={"headcount": 0}, headers=auth_headers)

        assert response.status_code == 201

    def test_numeric_string_is_rejected(self, client, auth_headers):
        place = create_place(client, auth_headers)

        response = client.post(f"/api/headcounts/places/{place['id']}", json={"headcount": "15"}, headers=auth_headers)

        assert response.status_code == 400

    def test_negative_is_rejected(self, client, auth_headers):
        place = create_place(client, auth_headers)

        response = client.post(f"/api/headcounts/places/{place['id']}", json={"headcount": -1}, headers=auth_headers)

        assert response.status_code == 400

    def test_unknown_place(self, client, auth_headers):
        response = client.post("/api/headcounts/places/404", json={"headcount": 3}, headers=auth_headers)

        assert response.status_code == 404

    def test_malformed_place_id(self, client, auth_headers):
        response = client.post("/api/headcounts/places/abc", json={"headcount": 3}, headers=auth_headers)

        assert response.status_code == 415

    def test_requires_authentication(self, client, auth_headers):
        place = create_place(client, auth_headers)

        response = client.post(f"/api/headcounts/places/{place['id']}", json={"headcount": 3})

        assert response.status_code == 401


class TestListHeadcounts:

    def test_list_all_raw(self, client, auth_headers):
        place = create_place(client, auth_headers)
        client.post(f"/api/headcounts/places/{place['id']}", json={"headcount": 5}, headers=auth_headers)

        response = client.get("/api/headcounts")

        assert response.status_code == 200
        assert [item["headcount"] for item in response.json()] == [-1, 5]

    def test_latest_for_place_with_elapsed_time(self, client, session_factory, auth_headers):
        place = create_place(client, auth_headers)
        add_reading(session_factory, place["id"], 8, seconds_ago=0)
        # 기본값 레코드보다 최신이 되도록 조정
        with session_factory() as db:
            sentinel = db.query(Headcount).filter(Headcount.headcount == -1).one()
            sentinel.created_at = utcnow() - timedelta(seconds=30)
            db.commit()
        add_reading(session_factory, place["id"], 4, seconds_ago=10)

        response = client.get(f"/api/headcounts/places/{place['id']}")

        assert response.status_code == 200
        body = response.json()
        assert body["headcount"] == 8
        assert 10 <= body["update_elapsed_time"] <= 12
        assert body["place"]["id"] == place["id"]
        assert body["place"]["marker"]["latitude"] == "37.5665"

    def test_new_place_has_sentinel_only(self, client, auth_headers):
        place = create_place(client, auth_headers)

        body = client.get(f"/api/headcounts/places/{place['id']}").json()

        assert body["headcount"] == -1
        assert body["update_elapsed_time"] == -1

    def test_latest_for_unknown_place(self, client):
        assert client.get("/api/headcounts/places/999").status_code == 404
        assert client.get("/api/headcounts/places/x1").status_code == 415

    def test_one_record_per_place(self, client, auth_headers):
        first = create_place(client, auth_headers, place_name="카페")
        second = create_place(client, auth_headers, place_name="서점", latitude="35.1")
        client.post(f"/api/headcounts/places/{first['id']}", json={"headcount": 3}, headers=auth_headers)

        response = client.get("/api/headcounts/places")

        assert response.status_code == 200
        body = response.json()
        assert [item["place_id"] for item in body] == [first["id"], second["id"]]
        assert body[0]["headcount"] == 3
        assert body[0]["update_elapsed_time"] >= 0
        assert body[1]["update_elapsed_time"] == -1

    def test_one_record_per_marker(self, client, auth_headers):
        first = create_place(client, auth_headers, place_name="카페")
        second = create_place(client, auth_headers, place_name="서점")
        third = create_place(client, auth_headers, place_name="공원", latitude="35.1")
        client.post(f"/api/headcounts/places/{first['id']}", json={"headcount": 3}, headers=auth_headers)

        body = client.get("/api/headcounts/markers").json()

        assert [item["place_id"] for item in body] == [first["id"], third["id"]]
        assert second["marker_id"] == first["marker_id"]

    def test_places_at_marker(self, client, auth_headers):
        first = create_place(client, auth_headers, place_name="카페")
        second = create_place(client, auth_headers, place_name="서점")
        create_place(client, auth_headers, place_name="공원", latitude="35.1")

        response = client.get(f"/api/headcounts/markers/{first['marker_id']}")

        assert response.status_code == 200
        assert sorted(item["place_id"] for item in response.json()) == sorted([first["id"], second["id"]])

    def test_unknown_marker(self, client):
        assert client.get("/api/headcounts/markers/999").status_code == 404

import pytest

from barbershop_api.app.core.errors import StorageFailure


def _create_customer(client, **body):
    body.setdefault("name", "Test User")
    res = client.post("/api/customers", json=body)
    assert res.status_code == 201
    return res.json()


def _create_service(client, **body):
    body = {"title": "Cut", "duration_min": 30, "price": 15, **body}
    res = client.post("/api/services", json=body)
    assert res.status_code == 201
    return res.json()


def _book(client, customer_id, service_id, day="2025-04-20", time="10:00"):
    return client.post(
        "/api/appointments",
        json={"customerId": customer_id, "serviceId": service_id, "appointment_date": day, "start_time": time},
    )


def test_booking_flow(client):
    res = client.post("/api/customers", json={"name": "Test User", "phone": "012"})
    assert res.status_code == 201
    assert res.json()["name"] == "Test User"
    cust_id = res.json()["id"]

    res = client.post("/api/services", json={"title": "Cut", "duration_min": 30, "price": 15})
    assert res.status_code == 201
    assert res.json()["title"] == "Cut"
    serv_id = res.json()["id"]

    res = _book(client, cust_id, serv_id)
    assert res.status_code == 201
    body = res.json()
    assert str(body["customer_id"]) == str(cust_id)
    assert body["status"] == "booked"
    assert set(body) == {"id", "customer_id", "service_id", "appointment_date", "start_time", "status", "created_at"}

    res = client.get("/api/appointments", params={"date": "2025-04-20"})
    assert res.status_code == 200
    rows = res.json()
    assert [r["id"] for r in rows] == [body["id"]]
    assert rows[0]["customer_name"] == "Test User"
    assert rows[0]["service_title"] == "Cut"
    assert rows[0]["duration_min"] == 30

    res = _book(client, cust_id, serv_id)
    assert res.status_code == 409
    assert res.json() == {"error": "Time slot already taken"}


def test_status_update_keeps_slot(client):
    cust = _create_customer(client)
    serv = _create_service(client)
    appt = _book(client, cust["id"], serv["id"]).json()

    res = client.put(f"/api/appointments/{appt['id']}", json={"status": "completed"})
    assert res.status_code == 200
    assert res.json()["status"] == "completed"
    assert res.json()["appointment_date"] == "2025-04-20"
    assert res.json()["start_time"] == "10:00"


def test_reschedule_into_taken_slot_returns_409(client):
    cust = _create_customer(client)
    serv = _create_service(client)
    _book(client, cust["id"], serv["id"], time="10:00")
    appt = _book(client, cust["id"], serv["id"], time="11:00").json()

    res = client.put(f"/api/appointments/{appt['id']}", json={"start_time": "10:00"})
    assert res.status_code == 409
    assert client.get(f"/api/appointments/{appt['id']}").json()["start_time"] == "11:00"


def test_deleting_customer_cascades(client):
    cust = _create_customer(client)
    other = _create_customer(client, name="Other")
    serv = _create_service(client)
    _book(client, cust["id"], serv["id"], day="2025-04-20")
    _book(client, cust["id"], serv["id"], day="2025-04-21")
    kept = _book(client, other["id"], serv["id"], day="2025-04-22").json()

    res = client.delete(f"/api/customers/{cust['id']}")
    assert res.status_code == 200
    assert res.json() == {"success": True}

    assert [a["id"] for a in client.get("/api/appointments").json()] == [kept["id"]]
    assert client.get(f"/api/customers/{cust['id']}").status_code == 404
    assert client.get(f"/api/services/{serv['id']}").status_code == 200


def test_deleting_service_cascades(client):
    cust = _create_customer(client)
    serv = _create_service(client)
    _book(client, cust["id"], serv["id"])

    assert client.delete(f"/api/services/{serv['id']}").json() == {"success": True}
    assert client.get("/api/appointments").json() == []
    assert client.get(f"/api/customers/{cust['id']}").status_code == 200


def test_delete_unknown_ids_succeed(client):
    for path in ("customers", "services", "appointments"):
        res = client.delete(f"/api/{path}/does-not-exist")
        assert res.status_code == 200
        assert res.json() == {"success": True}


@pytest.mark.parametrize(
    "body, message",
    [
        ({"serviceId": "s", "appointment_date": "2025-04-20", "start_time": "10:00"}, "Missing fields"),
        ({"customerId": "c", "serviceId": "s", "appointment_date": "2025-02-30", "start_time": "10:00"}, "Invalid date format (YYYY-MM-DD)"),
        ({"customerId": "c", "serviceId": "s", "appointment_date": "2025-04-20", "start_time": "24:00"}, "Invalid time format (HH:MM)"),
        ({"customerId": "c", "serviceId": "s", "appointment_date": "2025-04-20", "start_time": "10:00"}, "Customer not found"),
    ],
)
def test_appointment_client_errors(client, body, message):
    res = client.post("/api/appointments", json=body)
    assert res.status_code == 400
    assert res.json() == {"error": message}


def test_customer_and_service_validation(client):
    res = client.post("/api/customers", json={"phone": "012"})
    assert res.status_code == 400
    assert res.json() == {"error": "Name required"}

    res = client.post("/api/services", json={"title": "Cut", "price": 15})
    assert res.status_code == 400

    res = client.post("/api/services", json={"title": "Cut", "duration_min": 0, "price": 15})
    assert res.status_code == 400

    res = client.post("/api/services", json={"title": "Cut", "duration_min": "long", "price": 15})
    assert res.status_code == 422


def test_unknown_records_return_404(client):
    assert client.get("/api/customers/nope").status_code == 404
    assert client.get("/api/services/nope").status_code == 404
    assert client.get("/api/appointments/nope").status_code == 404
    res = client.put("/api/appointments/nope", json={"status": "completed"})
    assert res.status_code == 404
    assert res.json() == {"error": "Appointment not found"}
    assert client.put("/api/customers/nope", json={"name": "x"}).status_code == 404
    assert client.put("/api/services/nope", json={"price": 1}).status_code == 404


def test_customer_update_and_listing(client):
    b = _create_customer(client, name="bob", phone="1")
    _create_customer(client, name="Ann")

    res = client.put(f"/api/customers/{b['id']}", json={"phone": None})
    assert res.status_code == 200
    assert res.json()["phone"] is None
    assert res.json()["name"] == "bob"
    assert res.json()["created_at"] == b["created_at"]

    assert [c["name"] for c in client.get("/api/customers").json()] == ["Ann", "bob"]


def test_filter_by_customer_id(client):
    cust = _create_customer(client)
    other = _create_customer(client, name="Other")
    serv = _create_service(client)
    _book(client, cust["id"], serv["id"], time="09:00")
    _book(client, other["id"], serv["id"], time="10:00")

    rows = client.get("/api/appointments", params={"customerId": other["id"]}).json()
    assert [r["customer_id"] for r in rows] == [other["id"]]


def test_versioned_prefix_and_info(client):
    _create_customer(client)
    res = client.get("/api/v1/customers")
    assert res.status_code == 200
    assert len(res.json()) == 1

    info = client.get("/api/v1/info").json()
    assert info["collections"] == {"customers": 1, "services": 0, "appointments": 0}


def test_storage_failure_returns_500(client, store, monkeypatch):
    def broken_list(collection):
        raise StorageFailure(f"Collection '{collection}' could not be read")

    monkeypatch.setattr(store, "list", broken_list)
    res = client.get("/api/services")
    assert res.status_code == 500
    assert res.json() == {"error": "Collection 'services' could not be read"}


LEGACY_CREATED = "2025-01-01T09:00:00.000Z"


def _seed_legacy_records(store):
    store.replace_all(
        "customers",
        [{"id": 7, "name": "Legacy", "phone": None, "email": None, "created_at": LEGACY_CREATED}],
    )
    store.replace_all(
        "services",
        [{"id": 3, "title": "Fade", "duration_min": 30, "price": 20, "created_at": LEGACY_CREATED}],
    )
    store.replace_all(
        "appointments",
        [
            {
                "id": 1,
                "customer_id": 7,
                "service_id": 3,
                "appointment_date": "2025-04-20",
                "start_time": "09:00",
                "status": "booked",
                "created_at": LEGACY_CREATED,
            }
        ],
    )


def test_records_with_numeric_ids_are_served(client, store):
    _seed_legacy_records(store)

    res = client.get("/api/customers/7")
    assert res.status_code == 200
    assert res.json()["id"] == "7"
    assert [c["id"] for c in client.get("/api/customers").json()] == ["7"]

    assert client.get("/api/services/3").json()["id"] == "3"
    assert [s["id"] for s in client.get("/api/services").json()] == ["3"]

    res = client.get("/api/appointments/1")
    assert res.status_code == 200
    assert (res.json()["id"], res.json()["customer_id"], res.json()["service_id"]) == ("1", "7", "3")

    rows = client.get("/api/appointments", params={"customerId": "7"}).json()
    assert len(rows) == 1
    assert rows[0]["customer_name"] == "Legacy"
    assert rows[0]["service_title"] == "Fade"


def test_numeric_ids_in_request_body(client, store):
    _seed_legacy_records(store)

    res = client.post(
        "/api/appointments",
        json={"customerId": 7, "serviceId": 3.0, "appointment_date": "2025-04-21", "start_time": "10:00"},
    )
    assert res.status_code == 201
    assert res.json()["customer_id"] == "7"
    assert res.json()["service_id"] == "3"

    res = client.put("/api/appointments/1", json={"customerId": 7.0, "start_time": "09:30"})
    assert res.status_code == 200
    assert res.json()["customer_id"] == "7"
    assert res.json()["start_time"] == "09:30"


def test_integer_price_is_echoed_unchanged(client, store):
    serv = _create_service(client, price=15)
    assert serv["price"] == 15
    assert isinstance(serv["price"], int)
    assert '"price":15,' in client.get(f"/api/services/{serv['id']}").text
    assert client.put(f"/api/services/{serv['id']}", json={"price": 17.5}).json()["price"] == 17.5


def test_blank_status_is_rejected(client):
    cust = _create_customer(client)
    serv = _create_service(client)
    appt = _book(client, cust["id"], serv["id"]).json()

    res = client.put(f"/api/appointments/{appt['id']}", json={"status": ""})
    assert res.status_code == 400
    assert res.json() == {"error": "Status cannot be empty"}
    assert client.get(f"/api/appointments/{appt['id']}").json()["status"] == "booked"

"""
Tests for the HTTP surface: status codes, envelopes and error bodies.
"""

import os


def create(client, payload):
    response = client.post("/book", json=payload)
    assert response.status_code == 201
    return response.json()["booking"]


def test_health(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.json() == {"status": "Backend running"}


def test_create_oneway_booking(client, oneway_payload):
    response = client.post("/book", json=oneway_payload)

    assert response.status_code == 201
    data = response.json()
    assert data["message"] == "Booking successful!"
    booking = data["booking"]
    assert booking["tripType"] == "oneway"
    assert booking["startDate"] is None
    assert booking["endDate"] is None
    assert booking["date"] == "01/01/2025"
    assert booking["from"] == "Delhi"
    assert booking["to"] == "Mumbai"
    assert booking["passenger"] == 2
    assert booking["paymentAmount"] == 0
    assert booking["paymentStatus"] == "pending"
    assert booking["id"]
    assert booking["createdAt"].endswith("+00:00")
    assert "X-Request-ID" in response.headers


def test_create_roundtrip_booking(client, roundtrip_payload):
    booking = create(client, dict(roundtrip_payload, date="01/05/2025"))

    assert booking["date"] is None
    assert booking["startDate"] == "10/05/2025"
    assert booking["endDate"] == "15/05/2025"


def test_create_missing_contact(client, oneway_payload):
    payload = dict(oneway_payload)
    del payload["contact"]

    response = client.post("/book", json=payload)

    assert response.status_code == 400
    assert response.json() == {"error": "Missing required fields: contact"}
    assert client.get("/bookings").json() == []


def test_create_bad_passenger_count(client, oneway_payload):
    response = client.post("/book", json=dict(oneway_payload, passenger="many"))

    assert response.status_code == 400
    assert "passenger" in response.json()["error"]


def test_list_bookings(client, oneway_payload, roundtrip_payload):
    create(client, oneway_payload)
    create(client, roundtrip_payload)

    response = client.get("/bookings")

    assert response.status_code == 200
    assert sorted(b["tripType"] for b in response.json()) == ["oneway", "roundtrip"]


def test_fetch_for_invoice(client, oneway_payload):
    booking = create(client, oneway_payload)

    response = client.get(f"/bookings/invoice/{booking['id']}")

    assert response.status_code == 200
    assert response.json() == booking


def test_fetch_unknown_booking(client):
    response = client.get("/bookings/invoice/unknown")

    assert response.status_code == 404
    assert response.json() == {"error": "Booking not found"}


def test_update_booking(client, oneway_payload):
    booking = create(client, oneway_payload)

    response = client.put(f"/booking/{booking['id']}", json={"to": "Chennai", "passenger": 5})

    assert response.status_code == 200
    updated = response.json()["updatedBooking"]
    assert updated["to"] == "Chennai"
    assert updated["passenger"] == 5
    assert updated["from"] == "Delhi"
    assert updated["createdAt"] == booking["createdAt"]


def test_update_with_null_required_field(client, oneway_payload):
    booking = create(client, oneway_payload)

    response = client.put(f"/booking/{booking['id']}", json={"email": None})

    assert response.status_code == 400
    assert response.json()["error"].startswith("Invalid field email")
    fetched = client.get(f"/bookings/invoice/{booking['id']}").json()
    assert fetched["email"] == "a@b.com"


def test_update_unknown_booking(client):
    response = client.put("/booking/unknown", json={"to": "Chennai"})

    assert response.status_code == 404


def test_update_payment(client, oneway_payload):
    booking = create(client, oneway_payload)

    response = client.put(
        f"/booking/payment/{booking['id']}",
        json={"paymentAmount": 500, "paymentStatus": "paid"},
    )

    assert response.status_code == 200
    assert response.json()["message"] == "Payment updated successfully"

    fetched = client.get(f"/bookings/invoice/{booking['id']}").json()
    assert fetched["paymentAmount"] == 500
    assert fetched["paymentStatus"] == "paid"
    unchanged = {k: v for k, v in booking.items() if k not in ("paymentAmount", "paymentStatus")}
    assert {k: fetched[k] for k in unchanged} == unchanged


def test_update_payment_invalid_status(client, oneway_payload):
    booking = create(client, oneway_payload)

    response = client.put(
        f"/booking/payment/{booking['id']}",
        json={"paymentAmount": 500, "paymentStatus": "refunded"},
    )

    assert response.status_code == 400


def test_update_payment_unknown_booking(client):
    response = client.put("/booking/payment/unknown", json={"paymentAmount": 1, "paymentStatus": "paid"})

    assert response.status_code == 404


def test_delete_booking(client, oneway_payload):
    booking = create(client, oneway_payload)

    response = client.delete(f"/booking/{booking['id']}")

    assert response.status_code == 200
    assert response.json()["deletedBooking"]["id"] == booking["id"]
    assert client.get(f"/bookings/invoice/{booking['id']}").status_code == 404
    assert client.delete(f"/booking/{booking['id']}").status_code == 404


def test_generate_invoice(client, settings, browser):
    response = client.post(
        "/generate-invoice",
        json={
            "contactNo": "9999999999",
            "customerName": "Asha Rao",
            "from": "Pune",
            "to": "Goa",
            "date": "12/05/2025",
            "amount": 2500,
        },
    )

    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert data["imageUrl"].startswith("http://testserver/public/invoice-")
    assert data["whatsappURL"].startswith("https://wa.me/9999999999?text=")
    assert browser.closed == browser.launched == 1

    filename = data["imageUrl"].rsplit("/", 1)[1]
    assert os.path.exists(os.path.join(settings.PUBLIC_DIR, filename))
    image = client.get(f"/public/{filename}")
    assert image.status_code == 200


def test_generate_invoice_failure(client, browser):
    browser.fail_on = "screenshot"

    response = client.post(
        "/generate-invoice",
        json={
            "contactNo": "9999999999",
            "customerName": "Asha Rao",
            "from": "Pune",
            "to": "Goa",
            "date": "12/05/2025",
            "amount": 2500,
        },
    )

    assert response.status_code == 500
    assert response.json() == {"success": False, "message": "screenshot failed"}
    assert browser.closed == browser.launched == 1


def test_unmatched_route(client):
    response = client.get("/nowhere")

    assert response.status_code == 404
    assert response.json() == {"error": "Route not found"}


def test_wrong_method_on_known_path(client):
    for method, path in (("POST", "/bookings"), ("GET", "/book"), ("DELETE", "/bookings")):
        response = client.request(method, path)

        assert response.status_code == 404
        assert response.json() == {"error": "Route not found"}


def test_request_id_is_echoed(client):
    response = client.get("/", headers={"X-Request-ID": "abc123"})

    assert response.headers["X-Request-ID"] == "abc123"
    assert response.headers["X-Response-Time"].endswith("ms")

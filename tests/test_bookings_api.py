import logging
from unittest.mock import AsyncMock, patch

from clinic_api.app.core.ids import is_valid_object_id, new_object_id

BASE = "/api/v1/bookings"


def _slots(bookings):
    return [(b["booking_date"], b["booking_time"]) for b in bookings]


# --- list ---------------------------------------------------------------

def test_list_defaults_to_ten_ordered_by_date_and_time(client, create_booking):
    slots = [
        ("2025-09-03", "10:00"), ("2025-09-01", "15:00"), ("2025-09-02", "08:00"),
        ("2025-09-01", "09:00"), ("2025-09-05", "11:30"), ("2025-09-04", "12:00"),
        ("2025-09-01", "12:00"), ("2025-09-06", "09:00"), ("2025-09-02", "07:45"),
        ("2025-09-07", "16:00"), ("2025-09-08", "10:00"), ("2025-08-31", "18:00"),
    ]
    for day, hour in slots:
        create_booking(booking_date=day, booking_time=hour)

    response = client.get(f"{BASE}/")
    assert response.status_code == 200
    data = response.json()
    assert len(data) == 10
    assert _slots(data) == sorted(_slots(data))
    assert data[0]["booking_date"] == "2025-08-31"
    assert data[1]["booking_date"] == "2025-09-01"
    assert data[1]["booking_time"] == "09:00:00"


def test_list_pagination(client, create_booking):
    for day in range(1, 8):
        create_booking(booking_date=f"2025-09-0{day}")

    first = client.get(f"{BASE}/", params={"limit": 3, "page": 1}).json()
    third = client.get(f"{BASE}/", params={"limit": 3, "page": 3}).json()
    assert [b["booking_date"] for b in first] == ["2025-09-01", "2025-09-02", "2025-09-03"]
    assert [b["booking_date"] for b in third] == ["2025-09-07"]


def test_list_invalid_pagination_falls_back_to_defaults(client, create_booking):
    for day in range(1, 10):
        create_booking(booking_date=f"2025-09-0{day}")
    create_booking(booking_date="2025-09-10")
    create_booking(booking_date="2025-09-11")

    for params in ({"limit": "-5", "page": "0"}, {"limit": "abc", "page": "x"}, {"limit": "0"}):
        data = client.get(f"{BASE}/", params=params).json()
        assert len(data) == 10
        assert data[0]["booking_date"] == "2025-09-01"


def test_list_has_no_upper_limit(client, create_booking):
    for day in range(1, 10):
        create_booking(booking_date=f"2025-09-0{day}")
    for day in range(10, 15):
        create_booking(booking_date=f"2025-09-{day}")

    assert len(client.get(f"{BASE}/", params={"limit": 5000}).json()) == 14


def test_list_descending_and_custom_sort(client, create_booking):
    create_booking(patient_name="Charlie", booking_date="2025-09-01")
    create_booking(patient_name="alice", booking_date="2025-09-03")
    create_booking(patient_name="Bob", booking_date="2025-09-02")

    desc = client.get(f"{BASE}/", params={"order": "-1"}).json()
    assert [b["booking_date"] for b in desc] == ["2025-09-03", "2025-09-02", "2025-09-01"]

    by_name = client.get(f"{BASE}/", params={"sort": "patient_name", "order": "desc"}).json()
    assert [b["patient_name"] for b in by_name] == ["alice", "Charlie", "Bob"]


def test_list_ascending_custom_sort(client, create_booking):
    create_booking(patient_name="Charlie", remarks="b")
    create_booking(patient_name="Bob", remarks="c")
    create_booking(patient_name="Alice", remarks="a")

    for order in ("1", "asc"):
        data = client.get(f"{BASE}/", params={"sort": "patient_name", "order": order}).json()
        assert [b["patient_name"] for b in data] == ["Alice", "Bob", "Charlie"]

    by_remarks = client.get(f"{BASE}/", params={"sort": "remarks"}).json()
    assert [b["remarks"] for b in by_remarks] == ["a", "b", "c"]


def test_list_huge_pagination_values(client, create_booking):
    create_booking()
    huge = "99999999999999999999"

    response = client.get(f"{BASE}/", params={"limit": huge})
    assert response.status_code == 200
    assert len(response.json()) == 1

    response = client.get(f"{BASE}/", params={"page": huge})
    assert response.status_code == 200
    assert response.json() == []

    response = client.get(f"{BASE}/", params={"limit": huge, "page": huge})
    assert response.status_code == 200
    assert response.json() == []


def test_list_unknown_sort_field_uses_default_order(client, create_booking):
    create_booking(booking_date="2025-09-02")
    create_booking(booking_date="2025-09-01")

    data = client.get(f"{BASE}/", params={"sort": "id; DROP TABLE bookings"}).json()
    assert [b["booking_date"] for b in data] == ["2025-09-01", "2025-09-02"]


# --- create -------------------------------------------------------------

def test_create_persists_one_booking(client, booking_payload, employee, service):
    response = client.post(f"{BASE}/", json=booking_payload())
    assert response.status_code == 201
    data = response.json()
    assert is_valid_object_id(data["id"])
    assert data["booking_id"].startswith("b")
    assert data["patient_name"] == "Jane Doe"
    assert data["booking_date"] == "2025-09-01"
    assert data["booking_time"] == "09:30:00"
    assert data["updated"] is not None
    # Names are copied from the referenced records when not given
    assert data["receptionist_name"] == employee["name"]
    assert data["service_name"] == service["name"]

    assert client.get(f"{BASE}/count").json() == {"count": 1}
    assert client.get(f"{BASE}/{data['id']}").json() == data


def test_create_keeps_supplied_display_names(client, booking_payload):
    data = client.post(
        f"{BASE}/",
        json=booking_payload(receptionist_name="Front Desk", service_name="Cleaning (45 min)"),
    ).json()
    assert data["receptionist_name"] == "Front Desk"
    assert data["service_name"] == "Cleaning (45 min)"


def test_create_ignores_client_booking_number(client, booking_payload):
    data = client.post(f"{BASE}/", json=booking_payload(booking_id="mine")).json()
    assert data["booking_id"] != "mine"


def test_duplicate_creates_produce_two_records(client, booking_payload):
    first = client.post(f"{BASE}/", json=booking_payload()).json()
    second = client.post(f"{BASE}/", json=booking_payload()).json()
    assert first["id"] != second["id"]
    assert client.get(f"{BASE}/count").json()["count"] == 2


def test_create_with_unknown_service_is_rejected(client, booking_payload):
    response = client.post(f"{BASE}/", json=booking_payload(service_id=new_object_id()))
    assert response.status_code == 400
    assert response.json() == {"message": "Service Not Found!"}
    assert client.get(f"{BASE}/count").json()["count"] == 0


def test_create_with_unknown_employee_is_rejected(client, booking_payload):
    response = client.post(f"{BASE}/", json=booking_payload(receptionist_id=new_object_id()))
    assert response.status_code == 400
    assert response.json() == {"message": "Employee Not Found!"}


def test_create_with_malformed_references(client, booking_payload):
    response = client.post(f"{BASE}/", json=booking_payload(receptionist_id="123"))
    assert response.status_code == 400
    assert response.json() == {"message": "Invalid receptionist_id"}

    response = client.post(f"{BASE}/", json=booking_payload(service_id="not-an-id"))
    assert response.status_code == 400
    assert response.json() == {"message": "Invalid service_id"}
    assert client.get(f"{BASE}/count").json()["count"] == 0


def test_create_schema_errors(client, booking_payload):
    payload = booking_payload()
    del payload["patient_name"]
    response = client.post(f"{BASE}/", json=payload)
    assert response.status_code == 400
    assert response.json()["message"].startswith("patient_name")

    response = client.post(f"{BASE}/", json=booking_payload(booking_date="tomorrow"))
    assert response.status_code == 400
    assert response.json()["message"].startswith("booking_date")


def test_create_rejects_non_object_body(client):
    response = client.post(f"{BASE}/", json=["not", "an", "object"])
    assert response.status_code == 400
    assert "message" in response.json()


# --- search / count -----------------------------------------------------

def test_search_without_filters_returns_nothing(client, create_booking):
    create_booking()
    create_booking()

    response = client.get(f"{BASE}/search")
    assert response.status_code == 200
    assert response.json() == []
    assert client.get(f"{BASE}/search", params={"service": "", "patient": ""}).json() == []


def test_search_is_case_insensitive_substring(client, create_booking):
    create_booking(patient_name="Jane Doe", service_name="Dental Cleaning")
    create_booking(patient_name="John Smith", service_name="X-Ray")

    by_patient = client.get(f"{BASE}/search", params={"patient": "DOE"}).json()
    assert [b["patient_name"] for b in by_patient] == ["Jane Doe"]

    by_service = client.get(f"{BASE}/search", params={"service": "ray"}).json()
    assert [b["service_name"] for b in by_service] == ["X-Ray"]


def test_search_folds_case_beyond_ascii(client, create_booking):
    create_booking(patient_name="Élodie Šťastná", service_name="Ortodoncie")
    create_booking(patient_name="Jane Doe", service_name="Ortodoncie")

    found = client.get(f"{BASE}/search", params={"patient": "élodie šťastná"}).json()
    assert [b["patient_name"] for b in found] == ["Élodie Šťastná"]

    found = client.get(f"{BASE}/search", params={"patient": "ŠŤAST", "service": "ORTODON"}).json()
    assert [b["patient_name"] for b in found] == ["Élodie Šťastná"]


def test_search_filters_are_combined(client, create_booking):
    create_booking(patient_name="Jane Doe", service_name="Dental Cleaning")
    create_booking(patient_name="Jane Roe", service_name="X-Ray")

    both = client.get(f"{BASE}/search", params={"patient": "jane", "service": "x-ray"}).json()
    assert [b["patient_name"] for b in both] == ["Jane Roe"]

    none = client.get(f"{BASE}/search", params={"patient": "doe", "service": "x-ray"}).json()
    assert none == []


def test_search_treats_wildcards_literally(client, create_booking):
    create_booking(patient_name="Jane Doe")
    assert client.get(f"{BASE}/search", params={"patient": "%"}).json() == []
    assert client.get(f"{BASE}/search", params={"patient": "_"}).json() == []


def test_count_empty(client):
    response = client.get(f"{BASE}/count")
    assert response.status_code == 200
    assert response.json() == {"count": 0}


# --- get / update / delete ----------------------------------------------

def test_get_missing_and_malformed(client):
    response = client.get(f"{BASE}/{new_object_id()}")
    assert response.status_code == 404
    assert response.json() == {"message": "Booking Not Found!"}

    response = client.get(f"{BASE}/not-an-object-id")
    assert response.status_code == 400
    assert response.json() == {"message": "Invalid ID."}


def test_update_overwrites_given_fields_only(client, create_booking):
    booking = create_booking()

    response = client.put(f"{BASE}/{booking['id']}", json={"status": "confirmed", "remarks": None})
    assert response.status_code == 201
    data = response.json()
    assert data["status"] == "confirmed"
    assert data["remarks"] is None
    assert data["patient_name"] == booking["patient_name"]
    assert data["booking_id"] == booking["booking_id"]
    assert data["updated"] >= booking["updated"]


def test_update_does_not_recheck_references(client, create_booking):
    booking = create_booking()
    orphan = new_object_id()
    response = client.put(f"{BASE}/{booking['id']}", json={"service_id": orphan})
    assert response.status_code == 201
    assert response.json()["service_id"] == orphan


def test_update_cannot_change_identifiers(client, create_booking):
    booking = create_booking()
    data = client.put(f"{BASE}/{booking['id']}", json={"id": new_object_id(), "booking_id": "x"}).json()
    assert data["id"] == booking["id"]
    assert data["booking_id"] == booking["booking_id"]


def test_update_failures_share_one_message(client, create_booking):
    booking = create_booking()
    failures = [
        client.put(f"{BASE}/{new_object_id()}", json={"status": "confirmed"}),
        client.put(f"{BASE}/{booking['id']}", json={"booking_date": "someday"}),
        client.put(f"{BASE}/{booking['id']}", json={"patient_name": None}),
    ]
    for response in failures:
        assert response.status_code == 400
        assert response.json() == {"message": "Booking Update Failed"}

    assert client.get(f"{BASE}/{booking['id']}").json()["patient_name"] == "Jane Doe"


def test_update_malformed_id(client):
    response = client.put(f"{BASE}/xyz", json={"status": "confirmed"})
    assert response.status_code == 400
    assert response.json() == {"message": "Invalid ID."}


def test_delete_then_fetch_returns_404(client, create_booking):
    booking = create_booking()

    response = client.delete(f"{BASE}/{booking['id']}")
    assert response.status_code == 201
    assert response.content == b""

    assert client.get(f"{BASE}/{booking['id']}").status_code == 404

    response = client.delete(f"{BASE}/{booking['id']}")
    assert response.status_code == 400
    assert response.json() == {"message": "Deletion Failed"}


def test_delete_malformed_id(client):
    response = client.delete(f"{BASE}/123")
    assert response.status_code == 400
    assert response.json() == {"message": "Invalid ID."}


# --- ambient behaviour --------------------------------------------------

def test_unexpected_failure_returns_500(client):
    with patch(
        "clinic_api.app.services.booking_service.BookingService.count_bookings",
        new_callable=AsyncMock,
    ) as mock_count:
        mock_count.side_effect = RuntimeError("database is locked")
        response = client.get(f"{BASE}/count")

    assert response.status_code == 500
    assert response.json() == {"message": "Internal Server Error!"}


def test_each_request_logs_outcome(client, caplog):
    caplog.set_level(logging.INFO, logger="clinic_api.requests")

    client.get(f"{BASE}/count")
    client.get(f"{BASE}/{new_object_id()}")
    client.get(f"{BASE}/bad-id")

    lines = [r.getMessage() for r in caplog.records if r.name == "clinic_api.requests"]
    assert "[GET] /api/v1/bookings/count - 200" in lines
    assert any(line.endswith(" - 404") for line in lines)
    assert "[GET] /api/v1/bookings/bad-id - 400" in lines


def test_unknown_route_uses_message_envelope(client):
    response = client.get("/api/v1/nowhere")
    assert response.status_code == 404
    assert "message" in response.json()

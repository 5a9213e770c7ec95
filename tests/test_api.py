from decimal import Decimal

from sqlalchemy.orm import Session


def money(value) -> Decimal:
    """Read an amount from a JSON body, whether encoded as string or number."""
    return Decimal(str(value))


# ============================================================================
# HELPERS
# ============================================================================


def create_colony(client, headers, name="Green Park") -> dict:
    response = client.post("/api/v1/colonies", json={"name": name}, headers=headers)
    assert response.status_code == 201
    return response.json()


def generate(client, headers, colony_id, count=2, prefix="R", start_from=1) -> list[dict]:
    response = client.post(
        f"/api/v1/colonies/{colony_id}/rooms/generate",
        json={"count": count, "prefix": prefix, "start_from": start_from},
        headers=headers,
    )
    assert response.status_code == 201
    return response.json()


def allot(client, headers, room_ids, company="Acme", rent="3000", start="2024-01-15"):
    return client.post(
        "/api/v1/rentals/bulk-allot",
        json={
            "room_ids": room_ids,
            "company_name": company,
            "monthly_rent": rent,
            "contract_start_date": start,
        },
        headers=headers,
    )


# ============================================================================
# TESTS
# ============================================================================


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_requests_without_user_are_rejected(client, db: Session):
    response = client.get("/api/v1/colonies")
    assert response.status_code == 401


def test_colony_crud(client, db: Session, auth_headers: dict):
    colony = create_colony(client, auth_headers)

    response = client.put(
        f"/api/v1/colonies/{colony['id']}",
        json={"address": "Plot 4"},
        headers=auth_headers,
    )
    assert response.status_code == 200
    assert response.json()["name"] == "Green Park"
    assert response.json()["address"] == "Plot 4"

    response = client.get("/api/v1/colonies", headers=auth_headers)
    assert [c["id"] for c in response.json()] == [colony["id"]]

    response = client.get(
        f"/api/v1/colonies/{colony['id']}", headers={"X-User-Id": "someone-else"}
    )
    assert response.status_code == 404
    assert response.json()["code"] == "NOT_FOUND"

    response = client.delete(f"/api/v1/colonies/{colony['id']}", headers=auth_headers)
    assert response.status_code == 204
    assert client.get("/api/v1/colonies", headers=auth_headers).json() == []


def test_rental_lifecycle(client, db: Session, auth_headers: dict):
    colony = create_colony(client, auth_headers)
    rooms = generate(client, auth_headers, colony["id"])
    assert [room["room_number"] for room in rooms] == ["R1", "R2"]

    response = allot(client, auth_headers, [room["id"] for room in rooms])
    assert response.status_code == 201
    rentals = response.json()
    assert [money(r["first_month_rent"]) for r in rentals] == [Decimal("1645.16")] * 2

    r1_rental = rentals[0]
    response = client.post(
        f"/api/v1/rentals/{r1_rental['id']}/payments",
        json={"amount": "1645.16"},
        headers=auth_headers,
    )
    assert response.status_code == 200
    assert money(response.json()["paid_amount"]) == Decimal("1645.16")

    response = client.get(
        f"/api/v1/colonies/{colony['id']}/dashboard",
        params={"as_of": "2024-01-20"},
        headers=auth_headers,
    )
    stats = response.json()
    assert stats["total_rooms"] == 2
    assert stats["rented_rooms"] == 2
    assert stats["free_rooms"] == 0
    assert money(stats["total_expected"]) == Decimal("3290.32")
    assert money(stats["total_pending"]) == Decimal("1645.16")

    response = client.get(
        f"/api/v1/colonies/{colony['id']}/rooms", headers=auth_headers
    )
    listed = response.json()
    assert [room["status"] for room in listed] == ["Rented", "Rented"]
    assert listed[0]["rental"]["company_name"] == "Acme"

    response = client.post(
        f"/api/v1/rentals/{r1_rental['id']}/end",
        json={"as_of": "2024-03-10"},
        headers=auth_headers,
    )
    assert response.status_code == 200
    record = response.json()
    assert money(record["total_paid"]) == Decimal("1645.16")
    assert money(record["total_expected"]) == Decimal("7645.16")
    assert record["duration_text"] == "1 month 25 days"

    response = client.post(
        f"/api/v1/rentals/{r1_rental['id']}/end",
        json={"as_of": "2024-03-11"},
        headers=auth_headers,
    )
    assert response.status_code == 409
    assert response.json()["code"] == "CONFLICT"

    response = client.get(
        f"/api/v1/colonies/{colony['id']}/history", headers=auth_headers
    )
    assert [h["room_number"] for h in response.json()] == ["R1"]

    response = client.get(
        f"/api/v1/colonies/{colony['id']}/companies/history",
        params={"as_of": "2024-03-10"},
        headers=auth_headers,
    )
    (acme,) = response.json()
    assert acme["is_active"] is True
    assert acme["total_rooms_ever"] == 2
    assert len(acme["current_rooms"]) == 1
    assert len(acme["history_records"]) == 1


def test_company_payment_endpoint(client, db: Session, auth_headers: dict):
    colony = create_colony(client, auth_headers)
    r1, r2 = generate(client, auth_headers, colony["id"])
    allot(client, auth_headers, [r1["id"]], rent="1000", start="2024-01-01")
    allot(client, auth_headers, [r2["id"]], rent="3000", start="2024-01-01")

    response = client.post(
        f"/api/v1/colonies/{colony['id']}/companies/payments",
        json={"company_name": "Acme", "amount": "400"},
        headers=auth_headers,
    )

    assert response.status_code == 200
    paid = sorted(money(r["paid_amount"]) for r in response.json())
    assert paid == [Decimal("100"), Decimal("300")]

    response = client.get(
        f"/api/v1/colonies/{colony['id']}/companies",
        params={"as_of": "2024-01-31"},
        headers=auth_headers,
    )
    (summary,) = response.json()
    assert summary["rooms_count"] == 2
    assert money(summary["total_paid"]) == Decimal("400")
    assert money(summary["total_pending"]) == Decimal("3600")


def test_company_payment_unknown_company(client, db: Session, auth_headers: dict):
    colony = create_colony(client, auth_headers)

    response = client.post(
        f"/api/v1/colonies/{colony['id']}/companies/payments",
        json={"company_name": "Nobody", "amount": "400"},
        headers=auth_headers,
    )

    assert response.status_code == 404
    assert response.json()["code"] == "NOT_FOUND"


def test_bulk_allot_rented_room_is_bad_request(client, db: Session, auth_headers: dict):
    colony = create_colony(client, auth_headers)
    r1, r2 = generate(client, auth_headers, colony["id"])
    allot(client, auth_headers, [r1["id"]])

    response = allot(client, auth_headers, [r1["id"], r2["id"]], company="Beta")

    assert response.status_code == 400
    assert response.json()["code"] == "VALIDATION_ERROR"
    listed = client.get(f"/api/v1/colonies/{colony['id']}/rooms", headers=auth_headers)
    assert [room["status"] for room in listed.json()] == ["Rented", "Free"]


def test_delete_rented_room_conflicts(client, db: Session, auth_headers: dict):
    colony = create_colony(client, auth_headers)
    (room,) = generate(client, auth_headers, colony["id"], count=1)
    allot(client, auth_headers, [room["id"]])

    response = client.delete(f"/api/v1/rooms/{room['id']}", headers=auth_headers)

    assert response.status_code == 409
    assert response.json()["code"] == "CONFLICT"


def test_portfolio_dashboard_spans_colonies(client, db: Session, auth_headers: dict):
    first = create_colony(client, auth_headers, "First")
    second = create_colony(client, auth_headers, "Second")
    (room,) = generate(client, auth_headers, first["id"], count=1)
    generate(client, auth_headers, second["id"], count=2, prefix="B")
    allot(client, auth_headers, [room["id"]], rent="1000", start="2024-01-01")

    response = client.get(
        "/api/v1/dashboard", params={"as_of": "2024-02-15"}, headers=auth_headers
    )

    stats = response.json()
    assert stats["total_rooms"] == 3
    assert stats["rented_rooms"] == 1
    assert money(stats["total_expected"]) == Decimal("2000")


def test_end_rental_by_room(client, db: Session, auth_headers: dict):
    colony = create_colony(client, auth_headers)
    rooms = generate(client, auth_headers, colony["id"])
    assert allot(client, auth_headers, [rooms[0]["id"]]).status_code == 201

    response = client.post(
        f"/api/v1/rooms/{rooms[0]['id']}/end",
        json={"as_of": "2024-01-31"},
        headers=auth_headers,
    )
    assert response.status_code == 200
    assert response.json()["room_number"] == "R1"
    assert money(response.json()["total_expected"]) == Decimal("1645.16")

    response = client.post(
        f"/api/v1/rooms/{rooms[0]['id']}/end",
        json={"as_of": "2024-02-01"},
        headers=auth_headers,
    )
    assert response.status_code == 409
    assert response.json()["code"] == "CONFLICT"


def test_sub_cent_payment_is_bad_request(client, db: Session, auth_headers: dict):
    colony = create_colony(client, auth_headers)
    rooms = generate(client, auth_headers, colony["id"], count=1)
    (rental,) = allot(client, auth_headers, [rooms[0]["id"]]).json()

    response = client.post(
        f"/api/v1/rentals/{rental['id']}/payments",
        json={"amount": "0.004"},
        headers=auth_headers,
    )
    assert response.status_code == 400
    assert response.json()["code"] == "VALIDATION_ERROR"


# ============================================================================
# OWNERSHIP
# ============================================================================


def test_other_user_cannot_change_rooms_or_rentals(client, db: Session, auth_headers: dict):
    other = {"X-User-Id": "someone-else"}
    colony = create_colony(client, auth_headers)
    r1, r2 = generate(client, auth_headers, colony["id"])
    (rental,) = allot(client, auth_headers, [r1["id"]]).json()

    # A room in another user's colony is as unknown as a missing one
    response = allot(client, other, [r2["id"]], company="Intruder")
    assert response.status_code == 400
    assert response.json()["code"] == "VALIDATION_ERROR"

    response = client.delete(f"/api/v1/rooms/{r2['id']}", headers=other)
    assert response.status_code == 404
    assert response.json()["code"] == "NOT_FOUND"

    response = client.post(
        f"/api/v1/rentals/{rental['id']}/payments", json={"amount": "100"}, headers=other
    )
    assert response.status_code == 404

    response = client.post(
        f"/api/v1/rentals/{rental['id']}/end", json={"as_of": "2024-02-01"}, headers=other
    )
    assert response.status_code == 404

    response = client.post(
        f"/api/v1/rooms/{r1['id']}/end", json={"as_of": "2024-02-01"}, headers=other
    )
    assert response.status_code == 404

    response = client.post(
        f"/api/v1/colonies/{colony['id']}/companies/payments",
        json={"company_name": "Acme", "amount": "100"},
        headers=other,
    )
    assert response.status_code == 404

    listed = client.get(
        f"/api/v1/colonies/{colony['id']}/rooms", headers=auth_headers
    ).json()
    assert [room["status"] for room in listed] == ["Rented", "Free"]
    assert money(listed[0]["rental"]["paid_amount"]) == Decimal("0")


def test_other_user_cannot_learn_a_rental_was_closed(
    client, db: Session, auth_headers: dict
):
    colony = create_colony(client, auth_headers)
    rooms = generate(client, auth_headers, colony["id"], count=1)
    (rental,) = allot(client, auth_headers, [rooms[0]["id"]]).json()
    response = client.post(
        f"/api/v1/rentals/{rental['id']}/end",
        json={"as_of": "2024-02-01"},
        headers=auth_headers,
    )
    assert response.status_code == 200

    response = client.post(
        f"/api/v1/rentals/{rental['id']}/end",
        json={"as_of": "2024-02-02"},
        headers={"X-User-Id": "someone-else"},
    )
    assert response.status_code == 404

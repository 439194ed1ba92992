from tests.utils import create_catalog


def buy(client, session_id, quantity, **extra):
    return client.post("/purchases", json={
        "sessionId": session_id,
        "userEmail": "cliente@email.com",
        "quantity": quantity,
        **extra,
    })


def create_half_price(client, headers) -> str:
    response = client.post("/ticket-types", headers=headers, json={
        "name": "Meia-entrada",
        "description": "Estudantes e idosos pagam metade",
        "discountPercentage": 50,
        "requiresProof": True,
    })
    assert response.status_code == 201
    return response.json()["id"]


def test_purchase_with_ticket_type(client, admin_headers):
    catalog = create_catalog(client, admin_headers, price=24.90)
    ticket_type_id = create_half_price(client, admin_headers)

    response = buy(client, catalog["session_id"], 2, ticketTypeId=ticket_type_id, userCpf="123.456.789-00")

    assert response.status_code == 201
    body = response.json()
    assert body["totalPrice"] == 24.9
    assert body["quantity"] == 2
    assert body["sessionId"] == catalog["session_id"]
    assert body["userCpf"] == "123.456.789-00"
    assert body["ticketType"] == {"id": ticket_type_id, "name": "Meia-entrada", "discountPercentage": 50}
    assert body["purchaseDate"]


def test_purchase_without_ticket_type_uses_base_price(client, admin_headers):
    catalog = create_catalog(client, admin_headers, price=35.90)

    response = buy(client, catalog["session_id"], 3)

    assert response.status_code == 201
    assert response.json()["totalPrice"] == 107.7
    assert response.json()["ticketType"] is None


def test_purchases_reduce_available_seats(client, admin_headers):
    catalog = create_catalog(client, admin_headers)

    buy(client, catalog["session_id"], 10)
    buy(client, catalog["session_id"], 4)

    detail = client.get(f"/sessions/{catalog['session_id']}").json()
    assert detail["availableSeats"] == 36


def test_sold_out_session_rejects_with_remaining_count(client, admin_headers):
    catalog = create_catalog(client, admin_headers)
    for _ in range(5):
        assert buy(client, catalog["session_id"], 10).status_code == 201

    response = buy(client, catalog["session_id"], 1)

    assert response.status_code == 400
    assert response.json() == {"message": "Not enough available seats. Only 0 left."}


def test_partial_overflow_reports_what_is_left(client, admin_headers):
    catalog = create_catalog(client, admin_headers)
    for quantity in (10, 10, 10, 10, 7):
        buy(client, catalog["session_id"], quantity)

    response = buy(client, catalog["session_id"], 4)

    assert response.status_code == 400
    assert response.json() == {"message": "Not enough available seats. Only 3 left."}
    assert client.get(f"/sessions/{catalog['session_id']}/availability").json()["availableSeats"] == 3


def test_quantity_above_limit_is_a_validation_error(client, admin_headers):
    catalog = create_catalog(client, admin_headers)

    response = buy(client, catalog["session_id"], 11)

    assert response.status_code == 400
    assert response.json()["message"] == "Validation error"


def test_zero_quantity_is_a_validation_error(client, admin_headers):
    catalog = create_catalog(client, admin_headers)

    assert buy(client, catalog["session_id"], 0).status_code == 400


def test_invalid_email_is_a_validation_error(client, admin_headers):
    catalog = create_catalog(client, admin_headers)

    response = client.post("/purchases", json={
        "sessionId": catalog["session_id"],
        "userEmail": "not-an-email",
        "quantity": 1,
    })

    assert response.status_code == 400


def test_unknown_session_is_not_found(client):
    response = buy(client, "00000000-0000-0000-0000-000000000000", 2)

    assert response.status_code == 404
    assert response.json() == {"message": "Session not found"}


def test_unknown_ticket_type_is_not_found(client, admin_headers):
    catalog = create_catalog(client, admin_headers)

    response = buy(client, catalog["session_id"], 2, ticketTypeId="00000000-0000-0000-0000-000000000000")

    assert response.status_code == 404
    assert response.json() == {"message": "Ticket type not found"}
    assert client.get(f"/sessions/{catalog['session_id']}").json()["availableSeats"] == 50


def test_purchase_detail_embeds_session_movie_and_cinema(client, admin_headers):
    catalog = create_catalog(client, admin_headers)
    purchase = buy(client, catalog["session_id"], 2).json()

    response = client.get(f"/purchases/{purchase['id']}")

    assert response.status_code == 200
    body = response.json()
    assert body["id"] == purchase["id"]
    assert body["session"]["id"] == catalog["session_id"]
    assert body["session"]["movie"]["title"] == "Interstellar"
    assert body["session"]["cinema"]["id"] == catalog["cinema_id"]


def test_unknown_purchase_is_not_found(client):
    response = client.get("/purchases/00000000-0000-0000-0000-000000000000")

    assert response.status_code == 404
    assert response.json() == {"message": "Purchase not found"}


def test_admin_lists_purchases_by_session(client, admin_headers):
    catalog = create_catalog(client, admin_headers)
    buy(client, catalog["session_id"], 1)
    buy(client, catalog["session_id"], 2)

    response = client.get("/purchases", headers=admin_headers, params={"sessionId": catalog["session_id"]})

    assert response.status_code == 200
    assert sorted(purchase["quantity"] for purchase in response.json()) == [1, 2]
    assert client.get("/purchases").status_code == 401


def test_session_with_purchases_cannot_be_deleted(client, admin_headers):
    catalog = create_catalog(client, admin_headers)
    buy(client, catalog["session_id"], 1)

    response = client.delete(f"/sessions/{catalog['session_id']}", headers=admin_headers)

    assert response.status_code == 409
    assert client.get(f"/sessions/{catalog['session_id']}").status_code == 200


def test_ticket_type_with_purchases_cannot_be_deleted(client, admin_headers):
    catalog = create_catalog(client, admin_headers)
    ticket_type_id = create_half_price(client, admin_headers)
    buy(client, catalog["session_id"], 1, ticketTypeId=ticket_type_id)

    response = client.delete(f"/ticket-types/{ticket_type_id}", headers=admin_headers)

    assert response.status_code == 409


def test_availability_endpoint_follows_purchases(client, admin_headers):
    catalog = create_catalog(client, admin_headers)
    buy(client, catalog["session_id"], 9)

    response = client.get(f"/sessions/{catalog['session_id']}/availability")

    assert response.status_code == 200
    assert response.json() == {
        "sessionId": catalog["session_id"],
        "capacity": 50,
        "availableSeats": 41,
    }

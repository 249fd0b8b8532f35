import pytest
from fastapi.testclient import TestClient

import api as api_module


def test_get_books(client):
    response = client.get("/books")
    assert response.status_code == 200
    books = response.json()
    assert [b["id"] for b in books] == ["1", "2", "3"]
    assert books[0] == {"id": "1", "title": "Book 1", "author": "Author 1", "quantity": 2}


def test_responses_are_indented(client):
    response = client.get("/books/1")
    assert response.headers["content-type"].startswith("application/json")
    assert '\n    "id": "1"' in response.text


def test_get_book_by_id(client):
    response = client.get("/books/2")
    assert response.status_code == 200
    assert response.json()["title"] == "Book 2"


def test_get_book_not_found(client):
    response = client.get("/books/9")
    assert response.status_code == 404
    assert response.json() == {"error": "Book not found"}


def test_create_book(client):
    payload = {"id": "4", "title": "Dune", "author": "Frank Herbert", "quantity": 3}
    response = client.post("/books", json=payload)
    assert response.status_code == 201
    assert response.json() == payload

    assert client.get("/books/4").json() == payload
    assert len(client.get("/books").json()) == 4


def test_create_book_missing_fields_take_zero_values(client):
    response = client.post("/books", json={"id": "5"})
    assert response.status_code == 201
    assert response.json() == {"id": "5", "title": "", "author": "", "quantity": 0}


def test_create_book_null_fields_take_zero_values(client):
    response = client.post("/books", json={"id": "8", "title": None, "author": None, "quantity": None})
    assert response.status_code == 201
    assert response.json() == {"id": "8", "title": "", "author": "", "quantity": 0}


def test_create_book_negative_quantity_accepted(client):
    response = client.post("/books", json={"id": "6", "title": "T", "author": "A", "quantity": -1})
    assert response.status_code == 201
    assert response.json()["quantity"] == -1


def test_create_duplicate_id_keeps_first_on_lookup(client):
    client.post("/books", json={"id": "1", "title": "Shadow", "author": "X", "quantity": 1})
    assert len(client.get("/books").json()) == 4
    assert client.get("/books/1").json()["title"] == "Book 1"


@pytest.mark.parametrize("body", [
    "not json",
    "[1, 2, 3]",
    '{"id": "7", "quantity": "many"}',
    '{"id": 7, "title": "T"}',
    '{"id": "7", "title": "T", "author": "A", "quantity": "5"}',
    '{"id": "7", "title": "T", "author": "A", "quantity": 2.0}',
    '{"id": "7", "title": "T", "author": "A", "quantity": true}',
])
def test_create_book_malformed_body(client, body):
    response = client.post("/books", content=body, headers={"Content-Type": "application/json"})
    assert response.status_code == 400
    assert response.json() == {"error": "Invalid book data"}
    assert len(client.get("/books").json()) == 3


def test_checkout_book(client):
    response = client.patch("/checkout", params={"id": "2"})
    assert response.status_code == 200
    assert response.json()["quantity"] == 4


def test_checkout_until_out_of_stock(client):
    assert client.patch("/checkout", params={"id": "1"}).json()["quantity"] == 1
    assert client.patch("/checkout", params={"id": "1"}).json()["quantity"] == 0
    response = client.patch("/checkout", params={"id": "1"})
    assert response.status_code == 400
    assert response.json() == {"error": "Book out of stock"}
    assert client.get("/books/1").json()["quantity"] == 0


def test_checkout_missing_id(client):
    response = client.patch("/checkout")
    assert response.status_code == 400
    assert response.json() == {"error": "Missing id"}


def test_checkout_empty_id(client):
    response = client.patch("/checkout?id=")
    assert response.status_code == 400
    assert response.json() == {"error": "Missing id"}


def test_checkout_not_found(client):
    response = client.patch("/checkout", params={"id": "9"})
    assert response.status_code == 404
    assert response.json() == {"error": "Book not found"}


def test_return_book(client):
    response = client.patch("/return", params={"id": "2"})
    assert response.status_code == 200
    assert response.json()["quantity"] == 6


def test_return_missing_id(client):
    response = client.patch("/return")
    assert response.status_code == 400
    assert response.json() == {"error": "Missing id"}


def test_return_not_found(client):
    response = client.patch("/return", params={"id": "9"})
    assert response.status_code == 404
    assert response.json() == {"error": "Book not found"}


def test_checkout_and_return_do_not_change_list_length(client):
    client.patch("/checkout", params={"id": "3"})
    client.patch("/return", params={"id": "3"})
    assert len(client.get("/books").json()) == 3


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "books": 3}


def test_inventory_is_fresh_per_app_run(client):
    client.patch("/checkout", params={"id": "1"})
    with TestClient(api_module.app) as other:
        assert other.get("/books/1").json()["quantity"] == 2


def test_seeding_can_be_disabled(monkeypatch):
    monkeypatch.setattr(api_module.settings, "seed_books", False)
    with TestClient(api_module.app) as test_client:
        assert test_client.get("/books").json() == []


def test_unknown_route_uses_error_shape(client):
    response = client.get("/nowhere")
    assert response.status_code == 404
    assert response.json() == {"error": "Not Found"}


def test_wrong_method_uses_error_shape(client):
    response = client.delete("/books")
    assert response.status_code == 405
    assert response.json() == {"error": "Method Not Allowed"}
    assert "GET" in response.headers["allow"]

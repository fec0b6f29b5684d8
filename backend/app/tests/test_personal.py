"""
Tests for personal categories and expenses.
"""
from decimal import Decimal


def setup_user(client):
    response = client.post(
        "/api/users",
        json={"username": "alice", "display_name": "Alice", "email": "alice@example.com"}
    )
    return response.json()["id"]


def add_category(client, user_id, name):
    response = client.post(f"/api/users/{user_id}/categories", json={"name": name, "color": "#ff0000"})
    assert response.status_code == 201
    return response.json()["id"]


def add_expense(client, user_id, category_id, amount, day):
    response = client.post(
        f"/api/users/{user_id}/personal-expenses",
        json={"category_id": category_id, "amount": amount, "date": day}
    )
    assert response.status_code == 201
    return response.json()["id"]


def test_category_names_are_unique(client):
    user_id = setup_user(client)
    add_category(client, user_id, "Food")

    response = client.post(f"/api/users/{user_id}/categories", json={"name": "food"})
    assert response.status_code == 400


def test_expense_needs_own_category(client):
    user_id = setup_user(client)

    response = client.post(
        f"/api/users/{user_id}/personal-expenses",
        json={"category_id": 123, "amount": "5"}
    )
    assert response.status_code == 404


def test_summary_by_category(client):
    user_id = setup_user(client)
    food = add_category(client, user_id, "Food")
    transport = add_category(client, user_id, "Transport")
    add_expense(client, user_id, food, "30", "2024-03-01")
    add_expense(client, user_id, food, "45", "2024-03-02")
    add_expense(client, user_id, transport, "25", "2024-03-03")

    response = client.get(f"/api/users/{user_id}/personal-expenses/summary")
    assert response.status_code == 200
    data = response.json()
    assert Decimal(data["total_amount"]) == Decimal(100)
    assert [(c["category"], c["expense_count"], c["percentage"]) for c in data["categories"]] == [
        ("Food", 2, 75.0),
        ("Transport", 1, 25.0),
    ]


def test_list_with_date_range(client):
    user_id = setup_user(client)
    food = add_category(client, user_id, "Food")
    add_expense(client, user_id, food, "10", "2024-01-10")
    add_expense(client, user_id, food, "20", "2024-02-10")

    response = client.get(
        f"/api/users/{user_id}/personal-expenses",
        params={"start_date": "2024-02-01", "end_date": "2024-02-28"}
    )
    assert [Decimal(e["amount"]) for e in response.json()] == [Decimal(20)]


def test_delete_category_removes_its_expenses(client):
    user_id = setup_user(client)
    food = add_category(client, user_id, "Food")
    add_expense(client, user_id, food, "10", "2024-01-10")

    assert client.delete(f"/api/users/{user_id}/categories/{food}").status_code == 204
    assert client.get(f"/api/users/{user_id}/personal-expenses").json() == []


def test_delete_personal_expense(client):
    user_id = setup_user(client)
    food = add_category(client, user_id, "Food")
    expense_id = add_expense(client, user_id, food, "10", "2024-01-10")

    assert client.delete(f"/api/users/{user_id}/personal-expenses/{expense_id}").status_code == 204
    assert client.delete(f"/api/users/{user_id}/personal-expenses/{expense_id}").status_code == 404


def test_update_category(client):
    user_id = setup_user(client)
    food = add_category(client, user_id, "Food")

    response = client.patch(f"/api/users/{user_id}/categories/{food}", json={"name": "Groceries"})
    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "Groceries"
    # Fields not sent are kept
    assert data["color"] == "#ff0000"

    response = client.patch(f"/api/users/{user_id}/categories/{food}", json={"name": "groceries", "icon": "cart"})
    assert response.status_code == 200
    assert response.json()["icon"] == "cart"


def test_update_category_name_clash(client):
    user_id = setup_user(client)
    food = add_category(client, user_id, "Food")
    add_category(client, user_id, "Transport")

    response = client.patch(f"/api/users/{user_id}/categories/{food}", json={"name": "transport"})
    assert response.status_code == 400
    names = [c["name"] for c in client.get(f"/api/users/{user_id}/categories").json()]
    assert names == ["Food", "Transport"]


def test_update_unknown_category(client):
    user_id = setup_user(client)

    response = client.patch(f"/api/users/{user_id}/categories/321", json={"name": "Food"})
    assert response.status_code == 404

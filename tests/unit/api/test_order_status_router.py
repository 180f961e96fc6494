"""Tests for GET /order-statuses."""

import pytest

from src.broker_api.core.exceptions import DatabaseError, UnmetExpectationsError

EXPECTED_STATUSES = [
    "Processing",
    "Confirmed",
    "Payment",
    "Out for Delivery",
    "Successful",
    "Cancellation",
    "Returned",
]


def test_get_order_statuses(client, mock_db):
    mock_db.expect_query(r"SELECT \* FROM sp_get_order_status\(\)").will_return_rows(
        ["order_id", "order_status"],
        *[(index, name) for index, name in enumerate(EXPECTED_STATUSES, start=1)],
    )

    response = client.get("/order-statuses")

    assert response.status_code == 200
    result = response.json()
    assert len(result) == 7
    assert [row["order_status"] for row in result] == EXPECTED_STATUSES
    assert [row["order_id"] for row in result] == [1, 2, 3, 4, 5, 6, 7]
    mock_db.assert_expectations_met()


def test_database_order_is_preserved(client, mock_db):
    mock_db.expect_query(r"sp_get_order_status").will_return_rows(
        ["order_id", "order_status"],
        (5, "Successful"),
        (1, "Processing"),
        (3, "Payment"),
    )

    response = client.get("/order-statuses")

    assert [row["order_id"] for row in response.json()] == [5, 1, 3]


def test_database_failure(client, mock_db):
    mock_db.expect_query(r"sp_get_order_status").will_return_error(DatabaseError("down"))

    response = client.get("/order-statuses")

    assert response.status_code == 500
    assert response.json() == {"error": "Failed to fetch order statuses"}
    mock_db.assert_expectations_met()


def test_missing_call_fails_expectations(client, mock_db):
    mock_db.expect_query(r"sp_get_order_status")

    with pytest.raises(UnmetExpectationsError, match="never met"):
        mock_db.assert_expectations_met()


def test_null_status_name_is_a_fetch_failure(client, mock_db):
    mock_db.expect_query(r"sp_get_order_status").will_return_rows(
        ["order_id", "order_status"],
        (1, "Processing"),
        (2, None),
    )

    response = client.get("/order-statuses")

    assert response.status_code == 500
    assert response.json() == {"error": "Failed to fetch order statuses"}
    mock_db.assert_expectations_met()

"""Pytest configuration for fieldprofile tests."""

import pytest

from fieldprofile import FieldProfiler


@pytest.fixture
def anyio_backend():
    """Configure anyio to only use asyncio backend, not trio."""
    return "asyncio"


@pytest.fixture
def orders_rows():
    """A small orders dataset with categorical, numeric, date and id fields."""
    statuses = ["shipped", "shipped", "pending", "cancelled", None, "shipped"]
    amounts = [10.5, 20, "30", None, 40.25, 15]
    dates = [
        "2024-01-01",
        "2024-01-02",
        "2024-01-03",
        "2024-01-13",
        "2024-01-14",
        "",
    ]
    return [
        {
            "order_id": f"ORD{i:03d}",
            "status": statuses[i],
            "amount": amounts[i],
            "order_date": dates[i],
        }
        for i in range(6)
    ]


@pytest.fixture
def orders_profiles(orders_rows):
    """Profiles of every field in the orders dataset."""
    return FieldProfiler().profile_fields(
        orders_rows, ["order_id", "status", "amount", "order_date"]
    )

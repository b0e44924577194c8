"""
Kernel test configuration.

Shared student / class fixtures. Kernel tests are pure and need no IO.
"""

from datetime import date

import pytest

from dataui.kernel.types import ColumnSpec


@pytest.fixture
def student_columns():
    return [
        ColumnSpec(key="id", label="ID", sortable=True, value_kind="number"),
        ColumnSpec(key="name", label="Name", sortable=True, filterable=True),
        ColumnSpec(key="level", label="Level", sortable=True, filterable=True),
        ColumnSpec(key="enrolled", label="Enrolled", sortable=True, value_kind="date"),
        ColumnSpec(key="status", label="Status", filterable=True, value_kind="status"),
    ]


@pytest.fixture
def students():
    return [
        {"id": 1, "name": "Alice Johnson", "level": "Beginner", "enrolled": date(2024, 1, 15), "status": "active"},
        {"id": 2, "name": "Bob Smith", "level": "Advanced", "enrolled": date(2023, 9, 1), "status": "inactive"},
        {"id": 3, "name": "Carla Jones", "level": "Intermediate", "enrolled": date(2024, 3, 2), "status": "active"},
        {"id": 4, "name": "Dan Brown", "level": "Beginner", "enrolled": None, "status": "active"},
        {"id": 5, "name": "Eve Adams", "level": "Advanced", "enrolled": date(2022, 11, 30), "status": "inactive"},
    ]


@pytest.fixture
def many_records():
    """25 records with ids 1..25."""
    return [{"id": i, "name": f"Student {i:02d}"} for i in range(1, 26)]

"""
Pytest configuration and shared fixtures.

This file adds the parent directory to the Python path so that tests
can import from the domain, services, repositories and api modules.
"""

import sys
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from pathlib import Path
from types import SimpleNamespace
from typing import Any, List, Optional
from uuid import UUID

import pytest

# Add the ranking-dashboard directory to the Python path
# so tests can import domain, repositories, etc.
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from domain.sale import SaleRecord  # noqa: E402

BASE_TIME = datetime(2025, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def make_sale():
    """Factory for SaleRecord values with sequential ids and timestamps."""

    counter = {"n": 0}

    def _make(
        first_name: str,
        last_name: str,
        amount: Any = Decimal("0"),
        handle: Optional[str] = None,
    ) -> SaleRecord:
        counter["n"] += 1
        n = counter["n"]
        return SaleRecord(
            sale_id=UUID(int=n),
            first_name=first_name,
            last_name=last_name,
            handle=handle,
            amount=amount,
            created_at=BASE_TIME + timedelta(minutes=n),
        )

    return _make


class FakeQuery:
    """
    Minimal stand-in for the supabase-py query builder.

    Records every chained call and returns the configured rows on execute().
    """

    def __init__(self, client: "FakeSupabase", table: str) -> None:
        self.client = client
        self.table_name = table
        self.calls: List[tuple] = []

    def _chain(name):  # noqa: N805
        def method(self, *args, **kwargs):
            self.calls.append((name, args, kwargs))
            return self
        return method

    select = _chain("select")
    insert = _chain("insert")
    update = _chain("update")
    upsert = _chain("upsert")
    delete = _chain("delete")
    eq = _chain("eq")
    neq = _chain("neq")
    limit = _chain("limit")

    def execute(self) -> SimpleNamespace:
        self.client.executed.append(self)
        return SimpleNamespace(data=self.client.rows, error=self.client.error)


class FakeSupabase:
    def __init__(self) -> None:
        self.rows: List[dict] = []
        self.error: Optional[str] = None
        self.executed: List[FakeQuery] = []

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self, name)

    @property
    def last(self) -> FakeQuery:
        return self.executed[-1]


@pytest.fixture
def fake_supabase() -> FakeSupabase:
    return FakeSupabase()

"""Pytest fixtures for testing"""

import pytest
from datetime import date, datetime
from decimal import Decimal
from fastapi.testclient import TestClient
from dominion_gateway.api.main import create_app
from dominion_gateway.api.dependencies import get_keyword_store, get_today
from dominion_gateway.domain.models import Category, Expense, LedgerSnapshot, Obligation, Payment
from dominion_gateway.infrastructure.keyword_store import InMemoryKeywordStore

# Fixed evaluation date used across the suite
TODAY = date(2026, 10, 18)


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def keyword_store() -> InMemoryKeywordStore:
    return InMemoryKeywordStore()


@pytest.fixture
def client(keyword_store: InMemoryKeywordStore) -> TestClient:
    """Create FastAPI test client pinned to TODAY with an isolated keyword store"""
    app = create_app()
    app.dependency_overrides[get_today] = lambda: TODAY
    app.dependency_overrides[get_keyword_store] = lambda: keyword_store
    return TestClient(app)


@pytest.fixture
def rent() -> Obligation:
    return Obligation(
        id="rent",
        name="Rent",
        amount=Decimal("8000"),
        is_uncompromised=True,
        is_active=True,
        debit_order_date=1,
        category=Category.HOUSING,
    )


@pytest.fixture
def car_loan() -> Obligation:
    return Obligation(
        id="car",
        name="Car Loan",
        amount=Decimal("2500"),
        is_uncompromised=False,
        is_active=True,
        debit_order_date=25,
        category=Category.DEBT,
        interest_rate=Decimal("11"),
        total_balance=Decimal("45000"),
    )


@pytest.fixture
def levy() -> Obligation:
    return Obligation(
        id="levy",
        name="Body Corporate Levy",
        amount=Decimal("1850"),
        is_uncompromised=True,
        is_active=True,
        debit_order_date=1,
        category=Category.HOUSING,
    )


@pytest.fixture
def sample_ledger(rent: Obligation, car_loan: Obligation) -> LedgerSnapshot:
    """Salary of 20 000 with rent, a car loan and one dining expense this month"""
    return LedgerSnapshot(
        monthly_income=Decimal("20000"),
        payday=25,
        obligations=[rent, car_loan],
        payments=[
            Payment(
                obligation_id="rent",
                amount=Decimal("8000"),
                paid_at=datetime(2026, 10, 1, 8, 30),
                month="2026-10",
            )
        ],
        expenses=[
            Expense(amount=Decimal("1200"), category=Category.DINING, date=date(2026, 10, 9), name="Anniversary dinner"),
            # Last month, excluded from this month's cash flow
            Expense(amount=Decimal("700"), category=Category.SHOPPING, date=date(2026, 9, 20), name="Takealot"),
        ],
    )


@pytest.fixture
def ledger_payload() -> dict:
    """JSON form of sample_ledger for API tests"""
    return {
        "monthly_income": 20000,
        "payday": 25,
        "obligations": [
            {
                "id": "rent",
                "name": "Rent",
                "amount": 8000,
                "is_uncompromised": True,
                "is_active": True,
                "debit_order_date": 1,
                "category": "HOUSING",
            },
            {
                "id": "car",
                "name": "Car Loan",
                "amount": 2500,
                "is_uncompromised": False,
                "is_active": True,
                "debit_order_date": 25,
                "category": "DEBT",
                "interest_rate": 11,
                "total_balance": 45000,
            },
        ],
        "payments": [
            {"obligation_id": "rent", "amount": 8000, "paid_at": "2026-10-01T08:30:00", "month": "2026-10"},
        ],
        "expenses": [
            {"amount": 1200, "category": "DINING", "date": "2026-10-09", "name": "Anniversary dinner"},
            {"amount": 700, "category": "SHOPPING", "date": "2026-09-20", "name": "Takealot"},
        ],
    }

"""
Nigeria Tax Engine - Test Configuration

Pytest fixtures and configuration.
"""

from decimal import Decimal
from typing import AsyncGenerator, Dict, List

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from taxengine.config import settings
from taxengine.services.category_service import CategoryMatcher
from taxengine.services.tax_calculators import CGTCalculator, PITCalculator
from main import app


API = settings.api_prefix


@pytest_asyncio.fixture(scope="function")
async def client() -> AsyncGenerator[AsyncClient, None]:
    """Create a test client bound to the ASGI app."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


# ===========================================
# SERVICE FIXTURES
# ===========================================

@pytest.fixture
def pit_calculator() -> PITCalculator:
    """PIT calculator on the default Nigerian band table."""
    return PITCalculator()


@pytest.fixture
def cgt_calculator(pit_calculator: PITCalculator) -> CGTCalculator:
    return CGTCalculator(pit_calculator=pit_calculator)


@pytest.fixture
def matcher() -> CategoryMatcher:
    return CategoryMatcher()


# ===========================================
# DATA FIXTURES
# ===========================================

@pytest.fixture
def bank_statement() -> List[Dict]:
    """A small mixed batch of bank statement lines."""
    return [
        {"id": "t1", "description": "UBER TRIP LEKKI", "category_name": None, "amount": 4500},
        {"id": "t2", "description": "MTN airtime", "category_name": "Uncategorized Expense", "amount": 2000},
        {"id": "t3", "description": "Shell fuel station", "category_name": "Rent", "amount": 30000},
        {"id": "t4", "description": "Miscellaneous", "category_name": "", "amount": 1000},
    ]


@pytest.fixture
def salary_income() -> Decimal:
    """Annual gross income of ₦5,000,000."""
    return Decimal("5000000")

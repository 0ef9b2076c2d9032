# tests/conftest.py
"""
Shared Test Fixtures - Sample Exchange Lists

Exchange list payloads in the HNB fixed-width format and the snapshots
they parse to.
"""
from datetime import date
from decimal import Decimal

import pytest

from hnbrate.domain.models import ExchangeSnapshot, Rate


FULL_PAYLOAD = """
059240320172503201713
036AUD001       5,207988       5,223659       5,239330
124CAD001       5,119576       5,134981       5,150386
203CZK001       0,273458       0,274281       0,275104
208DKK001       0,993382       0,996371       0,999360
348HUF100       2,388187       2,395373       2,402559
392JPY100       6,161252       6,179791       6,198330
578NOK001       0,806093       0,808519       0,810945
752SEK001       0,775638       0,777972       0,780306
756CHF001       6,900694       6,921458       6,942222
826GBP001       8,539728       8,565424       8,591120
840USD001       6,839371       6,859951       6,880531
978EUR001       7,388573       7,410805       7,433037
985PLN001       1,730993       1,736202       1,741411
"""

USD_EUR_PAYLOAD = (
    "059240320172503201713\n"
    "840USD001       6,839371       6,859951       6,880531\n"
    "978EUR001       7,388573       7,410805       7,433037\n"
)

CHANGED_PAYLOAD = (
    "059240320172503201713\n"
    "840USD001       1,839371       2,859951       3,880531\n"
    "978EUR001       1,388573       2,410805       3,433037\n"
)


@pytest.fixture
def full_payload() -> str:
    return FULL_PAYLOAD


@pytest.fixture
def usd_eur_payload() -> str:
    return USD_EUR_PAYLOAD


@pytest.fixture
def changed_payload() -> str:
    return CHANGED_PAYLOAD


@pytest.fixture
def usd_eur_snapshot() -> ExchangeSnapshot:
    return ExchangeSnapshot(
        application_date=date(2017, 3, 25),
        rates={
            "USD": Rate(Decimal("6.839371"), Decimal("6.859951"), Decimal("6.880531")),
            "EUR": Rate(Decimal("7.388573"), Decimal("7.410805"), Decimal("7.433037")),
        },
    )

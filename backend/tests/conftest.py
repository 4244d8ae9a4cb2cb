import asyncio
import inspect
import pathlib
import sys
from datetime import date

import pytest

ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from basketwise import Basket, StockPosition  # noqa: E402


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers used in the suite."""

    config.addinivalue_line("markers", "asyncio: mark test as running in an asyncio event loop")


@pytest.hookimpl(tryfirst=True)
def pytest_pyfunc_call(pyfuncitem: pytest.Function) -> bool | None:
    """Execute async test functions without requiring pytest-asyncio."""

    test_function = pyfuncitem.obj
    if inspect.iscoroutinefunction(test_function):
        loop = asyncio.new_event_loop()
        try:
            asyncio.set_event_loop(loop)
            argnames = pyfuncitem._fixtureinfo.argnames
            kwargs = {name: pyfuncitem.funcargs[name] for name in argnames}
            loop.run_until_complete(test_function(**kwargs))
        finally:
            asyncio.set_event_loop(None)
            loop.close()
        return True
    return None


@pytest.fixture()
def mixed_basket() -> Basket:
    """One open position in profit and one position exited at a loss."""

    return Basket(
        id="b-1",
        name="Mixed",
        created_at="2023-01-01T09:15:00+05:30",
        stocks=(
            StockPosition(symbol="TCS", display_name="Tata Consultancy", quantity=10, buy_price=100, last_traded_price=120),
            StockPosition(
                symbol="INFY",
                quantity=1,
                buy_price=1000,
                last_traded_price=1200,
                sell_price=900,
                sell_date="2023-07-01",
            ),
        ),
    )


@pytest.fixture()
def as_of() -> date:
    return date(2024, 1, 1)

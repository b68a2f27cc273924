import asyncio
import inspect
import pathlib
import random
import sys
from datetime import date, datetime

import pytest

ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from app.services.tracker import SignOffTracker  # noqa: E402
from pnl_signoff.calendar import HolidayStore, get_last_working_days  # noqa: E402
from pnl_signoff.directory import UserDirectory  # noqa: E402
from pnl_signoff.repository import BookRepository  # noqa: E402
from pnl_signoff.seed import seed_books  # noqa: E402

# Friday; the window ends on Thursday 2 January 2025.
TODAY = date(2025, 1, 3)
NOW = datetime(2025, 1, 3, 9, 30)


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers used in the suite."""

    config.addinivalue_line("markers", "asyncio: mark test as running in an asyncio event loop")


@pytest.hookimpl(tryfirst=True)
def pytest_pyfunc_call(pyfuncitem: pytest.Function) -> bool | None:
    """Execute async test functions without requiring pytest-asyncio."""

    test_function = pyfuncitem.obj
    if inspect.iscoroutinefunction(test_function):
        funcargs = {name: pyfuncitem.funcargs[name] for name in pyfuncitem._fixtureinfo.argnames}
        loop = asyncio.new_event_loop()
        try:
            asyncio.set_event_loop(loop)
            loop.run_until_complete(test_function(**funcargs))
        finally:
            asyncio.set_event_loop(None)
            loop.close()
        return True
    return None


@pytest.fixture
def holidays(tmp_path: pathlib.Path) -> HolidayStore:
    return HolidayStore(tmp_path / "bank_holidays.json")


@pytest.fixture
def working_days(holidays: HolidayStore) -> list[str]:
    return get_last_working_days(5, holidays.load(), today=TODAY)


@pytest.fixture
def books(working_days: list[str]):
    return seed_books(working_days, random.Random(7))


@pytest.fixture
def tracker(holidays: HolidayStore) -> SignOffTracker:
    return SignOffTracker.seeded(
        holidays,
        window=5,
        seed=7,
        directory=UserDirectory(),
        today=lambda: TODAY,
        now=lambda: NOW,
    )


@pytest.fixture
def repository(books) -> BookRepository:
    return BookRepository(books)

"""
Pytest fixtures: a throwaway SQLite store, the booking service, a fake
browser that records every launch/close, and an HTTP client over the app.
"""

from contextlib import contextmanager

import pytest
from fastapi.testclient import TestClient

from booking_service import BookingService
from config import Settings
from database import BookingStore
from generate_invoice import InvoiceRenderer
from main import create_app


class FakePage:
    def __init__(self, browser):
        self.browser = browser
        self.content = None

    def set_content(self, html):
        if self.browser.fail_on == "set_content":
            raise RuntimeError("page load failed")
        self.content = html

    def screenshot(self, path, full_page=False):
        if self.browser.fail_on == "screenshot":
            raise RuntimeError("screenshot failed")
        self.browser.shots.append((path, full_page))
        with open(path, "wb") as fh:
            fh.write(b"\x89PNG\r\n\x1a\n")


class FakeBrowser:
    def __init__(self):
        self.fail_on = None
        self.launched = 0
        self.closed = 0
        self.shots = []
        self.pages = []

    def new_page(self):
        page = FakePage(self)
        self.pages.append(page)
        return page

    @contextmanager
    def launch(self, headless=True):
        if self.fail_on == "launch":
            raise RuntimeError("browser failed to start")
        self.launched += 1
        try:
            yield self
        finally:
            self.closed += 1


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        DATABASE_URL=f"sqlite:///{tmp_path / 'test.db'}",
        PUBLIC_DIR=str(tmp_path / "public"),
        PUBLIC_BASE_URL="http://testserver",
    )


@pytest.fixture
def store(settings):
    store = BookingStore(settings.DATABASE_URL)
    store.open()
    yield store
    store.close()


@pytest.fixture
def service(store) -> BookingService:
    return BookingService(store)


@pytest.fixture
def browser() -> FakeBrowser:
    return FakeBrowser()


@pytest.fixture
def renderer(settings, browser) -> InvoiceRenderer:
    return InvoiceRenderer(settings, launcher=browser.launch)


@pytest.fixture
def client(settings, browser):
    app = create_app(settings, launcher=browser.launch)
    with TestClient(app) as client:
        yield client


@pytest.fixture
def oneway_payload() -> dict:
    return {
        "email": "a@b.com",
        "contact": "9999999999",
        "from": "Delhi",
        "to": "Mumbai",
        "date": "01/01/2025",
        "passenger": 2,
        "tripType": "oneway",
    }


@pytest.fixture
def roundtrip_payload() -> dict:
    return {
        "email": "c@d.com",
        "contact": "8888888888",
        "from": "Pune",
        "to": "Goa",
        "startDate": "10/05/2025",
        "endDate": "15/05/2025",
        "passenger": 3,
        "tripType": "roundtrip",
    }


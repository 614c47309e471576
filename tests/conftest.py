from __future__ import annotations

import pytest

from digitalocean_api import DigitalOcean
from digitalocean_api.envelope import register_envelope, unregister_envelope

from .fakes import WIDGETS_URL, FakeTransport, Gadget, Widget, list_page


@pytest.fixture()
def widget_types():
    register_envelope(Widget, key="widget", list_key="widgets")
    register_envelope(Gadget, key="gadget")
    yield Widget, Gadget
    unregister_envelope(Widget)
    unregister_envelope(Gadget)


@pytest.fixture()
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture()
def connection(transport) -> DigitalOcean:
    return DigitalOcean.from_token("test-token", transport=transport)


@pytest.fixture()
def three_page_provider(transport) -> FakeTransport:
    """Widgets spread over pages of 2, 2 and 1 items."""

    page2 = f"{WIDGETS_URL}?page=2"
    page3 = f"{WIDGETS_URL}?page=3"
    transport.add("GET", WIDGETS_URL, 200, list_page([{"id": 1}, {"id": 2}], next_url=page2))
    transport.add("GET", page2, 200, list_page([{"id": 3}, {"id": 4}], next_url=page3))
    transport.add("GET", page3, 200, list_page([{"id": 5}]))
    return transport

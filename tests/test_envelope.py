from __future__ import annotations

from dataclasses import dataclass

import httpx
import pytest

from digitalocean_api.envelope import envelope, lookup, register_envelope, unregister_envelope, unwrap, unwrap_page
from digitalocean_api.errors import EnvelopeError, PaginationError

from .fakes import WIDGETS_URL, Gadget, Widget, list_page


@dataclass
class Thing:
    id: int

    @classmethod
    def from_payload(cls, payload):
        return cls(id=int(payload["id"]))


@pytest.fixture()
def thing_mapping():
    mapping = register_envelope(Thing, key="thing", list_key="things")
    yield mapping
    unregister_envelope(Thing)


def test_register_uses_from_payload_when_available(thing_mapping) -> None:
    assert lookup(Thing) is thing_mapping
    assert unwrap(thing_mapping, {"thing": {"id": "7"}}) == Thing(id=7)


def test_register_defaults_to_identity_parse(widget_types) -> None:
    assert unwrap(lookup(Widget), {"widget": {"id": 1}}) == {"id": 1}


def test_register_rejects_duplicates_and_empty_mappings(widget_types) -> None:
    with pytest.raises(ValueError):
        register_envelope(Widget, key="widget")

    class Keyless:
        pass

    with pytest.raises(ValueError):
        register_envelope(Keyless)


def test_envelope_decorator_registers_class() -> None:
    @envelope(key="sprocket", list_key="sprockets")
    class Sprocket:
        pass

    try:
        mapping = lookup(Sprocket)
        assert (mapping.key, mapping.list_key) == ("sprocket", "sprockets")
        assert mapping.singular and mapping.pageable
    finally:
        unregister_envelope(Sprocket)


def test_lookup_of_unregistered_type_raises() -> None:
    class Unknown:
        pass

    with pytest.raises(EnvelopeError):
        lookup(Unknown)


@pytest.mark.parametrize("payload", [None, [], {"other": {}}, {"thing": "not an object"}])
def test_unwrap_rejects_structural_mismatches(thing_mapping, payload) -> None:
    with pytest.raises(EnvelopeError):
        unwrap(thing_mapping, payload)


def test_unwrap_wraps_parse_failures(thing_mapping) -> None:
    with pytest.raises(EnvelopeError, match="Thing"):
        unwrap(thing_mapping, {"thing": {"name": "no id"}})


def test_unwrap_on_list_only_mapping_raises() -> None:
    class Plan:
        pass

    mapping = register_envelope(Plan, list_key="plans")
    try:
        with pytest.raises(EnvelopeError):
            unwrap(mapping, {"plan": {}})
    finally:
        unregister_envelope(Plan)


def test_unwrap_page_returns_values_links_and_meta(widget_types) -> None:
    payload = list_page([{"id": 1}, {"id": 2}], next_url=f"{WIDGETS_URL}?page=2", total=4)
    payload["links"]["pages"]["last"] = f"{WIDGETS_URL}?page=2"

    page = unwrap_page(lookup(Widget), payload)

    assert page.values == [{"id": 1}, {"id": 2}]
    assert page.next_url == httpx.URL(f"{WIDGETS_URL}?page=2")
    assert page.links.last == page.next_url
    assert page.links.prev is None
    assert page.meta.total == 4


def test_unwrap_page_without_pages_block_has_no_next(widget_types) -> None:
    page = unwrap_page(lookup(Widget), {"widgets": [], "links": {}, "meta": {"total": 0}})

    assert page.next_url is None


@pytest.mark.parametrize(
    "payload",
    [
        {"widgets": [], "meta": {"total": 0}},
        {"widgets": [], "links": {}},
        {"widgets": [], "links": {}, "meta": {"total": "0"}},
        {"widgets": {}, "links": {}, "meta": {"total": 0}},
        {"widgets": [1], "links": {}, "meta": {"total": 1}},
        {"gadgets": [], "links": {}, "meta": {"total": 0}},
    ],
)
def test_unwrap_page_rejects_structural_mismatches(widget_types, payload) -> None:
    with pytest.raises(EnvelopeError):
        unwrap_page(lookup(Widget), payload)


def test_unwrap_page_on_singular_only_mapping_raises(widget_types) -> None:
    with pytest.raises(EnvelopeError):
        unwrap_page(lookup(Gadget), list_page([], key="gadgets"))


def test_relative_cursor_raises_pagination_error(widget_types) -> None:
    with pytest.raises(PaginationError):
        unwrap_page(lookup(Widget), list_page([], next_url="?page=2"))

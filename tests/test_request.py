from __future__ import annotations

import pytest

from digitalocean_api import method as m
from digitalocean_api.errors import RequestError
from digitalocean_api.request import Request

from .fakes import WIDGETS_URL, Widget


def test_new_request_starts_with_empty_body_and_default_kind() -> None:
    request = Request.new(WIDGETS_URL, m.List, Widget)

    assert str(request.url) == WIDGETS_URL
    assert request.body is None
    assert isinstance(request.kind, m.List)
    assert request.kind.limit is None
    assert request.result is Widget


def test_relative_url_is_rejected() -> None:
    with pytest.raises(RequestError):
        Request.new("/v2/widgets", m.Get, Widget)


@pytest.mark.parametrize("kind", [m.Method, int, "Get"])
def test_unknown_kind_is_rejected(kind) -> None:
    with pytest.raises(RequestError):
        Request.new(WIDGETS_URL, kind, Widget)


def test_push_segments_percent_encodes_each_segment() -> None:
    request = Request.new(WIDGETS_URL, m.Get, Widget).push_segments("a b", "x/y", 7)

    assert str(request.url) == f"{WIDGETS_URL}/a%20b/x%2Fy/7"


def test_push_segments_keeps_existing_query() -> None:
    request = Request.new(f"{WIDGETS_URL}?per_page=200", m.Get, Widget).push_segments("records")

    assert request.url.path.endswith("/widgets/records")
    assert request.url.params["per_page"] == "200"


def test_append_query_and_set_url_chain() -> None:
    request = Request.new(WIDGETS_URL, m.List, Widget).append_query("region", "nyc3").append_query("per_page", 200)

    assert str(request.url) == f"{WIDGETS_URL}?region=nyc3&per_page=200"

    request.set_url("https://api.digitalocean.com/v2/gadgets")
    assert str(request.url) == "https://api.digitalocean.com/v2/gadgets"


def test_body_mut_creates_object_and_set_field_updates_it() -> None:
    request = Request.new(WIDGETS_URL, m.Create, Widget)

    request.body_mut()["name"] = "w"
    request.set_field("size", 3)

    assert request.body == {"name": "w", "size": 3}


def test_body_mut_rejects_non_object_body() -> None:
    request = Request.new(WIDGETS_URL, m.Create, Widget).set_body(["not", "an", "object"])

    with pytest.raises(RequestError):
        request.body_mut()


@pytest.mark.parametrize("kind", m.KINDS)
def test_transmute_preserves_url_and_body(kind) -> None:
    request = Request.new(WIDGETS_URL, m.Get, Widget).push_segments(1).set_body({"name": "w"})

    pivoted = request.transmute(kind, Widget)

    assert pivoted.url == request.url
    assert pivoted.body == {"name": "w"}
    assert type(pivoted.kind) is kind
    assert pivoted.result is Widget


def test_transmute_resets_list_limit() -> None:
    request = Request.new(WIDGETS_URL, m.List, Widget).limit(5)

    pivoted = request.transmute(m.List, Widget)

    assert pivoted.kind.limit is None


def test_transmute_uses_requested_builder() -> None:
    class WidgetRequest(Request):
        pass

    pivoted = Request.new(WIDGETS_URL, m.Get, Widget).transmute(m.List, Widget, builder=WidgetRequest)

    assert isinstance(pivoted, WidgetRequest)


def test_transmute_copies_body_instead_of_sharing_it() -> None:
    source = Request.new(WIDGETS_URL, m.Get, Widget).set_body({"name": "w", "tags": ["a"]})

    pivoted = source.transmute(m.Create, Widget)
    pivoted.set_field("name", "changed")
    pivoted.body_mut()["tags"].append("b")

    assert source.body == {"name": "w", "tags": ["a"]}
    assert pivoted.body == {"name": "changed", "tags": ["a", "b"]}


def test_transmute_returns_new_request_and_leaves_source_usable() -> None:
    source = Request.new(WIDGETS_URL, m.Get, Widget)

    pivoted = source.transmute(m.List, Widget).push_segments("children").limit(2)

    assert pivoted is not source
    assert str(source.url) == WIDGETS_URL
    assert isinstance(source.kind, m.Get)
    assert str(pivoted.url) == f"{WIDGETS_URL}/children"


def test_limit_sets_list_limit() -> None:
    assert Request.new(WIDGETS_URL, m.List, Widget).limit(3).kind.limit == 3
    assert Request.new(WIDGETS_URL, m.List, Widget).limit(None).kind.limit is None


def test_limit_can_only_be_set_once() -> None:
    request = Request.new(WIDGETS_URL, m.List, Widget).limit(3)

    with pytest.raises(RequestError, match="already set"):
        request.limit(5)
    assert request.kind.limit == 3
    assert request.transmute(m.List, Widget).limit(5).kind.limit == 5


@pytest.mark.parametrize("kind", [m.Get, m.Create, m.Update, m.Delete])
def test_limit_on_non_list_request_is_rejected(kind) -> None:
    with pytest.raises(RequestError):
        Request.new(WIDGETS_URL, kind, Widget).limit(3)


def test_negative_limit_is_rejected() -> None:
    with pytest.raises(RequestError):
        Request.new(WIDGETS_URL, m.List, Widget).limit(-1)
    with pytest.raises(RequestError):
        m.List(limit=-2)


def test_require_kind_names_allowed_kinds() -> None:
    request = Request.new(WIDGETS_URL, m.Delete)

    with pytest.raises(RequestError, match="Get, List"):
        request.require_kind(m.Get, m.List)


def test_kinds_map_to_http_verbs() -> None:
    assert [kind.verb for kind in m.KINDS] == ["GET", "POST", "GET", "PUT", "DELETE"]

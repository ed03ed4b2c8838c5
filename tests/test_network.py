import pytest
import responses
from responses import matchers

from merchlib import network
from merchlib.network import HTTPStatusError

URL = "https://api.example.com/endpoint"


def test_post_sends_body_with_default_json_type():
    with responses.RequestsMock() as rsps:
        rsps.add(responses.POST, URL, body="done", status=201)
        resp = network.post(URL, b'{"a":1}', {"X-Token": "token"})
        request = rsps.calls[0].request
    assert resp.status_code == 201
    assert resp.body == "done"
    assert request.body == b'{"a":1}'
    assert request.headers["Content-Type"] == "application/json"
    assert request.headers["X-Token"] == "token"


def test_post_keeps_explicit_content_type():
    with responses.RequestsMock() as rsps:
        rsps.add(responses.POST, URL, body="ok")
        network.post(URL, b"<x/>", {"Content-Type": "text/xml"})
        request = rsps.calls[0].request
    assert request.headers["Content-Type"] == "text/xml"


def test_put_uses_put_method():
    with responses.RequestsMock() as rsps:
        rsps.add(responses.PUT, URL, body="updated")
        resp = network.put(URL, b"{}", {})
        method = rsps.calls[0].request.method
    assert method == "PUT"
    assert resp.body == "updated"


def test_get_sends_query_params():
    with responses.RequestsMock() as rsps:
        rsps.add(
            responses.GET,
            URL,
            body="found",
            match=[matchers.query_param_matcher({"q": "1", "page": "2"})],
        )
        resp = network.get(URL, {"q": "1", "page": "2"}, {})
    assert resp.body == "found"
    assert resp.status_code == 200


def test_post_query_params_uses_post():
    with responses.RequestsMock() as rsps:
        rsps.add(
            responses.POST,
            URL,
            body="posted",
            match=[matchers.query_param_matcher({"id": "7"})],
        )
        resp = network.post_query_params(URL, {"id": "7"}, {})
    assert resp.body == "posted"


def test_get_json_returns_raw_bytes():
    with responses.RequestsMock() as rsps:
        rsps.add(responses.GET, URL, body=b'{"k":"v"}')
        data = network.get_json(URL, {}, {})
    assert data == b'{"k":"v"}'


def test_post_form_bytes_builds_reversed_unescaped_body():
    with responses.RequestsMock() as rsps:
        rsps.add(responses.POST, URL, body=b"reply")
        data = network.post_form_bytes(URL, {"a": "1", "b": "2"}, {"Content-Type": "text/plain"})
        request = rsps.calls[0].request
    assert data == b"reply"
    assert request.body == b"b=2&a=1"
    assert request.headers["Content-Type"] == "application/x-www-form-urlencoded"


def test_post_form_bytes_error_keeps_body():
    with responses.RequestsMock() as rsps:
        rsps.add(responses.POST, URL, body=b"boom", status=500)
        with pytest.raises(HTTPStatusError) as info:
            network.post_form_bytes(URL, {"a": "1"}, {})
    assert info.value.status_code == 500
    assert info.value.body == b"boom"
    assert "500" in str(info.value)


def test_post_form_decodes_json_object():
    with responses.RequestsMock() as rsps:
        rsps.add(responses.POST, URL, json={"ok": True, "name": "x"})
        result = network.post_form(URL, {"a": "1"}, {})
    assert result == {"ok": True, "name": "x"}


def test_post_form_raw_sends_data_as_given():
    with responses.RequestsMock() as rsps:
        rsps.add(responses.POST, URL, body=b"fine")
        data = network.post_form_raw(URL, b"x=1&y=2", {})
        request = rsps.calls[0].request
    assert data == b"fine"
    assert request.body == b"x=1&y=2"


def test_post_form_raw_error_has_no_body():
    with responses.RequestsMock() as rsps:
        rsps.add(responses.POST, URL, body=b"bad", status=404)
        with pytest.raises(HTTPStatusError) as info:
            network.post_form_raw(URL, b"x=1", {})
    assert info.value.status_code == 404
    assert info.value.body == b""


def test_post_form_xml_ignores_status():
    with responses.RequestsMock() as rsps:
        rsps.add(responses.POST, URL, body=b"<r/>", status=500)
        data = network.post_form_xml(URL, {"k": "v"}, {})
        request = rsps.calls[0].request
    assert data == b"<r/>"
    assert request.body == b"k=v"
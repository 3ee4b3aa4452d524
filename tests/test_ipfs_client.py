import asyncio
import builtins

import httpx
import pytest

from core.config import Settings
from core.ipfs_client import IpfsClient
from core.models import AddResult, EmptyBodyPolicy, PinResult, ResponseKind


# =============================================================================
# The generic adapter
# =============================================================================
def test_request_posts_to_base_plus_path(make_client):
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json={"ok": True})

    client = make_client(handler)
    data = asyncio.run(client.request("pin/add?arg=QmA", "POST", ResponseKind.STRUCTURED))

    assert data == {"ok": True}
    assert seen[0].method == "POST"
    assert str(seen[0].url) == "http://ipfs.test:5001/api/v0/pin/add?arg=QmA"


def test_request_raw_text_is_returned_verbatim(make_client):
    client = make_client(lambda request: httpx.Response(200, text="  line one\nline two\n"))
    assert asyncio.run(client.request("cat?arg=Qm", response_kind=ResponseKind.RAW_TEXT)) == "  line one\nline two\n"


def test_request_raw_text_never_parses_json(make_client):
    client = make_client(lambda request: httpx.Response(200, text='{"Hash": "Qm"}'))
    assert asyncio.run(client.request("cat?arg=Qm", response_kind=ResponseKind.RAW_TEXT)) == '{"Hash": "Qm"}'


def test_response_kind_does_not_depend_on_path(make_client):
    # "cat" inside the argument must not switch the decoding.
    client = make_client(lambda request: httpx.Response(200, json={"Pins": ["Qmcat"]}))
    data = asyncio.run(client.request("pin/add?arg=Qmcat", response_kind=ResponseKind.STRUCTURED))
    assert data == {"Pins": ["Qmcat"]}


@pytest.mark.parametrize("status", [400, 404, 500, 503])
def test_non_success_status_is_none(make_client, status):
    client = make_client(lambda request: httpx.Response(status, text="error"))
    assert asyncio.run(client.request("ls?arg=Qm")) is None
    assert asyncio.run(client.request("cat?arg=Qm", response_kind=ResponseKind.RAW_TEXT)) is None


def test_non_success_status_is_logged(make_client, caplog):
    client = make_client(lambda request: httpx.Response(500, text="boom"))
    with caplog.at_level("WARNING", logger="core.ipfs_client"):
        asyncio.run(client.request("ls?arg=Qm"))
    assert "HTTP 500" in caplog.text


def test_transport_failure_is_none(make_client, unreachable_handler):
    client = make_client(unreachable_handler)
    assert asyncio.run(client.request("ls?arg=Qm")) is None


def test_timeout_is_none(make_client):
    def handler(request):
        raise httpx.ReadTimeout("timed out", request=request)

    assert asyncio.run(make_client(handler).request("ls?arg=Qm")) is None


def test_invalid_json_is_none(make_client):
    client = make_client(lambda request: httpx.Response(200, text="not json"))
    assert asyncio.run(client.request("ls?arg=Qm")) is None


def test_from_settings_copies_settings():
    settings = Settings(api_base="http://node:5001/api/v0", empty_fetch_policy=EmptyBodyPolicy.CONTENT, timeout=3.0)
    client = IpfsClient.from_settings(settings)
    assert client.api_base == "http://node:5001/api/v0"
    assert client.empty_fetch_policy is EmptyBodyPolicy.CONTENT
    assert client.timeout == 3.0


# =============================================================================
# Upload
# =============================================================================
def test_add_file_sends_base_name_only(make_client, tmp_path):
    source = tmp_path / "a" / "b" / "report.txt"
    source.parent.mkdir(parents=True)
    source.write_text("quarterly numbers")
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json={"Name": "report.txt", "Hash": "QmReport", "Size": "25"})

    result = asyncio.run(make_client(handler).add_file(str(source)))

    assert result == AddResult(hash="QmReport", size="25", name="report.txt")
    request = seen[0]
    assert request.url.path == "/api/v0/add"
    assert request.headers["content-type"].startswith("multipart/form-data; boundary=")
    body = request.content
    assert b'name="file"; filename="report.txt"' in body
    assert str(source.parent).encode() not in body
    assert b"quarterly numbers" in body


def test_add_file_missing_source_is_none(make_client, tmp_path):
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(200, json={"Hash": "Qm", "Size": "1"})

    assert asyncio.run(make_client(handler).add_file(str(tmp_path / "nope.txt"))) is None
    assert calls == []


@pytest.mark.parametrize("succeed", [True, False])
def test_add_file_closes_handle(make_client, tmp_path, monkeypatch, succeed):
    source = tmp_path / "data.bin"
    source.write_bytes(b"\x00\x01")
    opened = []

    def tracking_open(*args, **kwargs):
        handle = builtins.open(*args, **kwargs)
        opened.append(handle)
        return handle

    monkeypatch.setattr("core.ipfs_client.open", tracking_open, raising=False)

    def handler(request):
        if succeed:
            return httpx.Response(200, json={"Hash": "Qm", "Size": "2"})
        return httpx.Response(500)

    asyncio.run(make_client(handler).add_file(str(source)))
    assert len(opened) == 1
    assert opened[0].closed


def test_add_file_wrong_shape_is_none(make_client, tmp_path):
    source = tmp_path / "x.txt"
    source.write_text("x")
    client = make_client(lambda request: httpx.Response(200, json={"Name": "x.txt"}))
    assert asyncio.run(client.add_file(str(source))) is None


# =============================================================================
# Fetch
# =============================================================================
def test_cat_file_encodes_cid_as_arg(make_client):
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, text="hello ipfs")

    assert asyncio.run(make_client(handler).cat_file("QmHello")) == "hello ipfs"
    assert seen[0].url.path == "/api/v0/cat"
    assert seen[0].url.params["arg"] == "QmHello"


@pytest.mark.parametrize("body", ["", "   \n\t"])
def test_cat_file_blank_body_is_missing_by_default(make_client, body):
    client = make_client(lambda request: httpx.Response(200, text=body))
    assert asyncio.run(client.cat_file("QmBlank")) is None


@pytest.mark.parametrize("body", ["", "   \n\t"])
def test_cat_file_blank_body_kept_with_content_policy(make_client, body):
    client = make_client(lambda request: httpx.Response(200, text=body), empty_fetch_policy=EmptyBodyPolicy.CONTENT)
    assert asyncio.run(client.cat_file("QmBlank")) == body


# =============================================================================
# Pin
# =============================================================================
def test_pin_file_twice_returns_same_pin_set(make_client):
    seen = []

    def handler(request):
        seen.append(request.url.params["arg"])
        return httpx.Response(200, json={"Pins": [request.url.params["arg"]]})

    client = make_client(handler)
    first = asyncio.run(client.pin_file("QmPinned"))
    second = asyncio.run(client.pin_file("QmPinned"))

    assert first == second == PinResult(pins=["QmPinned"], progress=None)
    assert seen == ["QmPinned", "QmPinned"]


# =============================================================================
# List
# =============================================================================
def test_list_folder_decodes_links(make_client):
    payload = {
        "Objects": [
            {
                "Hash": "QmDir",
                "Links": [
                    {"Hash": "QmA", "ModTime": "", "Mode": 0, "Name": "a.txt", "Size": 5, "Target": "", "Type": 2},
                ],
            }
        ]
    }
    result = asyncio.run(make_client(lambda request: httpx.Response(200, json=payload)).list_folder("QmDir"))
    assert [link.hash for link in result.links()] == ["QmA"]


def test_list_folder_without_objects_is_none(make_client):
    client = make_client(lambda request: httpx.Response(200, json={"Message": "odd"}))
    assert asyncio.run(client.list_folder("QmDir")) is None


# =============================================================================
# Remove
# =============================================================================
def test_remove_file_empty_success_body_is_a_value(make_client):
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, text="")

    assert asyncio.run(make_client(handler).remove_file("/docs/old.txt")) == ""
    assert seen[0].url.path == "/api/v0/files/rm"
    assert seen[0].url.params["arg"] == "/docs/old.txt"


def test_remove_file_failure_is_none(make_client, error_status_handler):
    assert asyncio.run(make_client(error_status_handler).remove_file("/docs/old.txt")) is None

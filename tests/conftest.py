import httpx
import pytest

from core.ipfs_client import IpfsClient

API_BASE = "http://ipfs.test:5001/api/v0"


@pytest.fixture
def make_client():
    """Build an IpfsClient whose node is a plain function of the request."""

    def _make(handler, **kwargs):
        return IpfsClient(api_base=API_BASE, transport=httpx.MockTransport(handler), **kwargs)

    return _make


@pytest.fixture
def error_status_handler():
    def handler(request):
        return httpx.Response(500, json={"Message": "merkledag: not found", "Code": 0, "Type": "error"})

    return handler


@pytest.fixture
def unreachable_handler():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    return handler

# =============================================================================
# core/ipfs_client.py  —  IPFS Node Request Adapter
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Talks to an IPFS (Kubo) node over its HTTP RPC API.  Everything funnels
#   through ONE generic method, IpfsClient.request(), which:
#     1. Sends exactly one HTTP request to <api_base>/<path_and_query>
#     2. Decodes the body the way the caller asked (JSON or raw text)
#     3. Turns every failure into None
#
# THE "NONE MEANS NO RESULT" CONTRACT:
#   Every call here returns either a value or None.  The caller never sees an
#   exception for:
#     - transport failures (DNS, refused connection, timeout)
#     - non-2xx status codes
#     - bodies that can't be decoded
#     - upload sources that can't be read
#   The cause is logged (stderr) and then dropped.  The tool layer only has to
#   ask "did I get something?" and pick a message.
#
# THE OPERATION BUILDERS:
#   add_file, cat_file, pin_file, list_folder and remove_file are thin
#   specializations of request(): each one looks up its row in
#   core.models.OPERATIONS, builds the query string, and decodes the result
#   into the matching dataclass.
#
# NO RETRIES, NO CACHE:
#   One call, one request.  If the node is down, the answer is None.
# =============================================================================

import logging
import os
from typing import Any, Mapping, Optional, Type, TypeVar
from urllib.parse import urlencode

import httpx

from core.config import IPFS_API_BASE, Settings
from core.models import (
    OPERATIONS,
    AddResult,
    EmptyBodyPolicy,
    ListResult,
    Operation,
    PinResult,
    ResponseKind,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


class IpfsClient:
    """Request adapter for one IPFS node.

    Holds only immutable settings; every request opens and closes its own
    httpx.AsyncClient, so concurrent tool calls never share state.

    Args:
        api_base: Node RPC base URL, e.g. "http://127.0.0.1:5001/api/v0".
        empty_fetch_policy: What cat_file() does with a blank body.
        timeout: Request timeout in seconds; None keeps the httpx default.
        transport: Optional httpx transport (tests pass httpx.MockTransport).
    """

    def __init__(
        self,
        api_base: str = IPFS_API_BASE,
        empty_fetch_policy: EmptyBodyPolicy = EmptyBodyPolicy.MISSING,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.api_base = api_base.rstrip("/")
        self.empty_fetch_policy = empty_fetch_policy
        self.timeout = timeout
        self.transport = transport

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> "IpfsClient":
        return cls(
            api_base=settings.api_base,
            empty_fetch_policy=settings.empty_fetch_policy,
            timeout=settings.timeout,
            transport=transport,
        )

    def _http_client(self) -> httpx.AsyncClient:
        kwargs: dict[str, Any] = {}
        if self.timeout is not None:
            kwargs["timeout"] = self.timeout
        if self.transport is not None:
            kwargs["transport"] = self.transport
        return httpx.AsyncClient(**kwargs)

    # =========================================================================
    # The generic adapter
    # =========================================================================
    async def request(
        self,
        path_and_query: str,
        method: str = "POST",
        response_kind: ResponseKind = ResponseKind.STRUCTURED,
        headers: Optional[Mapping[str, str]] = None,
        files: Optional[Mapping[str, Any]] = None,
    ) -> Optional[Any]:
        """Issue one request against the node and decode the response.

        Args:
            path_and_query: Path below api_base, query already encoded
                (e.g. "cat?arg=Qm...").
            method: HTTP verb.
            response_kind: STRUCTURED parses JSON, RAW_TEXT returns the body
                verbatim.
            headers: Extra request headers.
            files: httpx multipart files mapping (upload only).

        Returns:
            The decoded body, or None if anything went wrong.  A RAW_TEXT
            body of "" is a value, not None.
        """
        url = f"{self.api_base}/{path_and_query}"
        try:
            async with self._http_client() as client:
                response = await client.request(method, url, headers=headers, files=files)
        except (httpx.HTTPError, httpx.InvalidURL, OSError) as exc:
            # OSError covers an upload source that fails mid-stream.
            logger.warning("%s %s failed: %s: %s", method, path_and_query, type(exc).__name__, exc)
            return None

        if not response.is_success:
            logger.warning(
                "%s %s returned HTTP %s %s",
                method, path_and_query, response.status_code, response.reason_phrase,
            )
            return None

        if response_kind is ResponseKind.RAW_TEXT:
            return response.text
        if response_kind is ResponseKind.STRUCTURED:
            try:
                return response.json()
            except ValueError as exc:
                logger.warning("%s %s returned invalid JSON: %s", method, path_and_query, exc)
                return None
        raise ValueError(f"Unknown response kind: {response_kind!r}")

    async def _call(self, operation: Operation, files: Optional[Mapping[str, Any]] = None,
                    **query: str) -> Optional[Any]:
        path = operation.path
        if query:
            path = f"{path}?{urlencode(query)}"
        return await self.request(path, operation.method, operation.response_kind, files=files)

    # =========================================================================
    # Operation builders
    # =========================================================================
    async def add_file(self, file_path: str) -> Optional[AddResult]:
        """Upload a local file; the node sees only its base name."""
        operation = OPERATIONS["upload"]
        try:
            stream = open(file_path, "rb")
        except OSError as exc:
            logger.warning("Cannot open %s for upload: %s", file_path, exc)
            return None

        # The handle is released whether the request succeeds or not.
        with stream:
            data = await self._call(
                operation,
                files={"file": (os.path.basename(file_path), stream)},
            )
        return _decode(AddResult, data, operation)

    async def cat_file(self, cid: str) -> Optional[str]:
        """Fetch a file's contents as text."""
        text = await self._call(OPERATIONS["fetch"], arg=cid)
        if text is None:
            return None
        if self.empty_fetch_policy is EmptyBodyPolicy.MISSING and not text.strip():
            logger.info("cat %s returned a blank body; treating it as missing", cid)
            return None
        return text

    async def pin_file(self, cid: str) -> Optional[PinResult]:
        operation = OPERATIONS["pin"]
        return _decode(PinResult, await self._call(operation, arg=cid), operation)

    async def list_folder(self, cid: str) -> Optional[ListResult]:
        operation = OPERATIONS["list"]
        return _decode(ListResult, await self._call(operation, arg=cid), operation)

    async def remove_file(self, path: str) -> Optional[str]:
        """Remove an MFS path.  Kubo answers a successful rm with an empty body."""
        return await self._call(OPERATIONS["remove"], arg=path)


def _decode(model: Type[T], data: Optional[Any], operation: Operation) -> Optional[T]:
    """Map a JSON payload onto a model, or None if it has the wrong shape."""
    if data is None:
        return None
    try:
        return model.from_json(data)  # type: ignore[attr-defined]
    except (KeyError, TypeError, ValueError, AttributeError) as exc:
        logger.warning("Could not decode %s response: %s: %s", operation.name, type(exc).__name__, exc)
        return None

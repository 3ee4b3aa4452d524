# =============================================================================
# tools/mcp_server.py  —  FastMCP Tool Server (ALL tools in one place)
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Defines the five MCP tools the agent host can call.  Each tool is a thin
#   wrapper around one IpfsClient operation — it logs the call, awaits the
#   node, and turns the result (or its absence) into a text message.
#
# HOW IT WORKS (the flow):
#   1. The host decides it needs storage (e.g., "pin this CID")
#   2. It calls a tool by name via MCP (e.g., "pin-file")
#   3. FastMCP routes the call to the handler built in build_tool_table()
#   4. The handler calls core/ (IpfsClient), formats the result, returns it
#   5. The host receives one human-readable message
#
# TOOL NAMING:
#   upload-file, get-file, pin-file, list-folder, remove-file.  Hyphenated
#   names are what existing hosts already call; keep them stable.
#
# WIRING:
#   build_tool_table(client)  →  ToolTable (immutable, built once)
#   create_server(table)      →  FastMCP instance with every row registered
#   main.py does both and runs the server on stdio.
# =============================================================================

import logging
import sys
from typing import Annotated

from fastmcp import FastMCP
from pydantic import Field

# --- Import core logic ---
# The tools layer depends on core/ and nothing else.
from core.ipfs_client import IpfsClient
from tools.formatting import (
    format_fetch,
    format_list,
    format_pin,
    format_remove,
    format_upload,
)
from tools.registry import ToolSpec, ToolTable

SERVER_NAME = "mcp-ipfs-server"

# =============================================================================
# Logging Setup
# =============================================================================
# We log to STDERR because the MCP server talks to the host over STDOUT.
# Anything printed to stdout would corrupt the JSON-RPC stream.
#
# ANSI COLOR CODES:
#     - CYAN for incoming requests (tool name + parameters)
#     - GREEN for response messages
#     - YELLOW for intermediate status messages
# =============================================================================

_CYAN = "\033[36m"     # Requests (tool calls with params)
_GREEN = "\033[32m"    # Responses
_YELLOW = "\033[33m"   # Status/progress messages
_RESET = "\033[0m"     # Reset to default terminal color

_LOG_PREVIEW_CHARS = 200

logger = logging.getLogger("mcp")


def configure_logging(level: str = "INFO") -> None:
    """Send all log output to stderr; call once at process start."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [MCP] %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )


def _log_request(tool_name: str, **params) -> None:
    """Log an incoming tool call with its parameters in CYAN."""
    param_str = ", ".join(f"{k}={v!r}" for k, v in params.items())
    logger.info(f"{_CYAN}{tool_name} called with: {param_str}{_RESET}")


def _log_status(message: str) -> None:
    """Log an intermediate status message in YELLOW."""
    logger.info(f"{_YELLOW}  → {message}{_RESET}")


def _log_response(tool_name: str, message: str) -> str:
    """Log a preview of the tool response in GREEN, then return it."""
    preview = message if len(message) <= _LOG_PREVIEW_CHARS else message[:_LOG_PREVIEW_CHARS] + "…"
    logger.info(f"{_GREEN}  ← {tool_name} response: {preview!r}{_RESET}")
    return message


# =============================================================================
# Argument types
# =============================================================================
# The Field descriptions end up in each tool's input schema; the LLM reads
# them to decide WHAT to pass.
# =============================================================================
FilePathArg = Annotated[
    str,
    Field(description="Absolute path to the file (e.g., /path/to/file.txt)."),
]
CidArg = Annotated[
    str,
    Field(description="Content identifier (CID) of the file or directory on IPFS."),
]
MfsPathArg = Annotated[
    str,
    Field(description="Absolute path of the file to delete in the node's files API (e.g., /docs/report.txt)."),
]


# =============================================================================
# The tool table
# =============================================================================
def build_tool_table(client: IpfsClient) -> ToolTable:
    """Bind the five tool handlers to one IpfsClient.

    Returns:
        An immutable ToolTable in registration order.
    """

    async def upload_file(file_path: FilePathArg) -> str:
        _log_request("upload-file", file_path=file_path)
        result = await client.add_file(file_path)
        if result is not None:
            _log_status(f"Added as {result.hash}")
        return _log_response("upload-file", format_upload(result))

    async def get_file(cid: CidArg) -> str:
        _log_request("get-file", cid=cid)
        content = await client.cat_file(cid)
        if content is not None:
            _log_status(f"Got {len(content)} characters")
        return _log_response("get-file", format_fetch(content))

    async def pin_file(cid: CidArg) -> str:
        _log_request("pin-file", cid=cid)
        result = await client.pin_file(cid)
        if result is not None:
            _log_status(f"{len(result.pins)} pin(s) confirmed")
        return _log_response("pin-file", format_pin(result))

    async def list_folder(cid: CidArg) -> str:
        _log_request("list-folder", cid=cid)
        result = await client.list_folder(cid)
        if result is not None:
            _log_status(f"Found {len(result.links())} entries")
        return _log_response("list-folder", format_list(result))

    async def remove_file(file_path: MfsPathArg) -> str:
        _log_request("remove-file", file_path=file_path)
        body = await client.remove_file(file_path)
        return _log_response("remove-file", format_remove(body, file_path))

    return ToolTable((
        ToolSpec("upload-file", "Upload a file to IPFS and get its CID.", upload_file),
        ToolSpec("get-file", "Retrieve a file from IPFS using its CID.", get_file),
        ToolSpec("pin-file", "Pin a file in IPFS using its CID.", pin_file),
        ToolSpec("list-folder", "List contents of an IPFS directory.", list_folder),
        ToolSpec("remove-file", "Delete a file from the IPFS node's files API.", remove_file),
    ))


# =============================================================================
# Create the FastMCP server instance
# =============================================================================
# The name "mcp-ipfs-server" becomes the server identity in MCP.  The host
# connects and discovers the tools registered here.
# =============================================================================
def create_server(table: ToolTable, name: str = SERVER_NAME) -> FastMCP:
    """Create a FastMCP server exposing every tool in the table."""
    server = FastMCP(name)
    for spec in table:
        server.tool(name=spec.name, description=spec.description)(spec.handler)
    return server

# =============================================================================
# main.py  —  Entry Point for the IPFS MCP Server
# =============================================================================
#
# HOW TO RUN:
#   uv run python main.py          (or the installed `mcp-ipfs-server` script)
#
# WHAT HAPPENS:
#   1. Loads .env (IPFS_API_BASE, IPFS_EMPTY_FETCH_POLICY, ...)
#   2. Reads settings from the environment (core/config.py)
#   3. Sends logging to stderr
#   4. Builds the IpfsClient, the tool table, and the FastMCP server
#   5. Serves MCP over stdio until the host disconnects
# =============================================================================

import logging
import sys

from dotenv import load_dotenv

from core.config import load_settings
from core.ipfs_client import IpfsClient
from tools.mcp_server import build_tool_table, configure_logging, create_server


def main() -> None:
    """Start the MCP server on stdio."""
    # Load .env BEFORE reading settings so file values are visible.
    load_dotenv()

    try:
        settings = load_settings()
    except ValueError as exc:
        configure_logging()
        logging.getLogger("mcp").error(f"Invalid configuration: {exc}")
        sys.exit(1)

    configure_logging(settings.log_level)

    client = IpfsClient.from_settings(settings)
    table = build_tool_table(client)
    server = create_server(table)

    logging.getLogger("mcp").info(
        f"MCP server working on stdio (node: {settings.api_base}, tools: {', '.join(table.names())})"
    )
    server.run()


# =============================================================================
# Script entry point
# =============================================================================
if __name__ == "__main__":
    main()

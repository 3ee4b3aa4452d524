# =============================================================================
# tools/__init__.py
# =============================================================================
# This package contains the FastMCP tool wrappers.
#
# ARCHITECTURAL ROLE:
#   tools/ is the translation layer between the MCP host and core/.  It:
#     1. Binds each IpfsClient operation to a named tool (mcp_server.py)
#     2. Keeps the tool set in one immutable table (registry.py)
#     3. Turns results, or their absence, into text (formatting.py)
#
# WHAT TOOLS DO NOT DO:
#   - They do NOT build HTTP requests (that's core/ipfs_client.py)
#   - They do NOT retry or second-guess a failure; None means "say so"
# =============================================================================

# =============================================================================
# core/__init__.py
# =============================================================================
# This package contains the IPFS request adapter and its data models.
#
# ARCHITECTURAL RULE:
#   Nothing in this package imports FastMCP or any agent framework.  It needs
#   httpx to reach the node and nothing else, so it can be driven directly
#   from tests or a REPL.
# =============================================================================

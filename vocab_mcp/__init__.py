# =============================================================================
# vocab_mcp/__init__.py
# =============================================================================
# This package exposes the vocab/ pipelines as MCP tools via FastMCP.
#
#   schemas.py     — pydantic models for tool arguments
#   handlers.py    — arguments → pipeline → success/error envelope
#   mcp_server.py  — FastMCP server, tool registration, logging, entry point
#
# No vocabulary logic lives here; it only validates, wires and formats.
# =============================================================================

# =============================================================================
# vocab/__init__.py
# =============================================================================
# This package contains ALL vocabulary logic: data models, the Gemini client,
# prompt builders, the response parser and the two pipelines.
#
# ARCHITECTURAL RULE:
#   Nothing in this package imports FastMCP.  The tool layer (vocab_mcp/)
#   depends on this package, never the other way round, so every pipeline can
#   be driven from a plain Python call with a fake model client.
# =============================================================================

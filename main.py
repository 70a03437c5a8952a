# =============================================================================
# main.py  —  Entry Point for the Vocab MCP Server
# =============================================================================
#
# HOW TO RUN:
#   uv run python main.py
#
# WHAT HAPPENS:
#   1. Loads .env into the environment (GEMINI_API_KEY, model overrides, ...)
#   2. Reads Settings; exits with status 1 if GEMINI_API_KEY is missing
#   3. Builds the Gemini client and both pipelines
#   4. Serves expand_vocab and extract_vocab_from_text over stdio
#
# stdout carries the MCP protocol.  Logs go to stderr.
# =============================================================================

from dotenv import load_dotenv

# Load environment variables from .env BEFORE importing the server, so that
# DEBUG is already set when the server configures logging at import time.
load_dotenv()

from vocab_mcp.mcp_server import main  # noqa: E402


if __name__ == "__main__":
    main()

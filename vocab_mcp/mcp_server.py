# =============================================================================
# vocab_mcp/mcp_server.py  —  FastMCP Tool Server (both tools in one place)
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Defines the two MCP tools a host can call.  Each tool is a thin wrapper
#   around a handler in vocab_mcp/handlers.py, which in turn drives a
#   pipeline from vocab/.
#
# HOW IT WORKS (the flow):
#   1. The host calls a tool by name over stdio (e.g., "expand_vocab")
#   2. FastMCP routes the call to the decorated function below
#   3. The handler validates arguments and runs the pipeline
#   4. A success payload is returned as a dict; an error envelope is raised
#      as ToolError so the host sees it with isError set
#
# TOOLS:
#   expand_vocab             — definition, translation, examples, synonyms and
#                              IELTS topics for each lemma (one Gemini call
#                              per item, 500 ms apart)
#   extract_vocab_from_text  — level-appropriate vocabulary candidates from
#                              an article (one Gemini call)
#
# RUNNING THIS SERVER:
#   a) python main.py
#   b) vocab-mcp            (console script installed by pyproject.toml)
# =============================================================================

import json
import logging
import sys
from dataclasses import dataclass
from typing import Annotated, Any, Optional

from dotenv import load_dotenv
from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from pydantic import Field

from vocab.config import Settings, is_debug_enabled
from vocab.errors import ConfigurationError
from vocab.expansion import ExpansionPipeline
from vocab.extraction import DEFAULT_MAX_ITEMS, ExtractionPipeline
from vocab.llm import GeminiClient, ModelClient
from vocab_mcp import handlers, schemas

# =============================================================================
# Logging Setup
# =============================================================================
# STDOUT is the MCP transport, so every log line goes to STDERR.
#
# ANSI COLOR CODES:
#     - CYAN for incoming requests (tool name + parameters)
#     - GREEN for response JSON
#     - YELLOW for intermediate status/progress messages
# =============================================================================

_CYAN = "\033[36m"     # Requests (tool calls with params)
_GREEN = "\033[32m"    # Responses (JSON output)
_YELLOW = "\033[33m"   # Status/progress messages
_RED = "\033[31m"      # Error envelopes
_RESET = "\033[0m"     # Reset to default terminal color

logging.basicConfig(
    level=logging.DEBUG if is_debug_enabled() else logging.INFO,
    format="%(asctime)s [MCP] %(message)s",
    datefmt="%H:%M:%S",
    stream=sys.stderr,
)

logger = logging.getLogger(__name__)


def _log_request(tool_name: str, **params) -> None:
    """Log an incoming tool call with its parameters in CYAN."""
    param_str = ", ".join(f"{k}={v!r}" for k, v in params.items())
    logger.info(f"{_CYAN}{tool_name} called with: {param_str}{_RESET}")


def _log_status(message: str) -> None:
    """Log an intermediate status message in YELLOW."""
    logger.info(f"{_YELLOW}  → {message}{_RESET}")


def _log_response(tool_name: str, result: dict) -> dict:
    """Log the tool response as compact JSON in GREEN, then return it."""
    compact = json.dumps(result, separators=(",", ":"), ensure_ascii=False)
    logger.info(f"{_GREEN}  ← {tool_name} response: {compact}{_RESET}")
    return result


def _finish(tool_name: str, response: handlers.ToolResponse) -> dict:
    """Return a success payload, or raise the error envelope as a ToolError."""
    if response.is_error:
        logger.info(f"{_RED}  ← {tool_name} error: {response.payload.get('error')}{_RESET}")
        raise ToolError(json.dumps(response.payload, indent=2, ensure_ascii=False))
    return _log_response(tool_name, response.payload)


# =============================================================================
# Runtime: the process-wide model client and pipelines
# =============================================================================
# Built once, from Settings, by configure().  Everything in it is read-only,
# so concurrent tool calls may share it.
# =============================================================================
@dataclass(frozen=True)
class Runtime:
    settings: Settings
    expansion: ExpansionPipeline
    extraction: ExtractionPipeline


_runtime: Optional[Runtime] = None


def configure(settings: Settings, client: Optional[ModelClient] = None) -> Runtime:
    """Build the pipelines for ``settings`` and install them for the tools."""
    global _runtime
    model_client = client if client is not None else GeminiClient(settings.api_key)
    _runtime = Runtime(
        settings=settings,
        expansion=ExpansionPipeline.from_settings(model_client, settings),
        extraction=ExtractionPipeline.from_settings(model_client, settings),
    )
    logger.debug("Configured %r", settings)
    return _runtime


def get_runtime() -> Runtime:
    """The configured runtime, built from the environment on first use."""
    if _runtime is None:
        return configure(Settings.from_env())
    return _runtime


# =============================================================================
# Create the FastMCP server instance
# =============================================================================
mcp = FastMCP("vocab-mcp")


# =============================================================================
# TOOL 1: expand_vocab
# =============================================================================
# Parameters are typed Any with a None default so that FastMCP passes every
# value through; schemas.py validates them and builds the error envelope.
# The published constraints come from json_schema_extra.
# =============================================================================
@mcp.tool()
def expand_vocab(
    items: Annotated[
        Any,
        Field(
            description=(
                "Vocabulary items to expand (at least one). Each item is an object with "
                '"lemma" (required, base form), "pos" (optional part of speech), '
                '"level" (optional CEFR level: A1, A2, B1, B2, C1, C2) and '
                '"context" (optional sentence from the source text).'
            ),
            json_schema_extra=schemas.ITEMS_JSON_SCHEMA,
        ),
    ] = None,
) -> dict:
    """Expand vocabulary items into learning material using an LLM.

    For every item this generates an English definition, a Traditional
    Chinese translation, 2-3 IELTS-style example sentences, synonyms and
    1-3 IELTS topic labels from a fixed list.  Items are processed one at a
    time; an item that fails is reported in "errors" and does not stop the
    rest of the batch.

    Returns:
        A dict with:
          - items: expanded entries (lemma, definition_en, translation_zh,
            examples_en, synonyms, ielts_topics)
          - success: how many items were expanded
          - total: how many items were requested
          - errors: present only if some items failed, one message each
    """
    _log_request("expand_vocab", items=items)
    if isinstance(items, list):
        _log_status(f"Expanding {len(items)} vocab items...")

    response = handlers.expand_vocab(
        schemas.provided(items=items),
        lambda: get_runtime().expansion,
        on_progress=lambda current, total: _log_status(f"Progress: {current}/{total}"),
    )
    return _finish("expand_vocab", response)


# =============================================================================
# TOOL 2: extract_vocab_from_text
# =============================================================================
@mcp.tool()
def extract_vocab_from_text(
    text: Annotated[
        Any,
        Field(
            description="Article or passage to extract vocabulary from (required)",
            json_schema_extra=schemas.TEXT_JSON_SCHEMA,
        ),
    ] = None,
    level: Annotated[
        Any,
        Field(
            description="Target CEFR level (A1, A2, B1, B2, C1, C2); only this level is extracted (required)",
            json_schema_extra=schemas.LEVEL_JSON_SCHEMA,
        ),
    ] = None,
    max_items: Annotated[
        Any,
        Field(
            description="Maximum number of items to return (1-100, default 20)",
            json_schema_extra=schemas.MAX_ITEMS_JSON_SCHEMA,
        ),
    ] = DEFAULT_MAX_ITEMS,
) -> dict:
    """Extract English words and phrases at a given CEFR level from a text.

    Texts longer than 8000 characters are truncated before being sent to the
    model.  Proper nouns and abbreviations are excluded, multi-word
    expressions are included, and every lemma is returned in its base form
    together with the sentence it came from.

    Returns:
        A dict with:
          - items: candidates (lemma, plus pos, level and context when known)
          - total: number of candidates returned
          - source_length: character count of the original, untruncated text
    """
    text_length = len(text) if isinstance(text, str) else None
    _log_request("extract_vocab_from_text", text_length=text_length, level=level, max_items=max_items)

    response = handlers.extract_vocab_from_text(
        schemas.provided(text=text, level=level, max_items=max_items),
        lambda: get_runtime().extraction,
    )
    return _finish("extract_vocab_from_text", response)


# =============================================================================
# Server entry point
# =============================================================================
def main() -> None:
    """Load configuration, fail fast without a credential, serve over stdio."""
    load_dotenv()

    try:
        settings = Settings.from_env()
    except ConfigurationError as exc:
        logger.error(f"Error: {exc}")
        sys.exit(1)

    logging.getLogger().setLevel(logging.DEBUG if settings.debug else logging.INFO)
    configure(settings)

    logger.info("Vocab MCP Server running on stdio")
    mcp.run()


if __name__ == "__main__":
    main()

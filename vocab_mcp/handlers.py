# =============================================================================
# vocab_mcp/handlers.py  —  Tool handlers (arguments in, envelope out)
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Each handler is the whole life of one tool call, minus the protocol:
#
#     1. validate arguments        (ArgumentValidationError → error envelope)
#     2. obtain the pipeline       (only after validation succeeded)
#     3. run it                    (any failure → error envelope)
#     4. shape the success envelope
#
#   Handlers never raise.  The host always gets one of two shapes:
#
#     expand_vocab             {items, success, total, errors?}
#                              {error, success: 0, total: 0}     (is_error)
#     extract_vocab_from_text  {items, total, source_length}
#                              {error}                           (is_error)
# =============================================================================

import logging
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional

from vocab.errors import ArgumentValidationError, VocabError
from vocab.expansion import ExpansionPipeline, ProgressCallback
from vocab.extraction import ExtractionPipeline
from vocab_mcp.schemas import ExpandVocabArgs, ExtractVocabFromTextArgs, validate_arguments

logger = logging.getLogger(__name__)


@dataclass
class ToolResponse:
    """A JSON-ready payload, plus whether the host should see it as an error."""

    payload: dict
    is_error: bool = False


def _error_message(exc: Exception) -> str:
    return str(exc) or exc.__class__.__name__


def expand_vocab(
    arguments: Mapping[str, Any],
    get_pipeline: Callable[[], ExpansionPipeline],
    on_progress: Optional[ProgressCallback] = None,
) -> ToolResponse:
    try:
        args = validate_arguments(ExpandVocabArgs, arguments)
        items = args.to_items()
        outcome = get_pipeline().expand_batch(items, on_progress=on_progress)
    except VocabError as exc:
        return ToolResponse({"error": _error_message(exc), "success": 0, "total": 0}, is_error=True)
    except Exception as exc:
        logger.exception("expand_vocab failed unexpectedly")
        return ToolResponse({"error": _error_message(exc), "success": 0, "total": 0}, is_error=True)

    payload: dict = {
        "items": [result.to_dict() for result in outcome.results],
        "success": outcome.success,
        "total": outcome.total,
    }
    errors = outcome.error_messages()
    if errors:
        payload["errors"] = errors
    return ToolResponse(payload)


def extract_vocab_from_text(
    arguments: Mapping[str, Any],
    get_pipeline: Callable[[], ExtractionPipeline],
) -> ToolResponse:
    try:
        args = validate_arguments(ExtractVocabFromTextArgs, arguments)
        outcome = get_pipeline().extract(args.text, args.level, args.max_items)
    except ArgumentValidationError as exc:
        return ToolResponse({"error": _error_message(exc)}, is_error=True)
    except VocabError as exc:
        logger.warning("extract_vocab_from_text failed: %s", exc)
        return ToolResponse({"error": _error_message(exc)}, is_error=True)
    except Exception as exc:
        logger.exception("extract_vocab_from_text failed unexpectedly")
        return ToolResponse({"error": _error_message(exc)}, is_error=True)

    return ToolResponse(
        {
            "items": [item.to_dict() for item in outcome.items],
            "total": outcome.total,
            "source_length": outcome.source_length,
        }
    )

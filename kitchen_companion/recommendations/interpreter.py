from __future__ import annotations

import logging
import re

from pydantic import ValidationError

from ..reference.data_store import ReferenceSnapshot
from .models import MealPlan, RecipeReply, ReplyStatus, RequestType
from .outcomes import CompletionOutcome, DomainRefusal, MalformedOutput, Success

logger = logging.getLogger(__name__)

DEFAULT_REFUSAL_REASON = "The request could not be fulfilled with the given inputs."

_CODE_FENCE_RE = re.compile(r"^```[a-zA-Z0-9_-]*\s*(.*?)\s*```$", re.DOTALL)


def _strip_code_fence(text: str) -> str:
    """Unwrap a reply the model fenced as a Markdown code block."""
    stripped = text.strip()
    match = _CODE_FENCE_RE.match(stripped)
    return match.group(1) if match else stripped


def _summarise(exc: ValidationError) -> str:
    first = exc.errors()[0]
    location = ".".join(str(part) for part in first["loc"]) or "<root>"
    return f"{exc.error_count()} error(s), first at {location}: {first['msg']}"


def interpret(
    raw_text: str,
    request_type: RequestType,
    snapshot: ReferenceSnapshot | None = None,
) -> CompletionOutcome:
    """
    Classify the completion model's raw reply.

    Returns ``DomainRefusal`` when the reply says ``success: false``,
    ``Success`` when it says ``success: true`` and the payload passes strict
    validation (reference codes included when ``snapshot`` is given), and
    ``MalformedOutput`` for anything else.
    """
    text = _strip_code_fence(raw_text)

    try:
        status = ReplyStatus.model_validate_json(text, strict=True)
    except ValidationError as exc:
        detail = _summarise(exc)
        logger.warning("Completion is not a valid %s reply: %s", request_type.value, detail)
        return MalformedOutput(raw_text=raw_text, detail=detail)

    if not status.success:
        reason = (status.reason_for_fail or "").strip() or DEFAULT_REFUSAL_REASON
        return DomainRefusal(reason=reason)

    context = {"snapshot": snapshot}
    try:
        if request_type is RequestType.recipe:
            payload = RecipeReply.model_validate_json(text, strict=True, context=context).recipe
        else:
            # Envelope fields are ignored; the meal plan sits at the top level
            payload = MealPlan.model_validate_json(text, strict=True, context=context)
    except ValidationError as exc:
        detail = _summarise(exc)
        logger.warning("Successful %s reply failed validation: %s", request_type.value, detail)
        return MalformedOutput(raw_text=raw_text, detail=detail)

    return Success(payload=payload)

from __future__ import annotations

import logging

from ..contracts_models import (
    FillRequest,
    GeneratedAssetSet,
    ProductBrief,
    VariantRequest,
)
from .errors import MissingRequiredField
from .pipeline.llm_client import ChatCompletionsClient
from .pipeline.normalize import enforce_limits, truncate
from .pipeline.prompts import build_fill_prompt, build_variant_prompt

logger = logging.getLogger("ads-ai")


def _require_brief(brief: ProductBrief | None) -> ProductBrief:
    if brief is None or not brief.has_product_name():
        raise MissingRequiredField("productName")
    return brief


def run_fill(payload: FillRequest, client: ChatCompletionsClient) -> GeneratedAssetSet:
    brief = _require_brief(payload.brief)
    logger.info(
        "ai-fill product=%r country=%s language=%s",
        brief.product_name,
        brief.country,
        brief.language,
    )
    candidate = client.complete_json(build_fill_prompt(brief, payload.limits))
    return enforce_limits(candidate, payload.limits)


def run_variant(payload: VariantRequest, client: ChatCompletionsClient) -> str:
    brief = _require_brief(payload.brief)
    logger.info(
        "ai-variant product=%r kind=%s index=%s",
        brief.product_name,
        payload.kind,
        payload.index,
    )
    text = client.complete_text(
        build_variant_prompt(brief, payload.kind, payload.index, payload.limits)
    )
    return truncate(text, payload.limits.max_for_kind(payload.kind))

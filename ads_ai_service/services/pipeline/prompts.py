from __future__ import annotations

import json
from typing import Any, Optional

from ...contracts_models import LimitsConfig, ProductBrief, VariantKind


FILL_SYSTEM = "Always answer objectively and in line with the Google Ads 2025 policies."

VARIANT_SYSTEM = "Answer only with the requested text, without quotes."


def _literal(value: Any, missing: str = "n/a") -> str:
    if value is None or value == "":
        return missing
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _money(currency: Optional[str], amount: Any) -> str:
    if not currency:
        return _literal(amount)
    return f"{currency} {_literal(amount)}"


def _pricing_lines(brief: ProductBrief) -> list[str]:
    return [
        f"  - Price: {_money(brief.product_currency, brief.product_value)}",
        f"  - Monetary discount: {_money(brief.discount_currency, brief.monetary_discount)}",
        f"  - Percentage discount: {_literal(brief.percentage_discount)}%",
    ]


def build_fill_prompt(brief: ProductBrief, limits: Optional[LimitsConfig] = None) -> str:
    limits = limits or LimitsConfig()
    titles = limits.titles
    descriptions = limits.descriptions
    sitelinks = limits.sitelinks
    highlights = limits.highlights
    brief_json = json.dumps(brief.as_prompt_data(), ensure_ascii=False, indent=2)
    pricing = "\n".join(_pricing_lines(brief))
    return f"""
You are a copywriter specialized in Google Ads (2025), focused on localization by country and language and on compliance with the Google Ads 2025 policies.

GOAL:
Generate ad assets (titles, descriptions, sitelinks and highlights) for the product below, following the sales conventions of the given country and language. Creative, clear, persuasive texts aligned with the Google Ads style (no pushy claims).

GENERAL RULES (FOLLOW STRICTLY):
- Reply ONLY with a single VALID JSON object, no text before or after it.
- Output language: {_literal(brief.language)} (local variant of {_literal(brief.country)}).
- Adapt tone and vocabulary to the country and language.
- Compliance: Google Ads 2025 policies; avoid absolute or misleading promises; no emojis; at most one "!" per item.
- Google Ads style: benefit + value proposition + moderate call to action.
- Use price and discounts when it makes sense:
{pricing}
- Vary the texts among themselves and respect the character limits exactly.

LIMITS:
- titles: {titles.count} items, each <= {titles.max} characters.
- descriptions: {descriptions.count} items, each <= {descriptions.max} characters.
- sitelinks ({sitelinks.count} items): text <= {sitelinks.text}, desc1 <= {sitelinks.desc1}, desc2 <= {sitelinks.desc2}.
- highlights: {highlights.count} items, each <= {highlights.max} characters.

OUTPUT FORMAT (EXACT JSON):
{{
  "titles": string[{titles.count}],
  "descriptions": string[{descriptions.count}],
  "sitelinks": {{ "text": string, "desc1": string, "desc2": string }}[{sitelinks.count}],
  "highlights": string[{highlights.count}]
}}

PRODUCT DATA (INPUT):
{brief_json}
""".strip()


def build_variant_prompt(
    brief: ProductBrief,
    kind: VariantKind,
    index: Optional[int],
    limits: Optional[LimitsConfig] = None,
) -> str:
    limits = limits or LimitsConfig()
    limit = limits.max_for_kind(kind)
    pricing = (
        f"{_money(brief.product_currency, brief.product_value)}; "
        f"{_money(brief.discount_currency, brief.monetary_discount)} / "
        f"{_literal(brief.percentage_discount)}%"
    )
    return f"""
You are a Google Ads (2025) copywriter. Generate ONLY ONE variation for "{kind}" (index {_literal(index)}):
- Country: {_literal(brief.country)} | Language: {_literal(brief.language)}
- Limit: <= {limit} characters
- Style: benefit + value + moderate call to action; do not violate the Google Ads 2025 policies; no emojis; at most one "!"
- Consider price and discounts when it makes sense ({pricing})

Output: ONLY the final text (no quotes and no JSON).
Product: {brief.product_name}
""".strip()

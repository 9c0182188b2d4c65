from __future__ import annotations

import json
from typing import Any, Sequence

from ...contracts_models import (
    CandidateAssetSet,
    CandidateSitelink,
    GeneratedAssetSet,
    LimitsConfig,
    Sitelink,
)


def _utf8_safe(text: str) -> str:
    # lone surrogates (valid as JSON escapes) cannot be encoded in a response
    return text.encode("utf-8", "replace").decode("utf-8")


def _to_raw_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (dict, list, tuple)):
        try:
            return json.dumps(value, ensure_ascii=False, separators=(",", ":"), default=str)
        except (RecursionError, TypeError, ValueError):
            return ""
    return str(value)


def to_text(value: Any) -> str:
    return _utf8_safe(_to_raw_text(value))


def truncate(text: Any, max_chars: int) -> str:
    """Plain prefix cut: no word boundaries, no ellipsis."""
    value = to_text(text)
    if len(value) <= max_chars:
        return value
    return value[:max_chars]


def _fit(items: Sequence[Any], count: int, max_chars: int) -> list[str]:
    return [
        truncate(items[index] if index < len(items) else "", max_chars)
        for index in range(count)
    ]


def enforce_limits(candidate: Any, limits: LimitsConfig | None = None) -> GeneratedAssetSet:
    """Shape any provider payload into a complete, in-bounds asset set.

    Every group ends up with exactly its configured count: missing entries
    become empty strings (empty sitelinks) and extra entries are dropped.
    Never raises.
    """
    limits = limits or LimitsConfig()
    assets = CandidateAssetSet.from_payload(candidate)

    sitelink_limits = limits.sitelinks
    sitelinks: list[Sitelink] = []
    for index in range(sitelink_limits.count):
        item = assets.sitelinks[index] if index < len(assets.sitelinks) else CandidateSitelink()
        sitelinks.append(
            Sitelink(
                text=truncate(item.text, sitelink_limits.text),
                desc1=truncate(item.desc1, sitelink_limits.desc1),
                desc2=truncate(item.desc2, sitelink_limits.desc2),
            )
        )

    return GeneratedAssetSet(
        titles=_fit(assets.titles, limits.titles.count, limits.titles.max),
        descriptions=_fit(
            assets.descriptions, limits.descriptions.count, limits.descriptions.max
        ),
        sitelinks=sitelinks,
        highlights=_fit(assets.highlights, limits.highlights.count, limits.highlights.max),
    )

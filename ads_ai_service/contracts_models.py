from __future__ import annotations

from typing import Any, List, Literal, Optional, Union

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)

VariantKind = Literal[
    "title",
    "description",
    "sitelink_text",
    "sitelink_desc1",
    "sitelink_desc2",
    "highlight",
]
# price/discount values are opaque tokens, only substituted into prompts
Amount = Union[int, float, str]


class ProductBrief(BaseModel):
    model_config = ConfigDict(validate_by_name=True, extra="allow")

    product_name: Optional[str] = Field(default=None, alias="productName")
    country: Optional[str] = None
    language: Optional[str] = None
    product_value: Optional[Amount] = Field(default=None, alias="productValue")
    product_currency: Optional[str] = Field(default=None, alias="productCurrency")
    monetary_discount: Optional[Amount] = Field(default=None, alias="monetaryDiscount")
    discount_currency: Optional[str] = Field(default=None, alias="discountCurrency")
    percentage_discount: Optional[Amount] = Field(default=None, alias="percentageDiscount")

    def has_product_name(self) -> bool:
        return bool(self.product_name and self.product_name.strip())

    def as_prompt_data(self) -> dict[str, Any]:
        """The brief as the caller sent it, extra keys included."""
        return self.model_dump(by_alias=True, exclude_unset=True)


class _NullsAreDefaults(BaseModel):
    model_config = ConfigDict(extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data


class TitleLimits(_NullsAreDefaults):
    count: int = Field(default=15, ge=0)
    max: int = Field(default=30, ge=0)


class DescriptionLimits(_NullsAreDefaults):
    count: int = Field(default=4, ge=0)
    max: int = Field(default=90, ge=0)


class SitelinkLimits(_NullsAreDefaults):
    count: int = Field(default=4, ge=0)
    text: int = Field(default=25, ge=0)
    desc1: int = Field(default=35, ge=0)
    desc2: int = Field(default=35, ge=0)


class HighlightLimits(_NullsAreDefaults):
    count: int = Field(default=8, ge=0)
    max: int = Field(default=25, ge=0)


class LimitsConfig(_NullsAreDefaults):
    titles: TitleLimits = Field(default_factory=TitleLimits)
    descriptions: DescriptionLimits = Field(default_factory=DescriptionLimits)
    sitelinks: SitelinkLimits = Field(default_factory=SitelinkLimits)
    highlights: HighlightLimits = Field(default_factory=HighlightLimits)

    def max_for_kind(self, kind: VariantKind) -> int:
        return {
            "title": self.titles.max,
            "description": self.descriptions.max,
            "sitelink_text": self.sitelinks.text,
            "sitelink_desc1": self.sitelinks.desc1,
            "sitelink_desc2": self.sitelinks.desc2,
            "highlight": self.highlights.max,
        }[kind]


class CandidateSitelink(BaseModel):
    model_config = ConfigDict(extra="ignore")

    text: Any = None
    desc1: Any = None
    desc2: Any = None


class CandidateAssetSet(BaseModel):
    """Whatever the provider returned, reduced to the fields we know about.

    Non-list fields become empty lists and sitelink entries that are not
    objects become empty sitelinks, so building one never fails.
    """

    model_config = ConfigDict(extra="ignore")

    titles: List[Any] = Field(default_factory=list)
    descriptions: List[Any] = Field(default_factory=list)
    sitelinks: List[CandidateSitelink] = Field(default_factory=list)
    highlights: List[Any] = Field(default_factory=list)

    @field_validator("titles", "descriptions", "highlights", mode="before")
    @classmethod
    def _list_or_empty(cls, value: Any) -> list:
        if isinstance(value, (list, tuple)):
            return list(value)
        return []

    @field_validator("sitelinks", mode="before")
    @classmethod
    def _sitelinks_or_empty(cls, value: Any) -> list:
        if not isinstance(value, (list, tuple)):
            return []
        return [item if isinstance(item, dict) else {} for item in value]

    @classmethod
    def from_payload(cls, payload: Any) -> CandidateAssetSet:
        if isinstance(payload, BaseModel):
            payload = payload.model_dump()
        if not isinstance(payload, dict):
            return cls()
        return cls.model_validate(payload)


class Sitelink(BaseModel):
    text: str = ""
    desc1: str = ""
    desc2: str = ""


class GeneratedAssetSet(BaseModel):
    titles: List[str]
    descriptions: List[str]
    sitelinks: List[Sitelink]
    highlights: List[str]


class FillRequest(BaseModel):
    brief: Optional[ProductBrief] = Field(
        default=None,
        validation_alias=AliasChoices("brief", "etapa1"),
    )
    limits: LimitsConfig = Field(default_factory=LimitsConfig)

    @field_validator("limits", mode="before")
    @classmethod
    def _absent_limits(cls, value: Any) -> Any:
        return {} if value is None else value


class VariantRequest(FillRequest):
    kind: VariantKind
    # informational only, never checked against limits
    index: Optional[int] = None


class HealthResponse(BaseModel):
    model_config = ConfigDict(validate_by_name=True, protected_namespaces=())

    ok: bool = True
    upstream_configured: bool = Field(..., alias="upstreamConfigured")
    model_json: str = Field(..., alias="modelJson")
    model_text: str = Field(..., alias="modelText")
    cors_enabled: bool = Field(..., alias="corsEnabled")


class ErrorResponse(BaseModel):
    code: str
    message: str
    details: Optional[Any] = None

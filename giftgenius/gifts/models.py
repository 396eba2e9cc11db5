from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator


class GiftProfile(BaseModel):
    model_config = ConfigDict(frozen=True)

    age: int = Field(..., ge=0, le=120)
    gender: str = ""
    interests: str = Field(..., min_length=1, description="Comma-separated interests")
    personality: str = ""
    budget: str = ""
    occasion: str = ""
    plan: str = "essential"


class PriceRange(BaseModel):
    model_config = ConfigDict(frozen=True)

    min: float = Field(..., ge=0)
    max: float = Field(..., ge=0)

    @model_validator(mode="after")
    def _check_bounds(self) -> PriceRange:
        if self.min > self.max:
            raise ValueError("price range min must not exceed max")
        return self

    def contains(self, price: float) -> bool:
        return self.min <= price <= self.max


class SearchSpec(BaseModel):
    model_config = ConfigDict(frozen=True)

    categories: tuple[str, ...]
    keywords: tuple[str, ...]
    price_range: PriceRange
    priority: tuple[str, ...]


class GiftCandidate(BaseModel):
    name: str
    price: float = Field(..., ge=0)
    image_url: str = ""
    store_name: str
    product_url: str = ""
    rating: float = 0.0
    review_count: int = Field(default=0, ge=0)


class ScoredGift(GiftCandidate):
    score: float


class SearchAnalysis(BaseModel):
    categories: list[str]
    keywords: list[str]
    priority: list[str]
    price_range: PriceRange
    processing_time_ms: float
    total_found: int
    selected: int


class GiftSearchResponse(BaseModel):
    search_id: int
    gifts: list[ScoredGift]
    plan: str
    max_results: int
    analysis: SearchAnalysis


class FeedbackRequest(BaseModel):
    search_id: int | None = None
    rating: int = Field(..., ge=1, le=5)
    satisfied: bool
    comments: str = Field(default="", max_length=2000)


class FeedbackResponse(BaseModel):
    status: str
    total_feedback: int


class InteractionRequest(BaseModel):
    gift_name: str = Field(..., min_length=1, max_length=255)
    store: str = Field(..., min_length=1, max_length=100)
    action: str = Field(..., min_length=1, max_length=50)

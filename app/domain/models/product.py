from pydantic import BaseModel, Field, field_validator
from typing import Optional, List

class ProductLite(BaseModel):
    """Catalog projection used for routine scoring."""
    product_id: str
    name: str = ""
    brand: str = ""
    category: str = ""
    skin_type: List[str] = []
    benefits: List[str] = []          # carried through, not scored
    price: float = 0
    compare_at_price: Optional[float] = None
    image: str = ""

    model_config = {"frozen": True}  # immuable = safe

    @field_validator("category", mode="before")
    @classmethod
    def _category_or_empty(cls, v):
        return v if isinstance(v, str) else ""

    @field_validator("skin_type", "benefits", mode="before")
    @classmethod
    def _labels_or_empty(cls, v):
        # lenient: anything that is not a list of labels scores as "no labels"
        if not isinstance(v, (list, tuple, set)):
            return []
        return [x for x in v if isinstance(x, str)]

class Recommendation(BaseModel):
    product: ProductLite
    reason: str
    step: str
    model_config = {"frozen": True} # immuable = safe

class RecommendationResult(BaseModel):
    source_product_id: str
    items: List[Recommendation] = Field(default_factory=list)
    count: int
    model_config = {"frozen": True} # immuable = safe

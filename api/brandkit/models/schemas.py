"""Pydantic models for API request and response schemas.

Request field names follow the camelCase wire format; Python attributes are
snake_case and populated through aliases.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr

# Free-form descriptive input: a string, or a list of strings joined for the prompt
Descriptive = Optional[Union[str, List[str]]]


class BrandRequest(BaseModel):
    """Input for one brand kit generation.

    ``brandName`` and ``userId`` are declared optional here so that their
    absence is reported by the request validator with the API's own 400
    error instead of a framework 422.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    brand_name: Optional[str] = Field(None, alias="brandName", description="Brand name", examples=["Nova"])
    user_id: Optional[Union[StrictStr, StrictInt]] = Field(None, alias="userId", description="Opaque owner identifier", examples=["u1"])

    industry: Descriptive = Field(None, description="Industry or market", examples=["Specialty coffee"])
    audience: Descriptive = Field(None, description="Target audience")
    personality: Descriptive = Field(None, description="Brand personality traits")
    values: Descriptive = Field(None, description="Core values")
    keywords: Descriptive = Field(None, description="Brand keywords")
    competitors: Descriptive = Field(None, description="Known competitors")
    style_preference: Descriptive = Field(None, alias="stylePreference", description="Preferred logo style")
    logo_direction: Descriptive = Field(None, alias="logoDirection", description="Visual direction for the logo")
    brand_type: Descriptive = Field(None, alias="brandType", description="Kind of brand (product, personal, ...)")

    def descriptive_fields(self) -> Dict[str, Any]:
        """Snapshot of the optional descriptive fields that were supplied, keyed by wire name."""
        return self.model_dump(by_alias=True, exclude={"brand_name", "user_id"}, exclude_none=True)


class KitSummary(BaseModel):
    """One dashboard entry: a project and its generated kit, if any."""

    id: int
    brand_name: str
    created_at: datetime
    kit: Optional[Any] = None


class HealthResponse(BaseModel):
    ok: bool
    status: str
    services: Dict[str, bool] = Field(default_factory=dict)

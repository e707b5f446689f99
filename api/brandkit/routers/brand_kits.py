from __future__ import annotations

import json
from typing import Any, List

from fastapi import APIRouter, Depends, Request

from ..models.exceptions import ValidationError
from ..models.schemas import KitSummary
from ..services.brand_kit import BrandKitPipeline


router = APIRouter(tags=["brand-kits"])


def get_pipeline(request: Request) -> BrandKitPipeline:
    return request.app.state.brand_kit_pipeline


@router.post("/generate-brand-kit")
async def generate_brand_kit(request: Request, pipeline: BrandKitPipeline = Depends(get_pipeline)) -> Any:
    """
    Generate and store a brand kit.

    Flow:
    1. Validate brandName / userId
    2. Create the project row
    3. Call the generation service with the profile prompt
    4. Parse (and optionally contract-check) the output
    5. Save the kit row and return the kit object as-is
    """
    try:
        payload = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        raise ValidationError("Request body must be valid JSON") from None
    return await pipeline.generate(payload)


@router.get("/my-kits/{user_id}", response_model=List[KitSummary])
async def my_kits(user_id: str, pipeline: BrandKitPipeline = Depends(get_pipeline)):
    """Projects of a user, newest first, each with its kit or null."""
    return await pipeline.list_kits(user_id)

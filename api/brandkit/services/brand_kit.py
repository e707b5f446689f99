"""Brand kit request pipeline.

validate -> create project -> generate -> parse -> [contract check] -> save kit -> respond

Steps run strictly in order within one request. Every failure is raised as
a BrandKitBaseException subclass; nothing is retried and nothing already
written is rolled back.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Dict, List, Optional

from ..core.structured_logging import request_id_var
from ..models.schemas import BrandRequest
from .completions import CompletionsClient
from .guardrails import validate_contract
from .kit_parser import parse_kit_output
from .profiles import GenerationProfile
from .projects import ProjectStore
from .prompts import build_messages
from .request_validator import validate_brand_request

logger = logging.getLogger(__name__)


class KitGenerator:
    """Composes the prompt for a profile and performs the single completion call."""

    def __init__(self, client: CompletionsClient, profile: GenerationProfile):
        self.client = client
        self.profile = profile

    async def generate(self, request: BrandRequest) -> str:
        return await self.client.complete(
            build_messages(self.profile, request),
            model=self.profile.model,
            temperature=self.profile.temperature,
            max_tokens=self.profile.max_tokens,
        )


class BrandKitPipeline:
    def __init__(self,
                 store: ProjectStore,
                 generator: KitGenerator,
                 strict_validation: bool = False):
        self.store = store
        self.generator = generator
        self.strict_validation = strict_validation

    @property
    def profile(self) -> GenerationProfile:
        return self.generator.profile

    async def generate(self, payload: Any) -> Any:
        """Run the full pipeline for one decoded request body and return the kit."""
        started = time.perf_counter()
        request = validate_brand_request(payload)

        project_id = await self.store.create_project(request, profile=self.profile.name)
        log_context: Dict[str, Any] = {
            "request_id": request_id_var.get(),
            "project_id": project_id,
            "profile": self.profile.name,
            "model": self.profile.model,
        }
        logger.info("Brand project created", extra=log_context)

        raw = await self.generator.generate(request)
        result = parse_kit_output(raw, context=log_context)

        if self.strict_validation:
            validate_contract(self.profile.contract, result)

        kit_id = await self.store.save_kit(project_id, result, profile=self.profile.name, model=self.profile.model)
        logger.info(
            "Brand kit generated",
            extra={**log_context, "kit_id": kit_id, "duration_ms": int((time.perf_counter() - started) * 1000)},
        )
        return result

    async def list_kits(self, user_id: str) -> List[Dict[str, Any]]:
        return await self.store.list_user_kits(user_id)


def build_pipeline(store: ProjectStore,
                   client: CompletionsClient,
                   profile: GenerationProfile,
                   strict_validation: Optional[bool] = False) -> BrandKitPipeline:
    return BrandKitPipeline(store, KitGenerator(client, profile), strict_validation=bool(strict_validation))

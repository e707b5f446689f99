"""Generation profiles.

A profile bundles everything that differs between kit variants: prompt
wording, the optional fields the prompt mentions, the placeholder used for
absent fields, the expected output contract and the sampling parameters.
One pipeline serves every profile.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple

from ..models.exceptions import ConfigurationError
from .prompts import (
    STARTER_OUTPUT,
    STARTER_RULES,
    STARTER_SYSTEM,
    STUDIO_OUTPUT,
    STUDIO_RULES,
    STUDIO_SYSTEM,
)


@dataclass(frozen=True)
class PromptField:
    label: str
    attribute: str


@dataclass(frozen=True)
class GenerationProfile:
    name: str
    model: str
    temperature: float
    max_tokens: int
    placeholder: str
    fields: Tuple[PromptField, ...]
    system_prompt: str
    output_template: str
    rules: str
    contract: str


STUDIO = GenerationProfile(
    name="studio",
    model="gpt-4o",
    temperature=0.7,
    max_tokens=1200,
    placeholder="Not specified",
    fields=(
        PromptField("Industry", "industry"),
        PromptField("Audience", "audience"),
        PromptField("Personality", "personality"),
        PromptField("Core Values", "values"),
        PromptField("Competitors", "competitors"),
        PromptField("Preferred Logo Style", "style_preference"),
        PromptField("Visual Direction", "logo_direction"),
    ),
    system_prompt=STUDIO_SYSTEM,
    output_template=STUDIO_OUTPUT,
    rules=STUDIO_RULES,
    contract="brand_kit_studio.json",
)

STARTER = GenerationProfile(
    name="starter",
    model="gpt-4o-mini",
    temperature=0.8,
    max_tokens=1000,
    placeholder="None",
    fields=(
        PromptField("Industry", "industry"),
        PromptField("Audience", "audience"),
        PromptField("Personality", "personality"),
        PromptField("Keywords", "keywords"),
        PromptField("Brand Type", "brand_type"),
    ),
    system_prompt=STARTER_SYSTEM,
    output_template=STARTER_OUTPUT,
    rules=STARTER_RULES,
    contract="brand_kit_starter.json",
)

PROFILES: Dict[str, GenerationProfile] = {p.name: p for p in (STUDIO, STARTER)}


def get_profile(name: str) -> GenerationProfile:
    try:
        return PROFILES[name]
    except KeyError:
        raise ConfigurationError("GENERATION_PROFILE", f"unknown profile '{name}'") from None

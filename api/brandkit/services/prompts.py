from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List

if TYPE_CHECKING:
    from ..models.schemas import BrandRequest
    from .profiles import GenerationProfile


STUDIO_SYSTEM = """You are a senior brand strategist and identity designer.

You create:
- Concept-driven logos
- Structured color systems
- Intentional typography
- Cohesive brand identity

RULES:
- Output ONLY valid JSON
- No markdown
- No explanation text outside JSON

LOGO RULES:
- Must include a symbolic icon + wordmark
- Symbol must reflect brand positioning
- Clean geometry
- Modern minimal
- Designed for dark background
- Single line SVG
- Use only <svg>, <text>, <rect>, <circle>, <line>, <path>
- No gradients or images

Think like a real brand designer, not a template generator."""

STUDIO_OUTPUT = """{
  "taglines": ["", "", ""],

  "logo_svg": "<svg width='260' height='100' viewBox='0 0 260 100' xmlns='http://www.w3.org/2000/svg'>...</svg>",

  "logo_description": "",

  "colors": [
    {"role":"primary","name":"","hex":""},
    {"role":"secondary","name":"","hex":""},
    {"role":"accent","name":"","hex":""},
    {"role":"neutral","name":"","hex":""},
    {"role":"neutral","name":"","hex":""}
  ],

  "fonts": {
    "heading": "",
    "body": ""
  },

  "instagram_bio": "",

  "captions": ["", "", ""]
}"""

STUDIO_RULES = """- logo_svg must be ONE LINE
- Use single quotes in SVG
- Symbol must visually represent brand concept
- Balanced layout"""

STARTER_SYSTEM = """You are a JSON API that returns ONLY valid JSON. You are a brand designer for small businesses.

CRITICAL: Return ONLY a raw JSON object. No markdown, no code blocks, no explanations, no text before or after.

LOGO RULES:
- Simple wordmark with an optional geometric mark
- Single line SVG
- Use only <svg>, <text>, <rect>, <circle>, <line>, <path>
- No gradients or images

Your entire response must be valid JSON that starts with { and ends with }"""

STARTER_OUTPUT = """{
  "taglines": ["", "", ""],
  "logo_svg": "<svg width='240' height='80' viewBox='0 0 240 80' xmlns='http://www.w3.org/2000/svg'>...</svg>",
  "logo_description": "",
  "colors": [
    {"name":"","hex":""},
    {"name":"","hex":""},
    {"name":"","hex":""}
  ],
  "fonts": ["", ""],
  "instagram_bio": "",
  "captions": ["", "", ""]
}"""

STARTER_RULES = """- logo_svg must be ONE LINE
- Use single quotes for every SVG attribute
- colors: 2 to 5 entries, hex as #RRGGBB
- fonts: heading font first, body font second"""


def _render_value(value: Any) -> str:
    if isinstance(value, list):
        return ", ".join(str(v) for v in value if str(v))
    return str(value)


def resolve_prompt_fields(profile: "GenerationProfile", request: "BrandRequest") -> Dict[str, str]:
    """Map each prompt label to the request value, or the profile placeholder when absent.

    Absent means missing, null, an empty string or an empty list. Values are
    otherwise passed through untouched (no trimming).
    """
    resolved: Dict[str, str] = {}
    for field in profile.fields:
        value = getattr(request, field.attribute, None)
        rendered = _render_value(value) if value is not None else ""
        resolved[field.label] = rendered if rendered else profile.placeholder
    return resolved


def render_user_prompt(profile: "GenerationProfile", request: "BrandRequest") -> str:
    lines = [f"Brand Name: {request.brand_name}"]
    lines.extend(f"{label}: {value}" for label, value in resolve_prompt_fields(profile, request).items())
    return "\n".join(lines) + (
        "\n\nGenerate this EXACT JSON structure:\n\n"
        f"{profile.output_template}\n\n"
        "IMPORTANT:\n"
        f"{profile.rules}\n"
    )


def build_messages(profile: "GenerationProfile", request: "BrandRequest") -> List[Dict[str, str]]:
    """System + user chat messages for one generation call."""
    return [
        {"role": "system", "content": profile.system_prompt},
        {"role": "user", "content": render_user_prompt(profile, request)},
    ]

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional

from ..models.exceptions import GenerationParseError

logger = logging.getLogger(__name__)


def _reject_constant(token: str) -> Any:
    # NaN / Infinity / -Infinity are not JSON
    raise ValueError(f"Invalid JSON constant: {token}")


def parse_kit_output(raw: str, context: Optional[Dict[str, Any]] = None) -> Any:
    """Parse the model's text as strict JSON.

    No fence stripping or brace hunting: anything outside RFC 8259 JSON,
    including the ``NaN``/``Infinity`` literals ``json.loads`` would accept,
    is a GenerationParseError. The raw text goes to the server log only.
    """
    try:
        return json.loads(raw, parse_constant=_reject_constant)
    except (TypeError, ValueError) as e:
        logger.error(
            "AI RAW OUTPUT could not be parsed as JSON",
            extra={**(context or {}), "raw_output": raw, "parse_error": str(e)},
        )
        raise GenerationParseError(details={"parse_error": str(e)}) from None

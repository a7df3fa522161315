"""Turn free model text into validated plan items."""
from __future__ import annotations

import json
import logging
from typing import Any, Optional

from brain.schemas import Keyword, PlanItem

logger = logging.getLogger(__name__)

SCENARIOS = ("initial", "expand", "stuck")
QUEST_TYPES = ("main", "side", "boss")

UNTITLED_TASK = "未命名任务"


def extract_json_array(text: Optional[str]) -> Optional[list]:
    """Parse the span between the first '[' and the last ']' of text.

    Returns None for empty text, a missing or inverted bracket pair,
    invalid JSON, or a top-level value that is not a list.
    """
    if not text:
        return None
    first_bracket = text.find("[")
    last_bracket = text.rfind("]")
    if first_bracket == -1 or last_bracket == -1 or last_bracket <= first_bracket:
        return None

    candidate = text[first_bracket: last_bracket + 1]
    try:
        parsed = json.loads(candidate)
    except json.JSONDecodeError as exc:
        logger.debug(f"extract_json_array: candidate rejected — {exc}")
        return None
    return parsed if isinstance(parsed, list) else None


def parse_difficulty(text: Any) -> str:
    normalized = str(text or "").lower()
    if "简单" in normalized or "simple" in normalized:
        return "simple"
    if "中等" in normalized or "medium" in normalized:
        return "medium"
    if "较难" in normalized or "困难" in normalized or "hard" in normalized:
        return "hard"
    return "medium"


def parse_scenario(value: Any) -> str:
    normalized = str(value or "initial").strip().lower()
    return normalized if normalized in SCENARIOS else "initial"


def _clean(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


def _normalize_keyword(value: Any) -> Optional[Keyword]:
    if not isinstance(value, dict):
        return None
    term = _clean(value.get("term"))
    if not term:
        return None
    return Keyword(term=term, explanation=_clean(value.get("explanation")))


def normalize_item(value: Any) -> Optional[PlanItem]:
    """Sanitize one raw item from the model.

    Every text field is trimmed, questType falls back to "main", and keywords
    without a term are dropped. An item with no title, description, how or
    hint is discarded.
    """
    if not isinstance(value, dict):
        return None

    title = _clean(value.get("title"))
    description = _clean(value.get("description"))
    how = _clean(value.get("how"))
    hint = _clean(value.get("hint"))

    quest_type = value.get("questType")
    quest_type = quest_type.strip().lower() if isinstance(quest_type, str) else "main"
    if quest_type not in QUEST_TYPES:
        quest_type = "main"

    raw_keywords = value.get("keywords")
    if not isinstance(raw_keywords, list):
        raw_keywords = []
    keywords = [kw for kw in (_normalize_keyword(k) for k in raw_keywords) if kw]

    if not title and not description and not how and not hint:
        return None

    return PlanItem(
        title=title or UNTITLED_TASK,
        description=description,
        how=how,
        hint=hint,
        quest_type=quest_type,
        keywords=keywords,
    )


def normalize_items(value: Any) -> list[PlanItem]:
    if not isinstance(value, list):
        return []
    return [item for item in (normalize_item(v) for v in value) if item]

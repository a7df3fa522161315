"""QuestBrain — AI core that turns a learning goal into RPG-style quest items."""
from __future__ import annotations

import logging

from brain.exceptions import PlanParseError, ProviderNotConfigured
from brain.llm_client import call_model, resolve_provider
from brain.parsing import extract_json_array, normalize_items, parse_difficulty, parse_scenario
from brain.prompts import build_classify_messages, build_decompose_messages
from brain.schemas import PlanItem, PlanResult

logger = logging.getLogger(__name__)

RAW_LOG_LIMIT = 500


class QuestBrain:
    def __init__(self, provider: str | None = None):
        self.provider = resolve_provider(provider)
        if not self.provider.is_configured:
            raise ProviderNotConfigured(self.provider.label)

    async def classify(self, question: str) -> str:
        """API call 1: ask the model how hard the goal is."""
        answer = await call_model(self.provider, build_classify_messages(question))
        difficulty = parse_difficulty(answer)
        logger.info(f"QuestBrain.classify: {answer.strip()[:40]!r} → {difficulty}")
        return difficulty

    async def decompose(self, question: str, difficulty: str, scenario: str) -> list[PlanItem]:
        """API call 2: break the goal into one level of quest items.

        Raises:
            PlanParseError: if the answer holds no usable JSON array of items.
        """
        messages = build_decompose_messages(question, difficulty, scenario)
        raw_response = await call_model(self.provider, messages)

        items = normalize_items(extract_json_array(raw_response))
        if not items:
            logger.warning(
                f"QuestBrain.decompose: no items parsed ({scenario}/{difficulty})\n"
                f"Raw: {raw_response[:RAW_LOG_LIMIT]}"
            )
            raise PlanParseError(raw_response)

        logger.info(f"QuestBrain.decompose: {len(items)} items ({scenario}/{difficulty})")
        return items

    async def plan(self, question: str, scenario: str = "initial") -> PlanResult:
        scenario = parse_scenario(scenario)
        difficulty = await self.classify(question)
        items = await self.decompose(question, difficulty, scenario)
        return PlanResult(difficulty=difficulty, scenario=scenario, items=items)

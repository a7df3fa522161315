"""Brain planning schemas."""

from typing import List, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field

Difficulty = Literal["simple", "medium", "hard"]
Scenario = Literal["initial", "expand", "stuck"]
QuestType = Literal["main", "side", "boss"]


class Keyword(BaseModel):
    term: str
    explanation: str = ""


class PlanItem(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: str
    description: str = ""
    how: str = ""
    hint: str = ""
    quest_type: QuestType = Field("main", alias="questType")
    keywords: List[Keyword] = []


class PlanRequest(BaseModel):
    question: Optional[str] = None
    provider: Optional[str] = None  # null or empty → DEFAULT_PROVIDER
    scenario: Optional[str] = None  # null or unknown → "initial"


class PlanResult(BaseModel):
    difficulty: Difficulty
    scenario: Scenario
    items: List[PlanItem]

"""Brain routes: plan a goal with the model."""

from fastapi import APIRouter, HTTPException
from brain.quest_brain import QuestBrain
from brain.schemas import PlanRequest, PlanResult

router = APIRouter()


@router.post("/plan", response_model=PlanResult)
async def plan(body: PlanRequest):
    question = (body.question or "").strip()
    if not question:
        raise HTTPException(status_code=400, detail="请提供问题内容")

    brain = QuestBrain(body.provider)
    return await brain.plan(question, body.scenario)

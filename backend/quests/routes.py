"""Quest routes: start a quest, expand or rescue a node, track completion.

The tree is owned by the client and sent back with every call.
"""

import logging
import random
from fastapi import APIRouter, HTTPException
from brain.quest_brain import QuestBrain
from quests import tree as quest_tree
from quests.schemas import (
    NodeAction, ProgressRequest, QuestCreate, QuestResponse, SampleQuestion, ToggleRequest,
)
from quests.tree import QuestProgress

logger = logging.getLogger(__name__)

router = APIRouter()

SAMPLE_QUESTIONS = [
    "我想学会格式化U盘",
    "我想学会清理C盘垃圾文件",
    "我想学会搭建个人博客",
    "我想学会制作一份简历",
    "我想学会给电脑做一次系统体检",
    "我想学会用表格做月度预算",
    "我想学会整理手机相册",
]


def _respond(root) -> QuestResponse:
    return QuestResponse(tree=root, progress=quest_tree.progress(root))


@router.get("/quests/sample", response_model=SampleQuestion)
def sample_question():
    return SampleQuestion(question=random.choice(SAMPLE_QUESTIONS))


@router.post("/quests", response_model=QuestResponse)
async def start_quest(body: QuestCreate):
    question = (body.question or "").strip()
    if not question:
        raise HTTPException(status_code=400, detail="请输入你的学习目标或问题")

    brain = QuestBrain(body.provider)
    result = await brain.plan(question, "initial")
    return _respond(quest_tree.new_quest(question, result))


async def _plan_for_node(body: NodeAction, scenario: str):
    node = quest_tree.get_node(body.tree, body.path)
    if node is None:
        raise HTTPException(status_code=404, detail=f"节点不存在: {body.path}")

    title = node.title.strip()
    if not title:
        raise HTTPException(status_code=400, detail="请提供问题内容")

    logger.info(f"{scenario} requested for {body.path} ({title!r})")
    brain = QuestBrain(body.provider)
    return await brain.plan(title, scenario)


@router.post("/quests/expand", response_model=QuestResponse)
async def expand_node(body: NodeAction):
    result = await _plan_for_node(body, "expand")
    return _respond(quest_tree.apply_expansion(body.tree, body.path, result))


@router.post("/quests/stuck", response_model=QuestResponse)
async def rescue_node(body: NodeAction):
    result = await _plan_for_node(body, "stuck")
    return _respond(quest_tree.apply_rescue(body.tree, body.path, result))


@router.post("/quests/toggle", response_model=QuestResponse)
def toggle_node(body: ToggleRequest):
    return _respond(quest_tree.toggle_complete(body.tree, body.path))


@router.post("/quests/progress", response_model=QuestProgress)
def quest_progress(body: ProgressRequest):
    return quest_tree.progress(body.tree)

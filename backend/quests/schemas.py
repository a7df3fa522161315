"""Quest tree request/response schemas."""

from typing import Optional
from pydantic import BaseModel
from quests.tree import QuestProgress, TaskNode


class QuestCreate(BaseModel):
    question: Optional[str] = None
    provider: Optional[str] = None


class NodeAction(BaseModel):
    tree: TaskNode
    path: str
    provider: Optional[str] = None


class ToggleRequest(BaseModel):
    tree: TaskNode
    path: str


class ProgressRequest(BaseModel):
    tree: TaskNode


class QuestResponse(BaseModel):
    tree: TaskNode
    progress: QuestProgress


class SampleQuestion(BaseModel):
    question: str

"""Quest tree — an ordered tree of TaskNodes addressed by path strings.

Paths look like "root", "root-0", "root-2-1": the root, then child indices
from the top down. Every update is functional: the nodes along the path are
copied and the rest of the tree is shared with the input.
"""
from __future__ import annotations

from typing import Callable, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from brain.schemas import Difficulty, Keyword, PlanItem, PlanResult, QuestType

ROOT = "root"

QUEST_ACCEPTED_HINT = "目标已接取：先推进主线，按需补充支线，最终挑战 BOSS。"
RESCUE_HINT = "已触发弹性教程：优先执行最小可行动作。"

# Share of completed main quests needed before the boss quest opens.
BOSS_UNLOCK_RATIO = 0.8


class TaskNode(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: str
    description: str = ""
    how: str = ""
    hint: str = ""
    quest_type: QuestType = Field("main", alias="questType")
    keywords: List[Keyword] = []
    difficulty: Optional[Difficulty] = None
    completed: bool = False
    children: List["TaskNode"] = []


class QuestProgress(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    main_total: int = Field(0, alias="mainTotal")
    main_completed: int = Field(0, alias="mainCompleted")
    side_total: int = Field(0, alias="sideTotal")
    boss_total: int = Field(0, alias="bossTotal")
    boss_unlocked: bool = Field(False, alias="bossUnlocked")


def parse_path(path: str) -> Optional[list[int]]:
    """Split a path into child indices; None when the path is malformed."""
    if not isinstance(path, str):
        return None
    head, *rest = path.strip().split("-")
    if head != ROOT:
        return None
    if not all(part.isascii() and part.isdigit() for part in rest):
        return None
    return [int(part) for part in rest]


def get_node(root: TaskNode, path: str) -> Optional[TaskNode]:
    indices = parse_path(path)
    if indices is None:
        return None
    node = root
    for index in indices:
        if index >= len(node.children):
            return None
        node = node.children[index]
    return node


def _update_at_indices(
    node: TaskNode, indices: list[int], updater: Callable[[TaskNode], TaskNode]
) -> TaskNode:
    if not indices:
        return updater(node)
    index, rest = indices[0], indices[1:]
    if index >= len(node.children):
        return node
    updated_child = _update_at_indices(node.children[index], rest, updater)
    if updated_child is node.children[index]:
        return node
    children = list(node.children)
    children[index] = updated_child
    return node.model_copy(update={"children": children})


def update_at_path(
    root: TaskNode, path: str, updater: Callable[[TaskNode], TaskNode]
) -> TaskNode:
    """Return a new root with updater applied to the node at path.

    A malformed path, or an index past the end of a children list, leaves
    the tree untouched and returns root itself.
    """
    indices = parse_path(path)
    if indices is None:
        return root
    return _update_at_indices(root, indices, updater)


def to_children(items: List[PlanItem]) -> List[TaskNode]:
    return [
        TaskNode(
            title=item.title,
            description=item.description,
            how=item.how,
            hint=item.hint,
            quest_type=item.quest_type,
            keywords=list(item.keywords),
        )
        for item in items
        if item.title
    ]


def dedupe_by_title(nodes: List[TaskNode]) -> List[TaskNode]:
    """Keep the first node for each title, compared trimmed and case-insensitively."""
    seen = set()
    result = []
    for node in nodes:
        key = node.title.strip().lower()
        if not key or key in seen:
            continue
        seen.add(key)
        result.append(node)
    return result


def new_quest(question: str, result: PlanResult) -> TaskNode:
    return TaskNode(
        title=question,
        hint=QUEST_ACCEPTED_HINT,
        quest_type="main",
        difficulty=result.difficulty,
        children=to_children(result.items),
    )


def apply_expansion(root: TaskNode, path: str, result: PlanResult) -> TaskNode:
    """Replace the children of the node at path with the new plan items."""
    children = to_children(result.items)
    return update_at_path(
        root,
        path,
        lambda node: node.model_copy(
            update={"difficulty": result.difficulty, "children": children}
        ),
    )


def apply_rescue(root: TaskNode, path: str, result: PlanResult) -> TaskNode:
    """Append rescue items under the node at path, skipping repeated titles."""
    rescue = to_children(result.items)
    return update_at_path(
        root,
        path,
        lambda node: node.model_copy(
            update={
                "hint": RESCUE_HINT,
                "children": dedupe_by_title([*node.children, *rescue]),
            }
        ),
    )


def toggle_complete(root: TaskNode, path: str) -> TaskNode:
    return update_at_path(
        root, path, lambda node: node.model_copy(update={"completed": not node.completed})
    )


def flatten(root: Optional[TaskNode]) -> List[TaskNode]:
    """Pre-order walk, children left to right."""
    if root is None:
        return []
    result = []
    stack = [root]
    while stack:
        current = stack.pop()
        result.append(current)
        stack.extend(reversed(current.children))
    return result


def progress(root: Optional[TaskNode]) -> QuestProgress:
    nodes = flatten(root)
    main_nodes = [n for n in nodes if n.quest_type == "main"]
    main_total = len(main_nodes)
    main_completed = sum(1 for n in main_nodes if n.completed)
    return QuestProgress(
        main_total=main_total,
        main_completed=main_completed,
        side_total=sum(1 for n in nodes if n.quest_type == "side"),
        boss_total=sum(1 for n in nodes if n.quest_type == "boss"),
        boss_unlocked=main_total > 0 and main_completed / main_total >= BOSS_UNLOCK_RATIO,
    )

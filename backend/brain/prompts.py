"""Prompt templates for difficulty classification and quest decomposition.

The product copy is Chinese; the model is asked to answer in the same language.
"""

CLASSIFY_SYSTEM_PROMPT = (
    "你是任务难度评估助手。只输出难度枚举：simple/medium/hard，不要输出其它内容。"
)

DECOMPOSE_SYSTEM_PROMPT = "你是 RPG 学习任务拆解助手。只输出严格 JSON，不要任何多余文本。"

_ITEM_SCHEMA_LINE = (
    '1) 输出 JSON 数组，结构为 [{"title":"...","description":"...","how":"...",'
    '"hint":"...","questType":"main|side|boss","keywords":[{"term":"...","explanation":"..."}]}]。'
)

DECOMPOSE_PROMPT_BY_DIFFICULTY = {
    "simple": [
        "请将下面的任务拆为 RPG 风格执行步骤清单。",
        "要求：",
        _ITEM_SCHEMA_LINE,
        "2) 只拆一层，步骤数量 3-5 个。",
        "3) description 简要说明任务目的，how 给出具体做法。",
        "4) keywords 仅包含需要解释的复杂词汇，不多于 2 个。",
        "5) questType 只允许 main/side/boss。",
    ],
    "medium": [
        "请将下面的任务拆为 RPG 风格清单子任务。",
        "要求：",
        _ITEM_SCHEMA_LINE,
        "2) 只拆一层，子任务数量 4-7 个。",
        "3) description 说明任务目的，how 给出清晰可执行步骤。",
        "4) keywords 仅包含复杂概念词，每项提供简短解释。",
        "5) questType 只允许 main/side/boss。",
    ],
    "hard": [
        "请将下面的任务拆为 RPG 风格清单子任务。",
        "要求：",
        _ITEM_SCHEMA_LINE,
        "2) 只拆一层，子任务数量 6-9 个。",
        "3) description 解释任务核心点，how 给出细致步骤。",
        "4) keywords 提取复杂概念词并给出解释，每个子任务可有 1-3 个。",
        "5) questType 只允许 main/side/boss。",
    ],
}

SCENARIO_PROMPT_BY_TYPE = {
    "initial": [
        "当前场景：initial（首次拆解）。",
        "目标：体现 RPG 机制，包含主线、支线与最终 BOSS。",
        "额外约束：",
        "- 至少包含 2 条 main。",
        "- 至少包含 1 条 side。",
        "- 至少包含 1 条 boss（最终验收关卡）。",
        "- 每条任务给出 hint，尽量短句。",
    ],
    "expand": [
        "当前场景：expand（对子任务继续拆解）。",
        "目标：输出当前节点下一层任务。",
        "额外约束：",
        "- 优先输出 main 和 side。",
        "- 除非明确是终局任务，否则不要输出 boss。",
        "- 每条任务给出 hint（执行建议）。",
    ],
    "stuck": [
        "当前场景：stuck（用户卡点，触发弹性教程）。",
        "目标：输出 2-4 条救援任务，强调最小可行动作与排障顺序。",
        "额外约束：",
        "- questType 优先为 side，可少量 main。",
        "- 每条 how 必须可立即执行，尽量控制在 15-30 分钟。",
        "- hint 使用鼓励式、低压力语气。",
    ],
}


def build_classify_messages(question: str) -> list[dict]:
    return [
        {"role": "system", "content": CLASSIFY_SYSTEM_PROMPT},
        {
            "role": "user",
            "content": "\n".join([
                "请评估以下任务难度：",
                "定义：",
                "- simple：简单任务，只需少量步骤，不包含复杂概念",
                "- medium：中等难度，涉及部分复杂概念，步骤较多",
                "- hard：较难任务，多步骤且包含较多复杂概念",
                "任务：",
                question,
            ]),
        },
    ]


def build_decompose_messages(question: str, difficulty: str, scenario: str) -> list[dict]:
    """Difficulty block, then scenario block, then the goal itself."""
    lines = [
        *DECOMPOSE_PROMPT_BY_DIFFICULTY[difficulty],
        *SCENARIO_PROMPT_BY_TYPE[scenario],
        "任务：",
        question,
    ]
    return [
        {"role": "system", "content": DECOMPOSE_SYSTEM_PROMPT},
        {"role": "user", "content": "\n".join(lines)},
    ]

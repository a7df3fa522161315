"""Errors raised by the planning pipeline; server.main maps them to HTTP responses."""
from __future__ import annotations


class QuestBrainError(Exception):
    """Base class for planning failures."""


class ProviderNotConfigured(QuestBrainError):
    def __init__(self, label: str):
        self.label = label
        super().__init__(
            f"服务端未配置完整的 {label}_API_KEY/{label}_ENDPOINT/{label}_MODEL"
        )


class ModelCallError(QuestBrainError):
    def __init__(self, detail):
        self.detail = detail
        super().__init__(f"模型调用失败: {detail}")


class PlanParseError(QuestBrainError):
    """The model answered, but no usable quest items could be extracted."""

    def __init__(self, raw: str):
        self.raw = raw
        super().__init__("模型返回无法解析为清单任务")

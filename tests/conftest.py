"""
Pytest configuration and shared fixtures
"""
import pytest
from fastapi.testclient import TestClient

from server import config
from server.main import app


SAMPLE_ITEMS_TEXT = """好的，以下是拆解结果：
[
  {"title": "准备工具", "description": "备份数据", "how": "把U盘文件复制到电脑", "hint": "先备份", "questType": "main",
   "keywords": [{"term": "文件系统", "explanation": "数据在磁盘上的组织方式"}]},
  {"title": "选择文件系统", "description": "", "how": "选择 exFAT", "hint": "", "questType": "side", "keywords": []},
  {"title": "执行格式化", "description": "完成格式化", "how": "右键 → 格式化", "hint": "", "questType": "boss"}
]
希望对你有帮助！"""


@pytest.fixture(autouse=True)
def provider_settings(monkeypatch):
    """Configure every provider with dummy values so no test depends on a real .env."""
    monkeypatch.setattr(config, "DEFAULT_PROVIDER", "doubao")
    monkeypatch.setattr(config, "VOLC_API_KEY", "volc-test-key")
    monkeypatch.setattr(config, "VOLC_ENDPOINT", "https://volc.example.com/chat/completions")
    monkeypatch.setattr(config, "VOLC_MODEL", "doubao-test")
    monkeypatch.setattr(config, "DEEPSEEK_API_KEY", "deepseek-test-key")
    monkeypatch.setattr(config, "DEEPSEEK_ENDPOINT", "https://api.deepseek.com/v1/chat/completions")
    monkeypatch.setattr(config, "DEEPSEEK_MODEL", "deepseek-chat")
    monkeypatch.setattr(config, "ANTHROPIC_API_KEY", "anthropic-test-key")
    monkeypatch.setattr(config, "ANTHROPIC_MODEL", "claude-3-haiku-20240307")
    monkeypatch.setattr(config, "MODEL_TEMPERATURE", 0.2)
    monkeypatch.setattr(config, "MODEL_TIMEOUT_SECONDS", 30.0)
    monkeypatch.setattr(config, "MODEL_MAX_TOKENS", 4000)
    return config


class FakeModel:
    """Scripted stand-in for brain.llm_client.call_model.

    Answers are returned in order; every call is recorded as (provider, messages).
    An answer that is an Exception instance is raised instead of returned.
    """

    def __init__(self):
        self.answers = []
        self.calls = []

    def queue(self, *answers):
        self.answers.extend(answers)
        return self

    async def __call__(self, provider, messages):
        self.calls.append((provider, messages))
        if not self.answers:
            raise AssertionError("FakeModel called more times than scripted")
        answer = self.answers.pop(0)
        if isinstance(answer, Exception):
            raise answer
        return answer


@pytest.fixture
def fake_model(monkeypatch):
    model = FakeModel()
    monkeypatch.setattr("brain.quest_brain.call_model", model)
    return model


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def sample_items_text():
    return SAMPLE_ITEMS_TEXT

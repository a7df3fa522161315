"""
Tests for the quest tree endpoints
"""
import pytest

from quests.routes import SAMPLE_QUESTIONS
from quests.tree import QUEST_ACCEPTED_HINT, RESCUE_HINT

EXPAND_TEXT = '[{"title": "安装 Git", "how": "下载安装包", "questType": "main"},' \
              ' {"title": "配置用户名", "how": "git config", "questType": "side"}]'
RESCUE_TEXT = '```json\n[{"title": "安装 Git", "how": "重复项"},' \
              ' {"title": "看一个入门视频", "how": "15 分钟", "questType": "side"}]\n```'


@pytest.fixture
def started_tree(client, fake_model, sample_items_text):
    fake_model.queue("medium", sample_items_text)
    response = client.post("/api/quests", json={"question": "我想学会格式化U盘"})
    assert response.status_code == 200
    return response.json()["tree"]


def test_sample_question(client):
    response = client.get("/api/quests/sample")
    assert response.status_code == 200
    assert response.json()["question"] in SAMPLE_QUESTIONS


def test_start_quest(client, fake_model, sample_items_text):
    fake_model.queue("hard", sample_items_text)

    response = client.post("/api/quests", json={"question": " 我想学会格式化U盘 ", "provider": "claude"})

    assert response.status_code == 200
    data = response.json()
    tree = data["tree"]
    assert tree["title"] == "我想学会格式化U盘"
    assert tree["hint"] == QUEST_ACCEPTED_HINT
    assert tree["difficulty"] == "hard"
    assert tree["completed"] is False
    assert [c["title"] for c in tree["children"]] == ["准备工具", "选择文件系统", "执行格式化"]
    assert all(c["children"] == [] and c["completed"] is False for c in tree["children"])
    assert data["progress"] == {
        "mainTotal": 2,
        "mainCompleted": 0,
        "sideTotal": 1,
        "bossTotal": 1,
        "bossUnlocked": False,
    }
    assert fake_model.calls[0][0].name == "claude"
    assert "当前场景：initial" in fake_model.calls[1][1][1]["content"]


def test_start_quest_blank_question(client, fake_model):
    response = client.post("/api/quests", json={"question": ""})
    assert response.status_code == 400
    assert fake_model.calls == []


def test_start_quest_null_question(client, fake_model):
    response = client.post("/api/quests", json={"question": None})
    assert response.status_code == 400
    assert fake_model.calls == []


def test_expand_node(client, fake_model, started_tree):
    fake_model.queue("simple", EXPAND_TEXT)

    response = client.post("/api/quests/expand",
                           json={"tree": started_tree, "path": "root-0", "provider": "deepseek"})

    assert response.status_code == 200
    tree = response.json()["tree"]
    target = tree["children"][0]
    assert target["difficulty"] == "simple"
    assert [c["title"] for c in target["children"]] == ["安装 Git", "配置用户名"]
    # the node title is what gets planned
    assert fake_model.calls[-2][1][1]["content"].endswith("\n准备工具")
    assert "当前场景：expand" in fake_model.calls[-1][1][1]["content"]
    assert response.json()["progress"]["mainTotal"] == 3


def test_rescue_node(client, fake_model, started_tree):
    fake_model.queue("simple", EXPAND_TEXT)
    expanded = client.post("/api/quests/expand",
                           json={"tree": started_tree, "path": "root-0"}).json()["tree"]
    fake_model.queue("simple", RESCUE_TEXT)

    response = client.post("/api/quests/stuck", json={"tree": expanded, "path": "root-0"})

    assert response.status_code == 200
    target = response.json()["tree"]["children"][0]
    assert target["hint"] == RESCUE_HINT
    assert [c["title"] for c in target["children"]] == ["安装 Git", "配置用户名", "看一个入门视频"]
    assert "当前场景：stuck" in fake_model.calls[-1][1][1]["content"]


@pytest.mark.parametrize("endpoint", ["/api/quests/expand", "/api/quests/stuck"])
def test_missing_node_is_404(client, fake_model, started_tree, endpoint):
    calls_before = len(fake_model.calls)

    response = client.post(endpoint, json={"tree": started_tree, "path": "root-9"})

    assert response.status_code == 404
    assert "root-9" in response.json()["error"]
    assert len(fake_model.calls) == calls_before


@pytest.mark.parametrize("endpoint", ["/api/quests/expand", "/api/quests/stuck"])
def test_blank_node_title_is_400(client, fake_model, endpoint):
    tree = {"title": "goal", "children": [{"title": "   "}]}

    response = client.post(endpoint, json={"tree": tree, "path": "root-0"})

    assert response.status_code == 400
    assert response.json() == {"error": "请提供问题内容"}
    assert fake_model.calls == []


def test_null_provider_uses_default(client, fake_model, sample_items_text):
    fake_model.queue("medium", sample_items_text)
    response = client.post("/api/quests", json={"question": "学习 Git", "provider": None})
    assert response.status_code == 200
    tree = response.json()["tree"]

    fake_model.queue("simple", EXPAND_TEXT)
    response = client.post("/api/quests/expand",
                           json={"tree": tree, "path": "root-0", "provider": None})

    assert response.status_code == 200
    assert [call[0].name for call in fake_model.calls] == ["doubao"] * 4


def test_expand_parse_failure_is_502(client, fake_model, started_tree):
    fake_model.queue("medium", "no json here")

    response = client.post("/api/quests/expand", json={"tree": started_tree, "path": "root-1"})

    assert response.status_code == 502
    assert response.json()["raw"] == "no json here"


def test_toggle_and_progress(client, started_tree):
    response = client.post("/api/quests/toggle", json={"tree": started_tree, "path": "root"})
    assert response.status_code == 200
    tree = response.json()["tree"]
    assert tree["completed"] is True
    assert response.json()["progress"]["mainCompleted"] == 1

    response = client.post("/api/quests/toggle", json={"tree": tree, "path": "root-0"})
    tree = response.json()["tree"]
    progress = client.post("/api/quests/progress", json={"tree": tree}).json()
    assert progress["mainCompleted"] == 2
    assert progress["bossUnlocked"] is True


def test_toggle_bad_path_is_a_no_op(client, started_tree):
    response = client.post("/api/quests/toggle", json={"tree": started_tree, "path": "root-42"})

    assert response.status_code == 200
    assert response.json()["tree"] == started_tree


def test_invalid_tree_is_400(client):
    response = client.post("/api/quests/progress", json={"tree": {"questType": "main"}})
    assert response.status_code == 400

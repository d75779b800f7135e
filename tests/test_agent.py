import os
import sys
from datetime import date

from agent import content_agent
from agent.prompt import TOOL_NAMES, get_content_assistant_prompt


def test_prompt_mentions_every_tool_and_today():
    prompt = get_content_assistant_prompt("Example Site")
    for name in TOOL_NAMES:
        assert name in prompt
    assert "Example Site" in prompt
    assert date.today().isoformat() in prompt


def test_tool_server_parameters_launch_module_from_project_root():
    params = content_agent.tool_server_parameters()
    assert params.command == sys.executable
    assert params.args == ["-m", "tools.mcp_server"]
    assert os.path.isfile(os.path.join(params.cwd, "tools", "mcp_server.py"))


def test_create_agent_wires_model_prompt_and_tools(monkeypatch):
    captured = {}

    class FakeLiteLlm:
        def __init__(self, model):
            self.model = model

    class FakeToolset:
        def __init__(self, connection_params):
            self.connection_params = connection_params

    def fake_agent(**kwargs):
        captured.update(kwargs)
        return kwargs

    monkeypatch.setattr(content_agent, "LiteLlm", FakeLiteLlm)
    monkeypatch.setattr(content_agent, "MCPToolset", FakeToolset)
    monkeypatch.setattr(content_agent, "Agent", fake_agent)
    monkeypatch.setenv("AGENT_MODEL", "openrouter/test/model")

    content_agent.create_agent()

    assert captured["name"] == "wagtail_content_assistant"
    assert captured["model"].model == "openrouter/test/model"
    assert "search_documents" in captured["instruction"]
    assert captured["tools"][0].connection_params.args == ["-m", "tools.mcp_server"]


def test_explicit_model_wins_over_env(monkeypatch):
    captured = {}
    monkeypatch.setattr(content_agent, "LiteLlm", lambda model: model)
    monkeypatch.setattr(content_agent, "MCPToolset", lambda connection_params: connection_params)
    monkeypatch.setattr(content_agent, "Agent", lambda **kwargs: captured.update(kwargs))
    monkeypatch.setenv("AGENT_MODEL", "from-env")

    content_agent.create_agent("explicit/model")

    assert captured["model"] == "explicit/model"

# =============================================================================
# agent/content_agent.py  -  Google ADK Agent Configuration
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Configures the Google ADK agent that answers questions about a Wagtail
#   site by calling the MCP tools in tools/mcp_server.py.
#
#   ┌──────────────────────────────────────────────────────────────────┐
#   │                       Google ADK Agent                          │
#   │  system prompt ──▶ LLM (via LiteLlm) ──▶ MCP tool connection    │
#   └──────────────────────────────────────────────────────────────────┘
#                                                      │  stdio
#                                                      ▼
#                                          ┌─────────────────────┐
#                                          │  FastMCP Server     │
#                                          │  (tools/mcp_server) │
#                                          └─────────────────────┘
#                                                      │
#                                                      ▼
#                                          ┌─────────────────────┐
#                                          │  core/ + Wagtail API│
#                                          └─────────────────────┘
#
# MCP CONNECTION:
#   ADK starts the tool server as a subprocess ("python -m tools.mcp_server"
#   from the project root) and talks to it over stdin/stdout.  The
#   subprocess inherits WAGTAIL_* settings from this process's environment.
#
# MODEL:
#   AGENT_MODEL selects any LiteLlm model string.  The default routes GPT-4o
#   through OpenRouter, so OPENROUTER_API_KEY must be set.
# =============================================================================

import os
import sys
from typing import Optional

from google.adk.agents import Agent
from google.adk.models.lite_llm import LiteLlm
from google.adk.tools.mcp_tool import MCPToolset
from mcp import StdioServerParameters

from agent.prompt import get_content_assistant_prompt

DEFAULT_MODEL = "openrouter/openai/gpt-4o"


def tool_server_parameters() -> StdioServerParameters:
    """How ADK should launch the Wagtail tool server subprocess."""
    project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
    return StdioServerParameters(
        command=sys.executable,
        args=["-m", "tools.mcp_server"],
        cwd=project_root,
        env=dict(os.environ),
    )


def create_agent(model: Optional[str] = None) -> Agent:
    """Create the Wagtail content assistant.

    Args:
        model: LiteLlm model string.  Falls back to AGENT_MODEL, then to
               DEFAULT_MODEL.

    Returns:
        A configured Google ADK Agent instance.
    """
    mcp_tools = MCPToolset(connection_params=tool_server_parameters())

    site_name = os.getenv("MCP_SERVICE_NAME") or "the Wagtail site"
    agent = Agent(
        name="wagtail_content_assistant",
        model=LiteLlm(model=model or os.getenv("AGENT_MODEL") or DEFAULT_MODEL),
        instruction=get_content_assistant_prompt(site_name),
        tools=[mcp_tools],
    )
    return agent

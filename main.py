# =============================================================================
# main.py  -  Entry Point for the Wagtail Content Assistant
# =============================================================================
#
# HOW TO RUN:
#   python main.py
#
# WHAT HAPPENS:
#   1. Loads settings from .env (WAGTAIL_BASE_URL, OPENROUTER_API_KEY, ...)
#   2. Creates the Google ADK agent (agent/content_agent.py), which spawns
#      the Wagtail MCP tool server over stdio
#   3. Reads questions from the terminal and streams the agent's answers,
#      printing each tool call as it happens
#
# To run ONLY the tool server (for Claude Desktop, Cursor, or any other MCP
# client), use:  python -m tools.mcp_server
# =============================================================================

import asyncio
import sys
from typing import Optional

from dotenv import load_dotenv

# Must run before the agent is created: LiteLlm reads its API key, and the
# tool subprocess inherits WAGTAIL_* settings, from this environment.
load_dotenv()

from google.adk.runners import Runner
from google.adk.sessions import InMemorySessionService
from google.genai import types

from agent.content_agent import create_agent
from core.config import get_config
from core.errors import ConfigurationError

APP_NAME = "wagtail_content_assistant"
USER_ID = "local_user"
QUIT_WORDS = ("quit", "exit", "q")
RULE = "-" * 70


def read_question() -> Optional[str]:
    """Prompt once.  Returns None when the user wants to leave."""
    try:
        text = input("\n🧑 You: ").strip()
    except (EOFError, KeyboardInterrupt):
        print()
        return None
    return None if text.lower() in QUIT_WORDS else text


async def ask(runner: Runner, session_id: str, question: str) -> str:
    """Send one question and return the agent's last text part.

    Tool calls are echoed as they stream past so the user can follow which
    Wagtail lookups the answer is built from.
    """
    message = types.Content(role="user", parts=[types.Part(text=question)])
    answer = ""
    async for event in runner.run_async(user_id=USER_ID, session_id=session_id, new_message=message):
        if not (event.content and event.content.parts):
            continue
        for part in event.content.parts:
            call = getattr(part, "function_call", None)
            if call:
                args = ", ".join(f"{k}={v!r}" for k, v in (call.args or {}).items())
                print(f"  🔧 {call.name}({args})")
            if getattr(part, "text", None):
                answer = part.text
    return answer


async def run_agent():
    """Run the content assistant interactively until the user quits."""
    try:
        base_url = get_config().require_base_url()
    except ConfigurationError as exc:
        print(f"❌ {exc.message}", file=sys.stderr)
        sys.exit(1)

    session_service = InMemorySessionService()
    runner = Runner(agent=create_agent(), app_name=APP_NAME, session_service=session_service)
    session = await session_service.create_session(app_name=APP_NAME, user_id=USER_ID)

    print(f"Wagtail content assistant for {base_url}")
    print("Ask about pages and documents on the site; 'quit' leaves.")

    while True:
        question = read_question()
        if question is None:
            break
        if not question:
            continue
        print(RULE)
        answer = await ask(runner, session.id, question)
        print(RULE)
        print(f"\n🤖 {answer}" if answer else "\n⚠️  No answer. Check the tool server log above.")

    print("👋 Goodbye!")


if __name__ == "__main__":
    asyncio.run(run_agent())

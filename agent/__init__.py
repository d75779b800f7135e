# =============================================================================
# agent/__init__.py
# =============================================================================
# This package contains the Google ADK agent configuration for the Wagtail
# content assistant.
#
# ARCHITECTURAL ROLE:
#   The agent/ layer is one possible CALLER of the MCP tools.  It:
#     1. Receives a question about site content
#     2. Decides which Wagtail tools to call, and with what arguments
#     3. Summarizes what the tools return
#
# WHAT THE AGENT IS NOT:
#   - It is NOT the Wagtail translation logic (that's in core/)
#   - It is NOT the tool implementations (that's in tools/)
#   Any other MCP client can use the tool server without this package.
# =============================================================================

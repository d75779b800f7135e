# =============================================================================
# tools/__init__.py
# =============================================================================
# This package contains the FastMCP tool wrappers for the Wagtail CMS API.
#
# ARCHITECTURAL ROLE:
#   tools/ is the "translation layer" between the agent framework and the
#   core operations.  mcp_server.py:
#     1. Imports an operation template instance from core/operations.py
#     2. Exposes it as a FastMCP tool with typed parameters and a docstring
#     3. Logs each call to stderr
#     4. Turns core failures into ToolError messages
#
# WHAT TOOLS DO NOT DO:
#   - They do NOT validate, build queries, or reshape responses (core/ does)
#   - They do NOT read WAGTAIL_* settings themselves (core/config.py does)
#   - They do NOT know about Google ADK
# =============================================================================

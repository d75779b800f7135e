# =============================================================================
# core/__init__.py
# =============================================================================
# This package contains ALL translation logic between an agent's tool call
# and the Wagtail CMS REST API (v2).
#
# CRITICAL ARCHITECTURAL RULE:
#   Nothing in this package imports FastMCP, Google ADK, or any orchestration
#   framework.  It depends on httpx (the one network call) and python-dotenv
#   (reading settings), and nothing else outside the standard library.
#
# MODULE MAP (leaves first):
#   errors.py      error taxonomy + classifier
#   models.py      frozen records flowing through an operation
#   config.py      settings + URL building
#   validation.py  raw arguments -> typed records
#   endpoints.py   identifier -> REST path
#   queries.py     record -> query-string mapping
#   projection.py  provider JSON -> tool result
#   client.py      the single GET
#   operations.py  the two operation templates and their five instances
# =============================================================================

# =============================================================================
# core/__init__.py
# =============================================================================
# All request logic for the randomuser.me MCP server: the data model, the
# parameter schema, the query builder, the upstream dispatcher and settings.
#
# Nothing in this package imports FastMCP.  Everything here can be used and
# tested without an MCP client; only core/randomuser.py touches the network.
# =============================================================================

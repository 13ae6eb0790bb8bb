# =============================================================================
# tools/__init__.py
# =============================================================================
# FastMCP wiring.  tools/ translates between the MCP protocol and core/:
#
#   - declares the getUsers tool and its argument schema
#   - turns core validation errors into MCP tool errors
#   - turns a FetchResult into the text the client receives
#   - logs every call to stderr
#
# It holds no request logic of its own.
# =============================================================================

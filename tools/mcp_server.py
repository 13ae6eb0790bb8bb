# =============================================================================
# tools/mcp_server.py  -  FastMCP Tool Server
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Builds the FastMCP server and registers the single getUsers tool.  The
#   tool is a thin wrapper around core/:
#
#     1. FastMCP validates the call against the typed signature below
#        (pydantic).  Integers and strings are STRICT: "5", true or 5.0 for
#        an integer is rejected here, never coerced.  Bad types or enum
#        values never reach our code.
#     2. core.schema.parse_user_query applies the full constraint table and
#        builds a frozen UserQuery.  Violations become a ToolError, which the
#        client sees as an MCP error result (isError: true).
#     3. core.randomuser.fetch_users makes the single upstream GET.
#     4. The result text goes back as the tool output: the upstream JSON on
#        success, "Error fetching random users" on any upstream failure.
#
# NO GLOBAL SERVER:
#   create_server() builds a fresh FastMCP instance and hands it to
#   register_tools().  main.py calls it once at startup; tests call it with
#   an httpx.MockTransport so nothing leaves the process.
# =============================================================================

import logging
import sys
from typing import Annotated, Optional

import httpx
from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from pydantic import BaseModel, Field, StrictInt, StrictStr

from core.models import FetchResult, Gender, Nationality, PasswordCharset, UserField
from core.query import build_url
from core.randomuser import fetch_users
from core.schema import InvalidParameters, parse_user_query
from core.settings import Settings

SERVER_NAME = "mcp-randomuserme"

# =============================================================================
# Logging Setup
# =============================================================================
# Logs go to STDERR.  With the stdio transport, STDOUT carries the MCP JSON
# stream and any stray write there breaks the client.
#
#   CYAN    incoming tool calls with their parameters
#   YELLOW  status (outbound URL, rejections, upstream failures)
#   GREEN   responses
# =============================================================================
_CYAN = "\033[36m"
_GREEN = "\033[32m"
_YELLOW = "\033[33m"
_RESET = "\033[0m"

# Responses can be large; only this much of the body is logged.
_MAX_LOGGED_CHARS = 200
# Per-parameter limit in request lines (seeds can be arbitrarily long).
_MAX_LOGGED_PARAM_CHARS = 32


def _shorten(value, limit: int) -> str:
    text = value if isinstance(value, str) else repr(value)
    if len(text) <= limit:
        return text
    return f"{text[:limit]}...({len(text)} chars)"


def configure_logging(level: str = "INFO") -> None:
    """Send all log records to stderr at the given level."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [MCP] %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )


def _log_request(tool_name: str, params: dict) -> None:
    """Log the given (non-None) getUsers arguments in CYAN, long values cut."""
    given = {k: v for k, v in params.items() if v is not None}
    param_str = " ".join(
        f"{k}={_shorten(v, _MAX_LOGGED_PARAM_CHARS)}" for k, v in given.items()
    ) or "(no arguments)"
    logging.info(f"{_CYAN}{tool_name} <- {param_str}{_RESET}")


def _log_status(message: str, level: int = logging.INFO) -> None:
    """Log a status line in YELLOW; rejections and failures use WARNING."""
    logging.log(level, f"{_YELLOW}  {message}{_RESET}")


def _log_response(tool_name: str, result: FetchResult) -> str:
    """Log the tool response in GREEN, then return its text."""
    text = result.text
    outcome = "ok" if result.ok else "failed"
    logging.info(
        f"{_GREEN}  {tool_name} -> {outcome}: {_shorten(text, _MAX_LOGGED_CHARS)}{_RESET}"
    )
    return text


# =============================================================================
# Tool argument models
# =============================================================================
# These only describe SHAPES for the JSON schema FastMCP advertises.  Range
# checks (results > 0, page >= 1) live in core/schema.py.
# =============================================================================
class PasswordOptions(BaseModel):
    charset: list[PasswordCharset] = Field(description="The complexity of the password")
    min: Optional[StrictInt] = Field(default=None, description="The minimum length of the password")
    max: Optional[StrictInt] = Field(default=None, description="The maximum length of the password")


class PaginationOptions(BaseModel):
    page: Optional[StrictInt] = Field(default=None, description="The page number to retrieve")
    results: Optional[StrictInt] = Field(default=None, description="The number of results to retrieve")
    seed: Optional[StrictStr] = Field(default=None, description="The seed for the random user generation")


_NATIONALITIES_HELP = (
    "The nationalities of the user. Allowed: AU, BR, CA, CH, DE, DK, ES, FI, FR, "
    "GB, IE, IN, IR, MX, NL, NO, NZ, RS, TR, UA, US"
)
_FIELDS_HELP = (
    "Allowed: gender, name, location, email, login, registered, dob, phone, "
    "cell, id, picture, nat"
)


def register_tools(
    mcp: FastMCP,
    settings: Settings,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> None:
    """Register getUsers on an existing server.

    Args:
        mcp: The server to register on.
        settings: Upstream base URL and timeout.
        transport: Optional httpx transport for the upstream call.
    """

    @mcp.tool(name="getUsers")
    async def get_users(
        results: Annotated[
            Optional[StrictInt], Field(description="The number of users that generates")
        ] = None,
        gender: Annotated[
            Optional[Gender], Field(description="The gender of the user")
        ] = None,
        password: Optional[PasswordOptions] = None,
        seed: Annotated[
            Optional[StrictStr],
            Field(description="Seeds allow you to always generate the same set of users"),
        ] = None,
        nationalities: Annotated[
            Optional[list[Nationality]], Field(description=_NATIONALITIES_HELP)
        ] = None,
        pagination: Annotated[
            Optional[PaginationOptions],
            Field(description="You can request multiple pages of a seed with the page parameter"),
        ] = None,
        inc: Annotated[
            Optional[list[UserField]],
            Field(description=f"Includes only the specified fields in the response. {_FIELDS_HELP}"),
        ] = None,
        exc: Annotated[
            Optional[list[UserField]],
            Field(description=f"Excludes the specified fields from the response. {_FIELDS_HELP}"),
        ] = None,
    ) -> str:
        """Fetch a random user.

        Generates one or more random user profiles via randomuser.me and
        returns the API's JSON document as text.  Use seed (optionally with
        pagination) to get the same users again.  On any upstream failure
        the text is "Error fetching random users".
        """
        params = {
            "results": results,
            "gender": gender,
            "password": password.model_dump() if password is not None else None,
            "seed": seed,
            "nationalities": nationalities,
            "pagination": pagination.model_dump() if pagination is not None else None,
            "inc": inc,
            "exc": exc,
        }
        _log_request("getUsers", params)

        try:
            query = parse_user_query(params)
        except InvalidParameters as e:
            _log_status(f"rejected: {e}", logging.WARNING)
            raise ToolError(f"Invalid getUsers parameters: {e}") from e

        _log_status(f"GET {build_url(settings.base_url, query)}")
        result = await fetch_users(
            query,
            base_url=settings.base_url,
            timeout=settings.timeout,
            transport=transport,
        )
        if not result.ok:
            _log_status(f"upstream failure: {result.reason}", logging.WARNING)
        return _log_response("getUsers", result)


def create_server(
    settings: Optional[Settings] = None,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastMCP:
    """Create the MCP server with getUsers registered.

    Args:
        settings: Runtime settings; defaults point at randomuser.me.
        transport: Optional httpx transport for the upstream call.
    """
    settings = settings or Settings()
    mcp = FastMCP(SERVER_NAME)
    register_tools(mcp, settings, transport=transport)
    return mcp

# =============================================================================
# core/randomuser.py  -  randomuser.me Dispatcher
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Issues exactly ONE HTTP GET to the randomuser.me API for a UserQuery and
#   reports the outcome as a tagged FetchResult:
#
#     Idle -> InFlight -> FetchSuccess   (payload + compact JSON text)
#                      -> FetchFailure   (reason + detail)
#
#   Failure reasons:
#     - unreachable       connection refused, DNS, timeout, TLS ...
#     - upstream_status   the API answered with a non-2xx status
#     - malformed_body    the body is not valid JSON
#
# WHAT IT DOES NOT DO:
#   No retries, no caching, no reshaping of the document.  The upstream JSON
#   is passed through as-is.  The failure detail is logged here and never
#   returned to the MCP caller.
#
# CONCURRENCY:
#   Every call opens its own AsyncClient, so concurrent calls share nothing.
#   The await on client.get() is the only suspension point; cancelling the
#   caller cancels the request.
# =============================================================================

import json
import logging

import httpx

from core.models import FetchFailure, FetchResult, FetchSuccess, UserQuery
from core.query import build_url
from core.settings import DEFAULT_BASE_URL, DEFAULT_TIMEOUT_SECONDS

logger = logging.getLogger(__name__)


def _failure(reason: str, detail: str) -> FetchFailure:
    logger.warning("randomuser.me request failed (%s): %s", reason, detail)
    return FetchFailure(reason=reason, detail=detail)


async def fetch_users(
    query: UserQuery,
    *,
    base_url: str = DEFAULT_BASE_URL,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FetchResult:
    """Fetch random users for a validated query.

    Args:
        query: Validated parameters (see core/schema.py).
        base_url: API endpoint, without a trailing "?".
        timeout: Seconds allowed for the whole request.
        transport: Optional httpx transport, e.g. httpx.MockTransport in tests.

    Returns:
        FetchSuccess with the decoded document, or FetchFailure.  This
        function does not raise for network or upstream problems.
    """
    url = build_url(base_url, query)
    logger.debug("GET %s", url)

    try:
        async with httpx.AsyncClient(
            timeout=timeout, transport=transport, follow_redirects=True
        ) as client:
            response = await client.get(url)
    except httpx.RequestError as exc:
        return _failure("unreachable", f"{type(exc).__name__}: {exc}")

    if not response.is_success:
        return _failure("upstream_status", f"HTTP {response.status_code} from {url}")

    try:
        payload = response.json()
    except ValueError as exc:
        return _failure("malformed_body", f"{type(exc).__name__}: {exc}")

    text = json.dumps(payload, separators=(",", ":"), ensure_ascii=False)
    return FetchSuccess(payload=payload, text=text)

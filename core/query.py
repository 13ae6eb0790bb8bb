# =============================================================================
# core/query.py  -  Query String Builder
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Maps a validated UserQuery onto the flat query string the randomuser.me
#   API understands.  It is a pure function of its input: no I/O, no clock,
#   no randomness.  Any randomness is the upstream API's business.
#
# KEY ORDER:
#   Keys are emitted in a fixed order (results, gender, password, seed, nat,
#   page, inc, exc).  The API does not care about order, but tests do.
#
# OVERRIDES:
#   pagination.results and pagination.seed are written AFTER the top-level
#   results/seed, so they win.  The key keeps its original position.
#
# THE PASSWORD QUIRK:
#   The password descriptor ("upper,lower,8-12") is JSON-encoded before it
#   goes into the query, so the API receives it wrapped in literal quotes.
#   Existing clients rely on this exact value; keep it.
# =============================================================================

import json
from urllib.parse import urlencode

from core.models import PasswordSpec, UserQuery

# Commas separate list values in the randomuser.me API; keep them readable.
_SAFE_CHARS = ","


def format_password(spec: PasswordSpec) -> str:
    """Build the raw password descriptor, before JSON encoding.

    Examples:
        charset=(upper, lower), min=8, max=12  ->  "upper,lower,8-12"
        charset=(number,), min=5               ->  "number,5"
        charset=(), min=8                      ->  ",8"
    """
    value = ",".join(spec.charset)
    if spec.min and spec.max:
        value += f",{spec.min}-{spec.max}"
    elif spec.min:
        value += f",{spec.min}"
    elif spec.max:
        value += f",{spec.max}"
    return value


def _wants_password(spec: PasswordSpec | None) -> bool:
    return spec is not None and bool(spec.charset or spec.min or spec.max)


def build_query(query: UserQuery) -> dict[str, str]:
    """Build the ordered query parameters for one request.

    Args:
        query: The validated parameters.

    Returns:
        An insertion-ordered dict of API key -> value.  Absent fields, falsy
        scalars and empty collections produce no key.
    """
    params: dict[str, str] = {}

    if query.results:
        params["results"] = str(query.results)
    if query.gender:
        params["gender"] = query.gender
    if _wants_password(query.password):
        params["password"] = json.dumps(format_password(query.password))
    if query.seed:
        params["seed"] = query.seed
    if query.nationalities:
        params["nat"] = ",".join(query.nationalities)

    pagination = query.pagination
    if pagination is not None:
        if pagination.page:
            params["page"] = str(pagination.page)
        if pagination.results:
            params["results"] = str(pagination.results)
        if pagination.seed:
            params["seed"] = pagination.seed

    if query.inc:
        params["inc"] = ",".join(query.inc)
    if query.exc:
        params["exc"] = ",".join(query.exc)

    return params


def encode_query(params: dict[str, str]) -> str:
    """Percent-encode query parameters, leaving commas literal."""
    return urlencode(params, safe=_SAFE_CHARS)


def build_url(base_url: str, query: UserQuery) -> str:
    """Full request URL.  With no parameters this is ``base_url + "?"``."""
    return f"{base_url}?{encode_query(build_query(query))}"

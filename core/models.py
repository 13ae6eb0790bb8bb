# =============================================================================
# core/models.py  -  Data Models (the "nouns" of the system)
# =============================================================================
#
# These dataclasses define the shape of everything that flows through a
# getUsers call: the validated request parameters going in, and the tagged
# fetch result coming out.  They carry no behavior beyond trivial properties.
#
# All request models are FROZEN.  A UserQuery is built once by the validator
# (core/schema.py) and never mutated afterwards; the query builder only reads.
# =============================================================================

from dataclasses import dataclass, field
from typing import Any, Literal, Optional, Union, get_args


# -----------------------------------------------------------------------------
# Enumerations accepted by the randomuser.me API
# -----------------------------------------------------------------------------
Gender = Literal["male", "female"]

Nationality = Literal[
    "AU", "BR", "CA", "CH", "DE", "DK", "ES", "FI", "FR", "GB", "IE",
    "IN", "IR", "MX", "NL", "NO", "NZ", "RS", "TR", "UA", "US",
]

UserField = Literal[
    "gender", "name", "location", "email", "login", "registered",
    "dob", "phone", "cell", "id", "picture", "nat",
]

PasswordCharset = Literal["special", "upper", "lower", "number"]

GENDERS: tuple[str, ...] = get_args(Gender)
NATIONALITIES: tuple[str, ...] = get_args(Nationality)
USER_FIELDS: tuple[str, ...] = get_args(UserField)
PASSWORD_CHARSETS: tuple[str, ...] = get_args(PasswordCharset)


# -----------------------------------------------------------------------------
# PasswordSpec - the "password" option
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class PasswordSpec:
    """Password complexity and length for generated logins."""

    charset: tuple[str, ...] = ()      # Subset of PASSWORD_CHARSETS, may be empty
    min: Optional[int] = None          # Minimum length
    max: Optional[int] = None          # Maximum length


# -----------------------------------------------------------------------------
# Pagination - the "pagination" option
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class Pagination:
    """Page through a seeded result set.

    ``results`` and ``seed`` here override the top-level fields of the same
    name when the query string is built.
    """

    page: Optional[int] = None         # 1-based
    results: Optional[int] = None
    seed: Optional[str] = None


# -----------------------------------------------------------------------------
# UserQuery - the validated parameter object for one getUsers call
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class UserQuery:
    """Validated parameters for one getUsers invocation.

    Every field is optional.  Collections keep the caller's order.
    """

    results: Optional[int] = None
    gender: Optional[str] = None
    seed: Optional[str] = None
    nationalities: tuple[str, ...] = ()
    password: Optional[PasswordSpec] = None
    pagination: Optional[Pagination] = None
    inc: tuple[str, ...] = ()
    exc: tuple[str, ...] = ()


# -----------------------------------------------------------------------------
# FetchResult - tagged outcome of the upstream call
# -----------------------------------------------------------------------------
# Internally a call either succeeds with a payload or fails with a reason.
# At the MCP boundary both collapse to text (see FetchResult.text).
# -----------------------------------------------------------------------------
FETCH_ERROR_TEXT = "Error fetching random users"

FailureReason = Literal["unreachable", "upstream_status", "malformed_body"]


@dataclass(frozen=True)
class FetchSuccess:
    """The upstream JSON document, plus its compact re-serialization."""

    payload: Any
    text: str
    ok: bool = field(default=True, init=False)


@dataclass(frozen=True)
class FetchFailure:
    """An upstream call that produced no usable document."""

    reason: str                        # One of FailureReason
    detail: str = ""                   # Logged only, never returned to callers
    ok: bool = field(default=False, init=False)

    @property
    def text(self) -> str:
        return FETCH_ERROR_TEXT


FetchResult = Union[FetchSuccess, FetchFailure]

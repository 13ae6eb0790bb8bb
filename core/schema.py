# =============================================================================
# core/schema.py  -  Parameter Schema & Validator
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Turns an untrusted parameter mapping (whatever arrived in the getUsers
#   tool call) into a frozen UserQuery, or raises InvalidParameters listing
#   every problem found.
#
# HOW IT WORKS:
#   The constraints live in ONE table per object (USER_QUERY_SCHEMA,
#   PASSWORD_SCHEMA, PAGINATION_SCHEMA).  Each entry maps a field name to a
#   FieldRule.  A single generic function, _check(), knows how to enforce
#   every kind of rule.  Adding a parameter means adding a table row.
#
# RULES OF THE ROAD:
#   - None means "not given".  It is never an error, unless the rule is
#     required.
#   - Unknown keys are dropped silently.  They are never forwarded upstream.
#   - Nothing here touches the network.  If this module raises, no request
#     is made.
# =============================================================================

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, NamedTuple, Optional

from core.models import (
    GENDERS,
    NATIONALITIES,
    PASSWORD_CHARSETS,
    USER_FIELDS,
    Pagination,
    PasswordSpec,
    UserQuery,
)


class ValidationIssue(NamedTuple):
    path: str
    message: str


class InvalidParameters(ValueError):
    """Raised when a parameter mapping violates the schema."""

    def __init__(self, issues: list[ValidationIssue]):
        self.issues = list(issues)
        super().__init__("; ".join(f"{i.path}: {i.message}" for i in self.issues))


# -----------------------------------------------------------------------------
# FieldRule - one row of a constraint table
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class FieldRule:
    """Constraint for a single field.

    kind is one of:
      - "int"        integer (bool is rejected), optionally >= minimum
      - "str"        string
      - "enum"       string from choices
      - "enum_list"  list of strings from choices
      - "object"     nested mapping validated against fields
    """

    kind: str
    choices: tuple[str, ...] = ()
    minimum: Optional[int] = None
    required: bool = False
    fields: Optional[Mapping[str, "FieldRule"]] = None


PASSWORD_SCHEMA: dict[str, FieldRule] = {
    # Required when a password object is given, but may be empty.
    "charset": FieldRule("enum_list", choices=PASSWORD_CHARSETS, required=True),
    "min": FieldRule("int"),
    "max": FieldRule("int"),
}

PAGINATION_SCHEMA: dict[str, FieldRule] = {
    "page": FieldRule("int", minimum=1),
    "results": FieldRule("int"),
    "seed": FieldRule("str"),
}

USER_QUERY_SCHEMA: dict[str, FieldRule] = {
    "results": FieldRule("int", minimum=1),
    "gender": FieldRule("enum", choices=GENDERS),
    "password": FieldRule("object", fields=PASSWORD_SCHEMA),
    "seed": FieldRule("str"),
    "nationalities": FieldRule("enum_list", choices=NATIONALITIES),
    "pagination": FieldRule("object", fields=PAGINATION_SCHEMA),
    "inc": FieldRule("enum_list", choices=USER_FIELDS),
    "exc": FieldRule("enum_list", choices=USER_FIELDS),
}


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _check(value: Any, rule: FieldRule, path: str, issues: list[ValidationIssue]) -> Any:
    """Validate one value against its rule; return the cleaned value."""
    if rule.kind == "int":
        if not _is_int(value):
            issues.append(ValidationIssue(path, "expected an integer"))
        elif rule.minimum is not None and value < rule.minimum:
            issues.append(ValidationIssue(path, f"must be >= {rule.minimum}"))
        return value

    if rule.kind == "str":
        if not isinstance(value, str):
            issues.append(ValidationIssue(path, "expected a string"))
        return value

    if rule.kind == "enum":
        if not isinstance(value, str) or value not in rule.choices:
            issues.append(ValidationIssue(
                path, f"expected one of {', '.join(rule.choices)}, got {value!r}"
            ))
        return value

    if rule.kind == "enum_list":
        if isinstance(value, (str, bytes)) or not isinstance(value, (list, tuple)):
            issues.append(ValidationIssue(path, "expected a list"))
            return ()
        for index, item in enumerate(value):
            if not isinstance(item, str) or item not in rule.choices:
                issues.append(ValidationIssue(
                    f"{path}[{index}]",
                    f"expected one of {', '.join(rule.choices)}, got {item!r}",
                ))
        return tuple(value)

    if rule.kind == "object":
        if not isinstance(value, Mapping):
            issues.append(ValidationIssue(path, "expected an object"))
            return {}
        return _validate_mapping(value, rule.fields or {}, issues, prefix=f"{path}.")

    raise ValueError(f"Unknown rule kind {rule.kind!r} for {path}")


def _validate_mapping(
    params: Mapping[str, Any],
    schema: Mapping[str, FieldRule],
    issues: list[ValidationIssue],
    prefix: str = "",
) -> dict[str, Any]:
    cleaned: dict[str, Any] = {}
    for name, rule in schema.items():
        value = params.get(name)
        if value is None:
            if rule.required:
                issues.append(ValidationIssue(f"{prefix}{name}", "is required"))
            continue
        cleaned[name] = _check(value, rule, f"{prefix}{name}", issues)
    return cleaned


def validate_params(
    params: Mapping[str, Any],
    schema: Mapping[str, FieldRule] = USER_QUERY_SCHEMA,
) -> dict[str, Any]:
    """Check a mapping against a constraint table.

    Args:
        params: Raw parameters.  Keys not in the schema are ignored.
        schema: The constraint table to apply.

    Returns:
        A dict of the fields that were given, with lists converted to tuples
        and nested objects validated recursively.

    Raises:
        InvalidParameters: With every violation found, not just the first.
    """
    if not isinstance(params, Mapping):
        raise InvalidParameters([ValidationIssue("$", "expected an object")])

    issues: list[ValidationIssue] = []
    cleaned = _validate_mapping(params, schema, issues)
    if issues:
        raise InvalidParameters(issues)
    return cleaned


def parse_user_query(params: Optional[Mapping[str, Any]]) -> UserQuery:
    """Validate raw getUsers parameters and build a frozen UserQuery."""
    cleaned = validate_params(params or {})

    password = cleaned.pop("password", None)
    pagination = cleaned.pop("pagination", None)

    return UserQuery(
        password=PasswordSpec(**password) if password is not None else None,
        pagination=Pagination(**pagination) if pagination is not None else None,
        **cleaned,
    )

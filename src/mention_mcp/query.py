"""Query-string encoding for Mention API endpoints.

Each endpoint that takes query parameters declares a fixed plan: the
ordered list of parameters it emits and how each one is rendered. The
plan order is the emission order, so encoding is deterministic.

Rendering rules:
- absent (None) values are omitted entirely
- scalars emit key=value, booleans as true/false
- arrays emit one key=item pair per item, in order; the key is used
  exactly as declared (e.g. "alerts[]" for endpoints expecting brackets)
- top-N values emit true as 10, false as 0 and integers unchanged
- escaping is application/x-www-form-urlencoded
"""

from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum
from typing import Any
from urllib.parse import quote

import httpx

from .consts import COUNTRY_STATS_DEFAULT_TOP, COUNTRY_STATS_DISABLED


class ParamKind(StrEnum):
    SCALAR = "scalar"
    ARRAY = "array"
    TOP_N = "top_n"


@dataclass(frozen=True)
class QueryParam:
    """One query parameter: the emitted key and the argument it reads."""

    key: str
    field: str
    kind: ParamKind = ParamKind.SCALAR


QueryPlan = tuple[QueryParam, ...]


def scalar(key: str, field: str | None = None) -> QueryParam:
    return QueryParam(key, field or key, ParamKind.SCALAR)


def array(key: str, field: str | None = None) -> QueryParam:
    return QueryParam(key, field or key.removesuffix("[]"), ParamKind.ARRAY)


def top_n(key: str, field: str | None = None) -> QueryParam:
    return QueryParam(key, field or key, ParamKind.TOP_N)


LIST_ALERTS_PLAN: QueryPlan = (
    scalar("limit"),
    scalar("cursor"),
)

# Mentions: every filter in declaration order, arrays repeated without brackets
FETCH_MENTIONS_PLAN: QueryPlan = (
    scalar("since_id"),
    scalar("before_date"),
    scalar("not_before_date"),
    scalar("limit"),
    scalar("source"),
    scalar("unread"),
    scalar("favorite"),
    scalar("folder"),
    array("tone"),
    array("countries"),
    scalar("include_children"),
    scalar("sort"),
    array("languages"),
    scalar("timezone"),
    scalar("q"),
    scalar("cursor"),
)

# Stats: alerts first, then scalars, then bracketed array filters, then country_stats
FETCH_ALERT_STATS_PLAN: QueryPlan = (
    array("alerts[]"),
    scalar("from", "from_"),
    scalar("to"),
    scalar("timezone"),
    scalar("interval"),
    scalar("favorite"),
    scalar("important"),
    scalar("week_day_stats"),
    scalar("week_day_by_hour_stats"),
    scalar("influencers"),
    scalar("reach_per_interval_stats"),
    scalar("author_influence.score", "author_influence_score"),
    array("tones[]"),
    array("languages[]"),
    array("sources[]"),
    array("countries[]"),
    array("tags[]"),
    top_n("country_stats"),
)


def encode_value(value: Any) -> str:
    """Render a single value the way the Mention API expects it."""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def encode_top_n(value: bool | int) -> str:
    if value is True:
        return str(COUNTRY_STATS_DEFAULT_TOP)
    if value is False:
        return str(COUNTRY_STATS_DISABLED)
    return str(value)


def _lookup(args: Any, field: str) -> Any:
    if isinstance(args, Mapping):
        return args.get(field)
    return getattr(args, field, None)


def query_pairs(plan: QueryPlan, args: Any) -> list[tuple[str, str]]:
    """Ordered (key, value) pairs for `args` following `plan`."""
    pairs: list[tuple[str, str]] = []
    for param in plan:
        value = _lookup(args, param.field)
        if value is None:
            continue

        if param.kind is ParamKind.ARRAY:
            pairs.extend((param.key, encode_value(item)) for item in value)
        elif param.kind is ParamKind.TOP_N:
            pairs.append((param.key, encode_top_n(value)))
        else:
            pairs.append((param.key, encode_value(value)))
    return pairs


def encode_query(plan: QueryPlan, args: Any) -> str:
    """Encoded query string (without leading '?'); empty when nothing is set."""
    return str(httpx.QueryParams(query_pairs(plan, args)))


def build_endpoint(path: str, plan: QueryPlan, args: Any) -> str:
    """Path plus query string; no trailing '?' when there are no parameters."""
    query = encode_query(plan, args)
    return f"{path}?{query}" if query else path


def path_segment(value: Any) -> str:
    """Escape a caller-supplied value for use as a single path segment."""
    return quote(str(value), safe="")

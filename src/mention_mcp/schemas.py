"""Argument schemas for every tool, with validation helpers.

Each tool declares its arguments as a pydantic model. The same model
validates incoming arguments and produces the JSON schema advertised in
the tool listing, so constraints live in exactly one place.
"""

from typing import Annotated, Any, Literal, Mapping, TypeVar

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictInt,
    ValidationError,
)

from .exceptions import ArgumentValidationError

HEX_COLOR_PATTERN = r"^#[0-9a-fA-F]{6}$"

MAX_ALERT_LANGUAGES = 5

AlertSource = Literal[
    "twitter", "news", "web", "blogs", "videos", "forums", "images", "facebook"
]
MentionFolder = Literal["inbox", "archive", "spam", "trash"]
MentionSort = Literal[
    "published_at",
    "author_influence.score",
    "direct_reach",
    "cumulative_reach",
    "domain_reach",
]
StatsInterval = Literal["PT1H", "P1D", "P1W", "P1M"]

Tone = Annotated[StrictInt, Field(ge=-1, le=1)]
CountryCode = Annotated[str, Field(min_length=2, max_length=2)]
TopN = Annotated[StrictInt, Field(ge=0, le=100)]

ALERT_ID_DESCRIPTION = "The alert ID"
LANGUAGES_DESCRIPTION = (
    "Language codes to monitor. Use get_app_data tool to see which language "
    "codes are supported. Ask the user which language they would like to "
    "monitor. On advanced alerts, it only applies to monitored pages and "
    "review pages. For keyword monitoring use the 'lang' selector in the "
    "query string."
)
SOURCES_DESCRIPTION = (
    "Sources to monitor. List available sources using get_app_data tool. "
    "Ask the user which sources they want to monitor."
)


class ToolArgs(BaseModel):
    """Base for tool argument models; unknown keys are dropped."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class NoArgs(ToolArgs):
    """Tools that take no arguments."""


class ListAlertsArgs(ToolArgs):
    limit: StrictInt | None = Field(
        None, ge=1, le=100, description="Maximum number of alerts to return (1-100)"
    )
    cursor: str | None = Field(
        None, description="Pagination cursor for retrieving next page"
    )


class AlertIdArgs(ToolArgs):
    alert_id: str = Field(..., min_length=1, description=ALERT_ID_DESCRIPTION)


class GetAlertArgs(AlertIdArgs):
    pass


class PauseAlertArgs(AlertIdArgs):
    pass


class UnpauseAlertArgs(AlertIdArgs):
    pass


class MonitoredWebsite(BaseModel):
    domain: str = Field(..., min_length=1, description="Domain to specifically monitor")
    block_self: StrictBool | None = Field(
        None, description="Whether to block mentions from own site"
    )


class AlertSettings(ToolArgs):
    """Fields shared by basic and advanced alert creation."""

    group_id: str = Field(
        ...,
        min_length=1,
        description=(
            "Group ID to which the alert should be associated. Ask the user "
            "which group the alert should be created in"
        ),
    )
    name: str = Field(
        ..., min_length=1, max_length=255, description="Alert name (1-255 characters)"
    )
    description: str | None = Field(
        None, max_length=1000, description="Alert description (max 1000 characters)"
    )
    color: str | None = Field(
        None,
        pattern=HEX_COLOR_PATTERN,
        description="Alert color in hex color code format (e.g., '#05e363')",
    )
    languages: list[str] = Field(
        ..., max_length=MAX_ALERT_LANGUAGES, description=LANGUAGES_DESCRIPTION
    )
    sources: list[str] = Field(..., description=SOURCES_DESCRIPTION)
    blocked_sites: list[str] | None = Field(
        None,
        description="Sites from which mentions should not be tracked",
    )
    noise_detection: StrictBool = Field(False, description="Enable noise detection")


class CreateBasicAlertArgs(AlertSettings):
    included_keywords: list[str] = Field(
        ...,
        min_length=1,
        description="Keywords to include - at least one keyword that should be present in mentions",
    )
    required_keywords: list[str] | None = Field(
        None, description="Keywords that must be present in all mentions"
    )
    excluded_keywords: list[str] | None = Field(
        None, description="Keywords to exclude from mentions"
    )
    monitored_website: MonitoredWebsite | None = Field(
        None, description="Specific website monitoring configuration"
    )


class CreateAdvancedAlertArgs(AlertSettings):
    query_string: str = Field(
        ...,
        min_length=1,
        description=(
            "Advanced query string using boolean operators "
            "(e.g., '(NASA OR SpaceX) AND foo AND NOT baz')"
        ),
    )


class UpdateAlertArgs(AlertIdArgs):
    name: str | None = Field(
        None, min_length=1, max_length=255, description="New alert name (1-255 characters)"
    )
    description: str | None = Field(
        None, max_length=1000, description="New alert description (max 1000 characters)"
    )
    color: str | None = Field(
        None, pattern=HEX_COLOR_PATTERN, description="New alert color code"
    )
    query_type: Literal["basic", "advanced"] | None = Field(
        None, description="Type of query to update"
    )
    included_keywords: list[str] | None = Field(
        None, description="Keywords to include (for basic queries)"
    )
    required_keywords: list[str] | None = Field(
        None, description="Required keywords (for basic queries)"
    )
    excluded_keywords: list[str] | None = Field(
        None, description="Excluded keywords (for basic queries)"
    )
    query_string: str | None = Field(
        None, description="Advanced query string (for advanced queries)"
    )
    languages: list[str] | None = Field(
        None,
        max_length=MAX_ALERT_LANGUAGES,
        description="Language codes to monitor (max 5)",
    )
    countries: list[str] | None = Field(None, description="Country codes to monitor")
    sources: list[AlertSource] | None = Field(None, description="Sources to monitor")
    blocked_sites: list[str] | None = Field(
        None, description="Domains to exclude from monitoring"
    )
    noise_detection: StrictBool | None = Field(None, description="Enable noise detection")


class FetchMentionsArgs(AlertIdArgs):
    since_id: StrictInt | None = Field(
        None,
        description=(
            "Return mentions with ID greater than this value. Cannot be used "
            "with before_date, not_before_date, or cursor."
        ),
    )
    before_date: str | None = Field(
        None, description="Return mentions published before this datetime (ISO8601)"
    )
    not_before_date: str | None = Field(
        None,
        description="Ignore mentions older than this date (ISO8601). Must be used with before_date.",
    )
    limit: StrictInt | None = Field(
        None,
        ge=1,
        le=1000,
        description="Number of mentions to return. The API defaults to 20, max is 1000.",
    )
    source: str | None = Field(None, description="Filter by source")
    unread: StrictBool | None = Field(
        None,
        description="Return only unread mentions. Cannot be used with favorite, q, or tone.",
    )
    favorite: StrictBool | None = Field(
        None,
        description="Return only favorite mentions. Cannot be used with folder unless it is 'inbox' or 'archive'.",
    )
    folder: MentionFolder | None = Field(
        None, description="Filter by folder: inbox, archive, spam, trash"
    )
    tone: list[Tone] | None = Field(
        None,
        description="Filter by tone: -1 = negative, 0 = neutral, 1 = positive. Multiple values allowed.",
    )
    countries: list[CountryCode] | None = Field(
        None,
        description="Filter by country codes (ISO 3166-1 alpha-2). Multiple values allowed.",
    )
    include_children: StrictBool | None = Field(
        None, description="Whether to include child mentions"
    )
    sort: MentionSort | None = Field(None, description="Sort by field")
    languages: list[str] | None = Field(
        None, description="Filter by language codes. Multiple values allowed."
    )
    timezone: str | None = Field(
        None, description="Timezone for parsing date values in q parameter"
    )
    q: str | None = Field(None, description="Advanced keyword-based filtering")
    cursor: str | None = Field(
        None, description="Pagination cursor for navigating results"
    )


class FetchAlertStatsArgs(ToolArgs):
    alerts: list[str] = Field(
        ..., min_length=1, description="IDs of the alerts to compute statistics for"
    )
    from_: str | None = Field(
        None, alias="from", description="Start of the period (ISO8601 date or datetime)"
    )
    to: str | None = Field(
        None, description="End of the period (ISO8601 date or datetime)"
    )
    timezone: str | None = Field(
        None, description="Timezone used to bucket intervals (e.g., 'Europe/Paris')"
    )
    interval: StatsInterval | None = Field(
        None, description="Aggregation interval (ISO8601 duration)"
    )
    favorite: StrictBool | None = Field(None, description="Only count favorite mentions")
    important: StrictBool | None = Field(None, description="Only count important mentions")
    week_day_stats: StrictBool | None = Field(
        None, description="Include mention counts per week day"
    )
    week_day_by_hour_stats: StrictBool | None = Field(
        None, description="Include mention counts per week day and hour"
    )
    influencers: StrictBool | None = Field(None, description="Include top influencers")
    reach_per_interval_stats: StrictBool | None = Field(
        None, description="Include reach per interval"
    )
    author_influence_score: StrictInt | None = Field(
        None,
        ge=0,
        le=10,
        alias="author_influence.score",
        description="Minimum author influence score (0-10)",
    )
    tones: list[Tone] | None = Field(
        None, description="Filter by tone: -1 = negative, 0 = neutral, 1 = positive"
    )
    languages: list[str] | None = Field(
        None, max_length=MAX_ALERT_LANGUAGES, description="Filter by language codes"
    )
    sources: list[str] | None = Field(None, description="Filter by sources")
    countries: list[str] | None = Field(None, description="Filter by country codes")
    tags: list[str] | None = Field(None, description="Filter by tag IDs")
    country_stats: StrictBool | TopN | None = Field(
        None,
        description=(
            "Include the top countries. true returns the top 10, false disables "
            "it, an integer returns that many countries."
        ),
    )


class BuildBooleanQueryArgs(ToolArgs):
    instructions: str = Field(
        ...,
        min_length=1,
        description=(
            "What the Boolean query should match, e.g., 'Mentions about NASA "
            "in English from the US or Canada'"
        ),
    )


ArgsT = TypeVar("ArgsT", bound=BaseModel)


def format_validation_errors(error: ValidationError) -> list[str]:
    """One line per violated constraint: path, message and offending type."""
    lines = []
    for err in error.errors():
        path = ".".join(str(part) for part in err["loc"]) or "<root>"
        actual = type(err.get("input")).__name__
        lines.append(f"{path}: {err['msg']} (got {actual})")
    return lines


def validate_arguments(model: type[ArgsT], raw: Any) -> ArgsT:
    """Validate raw tool arguments against `model`.

    Args:
        model: Argument model of the tool being invoked.
        raw: Untyped arguments as received from the agent. None means {}.

    Returns:
        Validated model instance with defaults applied.

    Raises:
        ArgumentValidationError: Listing every violated constraint.
    """
    if raw is None:
        raw = {}
    if not isinstance(raw, Mapping):
        raise ArgumentValidationError(
            f"Invalid arguments for {model.__name__}: expected an object",
            errors=[f"<root>: Input should be an object (got {type(raw).__name__})"],
        )

    try:
        return model.model_validate(dict(raw))
    except ValidationError as e:
        errors = format_validation_errors(e)
        raise ArgumentValidationError(
            f"Invalid arguments: {'; '.join(errors)}",
            errors=errors,
            suggestions=["Check the tool's input schema and retry with corrected arguments"],
        ) from e


def input_schema(model: type[BaseModel]) -> dict[str, Any]:
    """JSON schema advertised to agents for a tool's arguments."""
    schema = model.model_json_schema(by_alias=True)
    schema.setdefault("properties", {})
    schema.setdefault("required", [])
    return schema

"""MCP tools: declarative tool specs and the registry that runs them."""

import json
import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel

from .account import AccountCache
from .client import MentionClient
from .consts import APP_DATA_PATH
from .exceptions import MentionMCPError, UnknownToolError, UpstreamError
from .models import (
    AccountResponse,
    AccountSummary,
    AppDataResponse,
    AppDataSummary,
    CreateAlertResponse,
    ToolResult,
    parse_response,
)
from .query import (
    FETCH_ALERT_STATS_PLAN,
    FETCH_MENTIONS_PLAN,
    LIST_ALERTS_PLAN,
    build_endpoint,
    path_segment,
)
from .schemas import (
    CreateAdvancedAlertArgs,
    CreateBasicAlertArgs,
    FetchAlertStatsArgs,
    FetchMentionsArgs,
    GetAlertArgs,
    ListAlertsArgs,
    NoArgs,
    PauseAlertArgs,
    ToolArgs,
    UnpauseAlertArgs,
    UpdateAlertArgs,
    input_schema,
    validate_arguments,
)

logger = logging.getLogger("mention-mcp.tools")

BASIC_QUERY_FIELDS = (
    "included_keywords",
    "required_keywords",
    "excluded_keywords",
    "monitored_website",
)
ADVANCED_QUERY_FIELDS = ("query_string",)

BOOLEAN_QUERY_TIPS = [
    "Use url:domain.com instead of domain.com for websites",
    "Ensure proper boolean operators (AND, OR, NOT)",
    'Use quotes for phrases: "cold email"',
    "Keep the query under 1700 characters",
    'Example: (Lemlist OR url:lemlist.com OR "cold email") AND -spam',
    "Use the build-boolean-query prompt to draft a valid query",
]


@dataclass(frozen=True)
class ApiRequest:
    """Endpoint, method and body of one Mention API call."""

    endpoint: str
    method: str = "GET"
    body: dict[str, Any] | None = None


@dataclass(frozen=True)
class ToolDefinition:
    """Tool metadata advertised to agents."""

    name: str
    description: str
    input_schema: dict[str, Any]


@dataclass(frozen=True)
class ToolSpec:
    """Static definition of one tool.

    `build` turns validated arguments (and the account id, when
    `requires_account` is set) into an API request. Tools without `build`
    are answered from the cached account context. `response_model`, when
    set, validates the response before `render` turns it into result text.
    """

    name: str
    description: str
    args_model: type[ToolArgs]
    build: Callable[[Any, str | None], ApiRequest] | None
    render: Callable[[Any, Any], str]
    requires_account: bool = True
    response_model: type[BaseModel] | None = None
    on_error: Callable[[MentionMCPError], None] | None = None

    def definition(self) -> ToolDefinition:
        return ToolDefinition(
            name=self.name,
            description=self.description,
            input_schema=input_schema(self.args_model),
        )


# =============================================================================
# RESULT RENDERING
# =============================================================================


def to_json_text(payload: Any) -> str:
    """Pretty-print a payload with 2-space indentation."""
    if isinstance(payload, BaseModel):
        payload = payload.model_dump()
    return json.dumps(payload, indent=2, ensure_ascii=False)


def render_json(payload: Any, args: Any) -> str:
    return to_json_text(payload)


def render_created_alert(payload: CreateAlertResponse, args: Any) -> str:
    alert_id = payload.alert.id
    logger.info(f"Alert '{args.name}' created with id {alert_id}")
    return alert_id


def render_account_summary(payload: AccountResponse, args: Any) -> str:
    return to_json_text(AccountSummary.from_response(payload).to_json())


def render_app_data_summary(payload: AppDataResponse, args: Any) -> str:
    return to_json_text(AppDataSummary.from_response(payload).to_json())


# =============================================================================
# REQUEST BUILDERS
# =============================================================================


def alerts_path(account_id: str) -> str:
    return f"/accounts/{path_segment(account_id)}/alerts"


def alert_path(account_id: str, alert_id: str) -> str:
    return f"{alerts_path(account_id)}/{path_segment(alert_id)}"


def build_app_data(args: NoArgs, account_id: str | None) -> ApiRequest:
    return ApiRequest(APP_DATA_PATH)


def build_list_alerts(args: ListAlertsArgs, account_id: str) -> ApiRequest:
    return ApiRequest(build_endpoint(alerts_path(account_id), LIST_ALERTS_PLAN, args))


def build_get_alert(args: GetAlertArgs, account_id: str) -> ApiRequest:
    return ApiRequest(alert_path(account_id, args.alert_id))


def _query_section(args: BaseModel, query_type: str, fields: tuple[str, ...]) -> dict:
    query = {"type": query_type}
    query.update(args.model_dump(include=set(fields), exclude_none=True))
    return query


def build_create_basic_alert(args: CreateBasicAlertArgs, account_id: str) -> ApiRequest:
    body = args.model_dump(exclude=set(BASIC_QUERY_FIELDS), exclude_none=True)
    body["query"] = _query_section(args, "basic", BASIC_QUERY_FIELDS)
    return ApiRequest(alerts_path(account_id), "POST", body)


def build_create_advanced_alert(
    args: CreateAdvancedAlertArgs, account_id: str
) -> ApiRequest:
    body = args.model_dump(exclude=set(ADVANCED_QUERY_FIELDS), exclude_none=True)
    body["query"] = _query_section(args, "advanced", ADVANCED_QUERY_FIELDS)
    return ApiRequest(alerts_path(account_id), "POST", body)


def build_update_alert(args: UpdateAlertArgs, account_id: str) -> ApiRequest:
    query_fields = {"alert_id", "query_type", *BASIC_QUERY_FIELDS, *ADVANCED_QUERY_FIELDS}
    body = args.model_dump(exclude=query_fields, exclude_none=True)

    if args.query_type == "basic":
        body["query"] = _query_section(args, "basic", BASIC_QUERY_FIELDS)
    elif args.query_type == "advanced":
        body["query"] = _query_section(args, "advanced", ADVANCED_QUERY_FIELDS)

    return ApiRequest(alert_path(account_id, args.alert_id), "PUT", body)


def build_pause_alert(args: PauseAlertArgs, account_id: str) -> ApiRequest:
    return ApiRequest(f"{alert_path(account_id, args.alert_id)}/pause", "POST")


def build_unpause_alert(args: UnpauseAlertArgs, account_id: str) -> ApiRequest:
    return ApiRequest(f"{alert_path(account_id, args.alert_id)}/unpause", "POST")


def build_fetch_mentions(args: FetchMentionsArgs, account_id: str) -> ApiRequest:
    path = f"{alert_path(account_id, args.alert_id)}/mentions"
    return ApiRequest(build_endpoint(path, FETCH_MENTIONS_PLAN, args))


def build_fetch_alert_stats(args: FetchAlertStatsArgs, account_id: str) -> ApiRequest:
    path = f"/accounts/{path_segment(account_id)}/stats"
    return ApiRequest(build_endpoint(path, FETCH_ALERT_STATS_PLAN, args))


def explain_boolean_query_error(error: MentionMCPError) -> None:
    """Attach boolean-query guidance when the API rejected the query string."""
    if not isinstance(error, UpstreamError):
        return
    haystack = error.message
    if error.body is not None:
        haystack += json.dumps(error.body, default=str)
    if "boolean_errors" in haystack:
        error.suggestions.extend(BOOLEAN_QUERY_TIPS)


# =============================================================================
# TOOL CATALOGUE
# =============================================================================
# Declaration order is the listing order.

TOOLS: tuple[ToolSpec, ...] = (
    ToolSpec(
        name="get_account_info",
        description=(
            "Get current account information including subscription plan, account ID, "
            "and capabilities. This tool should be called first to understand account "
            "limitations and determine which alert creation tools are available."
        ),
        args_model=NoArgs,
        build=None,
        render=render_account_summary,
        requires_account=False,
    ),
    ToolSpec(
        name="get_app_data",
        description=(
            "Get application configuration data including available languages, "
            "countries and sources needed for creating alerts."
        ),
        args_model=NoArgs,
        build=build_app_data,
        render=render_app_data_summary,
        requires_account=False,
        response_model=AppDataResponse,
    ),
    ToolSpec(
        name="list_alerts",
        description="List all monitoring alerts for the current account with pagination support.",
        args_model=ListAlertsArgs,
        build=build_list_alerts,
        render=render_json,
    ),
    ToolSpec(
        name="get_alert",
        description="Get detailed information about a specific alert by its ID.",
        args_model=GetAlertArgs,
        build=build_get_alert,
        render=render_json,
    ),
    ToolSpec(
        name="create_basic_alert",
        description=(
            "Create a new basic monitoring alert. Basic alerts use simple keyword "
            "matching with included_keywords, required_keywords, and excluded_keywords arrays."
        ),
        args_model=CreateBasicAlertArgs,
        build=build_create_basic_alert,
        render=render_created_alert,
        response_model=CreateAlertResponse,
    ),
    ToolSpec(
        name="create_advanced_alert",
        description=(
            "Create a new advanced monitoring alert with boolean query syntax. Advanced "
            "alerts use complex query strings with boolean operators like AND, OR, NOT."
        ),
        args_model=CreateAdvancedAlertArgs,
        build=build_create_advanced_alert,
        render=render_created_alert,
        response_model=CreateAlertResponse,
        on_error=explain_boolean_query_error,
    ),
    ToolSpec(
        name="update_alert",
        description="Update an existing alert with new criteria or settings.",
        args_model=UpdateAlertArgs,
        build=build_update_alert,
        render=render_json,
    ),
    ToolSpec(
        name="pause_alert",
        description="Temporarily pause monitoring for a specific alert.",
        args_model=PauseAlertArgs,
        build=build_pause_alert,
        render=render_json,
    ),
    ToolSpec(
        name="unpause_alert",
        description="Resume monitoring for a previously paused alert.",
        args_model=UnpauseAlertArgs,
        build=build_unpause_alert,
        render=render_json,
    ),
    ToolSpec(
        name="fetch_mentions",
        description=(
            "Retrieve mentions associated with a specific alert. Supports various filters "
            "like source, folder, tone, countries, languages, and advanced search queries."
        ),
        args_model=FetchMentionsArgs,
        build=build_fetch_mentions,
        render=render_json,
    ),
    ToolSpec(
        name="fetch_alert_stats",
        description=(
            "Retrieve statistics for one or more alerts including mentions per interval, "
            "tones, influencers, geographical data, and reach metrics. Supports flexible "
            "date ranges, filtering, and aggregation options."
        ),
        args_model=FetchAlertStatsArgs,
        build=build_fetch_alert_stats,
        render=render_json,
    ),
)


class ToolRegistry:
    """Looks up tools by name and runs the validate/request/render pipeline."""

    def __init__(
        self,
        client: MentionClient,
        account_cache: AccountCache | None = None,
        tools: tuple[ToolSpec, ...] = TOOLS,
    ):
        self.client = client
        self.account_cache = account_cache or AccountCache(client)
        self._tools = {tool.name: tool for tool in tools}
        logger.info(f"Tool registry initialized with {len(self._tools)} tools")

    def list_tools(self) -> list[ToolDefinition]:
        """Tool definitions in declaration order."""
        return [tool.definition() for tool in self._tools.values()]

    def get(self, name: str) -> ToolSpec:
        """Look up a tool spec.

        Raises:
            UnknownToolError: If no tool is registered under `name`.
        """
        try:
            return self._tools[name]
        except KeyError:
            raise UnknownToolError(
                f"Unknown tool: {name}",
                suggestions=[f"Available tools: {', '.join(self._tools)}"],
                context={"tool": name},
            ) from None

    async def invoke(self, name: str, raw_args: Any) -> ToolResult:
        """Validate arguments, call the Mention API and render the result.

        Args:
            name: Tool name.
            raw_args: Untyped arguments from the agent.

        Returns:
            ToolResult with one text block.

        Raises:
            UnknownToolError: If the tool does not exist.
            ArgumentValidationError: If arguments violate the tool schema.
            MentionMCPError: Any request or response failure, unchanged.
        """
        logger.info(f"Tool call started: {name}")
        try:
            spec = self.get(name)
            text = await self._run(spec, raw_args)
        except MentionMCPError as e:
            logger.error(
                f"Tool call failed: {name} ({e.kind}): {e.message} - arguments: {raw_args!r}"
            )
            raise

        logger.info(f"Tool call completed: {name}")
        return ToolResult.from_text(text)

    async def _run(self, spec: ToolSpec, raw_args: Any) -> str:
        args = validate_arguments(spec.args_model, raw_args)

        try:
            if spec.build is None:
                payload = await self.account_cache.get_account_info()
            else:
                account_id = None
                if spec.requires_account:
                    account_id = await self.account_cache.get_account_id()

                request = spec.build(args, account_id)
                payload = await self.client.request(
                    request.endpoint, request.method, json_body=request.body
                )

            if spec.response_model is not None:
                payload = parse_response(spec.response_model, payload)
        except MentionMCPError as e:
            if spec.on_error is not None:
                spec.on_error(e)
            raise

        return spec.render(payload, args)

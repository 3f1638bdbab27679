from typing import Any, TypeVar

from mcp.types import TextContent
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .exceptions import UpstreamShapeError

# =============================================================================
# TOOL RESULT ENVELOPE
# =============================================================================
# Single result type returned by every tool invocation


class ToolResult(BaseModel):
    """Uniform tool result: a single text content block."""

    content: list[TextContent] = Field(
        ..., description="Content blocks returned to the agent"
    )

    @classmethod
    def from_text(cls, text: str) -> "ToolResult":
        return cls(content=[TextContent(type="text", text=text)])

    @property
    def text(self) -> str:
        """Text of the first content block."""
        return self.content[0].text


# =============================================================================
# MENTION API RESPONSE MODELS
# =============================================================================
# Only the fields this server reads are declared; anything else the API
# sends is ignored during validation.


class Group(BaseModel):
    """Alert group the account can attach alerts to."""

    id: str
    name: str


class Subscription(BaseModel):
    advanced_query_access: bool = Field(
        ..., description="Whether the plan allows boolean-query alerts"
    )


class Account(BaseModel):
    id: str
    subscription: Subscription
    groups: list[Group] | None = None


class AccountResponse(BaseModel):
    """Body of GET /accounts/me."""

    account: Account


class LanguageInfo(BaseModel):
    name: str


class SourceInfo(BaseModel):
    name: str
    hidden: bool


class AppDataResponse(BaseModel):
    """Body of GET /app/data."""

    alert_languages: dict[str, LanguageInfo] | None = None
    alert_countries: dict[str, str] | None = None
    alert_sources: dict[str, SourceInfo] | None = None

    @field_validator("alert_languages", "alert_countries", "alert_sources", mode="before")
    @classmethod
    def _empty_list_as_empty_map(cls, value):
        # The API serializes an empty map as []
        if isinstance(value, list) and not value:
            return {}
        return value


class CreatedAlert(BaseModel):
    id: str


class CreateAlertResponse(BaseModel):
    """Body of POST /accounts/{id}/alerts."""

    alert: CreatedAlert


# =============================================================================
# NARROWED PROJECTIONS
# =============================================================================
# Compact views of read-heavy responses. Agents have limited context, so
# these keep only what is needed to pick groups, languages and sources.


class AccountSummary(BaseModel):
    """Compact view of the account for alert creation."""

    model_config = ConfigDict(populate_by_name=True)

    account_id: str = Field(..., alias="accountId")
    can_create_advanced_alert: bool = Field(..., alias="canCreateAdvancedAlert")
    groups: list[Group] = Field(default_factory=list)

    @classmethod
    def from_response(cls, response: AccountResponse) -> "AccountSummary":
        account = response.account
        return cls(
            account_id=account.id,
            can_create_advanced_alert=account.subscription.advanced_query_access,
            groups=[Group(id=g.id, name=g.name) for g in account.groups or []],
        )

    def to_json(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


class AppDataSummary(BaseModel):
    """Codes accepted when creating alerts; hidden sources are dropped."""

    languages: list[str] = Field(default_factory=list)
    countries: list[str] = Field(default_factory=list)
    sources: list[str] = Field(default_factory=list)

    @classmethod
    def from_response(cls, response: AppDataResponse) -> "AppDataSummary":
        return cls(
            languages=list(response.alert_languages or {}),
            countries=list(response.alert_countries or {}),
            sources=[
                code
                for code, source in (response.alert_sources or {}).items()
                if not source.hidden
            ],
        )

    def to_json(self) -> dict[str, Any]:
        return self.model_dump()


ModelT = TypeVar("ModelT", bound=BaseModel)


def parse_response(model: type[ModelT], payload: Any) -> ModelT:
    """Validate a successful response body against its expected model.

    Raises:
        UpstreamShapeError: If the payload does not conform to `model`.
    """
    try:
        return model.model_validate(payload)
    except ValidationError as e:
        raise UpstreamShapeError(
            f"Unexpected response shape from Mention API ({model.__name__})",
            errors=[
                f"{'.'.join(str(p) for p in err['loc']) or '<root>'}: {err['msg']}"
                for err in e.errors()
            ],
            body=payload,
        ) from e

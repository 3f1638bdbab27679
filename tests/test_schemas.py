"""Tests for tool argument schemas and validation"""

import json

import pytest

from mention_mcp.exceptions import ArgumentValidationError, ErrorKind
from mention_mcp.schemas import (
    CreateAdvancedAlertArgs,
    CreateBasicAlertArgs,
    FetchAlertStatsArgs,
    HEX_COLOR_PATTERN,
    FetchMentionsArgs,
    GetAlertArgs,
    ListAlertsArgs,
    NoArgs,
    UpdateAlertArgs,
    input_schema,
    validate_arguments,
)

BASIC_ALERT = {
    "group_id": "group-1",
    "name": "Brand watch",
    "included_keywords": ["acme"],
    "languages": ["en"],
    "sources": ["web", "news"],
}

ADVANCED_ALERT = {
    "group_id": "group-1",
    "name": "Space",
    "query_string": "(NASA OR SpaceX) AND mars",
    "languages": ["en"],
    "sources": ["web"],
}


class TestValidateArguments:
    def test_valid_basic_alert_applies_defaults(self):
        args = validate_arguments(CreateBasicAlertArgs, BASIC_ALERT)

        assert args.name == "Brand watch"
        assert args.noise_detection is False
        assert args.required_keywords is None

    def test_none_is_empty_object(self):
        assert isinstance(validate_arguments(NoArgs, None), NoArgs)
        assert validate_arguments(ListAlertsArgs, None).limit is None

    def test_non_object_rejected(self):
        with pytest.raises(ArgumentValidationError) as exc_info:
            validate_arguments(ListAlertsArgs, ["limit", 10])

        assert exc_info.value.kind == ErrorKind.VALIDATION
        assert "got list" in exc_info.value.errors[0]

    def test_unknown_keys_dropped(self):
        args = validate_arguments(GetAlertArgs, {"alert_id": "a1", "extra": 1})
        assert args.model_dump() == {"alert_id": "a1"}

    def test_every_violation_reported(self):
        with pytest.raises(ArgumentValidationError) as exc_info:
            validate_arguments(
                CreateBasicAlertArgs,
                {**BASIC_ALERT, "name": "", "color": "red", "included_keywords": []},
            )

        errors = exc_info.value.errors
        assert len(errors) == 3
        assert any(e.startswith("name:") for e in errors)
        assert any(e.startswith("color:") for e in errors)
        assert any(e.startswith("included_keywords:") for e in errors)

    def test_error_includes_actual_type(self):
        with pytest.raises(ArgumentValidationError) as exc_info:
            validate_arguments(GetAlertArgs, {"alert_id": 42})

        assert exc_info.value.errors == [
            "alert_id: Input should be a valid string (got int)"
        ]

    @pytest.mark.parametrize(
        "overrides,field",
        [
            ({"name": ""}, "name"),
            ({"name": "x" * 256}, "name"),
            ({"description": "x" * 1001}, "description"),
            ({"color": "#12345"}, "color"),
            ({"color": "#GGGGGG"}, "color"),
            ({"color": "05e363"}, "color"),
            ({"included_keywords": []}, "included_keywords"),
            ({"languages": ["en", "fr", "de", "es", "it", "pt"]}, "languages"),
            ({"group_id": ""}, "group_id"),
            ({"monitored_website": {"block_self": True}}, "monitored_website.domain"),
        ],
    )
    def test_basic_alert_constraints(self, overrides, field):
        with pytest.raises(ArgumentValidationError) as exc_info:
            validate_arguments(CreateBasicAlertArgs, {**BASIC_ALERT, **overrides})

        assert any(e.startswith(f"{field}:") for e in exc_info.value.errors)

    def test_basic_alert_requires_sources_and_languages(self):
        raw = {k: v for k, v in BASIC_ALERT.items() if k not in ("sources", "languages")}
        with pytest.raises(ArgumentValidationError) as exc_info:
            validate_arguments(CreateBasicAlertArgs, raw)

        assert len(exc_info.value.errors) == 2

    def test_nested_monitored_website(self):
        args = validate_arguments(
            CreateBasicAlertArgs,
            {**BASIC_ALERT, "monitored_website": {"domain": "acme.com", "block_self": True}},
        )
        assert args.monitored_website.domain == "acme.com"
        assert args.monitored_website.block_self is True

    def test_valid_color_and_explicit_noise_detection(self):
        args = validate_arguments(
            CreateBasicAlertArgs,
            {**BASIC_ALERT, "color": "#05e363", "noise_detection": True},
        )
        assert args.color == "#05e363"
        assert args.noise_detection is True

    def test_advanced_alert_requires_query_string(self):
        raw = {k: v for k, v in ADVANCED_ALERT.items() if k != "query_string"}
        with pytest.raises(ArgumentValidationError) as exc_info:
            validate_arguments(CreateAdvancedAlertArgs, raw)

        assert exc_info.value.errors[0].startswith("query_string:")

    @pytest.mark.parametrize("limit", [0, 101, -5, True, "10", 10.5])
    def test_list_alerts_limit_bounds(self, limit):
        with pytest.raises(ArgumentValidationError):
            validate_arguments(ListAlertsArgs, {"limit": limit})

    @pytest.mark.parametrize("limit", [1, 50, 100])
    def test_list_alerts_limit_accepted(self, limit):
        assert validate_arguments(ListAlertsArgs, {"limit": limit}).limit == limit

    def test_update_alert_source_vocabulary(self):
        args = validate_arguments(
            UpdateAlertArgs, {"alert_id": "a1", "sources": ["twitter", "news"]}
        )
        assert args.sources == ["twitter", "news"]

        with pytest.raises(ArgumentValidationError):
            validate_arguments(UpdateAlertArgs, {"alert_id": "a1", "sources": ["radio"]})

    def test_update_alert_query_type_enum(self):
        with pytest.raises(ArgumentValidationError):
            validate_arguments(UpdateAlertArgs, {"alert_id": "a1", "query_type": "fuzzy"})

    @pytest.mark.parametrize(
        "overrides",
        [
            {"tone": [2]},
            {"tone": [True, False]},
            {"tone": ["1"]},
            {"unread": "true"},
            {"since_id": "100"},
            {"countries": ["USA"]},
            {"folder": "drafts"},
            {"sort": "random"},
            {"limit": 1001},
        ],
    )
    def test_fetch_mentions_constraints(self, overrides):
        with pytest.raises(ArgumentValidationError):
            validate_arguments(FetchMentionsArgs, {"alert_id": "a1", **overrides})

    def test_fetch_mentions_requires_alert_id(self):
        with pytest.raises(ArgumentValidationError) as exc_info:
            validate_arguments(FetchMentionsArgs, {})

        assert exc_info.value.errors[0].startswith("alert_id:")


class TestCountryStatsUnion:
    @pytest.mark.parametrize("value", [True, False, 0, 15, 100])
    def test_accepted(self, value):
        args = validate_arguments(
            FetchAlertStatsArgs, {"alerts": ["a1"], "country_stats": value}
        )
        assert args.country_stats == value
        assert type(args.country_stats) is type(value)

    @pytest.mark.parametrize("value", [101, -1, [10], {"top": 5}, "10", "true", 1.0])
    def test_rejected(self, value):
        with pytest.raises(ArgumentValidationError):
            validate_arguments(FetchAlertStatsArgs, {"alerts": ["a1"], "country_stats": value})


class TestStatsArgs:
    def test_aliases(self):
        args = validate_arguments(
            FetchAlertStatsArgs,
            {"alerts": ["a1"], "from": "2024-01-01", "author_influence.score": 5},
        )
        assert args.from_ == "2024-01-01"
        assert args.author_influence_score == 5

    def test_alerts_required_non_empty(self):
        with pytest.raises(ArgumentValidationError):
            validate_arguments(FetchAlertStatsArgs, {"alerts": []})

    def test_interval_vocabulary(self):
        assert validate_arguments(
            FetchAlertStatsArgs, {"alerts": ["a1"], "interval": "P1D"}
        ).interval == "P1D"

        with pytest.raises(ArgumentValidationError):
            validate_arguments(FetchAlertStatsArgs, {"alerts": ["a1"], "interval": "daily"})


class TestInputSchema:
    def test_no_args_schema(self):
        schema = input_schema(NoArgs)
        assert schema["type"] == "object"
        assert schema["properties"] == {}
        assert schema["required"] == []

    def test_constraints_exposed(self):
        schema = input_schema(CreateBasicAlertArgs)
        props = schema["properties"]

        assert set(schema["required"]) == {
            "group_id",
            "name",
            "languages",
            "sources",
            "included_keywords",
        }
        assert props["name"]["maxLength"] == 255
        assert HEX_COLOR_PATTERN in json.dumps(props["color"])
        assert props["languages"]["maxItems"] == 5
        assert props["noise_detection"]["default"] is False

    def test_aliases_used_in_schema(self):
        props = input_schema(FetchAlertStatsArgs)["properties"]
        assert "from" in props
        assert "author_influence.score" in props
        assert "from_" not in props


class TestStrictScalarTypes:
    """Booleans and numbers are never coerced across types"""

    def test_boolean_not_accepted_as_score(self):
        with pytest.raises(ArgumentValidationError) as exc_info:
            validate_arguments(
                FetchAlertStatsArgs, {"alerts": ["a1"], "author_influence.score": True}
            )

        assert exc_info.value.errors[0].startswith("author_influence.score:")

    def test_string_not_accepted_as_flag(self):
        with pytest.raises(ArgumentValidationError):
            validate_arguments(CreateBasicAlertArgs, {**BASIC_ALERT, "noise_detection": "yes"})

    def test_integer_not_accepted_as_flag(self):
        with pytest.raises(ArgumentValidationError):
            validate_arguments(FetchAlertStatsArgs, {"alerts": ["a1"], "influencers": 1})

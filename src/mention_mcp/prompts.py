"""MCP prompts."""

from mcp import types

from .schemas import BuildBooleanQueryArgs, validate_arguments

BUILD_BOOLEAN_QUERY = "build-boolean-query"

BOOLEAN_QUERY_RULES = """You are generating a valid Boolean query string using the following rules:
1. Combine clauses using AND, OR, and NOT. Wrap mixed clauses in parentheses.
2. A clause can be:
   - A term: single word (e.g. NASA)
   - A quoted term: multiple words in quotes (e.g. "Space Station")
   - A nested query in parentheses: (NASA AND innovation)
3. Use "-" or "NOT" to negate clauses. No space after "-".
4. Use wildcards: * matches multiple chars, ? matches one char.
5. Use quoted terms with ~N (1 <= N <= 6) to allow proximity: "Mars Rover"~3
6. Use NEAR/N operator: "Mars" NEAR/2 "Rover"
7. Use selectors to restrict where clauses match:
   - url:nasa.gov
   - source_country:(US OR CA)
   - lang:en
   - title:"SpaceX"
   - body:exploration
   - source:twitter
   - twitter_followers:1000
   - -has:source_country
8. Punctuation matters in quoted terms. If uncertain, match all forms.
9. Restrictions:
   - Max 1700 characters
   - No negative-only queries
   - No negation inside OR
   - Stop words alone not allowed in OR
   - Max term length: 128 chars
Generate a Boolean query for the following:
"""

PROMPTS: dict[str, types.Prompt] = {
    BUILD_BOOLEAN_QUERY: types.Prompt(
        name=BUILD_BOOLEAN_QUERY,
        description=(
            "Generate a valid Boolean query string using Boolean operators, quoted "
            "terms, proximity, and field selectors"
        ),
        arguments=[
            types.PromptArgument(
                name="instructions",
                description=BuildBooleanQueryArgs.model_fields["instructions"].description,
                required=True,
            )
        ],
    ),
}


def list_prompts() -> list[types.Prompt]:
    return list(PROMPTS.values())


def get_prompt(name: str, arguments: dict[str, str] | None) -> types.GetPromptResult:
    """Render a prompt.

    Raises:
        ValueError: If the prompt does not exist.
        ArgumentValidationError: If required prompt arguments are missing.
    """
    if name not in PROMPTS:
        raise ValueError(f"Prompt '{name}' not found.")

    args = validate_arguments(BuildBooleanQueryArgs, arguments)
    return types.GetPromptResult(
        description=PROMPTS[name].description,
        messages=[
            types.PromptMessage(
                role="user",
                content=types.TextContent(
                    type="text", text=BOOLEAN_QUERY_RULES + args.instructions
                ),
            )
        ],
    )

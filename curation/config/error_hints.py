"""Editor-facing hints for homepage.yaml validation errors."""

from typing import Final


ERROR_HINTS: Final[dict[str, str]] = {
    "missing": "Add this key to homepage.yaml.",
    "int_type": "Use a whole number here, e.g. 5.",
    "int_parsing": "Use a whole number here, e.g. 5.",
    "string_type": "Quote this value as text.",
    "dict_type": "Expected a mapping of keys to values.",
    "list_type": "Expected a list; start each entry with '- '.",
    "greater_than_equal": "Below the minimum; section caps cannot be negative.",
    "less_than_equal": "Above the maximum allowed for this key.",
    "string_too_short": "This value cannot be empty.",
    "string_too_long": "This value is longer than allowed.",
    "string_pattern_mismatch": "Only lowercase letters, digits and underscores are allowed.",
    "extra_forbidden": "homepage.yaml does not know this key; check the spelling.",
    "value_error": "The combination of values is not allowed.",
    "yaml_parse_error": "homepage.yaml is not valid YAML; check indentation and colons.",
    "file_not_found": "No file at this path; set CURATION_CONFIG_PATH or pass --config.",
}

FIELD_HINTS: Final[dict[str, str]] = {
    "banner_max": "Number of banner carousel slots, between 0 and 50.",
    "ranked_max": "Number of ranked homepage slots, between 0 and 50.",
    "new_launch_max": "Number of new launch tiles, between 0 and 50.",
    "code": "Language tags are lowercase letters (e.g., 'en', 'hi', 'ta').",
    "label": "Human-readable language name shown in filters (e.g., 'English').",
    "items_table": "Name of the table that stores stories (e.g., 'stories').",
    "children_table": "Name of the table counted per story (e.g., 'episodes').",
    "child_foreign_key": "Column on the children table that references the story id.",
}

_FALLBACK_HINT: Final[str] = "See the homepage.yaml documentation for accepted values."


def get_error_hint(error_type: str, field_name: str | None = None) -> str:
    """Pick the most specific hint for an error.

    The last segment of a dotted location (``limits.banner_max`` ->
    ``banner_max``) is matched against field hints first.
    """
    key = field_name.rsplit(".", 1)[-1] if field_name else None
    if key in FIELD_HINTS:
        return FIELD_HINTS[key]
    return ERROR_HINTS.get(error_type, _FALLBACK_HINT)


def format_validation_error(
    location: str,
    message: str,
    error_type: str,
    *,
    include_hint: bool = True,
) -> str:
    """Render one validation error as ``location: message``.

    Args:
        location: Dotted key path, ``root`` or ``file``.
        message: Validator message.
        error_type: Pydantic error type or loader error type.
        include_hint: Append an indented ``Hint:`` line.

    Returns:
        One or two lines of text.
    """
    line = f"{location}: {message}"
    if not include_hint:
        return line
    return f"{line}\n    Hint: {get_error_hint(error_type, location)}"

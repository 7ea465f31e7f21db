"""Error hints for picker configuration errors.

Provides user-friendly hints with actionable remediation steps
for common configuration mistakes.
"""

from typing import Final


# Mapping of error types to user-friendly hints
ERROR_HINTS: Final[dict[str, str]] = {
    "missing": "This field is required. Please add it to your configuration.",
    "missing_item_source": (
        "Supply an explicit 'items' list or set 'generateItems: true'."
    ),
    "int_type": "This field must be an integer (whole number).",
    "int_parsing": "This field must be an integer (whole number).",
    "float_type": "This field must be a number.",
    "bool_type": "This field must be true or false.",
    "bool_parsing": "This field must be true or false.",
    "list_type": "This field must be a list/array.",
    "dict_type": "This field must be an object/mapping.",
    "greater_than": "The value is too small. It must be a positive number.",
    "greater_than_equal": "The value is too small. Check the minimum allowed.",
    "extra_forbidden": "Unknown option. Check the spelling of the field name.",
    "value_error": "Check the value. Item ids must be unique within the pool.",
    "file_not_found": "The file does not exist. Check the file path.",
    "yaml_parse_error": "Invalid YAML syntax. Check for proper indentation and formatting.",
}

# Field-specific hints for more context
FIELD_HINTS: Final[dict[str, str]] = {
    "itemCount": "Must be a whole number of colors to generate, 0 or more.",
    "maxRounds": "Must be a positive number of rounds (default 20).",
    "batchSize": "Must be a positive number of items per batch (default 10).",
    "id": "Every item needs a non-empty, unique id.",
}


def get_error_hint(error_type: str, field_name: str | None = None) -> str:
    """Get a user-friendly hint for a configuration error.

    Args:
        error_type: The Pydantic error type (e.g., 'missing', 'int_type').
        field_name: Optional field path for field-specific hints.

    Returns:
        A user-friendly hint string.
    """
    if error_type in ERROR_HINTS and error_type.startswith("missing_"):
        return ERROR_HINTS[error_type]

    if field_name:
        # 'defaultSettings.batchSize' -> 'batchSize'
        simple_field = field_name.split(".")[-1]
        if simple_field in FIELD_HINTS:
            return FIELD_HINTS[simple_field]

    return ERROR_HINTS.get(
        error_type, "Check the configuration documentation for valid values."
    )


def format_config_error(
    location: str,
    message: str,
    error_type: str,
    *,
    include_hint: bool = True,
) -> str:
    """Format a configuration error with optional hint.

    Args:
        location: The error location (e.g., 'defaultSettings.batchSize').
        message: The original error message.
        error_type: The error type.
        include_hint: Whether to include a hint.

    Returns:
        Formatted error string.
    """
    base = f"{location}: {message}" if location else message
    if include_hint:
        hint = get_error_hint(error_type, location)
        return f"{base}\n    Hint: {hint}"
    return base

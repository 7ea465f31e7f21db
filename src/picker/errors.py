"""Error types for the picker engine."""

from pydantic import ValidationError

from src.picker.error_hints import format_config_error


class PickerError(Exception):
    """Base exception for picker errors."""


class PickerConfigError(PickerError):
    """Raised when a session cannot start because its configuration is invalid.

    Attributes:
        errors: Error details as ``{"loc", "msg", "type"}`` dictionaries.
        source: Where the configuration came from (file path or ``<options>``).
    """

    def __init__(
        self, errors: list[dict[str, str]], source: str = "<options>"
    ) -> None:
        """Initialize the error.

        Args:
            errors: List of error details.
            source: Origin of the configuration.
        """
        self.errors = errors
        self.source = source
        super().__init__(
            f"Invalid picker configuration in {source}: {len(errors)} errors"
        )

    @classmethod
    def from_validation_error(
        cls, error: ValidationError, source: str = "<options>"
    ) -> "PickerConfigError":
        """Build from a Pydantic validation error.

        Args:
            error: The validation error.
            source: Origin of the configuration.

        Returns:
            PickerConfigError with one entry per validation error.
        """
        errors = []
        for err in error.errors():
            error_type = err["type"]
            message = err["msg"]
            # Model-level checks surface as value_error with a tagged message
            if error_type == "value_error" and "missing_item_source" in message:
                error_type = "missing_item_source"
                message = "No items specified and generation is disabled"
            errors.append(
                {
                    "loc": ".".join(str(loc) for loc in err["loc"]),
                    "msg": message,
                    "type": error_type,
                }
            )
        return cls(errors, source)

    def format(self, *, include_hint: bool = True) -> str:
        """Render all errors, one per line, with hints.

        Args:
            include_hint: Whether to include remediation hints.

        Returns:
            Multi-line error description.
        """
        lines = [str(self)]
        lines.extend(
            "  "
            + format_config_error(
                err["loc"], err["msg"], err["type"], include_hint=include_hint
            )
            for err in self.errors
        )
        return "\n".join(lines)

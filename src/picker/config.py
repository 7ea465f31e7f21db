"""Picker configuration models and loading."""

from collections.abc import Mapping
from pathlib import Path
from typing import Annotated, Any

import structlog
import yaml
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

from src.palette.color_space import hsl_to_hex, hsl_to_rgb
from src.palette.models import HSLColor
from src.picker.constants import (
    COMPONENT_PICKER,
    DEFAULT_BATCH_SIZE,
    DEFAULT_ITEM_COUNT,
    DEFAULT_MAX_ROUNDS,
    INITIAL_RATING,
)
from src.picker.errors import PickerConfigError
from src.picker.models import Item


logger = structlog.get_logger()


class SessionSettings(BaseModel):
    """Per-session settings.

    Only ``batch_size`` is interpreted by the engine. Other keys are kept
    and round-tripped through snapshots for the caller's use.
    """

    model_config = ConfigDict(
        extra="allow", alias_generator=to_camel, populate_by_name=True
    )

    batch_size: Annotated[int, Field(gt=0)] = DEFAULT_BATCH_SIZE


class HSLSpec(BaseModel):
    """HSL components of an externally supplied color."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    h: Annotated[int, Field(ge=0, lt=360)]
    s: Annotated[int, Field(ge=0, le=100)]
    l: Annotated[int, Field(ge=0, le=100)]  # noqa: E741


class ItemSpec(BaseModel):
    """An externally supplied pool item.

    Attributes:
        id: Stable identifier.
        name: Display name.
        hsl: Color, if the item is a color. Hex and RGB are derived.
        attributes: Free-form descriptive fields.
        rating: Starting rating.
        comparisons: Starting comparison count.
        wins: Starting win count.
        losses: Starting loss count.
    """

    model_config = ConfigDict(
        frozen=True, extra="forbid", alias_generator=to_camel, populate_by_name=True
    )

    id: Annotated[str, Field(min_length=1)]
    name: str = ""
    hsl: HSLSpec | None = None
    attributes: dict[str, str] = Field(default_factory=dict)
    rating: float = INITIAL_RATING
    comparisons: Annotated[int, Field(ge=0)] = 0
    wins: Annotated[int, Field(ge=0)] = 0
    losses: Annotated[int, Field(ge=0)] = 0

    def to_item(self) -> Item:
        """Create a fresh pool item from this spec."""
        item = Item(
            id=self.id,
            name=self.name or self.id,
            attributes=dict(self.attributes),
            rating=self.rating,
            comparisons=self.comparisons,
            wins=self.wins,
            losses=self.losses,
        )
        if self.hsl is not None:
            h, s, l = self.hsl.h, self.hsl.s, self.hsl.l  # noqa: E741
            item.hsl = HSLColor(h=h, s=s, l=l)
            item.rgb = hsl_to_rgb(h, s, l)
            item.hex = hsl_to_hex(h, s, l)
        return item


class PickerConfig(BaseModel):
    """Construction options for a picker session.

    Attributes:
        item_count: Number of colors to generate.
        generate_items: Whether to generate the pool instead of using ``items``.
        items: Explicit pool items.
        max_rounds: Round cap after which the session completes.
        default_settings: Settings used when ``initialize`` gets none.
        seed: Fixed palette hue offset in ``[0, 1)``; random when omitted.
    """

    model_config = ConfigDict(
        frozen=True, extra="forbid", alias_generator=to_camel, populate_by_name=True
    )

    item_count: Annotated[int, Field(ge=0)] = DEFAULT_ITEM_COUNT
    generate_items: bool = False
    items: list[ItemSpec] | None = None
    max_rounds: Annotated[int, Field(gt=0)] = DEFAULT_MAX_ROUNDS
    default_settings: SessionSettings = Field(default_factory=SessionSettings)
    seed: Annotated[float, Field(ge=0, lt=1)] | None = None

    @field_validator("items")
    @classmethod
    def _unique_ids(cls, items: list[ItemSpec] | None) -> list[ItemSpec] | None:
        if items is None:
            return items
        seen: set[str] = set()
        for spec in items:
            if spec.id in seen:
                msg = f"duplicate item id '{spec.id}'"
                raise ValueError(msg)
            seen.add(spec.id)
        return items

    @model_validator(mode="after")
    def _require_item_source(self) -> "PickerConfig":
        if self.items is None and not self.generate_items:
            msg = "missing_item_source: no items specified and generateItems is off"
            raise ValueError(msg)
        return self


def build_config(
    options: PickerConfig | Mapping[str, Any], source: str = "<options>"
) -> PickerConfig:
    """Validate construction options.

    Args:
        options: A config instance or a mapping of (camelCase or snake_case)
            options.
        source: Origin of the options, used in error messages.

    Returns:
        Validated PickerConfig.

    Raises:
        PickerConfigError: If the options are invalid.
    """
    if isinstance(options, PickerConfig):
        return options
    try:
        return PickerConfig.model_validate(dict(options))
    except ValidationError as e:
        error = PickerConfigError.from_validation_error(e, source)
        logger.error(
            "picker_config_invalid",
            component=COMPONENT_PICKER,
            source=source,
            error_count=len(error.errors),
            errors=error.errors,
        )
        raise error from e


def load_picker_config(path: Path) -> PickerConfig:
    """Load picker options from a YAML file.

    Args:
        path: Path to the YAML file.

    Returns:
        Validated PickerConfig.

    Raises:
        PickerConfigError: If the file is missing, unparseable or invalid.
    """
    log = logger.bind(component=COMPONENT_PICKER, file_path=str(path))
    log.info("loading_picker_config")

    try:
        content = path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        log.error("picker_config_file_not_found")
        raise PickerConfigError(
            [{"loc": "", "msg": f"File not found: {path}", "type": "file_not_found"}],
            str(path),
        ) from e

    try:
        data = yaml.safe_load(content) or {}
    except yaml.YAMLError as e:
        log.error("picker_config_yaml_error", error=str(e))
        raise PickerConfigError(
            [{"loc": "", "msg": str(e), "type": "yaml_parse_error"}], str(path)
        ) from e

    if not isinstance(data, dict):
        raise PickerConfigError(
            [{"loc": "", "msg": "Top level must be a mapping", "type": "dict_type"}],
            str(path),
        )

    config = build_config(data, source=str(path))
    log.info(
        "picker_config_loaded",
        generate_items=config.generate_items,
        item_count=config.item_count,
        max_rounds=config.max_rounds,
    )
    return config

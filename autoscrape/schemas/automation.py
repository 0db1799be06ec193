"""Job file schema: target URL, steps, scraping rules and sink settings."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Any

import yaml
from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
)

# ============================================================================
# Enums
# ============================================================================


class SelectorModeEnum(str, Enum):
    """Supported ways of locating an element."""

    CSS = "css"
    XPATH = "xpath"
    TEXT = "text"
    ID = "id"
    TEST_ID = "testId"
    ROLE = "role"
    LABEL = "label"
    PLACEHOLDER = "placeholder"
    NAME = "name"


class StepKindEnum(str, Enum):
    """Step kinds understood by the action factory."""

    TEXT_BOX = "text_box"
    BUTTON = "button"
    LINK = "link"
    RADIO = "radio"
    CHECK = "check"
    SELECT = "select"


# ============================================================================
# Selector Models
# ============================================================================


class SelectorDef(BaseModel):
    """A ``(mode, value)`` selector.

    ``mode`` is kept as a plain string so that an unsupported mode reaches the
    locator resolver, which rejects it for the step that uses it.
    """

    model_config = ConfigDict(frozen=True)

    mode: str = Field(..., description="Selector mode", examples=["css", "id", "role"])
    value: str = Field(..., description="Selector value for the given mode")

    @field_validator("value", mode="before")
    @classmethod
    def coerce_value(cls, v: Any) -> Any:
        """Allow numeric YAML scalars as selector values."""
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v


SelectorSpec = str | SelectorDef


# ============================================================================
# Step Models
# ============================================================================


class Step(BaseModel):
    """One declared UI action bound to a selector."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    kind: str = Field(
        ...,
        validation_alias=AliasChoices("kind", "type"),
        description="Step kind",
        examples=[k.value for k in StepKindEnum],
    )
    selector: SelectorSpec = Field(..., description="Raw selector or {mode, value}")
    value: str | None = Field(default=None, description="Input value / option label")
    action: str | None = Field(
        default=None,
        description="Explicit action override",
        examples=["click", "check", "uncheck", "select"],
    )

    @field_validator("value", mode="before")
    @classmethod
    def coerce_value(cls, v: Any) -> Any:
        """Numbers in YAML are typed into fields as their text."""
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v


# ============================================================================
# Scraping Models
# ============================================================================


class ExtractionField(BaseModel):
    """Rule for extracting one column from a list item."""

    model_config = ConfigDict(frozen=True)

    selector: str = Field(..., min_length=1, description="CSS selector scoped to the list item")
    attribute: str | None = Field(
        default=None,
        description="Attribute to read; rendered text when unset",
        examples=["href", "src", "data-id"],
    )


class PaginationConfig(BaseModel):
    """Next-button pagination configuration."""

    next_button_selector: str | None = Field(
        default=None, description="Selector for the next-page control"
    )
    max_pages: int | None = Field(
        default=None, ge=1, description="Maximum number of pages to visit"
    )
    stop_on_repeat: bool = Field(
        default=True,
        description="Stop when a page yields exactly the rows of an earlier page",
    )


class ScrapingConfig(BaseModel):
    """List extraction configuration."""

    list_selector: str = Field(..., min_length=1, description="Selector matching list items")
    fields: dict[str, ExtractionField] = Field(
        default_factory=dict, description="Output column -> extraction rule"
    )
    pagination: PaginationConfig | None = Field(default=None, description="Pagination config")
    output_file: str | None = Field(
        default=None, description="Path of the workbook to write", examples=["output.xlsx"]
    )

    @field_validator("fields", mode="before")
    @classmethod
    def normalize_fields(cls, v: Any) -> Any:
        """Expand ``key: "selector"`` shorthand into ``{selector: ...}``."""
        if not isinstance(v, dict):
            return v
        return {
            key: {"selector": rule} if isinstance(rule, str) else rule for key, rule in v.items()
        }

    @property
    def columns(self) -> list[str]:
        """Output column names in configured order."""
        return list(self.fields)


# ============================================================================
# Sink Models
# ============================================================================


class GoogleSheetConfig(BaseModel):
    """Google Sheets sink configuration."""

    spread_sheet_id: str | None = Field(
        default=None, description="Spreadsheet ID (falls back to GOOGLE_SHEET_ID)"
    )
    kpis_sheet_name: str | None = Field(default=None, description="Tab to append rows to")


class ChatworkConfig(BaseModel):
    """Chatwork notification sink configuration."""

    room_id: str | None = Field(default=None, description="Room ID (falls back to CHATWORK_ROOM_ID)")
    message_template: str | None = Field(
        default=None, description="Message body; {count} is replaced with the row count"
    )

    @field_validator("room_id", mode="before")
    @classmethod
    def coerce_room_id(cls, v: Any) -> Any:
        """Room IDs are numeric in YAML more often than not."""
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v


# ============================================================================
# Job Configuration
# ============================================================================


class AutomationConfig(BaseModel):
    """A complete automation job."""

    model_config = ConfigDict(extra="ignore")

    target_url: str = Field(..., description="Page to open before running steps")
    steps: list[Step] = Field(default_factory=list, description="Ordered UI actions")
    scraping: ScrapingConfig | None = Field(default=None, description="Extraction rules")
    google_sheet: GoogleSheetConfig | None = Field(default=None, description="Sheets sink")
    chatwork: ChatworkConfig | None = Field(default=None, description="Chatwork sink")

    @field_validator("target_url")
    @classmethod
    def validate_target_url(cls, v: str) -> str:
        """Validate target URL is present."""
        if not v or not v.strip():
            raise ValueError('Config missing "target_url"')
        return v.strip()

    @field_validator("steps", mode="before")
    @classmethod
    def default_steps(cls, v: Any) -> Any:
        """An empty ``steps:`` key in YAML loads as None."""
        return [] if v is None else v


class ConfigLoadError(Exception):
    """Raised when a job file cannot be read or validated."""

    def __init__(self, path: str | Path, detail: str):
        self.path = str(path)
        self.detail = detail
        super().__init__(f"Failed to load config file: {path}. Error: {detail}")


def _format_validation_error(error: ValidationError) -> str:
    parts = []
    for item in error.errors():
        location = ".".join(str(loc) for loc in item["loc"]) or "<root>"
        parts.append(f"{location}: {item['msg']}")
    return "; ".join(parts)


def load_config(path: str | Path) -> AutomationConfig:
    """Load and validate a YAML job file.

    Args:
        path: Path to the YAML file

    Returns:
        Validated AutomationConfig

    Raises:
        ConfigLoadError: If the file is missing, unparsable or invalid
    """
    try:
        content = Path(path).read_text(encoding="utf-8")
        data = yaml.safe_load(content)
    except (OSError, yaml.YAMLError) as e:
        raise ConfigLoadError(path, str(e)) from e

    if not isinstance(data, dict):
        raise ConfigLoadError(path, "top level must be a mapping")

    if not data.get("target_url"):
        raise ConfigLoadError(path, 'Config missing "target_url"')

    try:
        return AutomationConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigLoadError(path, _format_validation_error(e)) from e

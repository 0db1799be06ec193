"""Job file schemas."""

from autoscrape.schemas.automation import (
    AutomationConfig,
    ChatworkConfig,
    ConfigLoadError,
    ExtractionField,
    GoogleSheetConfig,
    PaginationConfig,
    ScrapingConfig,
    SelectorDef,
    SelectorModeEnum,
    SelectorSpec,
    Step,
    StepKindEnum,
    load_config,
)

__all__ = [
    "AutomationConfig",
    "ChatworkConfig",
    "ConfigLoadError",
    "ExtractionField",
    "GoogleSheetConfig",
    "PaginationConfig",
    "ScrapingConfig",
    "SelectorDef",
    "SelectorModeEnum",
    "SelectorSpec",
    "Step",
    "StepKindEnum",
    "load_config",
]

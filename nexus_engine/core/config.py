"""Configuration management for the Nexus lifecycle engine.

Settings are plain values handed to the engine by the caller. There is no
module-level settings instance: build one with ``EngineSettings.load()``,
``EngineSettings.from_yaml()`` or ``EngineSettings.from_provider()`` and
pass it to ``EntityLifecycleManager``. Only ``load()`` reads ``NEXUS_*``
environment variables and ``.env``.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Literal, Mapping, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from pydantic_settings import BaseSettings

from nexus_engine.c1_workflow_models.workflow import TaskWorkflowConfig, TicketWorkflowConfig

logger = logging.getLogger(__name__)


class FeatureFlags(BaseModel):
    """Feature gates supplied by the configuration provider."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    gantt_chart_enabled: bool = Field(default=True, description="Enable Gantt chart view")
    kanban_board_enabled: bool = Field(default=True, description="Enable Kanban board view")
    budget_tracking_enabled: bool = Field(default=True, description="Enable budget tracking")
    client_ticketing_enabled: bool = Field(
        default=True,
        description="Enable client ticketing; gates ticket creation",
    )
    client_portal_enabled: bool = Field(default=True, description="Enable client portal access")
    task_dependencies_enabled: bool = Field(
        default=True,
        description="Enable task dependencies; gates non-empty dependency lists",
    )
    milestones_enabled: bool = Field(default=True, description="Enable milestones")
    team_management_enabled: bool = Field(default=True, description="Enable team management")
    analytics_enabled: bool = Field(default=False, description="Enable analytics/reporting")


# Provider (camelCase) key -> settings field
_PROVIDER_KEYS = {
    "features": "features",
    "taskWorkflow": "task_workflow",
    "ticketWorkflow": "ticket_workflow",
    "defaultCurrency": "default_currency",
    "appName": "app_name",
    "logLevel": "log_level",
}


class EngineSettings(BaseSettings):
    """Main settings combining feature gates and both workflow tables."""

    features: FeatureFlags = Field(default_factory=FeatureFlags)
    task_workflow: TaskWorkflowConfig = Field(default_factory=TaskWorkflowConfig)
    ticket_workflow: TicketWorkflowConfig = Field(default_factory=TicketWorkflowConfig)

    default_currency: str = Field(
        default="USD",
        description="Currency given to projects created without one",
    )
    app_name: str = Field(default="Nexus PM", description="Application name")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Logging level",
    )

    model_config = {
        "env_prefix": "NEXUS_",
        "env_nested_delimiter": "__",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }

    @classmethod
    def load(cls) -> "EngineSettings":
        """Load settings from environment and files."""
        from dotenv import load_dotenv
        load_dotenv()
        return cls()

    @classmethod
    def from_provider(cls, data: Mapping[str, Any]) -> "EngineSettings":
        """Build settings from the configuration-provider shape.

        Args:
            data: Mapping with camelCase keys (``taskWorkflow``,
                ``ticketWorkflow``, ``features``...). snake_case keys are
                accepted as well.

        Returns:
            EngineSettings instance built from ``data`` and the field
            defaults only. ``NEXUS_*`` variables and ``.env`` are not read;
            use ``load()`` for that.
        """
        kwargs: Dict[str, Any] = {}
        for key, value in data.items():
            kwargs[_PROVIDER_KEYS.get(key, key)] = value
        # model_validate skips BaseSettings.__init__, so no env sources apply
        return cls.model_validate(kwargs)

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> "EngineSettings":
        """Load the configuration-provider shape from a YAML file."""
        with open(path, "r") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"Invalid engine config in {path}: expected a mapping")
        logger.info(f"Loaded engine config from {path}")
        return cls.from_provider(data)

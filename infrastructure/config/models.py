"""Configuration models (Pydantic settings classes)."""

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from domain.importer import DuplicateKeyPolicy
from domain.work_unit import HOURS_IN_DAY
from infrastructure.constants import ENV_PREFIX


class ImporterConfig(BaseSettings):
    """
    Importer configuration.
    - Loaded from configs/importer.yaml (optional), passed in as init values
    - Overridden by DEBTMODEL_* environment variables
    - Consumed by the application layer when building a ModelImporter
    """

    model_config = SettingsConfigDict(env_prefix=ENV_PREFIX, env_ignore_empty=True, extra="forbid")

    hours_in_day: int = Field(
        default=HOURS_IN_DAY,
        gt=0,
        description="Length of a work day in hours, used for all day <-> hour conversions of one import.",
    )
    duplicate_keys: DuplicateKeyPolicy = Field(
        default=DuplicateKeyPolicy.WARN,
        description="How repeated characteristic keys are handled: last_wins, warn or reject.",
    )
    rules_file: Path | None = Field(
        default=None,
        description="Rule catalog snapshot (YAML, CSV or Excel).",
    )
    log_file: Path | None = Field(
        default=None,
        description="Optional rotating log file.",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # environment wins over the YAML values handed to __init__
        return env_settings, init_settings

    @field_validator("duplicate_keys", mode="before")
    @classmethod
    def _normalize_policy(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().lower()
        return value

"""Configuration and environment settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Importer configuration"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Calculator defaults
    CALCULATOR_DEFAULT_NAME: str = "Calculateur importé"
    CALCULATOR_DEFAULT_DESCRIPTION: str = ""

    # Table layout (label, value, unit, min, max, step)
    FORMULA_MARKER: str = "="
    VALUE_COLUMN: str = "B"
    FIRST_DATA_ROW: int = 2  # row 1 is the header
    HEADER_LABEL_TOKEN: str = "label"

    # Cell defaults
    DEFAULT_STEP: float = 1.0
    DEFAULT_DECIMALS: int = 2

    # Translation
    TARGET_DIALECT: str = "javascript"  # javascript, python
    SUM_RANGE_FIRST_ROW: int = 2  # 1 restores the legacy SUM offset
    MAX_RANGE_EXPANSION: int = 1000
    RESOLVE_FORWARD_REFERENCES: bool = True

    # Output
    JSON_INDENT: int = 2
    LOG_LEVEL: str = "WARNING"


settings = Settings()

# decoderring/config/schema.py
from pydantic import BaseModel, Field, field_validator

# loguru's built-in level names
LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")

class AppConfig(BaseModel):
    engine: str = "minstd" # Name of a registered random engine
    show_contents: bool = True # Print transformed contents after encrypt/decrypt
    confirm_overwrite: bool = True # Ask before overwriting the target file
    header_width: int = Field(default=50, ge=1, le=500)
    header_fill: str = Field(default="-", min_length=1, max_length=1)
    line_separator: str = "\n" # Written before appended text
    log_level: str = "INFO"

    @field_validator("engine")
    @classmethod
    def _engine_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("engine must not be empty")
        return value

    @field_validator("log_level")
    @classmethod
    def _known_log_level(cls, value: str) -> str:
        value = value.strip().upper()
        if value not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        return value

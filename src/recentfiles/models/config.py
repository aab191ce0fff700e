"""Configuration models."""

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Options(BaseModel):
    """Options for a single recent-files run."""

    commit_limit: int = Field(
        default=1,
        ge=0,
        description="Number of recent commits to walk (0 means the default of 1)",
    )

    class Config:
        """Pydantic config."""
        json_schema_extra = {
            "example": {
                "commit_limit": 10,
            }
        }


class FilterConfig(BaseModel):
    """Name-based rules for the built-in filter chain."""

    source_extension: str = Field(".go", description="Only files with this extension are reported")
    generated_marker: str = Field(".pb.", description="Substring marking generated protocol files")
    mock_marker: str = Field("mock/", description="Substring marking mock directories")
    test_marker: str = Field("_test.", description="Substring marking test files")

    class Config:
        """Pydantic config."""
        json_schema_extra = {
            "example": {
                "source_extension": ".go",
                "generated_marker": ".pb.",
                "mock_marker": "mock/",
                "test_marker": "_test.",
            }
        }


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    All settings are prefixed with RECENTFILES_ (e.g., RECENTFILES_COMMIT_LIMIT).
    """

    model_config = SettingsConfigDict(
        env_prefix="RECENTFILES_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Traversal
    commit_limit: int = Field(default=10, ge=0, description="Default number of commits to walk")
    timeout_seconds: float = Field(
        default=5.0,
        gt=0,
        description="Deadline shared by every git invocation of one run",
    )

    # Filters
    source_extension: str = ".go"

    # Logging
    log_level: str = "WARNING"

"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config() (CLI flags)
2. Environment variables (COVMERGE__SECTION__KEY)
3. Repo YAML (.covmerge/config.yaml)
4. Global YAML (~/.config/covmerge/config.yaml)
5. Built-in defaults (this file)

Environment Variable Format:
    COVMERGE__<SECTION>__<KEY>=<VALUE>

Examples:
    COVMERGE__OUTPUT__PROFILE_PATH=build/cover.txt
    COVMERGE__RENDER__ENABLED=false
    COVMERGE__LOGGING__LEVEL=DEBUG
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

from covmerge.config.constants import (
    DEFAULT_GO_BINARY,
    DEFAULT_GOPATH,
    DEFAULT_PROFILE_PATH,
    DEFAULT_REPORT_PATH,
    DEFAULT_SOURCE_PREFIX,
)

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LogOutputConfig(BaseModel):
    """Single logging output configuration.

    Env vars: Not directly configurable via env (use YAML for multi-output).
    """

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        COVMERGE__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="INFO",
        description="Root log level. DEBUG logs every coalesced profile.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class OutputConfig(BaseModel):
    """Output destinations.

    Env vars:
        COVMERGE__OUTPUT__PROFILE_PATH: Merged coverage profile destination
        COVMERGE__OUTPUT__REPORT_PATH: Rendered HTML report destination
    """

    profile_path: str = Field(
        default=DEFAULT_PROFILE_PATH,
        description="Where the merged coverage profile is written.",
    )
    report_path: str = Field(
        default=DEFAULT_REPORT_PATH,
        description="Where the rendered HTML report is written.",
    )

    @field_validator("profile_path", "report_path")
    @classmethod
    def validate_path(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Output path must not be empty")
        return v


class SourceConfig(BaseModel):
    """Where revision content is looked up.

    Env vars:
        COVMERGE__SOURCE__REPO_PATH: Git repository consulted for file content
        COVMERGE__SOURCE__SOURCE_PREFIX: Repo-relative directory holding profile paths
    """

    repo_path: str = Field(
        default=".",
        description="Git repository used to compare and fetch file content per revision.",
    )
    source_prefix: str = Field(
        default=DEFAULT_SOURCE_PREFIX,
        description="Repo-relative prefix joined to profile file names "
        "(GOPATH layout: go/src/<import path>).",
    )

    @field_validator("source_prefix")
    @classmethod
    def normalize_prefix(cls, v: str) -> str:
        return v.strip().strip("/")


class RenderConfig(BaseModel):
    """HTML report rendering.

    Env vars:
        COVMERGE__RENDER__ENABLED: Render the HTML report after merging
        COVMERGE__RENDER__GO_BINARY: Go executable used for `go tool cover`
        COVMERGE__RENDER__GOPATH: GOPATH handed to the renderer
        COVMERGE__RENDER__AUGMENT: Inject file search and line numbers
    """

    enabled: bool = Field(
        default=True,
        description="Render the HTML report. Requires a Go toolchain.",
    )
    go_binary: str = Field(
        default=DEFAULT_GO_BINARY,
        description="Go executable used to run `go tool cover -html`.",
    )
    gopath: str = Field(
        default=DEFAULT_GOPATH,
        description="GOPATH for the renderer. Relative paths resolve against the working directory.",
    )
    augment: bool = Field(
        default=True,
        description="Add a file search box and line numbers to the rendered report.",
    )


class CovMergeConfig(BaseModel):
    """Root configuration for covmerge.

    All settings can be configured via:
    1. Environment variables: COVMERGE__SECTION__KEY
    2. YAML config files (repo or global)
    3. Direct kwargs to load_config()
    """

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    source: SourceConfig = Field(default_factory=SourceConfig)
    render: RenderConfig = Field(default_factory=RenderConfig)

"""Pydantic models for simplecli configuration."""

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

from simplecli.output.base import OutputFormat


class ShellConfig(BaseModel):
    """Prompt and REPL settings."""

    prompt: str = "> "
    interrupt_prompt: str = "^C"
    eof_prompt: str = "exit"
    help_header: str = "Available commands:"
    history_file: Path | None = None  # Default: in-memory history only


class CommandsConfig(BaseModel):
    """Script naming conventions and calling convention."""

    command_prefix: str = "do_"
    help_prefix: str = "help_"
    pass_verb: bool = False  # Legacy: pass the verb before the arguments
    scratch_prefix: str = "simplecli"

    @field_validator("command_prefix", "help_prefix")
    @classmethod
    def _not_empty(cls, value: str) -> str:
        if not value:
            raise ValueError("prefix must not be empty")
        return value


class EditorConfig(BaseModel):
    """Editor used by the edit workflow."""

    default: str = "vi"
    env_var: str = "EDITOR"


class OutputConfig(BaseModel):
    """Output configuration."""

    format: OutputFormat = OutputFormat.PLAIN


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "WARNING"
    file: Path | None = None  # Default: no file logging
    json_format: bool = False


class SimpleCLIConfig(BaseModel):
    """Root configuration for simplecli."""

    model_config = ConfigDict(use_enum_values=True)

    shell: ShellConfig = Field(default_factory=ShellConfig)
    commands: CommandsConfig = Field(default_factory=CommandsConfig)
    editor: EditorConfig = Field(default_factory=EditorConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

"""Default configuration values and paths."""

import os
from pathlib import Path
from typing import Final

# Default directories
DEFAULT_CONFIG_DIR: Final[Path] = Path.home() / ".config" / "simplecli"

# Default file paths
DEFAULT_CONFIG_FILE: Final[Path] = DEFAULT_CONFIG_DIR / "config.toml"

# Environment variable names
ENV_CONFIG_PATH: Final[str] = "SIMPLECLI_CONFIG"
ENV_LOG_LEVEL: Final[str] = "SIMPLECLI_LOG_LEVEL"
ENV_PROMPT: Final[str] = "SIMPLECLI_PROMPT"
ENV_HISTORY: Final[str] = "SIMPLECLI_HISTORY"

# Default config content (TOML)
DEFAULT_CONFIG_TOML: Final[str] = """\
# simplecli configuration

[shell]
prompt = "> "
interrupt_prompt = "^C"
eof_prompt = "exit"
help_header = "Available commands:"
# history_file = "~/.local/state/simplecli/history"

[commands]
command_prefix = "do_"
help_prefix = "help_"
pass_verb = false
scratch_prefix = "simplecli"

[editor]
default = "vi"
env_var = "EDITOR"

[output]
format = "plain"

[logging]
level = "WARNING"
json_format = false
"""


def get_config_path() -> Path:
    """Get the configuration file path."""
    env_path = os.environ.get(ENV_CONFIG_PATH)
    if env_path:
        return Path(env_path)
    return DEFAULT_CONFIG_FILE

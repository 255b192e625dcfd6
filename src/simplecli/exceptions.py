"""Exception hierarchy for simplecli."""


class SimpleCLIError(Exception):
    """Base exception for all simplecli errors."""

    exit_code: int = 1
    user_message: str = "An error occurred"

    def __init__(
        self,
        message: str | None = None,
        *,
        user_message: str | None = None,
    ) -> None:
        super().__init__(message or self.user_message)
        if user_message:
            self.user_message = user_message


# Startup Errors (fatal)
class StartupError(SimpleCLIError):
    """Errors that prevent the shell from starting."""

    exit_code = 1
    user_message = "Startup failed"


class ScriptLoadError(StartupError):
    """The script could not be read or raised while executing."""

    user_message = "Failed to load script"


class ReaderInitError(StartupError):
    """The line reader could not be initialized."""

    user_message = "Failed to initialize line input"


class FlagError(StartupError):
    """Invalid command-line flags for the script variables."""

    user_message = "Invalid flags"


# Config Errors
class ConfigError(StartupError):
    """Configuration errors."""

    user_message = "Configuration error"


class ConfigValidationError(ConfigError):
    """Configuration validation failed."""

    user_message = "Invalid configuration"


# Command Errors (recoverable, reported at the prompt)
class CommandError(SimpleCLIError):
    """Errors raised while handling one input line."""

    exit_code = 40
    user_message = "Command error"


class UnknownCommandError(CommandError):
    """No script command matches the verb."""

    exit_code = 41
    user_message = "Unknown command"

    def __init__(self, verb: str) -> None:
        super().__init__(f"Unknown command: {verb}")
        self.verb = verb


class NoHelpError(CommandError):
    """The script defines no help text for the command."""

    exit_code = 42
    user_message = "No help for command"

    def __init__(self, verb: str) -> None:
        super().__init__(f"No help for command: {verb}")
        self.verb = verb


class TokenizeError(CommandError):
    """The input line has malformed quoting."""

    exit_code = 43
    user_message = "Error splitting up command string"


class InvocationError(CommandError):
    """The script command itself failed."""

    exit_code = 44
    user_message = "Command failed"


# Primitive Errors
class VariableTypeError(SimpleCLIError):
    """A value does not match the declared type of a variable."""

    exit_code = 50
    user_message = "Invalid value for variable"


class EditError(SimpleCLIError):
    """The edit workflow could not stat the file or launch the editor."""

    exit_code = 51
    user_message = "Edit failed"


class TemplateError(SimpleCLIError):
    """A template is malformed or one of its tags failed to evaluate."""

    exit_code = 52
    user_message = "Template error"

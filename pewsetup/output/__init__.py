"""Output abstraction layer."""

from .actions import MockStepOutputs, OutputSink, StepOutputs, error_command, escape_data
from .console import ConsoleProtocol, MockConsole, RichConsole, Style
from .errors import print_setup_error, setup_error_exit_code

__all__ = [
    "ConsoleProtocol",
    "MockConsole",
    "RichConsole",
    "Style",
    "MockStepOutputs",
    "OutputSink",
    "StepOutputs",
    "error_command",
    "escape_data",
    "print_setup_error",
    "setup_error_exit_code",
]

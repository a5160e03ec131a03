"""External command and git execution utilities."""

from .runner import (
    CommandFailedError,
    CommandNotFoundError,
    CommandResult,
    CommandRunner,
    CommandRunnerError,
    FakeGitRunner,
    GitRunner,
)

__all__ = [
    "CommandFailedError",
    "CommandNotFoundError",
    "CommandResult",
    "CommandRunner",
    "CommandRunnerError",
    "FakeGitRunner",
    "GitRunner",
]

"""
Failures raised by the 1Password CLI data source.

CommandError     — the op process could not be launched.
DeserializeError — op answered, but stdout was not the JSON we expected.
CLIError         — op reported an error on stderr.

LoadCancelled is not an OPError: it means nobody is waiting for the result.
"""

from __future__ import annotations


class OPError(Exception):
    """Base class for every data source failure."""

    label = "op error"

    def describe(self) -> str:
        """One-line message for the user, prefixed by the failure kind."""
        return f"{self.label}: {self}"


class CommandError(OPError):
    label = "Error opening op process"

    def __init__(self, cause: OSError) -> None:
        super().__init__(str(cause))
        self.cause = cause


class DeserializeError(OPError):
    label = "JSON Error"

    def __init__(self, message: str, args: list[str] | None = None) -> None:
        super().__init__(message)
        self.op_args = args or []


class CLIError(OPError):
    label = "OP CLI Error"

    def __init__(self, stderr: str) -> None:
        super().__init__(stderr.strip())
        self.stderr = stderr


class LoadCancelled(Exception):
    """The load was abandoned before it finished; its result is not wanted."""

"""
Failure values shared by the translator, transport and dispatcher.

Expected failures are returned, not raised, so every call path ends at the
same formatting step and the caller always gets an ``Error: ...`` text block.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List

from pydantic import ValidationError


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    UNRESOLVED_IDENTIFIER = "unresolved_identifier"
    TRANSPORT = "transport"
    DECODE = "decode"
    UNKNOWN_TOOL = "unknown_tool"
    UNKNOWN_RESOURCE = "unknown_resource"
    RESOURCE_READ = "resource_read"
    INTERNAL = "internal"


@dataclass(frozen=True)
class Failure:
    kind: ErrorKind
    message: str

    @property
    def text(self) -> str:
        return f"Error: {self.message}"


class ConfigurationError(RuntimeError):
    """Raised at startup when required configuration is missing."""


def describe_validation_error(tool_name: str, exc: ValidationError) -> str:
    """Flatten a pydantic error into ``field: problem`` pairs."""
    problems: List[str] = []
    for err in exc.errors():
        location = ".".join(str(part) for part in err.get("loc", ())) or "arguments"
        problems.append(f"{location}: {err.get('msg', 'invalid value')}")
    return f"Invalid arguments for {tool_name}: " + "; ".join(problems)

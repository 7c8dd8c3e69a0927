from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class Severity(str, Enum):
    INFO = "INFO"
    WARN = "WARN"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


@dataclass
class HostKitError(Exception):
    code: str
    user_message: str
    severity: Severity = Severity.ERROR
    recoverable: bool = True
    context: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        super().__init__(self.user_message)

    def __str__(self) -> str:
        return self.user_message

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "user_message": self.user_message,
            "severity": self.severity.value,
            "recoverable": bool(self.recoverable),
            "context": {k: str(v) for k, v in (self.context or {}).items()},
        }


# ---- Core types ----
class ConfigError(HostKitError):
    def __init__(self, user_message: str = "Configuration error.", **ctx: Any):
        super().__init__("config_error", user_message, severity=Severity.CRITICAL, recoverable=False, context=ctx)


class ResolutionExhaustedError(HostKitError):
    """
    None of the candidate paths of a specifier could be loaded.

    `errors` keeps every per-candidate failure in candidate order; the last one
    is also chained as `__cause__` by the raiser.
    """

    def __init__(self, specifier: str, errors: Optional[List[BaseException]] = None):
        self.specifier = str(specifier)
        self.errors: List[BaseException] = list(errors or [])
        last = self.errors[-1] if self.errors else None
        msg = f"Error while requiring module `{self.specifier}`"
        if last is not None:
            msg = f"{msg}: {last}"
        super().__init__(
            "module_resolution_exhausted",
            msg,
            severity=Severity.ERROR,
            recoverable=False,
            context={"specifier": self.specifier, "attempts": len(self.errors)},
        )


class InvalidModuleContractError(HostKitError, TypeError):
    def __init__(self, value: Any):
        self.value = value
        super().__init__(
            "invalid_module_contract",
            f"Module should be a function: {value!r}",
            severity=Severity.ERROR,
            recoverable=False,
            context={"value_type": type(value).__name__},
        )


class MetadataParseError(HostKitError):
    def __init__(self, path: str, reason: str = ""):
        self.path = str(path)
        msg = f"Invalid module metadata in {self.path}"
        if reason:
            msg = f"{msg}: {reason}"
        super().__init__(
            "module_metadata_invalid",
            msg,
            severity=Severity.ERROR,
            recoverable=False,
            context={"path": self.path},
        )

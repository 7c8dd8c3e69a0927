from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Tuple


@dataclass
class RecordingLogger:
    records: List[Tuple[str, str]] = field(default_factory=list)

    def debug(self, msg, *_a, **_k):  # noqa: ANN001
        self.records.append(("debug", str(msg)))

    def info(self, msg, *_a, **_k):  # noqa: ANN001
        self.records.append(("info", str(msg)))

    def warning(self, msg, *_a, **_k):  # noqa: ANN001
        self.records.append(("warning", str(msg)))

    def error(self, msg, *_a, **_k):  # noqa: ANN001
        self.records.append(("error", str(msg)))

    def messages(self, level: str) -> List[str]:
        return [m for (lvl, m) in self.records if lvl == level]


class ExplodingResolver:
    """
    Fails the test if any path resolution is attempted.
    """

    def resolve_path(self, path: str) -> str:
        raise AssertionError(f"resolve_path called for {path!r}")

    def resolve_alias(self, path: str) -> str:
        raise AssertionError(f"resolve_alias called for {path!r}")


@dataclass
class FlakyResolver:
    """
    Delegates to an inner resolver, raising for the listed candidates.
    """

    inner: object
    fail_for: Tuple[str, ...] = ()
    calls: List[str] = field(default_factory=list)

    def resolve_path(self, path: str) -> str:
        self.calls.append(path)
        if path in self.fail_for:
            raise LookupError(f"cannot resolve {path}")
        return self.inner.resolve_path(path)

    def resolve_alias(self, path: str) -> str:
        return self.inner.resolve_alias(path)


class IdentityResolver:
    """
    Resolves nothing: every specifier is handed to the loader as-is.
    """

    def resolve_path(self, path: str) -> str:
        return path

    def resolve_alias(self, path: str) -> str:
        return path

from __future__ import annotations

"""
Installed-module ledger models.

The ledger is append-only: installing the same module twice yields two
records. Records keep a back-reference to the invoked callable, which is never
serialized.
"""

from typing import Any, Callable, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

ModuleCallable = Callable[..., Any]
ModuleReference = Union[str, ModuleCallable]
ModuleMeta = Dict[str, Any]


class InstalledModuleRecord(BaseModel):
    model_config = ConfigDict(extra="forbid", arbitrary_types_allowed=True)

    meta: ModuleMeta = Field(default_factory=dict)
    timings: Optional[Dict[str, Any]] = None
    entry_path: Optional[str] = None
    module: Optional[Any] = Field(default=None, exclude=True, repr=False)

    @property
    def name(self) -> str:
        return str(self.meta.get("name") or self.entry_path or "<inline>")

    def to_dict(self) -> Dict[str, Any]:
        """
        Serializable form. Fields that were never set are omitted, so a module
        that reported no timings has no `timings` key at all.
        """
        return self.model_dump(exclude_unset=True, mode="json")

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from hostkit.core.modules.models import InstalledModuleRecord


class HostCompatibility(str, Enum):
    current = "current"
    legacy = "legacy"


def _str_list(v: Any) -> List[str]:
    if v is None:
        return []
    if isinstance(v, str):
        v = [v]
    if isinstance(v, (list, tuple)):
        return [str(x).strip() for x in v if str(x or "").strip()]
    return []


class LayerDirConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    modules: Optional[str] = None


class BuildConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    transpile: List[str] = Field(default_factory=list)

    @field_validator("transpile", mode="before")
    @classmethod
    def _norm_transpile(cls, v: Any) -> List[str]:
        return _str_list(v)


class LayerConfig(BaseModel):
    """
    Contents of a layer's hostkit.json. Every key is optional.
    """

    model_config = ConfigDict(extra="forbid")

    src_dir: Optional[str] = None
    dir: LayerDirConfig = Field(default_factory=LayerDirConfig)
    alias: Dict[str, str] = Field(default_factory=dict)
    modules_dir: List[str] = Field(default_factory=list)
    build: BuildConfig = Field(default_factory=BuildConfig)
    compatibility: HostCompatibility = HostCompatibility.current
    extends: List[str] = Field(default_factory=list)

    @field_validator("modules_dir", "extends", mode="before")
    @classmethod
    def _norm_lists(cls, v: Any) -> List[str]:
        return _str_list(v)

    @field_validator("compatibility", mode="before")
    @classmethod
    def _norm_compat(cls, v: Any) -> Any:
        if v is None or v == "":
            return HostCompatibility.current
        if isinstance(v, HostCompatibility):
            return v
        vv = str(v).strip().lower()
        if vv in {"legacy", "2", "v2"}:
            return HostCompatibility.legacy
        if vv in {"current", "3", "v3"}:
            return HostCompatibility.current
        return v


class LayerDescriptor(BaseModel):
    model_config = ConfigDict(extra="forbid")

    cwd: str = Field(min_length=1)
    config: LayerConfig = Field(default_factory=LayerConfig)


class HostOptions(BaseModel):
    """
    Mutable host options shared by every install call of one build.
    """

    model_config = ConfigDict(extra="forbid")

    root_dir: str = "."
    src_dir: str = "."
    alias: Dict[str, str] = Field(default_factory=dict)
    modules_dir: List[str] = Field(default_factory=list)
    build: BuildConfig = Field(default_factory=BuildConfig)
    layers: List[LayerDescriptor] = Field(default_factory=list)
    installed_modules: List[InstalledModuleRecord] = Field(default_factory=list)

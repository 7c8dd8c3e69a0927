from __future__ import annotations

"""
Dual-convention entry loading.

Modern convention: the resolved path is a .py file or package directory and is
executed as a fresh module from its file location.

Legacy convention: the resolved path is turned into a dotted module name and
imported through the regular import system (and its sys.modules cache), with
the host's module search paths added to sys.path for the duration. Every
component of the name is located first, so a missing submodule never runs its
parent package.

The modern attempt always runs first; if both fail the legacy error is raised.
"""

import hashlib
import importlib
import importlib.machinery
import importlib.util
import os
import sys
from dataclasses import dataclass
from enum import Enum
from types import ModuleType
from typing import Any, Iterable, List, Optional


class LoadConvention(str, Enum):
    modern = "modern"
    legacy = "legacy"


@dataclass(frozen=True)
class LoadedEntry:
    export: Any
    origin: Optional[str]
    convention: LoadConvention


def interop_default(mod: ModuleType) -> Any:
    return getattr(mod, "default", mod)


def _entry_file(path: str) -> Optional[str]:
    if os.path.isdir(path):
        init = os.path.join(path, "__init__.py")
        return init if os.path.isfile(init) else None
    if os.path.isfile(path) and path.endswith(".py"):
        return path
    return None


def _synthetic_name(file_path: str) -> str:
    # must be deterministic across interpreter restarts
    key = file_path.replace("\\", "/").lower().encode("utf-8")
    stem = os.path.splitext(os.path.basename(file_path))[0]
    if stem == "__init__":
        stem = os.path.basename(os.path.dirname(file_path))
    stem = "".join(c if c.isalnum() else "_" for c in stem)
    return f"hostkit_module_{stem}_{hashlib.sha1(key).hexdigest()[:16]}"


def import_module_path(path: str) -> ModuleType:
    if not os.path.isabs(path):
        raise ImportError(f"Not an absolute module path: {path}")
    file_path = _entry_file(path)
    if file_path is None:
        raise ImportError(f"No importable entry at {path}")

    module_name = _synthetic_name(file_path)
    search = [os.path.dirname(file_path)] if os.path.basename(file_path) == "__init__.py" else None
    spec = importlib.util.spec_from_file_location(module_name, file_path, submodule_search_locations=search)
    if spec is None or spec.loader is None:
        raise ImportError(f"Cannot create module spec for {file_path}")

    mod = importlib.util.module_from_spec(spec)
    # registered before exec so dataclasses and relative imports can find it
    sys.modules[module_name] = mod
    try:
        spec.loader.exec_module(mod)
    except Exception:
        # don't leave a half-executed module cached
        sys.modules.pop(module_name, None)
        raise
    return mod


def _dotted_name(path: str, search_paths: Iterable[str]) -> str:
    target = path
    if os.path.isabs(path):
        for root in search_paths:
            root_abs = os.path.abspath(root)
            if target == root_abs or not target.startswith(root_abs + os.sep):
                continue
            target = os.path.relpath(target, root_abs)
            break
        else:
            raise ImportError(f"{path} is not inside any module search path")
    target = target.replace("\\", "/")
    if target.endswith(".py"):
        target = target[: -len(".py")]
    if target.endswith("/__init__"):
        target = target[: -len("/__init__")]
    parts = [p for p in target.split("/") if p and p != "."]
    if not parts or any(p == ".." for p in parts):
        raise ImportError(f"Cannot derive a module name from {path}")
    return ".".join(parts)


def _locate(name: str) -> None:
    """
    Raise ModuleNotFoundError unless every component of a dotted name can be
    found. Nothing is executed: import_module("pkg.host") would run pkg before
    failing on host.
    """
    parts = name.split(".")
    locations: Optional[List[str]] = None
    for i in range(len(parts)):
        fullname = ".".join(parts[: i + 1])
        loaded = sys.modules.get(fullname)
        if loaded is not None:
            found = getattr(loaded, "__path__", None)
        else:
            if i == 0:
                spec = importlib.util.find_spec(fullname)
            else:
                spec = importlib.machinery.PathFinder.find_spec(fullname, locations)
            if spec is None:
                raise ModuleNotFoundError(f"No module named {fullname!r}", name=fullname)
            found = spec.submodule_search_locations
        if i < len(parts) - 1 and found is None:
            raise ModuleNotFoundError(f"No module named {name!r}; {fullname!r} is not a package", name=name)
        locations = list(found) if found is not None else None


def require_module(path: str, *, paths: Optional[Iterable[str]] = None) -> ModuleType:
    search: List[str] = [os.path.abspath(p) for p in (paths or [])]
    name = _dotted_name(path, search)
    added = [p for p in search if p not in sys.path]
    sys.path[:0] = added
    # entry files may have been generated since the finders cached their listings
    importlib.invalidate_caches()
    try:
        _locate(name)
        return importlib.import_module(name)
    finally:
        for p in added:
            try:
                sys.path.remove(p)
            except ValueError:
                pass


def load_entry(path: str, search_paths: Optional[Iterable[str]] = None) -> LoadedEntry:
    search = list(search_paths or [])
    try:
        mod = import_module_path(path)
        convention = LoadConvention.modern
    except Exception:  # noqa: BLE001
        # a legacy failure raised here keeps the modern one as __context__
        mod = require_module(path, paths=search)
        convention = LoadConvention.legacy
    return LoadedEntry(export=interop_default(mod), origin=getattr(mod, "__file__", None), convention=convention)

from __future__ import annotations

"""
Build context loading from a project directory.

A project root holds an optional hostkit.json. Its `extends` entries name
further layer directories (relative to the extending layer), each with its own
optional hostkit.json. Layers are ordered root first; for alias, modules_dir
and transpile, earlier layers take precedence.
"""

import logging
import os
from typing import Any, Dict, List, Optional, Set

from pydantic import ValidationError

from hostkit.core.config.io import atomic_write_json, read_json_file
from hostkit.core.config.models import BuildConfig, HostOptions, LayerConfig, LayerDescriptor
from hostkit.core.config.paths import ProjectFsPaths
from hostkit.core.context import BuildContext
from hostkit.core.errors import ConfigError
from hostkit.core.logger import get_logger


def load_layer(cwd: str) -> LayerDescriptor:
    cwd = os.path.abspath(cwd)
    path = ProjectFsPaths(cwd).config_file
    rr = read_json_file(path)
    if not rr.ok and not rr.missing:
        raise ConfigError(f"Unable to read {path}: {rr.error}", path=path)
    try:
        cfg = LayerConfig.model_validate(rr.data)
    except ValidationError as e:
        raise ConfigError(f"Invalid layer config {path}: {e.error_count()} error(s)", path=path, detail=str(e)[:300]) from e
    return LayerDescriptor(cwd=cwd, config=cfg)


def load_layers(root: str) -> List[LayerDescriptor]:
    out: List[LayerDescriptor] = []
    seen: Set[str] = set()
    pending = [os.path.abspath(root)]
    while pending:
        cwd = pending.pop(0)
        if cwd in seen:
            continue
        seen.add(cwd)
        layer = load_layer(cwd)
        out.append(layer)
        pending.extend(os.path.normpath(os.path.join(cwd, ext)) for ext in layer.config.extends)
    return out


def _layer_path(layer: LayerDescriptor, p: str) -> str:
    return p if os.path.isabs(p) else os.path.normpath(os.path.join(layer.cwd, p))


def build_options(layers: List[LayerDescriptor]) -> HostOptions:
    if not layers:
        raise ConfigError("At least one layer is required.")
    root = layers[0]
    root_dir = root.cwd
    src_dir = _layer_path(root, root.config.src_dir or ".")

    alias: Dict[str, str] = {}
    modules_dir: List[str] = []
    transpile: List[str] = []
    for layer in layers:
        for k, v in layer.config.alias.items():
            alias.setdefault(k, _layer_path(layer, v) if v.startswith(("./", "../")) else v)
        for d in layer.config.modules_dir:
            p = _layer_path(layer, d)
            if p not in modules_dir:
                modules_dir.append(p)
        for t in layer.config.build.transpile:
            if t not in transpile:
                transpile.append(t)
    if not modules_dir:
        modules_dir.append(root_dir)

    return HostOptions(
        root_dir=root_dir,
        src_dir=src_dir,
        alias=alias,
        modules_dir=modules_dir,
        build=BuildConfig(transpile=transpile),
        layers=layers,
    )


def load_build_context(root: str = ".", *, logger: Optional[logging.Logger] = None) -> BuildContext:
    layers = load_layers(root)
    options = build_options(layers)
    log = logger or get_logger()
    log.info(f"[config] Loaded {len(layers)} layer(s) from {options.root_dir}")
    return BuildContext(options=options, compatibility=layers[0].config.compatibility, logger=log)


def export_ledger(ctx: BuildContext, path: Optional[str] = None) -> str:
    """
    Write the installed-module ledger as JSON (callables are never included).
    """
    path = path or ProjectFsPaths(ctx.options.root_dir).installed_modules
    out: Dict[str, Any] = {
        "root_dir": ctx.options.root_dir,
        "installed_modules": [rec.to_dict() for rec in ctx.installed_modules],
    }
    atomic_write_json(path, out)
    return path

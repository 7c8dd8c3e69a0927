from __future__ import annotations

import json
import os
import textwrap
from typing import Any, Dict, Optional


def write_module(root: str, relpath: str, source: str, *, meta: Optional[Any] = None, meta_text: Optional[str] = None) -> str:
    """
    Write a module source file under root and, optionally, its module.json sidecar.
    Returns the absolute path of the written source file.
    """
    path = os.path.abspath(os.path.join(str(root), relpath))
    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(textwrap.dedent(source).lstrip())
    sidecar = os.path.join(os.path.dirname(path), "module.json")
    if meta is not None:
        with open(sidecar, "w", encoding="utf-8") as f:
            json.dump(meta, f)
    elif meta_text is not None:
        with open(sidecar, "w", encoding="utf-8") as f:
            f.write(meta_text)
    return path


def write_layer_config(cwd: str, cfg: Dict[str, Any]) -> str:
    os.makedirs(str(cwd), exist_ok=True)
    path = os.path.join(str(cwd), "hostkit.json")
    with open(path, "w", encoding="utf-8") as f:
        json.dump(cfg, f, indent=2)
        f.write("\n")
    return path


RETURNS_TIMINGS = """
def default(options, ctx):
    return {"timings": {"setup": 5}}
"""

RETURNS_NOTHING = """
def default(options, ctx):
    return None
"""

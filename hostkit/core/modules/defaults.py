from __future__ import annotations

from typing import Any, Dict, Mapping, Optional


def merge_defaults(*sources: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """
    Merge mappings left to right where the LEFTMOST value wins.

    Nested mappings merge recursively. A None value never shadows a value from
    a later source. Non-mapping sources (None included) contribute nothing.
    """
    out: Dict[str, Any] = {}
    for src in reversed(sources):
        if not isinstance(src, Mapping):
            continue
        for k, v in src.items():
            if v is None and k in out:
                continue
            cur = out.get(k)
            if isinstance(v, Mapping) and isinstance(cur, Mapping):
                out[k] = merge_defaults(v, cur)
            elif isinstance(v, Mapping):
                out[k] = merge_defaults(v)
            else:
                out[k] = v
    return out

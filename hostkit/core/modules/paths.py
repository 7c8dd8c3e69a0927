from __future__ import annotations

"""
Specifier to path helpers.

Nothing here imports module code; these are string and stat-level operations
used by the instance loader (candidate order) and the installer (transpile and
search-path bookkeeping).
"""

import os
import re
import stat
from typing import List

# Entry-file conventions tried before the bare specifier, in order.
ENTRY_CONVENTIONS = ("host", "module")

VENDOR_DIR_NAMES = ("site-packages", "dist-packages")

_VENDOR_SPLIT_RE = re.compile(r"(?:%s)[/\\]" % "|".join(re.escape(n) for n in VENDOR_DIR_NAMES))


def candidate_specifiers(specifier: str) -> List[str]:
    spec = str(specifier)
    return [os.path.join(spec, name) for name in ENTRY_CONVENTIONS] + [spec]


def get_directory(path: str) -> str:
    # target the directory instead of the entry file itself:
    # /proj/site-packages/mod/__init__.py -> /proj/site-packages/mod
    try:
        if os.path.isabs(path) and stat.S_ISREG(os.lstat(path).st_mode):
            return os.path.dirname(path)
    except OSError:
        # absolute but missing; let the later resolution report it
        pass
    return path


def is_vendored_dir(path: str) -> bool:
    parts = re.split(r"[/\\]", str(path or ""))
    return any(p in VENDOR_DIR_NAMES for p in parts)


def normalize_module_transpile_path(path: str) -> str:
    return _VENDOR_SPLIT_RE.split(get_directory(path))[-1]

from __future__ import annotations

import os
from typing import Dict, Iterable, List, Optional

from hostkit.core.config.models import HostOptions

ENTRY_EXTENSIONS = (".py",)


class PathResolver:
    """
    Default path-resolution collaborator for a build.

    Reads aliases and search roots from the live HostOptions, so search paths
    appended by earlier installs take part in later resolutions.
    """

    def __init__(self, options: HostOptions):
        self.options = options

    def _aliases(self) -> Dict[str, str]:
        out: Dict[str, str] = {
            "~~": self.options.root_dir,
            "@@": self.options.root_dir,
            "~": self.options.src_dir,
            "@": self.options.src_dir,
        }
        for k, v in (self.options.alias or {}).items():
            target = str(v)
            if target.startswith("./") or target.startswith("../"):
                target = os.path.normpath(os.path.join(self.options.root_dir, target))
            out[str(k)] = target
        return out

    def resolve_alias(self, path: str) -> str:
        p = str(path)
        aliases = self._aliases()
        for prefix in sorted(aliases, key=len, reverse=True):
            if p == prefix:
                return aliases[prefix]
            if p.startswith(prefix + "/") or p.startswith(prefix + "\\"):
                return os.path.join(aliases[prefix], p[len(prefix) + 1 :])
        return p

    @staticmethod
    def _probe(base: str) -> Optional[str]:
        candidates: List[str] = [base]
        candidates.extend(base + ext for ext in ENTRY_EXTENSIONS)
        candidates.append(os.path.join(base, "__init__.py"))
        for c in candidates:
            if os.path.isfile(c):
                return os.path.abspath(c)
        return None

    def _roots(self) -> Iterable[str]:
        return [os.path.abspath(r) for r in (self.options.modules_dir or [])]

    def resolve_path(self, path: str) -> str:
        p = self.resolve_alias(path)
        if p.startswith("./") or p.startswith("../"):
            p = os.path.normpath(os.path.join(self.options.src_dir, p))
        if os.path.isabs(p):
            found = self._probe(p)
            return found or p
        for root in self._roots():
            found = self._probe(os.path.join(root, p))
            if found:
                return found
        return p

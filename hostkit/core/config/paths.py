from __future__ import annotations

import os
from dataclasses import dataclass


@dataclass(frozen=True)
class ProjectFsPaths:
    root: str = "."

    @property
    def config_file(self) -> str:
        return os.path.join(self.root, "hostkit.json")

    @property
    def logs_dir(self) -> str:
        return os.path.join(self.root, "logs")

    @property
    def state_dir(self) -> str:
        return os.path.join(self.root, ".hostkit")

    @property
    def installed_modules(self) -> str:
        return os.path.join(self.state_dir, "installed_modules.json")

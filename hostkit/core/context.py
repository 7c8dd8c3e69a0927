from __future__ import annotations

"""
Build context threaded explicitly through every install call.

There is no ambient "current build": callers own one BuildContext per build
and pass it to every operation, which keeps tests free to substitute the
resolver, the logger or the whole context.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, List, Optional

from hostkit.core.config.models import HostCompatibility, HostOptions
from hostkit.core.logger import get_logger
from hostkit.core.modules.models import InstalledModuleRecord, ModuleReference
from hostkit.core.resolve import PathResolver


class ModuleContainer:
    """
    Receiver bound to module callables under the legacy calling convention.

    Modules are still called as (options, ctx); while one runs, its container
    is available from hostkit.core.modules.current_module_container().
    """

    def __init__(self, ctx: "BuildContext"):
        self.ctx = ctx

    @property
    def options(self) -> HostOptions:
        return self.ctx.options

    async def install_module(self, reference: ModuleReference, options: Any = None) -> None:
        from hostkit.core.modules.install import install_module

        await install_module(reference, options, self.ctx)

    add_module = install_module


@dataclass
class BuildContext:
    options: HostOptions = field(default_factory=HostOptions)
    compatibility: HostCompatibility = HostCompatibility.current
    logger: logging.Logger = field(default_factory=get_logger)
    resolver: Any = None
    module_container: Optional[ModuleContainer] = None

    def __post_init__(self) -> None:
        if self.resolver is None:
            self.resolver = PathResolver(self.options)
        if self.module_container is None:
            self.module_container = ModuleContainer(self)

    @property
    def is_legacy(self) -> bool:
        return self.compatibility == HostCompatibility.legacy

    @property
    def installed_modules(self) -> List[InstalledModuleRecord]:
        return self.options.installed_modules

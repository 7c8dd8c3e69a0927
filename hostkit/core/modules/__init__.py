"""
Module resolution and installation.

Resolves a module specifier across entry conventions, loads it with the
modern (path) or legacy (import-name) convention, merges sidecar metadata,
invokes it against a build context and records it in the installed-module
ledger.
"""

from hostkit.core.modules.define import HostModule, define_module
from hostkit.core.modules.install import current_module_container, install_module
from hostkit.core.modules.instance import load_module_instance

__all__ = ["HostModule", "current_module_container", "define_module", "install_module", "load_module_instance"]

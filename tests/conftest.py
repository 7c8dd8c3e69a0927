from __future__ import annotations

import os
import sys

import pytest

from hostkit.core.config.models import HostCompatibility, HostOptions, LayerDescriptor
from hostkit.core.context import BuildContext
from tests.helpers.fakes import RecordingLogger


@pytest.fixture(autouse=True)
def isolated_imports(tmp_path):
    """
    Drop modules loaded from tmp_path and restore sys.path after each test,
    so fixture module names never leak between tests.
    """
    saved_path = list(sys.path)
    yield
    sys.path[:] = saved_path
    root = str(tmp_path)
    for name, mod in list(sys.modules.items()):
        origin = getattr(mod, "__file__", None) or ""
        if origin.startswith(root):
            sys.modules.pop(name, None)
        elif name.startswith("hostkit_module_"):
            sys.modules.pop(name, None)
        else:
            paths = list(getattr(mod, "__path__", None) or [])
            if paths and all(str(p).startswith(root) for p in paths):
                sys.modules.pop(name, None)


@pytest.fixture
def project_root(tmp_path):
    root = tmp_path / "proj"
    os.makedirs(root, exist_ok=True)
    return str(root)


@pytest.fixture
def make_ctx(project_root):
    """
    Factory for a BuildContext rooted at project_root with a recording logger.
    """

    def _make(*, legacy: bool = False, layers=None, alias=None, modules_dir=None, resolver=None) -> BuildContext:
        options = HostOptions(
            root_dir=project_root,
            src_dir=project_root,
            alias=dict(alias or {}),
            modules_dir=list(modules_dir) if modules_dir is not None else [project_root],
            layers=list(layers) if layers is not None else [LayerDescriptor(cwd=project_root)],
        )
        return BuildContext(
            options=options,
            compatibility=HostCompatibility.legacy if legacy else HostCompatibility.current,
            logger=RecordingLogger(),
            resolver=resolver,
        )

    return _make

from __future__ import annotations

"""
Programmatic module installation.

install_module() loads a module (by specifier or as a callable), invokes it
once against the build context, and records the outcome in the installed
module ledger. A module returning exactly False aborts its own installation:
nothing is recorded and no bookkeeping happens.
"""

import inspect
import os
from contextlib import contextmanager
from contextvars import ContextVar
from typing import TYPE_CHECKING, Any, Dict, Iterable, Iterator, Optional, Set

from hostkit.core.modules.defaults import merge_defaults
from hostkit.core.modules.instance import load_module_instance
from hostkit.core.modules.models import InstalledModuleRecord, ModuleCallable, ModuleReference
from hostkit.core.modules.paths import get_directory, is_vendored_dir, normalize_module_transpile_path

if TYPE_CHECKING:
    from hostkit.core.config.models import LayerDescriptor
    from hostkit.core.context import BuildContext, ModuleContainer

DEFAULT_MODULES_SUBDIR = "modules"

# Set only while a module runs under the legacy calling convention.
_active_container: ContextVar[Optional["ModuleContainer"]] = ContextVar("hostkit_module_container", default=None)


def current_module_container() -> Optional["ModuleContainer"]:
    """
    The module container a legacy host bound to the running module, or None
    when the module was invoked under the current convention.
    """
    return _active_container.get()


@contextmanager
def bound_module_container(container: Optional["ModuleContainer"]) -> Iterator[None]:
    token = _active_container.set(container)
    try:
        yield
    finally:
        _active_container.reset(token)


async def maybe_await(value: Any) -> Any:
    if inspect.isawaitable(value):
        return await value
    return value


def local_layer_module_dirs(layers: Iterable["LayerDescriptor"]) -> Set[str]:
    out: Set[str] = set()
    for layer in layers:
        src_dir = layer.config.src_dir or layer.cwd
        if not os.path.isabs(src_dir):
            src_dir = os.path.join(layer.cwd, src_dir)
        if is_vendored_dir(src_dir):
            continue
        out.add(os.path.abspath(os.path.join(src_dir, layer.config.dir.modules or DEFAULT_MODULES_SUBDIR)))
    return out


async def invoke_module(module: ModuleCallable, options: Any, ctx: "BuildContext") -> Any:
    if not ctx.is_legacy:
        return await maybe_await(module(options, ctx))
    # same (options, ctx) call; the container is bound until the result settles
    with bound_module_container(ctx.module_container):
        return await maybe_await(module(options, ctx))


async def module_meta(module: ModuleCallable) -> Dict[str, Any]:
    get_meta = getattr(module, "get_meta", None)
    if not callable(get_meta):
        return {}
    meta = await maybe_await(get_meta())
    return dict(meta) if isinstance(meta, dict) else {}


async def install_module(reference: ModuleReference, options: Any = None, ctx: Optional["BuildContext"] = None) -> None:
    """
    Install a module into the build context.

    :param reference: a specifier (package name or path) or a module callable.
    :param options: inline options passed to the module as its first argument.
    :param ctx: the build context; required, there is no ambient default.
    """
    if ctx is None:
        raise ValueError("install_module() requires a build context")

    module, build_time_meta = load_module_instance(reference, ctx)
    local_dirs = local_layer_module_dirs(ctx.options.layers)

    result = await invoke_module(module, options, ctx)
    if result is None:
        result = {}

    if result is False:
        name = reference if isinstance(reference, str) else getattr(module, "__name__", repr(module))
        ctx.logger.info(f"[modules] {name}: setup aborted")
        return

    if isinstance(reference, str):
        ctx.options.build.transpile.append(normalize_module_transpile_path(reference))

        directory = get_directory(reference)
        if directory != reference and directory not in local_dirs:
            ctx.options.modules_dir.append(directory)

    record: Dict[str, Any] = {"meta": merge_defaults(await module_meta(module), build_time_meta), "module": module}
    timings = result.get("timings") if isinstance(result, dict) else None
    if timings is not None:
        record["timings"] = timings
    if isinstance(reference, str):
        record["entry_path"] = ctx.resolver.resolve_alias(reference)

    rec = InstalledModuleRecord(**record)
    ctx.options.installed_modules.append(rec)
    ctx.logger.info(f"[modules] Installed module {rec.name}")

from __future__ import annotations

"""
Module instance loading: reference -> (callable, build-time metadata).
"""

import os
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Tuple

from hostkit.core.config.io import read_json_file
from hostkit.core.errors import InvalidModuleContractError, MetadataParseError, ResolutionExhaustedError
from hostkit.core.modules.loader import LoadedEntry, load_entry
from hostkit.core.modules.models import ModuleCallable, ModuleMeta, ModuleReference
from hostkit.core.modules.paths import candidate_specifiers

if TYPE_CHECKING:
    from hostkit.core.context import BuildContext

# Written next to the entry file by the module's own build tooling.
METADATA_FILENAME = "module.json"


def _entry_dir(resolved: str, entry: LoadedEntry) -> Optional[str]:
    if os.path.isabs(resolved) and os.path.isdir(resolved):
        return resolved
    if os.path.isabs(resolved) and os.path.exists(resolved):
        return os.path.dirname(resolved)
    if entry.origin:
        return os.path.dirname(os.path.abspath(entry.origin))
    return None


def read_build_time_meta(entry_dir: Optional[str]) -> ModuleMeta:
    if not entry_dir:
        return {}
    path = os.path.join(entry_dir, METADATA_FILENAME)
    rr = read_json_file(path)
    if rr.ok:
        return dict(rr.data)
    if rr.missing:
        return {}
    raise MetadataParseError(path, rr.error or "")


def load_module_instance(reference: ModuleReference, ctx: "BuildContext") -> Tuple[ModuleCallable, ModuleMeta]:
    module: Any = reference
    build_time_meta: Dict[str, Any] = {}

    if isinstance(reference, str):
        errors: List[BaseException] = []
        loaded = False
        for candidate in candidate_specifiers(reference):
            try:
                src = ctx.resolver.resolve_path(candidate)
                entry = load_entry(src, ctx.options.modules_dir)
            except Exception as e:  # noqa: BLE001
                ctx.logger.debug(f"[modules] candidate {candidate!r} failed: {e}")
                errors.append(e)
                continue
            ctx.logger.debug(f"[modules] loaded {candidate!r} from {src} ({entry.convention.value})")
            try:
                build_time_meta = read_build_time_meta(_entry_dir(src, entry))
            except MetadataParseError as e:
                ctx.logger.error(f"[modules] {e}")
                raise
            module = entry.export
            loaded = True
            break

        if not loaded:
            err = ResolutionExhaustedError(reference, errors)
            ctx.logger.error(f"[modules] {err}")
            raise err from (errors[-1] if errors else None)

    if not callable(module):
        raise InvalidModuleContractError(module)

    return module, build_time_meta

from __future__ import annotations

"""
Authoring helper for host modules.

A module file usually ends with:

    default = define_module(setup, meta={"name": "my-mod", "config_key": "myMod"}, defaults={...})

which gives the installer a callable with get_meta(), option defaults, and a
setup timing in its install result.
"""

import time
from typing import TYPE_CHECKING, Any, Callable, Dict, Optional

from hostkit.core.modules.defaults import merge_defaults
from hostkit.core.modules.install import maybe_await

if TYPE_CHECKING:
    from hostkit.core.context import BuildContext

SLOW_SETUP_MS = 5000


class HostModule:
    def __init__(
        self,
        setup: Optional[Callable[..., Any]] = None,
        *,
        meta: Optional[Dict[str, Any]] = None,
        defaults: Optional[Dict[str, Any]] = None,
    ):
        self.setup = setup
        self.meta: Dict[str, Any] = dict(meta or {})
        self.defaults: Dict[str, Any] = dict(defaults or {})
        self.__name__ = str(self.meta.get("name") or getattr(setup, "__name__", "module"))

    def __repr__(self) -> str:
        return f"HostModule({self.__name__!r})"

    def get_meta(self) -> Dict[str, Any]:
        return dict(self.meta)

    def get_options(self, inline_options: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        return merge_defaults(inline_options or {}, self.defaults)

    async def __call__(self, inline_options: Optional[Dict[str, Any]], ctx: Optional["BuildContext"]) -> Any:
        options = self.get_options(inline_options)

        if self.setup is None:
            return {"timings": {"setup": 0}}

        start = time.perf_counter()
        res = await maybe_await(self.setup(options, ctx))
        elapsed_ms = int((time.perf_counter() - start) * 1000)

        if res is False:
            return False
        if elapsed_ms > SLOW_SETUP_MS and ctx is not None:
            ctx.logger.warning(f"[modules] Slow module `{self.__name__}` took {elapsed_ms / 1000:.2f}s to setup.")

        out: Dict[str, Any] = dict(res) if isinstance(res, dict) else {}
        timings = dict(out.get("timings") or {})
        timings["setup"] = elapsed_ms
        out["timings"] = timings
        return out


def define_module(
    setup: Optional[Callable[..., Any]] = None,
    *,
    meta: Optional[Dict[str, Any]] = None,
    defaults: Optional[Dict[str, Any]] = None,
) -> HostModule:
    return HostModule(setup, meta=meta, defaults=defaults)

from __future__ import annotations

import argparse
import asyncio
import json

from hostkit.core.config.manager import export_ledger, load_build_context
from hostkit.core.config.models import HostCompatibility
from hostkit.core.config.paths import ProjectFsPaths
from hostkit.core.logger import setup_logging
from hostkit.core.modules import install_module


def main() -> int:
    ap = argparse.ArgumentParser(description="hostkit module install")
    ap.add_argument("specifier", nargs="+", help="Module specifier(s), installed in order")
    ap.add_argument("--root", default=".", help="Project root containing hostkit.json")
    ap.add_argument("--options", default="{}", help="Inline module options as a JSON object")
    ap.add_argument("--legacy", action="store_true", help="Use the legacy calling convention")
    ap.add_argument("--export", action="store_true", help="Also write the ledger under .hostkit/")
    args = ap.parse_args()

    options = json.loads(args.options)
    logger = setup_logging(ProjectFsPaths(args.root).logs_dir)
    ctx = load_build_context(args.root, logger=logger)
    if args.legacy:
        ctx.compatibility = HostCompatibility.legacy

    async def _run() -> None:
        for spec in args.specifier:
            await install_module(spec, options, ctx)

    asyncio.run(_run())
    if args.export:
        export_ledger(ctx)
    print(json.dumps([rec.to_dict() for rec in ctx.installed_modules], indent=2, sort_keys=True))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

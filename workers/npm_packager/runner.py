"""
npm_packager runner — top-level orchestration: Deno sources → npm package.

Stages, strictly in order:
  1. reset the output directory
  2. stage sources into <out>/src
  3. stage root assets (missing ones are skipped with a warning)
  4. rewrite .ts import specifiers to .js
  5. write tsconfig.json
  6. write package.json
  7. npm install / npx jsr add (if configured)
  8. tsc -p tsconfig.json, inside the output directory
  9. remove tsconfig.json and <out>/src

``run_npm_build`` can be called from the API endpoint, from the CLI,
or programmatically.
"""
from __future__ import annotations

import argparse
import json
import logging
import shutil
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from npm_packager.core.manifests import build_package_json, build_tsconfig
from npm_packager.core.process import CommandResult, run_command, working_directory
from npm_packager.core.rewrite import rewrite_tree
from npm_packager.core.staging import reset_dir, stage_root_assets, stage_sources
from npm_packager.errors import PackagerError
from npm_packager.io.schema import BuildSummary, CommandRecord, NpmBuildOptions
from npm_packager.io.writer import write_package_json, write_tsconfig
from npm_packager.policy.profile import PackagerProfile, Toolchain

logger = logging.getLogger(__name__)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _record(result: CommandResult) -> CommandRecord:
    return CommandRecord(
        command=result.command,
        exit_code=result.exit_code,
        duration_ms=round(result.duration_ms, 1),
    )


def _resolve(path: str, base_dir: Path) -> Path:
    p = Path(path)
    return p if p.is_absolute() else base_dir / p


def _check_confined(path: Path, base_dir: Path, what: str) -> None:
    resolved = path.resolve()
    if resolved != base_dir and base_dir not in resolved.parents:
        raise PackagerError(f"{what} {resolved} is outside {base_dir}")


# ── Public API ───────────────────────────────────────────────────────────────

def run_npm_build(
    options: NpmBuildOptions,
    profile: PackagerProfile | None = None,
    toolchain: Toolchain | None = None,
    base_dir: Path | None = None,
    confine: bool = False,
) -> BuildSummary:
    """
    Build an npm package from Deno TypeScript source.

    Parameters
    ----------
    options : NpmBuildOptions
        Build configuration.
    profile : PackagerProfile, optional
        Build defaults. Defaults to PackagerProfile.v1().
    toolchain : Toolchain, optional
        External executable names. Defaults to npm / npx / tsc.
    base_dir : Path, optional
        Directory that relative ``src_dir``, ``out_dir`` and root assets
        resolve against. Defaults to the current working directory.
    confine : bool
        Reject any source, source file, root asset or output directory
        that resolves outside *base_dir*. Used by the HTTP API.

    Returns
    -------
    BuildSummary

    Raises
    ------
    PackagerError
        The output directory holds the sources, or (with *confine*) a path
        escapes *base_dir*.
    SourceNotFoundError
        ``src_dir`` or an explicit source file does not exist.
    CommandNotFoundError, CommandFailedError
        An installer or the compiler is missing or exits non-zero.
    """
    if profile is None:
        profile = PackagerProfile.v1()
    if toolchain is None:
        toolchain = Toolchain()
    base_dir = (base_dir or Path.cwd()).resolve()

    src_dir = _resolve(options.src_dir, base_dir)
    out_dir = _resolve(options.out_dir, base_dir).resolve()
    out_src = out_dir / profile.src_subdir

    resolved_src = src_dir.resolve()
    if out_dir == base_dir or out_dir == resolved_src or out_dir in resolved_src.parents:
        raise PackagerError(
            f"Refusing to use {out_dir} as output directory: it holds the sources"
        )
    if confine:
        _check_confined(out_dir, base_dir, "outDir")
        _check_confined(src_dir, base_dir, "srcDir")
        for rel in options.source_files or []:
            _check_confined(src_dir / rel, base_dir, "sourceFiles entry")
        for asset in options.root_files:
            _check_confined(base_dir / asset, base_dir, "rootFiles entry")

    summary = BuildSummary(
        profile_id=profile.profile_id,
        name=options.name,
        version=options.version,
        out_dir=str(out_dir),
        started_at=_now(),
    )

    logger.info("Building npm package: %s@%s", options.name, options.version)
    logger.info("{ srcDir: %s, outDir: %s }", options.src_dir, options.out_dir)

    # ── Step 1: reset ────────────────────────────────────────────────
    reset_dir(out_dir)

    # ── Step 2: sources ──────────────────────────────────────────────
    summary.source_files = stage_sources(src_dir, out_src, options.source_files)

    # ── Step 3: root assets ──────────────────────────────────────────
    copied, missing = stage_root_assets(options.root_files, out_dir, base_dir)
    summary.root_assets_copied = copied
    summary.root_assets_missing = missing

    # ── Step 4: .ts → .js specifiers ─────────────────────────────────
    changed = rewrite_tree(out_src)
    summary.rewritten_files = [p.relative_to(out_src).as_posix() for p in changed]
    logger.debug("Rewrote imports in %d file(s)", len(changed))

    # ── Step 5: tsconfig.json ────────────────────────────────────────
    tsconfig = build_tsconfig(options.tsconfig, profile)
    write_tsconfig(tsconfig, out_dir, profile)

    # ── Step 6: package.json ─────────────────────────────────────────
    package_json = build_package_json(options, profile)
    write_package_json(package_json, out_dir, profile)
    summary.package_json = package_json

    # ── Step 7: dependencies ─────────────────────────────────────────
    if options.dependencies:
        result = run_command(
            [toolchain.npm, "install", *options.dependencies],
            cwd=out_dir,
            label="npm install",
        )
        summary.commands.append(_record(result))

    if options.jsr_dependencies:
        result = run_command(
            [toolchain.npx, "jsr", "add", *options.jsr_dependencies],
            cwd=out_dir,
            label="npx jsr add",
        )
        summary.commands.append(_record(result))

    # ── Step 8: compile ──────────────────────────────────────────────
    with working_directory(out_dir):
        result = run_command(
            [toolchain.tsc, "-p", profile.tsconfig_name],
            label="tsc",
        )
    summary.commands.append(_record(result))

    # ── Step 9: cleanup ──────────────────────────────────────────────
    (out_dir / profile.tsconfig_name).unlink()
    shutil.rmtree(out_src)

    summary.finished_at = _now()
    logger.info("Done!")
    return summary


# ── CLI ──────────────────────────────────────────────────────────────────────

def load_config_file(path: Path) -> Dict[str, Any]:
    """Read a JSON build configuration (camelCase keys)."""
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"{path}: build configuration must be a JSON object")
    return data


def options_from_args(args: argparse.Namespace) -> NpmBuildOptions:
    """Merge ``--config`` with explicit flags; flags win."""
    data: Dict[str, Any] = {}
    if args.config is not None:
        data.update(load_config_file(args.config))

    flags = {
        "name": args.name,
        "version": args.version,
        "srcDir": args.src_dir,
        "outDir": args.out_dir,
        "author": args.author,
        "license": args.license,
        "repository": args.repository,
        "entryPoints": args.entry_points,
        "dependencies": args.dependencies,
        "jsrDependencies": args.jsr_dependencies,
        "rootFiles": args.root_files,
    }
    for key, value in flags.items():
        if value is not None:
            data[key] = value

    return NpmBuildOptions.model_validate(data)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="npm_packager — build an npm package from Deno TypeScript source",
    )
    parser.add_argument(
        "-c", "--config",
        type=Path,
        default=None,
        help="JSON build configuration (camelCase keys, e.g. srcDir, entryPoints)",
    )
    parser.add_argument("--name", help="Package name")
    parser.add_argument("--version", help="Package version")
    parser.add_argument("--src-dir", help="Source directory (default: src)")
    parser.add_argument("--out-dir", help="Output directory (default: .npm-dist)")
    parser.add_argument("--author", help="Package author")
    parser.add_argument("--license", help="Package license")
    parser.add_argument("--repository", help="GitHub repository, e.g. owner/repo")
    parser.add_argument(
        "--entry-point",
        dest="entry_points",
        action="append",
        help="Entry point name without extension (repeatable, default: mod)",
    )
    parser.add_argument(
        "--dependency",
        dest="dependencies",
        action="append",
        help="npm dependency to install (repeatable)",
    )
    parser.add_argument(
        "--jsr-dependency",
        dest="jsr_dependencies",
        action="append",
        help="JSR dependency to add via 'npx jsr add' (repeatable)",
    )
    parser.add_argument(
        "--root-file",
        dest="root_files",
        action="append",
        help="Root file or directory to copy into the package (repeatable)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point for npm_packager."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        options = options_from_args(args)
    except (OSError, ValueError, ValidationError) as e:
        logger.error("Invalid build configuration: %s", e)
        return 1

    try:
        summary = run_npm_build(options)
    except PackagerError as e:
        logger.error("Build failed: %s", e)
        return 1

    print(f"Package: {summary.name}@{summary.version}")
    print(f"Sources: {len(summary.source_files)} "
          f"(rewritten={len(summary.rewritten_files)})")
    if summary.root_assets_missing:
        print(f"Missing root assets: {', '.join(summary.root_assets_missing)}")
    print(f"Output written to: {summary.out_dir}")
    return 0


if __name__ == "__main__":
    sys.exit(main())

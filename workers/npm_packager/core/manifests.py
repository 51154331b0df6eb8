"""
Manifest builders — tsconfig.json and package.json as plain dicts.

Pure functions; writing them to disk is ``io.writer``'s job.
"""
from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Sequence

from npm_packager.core.merge import deep_merge
from npm_packager.io.schema import NpmBuildOptions
from npm_packager.policy.profile import PackagerProfile


def build_tsconfig(
    overrides: Mapping[str, Any],
    profile: PackagerProfile,
) -> Dict[str, Any]:
    """Default compiler manifest with *overrides* deep-merged on top."""
    return deep_merge(profile.default_tsconfig(), overrides)


def export_key(entry: str, profile: PackagerProfile) -> str:
    """``"."`` for the canonical entry, ``"./<entry>"`` otherwise."""
    return "." if entry == profile.canonical_entry else f"./{entry}"


def build_exports(
    entry_points: Sequence[str],
    profile: PackagerProfile,
) -> Dict[str, Dict[str, str]]:
    dist = profile.dist_subdir
    return {
        export_key(entry, profile): {
            "types": f"./{dist}/{entry}.d.ts",
            "import": f"./{dist}/{entry}.js",
        }
        for entry in entry_points
    }


def repository_fields(repository: Optional[str]) -> Dict[str, Any]:
    """``repository`` / ``bugs`` entries for a GitHub ``owner/repo``."""
    if not repository:
        return {}
    return {
        "repository": {
            "type": "git",
            "url": f"git+https://github.com/{repository}.git",
        },
        "bugs": {
            "url": f"https://github.com/{repository}/issues",
        },
    }


def build_package_json(
    options: NpmBuildOptions,
    profile: PackagerProfile,
) -> Dict[str, Any]:
    """
    Package manifest for *options*.

    ``main``/``types`` follow the first entry point. Overrides are merged
    before the repository fields, so a configured ``repository`` always wins.
    """
    main_entry = options.entry_points[0]
    dist = profile.dist_subdir
    base: Dict[str, Any] = {
        "name": options.name,
        "version": options.version,
        "type": "module",
        "main": f"{dist}/{main_entry}.js",
        "types": f"{dist}/{main_entry}.d.ts",
        "exports": build_exports(options.entry_points, profile),
        "author": options.author,
        "license": options.license,
        "dependencies": {},
    }
    package_json = deep_merge(base, options.package_json_overrides)
    package_json.update(repository_fields(options.repository))
    return package_json

"""
Writer — serialize generated manifests into the output directory.

Filesystem layout:
    <out_dir>/tsconfig.json    (removed again after compilation)
    <out_dir>/package.json
"""
import json
from pathlib import Path
from typing import Any, Mapping

from npm_packager.policy.profile import PackagerProfile


def write_json(data: Mapping[str, Any], path: Path) -> Path:
    """Write *data* as tab-indented JSON, keeping key order."""
    path.write_text(json.dumps(data, indent="\t") + "\n", encoding="utf-8")
    return path


def write_tsconfig(
    tsconfig: Mapping[str, Any],
    out_dir: Path,
    profile: PackagerProfile,
) -> Path:
    return write_json(tsconfig, out_dir / profile.tsconfig_name)


def write_package_json(
    package_json: Mapping[str, Any],
    out_dir: Path,
    profile: PackagerProfile,
) -> Path:
    return write_json(package_json, out_dir / profile.package_json_name)

"""
Profile descriptor for npm_packager.

Frozen dataclasses holding the fixed build defaults (compiler options,
root assets, manifest identity) and the external toolchain names.
Not user-selectable in v1 — use ``PackagerProfile.v1()``.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Tuple


@dataclass(frozen=True)
class PackagerProfile:
    """npm_packager v1 build profile."""

    profile_id: str
    src_subdir: str = "src"
    dist_subdir: str = "dist"
    tsconfig_name: str = "tsconfig.json"
    package_json_name: str = "package.json"
    canonical_entry: str = "mod"
    target: str = "esnext"
    module: str = "esnext"
    module_resolution: str = "bundler"

    default_author: str = "Marian Meres"
    default_license: str = "MIT"
    default_root_files: Tuple[str, ...] = (
        "LICENSE",
        "README.md",
        "API.md",
        "AGENTS.md",
        "docs",
    )

    def compiler_options(self) -> Dict[str, Any]:
        """Default ``compilerOptions``. A fresh dict on every call."""
        return {
            "target": self.target,
            "module": self.module,
            "strict": False,
            "declaration": True,
            "forceConsistentCasingInFileNames": True,
            "skipLibCheck": True,
            "rootDir": self.src_subdir,
            "outDir": self.dist_subdir,
            "moduleResolution": self.module_resolution,
        }

    def default_tsconfig(self) -> Dict[str, Any]:
        return {
            "compilerOptions": self.compiler_options(),
            "include": [f"{self.src_subdir}/**/*"],
        }

    @classmethod
    def v1(cls) -> PackagerProfile:
        """The single supported profile for npm_packager v1."""
        return cls(profile_id="deno-ts-to-npm-esm")


@dataclass(frozen=True)
class Toolchain:
    """Executable names for the external collaborators."""

    npm: str = "npm"
    npx: str = "npx"
    tsc: str = "tsc"

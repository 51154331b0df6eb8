"""
Schema — Pydantic models for npm_packager inputs and outputs.

  NpmBuildOptions — immutable build configuration (camelCase JSON aliases).
  CommandRecord   — one external command that ran to completion.
  BuildSummary    — returned by ``run_npm_build``; never written to disk.

Runtime contract fields (present in every summary):
  package_name, builder_version, profile_id.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from npm_packager import BUILDER_VERSION, PACKAGE_NAME
from npm_packager.policy.profile import PackagerProfile

_DEFAULTS = PackagerProfile.v1()


# ── Build configuration ─────────────────────────────────────────────────────

class NpmBuildOptions(BaseModel):
    """
    Configuration for building an npm package from Deno source.

    Accepts both the camelCase keys used in JSON configs (``srcDir``,
    ``entryPoints`` ...) and the Python field names.
    """
    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        populate_by_name=True,
        alias_generator=to_camel,
    )

    name: str = Field(..., min_length=1, description="Package name")
    version: str = Field(..., min_length=1, description="Package version")
    src_dir: str = Field("src", description="Directory holding the TypeScript sources")
    out_dir: str = Field(".npm-dist", description="Output directory for the npm package")
    author: str = _DEFAULTS.default_author
    license: str = _DEFAULTS.default_license
    repository: Optional[str] = Field(
        None,
        description="GitHub 'owner/repo', used for repository/bugs URLs",
    )
    source_files: Optional[List[str]] = Field(
        None,
        description="Explicit source files relative to srcDir (default: walk srcDir)",
    )
    root_files: List[str] = Field(
        default_factory=lambda: list(_DEFAULTS.default_root_files),
        description="Root files or directories copied into the package (missing ones are skipped)",
    )
    dependencies: List[str] = Field(default_factory=list, description="npm dependencies")
    jsr_dependencies: List[str] = Field(
        default_factory=list,
        description="JSR dependencies installed via 'npx jsr add'",
    )
    tsconfig: Dict[str, Any] = Field(
        default_factory=dict,
        description="tsconfig.json overrides (deep merged)",
    )
    entry_points: List[str] = Field(
        default_factory=lambda: [_DEFAULTS.canonical_entry],
        min_length=1,
        description="Entry point module names without extension",
    )
    package_json_overrides: Dict[str, Any] = Field(
        default_factory=dict,
        description="package.json overrides (deep merged)",
    )

    @field_validator("name", "version")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be blank")
        return v

    @field_validator("entry_points")
    @classmethod
    def validate_entry_points(cls, v: List[str]) -> List[str]:
        for entry in v:
            if not entry or entry.endswith(".ts") or entry.startswith(("/", "./")):
                raise ValueError(
                    f"entry point must be a bare module name without extension: {entry!r}"
                )
        return v


# ── Outputs ─────────────────────────────────────────────────────────────────

class CommandRecord(BaseModel):
    """An external command that exited successfully."""
    command: List[str]
    exit_code: int = 0
    duration_ms: float


class BuildSummary(BaseModel):
    """Outcome of one successful build."""
    package_name: str = PACKAGE_NAME
    builder_version: str = BUILDER_VERSION
    profile_id: str

    name: str
    version: str
    out_dir: str
    source_files: List[str] = Field(default_factory=list)
    rewritten_files: List[str] = Field(default_factory=list)
    root_assets_copied: List[str] = Field(default_factory=list)
    root_assets_missing: List[str] = Field(default_factory=list)
    commands: List[CommandRecord] = Field(default_factory=list)
    package_json: Dict[str, Any] = Field(default_factory=dict)

    started_at: str
    finished_at: Optional[str] = None

"""
Packager Router — npm_packager v1

Builds a publishable npm package from Deno TypeScript sources that
already live in the packager workspace. Relative ``srcDir``/``outDir``
resolve against ``PACKAGER_WORKSPACE``.

Builds are serialized: compilation changes the process working
directory, which is shared by every request.
"""
import logging
import threading
from pathlib import Path
from typing import Any, Dict, List

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field

from app.config import Settings
from npm_packager import BUILDER_VERSION, PACKAGE_NAME  # type: ignore
from npm_packager.errors import (  # type: ignore
    CommandFailedError,
    CommandNotFoundError,
    PackagerError,
)
from npm_packager.io.schema import BuildSummary, NpmBuildOptions  # type: ignore
from npm_packager.policy.profile import PackagerProfile, Toolchain  # type: ignore
from npm_packager.runner import run_npm_build  # type: ignore

logger = logging.getLogger(__name__)

_build_lock = threading.Lock()


# =============================================================================
# Dependencies
# =============================================================================

def get_settings() -> Settings:
    """Get application settings."""
    return Settings()


# =============================================================================
# Response Models
# =============================================================================

class PackagerDefaultsResponse(BaseModel):
    """Fixed defaults applied to every build."""
    package_name: str = PACKAGE_NAME  # type: ignore
    builder_version: str = BUILDER_VERSION  # type: ignore
    profile_id: str
    tsconfig: Dict[str, Any]
    root_files: List[str]
    author: str
    license: str
    canonical_entry: str
    toolchain: Dict[str, str] = Field(default_factory=dict)


# =============================================================================
# Router
# =============================================================================

router = APIRouter()


@router.get("/defaults", response_model=PackagerDefaultsResponse)
async def get_defaults(settings: Settings = Depends(get_settings)):
    """Default tsconfig.json, root assets and package identity."""
    profile = PackagerProfile.v1()
    return PackagerDefaultsResponse(
        profile_id=profile.profile_id,
        tsconfig=profile.default_tsconfig(),
        root_files=list(profile.default_root_files),
        author=profile.default_author,
        license=profile.default_license,
        canonical_entry=profile.canonical_entry,
        toolchain={
            "npm": settings.PACKAGER_NPM_BIN,
            "npx": settings.PACKAGER_NPX_BIN,
            "tsc": settings.PACKAGER_TSC_BIN,
        },
    )


@router.post("/build", response_model=BuildSummary)
def build_package(
    options: NpmBuildOptions,
    settings: Settings = Depends(get_settings),
):
    """
    Run a full build: stage sources, rewrite imports, generate manifests,
    install dependencies, compile with tsc and clean up.

    - **400**: source directory or a listed source file does not exist,
      or the output directory would overwrite the sources
    - **500**: an external executable is not installed
    - **502**: npm / npx / tsc exited non-zero (output attached)
    """
    toolchain = Toolchain(
        npm=settings.PACKAGER_NPM_BIN,
        npx=settings.PACKAGER_NPX_BIN,
        tsc=settings.PACKAGER_TSC_BIN,
    )
    workspace = Path(settings.PACKAGER_WORKSPACE)

    with _build_lock:
        try:
            summary = run_npm_build(
                options, toolchain=toolchain, base_dir=workspace, confine=True,
            )
        except CommandNotFoundError as e:
            logger.error("Toolchain missing: %s", e)
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=str(e),
            )
        except CommandFailedError as e:
            logger.error("Build of %s@%s failed: %s", options.name, options.version, e.label)
            raise HTTPException(
                status_code=status.HTTP_502_BAD_GATEWAY,
                detail={
                    "message": str(e),
                    "command": e.command,
                    "exit_code": e.exit_code,
                    "stdout": e.stdout,
                    "stderr": e.stderr,
                },
            )
        except PackagerError as e:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=str(e),
            )

    logger.info("Built %s@%s into %s", summary.name, summary.version, summary.out_dir)
    return summary

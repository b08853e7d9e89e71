"""Upload built package releases to a content-addressed store."""

from __future__ import annotations

import shutil
import tempfile
from pathlib import Path
from typing import Callable, Protocol, runtime_checkable

from pydantic import BaseModel, Field

from dnp_audit.files.compose import DEFAULT_COMPOSE_FILE_NAME, compose_delete_build_properties
from dnp_audit.files.manifest import read_manifest
from dnp_audit.models.manifest import Manifest
from dnp_audit.release.git import GitHead, get_git_head_if_available
from dnp_audit.utils.logging import get_logger

logger = get_logger("release.upload")


@runtime_checkable
class ReleaseUploader(Protocol):
    """Protocol for release uploaders.

    An uploader stores a release directory and returns its content hash.
    """

    @property
    def network_name(self) -> str:
        """Human-readable name of the storage network."""
        ...

    def add_from_fs(
        self,
        dir_path: Path,
        metadata: dict[str, str],
        on_progress: Callable[[float], None] | None = None,
    ) -> str:
        """Upload a directory and return its content hash."""
        ...


class BuildVariant(BaseModel):
    """A built package variant ready to be uploaded."""

    model_config = {"frozen": True}

    variant: str = Field(description="Variant name")
    manifest: Manifest = Field(description="Manifest of the variant")
    release_dir: Path = Field(description="Directory holding the built release")


class UploadedRelease(BaseModel):
    """A release that was uploaded."""

    model_config = {"frozen": True}

    dnp_name: str = Field(description="Package name")
    variant: str = Field(description="Variant name")
    release_hash: str = Field(description="Content hash of the uploaded release")


def get_pin_metadata(manifest: Manifest, git_head: GitHead | None) -> dict[str, str]:
    """Key-values stored with the uploaded release."""
    metadata = {
        "dnpName": manifest.dnp_name,
        "version": manifest.version,
    }
    if manifest.upstream_version:
        metadata["upstreamVersion"] = manifest.upstream_version
    if git_head:
        metadata["commit"] = git_head.commit
        metadata["branch"] = git_head.branch
    return metadata


def percent_to_message(percent: float) -> str:
    return f"Uploading... {percent * 100:.2f}%"


def upload_releases(
    variants: dict[str, BuildVariant],
    uploader: ReleaseUploader,
    skip_upload: bool = False,
    require_git_data: bool = False,
    compose_file_name: str = DEFAULT_COMPOSE_FILE_NAME,
    on_progress: Callable[[str], None] | None = None,
) -> dict[str, UploadedRelease]:
    """Upload every built variant.

    Build properties are removed from the compose file of each release
    after building and before uploading.

    Args:
        variants: Built variants by variant name
        uploader: Storage to upload to
        skip_upload: Do nothing and return no releases
        require_git_data: Fail when git metadata is missing
        compose_file_name: Compose file name inside each release directory
        on_progress: Receives progress messages

    Returns:
        Uploaded releases by package name
    """
    releases: dict[str, UploadedRelease] = {}
    if skip_upload:
        logger.info("Skipping release upload")
        return releases

    for variant in variants.values():
        dnp_name = variant.manifest.dnp_name
        logger.info(f"Upload release for {dnp_name} to {uploader.network_name}")

        git_head = get_git_head_if_available(require_git_data)
        compose_delete_build_properties(variant.release_dir, compose_file_name)

        release_hash = uploader.add_from_fs(
            dir_path=variant.release_dir,
            metadata=get_pin_metadata(variant.manifest, git_head),
            on_progress=(lambda p: on_progress(percent_to_message(p))) if on_progress else None,
        )
        releases[dnp_name] = UploadedRelease(
            dnp_name=dnp_name,
            variant=variant.variant,
            release_hash=release_hash,
        )

    return releases


def package_release_builder(
    uploader: ReleaseUploader,
    compose_file_name: str = DEFAULT_COMPOSE_FILE_NAME,
    require_git_data: bool = False,
) -> Callable[[Path], str]:
    """Build step uploading a package directory as a single release.

    The package is copied to a temporary release directory first, so removing
    build properties never touches the package sources.

    Returns:
        Callable taking the package directory and returning the release hash
    """

    def build(dir: Path) -> str:
        manifest = read_manifest(dir)
        with tempfile.TemporaryDirectory(prefix="dnp-release-") as tmp:
            release_dir = Path(tmp) / "release"
            shutil.copytree(dir, release_dir, ignore=shutil.ignore_patterns(".git"))
            variant = BuildVariant(variant="default", manifest=manifest, release_dir=release_dir)
            releases = upload_releases(
                {variant.variant: variant},
                uploader,
                require_git_data=require_git_data,
                compose_file_name=compose_file_name,
                on_progress=logger.debug,
            )
        return releases[manifest.dnp_name].release_hash

    return build

"""Release upload for validated packages."""

from dnp_audit.release.git import GitHead, get_git_head, get_git_head_if_available
from dnp_audit.release.ipfs import IpfsUploader
from dnp_audit.release.upload import (
    BuildVariant,
    ReleaseUploader,
    UploadedRelease,
    get_pin_metadata,
    package_release_builder,
    percent_to_message,
    upload_releases,
)

__all__ = [
    "BuildVariant",
    "GitHead",
    "IpfsUploader",
    "ReleaseUploader",
    "UploadedRelease",
    "get_git_head",
    "get_git_head_if_available",
    "get_pin_metadata",
    "package_release_builder",
    "percent_to_message",
    "upload_releases",
]

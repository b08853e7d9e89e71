"""Package file loading."""

from dnp_audit.files.compose import compose_delete_build_properties, read_compose, read_compose_dict
from dnp_audit.files.manifest import read_manifest

__all__ = [
    "compose_delete_build_properties",
    "read_compose",
    "read_compose_dict",
    "read_manifest",
]

"""IPFS HTTP API release uploader."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Callable

import httpx

from dnp_audit.utils.errors import NetworkError
from dnp_audit.utils.logging import get_logger

logger = get_logger("release.ipfs")


class IpfsUploader:
    """Upload release directories through an IPFS node HTTP API.

    Every file of the directory is sent in a single ``/api/v0/add`` call
    wrapped in a directory, so the returned hash addresses the whole release.

    Example:
        uploader = IpfsUploader("http://172.33.1.5:5001")
        release_hash = uploader.add_from_fs(Path("build"), {"dnpName": "geth.dnp.dappnode.eth"})
    """

    network_name = "IPFS"

    def __init__(
        self,
        api_url: str,
        timeout: float = 120.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._api_url = api_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport

    @property
    def api_url(self) -> str:
        return self._api_url

    def add_from_fs(
        self,
        dir_path: Path,
        metadata: dict[str, str],
        on_progress: Callable[[float], None] | None = None,
    ) -> str:
        """Upload a directory and return its ``/ipfs/<hash>`` path.

        Raises:
            NetworkError: If the node is unreachable or rejects the upload
        """
        dir_path = Path(dir_path)
        paths = sorted(p for p in dir_path.rglob("*") if p.is_file())
        if not paths:
            raise NetworkError(f"Nothing to upload in {dir_path}", url=self._api_url)

        logger.debug(f"Uploading {len(paths)} files from {dir_path} with metadata {metadata}")
        files = [
            ("file", (p.relative_to(dir_path).as_posix(), p.read_bytes(), "application/octet-stream"))
            for p in paths
        ]

        url = f"{self._api_url}/api/v0/add"
        try:
            with httpx.Client(timeout=self._timeout, transport=self._transport) as client:
                response = client.post(url, params={"pin": "true", "wrap-with-directory": "true"}, files=files)
        except httpx.HTTPError as e:
            raise NetworkError(f"Upload to IPFS failed: {e}", url=url)

        if response.status_code >= 400:
            raise NetworkError(f"IPFS node returned {response.status_code}: {response.text}", url=url)

        # One JSON object per added entry, the wrapping directory comes last
        entries = [json.loads(line) for line in response.text.splitlines() if line.strip()]
        if not entries or "Hash" not in entries[-1]:
            raise NetworkError("IPFS node returned no hash", url=url)

        if on_progress:
            on_progress(1.0)
        return f"/ipfs/{entries[-1]['Hash']}"

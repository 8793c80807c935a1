"""NorthstarProton release helpers."""
import logging
import tarfile
from pathlib import Path

import requests

from ..core.constants import NS_PROTON_BASE_URL, REQUEST_TIMEOUT
from ..core.errors import UnknownError
from ..core.installer import ModInstaller

logger = logging.getLogger(__name__)


def latest_release() -> str:
    """Returns the latest tag from the NorthstarProton repo.

    GitHub redirects ``releases/latest`` to ``releases/tag/<tag>``.
    """
    url = f"{NS_PROTON_BASE_URL}latest"
    response = requests.get(url, timeout=REQUEST_TIMEOUT, allow_redirects=True)
    response.raise_for_status()
    logger.debug("Resolved %s to %s", url, response.url)

    tag = response.url.rstrip('/').split('/')[-1]
    if not tag or tag == "latest":
        raise UnknownError("Malformed location URL")
    return tag


def release_url(tag: str) -> str:
    return f"{NS_PROTON_BASE_URL}download/{tag}/NorthstarProton-{tag.strip('v')}.tar.gz"


def download_ns_proton(tag: str, output, installer=None) -> int:
    """Download the given tag's tarball into ``output``. Returns bytes written."""
    installer = installer or ModInstaller()
    return installer.download(output, release_url(tag))


def install_ns_proton(archive, dest):
    """Extract the NorthstarProton tarball (path or open binary file) into ``dest``."""
    dest = Path(dest)
    dest.mkdir(parents=True, exist_ok=True)
    dest_resolved = dest.resolve()

    if isinstance(archive, (str, Path)):
        opened = tarfile.open(archive, mode='r:gz')
    else:
        opened = tarfile.open(fileobj=archive, mode='r:gz')

    with opened as tarball:
        for member in tarball.getmembers():
            member_path = (dest / member.name).resolve()
            try:
                member_path.relative_to(dest_resolved)
            except ValueError:
                raise UnknownError(f"Blocked path traversal in archive: {member.name}")
        tarball.extractall(dest, filter='data')
    logger.info("Installed NorthstarProton to %s", dest)

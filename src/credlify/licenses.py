"""Open source license lookup."""

from __future__ import annotations

import logging
import re

import httpx

from credlify.manifest import PackageManifest

logger = logging.getLogger(__name__)

LICENSE_TEXT_URL = (
    "https://raw.githubusercontent.com/spdx/license-list-data/main/text/{id}.txt"
)
LICENSE_LIST_URL = "https://opensource.org/licenses/alphabetical"

# SPDX identifiers: letters, digits, periods, hyphens and plus signs
_SPDX_ID = re.compile(r"^[A-Za-z0-9.+-]+$")


class LicenseLookupError(Exception):
    """Raised when license text cannot be fetched for an identifier."""

    def __init__(self, identifier: str, reason: str) -> None:
        self.identifier = identifier
        self.reason = reason
        super().__init__(f"No license text for '{identifier}': {reason}")


def infer_nearest_license(manifest: PackageManifest) -> str:
    """Return the license identifier declared in package.json, or "".

    Accepts the SPDX string form and the legacy ``{"type": "MIT"}`` object.
    ``UNLICENSED`` and ``SEE LICENSE IN ...`` values yield "".
    """
    raw = manifest.license
    if isinstance(raw, dict):
        raw = raw.get("type")
    if not isinstance(raw, str):
        return ""

    identifier = raw.strip()
    if identifier.upper() == "UNLICENSED" or not _SPDX_ID.match(identifier):
        return ""
    return identifier


async def fetch_license_text(
    identifier: str,
    client: httpx.AsyncClient | None = None,
    timeout: float = 10.0,
) -> str:
    """Fetch the full text of an SPDX license.

    Raises LicenseLookupError for unknown identifiers and network failures.
    """
    if not _SPDX_ID.match(identifier):
        raise LicenseLookupError(identifier, "not an SPDX identifier")

    url = LICENSE_TEXT_URL.format(id=identifier)
    owns_client = client is None
    http = client if client is not None else httpx.AsyncClient(timeout=timeout)

    try:
        response = await http.get(url)
    except httpx.HTTPError as e:
        raise LicenseLookupError(identifier, str(e)) from e
    finally:
        if owns_client:
            await http.aclose()

    if response.status_code != 200:
        raise LicenseLookupError(identifier, f"HTTP {response.status_code}")

    logger.debug("Fetched license text for %s", identifier)
    return response.text

"""Latest-release lookup for Maven coordinates (Clojars first, then Maven Central)."""

from __future__ import annotations

import logging

import httpx

from .errors import RegistryLookupError

logger = logging.getLogger(__name__)

CLOJARS_URL = "https://clojars.org/api/artifacts/{group}/{artifact}"
MAVEN_CENTRAL_URL = "https://search.maven.org/solrsearch/select"


class MavenRegistry:
    """
    Finds the most recent release of a ``group/artifact``.

    Args:
        client (httpx.Client | None): client to use; one is created when omitted.
        timeout (float): request timeout in seconds for the created client.
    """
    def __init__(self, client: httpx.Client | None = None, timeout: float = 10.0):
        self._owns_client = client is None
        self._client = client or httpx.Client(timeout=timeout, follow_redirects=True)

    def _from_clojars(self, group: str, artifact: str) -> str | None:
        response = self._client.get(CLOJARS_URL.format(group=group, artifact=artifact), headers={"Accept": "application/json"})
        if response.status_code == 404:
            return None
        response.raise_for_status()
        data = response.json()
        return data.get("latest_release") or data.get("latest_version")

    def _from_maven_central(self, group: str, artifact: str) -> str | None:
        query = f'g:"{group}" AND a:"{artifact}"'
        response = self._client.get(MAVEN_CENTRAL_URL, params={"q": query, "rows": 1, "wt": "json"})
        response.raise_for_status()
        docs = response.json().get("response", {}).get("docs", [])
        if not docs:
            return None
        return docs[0].get("latestVersion")

    def latest_version(self, group: str, artifact: str) -> str:
        lib = f"{group}/{artifact}"
        try:
            version = self._from_clojars(group, artifact) or self._from_maven_central(group, artifact)
        except (httpx.HTTPError, ValueError) as exc:
            raise RegistryLookupError(f"Could not look up the latest version of {lib}: {exc}", log=True) from exc
        if not version:
            raise RegistryLookupError(f"Could not find {lib} on Clojars or Maven Central.")
        logger.info("Latest version of %s is %s", lib, version)
        return version

    def close(self):
        """Close the HTTP client if this registry created it."""
        if self._owns_client:
            self._client.close()

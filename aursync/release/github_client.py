"""
GitHub Releases API Client - Resolves the latest release tag and asset URL
"""

import logging
from typing import Dict, List, Optional

import requests

from aursync import config

logger = logging.getLogger(__name__)


def select_asset_url(release: Dict, stub: str) -> Optional[str]:
    """
    Pick the download URL of the asset whose name ends with stub.

    The match is a case-sensitive suffix match. When several assets match,
    the first one in API order wins.

    Args:
        release: Decoded "latest release" payload
        stub: Asset name suffix

    Returns:
        browser_download_url of the chosen asset, or None
    """
    matches: List[Dict] = [
        asset for asset in release.get("assets") or []
        if asset.get("name", "").endswith(stub) and asset.get("browser_download_url")
    ]
    if not matches:
        return None

    if len(matches) > 1:
        ignored = ", ".join(asset["name"] for asset in matches[1:])
        logger.warning(f"⚠️ {len(matches)} assets end with '{stub}', using {matches[0]['name']} (ignored: {ignored})")

    return matches[0]["browser_download_url"]


class GitHubReleaseClient:
    """GitHub REST API client for the latest release of one repository"""

    def __init__(self, token: Optional[str] = None, session=None,
                 base_url: str = config.GITHUB_API_URL, timeout: int = config.HTTP_TIMEOUT):
        self.token = token
        self.session = session or requests.Session()
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def _headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/vnd.github+json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def get_latest_release(self, repo: str) -> Optional[Dict]:
        """
        Fetch the latest published release

        Args:
            repo: Repository in the form 'org/repo'

        Returns:
            Release payload, or None on any failure (network, HTTP, JSON)
        """
        url = self.base_url + config.LATEST_RELEASE_PATH.format(repo=repo)

        try:
            response = self.session.get(url, headers=self._headers(), timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except requests.exceptions.RequestException as e:
            logger.error(f"❌ GitHub API request failed for {repo}: {e}")
            return None
        except ValueError as e:
            logger.error(f"❌ GitHub API returned invalid JSON for {repo}: {e}")
            return None

        if not isinstance(data, dict):
            logger.error(f"❌ Unexpected GitHub API payload for {repo}")
            return None
        return data

    def get_latest_tag(self, repo: str) -> Optional[str]:
        """Tag name of the latest release, or None"""
        release = self.get_latest_release(repo)
        if not release:
            return None
        return release.get("tag_name") or None

    def get_asset_url(self, repo: str, stub: str) -> Optional[str]:
        """Download URL of the latest release asset ending with stub, or None"""
        release = self.get_latest_release(repo)
        if not release:
            return None
        return select_asset_url(release, stub)

"""
Release modules: upstream release lookup, version gate, asset download
"""

from .asset_fetcher import AssetFetcher, sha256_file
from .github_client import GitHubReleaseClient, select_asset_url
from .version_gate import strip_version_prefix, versions_match

__all__ = [
    'AssetFetcher',
    'sha256_file',
    'GitHubReleaseClient',
    'select_asset_url',
    'strip_version_prefix',
    'versions_match',
]

"""
Configuration file for the AUR Release Sync action
=================================================================================
PURPOSE: Static defaults for the release sync pipeline. Runtime values
         (credentials, flags, working directory) come from the environment
         and are collected once into SyncSettings by the config loader.

ORGANIZATION:
1. Upstream API configuration
2. Persisted configuration files
3. AUR and SSH configuration
4. Build configuration
5. Timeouts
"""

# ==============================================================================
# 1. UPSTREAM API CONFIGURATION
# ==============================================================================

# GITHUB_API_URL: Base URL of the GitHub REST API
GITHUB_API_URL = "https://api.github.com"

# LATEST_RELEASE_PATH: Endpoint template for the latest published release
LATEST_RELEASE_PATH = "/repos/{repo}/releases/latest"

# ==============================================================================
# 2. PERSISTED CONFIGURATION FILES
# ==============================================================================
# Both files live in the working directory and hold KEY=value lines.

# VERSION_FILE: Last synced upstream version (rewritten after a publish)
VERSION_FILE = "VERSION.env"
VERSION_KEY = "CURRENT_VERSION"

# VARS_FILE: Static identifiers of the upstream and the AUR package
VARS_FILE = "VARS.env"

# Canonical key name -> substring accepted as a fallback match
STATIC_CONFIG_KEYS = {
    "UPSTREAM_REPO": "UPSTREAM",
    "AUR_REPO": "AUR",
    "PKG_NAME": "PKG",
    "ASSET_FILE_STUB": "STUB",
}

# ==============================================================================
# 3. AUR AND SSH CONFIGURATION
# ==============================================================================

# AUR_HOST: Host whose public keys are pre-seeded into known_hosts
AUR_HOST = "aur.archlinux.org"

# AUR_CHECKOUT_DIR: Name of the AUR working copy, relative to the workdir
AUR_CHECKOUT_DIR = "aur_repo"

# SSH_KEY_NAME: File name of the AUR deploy key inside ~/.ssh
SSH_KEY_NAME = "ssh_key"

# ==============================================================================
# 4. BUILD CONFIGURATION
# ==============================================================================

# BUILD_USER: Non-privileged user that runs makepkg (never root)
BUILD_USER = "notroot"

# RECIPE_FILE / SRCINFO_FILE: Recipe and generated metadata in the AUR repo
RECIPE_FILE = "PKGBUILD"
SRCINFO_FILE = ".SRCINFO"

# BUILT_PACKAGE_GLOB: Naming pattern of the makepkg output artifact
BUILT_PACKAGE_GLOB = "*.pkg.tar.zst"

# STRICT_PACKAGE_LINT: Abort the run when namcap flags the built package.
# The recipe lint is always fatal.
STRICT_PACKAGE_LINT = False

# ==============================================================================
# 5. TIMEOUTS (seconds)
# ==============================================================================

HTTP_TIMEOUT = 30
DOWNLOAD_TIMEOUT = 300
MAKEPKG_TIMEOUT = 3600
PACMAN_TIMEOUT = 1800
GIT_TIMEOUT = 300

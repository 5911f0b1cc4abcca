"""GitHub API constants shared across modules."""

import os
from importlib.metadata import PackageNotFoundError, version

# GitHub API headers (modern, versioned format)
GITHUB_ACCEPT_HEADER = "application/vnd.github+json"
GITHUB_API_VERSION = "2022-11-28"

# Preview media types; drop each once its API leaves preview
MEDIA_TYPE_PRE_RECEIVE_HOOKS_PREVIEW = "application/vnd.github.eye-scream-preview"
MEDIA_TYPE_REACTIONS_PREVIEW = "application/vnd.github.squirrel-girl-preview"

DEFAULT_API_BASE_URL = "https://api.github.com/"

# Dynamic User-Agent with package version
_UA_NAME = "github-rest-bindings"
try:
    _pkg_ver = version("github-rest-bindings")
except PackageNotFoundError:
    _pkg_ver = os.getenv("PACKAGE_VERSION", "0")
GITHUB_USER_AGENT = f"{_UA_NAME}/{_pkg_ver}"

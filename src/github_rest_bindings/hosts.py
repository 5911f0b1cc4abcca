"""REST API base URL resolution for github.com and GitHub Enterprise hosts."""

from urllib.parse import urlparse


def _normalize_github_hosts_match(target_host: str, env_api_host: str) -> bool:
    """
    Check if target_host and env_api_host are equivalent.

    Treats api.github.com and github.com as the same for dotcom.

    Parameters:
        target_host (str): The GitHub host name being targeted (e.g., "github.com").
        env_api_host (str): The host extracted from a configured API URL.

    Returns:
        bool: True if the hosts match, False otherwise.
    """
    target_lower = target_host.lower()
    env_lower = env_api_host.lower()

    if target_lower == "github.com":
        return env_lower in {"api.github.com", "github.com"}
    return env_lower == target_lower


def api_base_for_host(host: str, api_url: str | None = None) -> str:
    """
    Determine the REST API base URL for a given GitHub host.

    An explicit ``api_url`` only applies when its host matches the target
    host, so a github.com override never leaks onto an enterprise host.

    Parameters:
        host (str): The GitHub host name (e.g., "github.com" or an
            enterprise hostname).
        api_url (str | None): Optional configured REST API URL.

    Returns:
        str: The REST API base URL, always with a trailing slash.
    """
    if api_url:
        parsed = urlparse(api_url)
        api_host = (parsed.netloc or "").lower()

        if api_host and _normalize_github_hosts_match(host, api_host):
            return api_url.rstrip("/") + "/"

    if host.lower() == "github.com":
        return "https://api.github.com/"
    # GitHub Enterprise default pattern
    return f"https://{host}/api/v3/"

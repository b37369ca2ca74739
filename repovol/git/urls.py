import re
from pathlib import Path
from typing import Optional
from urllib.parse import urlparse


def is_local_path(url: str) -> bool:
    """
    Check if a repository URL is a local filesystem path rather than a remote URL.

    Local paths include ".", "..", absolute paths, and file:// URLs.

    Args:
        url: Repository URL or path

    Returns:
        True if this is a local filesystem path
    """
    url = url.strip()
    if url in (".", "..") or url.startswith("./") or url.startswith("../"):
        return True
    if url.startswith("/"):
        return True
    if url.startswith("file://"):
        return True
    return False


def resolve_local_path(url: str, base_dir: Optional[Path] = None) -> Path:
    """
    Resolve a local repository URL to an absolute filesystem path.

    Args:
        url: Local path (e.g., ".", "/home/user/repo", "file:///path/to/repo")
        base_dir: Directory relative paths are resolved against. Defaults to cwd.

    Returns:
        Resolved absolute Path
    """
    if url.startswith("file://"):
        url = url[len("file://") :]
    p = Path(url)
    if not p.is_absolute():
        p = (base_dir or Path.cwd()) / p
    return p.resolve()


def _join_segments(host: str, path: str, url: str) -> str:
    segments = [s for s in path.split("/") if s not in ("", ".")]
    if ".." in segments or not segments:
        raise ValueError(f"Cannot map repository URL to a cache path: {url}")
    return "/".join([host] + segments)


def parse_repo_url(url: str) -> str:
    """
    Parse a git repository URL into a relative, Go-style cache path.

    Examples:
        https://github.com/user/repo.git -> github.com/user/repo
        git@github.com:user/repo.git -> github.com/user/repo
        https://gitlab.com/group/subgroup/project -> gitlab.com/group/subgroup/project
        /srv/git/project.git -> local/srv/git/project
        file:///srv/git/project -> local/srv/git/project

    Local paths are resolved to absolute paths first, so "./x" and "/x"
    only share a cache path when they name the same directory. The result
    is never absolute and never contains "..", so joining it under a base
    directory stays inside that directory.

    Args:
        url: Git repository URL

    Returns:
        Path-like string (e.g., "github.com/user/repo")

    Raises:
        ValueError: If a remote URL has ".." segments or no path
    """
    url = url.strip()

    if is_local_path(url):
        resolved = resolve_local_path(url).as_posix()
        if resolved.endswith(".git"):
            resolved = resolved[:-4]
        return _join_segments("local", resolved, url)

    # Remove .git suffix if present
    url = url.rstrip("/")
    if url.endswith(".git"):
        url = url[:-4]

    # Handle SSH URLs (git@host:path)
    ssh_match = re.match(r"^[\w.-]+@([^:/]+):(.+)$", url)
    if ssh_match:
        host, path = ssh_match.groups()
        return _join_segments(host, path, url)

    # Handle HTTPS URLs
    parsed = urlparse(url)
    if parsed.netloc and parsed.path:
        # Drop credentials and port
        host = parsed.hostname or parsed.netloc
        return _join_segments(host, parsed.path, url)

    # Fallback: treat as is
    return _join_segments("", url.replace(":", "/"), url).lstrip("/")

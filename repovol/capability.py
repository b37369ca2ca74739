"""Detection of copy-on-write (btrfs) support on this host."""

import logging
import shutil
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

from repovol.config import cow_snapshots_enabled, get_cow_tool

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Capabilities:
    """Result of probing the host once; never re-evaluated."""

    enabled: bool  # administrative feature flag
    cow_tool: Optional[str] = None  # resolved path of the copy-on-write tool

    @property
    def copy_on_write(self) -> bool:
        return self.enabled and self.cow_tool is not None


def detect_capabilities(
    enabled: bool, tool: str = "btrfs", search_path: Optional[str] = None
) -> Capabilities:
    """
    Determine whether copy-on-write volumes can be used.

    When the feature is disabled the tool is not looked up at all.

    Args:
        enabled: Whether the copy-on-write feature is switched on
        tool: Name of the copy-on-write management executable
        search_path: Executable search path (defaults to $PATH)

    Returns:
        Immutable Capabilities value
    """
    if not enabled:
        return Capabilities(enabled=False)

    tool_path = shutil.which(tool, path=search_path)
    if tool_path is None:
        logger.info(
            f"{tool} command not available, assuming filesystem is not {tool}"
        )
    return Capabilities(enabled=True, cow_tool=tool_path)


@lru_cache(maxsize=None)
def get_capabilities() -> Capabilities:
    """Detect once per process using the configured feature flag and tool."""
    return detect_capabilities(cow_snapshots_enabled(), tool=get_cow_tool())

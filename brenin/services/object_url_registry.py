"""
Ephemeral local handle registry
"""
from typing import Dict
from brenin.types import SelectedFile
from brenin.utils.helpers import generate_object_url
from brenin.utils.logger import get_logger

logger = get_logger(__name__)


class ObjectUrlRegistry:
    """
    Hands out blob: handles for selected files and tracks their release.

    A handle is live from create() until revoke(); revoking an unknown or
    already revoked handle is a no-op that returns False.
    """

    def __init__(self):
        self._live: Dict[str, SelectedFile] = {}

    def create(self, file: SelectedFile) -> str:
        handle = generate_object_url()
        self._live[handle] = file
        logger.debug(f"Handle created: {handle} ({file.name})")
        return handle

    def revoke(self, handle: str) -> bool:
        if handle not in self._live:
            return False
        del self._live[handle]
        logger.debug(f"Handle revoked: {handle}")
        return True

    def is_live(self, handle: str) -> bool:
        return handle in self._live

    @property
    def live_count(self) -> int:
        return len(self._live)

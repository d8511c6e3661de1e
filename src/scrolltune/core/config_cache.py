"""
Cache of resolved scroll configurations.

Entries are only valid for the settings snapshot they were built from. The
cache has no partial invalidation: any settings field can influence any
entry, so a reload clears everything at once.
"""

from __future__ import annotations
import logging
from typing import TYPE_CHECKING, Dict, Hashable, NamedTuple, Optional

from scrolltune import constants
from scrolltune.core.model import Axis, EffectModification, InputModification

if TYPE_CHECKING:
    from scrolltune.core.scroll_config import ResolvedScrollConfig


class ScrollConfigKey(NamedTuple):
    """Everything a resolved configuration depends on besides the settings."""
    effect: EffectModification
    input: InputModification
    axis: Axis
    display_id: Hashable


class ResolvedConfigCache:
    """
    Maps `ScrollConfigKey` to `ResolvedScrollConfig`.

    `epoch` counts clears. An entry can be stored with the epoch it was built
    in; `put` drops entries from an earlier epoch so a build that raced with a
    clear can never repopulate the cache with stale data.
    """

    def __init__(self) -> None:
        self.logger = logging.getLogger(f"{constants.app.APP_NAME}.ResolvedConfigCache")
        self._entries: Dict[ScrollConfigKey, ResolvedScrollConfig] = {}
        self._epoch: int = 0

    @property
    def epoch(self) -> int:
        return self._epoch

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def get(self, key: ScrollConfigKey) -> Optional[ResolvedScrollConfig]:
        return self._entries.get(key)

    def put(self, key: ScrollConfigKey, value: ResolvedScrollConfig, epoch: Optional[int] = None) -> bool:
        """
        Stores `value` under `key`.

        Returns:
            bool: False if `epoch` is given and no longer current, in which case nothing is stored.
        """
        if epoch is not None and epoch != self._epoch:
            self.logger.debug("Discarding config for %s built in stale epoch %d (current %d)", key, epoch, self._epoch)
            return False
        self._entries[key] = value
        return True

    def clear_all(self) -> None:
        """Drops every entry and advances the epoch. Safe to call repeatedly."""
        count = len(self._entries)
        self._entries.clear()
        self._epoch += 1
        self.logger.debug("Cleared %d cached scroll configs (epoch %d)", count, self._epoch)

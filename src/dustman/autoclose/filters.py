"""Per-tab predicates: may a tab be closed, and may a closed tab be saved."""

from __future__ import annotations

import math
from urllib.parse import urlparse

from dustman.autoclose.models import Settings, TabSnapshot

# Pages under these schemes are browser-internal, scripts or local content.
_UNSAVEABLE_SCHEMES = {"chrome", "javascript", "data", "file", "about"}


def is_candidate(tab: TabSnapshot, settings: Settings) -> bool:
    """Whether a tab may ever be auto-closed, ignoring how long it was idle."""
    if tab.audible:
        return False
    if tab.last_accessed is None or not math.isfinite(tab.last_accessed):
        return False
    if tab.pinned:
        return False
    if settings.exclude_tabs_in_groups and tab.in_group:
        return False
    return True


def is_saveable(tab: TabSnapshot) -> bool:
    """Whether a closed tab should be recorded in the history."""
    if tab.title is None or tab.url is None:
        return False

    try:
        scheme = urlparse(tab.url).scheme.lower()
    except ValueError:
        return False
    if scheme in _UNSAVEABLE_SCHEMES:
        return False

    if tab.incognito:
        return False

    return True

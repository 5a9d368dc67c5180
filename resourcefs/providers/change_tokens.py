"""
ResourceFS Providers: Change Tokens.

A change token tells its holder whether watched files have changed.
Embedded resources never change after an artifact is loaded, so embedded
providers hand out NullChangeToken.SINGLETON. The physical provider hands
out a PollingChangeToken that compares file modification times.
"""

import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Callable, Dict, Optional


class Disposable:
    """Handle returned from register_change_callback()."""

    def __init__(self, on_dispose: Optional[Callable[[], None]] = None):
        self._on_dispose = on_dispose

    def dispose(self) -> None:
        if self._on_dispose is not None:
            on_dispose, self._on_dispose = self._on_dispose, None
            on_dispose()

    def __enter__(self) -> "Disposable":
        return self

    def __exit__(self, *exc_info) -> None:
        self.dispose()


class ChangeToken(ABC):
    """Abstract base class for change notification handles."""

    @property
    @abstractmethod
    def has_changed(self) -> bool:
        """Whether a change has occurred."""
        pass

    @property
    @abstractmethod
    def active_change_callbacks(self) -> bool:
        """Whether registered callbacks are invoked proactively."""
        pass

    @abstractmethod
    def register_change_callback(
        self, callback: Callable[[Any], None], state: Any = None
    ) -> Disposable:
        """
        Register a callback invoked when the token changes.

        Args:
            callback: Function called with ``state``
            state: Value passed through to the callback

        Returns:
            Disposable that unregisters the callback
        """
        pass


class NullChangeToken(ChangeToken):
    """A change token that never fires."""

    SINGLETON: "NullChangeToken"

    @property
    def has_changed(self) -> bool:
        return False

    @property
    def active_change_callbacks(self) -> bool:
        return False

    def register_change_callback(
        self, callback: Callable[[Any], None], state: Any = None
    ) -> Disposable:
        return _EMPTY_DISPOSABLE

    def __repr__(self) -> str:
        return "NullChangeToken()"


NullChangeToken.SINGLETON = NullChangeToken()
_EMPTY_DISPOSABLE = Disposable()


class PollingChangeToken(ChangeToken):
    """
    Change token that detects changes by re-scanning file mtimes.

    A snapshot of matching files and their mtimes is taken on creation.
    ``has_changed`` re-scans and compares; once a change is seen the token
    stays changed. Callbacks are never invoked proactively, so holders poll
    ``has_changed``.
    """

    def __init__(self, root: str, pattern: str):
        """
        Args:
            root: Directory to scan
            pattern: Glob pattern relative to root (e.g., "**/*.css")
        """
        self.root = Path(root)
        self.pattern = pattern.lstrip("/") or "*"
        self._snapshot = self._scan()
        self._changed = False

    def _scan(self) -> Dict[str, float]:
        snapshot = {}
        try:
            for path in self.root.glob(self.pattern):
                try:
                    snapshot[str(path)] = os.stat(path).st_mtime
                except OSError:
                    # Removed between glob and stat
                    continue
        except (OSError, ValueError):
            return {}
        return snapshot

    @property
    def has_changed(self) -> bool:
        if not self._changed and self._scan() != self._snapshot:
            self._changed = True
        return self._changed

    @property
    def active_change_callbacks(self) -> bool:
        return False

    def register_change_callback(
        self, callback: Callable[[Any], None], state: Any = None
    ) -> Disposable:
        return _EMPTY_DISPOSABLE

    def __repr__(self) -> str:
        return f"PollingChangeToken(root='{self.root}', pattern='{self.pattern}')"

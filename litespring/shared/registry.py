"""
Singleton registry owned by a LiteSpring application.
"""

import threading
from typing import Any, Dict, List, Optional, Tuple, Type


class ComponentRegistry:
    """One singleton per exact component type."""

    def __init__(self):
        self._singletons: Dict[Type, Any] = {}
        self._lock = threading.RLock()

    def register(self, cls: Type, instance: Any) -> None:
        """Store ``instance`` under ``cls``, replacing any previous entry."""
        with self._lock:
            self._singletons[cls] = instance

    def lookup(self, cls: Type) -> Optional[Any]:
        """Return the singleton for ``cls`` or ``None`` when nothing is registered."""
        return self._singletons.get(cls)

    def all_instances(self) -> List[Any]:
        """Snapshot of the registered singletons. Order is not meaningful."""
        return list(self._singletons.values())

    def entries(self) -> List[Tuple[Type, Any]]:
        return list(self._singletons.items())

    def types(self) -> List[Type]:
        return list(self._singletons.keys())

    def __contains__(self, cls: Type) -> bool:
        return cls in self._singletons

    def __len__(self) -> int:
        return len(self._singletons)

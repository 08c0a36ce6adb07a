"""
Policy store - the one shared reference to the policy in force.

Readers take no lock: they read ``current`` once and use that snapshot for the
whole decision. Reloads build a complete new Policy first and then replace
the reference in a single assignment, so a reader sees either the old or the
new policy in its entirety.
"""
import inspect
import logging
import threading
import weakref
from typing import Callable, List, Optional

from .policy import Policy, load_default_policy

logger = logging.getLogger(__name__)

PolicyLoader = Callable[[], Policy]
ReloadListener = Callable[[Policy, Policy], None]


class PolicyStore:
    """Holds the current Policy and swaps it atomically."""

    def __init__(self, policy: Optional[Policy] = None):
        self._policy = policy if policy is not None else load_default_policy()
        self._write_lock = threading.Lock()
        self._listeners: List[Callable[[], Optional[ReloadListener]]] = []

    @property
    def current(self) -> Policy:
        return self._policy

    def _live_listeners(self) -> List[ReloadListener]:
        """Resolve listener references, dropping those whose owner was collected."""
        live, refs = [], []
        for ref in self._listeners:
            listener = ref()
            if listener is not None:
                live.append(listener)
                refs.append(ref)
        self._listeners = refs
        return live

    def add_listener(self, listener: ReloadListener) -> None:
        """
        Register a callback invoked with (old, new) after every swap.

        Bound methods are held weakly so registering does not keep their
        owner alive. Registering the same callback twice has no effect.
        """
        with self._write_lock:
            if listener in self._live_listeners():
                return
            if inspect.ismethod(listener):
                self._listeners.append(weakref.WeakMethod(listener))
            else:
                self._listeners.append(lambda: listener)

    def remove_listener(self, listener: ReloadListener) -> None:
        """Unregister a callback; unknown callbacks are ignored."""
        with self._write_lock:
            self._listeners = [ref for ref in self._listeners if ref() not in (None, listener)]

    @property
    def listener_count(self) -> int:
        with self._write_lock:
            return len(self._live_listeners())

    def swap(self, policy: Policy) -> Policy:
        """
        Replace the current policy; returns the previous one.

        Listener failures are logged and do not undo or abort the swap.
        """
        if not isinstance(policy, Policy):
            raise TypeError(f"Expected Policy, got {type(policy).__name__}")

        with self._write_lock:
            previous = self._policy
            self._policy = policy
            listeners = self._live_listeners()

        logger.info(f"Access control policy swapped: {previous.source} -> {policy.source}")
        for listener in listeners:
            try:
                listener(previous, policy)
            except Exception as e:
                logger.error(f"Policy swap listener {listener!r} failed: {e}")
        return previous

    def reload(self, loader: PolicyLoader) -> Policy:
        """
        Build a new policy with ``loader`` and swap it in.

        When the loader raises, the error propagates and the current policy
        stays in force.
        """
        try:
            policy = loader()
        except Exception as e:
            logger.error(f"Policy reload failed, keeping {self._policy.source}: {e}")
            raise
        self.swap(policy)
        return policy

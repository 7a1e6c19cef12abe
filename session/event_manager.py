from collections import defaultdict
from typing import Any, Callable, Dict, List, Tuple

# Hook names shared by the session, its listeners and the application loop
SETUP = 'setup'
CLEANUP = 'cleanup'
FRAME_RECEIVED = 'frame_received'
FRAME_ANALYZED = 'frame_analyzed'
MOTION_EVENT = 'motion_event'
SESSION_RESET = 'session_reset'


class EventManager:
    """
    Hook registry connecting the motion session to its listeners.

    Components register callbacks for named hooks (camera frames, motion
    events, session resets) and the owner of a hook triggers it; callbacks
    run in priority order, highest first.
    """

    def __init__(self):
        self.hooks: Dict[str, List[Tuple[int, Callable]]] = defaultdict(list)

    def register_hook(self, event_name: str, callback: Callable, priority: int = 0) -> None:
        """
        Register a callback for a hook.

        Args:
            event_name: Name of the hook to listen for
            callback: Function to call when the hook is triggered
            priority: Execution priority (higher numbers run first)
        """
        self.hooks[event_name].append((priority, callback))
        # Stable sort keeps registration order among equal priorities
        self.hooks[event_name].sort(key=lambda entry: entry[0], reverse=True)

    def unregister_hook(self, event_name: str, callback: Callable) -> bool:
        """
        Remove a callback from a hook.

        Returns:
            True if callback was found and removed, False otherwise
        """
        if event_name not in self.hooks:
            return False

        for i, (_, registered) in enumerate(self.hooks[event_name]):
            if registered == callback:
                self.hooks[event_name].pop(i)
                return True
        return False

    def trigger_event(self, event_name: str, *args, **kwargs) -> List[Any]:
        """
        Call every callback registered for a hook.

        A callback that raises is reported and yields None; the remaining
        callbacks still run.

        Returns:
            List of return values from all callbacks
        """
        results = []

        for _, callback in self.hooks.get(event_name, []):
            try:
                results.append(callback(*args, **kwargs))
            except Exception as e:
                print(f"Error in event callback for '{event_name}': {e}")
                results.append(None)

        return results

    def has_listeners(self, event_name: str) -> bool:
        return len(self.hooks.get(event_name, [])) > 0

    def get_event_names(self) -> List[str]:
        return list(self.hooks.keys())

    def clear_event(self, event_name: str) -> None:
        if event_name in self.hooks:
            del self.hooks[event_name]

    def clear_all(self) -> None:
        """Remove all registered callbacks for all hooks."""
        self.hooks.clear()

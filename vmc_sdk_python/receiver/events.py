"""
Listener lists for input events.
"""

import logging

logger = logging.getLogger(__name__)


class InputEvent:
    """
    Synchronous event with a list of listeners.

    invoke() calls every listener in registration order with the event
    payload. Exceptions raised by listeners propagate to the caller.

    Example usage:
        receiver.key_input_action.add_listener(lambda key: print(key.name))
    """

    def __init__(self, name: str = ""):
        self.name = name
        self._listeners = []

    def __len__(self):
        return len(self._listeners)

    def add_listener(self, listener):
        if not callable(listener):
            raise TypeError(f"Listener for {self.name or 'event'} must be callable, "
                            f"got {type(listener).__name__}")
        self._listeners.append(listener)

    def remove_listener(self, listener):
        try:
            self._listeners.remove(listener)
        except ValueError:
            logger.debug(f"[InputEvent] {self.name}: listener was not registered")

    def invoke(self, payload):
        for listener in list(self._listeners):
            listener(payload)

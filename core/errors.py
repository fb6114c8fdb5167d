"""Engine exceptions."""


class EngineInvariantError(RuntimeError):
    """
    Raised when the engine reaches a state that correct sequencing rules out.

    These are internal bugs, never user errors, and are not recovered from.
    """


class EmptyDeckError(EngineInvariantError, IndexError):
    """Raised when drawing from a deck with no cards left."""

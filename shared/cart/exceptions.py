"""Cart engine errors"""


class InvalidCartInput(ValueError):
    """A mutating cart operation was called with invalid arguments"""


class CorruptCartData(ValueError):
    """Persisted cart state could not be decoded"""

"""Exceptions raised by the enhancement simulator.

Every exception derives from EnhanceSimError and keeps a readable message
on the ``message`` attribute.
"""


class EnhanceSimError(Exception):
    """Base exception for the enhancement simulator."""

    def __init__(self, message: str = "Enhancement simulator error"):
        self.message = message
        super().__init__(self.message)


class InvalidLevelError(EnhanceSimError, ValueError):
    """No enhancement rule exists for the requested level."""

    def __init__(self, level: int):
        self.level = level
        super().__init__(f"Invalid enhancement level: {level}")


class InvalidTargetError(EnhanceSimError, ValueError):
    """Auto-enhance was asked for a target it can never work towards."""

    def __init__(self, current_level: int, target_level: int, reason: str = ""):
        self.current_level = current_level
        self.target_level = target_level
        if not reason:
            reason = "Target level must be higher than current level"
        super().__init__(f"{reason} (current +{current_level}, target +{target_level})")


class SessionBusyError(EnhanceSimError, RuntimeError):
    """Another driver currently controls the session."""

    def __init__(self, owner: object):
        self.owner = owner
        super().__init__(f"Session is controlled by {owner!r}; stop it first")

from typing import Any, Dict


class Singleton:
    """
    Base class for the process-wide service objects.

    Subclasses are instantiated once at import (weather_service,
    completion_service, weather_agent) and the same instance is returned on
    every later construction. Subclass __init__ methods guard their own
    setup with a per-class flag so repeated construction is a no-op.
    """

    _instances: Dict[type, Any] = {}

    def __new__(cls, *args, **kwargs):
        if cls not in cls._instances:
            cls._instances[cls] = super(Singleton, cls).__new__(cls)
        return cls._instances[cls]

    def __init__(self, *args, **kwargs):
        if hasattr(self, "_initialized"):
            return
        self._initialized = True
        super().__init__()

    @classmethod
    def reset_instance(cls):
        """Forget the cached instance so the next construction re-reads configuration."""
        Singleton._instances.pop(cls, None)

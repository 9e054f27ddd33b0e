from .listeners import FIRST, GREETING, LISTENERS, SECOND, Listener, Route

__all__ = ["FIRST", "GREETING", "LISTENERS", "SECOND", "Listener", "Route"]

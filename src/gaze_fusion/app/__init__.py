from .bridge import AsyncioThreadBridge

__all__ = ["AsyncioThreadBridge"]

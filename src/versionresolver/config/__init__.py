from .runtime import ResolverSettings, get_settings

__all__ = ["ResolverSettings", "get_settings"]

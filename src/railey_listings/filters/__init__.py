from .engine import FilterConfig, PropertyFilter

__all__ = ["FilterConfig", "PropertyFilter"]

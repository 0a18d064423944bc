"""tagsig modules.

Modules:
- core: Tag lookup pipeline (extract, query, filter, format, cycle)
"""

# Lazy import keeps `import tagsig.modules` cheap for editor startup
def __getattr__(name: str):
    if name == "core":
        from . import core
        return core
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")

__all__ = ["core"]

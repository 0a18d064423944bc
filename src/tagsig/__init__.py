"""
tagsig: call signatures from ctags for editors

While a function call is being typed, tagsig looks the callee up in a ctags
tags file and renders one line per matching definition, e.g.

    int add(int,int) (1/2) ~/src/m.c

Key features:
- Qualified C++ names, destructors and operator overloads
- Language-aware filtering of tags (~35 editor languages)
- Declarations recovered from tag search patterns
- Path shortening for display
- Cycling between overloads and hover tooltips
"""

try:
    from importlib.metadata import version
    __version__ = version("tagsig")
except Exception:
    __version__ = "0.1.0"

from . import modules
from .modules.core import (
    CycleState,
    SignatureConfig,
    SignatureDisplay,
    SignatureFormatter,
    TagIndex,
    TagRecord,
    cycle,
    extract,
    hover_text,
    load_config,
    lookup,
    shorten,
    signature_for_call,
)

__all__ = [
    "modules",
    "CycleState",
    "SignatureConfig",
    "SignatureDisplay",
    "SignatureFormatter",
    "TagIndex",
    "TagRecord",
    "cycle",
    "extract",
    "hover_text",
    "load_config",
    "lookup",
    "shorten",
    "signature_for_call",
]

from .console import ConsoleVars, SpecCliTheme, render_text
from .demo import (
    SpecDemoValues,
    build_registry,
    is_verbose_requested,
    main,
    parse_net_key,
)

__all__ = [
    "ConsoleVars",
    "SpecCliTheme",
    "render_text",
    # Demo
    "SpecDemoValues",
    "build_registry",
    "is_verbose_requested",
    "parse_net_key",
    "main",
]

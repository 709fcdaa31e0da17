"""
配置模块
"""

from .settings import (
    AppConfig,
    DocumentConfig,
    Outline,
    PackageSpec,
    RenderOptions,
    load_config,
    load_outline,
)

__all__ = [
    "AppConfig",
    "DocumentConfig",
    "Outline",
    "PackageSpec",
    "RenderOptions",
    "load_config",
    "load_outline",
]

#!/usr/bin/env python3
"""
KVM Configurator CLI package.
"""

from .parsers import build_parser, main
from .utils import console, custom_style

__all__ = ["build_parser", "console", "custom_style", "main"]

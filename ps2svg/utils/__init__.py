"""Cross-cutting utilities (lowest dependency layer).

This package provides shared primitives for:
    - Atomic I/O and YAML loading (fs)
    - Run logging setup (logging_config)

No module in utils/ may import from upper layers (extract, geometry, svg).

Convenience imports:
    from ps2svg.utils import fs
    from ps2svg.utils.logging_config import setup_logging, push_context
"""

from . import fs
from . import logging_config

from .logging_config import push_context, setup_logging

__all__ = [
    'fs',
    'logging_config',
    'setup_logging',
    'push_context',
]

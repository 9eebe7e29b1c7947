"""ktra - configuration core for a private Cargo registry.

Importing the package silences its loguru output so that a host process only
sees registry logs it asked for; call ``ktra.enable_logging()`` to turn the
``config`` scope messages back on.
"""

from ktra.common import disable_library_logging, enable_library_logging

disable_library_logging()

enable_logging = enable_library_logging

__all__ = [
    "enable_logging",
]

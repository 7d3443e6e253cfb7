"""
Shared test infrastructure for Templar.

Modules:
- file_utils: Creating template and config files
- cli_utils: Running the command line interface in a subprocess
- testing_utils: Stub evaluation context
"""

from .file_utils import write, write_config
from .cli_utils import run_cli
from .testing_utils import StubEvaluationContext

__all__ = [
    # File utilities
    "write", "write_config",

    # CLI utilities
    "run_cli",

    # Testing utilities
    "StubEvaluationContext",
]

"""
litweave command-line interface.

License: MIT
"""

from litweave_cli.pipeline import LitProcessor, OutputOptions
from litweave_cli.watch import FileWatcher

__all__ = ["LitProcessor", "OutputOptions", "FileWatcher"]

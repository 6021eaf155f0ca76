"""Public library API for ittool."""

from .functions import apply_text, run_files

__all__ = ["apply_text", "run_files"]

"""Output naming service package."""

from .filename import generate_filename, token_values

__all__ = ["generate_filename", "token_values"]

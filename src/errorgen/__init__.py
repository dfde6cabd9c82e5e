"""errorgen: compiles error declaration lists into an error-code enum and constructor functions."""

__version__ = "0.1.0"

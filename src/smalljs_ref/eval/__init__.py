"""Evaluator helper modules for the smalljs runtime."""

__all__ = [
    "blocks",
    "chains",
    "common",
    "control",
    "fn",
    "objects",
]

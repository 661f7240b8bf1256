"""
Entity Store access for the vet-records package.
"""

from .base import ModelT, Repository, escape_like

__all__ = [
    "Repository",
    "ModelT",
    "escape_like",
]

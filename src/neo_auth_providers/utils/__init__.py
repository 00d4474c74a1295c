"""Utility helpers."""

from .encoding import decode, encode

__all__ = ["decode", "encode"]

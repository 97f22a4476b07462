"""Shared domain components."""

from .value_object import ValueObject

__all__ = ["ValueObject"]

"""Predicate table and constraint evaluation."""

from .registry import PredicateRegistry, apply_args, default_registry

__all__ = ["PredicateRegistry", "apply_args", "default_registry"]

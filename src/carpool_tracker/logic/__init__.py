"""Serialized command execution with save-on-mutate."""

from .manager import LogicManager

__all__ = ["LogicManager"]

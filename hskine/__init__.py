"""Kinematics building blocks, model files and a keyed store for tree-structured robots."""

__version__ = "0.1.0"
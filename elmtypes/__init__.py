"""
Normalizes the type declarations of an Elm module into a small, validated model.
"""
from .driver import parse

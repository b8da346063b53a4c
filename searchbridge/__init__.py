from .core import Loader
from .engine import PredicateSet, SearchEngine

__all__ = ["Loader", "PredicateSet", "SearchEngine"]

"""UiExplain core package.

Instructions:
- Import the package to access version metadata and re-exported symbols.
- Extend __all__ if you add public APIs that should be exposed at package level.

Explanation:
- Stores the semantic version string and defines the public export list.
"""

__all__ = ["__version__"]
__version__ = "0.1.0"

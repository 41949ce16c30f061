"""semver-audit: does upgrading a dependency break *this* codebase?"""

__version__ = "0.1.0"

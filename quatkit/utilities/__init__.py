"""
This package provides the configuration helpers used throughout quatkit.
"""

from quatkit.utilities.options import UserOptions
from quatkit.utilities.mixin_classes import UserOptionConfigured

__all__ = ["UserOptions", "UserOptionConfigured"]

"""Console package - text-menu presentation layer"""

from console.view import View
from console.controller import Controller

__all__ = ["View", "Controller"]

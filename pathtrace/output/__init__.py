"""
Output modules for pathtrace
"""

from .console import ConsoleOutput

__all__ = ['ConsoleOutput']

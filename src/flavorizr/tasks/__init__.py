"""
flavorizr tasks package.

Modules are collected by the top-level package into the ``namespace``
Collection using Collection.from_module().
"""

from . import flavors, gradle

__all__ = ['flavors', 'gradle']

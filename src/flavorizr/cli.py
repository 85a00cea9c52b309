"""
Console entry point exposing the flavorizr tasks without a tasks.py.

    flavorizr list-flavors
    flavorizr show-flavor dev
    flavorizr generate-gradle --check
"""
from invoke import Program

from flavorizr import __version__, namespace

program = Program(name='flavorizr', binary='flavorizr', namespace=namespace, version=__version__)

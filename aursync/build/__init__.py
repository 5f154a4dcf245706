"""
Build module for recipe updates, package building and validation
"""

from .namcap import Namcap
from .package_builder import PackageBuilder
from .pacman import Pacman
from .recipe import Recipe, update_recipe_file

__all__ = [
    'Namcap',
    'PackageBuilder',
    'Pacman',
    'Recipe',
    'update_recipe_file',
]

# Dedicated to the public domain under CC0: https://creativecommons.org/publicdomain/zero/1.0/.

'''
mkmd: a Make-like build tool configured by a Markdown document.
'''

from .config import Config, Recipe, Target, outdated
from .ctx import (BuildError, CircularDependency, ConfigSourceMissing, ConfigSourceUnreadable, Ctx, InvalidStyle,
  MissingRequiredFile, RecipeFailure, UnknownTarget)
from .parse import config_from_markdown, config_from_sources, parse_markdown
from .update import build


__all__ = [
  'BuildError',
  'CircularDependency',
  'Config',
  'ConfigSourceMissing',
  'ConfigSourceUnreadable',
  'Ctx',
  'InvalidStyle',
  'MissingRequiredFile',
  'Recipe',
  'RecipeFailure',
  'Target',
  'UnknownTarget',
  'build',
  'config_from_markdown',
  'config_from_sources',
  'outdated',
  'parse_markdown',
]

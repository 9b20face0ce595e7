# Dedicated to the public domain under CC0: https://creativecommons.org/publicdomain/zero/1.0/.

from dataclasses import dataclass
from typing import Any, Callable, Iterable

from .constants import *
from .logging import Style, error_msg


class BuildError(Exception):
  '''
  Base class for all fatal mkmd errors.
  `code` is the process exit status reported by `main`.
  '''
  code = exit_recipe_failed

  def __init__(self, target:str, *msg:Any) -> None:
    super().__init__(target, *msg)
    self.target = target
    self.msg = msg

  def __str__(self) -> str:
    return error_msg(*self.args)


class ConfigSourceMissing(BuildError):
  code = exit_config_missing

  def __str__(self) -> str:
    return error_msg(self.target, 'please create this configuration file.')


class ConfigSourceUnreadable(BuildError):
  code = exit_config_unreadable


class MissingRequiredFile(BuildError):
  code = exit_missing_file

  def __str__(self) -> str:
    return error_msg(self.target, 'file does not exist.')


class RecipeFailure(BuildError):

  def __init__(self, target:str, status:int, *msg:Any) -> None:
    super().__init__(target, *msg)
    self.status = status
    # Statuses from signals are negative; those have no exit status to propagate.
    self.code = status if 0 < status < 256 else exit_recipe_failed

  def __str__(self) -> str:
    return error_msg(self.target, f'recipe failed with status {self.status}', *self.msg)


class UnknownTarget(BuildError):
  code = exit_unknown_target

  def __str__(self) -> str:
    return error_msg(self.target, 'invalid target', *self.msg)


class InvalidStyle(BuildError):
  code = exit_invalid_style

  def __str__(self) -> str:
    return error_msg(self.target, 'invalid style; available styles: ', *self.msg)


class CircularDependency(BuildError):
  code = exit_circular_dependency

  def __init__(self, target:str, cycle:Iterable[str]) -> None:
    self.cycle = tuple(cycle)
    super().__init__(target, 'target has circular dependency:', *(f'\n  {t}' for t in self.cycle))


def no_dbg(target:str, *items:Any) -> None: pass


@dataclass(frozen=True)
class Ctx:
  force: bool = False
  dry_run: bool = False
  script_mode: bool = False
  verbosity: int = 0
  quiet: bool = False
  style: Style = Style()
  dbg: Callable[..., None] = no_dbg

  @property
  def verbose(self) -> bool:
    return self.verbosity > 0

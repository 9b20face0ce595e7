# Dedicated to the public domain under CC0: https://creativecommons.org/publicdomain/zero/1.0/.

'''
mkmd's core update algorithm: decide what each scheduled target needs, and run its recipes.
'''

import sys
from shlex import split as sh_split
from typing import Iterable, List, Optional, Set

from pithy.fs import path_exists
from pithy.task import runC

from .config import Config, Recipe, Target
from .constants import command_shell, dflt_script_shell
from .ctx import Ctx, MissingRequiredFile, RecipeFailure
from .graph import resolve, schedule
from .logging import command_block, end_block, heading, up_to_date, warn


def build(ctx:Ctx, config:Config, names:Optional[Iterable[str]]=None) -> List[str]:
  '''
  Update each requested target in turn, or the default target if none are named.
  Every name is resolved before anything runs.
  Returns the names of the targets that were processed, in order.
  '''
  names = list(names or ())
  if not names: names = [config.default_target.name]
  for name in names: resolve(ctx, config, name)
  seen:Set[str] = set()
  processed:List[str] = []
  for name in names:
    for target in schedule(ctx, config, [name], seen=seen):
      process_target(ctx, config, target)
      processed.append(target.name)
  return processed


def process_target(ctx:Ctx, config:Config, target:Target) -> None:
  if target.is_phony:
    run_target(ctx, target)
    return
  is_missing = not path_exists(target.name, follow=True)
  if not target.recipes:
    # A plain file dependency; it must exist because nothing can create it.
    if is_missing:
      if ctx.dry_run: warn(target.name, 'file does not exist.')
      else: raise MissingRequiredFile(target.name)
    return
  if ctx.force or is_missing or config.outdated(target):
    run_target(ctx, target)
  elif ctx.verbose and not ctx.quiet:
    heading(ctx.style, target.name, is_file=True)
    up_to_date(ctx.style)


def run_target(ctx:Ctx, target:Target) -> None:
  if not ctx.quiet: heading(ctx.style, target.name, is_file=target.is_file)
  for recipe in target.recipes:
    run_recipe(ctx, target, recipe)


def run_recipe(ctx:Ctx, target:Target, recipe:Recipe) -> None:
  if recipe.shell:
    script = recipe.commands[0] if recipe.commands else ''
    run_script(ctx, target, sh_split(recipe.shell), script, recipe.allowed_codes)
  elif ctx.script_mode:
    cmd = [*dflt_script_shell, '-x'] if ctx.verbose else list(dflt_script_shell)
    script = ''.join(c + '\n' for c in recipe.commands)
    run_script(ctx, target, cmd, script, frozenset())
  else:
    for command in recipe.commands:
      run_command(ctx, target, command)


def run_script(ctx:Ctx, target:Target, cmd:List[str], script:str, allowed_codes:Iterable[int]) -> None:
  'Run `script` by piping it to the interpreter `cmd`.'
  if not ctx.quiet: command_block(ctx.style, ' '.join(cmd), script, prompt=False)
  sys.stdout.flush() # Keep narration ordered before child output.
  code = 0 if ctx.dry_run else runC(cmd, stdin=script)
  if not ctx.quiet: end_block()
  if code != 0 and code not in allowed_codes:
    raise RecipeFailure(target.name, code, f'; interpreter: {cmd[0]}')


def run_command(ctx:Ctx, target:Target, command:str) -> None:
  if not ctx.quiet: command_block(ctx.style, 'text', command, prompt=True)
  sys.stdout.flush()
  code = 0 if ctx.dry_run else runC([*command_shell, command])
  if not ctx.quiet: end_block()
  if code != 0:
    raise RecipeFailure(target.name, code, f'; command: `{command}`')

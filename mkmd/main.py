# Dedicated to the public domain under CC0: https://creativecommons.org/publicdomain/zero/1.0/.

'''
mkmd build tool.
This file was separated from __main__.py so that `main` can be invoked as a console script and from tests.
'''

import sys
from argparse import ArgumentParser, Namespace
from typing import Any, List, Optional

from pithy.fs import abs_path, change_dir, path_dir, path_exists
from pithy.io import errL, outL, outZ

from .config import Config
from .constants import dflt_config_name, exit_ok
from .ctx import BuildError, ConfigSourceMissing, ConfigSourceUnreadable, Ctx, InvalidStyle, no_dbg
from .logging import Style, error
from .parse import config_from_sources
from .styles import styles
from .update import build


def main(argv:Optional[List[str]]=None) -> None:
  args = parse_args(argv)
  style = Style.for_color(use_color(args.color))
  try:
    run(args, style)
  except BuildError as e:
    error(style, e)
    sys.exit(e.code)
  sys.exit(exit_ok)


def parse_args(argv:Optional[List[str]]=None) -> Namespace:
  parser = ArgumentParser(prog='mkmd', description='Build targets declared in a Markdown configuration file.')
  parser.add_argument('-l', dest='list_targets', action='store_true', help='list available targets.')
  parser.add_argument('-B', dest='force', action='store_true', help='force processing of up-to-date targets.')
  parser.add_argument('-n', dest='dry_run', action='store_true', help='dry run: print commands without running them.')
  parser.add_argument('-s', dest='script_mode', action='store_true',
    help='run each unlabeled recipe block as a single bash script.')
  parser.add_argument('-v', dest='verbosity', action='count', default=0,
    help='increase verbosity; repeat to log scheduling decisions to stderr.')
  parser.add_argument('-q', dest='quiet', action='store_true', help='do not print target headings or commands.')
  parser.add_argument('-C', dest='cd', metavar='PATH', help='change to this directory before doing anything else.')
  parser.add_argument('-f', dest='config_files', metavar='PATH', action='append',
    help=f'configuration file; may be repeated, later files override earlier ones; defaults to {dflt_config_name!r}.')
  parser.add_argument('-g', dest='generate', metavar='STYLE',
    help=f'print a starter configuration; styles: {", ".join(sorted(styles))}.')
  parser.add_argument('--color', choices=('auto', 'always', 'never'), default='auto', help='colorize output.')
  parser.add_argument('targets', metavar='NAME', nargs='*', help='targets to build; defaults to the first target.')
  return parser.parse_args(argv)


def use_color(mode:str) -> bool:
  if mode == 'auto': return sys.stdout.isatty()
  return mode == 'always'


def run(args:Namespace, style:Style) -> None:
  if args.generate is not None:
    try: outZ(styles[args.generate])
    except KeyError: raise InvalidStyle(args.generate, ', '.join(sorted(styles))) from None
    return

  if args.cd: change_dir(args.cd)

  paths = args.config_files or [dflt_config_name]
  texts = [read_config(path) for path in paths]
  change_dir(path_dir(abs_path(paths[0]))) # Recipes run relative to the primary configuration file.
  config = config_from_sources(texts)

  if args.list_targets:
    list_targets(config, style)
    return

  if args.verbosity > 1:
    def dbg(target:str, *items:Any) -> None:
      errL('mkmd dbg: ', target, ': ', *items)
  else:
    dbg = no_dbg

  ctx = Ctx(force=args.force, dry_run=args.dry_run, script_mode=args.script_mode, verbosity=args.verbosity,
    quiet=args.quiet, style=style, dbg=dbg)

  build(ctx, config, args.targets)


def read_config(path:str) -> str:
  if not path_exists(path, follow=True): raise ConfigSourceMissing(path)
  try:
    with open(path, encoding='utf-8') as f: return f.read()
  except (OSError, UnicodeDecodeError) as e:
    raise ConfigSourceUnreadable(path, e) from e


def list_targets(config:Config, style:Style) -> None:
  outL(style.heading, '# Targets', style.rst, '\n')
  for target in config.listed():
    label = f'`{target.name}`' if target.is_file else target.name
    outL('* ', label)
  outL()

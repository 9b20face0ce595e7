# Dedicated to the public domain under CC0: https://creativecommons.org/publicdomain/zero/1.0/.

'''
Parse a Markdown configuration document into targets.

* A level-1 heading declares a target: `code` is a file (or a `*.ext` pattern rule); plain text is phony.
* A top-level bullet list under the heading names the dependencies.
* Each fenced code block under the heading is a recipe.
'''

from enum import Enum
from glob import glob
from typing import Dict, FrozenSet, Iterable, List, Optional, Tuple

from markdown_it import MarkdownIt
from markdown_it.token import Token
from pithy.fs import expand_user, path_name
from pithy.path import current_dir

from .config import Config, Recipe, Target
from .constants import allow_prefix, pattern_prefix, tok_dirname, tok_first_dep, tok_target


class ParseState(Enum):
  PREAMBLE = 'preamble' # Before the first heading.
  HEADING = 'heading' # Inside a level-1 heading.
  BODY = 'body' # After a heading.
  DEPENDENCIES = 'dependencies' # Inside the dependency list of the current target.


class TargetKind(Enum):
  PHONY = 'phony'
  FILE = 'file'
  PATTERN = 'pattern'


class Draft:
  'A target declaration under construction.'

  def __init__(self) -> None:
    self.name:Optional[str] = None
    self.kind = TargetKind.PHONY
    self.dependencies:List[str] = []
    self.recipes:List[Recipe] = []

  def to_target(self) -> Target:
    assert self.name is not None
    if self.kind is TargetKind.PHONY:
      return Target.phony(self.name, self.dependencies, self.recipes)
    pattern = self.name if self.kind is TargetKind.PATTERN else None
    return Target.file(self.name, self.dependencies, self.recipes, pattern=pattern)


md = MarkdownIt('commonmark')


def parse_markdown(text:str, dirname:Optional[str]=None) -> Dict[str, Target]:
  '''
  Return the targets declared in `text`, in declaration order.
  Dependencies that are not declared are not included; see `Config.add_derived`.
  '''
  if dirname is None: dirname = path_name(current_dir())
  targets:Dict[str, Target] = {}
  state = ParseState.PREAMBLE
  draft = Draft()
  lists:List[str] = [] # Stack of open list token types.

  def finish() -> None:
    if draft.name is not None:
      targets[draft.name] = draft.to_target()

  for token in md.parse(text):
    kind = token.type

    if kind == 'heading_open':
      if token.tag != 'h1': continue
      finish()
      draft = Draft()
      state = ParseState.HEADING

    elif kind == 'heading_close':
      if state is ParseState.HEADING:
        state = ParseState.BODY if draft.name is not None else ParseState.PREAMBLE

    elif kind == 'inline':
      if state is ParseState.HEADING:
        declare(draft, token.children or [], dirname)
      elif state is ParseState.DEPENDENCIES and lists == ['bullet_list']:
        draft.dependencies.extend(dependencies(token.children or [], dirname, expand=(draft.kind is not TargetKind.PATTERN)))

    elif kind in ('bullet_list_open', 'ordered_list_open'):
      list_type = kind[:-len('_open')]
      if state is ParseState.BODY and not lists and list_type == 'bullet_list':
        state = ParseState.DEPENDENCIES
      lists.append(list_type)

    elif kind in ('bullet_list_close', 'ordered_list_close'):
      if lists: lists.pop()
      if state is ParseState.DEPENDENCIES and not lists:
        state = ParseState.BODY

    elif kind == 'fence':
      if state in (ParseState.BODY, ParseState.DEPENDENCIES):
        draft.recipes.append(recipe(token.info, token.content, draft, dirname))

  finish()
  return targets


def config_from_sources(texts:Iterable[str], dirname:Optional[str]=None) -> Config:
  '''
  Merge several documents in order; a later declaration replaces an earlier one of the same name.
  Derived targets are added once, after merging, so that they never shadow a declaration.
  '''
  config = Config()
  for text in texts:
    config.targets.update(parse_markdown(text, dirname=dirname))
  config.add_derived()
  return config


def config_from_markdown(text:str, dirname:Optional[str]=None) -> Config:
  return config_from_sources([text], dirname=dirname)


def declare(draft:Draft, children:List[Token], dirname:str) -> None:
  'Set the name and kind of `draft` from the contents of its heading.'
  for child in children:
    if child.type == 'code_inline':
      name = child.content.replace(tok_dirname, dirname)
      draft.name = name
      draft.kind = TargetKind.PATTERN if (name.startswith(pattern_prefix) and len(name) > 2) else TargetKind.FILE
      return
  name = ''.join(c.content for c in children if c.type == 'text').strip()
  if name:
    draft.name = name
    draft.kind = TargetKind.PHONY


def dependencies(children:List[Token], dirname:str, expand:bool) -> List[str]:
  deps:List[str] = []
  for child in children:
    if child.type == 'code_inline':
      dep = child.content.replace(tok_dirname, dirname)
      if expand:
        dep = expand_user(dep)
        deps.extend(sorted(glob(dep)) or [dep])
      else:
        deps.append(dep)
    elif child.type == 'text':
      dep = child.content.strip()
      if dep: deps.append(dep)
  return deps


def recipe(info:str, content:str, draft:Draft, dirname:str) -> Recipe:
  content = content.replace(tok_dirname, dirname)
  is_pattern = draft.kind is TargetKind.PATTERN
  shell, allowed_codes = parse_info(info)
  if shell:
    if not is_pattern: content = substitute(content, draft)
    return Recipe(commands=(content,), shell=shell, allowed_codes=allowed_codes)
  commands = []
  for line in content.replace('\\\n', '').splitlines():
    stripped = line.strip()
    if not stripped or stripped.startswith('#'): continue
    commands.append(line if is_pattern else substitute(line, draft))
  return Recipe(commands=tuple(commands))


def parse_info(info:str) -> Tuple[str, FrozenSet[int]]:
  '''
  Split a fence info string into the shell command line and the set of tolerated exit codes.
  The codes are given by a trailing `allow=N,N...` word.
  '''
  words = info.split()
  if words and words[-1].startswith(allow_prefix):
    codes = words[-1][len(allow_prefix):].split(',')
    if all(c.isdigit() for c in codes): # Otherwise the word is an ordinary shell argument.
      return ' '.join(words[:-1]), frozenset(int(c) for c in codes)
  return ' '.join(words), frozenset()


def substitute(text:str, draft:Draft) -> str:
  assert draft.name is not None
  if draft.dependencies:
    text = text.replace(tok_first_dep, draft.dependencies[0])
  return text.replace(tok_target, draft.name)

# Dedicated to the public domain under CC0: https://creativecommons.org/publicdomain/zero/1.0/.

'''
Pattern rules: targets declared as `*.ext` that are instantiated for concrete file names on demand.
'''

from fnmatch import fnmatchcase
from typing import Optional, Tuple

from pithy.fs import path_exists

from .config import Config, Target
from .constants import tok_first_dep
from .ctx import CircularDependency


def match_pattern(config:Config, name:str) -> Optional[Target]:
  '''
  Return the first pattern target, in declaration order, whose glob matches `name`.
  No attempt is made to prefer a more specific pattern.
  '''
  for target in config.patterns():
    assert target.pattern is not None
    if fnmatchcase(name, target.pattern): return target
  return None


def pattern_stem(pattern:str, name:str) -> Optional[str]:
  '''
  Return the part of `name` matched by the leading `*` of `pattern`, or None if `name` does not match.
  The rest of the pattern may itself contain wildcards (`*.t?`, `*.[co]`, `*.*`),
  so the stem is the longest prefix whose remainder matches the rest.
  '''
  rest = pattern[1:]
  for end in range(len(name), -1, -1):
    if fnmatchcase(name[end:], rest): return name[:end]
  return None


def derive_dependency(rule:Target, name:str) -> Optional[str]:
  '''
  Derive the concrete dependency of `name` from the first dependency of `rule`.
  The first `*` in the dependency is replaced by the stem of `name`:
  given rule `*.o` with dependency `*.c`, `a.o` yields `a.c`; with `src/*.c` it yields `src/a.c`.
  A first dependency without a wildcard is a fixed path.
  Returns None if the rule has no dependencies or does not match `name`.
  '''
  dep = rule.first_dep
  if dep is None: return None
  if '*' not in dep: return dep
  stem = pattern_stem(rule.name, name)
  if stem is None: return None
  return dep.replace('*', stem, 1)


def instantiate(rule:Target, name:str) -> Target:
  dep = derive_dependency(rule, name)
  if dep is None:
    recipes = [r.substitute(first_dep=tok_first_dep, target=name) for r in rule.recipes]
    return Target.file(name, recipes=recipes)
  recipes = [r.substitute(first_dep=dep, target=name) for r in rule.recipes]
  return Target.file(name, dependencies=[dep], recipes=recipes)


def resolve_pattern(config:Config, name:str, force:bool, insert_fresh:bool=False, chain:Tuple[str, ...]=()) \
 -> Optional[Target]:
  '''
  Instantiate the pattern rule matching `name`, or return None if there is none.
  The new target is inserted into `config` only if it needs to run
  (`force`, its file is missing, or it is stale), or if `insert_fresh` is set;
  an existing entry for `name` is reused.
  The derived dependency is itself resolved, so rules may chain.
  '''
  existing = config.get(name)
  if existing is not None: return existing
  if name in chain: raise CircularDependency(name, (*chain, name))

  rule = match_pattern(config, name)
  if rule is None: return None
  target = instantiate(rule, name)

  for dep in target.dependencies:
    resolve_dependency(config, dep, force=force, chain=(*chain, name))

  if insert_fresh or force or not path_exists(name, follow=True) or config.outdated(target):
    return config.insert(target)
  return target


def resolve_dependency(config:Config, name:str, force:bool, chain:Tuple[str, ...]=()) -> Target:
  'Ensure a dependency is present in `config`, by pattern if possible, else as a plain file.'
  target = resolve_pattern(config, name, force=force, insert_fresh=True, chain=chain)
  if target is None:
    target = config.insert(Target.file(name))
  return target

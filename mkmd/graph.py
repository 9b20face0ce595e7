# Dedicated to the public domain under CC0: https://creativecommons.org/publicdomain/zero/1.0/.

'''
Dependency graph construction and scheduling.
'''

from typing import Iterable, List, Optional, Set, Tuple

from pithy.fs import path_exists

from .config import Config, Target
from .ctx import CircularDependency, Ctx, UnknownTarget
from .patterns import resolve_dependency, resolve_pattern


def resolve(ctx:Ctx, config:Config, name:str) -> Target:
  '''
  Look up a requested name, first exactly and then by pattern rule.
  Raises UnknownTarget if neither succeeds.
  '''
  target = config.get(name)
  if target is None:
    target = resolve_pattern(config, name, force=ctx.force)
  if target is None:
    raise UnknownTarget(name)
  if target.is_pattern:
    raise UnknownTarget(name, ': pattern rules cannot be requested directly.')
  return target


def bind(ctx:Ctx, config:Config, target:Target) -> None:
  '''
  Make every name reachable from `target` present in `config`,
  instantiating pattern rules as needed, so that staleness checks see the whole tree.
  '''
  visited:Set[str] = set()
  stack = [target]
  while stack:
    t = stack.pop()
    if t.name in visited: continue
    visited.add(t.name)
    for dep in t.dependencies:
      stack.append(resolve_dependency(config, dep, force=ctx.force))


def needs_expansion(ctx:Ctx, config:Config, target:Target) -> bool:
  'Phony targets always expand; file targets only when forced, missing, or stale.'
  if target.is_phony: return True
  return ctx.force or not path_exists(target.name, follow=True) or config.outdated(target)


def schedule(ctx:Ctx, config:Config, names:Iterable[str], seen:Optional[Set[str]]=None) -> List[Target]:
  '''
  Return the targets to process for `names`, in execution order.
  Every dependency precedes its dependent, sibling dependencies keep their declared order,
  and no target appears twice, including across calls that share `seen`.
  '''
  if seen is None: seen = set()
  roots = [resolve(ctx, config, name) for name in names] # Fail on unknown names before any work.
  order:List[Target] = []
  for root in roots:
    bind(ctx, config, root)
    visit(ctx, config, root, order=order, seen=seen, stack=())
  return order


def visit(ctx:Ctx, config:Config, target:Target, order:List[Target], seen:Set[str], stack:Tuple[str, ...]) -> None:
  name = target.name
  if name in stack:
    cycle = stack[stack.index(name):]
    raise CircularDependency(name, (*cycle, name))
  if name in seen: return
  if needs_expansion(ctx, config, target):
    ctx.dbg(name, 'expanding: ', ', '.join(target.dependencies) or '(no dependencies)')
    sub_stack = (*stack, name)
    for dep_name in target.dependencies:
      dep = config.get(dep_name)
      if dep is None: raise UnknownTarget(dep_name, f': dependency of {name!r}.')
      visit(ctx, config, dep, order=order, seen=seen, stack=sub_stack)
  else:
    ctx.dbg(name, 'fresh; dependencies pruned.')
  seen.add(name)
  order.append(target)

# Dedicated to the public domain under CC0: https://creativecommons.org/publicdomain/zero/1.0/.

'''
mkmd configuration model: targets, recipes, and the ordered target table.
'''

from dataclasses import dataclass, field, replace
from fnmatch import fnmatchcase
from typing import Dict, FrozenSet, Iterable, Iterator, List, Optional, Set, Tuple

from pithy.fs import file_mtime_or_zero

from .constants import tok_first_dep, tok_target
from .ctx import UnknownTarget


epoch = 0.0


def file_dtg(path:str) -> float:
  'Modification time of `path`, or the epoch if it does not exist.'
  return float(file_mtime_or_zero(path, follow=True))


@dataclass(frozen=True)
class Recipe:
  commands: Tuple[str, ...]
  shell: Optional[str] = None # When set, `commands` holds a single script for this interpreter.
  allowed_codes: FrozenSet[int] = frozenset()

  def substitute(self, first_dep:str, target:str) -> 'Recipe':
    return replace(self, commands=tuple(c.replace(tok_first_dep, first_dep).replace(tok_target, target) for c in self.commands))


@dataclass
class Target:
  name: str
  dtg: Optional[float] # None for phony targets.
  dependencies: List[str] = field(default_factory=list)
  recipes: List[Recipe] = field(default_factory=list)
  pattern: Optional[str] = None

  @classmethod
  def file(cls, name:str, dependencies:Iterable[str]=(), recipes:Iterable[Recipe]=(), pattern:Optional[str]=None) -> 'Target':
    dtg = epoch if pattern else file_dtg(name)
    return cls(name=name, dtg=dtg, dependencies=list(dependencies), recipes=list(recipes), pattern=pattern)

  @classmethod
  def phony(cls, name:str, dependencies:Iterable[str]=(), recipes:Iterable[Recipe]=()) -> 'Target':
    return cls(name=name, dtg=None, dependencies=list(dependencies), recipes=list(recipes))

  @property
  def is_file(self) -> bool: return self.dtg is not None

  @property
  def is_phony(self) -> bool: return self.dtg is None

  @property
  def is_pattern(self) -> bool: return self.pattern is not None

  @property
  def first_dep(self) -> Optional[str]:
    return self.dependencies[0] if self.dependencies else None


def outdated(target:Target, reference:float, targets:Dict[str, Target], visited:Optional[Set[str]]=None) -> bool:
  '''
  Return True if `target` or any of its transitive file dependencies is newer than `reference`.
  Phony targets are never outdated by this test, nor do they propagate staleness from below.
  '''
  if target.dtg is None: return False
  if target.dtg > reference: return True
  if visited is None: visited = set()
  visited.add(target.name)
  for dep_name in target.dependencies:
    if dep_name in visited: continue
    dep = targets.get(dep_name)
    if dep is not None and outdated(dep, reference, targets, visited): return True
  return False


class Config:
  '''
  The ordered table of targets for one invocation.
  The first target inserted is the default.
  '''

  def __init__(self, targets:Optional[Dict[str, Target]]=None) -> None:
    self.targets:Dict[str, Target] = {} if targets is None else targets

  def __contains__(self, name:str) -> bool: return name in self.targets

  def __getitem__(self, name:str) -> Target: return self.targets[name]

  def __iter__(self) -> Iterator[Target]: return iter(self.targets.values())

  def __len__(self) -> int: return len(self.targets)

  def get(self, name:str) -> Optional[Target]: return self.targets.get(name)

  def insert(self, target:Target) -> Target:
    'Insert `target` unless the name is already present; return the stored target.'
    return self.targets.setdefault(target.name, target)

  def add_derived(self) -> None:
    '''
    Add a file target for every dependency that is not itself declared.
    Names matching a pattern target are left to be instantiated on demand.
    '''
    patterns = [t.pattern for t in self.patterns()]
    derived:List[str] = []
    for target in self.targets.values():
      if target.is_pattern: continue # Pattern dependencies are templates.
      for dep in target.dependencies:
        if dep in self.targets or dep in derived: continue
        if any(fnmatchcase(dep, p) for p in patterns): continue
        derived.append(dep)
    for name in derived:
      self.targets[name] = Target.file(name)

  @property
  def default_target(self) -> Target:
    try: return next(iter(self.targets.values()))
    except StopIteration: raise UnknownTarget('<default>', ': configuration declares no targets.') from None

  def patterns(self) -> List[Target]:
    return [t for t in self.targets.values() if t.is_pattern]

  def listed(self) -> List[Target]:
    'Targets worth showing to a user; derived file placeholders are omitted.'
    return [t for t in self.targets.values() if t.is_phony or t.dependencies or t.recipes]

  def outdated(self, target:Target) -> bool:
    'Staleness of a file target relative to its own modification time.'
    if target.dtg is None: return False
    return outdated(target, target.dtg, self.targets)

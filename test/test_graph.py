# Dedicated to the public domain under CC0: https://creativecommons.org/publicdomain/zero/1.0/.

from pathlib import Path
from typing import List

import pytest

from mkmd.config import Config
from mkmd.ctx import CircularDependency, Ctx, UnknownTarget
from mkmd.graph import schedule
from mkmd.parse import config_from_markdown

from conftest import t_new, t_old, write


def names(ctx:Ctx, config:Config, *requested:str) -> List[str]:
  return [t.name for t in schedule(ctx, config, requested)]


diamond = '''\
# all

* b
* c

# b

* d

# c

* d

# d
'''


def test_dependencies_precede_dependents() -> None:
  config = config_from_markdown(diamond, dirname='proj')
  assert names(Ctx(), config, 'all') == ['d', 'b', 'c', 'all']


def test_order_is_deterministic() -> None:
  runs = [names(Ctx(), config_from_markdown(diamond, dirname='proj'), 'all') for _ in range(5)]
  assert all(r == runs[0] for r in runs)


def test_siblings_keep_declared_order() -> None:
  config = config_from_markdown('# all\n\n* z\n* a\n* m\n\n# z\n\n# a\n\n# m\n', dirname='proj')
  assert names(Ctx(), config, 'all') == ['z', 'a', 'm', 'all']


def test_seen_is_shared_across_requests() -> None:
  config = config_from_markdown(diamond, dirname='proj')
  seen:set = set()
  first = [t.name for t in schedule(Ctx(), config, ['b'], seen=seen)]
  second = [t.name for t in schedule(Ctx(), config, ['c'], seen=seen)]
  assert first == ['d', 'b']
  assert second == ['c']


def test_unknown_target() -> None:
  config = config_from_markdown(diamond, dirname='proj')
  with pytest.raises(UnknownTarget) as info:
    schedule(Ctx(), config, ['all', 'nope'])
  assert info.value.code == 5


def test_pattern_rule_cannot_be_requested(proj:Path) -> None:
  config = config_from_markdown('# `*.o`\n\n* `*.c`\n', dirname='proj')
  with pytest.raises(UnknownTarget):
    schedule(Ctx(), config, ['*.o'])


def test_cycle() -> None:
  config = config_from_markdown('# a\n\n* b\n\n# b\n\n* c\n\n# c\n\n* a\n', dirname='proj')
  with pytest.raises(CircularDependency) as info:
    schedule(Ctx(), config, ['a'])
  assert info.value.cycle == ('a', 'b', 'c', 'a')
  assert info.value.code == 7


fresh_file = '''\
# `out.txt`

* `mid.txt`

```
cp mid.txt out.txt
```

# `mid.txt`

* `in.txt`

```
cp in.txt mid.txt
```
'''


def test_fresh_file_prunes_dependencies(proj:Path) -> None:
  write('in.txt', mtime=t_old)
  write('mid.txt', mtime=t_old)
  write('out.txt', mtime=t_new)
  config = config_from_markdown(fresh_file, dirname='proj')
  assert names(Ctx(), config, 'out.txt') == ['out.txt']


def test_force_expands_fresh_file(proj:Path) -> None:
  write('in.txt', mtime=t_old)
  write('mid.txt', mtime=t_old)
  write('out.txt', mtime=t_new)
  config = config_from_markdown(fresh_file, dirname='proj')
  assert names(Ctx(force=True), config, 'out.txt') == ['in.txt', 'mid.txt', 'out.txt']


def test_stale_file_expands(proj:Path) -> None:
  write('in.txt', mtime=t_new)
  write('mid.txt', mtime=t_old)
  write('out.txt', mtime=t_old)
  config = config_from_markdown(fresh_file, dirname='proj')
  assert names(Ctx(), config, 'out.txt') == ['in.txt', 'mid.txt', 'out.txt']


def test_missing_file_expands(proj:Path) -> None:
  write('in.txt')
  config = config_from_markdown(fresh_file, dirname='proj')
  assert names(Ctx(), config, 'out.txt') == ['in.txt', 'mid.txt', 'out.txt']


def test_pattern_dependency_is_bound_before_staleness(proj:Path) -> None:
  write('main.c', mtime=t_new)
  write('main.o', mtime=t_old)
  write('prog', mtime=t_old)
  text = '''\
# `prog`

* `main.o`

```
cc -o prog main.o
```

# `*.o`

* `*.c`

```
cc -c {0} -o {target}
```
'''
  config = config_from_markdown(text, dirname='proj')
  assert names(Ctx(), config, 'prog') == ['main.c', 'main.o', 'prog']

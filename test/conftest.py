# Dedicated to the public domain under CC0: https://creativecommons.org/publicdomain/zero/1.0/.

from pathlib import Path
from typing import Any, List, Optional

import pytest
from pithy.fs import set_mtime

import mkmd.logging
import mkmd.main


@pytest.fixture
def proj(tmp_path:Path, monkeypatch:pytest.MonkeyPatch) -> Path:
  'An empty project directory that is also the working directory.'
  monkeypatch.chdir(tmp_path)
  return tmp_path


@pytest.fixture
def err_lines(monkeypatch:pytest.MonkeyPatch) -> List[str]:
  '''
  Lines written to stderr by mkmd.
  `pithy.io` binds `sys.stderr` when it is first imported, which is before pytest captures anything,
  so the writers are replaced instead.
  '''
  lines:List[str] = []
  def errL(*items:Any, sep:str='', flush:bool=False) -> None:
    lines.append(sep.join(str(i) for i in items))
  monkeypatch.setattr(mkmd.logging, 'errL', errL)
  monkeypatch.setattr(mkmd.main, 'errL', errL)
  return lines


def write(path:str, text:str='', mtime:Optional[float]=None) -> None:
  'Write `text` to `path`, optionally setting its modification time.'
  Path(path).parent.mkdir(parents=True, exist_ok=True)
  Path(path).write_text(text)
  if mtime is not None:
    set_mtime(path, mtime)


t_old = 1_000_000_000.0
t_mid = 1_100_000_000.0
t_new = 1_200_000_000.0

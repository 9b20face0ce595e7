# Dedicated to the public domain under CC0: https://creativecommons.org/publicdomain/zero/1.0/.

'''
mkmd output: narration on stdout and diagnostics on stderr.
'''

from dataclasses import dataclass
from typing import Any

from pithy.ansi import BOLD, RST, TXT_B, TXT_G, TXT_R
from pithy.io import errL, outL


@dataclass(frozen=True)
class Style:
  '''
  Terminal styling, chosen once from the color mode and then passed to every output function.
  Each field is an escape sequence, or the empty string when color is disabled.
  '''
  heading: str = ''
  command: str = ''
  ok: str = ''
  error: str = ''
  rst: str = ''

  @classmethod
  def for_color(cls, color:bool) -> 'Style':
    if not color: return cls()
    return cls(heading=BOLD+TXT_B, command=BOLD+TXT_G, ok=TXT_G, error=BOLD+TXT_R, rst=RST)


def warn(path:str, *items:Any) -> None:
  errL(f'mkmd warning: {path}: ', *items)

def error_msg(path:str, *msg:Any) -> str:
  return f'mkmd error: {path}: ' + ''.join(str(m) for m in msg)

def error(style:Style, msg:Any) -> None:
  errL(style.error, msg, style.rst)


def heading(style:Style, name:str, is_file:bool) -> None:
  label = f'`{name}`' if is_file else name
  outL(style.heading, '# ', label, style.rst, '\n')

def up_to_date(style:Style) -> None:
  outL(style.ok, '*Up to date*', style.rst, '\n')

def command_block(style:Style, lang:str, text:str, prompt:bool) -> None:
  '''
  Print a command or script as a fenced block, before it runs.
  Single commands are prefixed with a `$` prompt; scripts are printed verbatim.
  '''
  outL('```', lang)
  if prompt:
    outL('$ ', style.command, text, style.rst)
  else:
    outL(style.command, text.rstrip('\n'), style.rst)

def end_block() -> None:
  outL('```\n')

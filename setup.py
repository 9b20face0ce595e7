# Dedicated to the public domain under CC0: https://creativecommons.org/publicdomain/zero/1.0/.


import sys
if sys.version_info < (3, 8): exit('error: mkmd requires Python3.8 or later. Make sure to install with `pip3` or `pip3.X`.')

from setuptools import setup


setup(
  name='mkmd',
  version='0.1.0',
  description='Make-like build tool configured by a Markdown document.',
  license='CC0',
  python_requires='>=3.8',
  packages=['mkmd'],
  install_requires=[
    'markdown-it-py',
    'pithy',
  ],
  extras_require={
    'test': ['pytest'],
  },
  entry_points = {'console_scripts': [
    'mkmd=mkmd.main:main',
  ]},
)

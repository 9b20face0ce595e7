# Dedicated to the public domain under CC0: https://creativecommons.org/publicdomain/zero/1.0/.

'''
Starter configuration documents, printed by `mkmd -g STYLE`.
'''

from typing import Dict


rust = '''\
# all

* check
* build
* test

# check

```
cargo outdated --exit-code 1
cargo clippy -- -D clippy::all
```

# build

```
cargo build --release
```

# test

```
cargo test
```

# clean

```
cargo clean
```

# install

```
cargo install --path .
```

# uninstall

```
cargo uninstall {dirname}
```
'''


python = '''\
# all

* lint
* test

# lint

```
ruff check .
```

# test

```
python -m pytest
```

# dist

* all

```
python -m build
```

# clean

```
rm -rf build dist *.egg-info
```
'''


styles:Dict[str, str] = {
  'python': python,
  'rust': rust,
}

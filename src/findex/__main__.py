"""Allow ``python -m findex``."""

from findex.cli import run


run()

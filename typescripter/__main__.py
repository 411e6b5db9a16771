"""Allow ``python -m typescripter``."""

from __future__ import annotations

import sys

from .cli import main

main(sys.argv[1:])

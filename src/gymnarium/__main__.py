from __future__ import annotations

from gymnarium.cli import main

main()

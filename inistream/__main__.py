"""Allow running as `python -m inistream`."""

from .cli import main

main()

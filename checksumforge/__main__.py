"""Allow ``python -m checksumforge``."""

from checksumforge.cli.app import main

main()

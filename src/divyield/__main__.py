"""Allow ``python -m divyield``."""

from divyield.cli import main

main()

"""Allow ``python -m tsdoc_coverage``."""

from tsdoc_coverage.cli import main

main()

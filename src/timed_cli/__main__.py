"""Allow ``python -m timed_cli``."""

from timed_cli.main import main

main()

"""Allow running as ``python -m quizpulse``."""

from quizpulse.cli.main import main

main()

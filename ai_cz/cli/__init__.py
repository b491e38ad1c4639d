"""Command Line Interface Package"""

from ai_cz.cli.main import main, run

__all__ = ["main", "run"]

"""CLI Argument Parsing"""

import argparse
import argcomplete

from ai_cz import __version__


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog='ai-cz',
        description='AI Conventional Commit Generator: suggest a commit message for the current diff',
        epilog='Run without options to generate a commit. Example: ai-cz --token'
    )

    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    parser.add_argument('--token', action='store_true', help='Manage the stored OpenAI API token')
    parser.add_argument('-m', '--model', type=str, metavar='MODEL', help='OpenAI model for this run')
    parser.add_argument('-v', '--verbose', action='count', default=0, help='Show diagnostics (-vv for debug output)')

    argcomplete.autocomplete(parser)
    return parser.parse_args(argv)

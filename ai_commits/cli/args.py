"""CLI Argument Parsing"""

import argparse

import argcomplete

from ai_commits import __version__
from ai_commits.providers import PROVIDER_NAMES


def _non_negative_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"'{value}' is not a number")
    if number < 0:
        raise argparse.ArgumentTypeError(f"limit must be 0 or more, got {number}")
    return number


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    """Flags shared by both tools."""
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')

    # Provider options (not restricted to known names: unknown ones fail at run time)
    providers = ', '.join(PROVIDER_NAMES)
    parser.add_argument('-p', '--provider', type=str, metavar='NAME', help=f'AI provider ({providers})')
    parser.add_argument('-m', '--model', type=str, metavar='MODEL', help='Model name (e.g. llama3, gpt-4)')
    parser.add_argument('--non-interactive', action='store_true', help='Disable interactive menus for provider/model selection')

    # Output options
    parser.add_argument('-o', '--output', type=str, metavar='FILE', help='Save the result to a file instead of stdout')
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable debug logs')

    # Discovery/config
    parser.add_argument('--list-providers', action='store_true', help='List detected AI provider CLIs and exit')
    parser.add_argument('--list-models', type=str, metavar='PROVIDER', help='List available models for a provider and exit')
    parser.add_argument('--display-config', action='store_true', help='Show current configuration')
    parser.add_argument('--install-completion', action='store_true', help='Install shell tab completion')


def build_commit_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='ai-commit',
        description='AI-Powered Git Commit Message Generator',
        epilog='Example: git commit -m "$(ai-commit --non-interactive -p ollama)"'
    )
    _add_common_arguments(parser)

    # Generation options
    parser.add_argument('-l', '--limit', type=_non_negative_int, metavar='NUM', help='Diff character limit (default: 0 for unlimited)')
    parser.add_argument('-b', '--brief', action='store_true', help='Force short 1-sentence summary')
    parser.add_argument('-e', '--emoji', action='store_true', help='Enable GitMoji style')
    return parser


def build_tag_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='ai-tag',
        description='AI-Powered Git Tag Message Generator. Writes release notes for the commits since the last tag.',
        epilog='Example: ai-tag v1.2.3 --annotate'
    )
    parser.add_argument('tag', nargs='?', metavar='TAG', help='Name of the tag to create (e.g. v1.2.3)')
    _add_common_arguments(parser)
    parser.add_argument('-a', '--annotate', action='store_true', help='Create the annotated tag with the generated notes')
    return parser


def parse_commit_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = build_commit_parser()
    argcomplete.autocomplete(parser)
    return parser.parse_args(argv)


def parse_tag_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = build_tag_parser()
    argcomplete.autocomplete(parser)
    args = parser.parse_args(argv)
    if not args.tag and not (args.list_providers or args.list_models or args.display_config or args.install_completion):
        parser.error("Tag name is a required argument.")
    return args

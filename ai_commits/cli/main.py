"""CLI Main Entry Points

ai-commit and ai-tag share one pipeline: prepare content from git, settle
provider and model, run the provider, clean its output, write the result.
"""

from typing import Optional

from ai_commits.config import Config, RunOptions, load_config
from ai_commits.git import GitAnalyzer, GitError, truncate_diff
from ai_commits.output import Spinner, debug, print_error, print_success, set_verbose
from ai_commits.prompts import Prompt, PromptBuilder, PromptModes
from ai_commits.providers import GenerationError, ProviderError, execute
from ai_commits.selection import resolve_selection

from ai_commits.cli.args import parse_commit_args, parse_tag_args
from ai_commits.cli.commands import display_config, list_models, list_providers, run_install_completion
from ai_commits.cli.utils import TerminalChooser, clean_message, write_output


def _handle_subcommands(args, prog: str):
    """Handle flags that exit early.

    Returns:
        tuple: (exit_code, should_exit) - exit_code if should_exit is True
    """
    if args.install_completion:
        return run_install_completion(prog), True
    if args.display_config:
        return display_config(), True
    if args.list_providers:
        return list_providers(), True
    if args.list_models:
        return list_models(args.list_models), True
    return 0, False


def _generate(prompt: Prompt, options: RunOptions, config: Config, agent: Optional[str] = None) -> str:
    """Select provider and model, run it, and return the cleaned text.

    Raises:
        ProviderError: on any selection or generation failure
    """
    selection = resolve_selection(options, config, TerminalChooser())

    with Spinner(f"Generating with {selection.provider}..."):
        result = execute(prompt, selection.provider, selection.model, agent=agent)

    message = clean_message(result.stdout)
    if not message:
        raise GenerationError(f"AI generation failed. '{selection.provider}' returned only formatting.")
    return message


def _emit(message: str, options: RunOptions) -> bool:
    """Write the result to its sink; False (with an error printed) if that failed."""
    try:
        write_output(message, options.output)
    except OSError as e:
        print_error(f"Could not write {options.output or 'stdout'}: {e}")
        return False
    if options.output is not None:
        debug(f"Result written to {options.output}")
    return True


def _settle_options(args) -> tuple[Config, RunOptions]:
    config = load_config()
    options = RunOptions.from_args(args, config)
    set_verbose(options.verbose)
    return config, options


def commit_main(argv: list[str] | None = None) -> int:
    """Entry point for ai-commit."""
    args = parse_commit_args(argv)
    config, options = _settle_options(args)

    exit_code, should_exit = _handle_subcommands(args, 'ai-commit')
    if should_exit:
        return exit_code

    try:
        analyzer = GitAnalyzer()
        changes = analyzer.get_staged_changes(config.all_ignored_patterns)
    except GitError as e:
        print_error(str(e))
        return 1

    if changes.is_empty:
        print_error("No staged changes to commit. Run 'git add' first.")
        return 1

    diff = truncate_diff(changes.diff, options.diff_limit)
    if diff != changes.diff:
        debug(f"Diff was truncated to {options.diff_limit} chars.")

    modes = PromptModes(brief=options.brief, emoji=options.emoji)
    prompt = PromptBuilder().build_commit(changes.name_status, diff, modes)

    try:
        message = _generate(prompt, options, config, agent=config.opencode_commit_agent or None)
    except ProviderError as e:
        print_error(str(e))
        return 1

    return 0 if _emit(message, options) else 1


def tag_main(argv: list[str] | None = None) -> int:
    """Entry point for ai-tag."""
    args = parse_tag_args(argv)
    config, options = _settle_options(args)

    exit_code, should_exit = _handle_subcommands(args, 'ai-tag')
    if should_exit:
        return exit_code

    try:
        analyzer = GitAnalyzer()
        log = analyzer.get_commit_log()
    except GitError as e:
        print_error(str(e))
        return 1

    if log.is_empty:
        print_error("No new commits since last tag to create a release from.")
        return 1
    debug("Commit log prepared.")

    prompt = PromptBuilder().build_release(log.text)

    try:
        notes = _generate(prompt, options, config)
    except ProviderError as e:
        print_error(str(e))
        return 1

    if not _emit(notes, options):
        return 1

    if args.annotate:
        try:
            analyzer.create_tag(args.tag, notes)
        except GitError as e:
            print_error(str(e))
            return 1
        print_success(f"Created tag {args.tag}")

    return 0

"""CLI Main Entry Point"""

import logging
import sys

from ai_cz import COMMIT_TYPES, get_commit_type
from ai_cz.cli.args import parse_args
from ai_cz.cli.commands import obtain_token, run_token_menu
from ai_cz.cli.prompts import PromptCancelled, choose, confirm, not_empty, text_input
from ai_cz.config import get_config_path, load_config, resolve_model, resolve_token_dir
from ai_cz.git import GitAnalyzer, GitError
from ai_cz.llm import get_client
from ai_cz.log import configure_logging
from ai_cz.output import colorize_commit_type, dim, heading, info, print_error, print_info, print_success, print_warning, success, warning
from ai_cz.prompts import PromptConfig
from ai_cz.secrets import SecretStoreError, TokenStore
from ai_cz.suggestions import SuggestionPipeline, format_commit_message

logger = logging.getLogger(__name__)

TITLE = "🤖 AI Conventional Commit Generator"

_CUSTOM = object()


def _select_commit_type(suggested: list[str]) -> str:
    """Suggested types first, in model order, then the rest of the catalog."""
    suggested = [t for t in suggested if get_commit_type(t)]
    ordered = [get_commit_type(t) for t in suggested]
    ordered += [t for t in COMMIT_TYPES if t.type not in suggested]

    options = []
    for t in ordered:
        label = f"{t.emoji} {t.type}: {t.description}"
        if t.type in suggested:
            label += f" {success('(suggested)')}"
        options.append((label, t.type))
    return choose("Select commit type:", options, separator_after=len(suggested) or None)


def _select_scope(suggested: list[str]) -> str:
    options = [("Skip scope", "")]
    options += [(scope, scope) for scope in suggested]
    options.append(("Custom scope", _CUSTOM))

    scope = choose("Select scope (or skip):", options)
    if scope is _CUSTOM:
        return text_input("Enter custom scope:", not_empty("Scope")).strip()
    return scope


def _select_message(suggested: list[str]) -> str:
    options = [(msg, msg) for msg in suggested]
    options.append(("Custom message", _CUSTOM))

    message = choose("Select commit message:", options)
    if message is _CUSTOM:
        return text_input("Enter custom message:", not_empty("Message")).strip()
    return message


def _commit_changes(git: GitAnalyzer, message: str) -> None:
    """Stage everything when nothing is staged, then commit."""
    try:
        if not git.has_staged_files():
            print_info("Staging all changes...")
            git.stage_all()
        output = git.commit(message)
    except GitError as e:
        raise GitError(f"Failed to commit: {e}") from e
    if output.strip():
        print(dim(output.rstrip()))
    print_success("Commit successful!")


def generate_commit(git: GitAnalyzer, store: TokenStore, pipeline: SuggestionPipeline) -> int:
    """Default flow: diff -> token -> suggestions -> selection -> commit. Returns exit code."""
    try:
        print(info("📊 Analyzing changes..."))
        diff = git.get_diff()
        if not diff:
            print_warning("No changes detected. Make sure you have staged changes or unstaged changes.")
            return 0

        token = obtain_token(store)

        print(info("🧠 Generating AI suggestions..."))
        suggestions = pipeline.suggest(diff, token)
        if pipeline.last_error:
            print_error(f"Failed to generate AI suggestions: {pipeline.last_error}")
            print(dim("  Falling back to default suggestions."))

        print(success("✨ Ready to create your commit!"))
        commit_type = _select_commit_type(suggestions.types)
        scope = _select_scope(suggestions.scopes)
        message = _select_message(suggestions.messages)

        final_message = format_commit_message(commit_type, scope, message)
        print(warning("\n📝 Commit message preview:"))
        print(f"   {colorize_commit_type(final_message)}\n")

        if not confirm("Proceed with this commit?", default=True):
            print_warning("Commit cancelled")
            return 0

        _commit_changes(git, final_message)
    except PromptCancelled:
        print(dim("Cancelled."))
        return 0
    except (GitError, SecretStoreError) as e:
        print_error(str(e))
        return 1
    return 0


def _build_pipeline(config, model: str) -> SuggestionPipeline:
    return SuggestionPipeline(
        client_factory=lambda token: get_client(token, model=model, temperature=config.temperature),
        prompt_config=PromptConfig(max_diff_chars=config.max_diff_chars),
    )


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    args = parse_args(argv)
    configure_logging(args.verbose)

    config = load_config()
    logger.debug("Config from %s: %s", get_config_path() or "defaults", config.to_dict())

    try:
        store = TokenStore(resolve_token_dir(config))

        if args.token:
            print(heading(f"{TITLE} - Token Management"))
            return run_token_menu(store)

        print(heading(TITLE))
        try:
            git = GitAnalyzer()
        except GitError as e:
            print_error(str(e))
            return 1

        pipeline = _build_pipeline(config, resolve_model(config, args.model))
        return generate_commit(git, store, pipeline)
    except KeyboardInterrupt:
        print(dim("\nCancelled."))
        return 130
    except Exception as e:
        if args.verbose >= 2:
            raise
        print_error(f"An error occurred: {e}")
        return 1


def run() -> None:
    sys.exit(main())

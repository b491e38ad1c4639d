"""CLI Commands - token management."""

import os

from ai_cz.cli.prompts import PromptCancelled, choose, confirm, text_input
from ai_cz.output import CHECK, CROSS, dim, error, info, success, print_error, print_success, print_warning
from ai_cz.secrets import DecryptStatus, SecretStoreError, TokenStore, mask_token, validate_token

API_KEYS_URL = "https://platform.openai.com/api-keys"

TOKEN_MENU = [
    ("Set new API token", "set"),
    ("Clear stored token", "clear"),
    ("View token status", "status"),
    ("Back to main menu", "back"),
]


def prompt_for_token() -> str:
    return text_input("Enter your OpenAI API token:", validate_token, secret=True).strip()


def obtain_token(store: TokenStore) -> str:
    """Token from OPENAI_API_KEY, the store, or the user (optionally saved).

    Raises SecretStoreError if saving fails, PromptCancelled if the user quits.
    """
    env_token = os.environ.get('OPENAI_API_KEY', '').strip()
    if env_token:
        return env_token

    result = store.read()
    if result.ok and result.value:
        return result.value
    if result.status not in (DecryptStatus.OK, DecryptStatus.MISSING):
        print_warning(f"Stored token could not be read ({result.status.value}), please enter it again.")

    print_warning("No API token found. Please provide your OpenAI API token.")
    print(info(f"  You can get your token from: {API_KEYS_URL}\n"))
    token = prompt_for_token()

    if confirm("Save this token securely for future use?", default=True):
        save_token(store, token)
    return token


def save_token(store: TokenStore, token: str) -> None:
    """Persist the token and confirm it to the user.

    TokenStore.set only logs; every interactive save goes through here.
    """
    store.set(token)
    print_success("API token saved securely")


def set_new_token(store: TokenStore) -> None:
    save_token(store, prompt_for_token())


def clear_token(store: TokenStore) -> None:
    if store.clear():
        print_success("API token cleared")
    else:
        print(dim("No stored token to clear"))


def show_token_status(store: TokenStore) -> None:
    token = store.get()
    status = success(f"{CHECK} Token stored") if token else error(f"{CROSS} No token stored")
    print(f"\nToken Status: {status}")
    if token:
        print(f"Token: {mask_token(token)}")
    print(dim(f"Location: {store.token_file}"))
    print()


def run_token_menu(store: TokenStore) -> int:
    """Interactive token management. Returns exit code."""
    try:
        action = choose("Token Management:", TOKEN_MENU)
        if action == "set":
            set_new_token(store)
        elif action == "clear":
            clear_token(store)
        elif action == "status":
            show_token_status(store)
    except PromptCancelled:
        print(dim("Cancelled."))
    except SecretStoreError as e:
        print_error(str(e))
        return 1
    return 0

import re
import getpass


def get_int(prompt: str, default: int) -> int:
    """
    Ask for a whole number, reprompting until one is typed.

    Args:
        prompt: Text displayed to the user.
        default: Returned when the user just presses Enter.

    Returns:
        The number typed, or default. Range checks are left to the caller.
    """
    while True:
        val = input(prompt).strip()
        if not val:
            return default
        if re.fullmatch(r"[0-9]+", val):
            return int(val)
        print(f"   Invalid — digits only, or Enter for {default}")


def prompt_required(prompt: str) -> str:
    """Prompt until the user enters something other than whitespace."""
    while True:
        val = input(prompt).strip()
        if val:
            return val
        print("   This field is required.")


def prompt_secret(prompt: str) -> str:
    """
    Prompt for a secret without echoing it.

    Repeats until a non-blank value is entered. Surrounding whitespace is
    kept, since it is part of the secret.
    """
    while True:
        val = getpass.getpass(prompt)
        if val.strip():
            return val
        print("   Master password cannot be blank.")


def ask_yes_no(prompt: str, default: bool = True) -> bool:
    """Ask a y/n question. Enter accepts the default; anything but 'y' is no."""
    val = input(prompt).strip().lower()
    if not val:
        return default
    return val == "y"


def ask_choice(prompt: str, choices, default: str) -> str:
    """Return the user's pick from choices, or default for anything else."""
    val = input(prompt).strip().lower()
    return val if val in choices else default

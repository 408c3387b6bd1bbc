"""
PassgenX - deterministic password generator
"""
# ==============================================================
# Standard imports
# ==============================================================
import sys
import logging
import argparse
from pathlib import Path

# ==============================================================
# Other imports
# ==============================================================

try:
    import pendulum
    from passgenx.config.config_vault import *
    from passgenx.config.logging_config import setup_logging
    from passgenx.utils.errors import PassgenxError
    from passgenx.utils.Request import GenerationRequest
    from passgenx.utils.vault_utils import IdentifierStore, LOAD_PARTIAL
    from passgenx.utils.user_input import get_int, prompt_required, prompt_secret, ask_yes_no, ask_choice
    from passgenx.utils.clipboard_utils import copy_to_clipboard, hold_clipboard

except ImportError as e:
    missing_package = e.name if hasattr(e, "name") else "unknown package"
    print("Missing required dependency!")
    print(f"  {missing_package} is not installed")
    logging.error(f"  {missing_package} is not installed. See pyproject.toml")
    print("\nInstall with:")
    print("  pip install passgenx")
    sys.exit(1)

logger = logging.getLogger(__name__)

BANNER = f"""
{SEP_LG}
   PassgenX v{VERSION}
   Deterministic Password Generator
{SEP_LG}
"""

# ==============================================================
# Functions
# ==============================================================

def length_arg(value: str) -> int:
    """argparse type for --length: an integer within the configured bounds."""
    try:
        length = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid length: {value!r}")
    lo, hi = PASS_DEFAULTS["min_length"], PASS_DEFAULTS["max_length"]
    if not lo <= length <= hi:
        raise argparse.ArgumentTypeError(f"length must be between {lo} and {hi}")
    return length


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="passgenx",
        description="Derive reproducible passwords from a domain, a master password and an identifier.",
    )
    parser.add_argument("command", nargs="?", default="generate",
                        choices=("generate", "setup", "list"),
                        help="generate a password (default), mint a vault identifier, or list the vault")
    parser.add_argument("--length", type=length_arg,
                        help=f"password length (default: {PASS_DEFAULTS['length']})")
    parser.add_argument("--case", dest="case_type", choices=CASE_CHOICES,
                        help=f"character case (default: {PASS_DEFAULTS['case_type']})")
    parser.add_argument("--symbols", dest="include_symbols", default=None,
                        action=argparse.BooleanOptionalAction, help="include symbols")
    parser.add_argument("--digits", dest="include_digits", default=None,
                        action=argparse.BooleanOptionalAction, help="include digits")
    parser.add_argument("--copy", action="store_true", help="copy the password to the clipboard")
    parser.add_argument("--vault", type=Path, default=VAULT_FILE,
                        help=f"identifier vault file (default: {VAULT_FILE})")
    parser.add_argument("-v", "--version", action="version",
                        version=f"PassgenX v{VERSION} (algorithm {ALGORITHM_VERSION})")
    return parser


def open_store(path: Path) -> IdentifierStore:
    store = IdentifierStore.open(path)
    if store.recovered_from_corruption:
        print(f"   Warning: vault file {store.path} is damaged, treating it as empty.")
    elif store.load_status == LOAD_PARTIAL:
        print(f"   Warning: some entries in {store.path} could not be read and were skipped.")
        print("   The file will be backed up before it is next saved.")
    return store


def interactive_config(args: argparse.Namespace) -> None:
    """
    Prompt for every generation option not given on the command line.

    Fills the missing attributes of args in place.
    """
    print("\n--- Configuration ---")

    if args.length is None:
        length = get_int(f" Password length (default {PASS_DEFAULTS['length']}): ",
                         default=PASS_DEFAULTS["length"])
        clamped = max(PASS_DEFAULTS["min_length"], min(PASS_DEFAULTS["max_length"], length))
        if clamped != length:
            print(f"   Length must be {PASS_DEFAULTS['min_length']}-{PASS_DEFAULTS['max_length']}, using {clamped}.")
        args.length = clamped

    if args.case_type is None:
        args.case_type = ask_choice(
            f" Case type? ({' / '.join(CASE_CHOICES)}) [{PASS_DEFAULTS['case_type']}]: ",
            CASE_CHOICES, PASS_DEFAULTS["case_type"])

    if args.include_symbols is None:
        args.include_symbols = ask_yes_no(" Include symbols? (y/n) [y]: ",
                                          default=PASS_DEFAULTS["include_symbols"])

    if args.include_digits is None:
        args.include_digits = ask_yes_no(" Include digits? (y/n) [y]: ",
                                         default=PASS_DEFAULTS["include_digits"])


def run_interactive(args: argparse.Namespace) -> None:
    print(BANNER)

    domain = prompt_required(" Domain: ")
    master_secret = prompt_secret(" Master password: ")
    identifier = input(" Identifier (optional, press Enter to use vault/default): ").strip()

    # Retrieve identifier from vault if not provided
    if not identifier:
        identifier = open_store(args.vault).get_identifier(domain)
        if identifier:
            print("   Using identifier stored in vault.")
        else:
            identifier = DEFAULT_IDENTIFIER

    interactive_config(args)

    request = GenerationRequest(
        domain=domain,
        master_secret=master_secret,
        identifier=identifier,
        length=args.length,
        case_type=args.case_type,
        include_digits=args.include_digits,
        include_symbols=args.include_symbols,
    )
    del master_secret

    print(f"\nGenerating password with length: {request.length}")
    password = request.generate()

    print(f"\n{SEP_SM}")
    print(f" Your generated password: {password}")
    print(SEP_SM)

    if args.copy and copy_to_clipboard(password, CLIPBOARD_TIMEOUT):
        hold_clipboard(password, CLIPBOARD_TIMEOUT)


def run_setup(args: argparse.Namespace) -> None:
    print("\n--- Setup mode ---")
    domain = prompt_required(" Enter domain to store identifier for: ")

    store = open_store(args.vault)
    if domain in store:
        print(f"   {domain} already has an identifier. Replacing it changes its password.")
        if not ask_yes_no(" Replace it? (y/n) [n]: ", default=False):
            print("   Setup cancelled")
            return

    identifier = store.generate_and_store(domain)
    print(f" Identifier generated and stored: {identifier}")


def run_list(args: argparse.Namespace) -> None:
    store = open_store(args.vault)
    if not len(store):
        print("Empty vault — no entries yet.")
        return

    print(SEP_SM)
    print(f" {'Domain':<{DOMAIN_LEN}}  Identifier")
    print(SEP_SM)
    for domain, identifier in sorted(store.items(), key=lambda item: item[0].lower()):
        domain = domain if len(domain) <= DOMAIN_LEN else domain[:DOMAIN_LEN-3] + "..."
        print(f" {domain:<{DOMAIN_LEN}}  {identifier}")


COMMANDS = {
    "generate": run_interactive,
    "setup": run_setup,
    "list": run_list,
}


def run(argv=None) -> int:
    """
    Parse argv and run the chosen command.

    Returns:
        Process exit status: 0 on success, 1 on a reported error,
        130 if the user aborted input.
    """
    args = build_parser().parse_args(argv)
    try:
        COMMANDS[args.command](args)
    except (PassgenxError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        logger.error(f"[{pendulum.now().to_iso8601_string()}] {type(e).__name__}: {e}\n")
        return 1
    except (KeyboardInterrupt, EOFError):
        print("\nCancelled.")
        return 130
    return 0


# ==============================================================
# MAIN
# ==============================================================
def main():
    setup_logging()
    sys.exit(run())


if __name__ == "__main__":
    main()

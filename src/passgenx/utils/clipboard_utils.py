import atexit
import logging
import threading

import pendulum
import pyperclip

from passgenx.config.config_vault import CLIPBOARD_TIMEOUT

logger = logging.getLogger(__name__)


def copy_to_clipboard(text: str,
                       timeout: int = CLIPBOARD_TIMEOUT,
                         prompt = False) -> bool:
    """
    Copy sensitive text to the system clipboard.

    When auto-clear is enabled the clipboard is also cleared at interpreter
    exit, so an interrupted run does not leave the password behind. Use
    `hold_clipboard` to keep the process alive until the clear happens.

    Args:
        text: Text to copy to the clipboard.
        timeout: Seconds the password may stay on the clipboard.
            A value of 0 or less disables clearing.
        prompt: If True, prompt the user before copying. If False,
            copy immediately.

    Returns:
        True if the text was copied.
    """
    if not text:
        print(" Nothing to copy.")
        return False

    if prompt and input(" Copy to clipboard? (y/n): ").strip().lower() != "y":
        return False

    try:
        pyperclip.copy(text)
    except pyperclip.PyperclipException as e:
        print(" Could not copy to clipboard. Is a clipboard tool available?")
        logger.error(f"[{pendulum.now().to_iso8601_string()}] Clipboard copy failed: {e}\n")
        return False

    if timeout > 0:
        atexit.register(clear_clipboard, text)

    print(" Password copied to clipboard!", flush=True)
    return True


def hold_clipboard(text: str, timeout: int = CLIPBOARD_TIMEOUT) -> None:
    """
    Block until the user presses Enter or timeout seconds pass, then clear.

    The wait happens in the calling thread, so a one-shot command really
    does clear the clipboard before it exits.
    """
    if timeout <= 0:
        return

    pressed = threading.Event()

    def wait_for_enter():
        try:
            input()
        except EOFError:
            return  # no terminal, fall back to the timeout
        pressed.set()

    print(f" Press Enter to clear it now (auto-clears in {timeout}s)...", flush=True)
    threading.Thread(target=wait_for_enter, daemon=True).start()
    pressed.wait(timeout)

    clear_clipboard(text)
    print(" Clipboard cleared.")


def clear_clipboard(text: str) -> None:
    """Empty the clipboard, unless the user has copied something else since."""
    try:
        if pyperclip.paste() == text:
            pyperclip.copy("")
    except pyperclip.PyperclipException as e:
        logger.error(f"[{pendulum.now().to_iso8601_string()}] Clipboard clear failed: {e}\n")

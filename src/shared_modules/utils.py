from contextlib import contextmanager
from typing import Generator

from loguru import logger


def safe_str(val) -> str:
    """
    Gibt immer einen String zurück, auch wenn val None oder numerisch ist.
    """
    return "" if val is None else str(val)


@contextmanager
def log_exceptions(msg: str, continue_on_error: bool = True) -> Generator[None, None, None]:
    """
    Context-Manager für das Logging von Ausnahmen.
    Loggt eine Fehlermeldung und entscheidet, ob die Exception weitergereicht wird.

    Args:
        msg (str): Nachricht für das Logging im Fehlerfall.
        continue_on_error (bool): Bei False wird die Exception erneut ausgelöst, ansonsten nur geloggt.

    Beispiel:
        with log_exceptions("Fehler beim Erzeugen des Payloads"):
            factory.create_payload(request)
    """
    try:
        yield
    except Exception as e:
        logger.error(f"{msg}: {e}")
        if not continue_on_error:
            raise

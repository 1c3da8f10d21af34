from __future__ import annotations

import logging
from typing import Any, Dict, Iterator, List, Optional, Sequence, Union

_LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


# PUBLIC_INTERFACE
def data_envelope(data: Union[Sequence[Any], Iterator[Any], Any]) -> Dict[str, Any]:
    """
    Wrap a payload in the standard success envelope: {"data": ...}.

    Iterators and tuples are materialized as lists; anything else (a single
    model, a dict, a list) is passed through.
    """
    if isinstance(data, (Iterator, tuple)):
        materialized: List[Any] = list(data)
        return {"data": materialized}
    return {"data": data}


# PUBLIC_INTERFACE
def error_body(error: str, message: str, detail: Optional[Any] = None) -> Dict[str, Any]:
    """
    Build the standard failure body.

    Returns:
        Dict with keys: error, message, detail. Clients show `message` to users.
    """
    return {
        "error": error,
        "message": message,
        "detail": message if detail is None else detail,
    }


# PUBLIC_INTERFACE
def configure_logging(level: str = "INFO") -> None:
    """
    Install a single stream handler on the package logger.

    Safe to call more than once (e.g. one app per test): the handler is only
    added the first time, the level is always updated.
    """
    logger = logging.getLogger("notekeeper")
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    if not any(getattr(h, "_notekeeper", False) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_LOG_FORMAT))
        handler._notekeeper = True  # type: ignore[attr-defined]
        logger.addHandler(handler)
    # Records are written once, by the handler above
    logger.propagate = False

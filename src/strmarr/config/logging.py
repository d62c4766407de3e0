"""Logging setup for the Strmarr service."""

from __future__ import annotations

import logging

# httpx logs every request at INFO, including the credential-bearing query string
_NOISY_LOGGERS = ("httpx", "httpcore")


def configure_logging(*, level: int | str = logging.INFO, force: bool = False) -> None:
    """Configure the root logger for container output.

    Timestamps carry the date because passes run hourly for days on end.
    Transport libraries are held at WARNING so source URLs (and the API key
    in their query) only appear through Strmarr's own redacted messages.
    """

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        force=force,
    )
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

"""Client construction from environment settings."""

from __future__ import annotations

import logging

from apiclient.config import ClientConfig, PrepareHook, Settings, Validator, get_settings
from apiclient.core import Client, require_success
from apiclient.core.codecs import Decoder
from apiclient.core.request import identity
from apiclient.logging import configure_logging
from apiclient.transport import HttpxTransport, Transport


def create_client(
    settings: Settings | None = None,
    *,
    validate: Validator = require_success,
    decoder: Decoder | None = None,
    prepare: PrepareHook = identity,
    transport: Transport | None = None,
    logger: logging.Logger | None = None,
    setup_logging: bool = False,
) -> Client:
    """Build a ``Client`` wired to an httpx transport using ``settings``.

    With ``setup_logging`` the root logger is configured at ``settings.log_level``,
    which suits scripts and services that own the process.
    """

    settings = settings or get_settings()
    if setup_logging:
        configure_logging(settings.log_level)

    config = ClientConfig.from_settings(settings, validate=validate, decoder=decoder, prepare=prepare)
    transport = transport or HttpxTransport(
        timeout=settings.timeout_seconds,
        verify=settings.verify_tls,
        follow_redirects=settings.follow_redirects,
    )
    return Client(config, transport, logger=logger)

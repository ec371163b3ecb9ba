# Copyright 2026 Seth Bang
# SPDX-License-Identifier: Apache-2.0
"""
Named and dynamic client creation.

Named clients are registered once at startup and shared: every
``create_client(name)`` returns the same handle until it is closed, after
which the next call builds a replacement. Dynamic clients are built from
caller-supplied options, are never pooled, and belong to the caller, who
must close them (``async with`` is the usual way).

Example:
    >>> factory = ClientFactory()
    >>> factory.register("default", ClientOptions(api_token=token))
    >>> client = factory.create_client("default")
    >>>
    >>> async with factory.create_dynamic_client(
    ...     ClientOptions(api_token=tenant_token)
    ... ) as tenant_client:
    ...     await tenant_client.dns.list_records(zone_id)
"""

from __future__ import annotations

import logging

import httpx

from ..encoding.paths import require_identifier
from ..exceptions import ConfigurationError, InvalidArgumentError
from ..observability.collector import MetricsCollector
from .api_client import DYNAMIC_CLIENT_NAME, ApiClient
from .options import ClientOptions, ensure_valid

logger = logging.getLogger(__name__)


class ClientFactory:
    """
    Registry of named client options and creator of client handles.

    Args:
        transport: Optional httpx transport shared by every handle this
            factory creates (mainly for tests).
        metrics: Optional metrics collector shared by every handle.
    """

    def __init__(
        self,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        metrics: MetricsCollector | None = None,
    ):
        self._transport = transport
        self._metrics = metrics
        self._registrations: dict[str, ClientOptions] = {}
        self._clients: dict[str, ApiClient] = {}

    @property
    def registered_names(self) -> list[str]:
        """Names of every registered client, in registration order."""
        return list(self._registrations)

    def register(self, name: str, options: ClientOptions) -> None:
        """
        Register options under a client name.

        Options are validated now, not on first use.

        Raises:
            InvalidArgumentError: If the name is blank or options is None.
            ConfigurationError: If the options are invalid or the name is
                already registered.
        """
        require_identifier("name", name)
        if options is None:
            raise InvalidArgumentError("options must not be None", argument="options")
        if name in self._registrations:
            raise ConfigurationError(
                f"Client '{name}' is already registered", client_name=name
            )

        ensure_valid(name, options)
        self._registrations[name] = options
        logger.debug(f"Registered client '{name}'")

    def create_client(self, name: str) -> ApiClient:
        """
        Return the shared handle for a registered client.

        The handle is created on first use and cached. If it has been
        closed, a new one replaces it.

        Raises:
            InvalidArgumentError: If the name is blank.
            ConfigurationError: If no client is registered under the name.
        """
        require_identifier("name", name)
        options = self._registrations.get(name)
        if options is None:
            raise ConfigurationError(
                f"No client is registered under the name '{name}'", client_name=name
            )

        client = self._clients.get(name)
        if client is None or client.closed:
            client = ApiClient(
                options, name, transport=self._transport, metrics=self._metrics
            )
            self._clients[name] = client
        return client

    def create_dynamic_client(self, options: ClientOptions) -> ApiClient:
        """
        Build a new, caller-owned handle from explicit options.

        Two calls with equal options return two distinct handles, each with
        its own transport and its own rate-limit state.

        Raises:
            InvalidArgumentError: If options is None.
            ConfigurationError: If the options are invalid.
        """
        if options is None:
            raise InvalidArgumentError("options must not be None", argument="options")
        return ApiClient(
            options,
            DYNAMIC_CLIENT_NAME,
            transport=self._transport,
            metrics=self._metrics,
        )

    async def aclose(self) -> None:
        """Close every named handle. Dynamic handles stay with their owners."""
        clients = list(self._clients.values())
        self._clients.clear()
        for client in clients:
            await client.aclose()

    async def __aenter__(self) -> ClientFactory:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()


__all__ = ["ClientFactory"]

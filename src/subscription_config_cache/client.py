"""Cliente HTTP para o endpoint de configuração de assinaturas."""

import asyncio
import logging
from typing import Any

import httpx

from .config import SubscriptionConfigSettings
from .exceptions import SERVICE_UNAVAILABLE_CODE, ServiceUnavailableError, UpstreamFetchError

logger = logging.getLogger(__name__)

CONFIGURATION_PATH = "/v1/subscription/configuration"


class SubscriptionConfigClient:
    """Busca a configuração de assinaturas/doações via HTTP.

    Usa httpx.AsyncClient criado sob demanda. Não faz retry: falhas são
    convertidas para a hierarquia de exceções do pacote e propagadas.

    Attributes:
        base_url: URL base do servidor
        timeout: Timeout das requisições em segundos
    """

    def __init__(self, base_url: str | None = None, timeout: float | None = None) -> None:
        """Inicializa o cliente.

        Args:
            base_url: URL base (usa env vars se não fornecido)
            timeout: Timeout HTTP (usa env vars se não fornecido)
        """
        self._base_url = SubscriptionConfigSettings.resolve_base_url(base_url)
        self._timeout = SubscriptionConfigSettings.resolve_timeout(timeout)
        self._async_client: httpx.AsyncClient | None = None
        # asyncio.Lock é criado lazy para evitar "no current event loop" em Python 3.10+
        self._async_client_lock: asyncio.Lock | None = None

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def timeout(self) -> float:
        return self._timeout

    def _get_async_lock(self) -> asyncio.Lock:
        if self._async_client_lock is None:
            self._async_client_lock = asyncio.Lock()
        return self._async_client_lock

    async def _get_async_client(self) -> httpx.AsyncClient:
        """Obtém ou cria cliente HTTP assíncrono (double-checked locking)."""
        if self._async_client is None:
            async with self._get_async_lock():
                if self._async_client is None:
                    self._async_client = httpx.AsyncClient(
                        base_url=self._base_url,
                        timeout=self._timeout,
                    )
        return self._async_client

    async def fetch_configuration(self) -> dict[str, Any]:
        """Busca a configuração remota.

        Returns:
            Payload JSON decodificado

        Raises:
            ServiceUnavailableError: Se o servidor responder 501
            UpstreamFetchError: Para qualquer outra falha de rede ou resposta
        """
        try:
            client = await self._get_async_client()
            response = await client.get(CONFIGURATION_PATH)
        except httpx.HTTPError as e:
            logger.warning(f"Erro de transporte ao buscar configuração: {e}")
            raise UpstreamFetchError(f"Falha ao buscar configuração: {e}") from e

        if response.status_code == SERVICE_UNAVAILABLE_CODE:
            raise ServiceUnavailableError("Doações desabilitadas pelo servidor")

        if not 200 <= response.status_code < 300:
            logger.warning(f"Resposta inesperada do servidor: {response.status_code}")
            raise UpstreamFetchError(
                f"Resposta inesperada do servidor: {response.status_code}",
                code=response.status_code,
            )

        try:
            payload = response.json()
        except ValueError as e:
            raise UpstreamFetchError(f"Resposta inválida do servidor: {e}", code=response.status_code) from e

        if not isinstance(payload, dict):
            raise UpstreamFetchError("Configuração deve ser um objeto JSON", code=response.status_code)
        return payload

    async def aclose(self) -> None:
        """Fecha o cliente HTTP."""
        if self._async_client is not None:
            await self._async_client.aclose()
            self._async_client = None

    async def __aenter__(self) -> "SubscriptionConfigClient":
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.aclose()

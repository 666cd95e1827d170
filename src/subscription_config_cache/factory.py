"""Factory para montar o cache de configuração a partir do ambiente."""

import logging
from collections.abc import Callable, Mapping
from typing import Any

from .client import SubscriptionConfigClient
from .config import env_feature_check
from .controller import SubscriptionConfigCache
from .metrics import ConfigCacheMetrics

logger = logging.getLogger(__name__)


def create_subscription_config_cache(
    base_url: str | None = None,
    timeout: float | None = None,
    is_feature_enabled: Callable[[], bool] | None = None,
    hydrate_sink: Callable[[Mapping[str, Any]], None] | None = None,
    metrics: ConfigCacheMetrics | None = None,
) -> tuple[SubscriptionConfigCache, SubscriptionConfigClient]:
    """Cria o cliente HTTP e o controlador do cache já conectados.

    URL e timeout seguem a precedência de ``SubscriptionConfigSettings``
    (argumento explícito, variável de ambiente, default). Sem
    ``is_feature_enabled``, usa ``DONATIONS_ENABLED``.

    Args:
        base_url: URL base do servidor
        timeout: Timeout HTTP em segundos
        is_feature_enabled: Check síncrono de habilitação local
        hydrate_sink: Destino da visão derivada em ``maybe_refresh``
        metrics: Coletor de métricas

    Returns:
        Tupla (cache, cliente). Quem chama deve fechar o cliente com ``aclose()``.

    Example:
        ```python
        cache, client = create_subscription_config_cache(metrics=OpenTelemetryMetrics())
        async with client:
            amounts = await cache.get_donation_amounts()
        ```
    """
    client = SubscriptionConfigClient(base_url=base_url, timeout=timeout)
    cache = SubscriptionConfigCache.from_client(
        client,
        is_feature_enabled=is_feature_enabled or env_feature_check(),
        hydrate_sink=hydrate_sink,
        metrics=metrics,
    )
    logger.debug(f"Cache de configuração criado para {client.base_url}")
    return cache, client

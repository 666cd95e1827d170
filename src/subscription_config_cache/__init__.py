"""subscription-config-cache: cache em memória da configuração de doações.

Cache com TTL de 1 hora, deduplicação de fetches concorrentes e latch
de desabilitação pelo servidor.

Uso básico:
    ```python
    from subscription_config_cache import SubscriptionConfigCache, SubscriptionConfigClient

    async with SubscriptionConfigClient() as client:
        cache = SubscriptionConfigCache.from_client(client)

        config = await cache.get_configuration()
        amounts = await cache.get_donation_amounts()

        if cache.is_feature_disabled_by_server():
            ...
    ```

Com métricas OpenTelemetry:
    ```python
    from subscription_config_cache import OpenTelemetryMetrics

    cache = SubscriptionConfigCache.from_client(client, metrics=OpenTelemetryMetrics())
    ```
"""

__version__ = "0.1.0"

# Cliente HTTP
from .client import SubscriptionConfigClient

# Configuração
from .config import SubscriptionConfigSettings, env_feature_check

# Controlador
from .controller import CacheEntry, SubscriptionConfigCache

# Deduplicação
from .deduplication import TaskDeduplicator

# Factory
from .factory import create_subscription_config_cache

# Exceções
from .exceptions import (
    FeatureDisabledError,
    ServiceUnavailableError,
    SubscriptionConfigError,
    UpstreamFetchError,
)

# Métricas
from .metrics import (
    ConfigCacheMetrics,
    ConfigCacheStats,
    InMemoryMetrics,
    NoOpMetrics,
    OpenTelemetryMetrics,
)

# Visões derivadas
from .views import PaymentMethod, filter_by_payment_methods, filter_donation_amounts

__all__ = [
    # Controlador
    "SubscriptionConfigCache",
    "CacheEntry",
    "create_subscription_config_cache",
    # Cliente HTTP
    "SubscriptionConfigClient",
    # Configuração
    "SubscriptionConfigSettings",
    "env_feature_check",
    # Deduplicação
    "TaskDeduplicator",
    # Visões derivadas
    "PaymentMethod",
    "filter_by_payment_methods",
    "filter_donation_amounts",
    # Métricas
    "ConfigCacheMetrics",
    "ConfigCacheStats",
    "NoOpMetrics",
    "InMemoryMetrics",
    "OpenTelemetryMetrics",
    # Exceções
    "SubscriptionConfigError",
    "FeatureDisabledError",
    "UpstreamFetchError",
    "ServiceUnavailableError",
]

"""Cache com expiração para a configuração de assinaturas/doações.

Combina três mecanismos:
- expiração por tempo (TTL fixo de 1 hora)
- deduplicação de chamadas concorrentes durante um cache miss
- latch de desabilitação que, uma vez disparado, impede qualquer novo fetch

A desabilitação local e a do servidor são tratadas de forma assimétrica:
o check local é reavaliado a cada chamada, enquanto o latch é permanente
para a vida da instância e guarda o motivo (``"local"`` ou ``"server"``).
"""

import logging
import time
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass
from typing import Any

from .config import SubscriptionConfigSettings, env_feature_check
from .deduplication import TaskDeduplicator
from .exceptions import SERVICE_UNAVAILABLE_CODE, FeatureDisabledError, ServiceUnavailableError
from .metrics import ConfigCacheMetrics, NoOpMetrics
from .views import filter_donation_amounts

logger = logging.getLogger(__name__)

ConfigPayload = dict[str, Any]

REASON_LOCAL = "local"
REASON_SERVER = "server"


@dataclass(frozen=True)
class CacheEntry:
    """Valor cacheado e seu instante de expiração (epoch em segundos)."""

    value: ConfigPayload
    expires_at: float


class SubscriptionConfigCache:
    """Fonte única da configuração de assinaturas em memória.

    Deve ser criada uma vez por processo e injetada em quem precisa da
    configuração. Não há reset: o latch de desabilitação só vai de
    ``False`` para ``True``.

    Exemplo:
        ```python
        client = SubscriptionConfigClient()
        cache = SubscriptionConfigCache.from_client(client, hydrate_sink=store.hydrate)

        config = await cache.get_configuration()
        amounts = await cache.get_donation_amounts()
        await cache.maybe_refresh()
        ```
    """

    def __init__(
        self,
        fetch_configuration: Callable[[], Awaitable[ConfigPayload]],
        is_feature_enabled: Callable[[], bool],
        hydrate_sink: Callable[[Mapping[str, Any]], None] | None = None,
        metrics: ConfigCacheMetrics | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        """Inicializa o controlador.

        Args:
            fetch_configuration: Função async que busca a configuração remota
            is_feature_enabled: Check síncrono de habilitação local
            hydrate_sink: Destino da visão derivada em ``maybe_refresh``
            metrics: Coletor de métricas (NoOpMetrics se não fornecido)
            clock: Relógio em segundos (epoch)
        """
        self._fetch_configuration = fetch_configuration
        self._is_feature_enabled = is_feature_enabled
        self._hydrate_sink = hydrate_sink
        self._metrics: ConfigCacheMetrics = metrics or NoOpMetrics()
        self._clock = clock

        self._entry: CacheEntry | None = None
        self._disabled_reason: str | None = None
        self._dedup: TaskDeduplicator[ConfigPayload] = TaskDeduplicator(
            "get_configuration", self._load_configuration
        )

    @classmethod
    def from_client(
        cls,
        client: Any,
        is_feature_enabled: Callable[[], bool] | None = None,
        hydrate_sink: Callable[[Mapping[str, Any]], None] | None = None,
        metrics: ConfigCacheMetrics | None = None,
    ) -> "SubscriptionConfigCache":
        """Cria o controlador a partir de um ``SubscriptionConfigClient``.

        O ciclo de vida do cliente continua sendo responsabilidade de quem chama.
        Sem ``is_feature_enabled``, usa a variável de ambiente ``DONATIONS_ENABLED``.
        """
        return cls(
            fetch_configuration=client.fetch_configuration,
            is_feature_enabled=is_feature_enabled or env_feature_check(),
            hydrate_sink=hydrate_sink,
            metrics=metrics,
        )

    @property
    def disabled_reason(self) -> str | None:
        """Motivo do disparo do latch, ou None se ainda habilitado."""
        return self._disabled_reason

    def is_feature_disabled_by_server(self) -> bool:
        """True se o latch foi disparado ou se o check local reporta desabilitado."""
        return self._disabled_reason is not None or not self._is_feature_enabled()

    def is_refresh_needed(self) -> bool:
        """True se não há entrada ou se ela já expirou."""
        return self._entry is None or self._entry.expires_at <= self._clock()

    def peek_expiry(self) -> float | None:
        """Expiração da entrada atual, sem efeitos colaterais."""
        return self._entry.expires_at if self._entry is not None else None

    async def get_configuration(self) -> ConfigPayload:
        """Retorna a configuração, buscando-a se necessário.

        Chamadas concorrentes compartilham a mesma execução.

        Raises:
            FeatureDisabledError: Se desabilitado localmente ou pelo servidor
            UpstreamFetchError: Se o fetch falhar
        """
        return await self._dedup.run()

    async def get_donation_amounts(self) -> dict[str, Mapping[str, Any]]:
        """Moedas da configuração que aceitam cartão ou PayPal."""
        return filter_donation_amounts(await self.get_configuration())

    async def maybe_refresh(self) -> None:
        """Atualiza o cache em background e entrega a visão derivada ao sink.

        Não faz nada se desabilitado ou se a entrada atual ainda é válida.
        Falhas do fetch são propagadas.
        """
        if self.is_feature_disabled_by_server():
            return
        if not self.is_refresh_needed():
            return

        amounts = await self.get_donation_amounts()
        if self._hydrate_sink is not None:
            self._hydrate_sink(amounts)

    def _trip_latch(self, reason: str) -> None:
        if self._disabled_reason is None:
            logger.info(f"Doações desabilitadas ({reason}); novos fetches serão ignorados")
            self._disabled_reason = reason
            self._metrics.record_disabled(reason)

    async def _load_configuration(self) -> ConfigPayload:
        if not self._is_feature_enabled():
            self._trip_latch(REASON_LOCAL)
            raise FeatureDisabledError("Doações desabilitadas localmente", reason=REASON_LOCAL)

        if self._disabled_reason is not None:
            raise FeatureDisabledError("Doações desabilitadas", reason=self._disabled_reason)

        if self.is_refresh_needed():
            self._entry = None

        if self._entry is not None:
            logger.debug("Cache hit para configuração de assinaturas")
            self._metrics.record_hit()
            return self._entry.value

        logger.info("Atualizando cache de configuração")
        started = time.perf_counter()
        try:
            value = await self._fetch_configuration()
        except ServiceUnavailableError as e:
            self._metrics.record_error(e)
            if e.code == SERVICE_UNAVAILABLE_CODE:
                self._trip_latch(REASON_SERVER)
            raise
        except Exception as e:
            self._metrics.record_error(e)
            raise

        self._entry = CacheEntry(
            value=value,
            expires_at=self._clock() + SubscriptionConfigSettings.CACHE_TTL_SECONDS,
        )
        self._metrics.record_miss(time.perf_counter() - started)
        return value

"""Métricas do cache de configuração usando OpenTelemetry."""

import logging
from dataclasses import dataclass, field
from threading import Lock
from typing import Protocol

from opentelemetry import metrics as otel_metrics

logger = logging.getLogger(__name__)


class ConfigCacheMetrics(Protocol):
    """Protocol para coletores de métricas."""

    def record_hit(self) -> None:
        """Registra cache hit."""
        ...

    def record_miss(self, latency: float) -> None:
        """Registra cache miss seguido de fetch bem sucedido."""
        ...

    def record_error(self, error: Exception) -> None:
        """Registra falha do fetch."""
        ...

    def record_disabled(self, reason: str) -> None:
        """Registra o disparo do latch de desabilitação."""
        ...


class NoOpMetrics:
    """Coletor de métricas que não faz nada (default)."""

    def record_hit(self) -> None:
        pass

    def record_miss(self, latency: float) -> None:
        pass

    def record_error(self, error: Exception) -> None:
        pass

    def record_disabled(self, reason: str) -> None:
        pass


@dataclass
class ConfigCacheStats:
    """Estatísticas agregadas do cache."""

    hits: int = 0
    misses: int = 0
    errors: int = 0
    disabled_reason: str | None = None
    refresh_latencies: list[float] = field(default_factory=list)

    @property
    def total_operations(self) -> int:
        return self.hits + self.misses

    @property
    def hit_ratio(self) -> float:
        total = self.total_operations
        return self.hits / total if total > 0 else 0.0

    @property
    def avg_refresh_latency_ms(self) -> float:
        if not self.refresh_latencies:
            return 0.0
        return sum(self.refresh_latencies) / len(self.refresh_latencies) * 1000


class OpenTelemetryMetrics:
    """Coletor de métricas usando OpenTelemetry.

    Métricas exportadas:
    - subscription_config.hits (counter)
    - subscription_config.misses (counter)
    - subscription_config.errors (counter)
    - subscription_config.disabled (counter)
    - subscription_config.refresh_latency (histogram): duração do fetch em segundos
    """

    def __init__(self, meter_name: str = "subscription_config_cache") -> None:
        """Inicializa métricas OpenTelemetry.

        Args:
            meter_name: Nome do meter para agrupar métricas
        """
        meter = otel_metrics.get_meter(meter_name)

        self._hits_counter = meter.create_counter(
            "subscription_config.hits",
            description="Número de cache hits",
            unit="1",
        )
        self._misses_counter = meter.create_counter(
            "subscription_config.misses",
            description="Número de cache misses",
            unit="1",
        )
        self._errors_counter = meter.create_counter(
            "subscription_config.errors",
            description="Número de falhas ao buscar a configuração",
            unit="1",
        )
        self._disabled_counter = meter.create_counter(
            "subscription_config.disabled",
            description="Disparos do latch de desabilitação",
            unit="1",
        )
        self._latency_histogram = meter.create_histogram(
            "subscription_config.refresh_latency",
            description="Duração do fetch da configuração",
            unit="s",
        )

    def record_hit(self) -> None:
        """Registra cache hit."""
        self._hits_counter.add(1)

    def record_miss(self, latency: float) -> None:
        """Registra cache miss."""
        self._misses_counter.add(1)
        self._latency_histogram.record(latency)

    def record_error(self, error: Exception) -> None:
        """Registra falha do fetch."""
        self._errors_counter.add(1, {"error_type": type(error).__name__})

    def record_disabled(self, reason: str) -> None:
        """Registra o disparo do latch."""
        self._disabled_counter.add(1, {"reason": reason})


class InMemoryMetrics:
    """Coletor de métricas em memória.

    Útil para desenvolvimento e testes.

    Attributes:
        max_samples: Máximo de amostras de latência mantidas
    """

    def __init__(self, max_samples: int = 1000) -> None:
        self._max_samples = max_samples
        self._lock = Lock()
        self._stats = ConfigCacheStats()

    def record_hit(self) -> None:
        with self._lock:
            self._stats.hits += 1

    def record_miss(self, latency: float) -> None:
        with self._lock:
            self._stats.misses += 1
            self._stats.refresh_latencies.append(latency)
            if len(self._stats.refresh_latencies) > self._max_samples:
                del self._stats.refresh_latencies[: len(self._stats.refresh_latencies) - self._max_samples]

    def record_error(self, error: Exception) -> None:
        with self._lock:
            self._stats.errors += 1

    def record_disabled(self, reason: str) -> None:
        with self._lock:
            self._stats.disabled_reason = reason

    def get_stats(self) -> ConfigCacheStats:
        """Retorna uma cópia das estatísticas."""
        with self._lock:
            return ConfigCacheStats(
                hits=self._stats.hits,
                misses=self._stats.misses,
                errors=self._stats.errors,
                disabled_reason=self._stats.disabled_reason,
                refresh_latencies=self._stats.refresh_latencies.copy(),
            )

    def reset(self) -> None:
        """Reseta todas as estatísticas."""
        with self._lock:
            self._stats = ConfigCacheStats()

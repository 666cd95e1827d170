"""Testes de integração: cliente HTTP + controlador do cache."""

import asyncio

import httpx
import pytest

from subscription_config_cache import (
    FeatureDisabledError,
    InMemoryMetrics,
    ServiceUnavailableError,
    SubscriptionConfigCache,
    SubscriptionConfigClient,
)


def build_client(handler) -> SubscriptionConfigClient:
    client = SubscriptionConfigClient(base_url="http://test")
    client._async_client = httpx.AsyncClient(base_url="http://test", transport=httpx.MockTransport(handler))
    return client


class TestSubscriptionConfigIntegration:
    """Fluxo completo com transporte HTTP simulado."""

    @pytest.mark.asyncio
    async def test_concurrent_callers_share_one_request(self, clock, sample_config) -> None:
        """Vários chamadores concorrentes geram uma única requisição HTTP."""
        request_count = 0

        async def handler(request: httpx.Request) -> httpx.Response:
            nonlocal request_count
            request_count += 1
            await asyncio.sleep(0.05)
            return httpx.Response(200, json=sample_config)

        async with build_client(handler) as client:
            metrics = InMemoryMetrics()
            cache = SubscriptionConfigCache(
                fetch_configuration=client.fetch_configuration,
                is_feature_enabled=lambda: True,
                metrics=metrics,
                clock=clock,
            )

            results = await asyncio.gather(*[cache.get_donation_amounts() for _ in range(8)])

        assert request_count == 1
        assert all(set(r) == {"usd", "brl"} for r in results)
        assert metrics.get_stats().misses == 1

    @pytest.mark.asyncio
    async def test_server_disable_is_permanent(self, clock) -> None:
        """Depois de um 501, nenhuma nova requisição é feita."""
        request_count = 0

        def handler(request: httpx.Request) -> httpx.Response:
            nonlocal request_count
            request_count += 1
            return httpx.Response(501)

        async with build_client(handler) as client:
            cache = SubscriptionConfigCache(
                fetch_configuration=client.fetch_configuration,
                is_feature_enabled=lambda: True,
                clock=clock,
            )

            with pytest.raises(ServiceUnavailableError):
                await cache.get_configuration()

            clock.advance(24 * 3600)
            with pytest.raises(FeatureDisabledError):
                await cache.get_configuration()
            await cache.maybe_refresh()

        assert request_count == 1
        assert cache.is_feature_disabled_by_server()

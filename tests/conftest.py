"""Configuração de fixtures para testes."""

import pytest


class FakeClock:
    """Relógio controlável para testes de TTL."""

    def __init__(self, now: float = 1_700_000_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    """Relógio fixo que só avança quando pedido."""
    return FakeClock()


@pytest.fixture
def sample_config() -> dict:
    """Configuração de exemplo com três moedas."""
    return {
        "currencies": {
            "usd": {"minimum": {"1": 3}, "supportedPaymentMethods": ["CARD", "PAYPAL"]},
            "eur": {"minimum": {"1": 3}, "supportedPaymentMethods": ["SEPA_DEBIT"]},
            "brl": {"minimum": {"1": 15}, "supportedPaymentMethods": ["PAYPAL"]},
        },
        "levels": {"500": {"name": "Boost"}},
    }

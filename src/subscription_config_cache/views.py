"""Visões derivadas da configuração de assinatura."""

from collections.abc import Iterable, Mapping
from enum import Enum
from typing import Any


class PaymentMethod(str, Enum):
    """Métodos de pagamento anunciados pelo servidor."""

    CARD = "CARD"
    PAYPAL = "PAYPAL"
    SEPA_DEBIT = "SEPA_DEBIT"
    IDEAL = "IDEAL"


DONATION_PAYMENT_METHODS = frozenset({PaymentMethod.CARD, PaymentMethod.PAYPAL})


def filter_by_payment_methods(
    currencies: Mapping[str, Mapping[str, Any]],
    allowed: Iterable[str],
) -> dict[str, Mapping[str, Any]]:
    """Retorna as moedas cujos métodos suportados intersectam ``allowed``.

    Args:
        currencies: Mapeamento código da moeda -> descritor
        allowed: Métodos aceitos

    Returns:
        Novo dict apenas com as moedas elegíveis
    """
    accepted = {str(method.value if isinstance(method, Enum) else method) for method in allowed}
    return {
        code: descriptor
        for code, descriptor in currencies.items()
        if accepted.intersection(_supported_methods(descriptor))
    }


def _supported_methods(descriptor: Mapping[str, Any]) -> tuple[str, ...]:
    """Métodos suportados de uma moeda; string isolada vira um único método."""
    methods = descriptor.get("supportedPaymentMethods") or ()
    if isinstance(methods, str):
        return (methods,)
    return tuple(methods)


def filter_donation_amounts(config: Mapping[str, Any]) -> dict[str, Mapping[str, Any]]:
    """Moedas da configuração que aceitam cartão ou PayPal."""
    return filter_by_payment_methods(config.get("currencies") or {}, DONATION_PAYMENT_METHODS)

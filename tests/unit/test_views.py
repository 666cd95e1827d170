"""Testes para as visões derivadas."""

from subscription_config_cache.views import (
    DONATION_PAYMENT_METHODS,
    PaymentMethod,
    filter_by_payment_methods,
    filter_donation_amounts,
)


class TestFilterDonationAmounts:
    """Testes para filter_donation_amounts."""

    def test_keeps_card_and_paypal(self) -> None:
        """{A: card, B: banco, C: paypal} deve resultar em {A, C}."""
        config = {
            "currencies": {
                "A": {"supportedPaymentMethods": ["CARD"]},
                "B": {"supportedPaymentMethods": ["SEPA_DEBIT"]},
                "C": {"supportedPaymentMethods": ["PAYPAL"]},
            }
        }

        assert set(filter_donation_amounts(config)) == {"A", "C"}

    def test_preserves_descriptors(self, sample_config) -> None:
        """Os descritores devem ser mantidos sem alteração."""
        amounts = filter_donation_amounts(sample_config)
        assert amounts["usd"] is sample_config["currencies"]["usd"]

    def test_missing_currencies(self) -> None:
        """Sem moedas, retorna vazio."""
        assert filter_donation_amounts({}) == {}

    def test_single_string_payment_method(self) -> None:
        """Método informado como string isolada é tratado como um método."""
        config = {
            "currencies": {
                "usd": {"supportedPaymentMethods": "CARD"},
                "eur": {"supportedPaymentMethods": "SEPA_DEBIT"},
                "pln": {"supportedPaymentMethods": "PA"},
            }
        }

        assert set(filter_donation_amounts(config)) == {"usd"}

    def test_missing_payment_methods_excluded(self) -> None:
        """Moeda sem métodos suportados é excluída."""
        config = {"currencies": {"jpy": {"minimum": {"1": 300}}}}
        assert filter_donation_amounts(config) == {}


class TestFilterByPaymentMethods:
    """Testes para filter_by_payment_methods."""

    def test_accepts_plain_strings(self) -> None:
        """Deve aceitar métodos como strings."""
        currencies = {
            "eur": {"supportedPaymentMethods": ["SEPA_DEBIT", "IDEAL"]},
            "usd": {"supportedPaymentMethods": ["CARD"]},
        }

        assert set(filter_by_payment_methods(currencies, ["IDEAL"])) == {"eur"}

    def test_accepts_enum_members(self) -> None:
        """Deve aceitar membros de PaymentMethod."""
        currencies = {"eur": {"supportedPaymentMethods": ["SEPA_DEBIT"]}}

        assert set(filter_by_payment_methods(currencies, [PaymentMethod.SEPA_DEBIT])) == {"eur"}

    def test_empty_allowed_set(self) -> None:
        """Sem métodos aceitos, nada passa."""
        currencies = {"usd": {"supportedPaymentMethods": ["CARD"]}}
        assert filter_by_payment_methods(currencies, []) == {}

    def test_donation_methods(self) -> None:
        """Doações aceitam apenas cartão e PayPal."""
        assert DONATION_PAYMENT_METHODS == {PaymentMethod.CARD, PaymentMethod.PAYPAL}

"""Exceções para subscription-config-cache."""

SERVICE_UNAVAILABLE_CODE = 501


class SubscriptionConfigError(Exception):
    """Erro base para operações de configuração de assinatura."""

    pass


class FeatureDisabledError(SubscriptionConfigError):
    """Doações desabilitadas (localmente ou confirmado pelo servidor).

    É terminal para a sessão: o chamador não deve tentar novamente.
    """

    def __init__(self, message: str, reason: str | None = None) -> None:
        self.reason = reason
        super().__init__(message)


class UpstreamFetchError(SubscriptionConfigError):
    """Falha transitória ao buscar a configuração remota.

    O estado do cache não é alterado, então é seguro tentar de novo.
    """

    def __init__(self, message: str, code: int | None = None) -> None:
        self.code = code
        super().__init__(message)


class ServiceUnavailableError(UpstreamFetchError):
    """Servidor desligou a funcionalidade (HTTP 501)."""

    def __init__(self, message: str, code: int = SERVICE_UNAVAILABLE_CODE) -> None:
        super().__init__(message, code=code)

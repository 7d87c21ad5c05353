from __future__ import annotations


class DomainError(Exception):
    """Base para erros de dominio."""


class VendorConfigurationError(DomainError):
    """Configuracao obrigatoria do vendor ausente."""


class VendorApiError(DomainError):
    """Vendor respondeu com status diferente de sucesso."""

    def __init__(self, message: str, *, status_code: int | None = None, body: str | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class VendorCredentialError(VendorApiError):
    """Troca de credencial do vendor falhou."""


class UnrecognizedEnvelopeError(DomainError):
    """Resposta de listagem com formato desconhecido."""


class ValidationFailedError(DomainError):
    """Campos do formulario invalidos."""

    def __init__(self, message: str, *, errors: dict[str, str]):
        super().__init__(message)
        self.errors = errors


class InvalidImageError(DomainError):
    """Arquivo de imagem rejeitado (tipo ou tamanho)."""


class UnsafeRedirectError(DomainError):
    """Destino de redirect SSO nao permitido."""


class AccessDeniedError(DomainError):
    """Usuario sem o papel necessario."""


class InvalidSessionError(DomainError):
    """Token de sessao rejeitado (assinatura, expiracao ou claims)."""

# psifinance/core/errors.py


class PsiFinanceError(Exception):
    """Erro base da aplicação. A mensagem é exibida ao usuário."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class AuthError(PsiFinanceError):
    """Falha de autenticação (credenciais, senha fraca, confirmação divergente)."""


class ValidationError(PsiFinanceError):
    """Campo obrigatório ausente ou valor inválido no formulário."""

# psifinance/core/auth.py
import logging
from typing import Any, Dict, Union

from supabase import Client

from psifinance.config import SITE_URL
from psifinance.core.errors import AuthError

logger = logging.getLogger(__name__)

TAMANHO_MINIMO_SENHA = 6


def get_current_user(supabase_client: Client) -> Union[Any, None]:
    """Retorna o usuário autenticado, ou None se não houver sessão válida."""
    try:
        response = supabase_client.auth.get_user()
    except Exception as e:
        logger.warning("Não foi possível obter o usuário atual: %s", e)
        return None
    if not response:
        return None
    return getattr(response, "user", None)


def tokens_da_sessao(supabase_client: Client) -> Union[Dict[str, str], None]:
    """Tokens atuais do cliente (já renovados, se set_session precisou renovar)."""
    try:
        sessao = supabase_client.auth.get_session()
    except Exception as e:
        logger.warning("Não foi possível ler a sessão atual: %s", e)
        return None
    if not sessao:
        return None
    return {
        "access_token": sessao.access_token,
        "refresh_token": sessao.refresh_token,
    }


def validar_nova_senha(senha: str, confirmacao: str) -> None:
    """Checagens locais feitas antes de qualquer chamada ao Supabase."""
    if senha != confirmacao:
        raise AuthError("As senhas não coincidem!")
    if len(senha or "") < TAMANHO_MINIMO_SENHA:
        raise AuthError(f"A senha deve ter pelo menos {TAMANHO_MINIMO_SENHA} caracteres!")


def sign_in(supabase_client: Client, email: str, password: str) -> Dict[str, str]:
    """Faz login com e-mail e senha e devolve os tokens da sessão."""
    try:
        response = supabase_client.auth.sign_in_with_password({
            "email": email,
            "password": password,
        })
    except Exception as e:
        logger.error("Erro no login de %s: %s", email, e)
        raise AuthError(getattr(e, "message", None) or str(e))

    session = getattr(response, "session", None)
    if not session:
        raise AuthError("Não foi possível iniciar a sessão.")
    return {
        "access_token": session.access_token,
        "refresh_token": session.refresh_token,
    }


def sign_up(supabase_client: Client, nome: str, email: str, password: str, confirmacao: str) -> None:
    """
    Cria a conta com o nome nos metadados do usuário.
    O link de confirmação leva o usuário de volta para o dashboard.
    """
    validar_nova_senha(password, confirmacao)
    try:
        supabase_client.auth.sign_up({
            "email": email,
            "password": password,
            "options": {
                "data": {"nome": nome},
                "email_redirect_to": f"{SITE_URL.rstrip('/')}/dashboard",
            },
        })
    except Exception as e:
        logger.error("Erro ao criar conta para %s: %s", email, e)
        raise AuthError(getattr(e, "message", None) or str(e))


def sign_out(supabase_client: Client) -> None:
    """Encerra a sessão no Supabase."""
    try:
        supabase_client.auth.sign_out()
    except Exception as e:
        logger.error("Erro ao sair: %s", e)
        raise AuthError("Erro ao sair da conta")


def change_password(supabase_client: Client, nova_senha: str, confirmacao: str) -> None:
    """Altera a senha do usuário autenticado."""
    validar_nova_senha(nova_senha, confirmacao)
    try:
        supabase_client.auth.update_user({"password": nova_senha})
    except Exception as e:
        logger.error("Erro ao alterar senha: %s", e)
        raise AuthError("Erro ao alterar senha")

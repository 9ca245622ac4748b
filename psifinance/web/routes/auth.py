# psifinance/web/routes/auth.py
import logging

from flask import Blueprint, session

from psifinance.core import auth
from psifinance.core.errors import AuthError
from psifinance.web.utils import dados_formulario, erro, get_client, resposta

logger = logging.getLogger(__name__)

bp = Blueprint("auth", __name__, url_prefix="/auth")


@bp.route("/login", methods=["POST"])
def login():
    """Login com e-mail e senha; os tokens ficam na sessão do Flask."""
    dados = dados_formulario()
    email = (dados.get("email") or "").strip()
    try:
        tokens = auth.sign_in(get_client(), email, dados.get("password") or "")
    except AuthError as e:
        return erro(e.message, 400, {"email": email})

    session["access_token"] = tokens["access_token"]
    session["refresh_token"] = tokens["refresh_token"]
    logger.info("Login realizado para %s", email)
    return resposta("Login realizado com sucesso!", {"redirect": "/dashboard"})


@bp.route("/signup", methods=["POST"])
def signup():
    """Cria a conta. O usuário confirma pelo e-mail e depois faz login."""
    dados = dados_formulario()
    nome = (dados.get("nome") or "").strip()
    email = (dados.get("email") or "").strip()
    if not nome or not email:
        return erro("Nome e e-mail são obrigatórios.", 400, {"nome": nome, "email": email})
    try:
        auth.sign_up(
            get_client(),
            nome,
            email,
            dados.get("password") or "",
            dados.get("confirmPassword") or "",
        )
    except AuthError as e:
        return erro(e.message, 400, {"nome": nome, "email": email})
    return resposta("Conta criada! Faça login para continuar.", {"email": email}, 201)


@bp.route("/logout", methods=["POST"])
def logout():
    """Encerra a sessão; os tokens saem do cookie mesmo se o Supabase falhar."""
    try:
        if session.get("access_token"):
            auth.sign_out(get_client())
    except AuthError as e:
        logger.warning("Falha ao encerrar sessão no Supabase: %s", e.message)
    finally:
        session.clear()
    return resposta("Você saiu da sua conta.", {"redirect": "/"})

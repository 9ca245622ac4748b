# psifinance/web/utils.py
import functools
import logging
from typing import Any, Dict, List, Union

from flask import g, jsonify, request, session

from psifinance.core import auth, db
from psifinance.core.errors import AuthError, ValidationError

logger = logging.getLogger(__name__)


def resposta(message: Union[str, None] = None, data: Any = None, status: int = 200):
    """Resposta JSON padrão; message é a notificação mostrada ao usuário."""
    return jsonify({"status": "ok", "message": message, "data": data}), status


def erro(message: str, status: int = 400, data: Any = None):
    return jsonify({"status": "error", "message": message, "data": data}), status


def dados_formulario(permitir_lista: bool = False) -> Union[Dict[str, Any], List[Dict[str, Any]]]:
    """
    Aceita o corpo em JSON ou como formulário HTML. O JSON precisa ser um objeto;
    uma lista de objetos só é aceita quando permitir_lista=True (criação em lote).
    """
    dados = request.get_json(silent=True)
    if dados is None:
        return request.form.to_dict()
    if isinstance(dados, dict):
        return dados
    if permitir_lista and isinstance(dados, list) and all(isinstance(item, dict) for item in dados):
        return dados
    raise ValidationError("Dados do formulário inválidos.")


def _descartar_tokens():
    session.pop("access_token", None)
    session.pop("refresh_token", None)


def _guardar_tokens_renovados(client, access_token: str):
    # Com rotação de refresh token, o par antigo deixa de valer depois da renovação
    tokens = auth.tokens_da_sessao(client)
    if tokens and tokens["access_token"] != access_token:
        session["access_token"] = tokens["access_token"]
        session["refresh_token"] = tokens["refresh_token"]


def get_client():
    """
    Cliente Supabase da requisição, autenticado com os tokens guardados na sessão.
    Se a sessão não puder ser restaurada, os tokens são descartados e a requisição
    segue como anônima.
    """
    if "supabase_client" not in g:
        access_token = session.get("access_token")
        refresh_token = session.get("refresh_token")
        try:
            g.supabase_client = db.get_supabase_client(access_token, refresh_token)
        except AuthError as e:
            logger.warning("Sessão descartada: %s", e.message)
            _descartar_tokens()
            g.supabase_client = db.get_supabase_client()
        else:
            if access_token and refresh_token:
                _guardar_tokens_renovados(g.supabase_client, access_token)
    return g.supabase_client


def usuario_atual():
    """Usuário autenticado da requisição, ou None."""
    if "usuario" not in g:
        g.usuario = None
        if session.get("access_token"):
            client = get_client()
            # get_client pode ter descartado uma sessão vencida
            if session.get("access_token"):
                g.usuario = auth.get_current_user(client)
    return g.usuario


def requer_usuario(view):
    """Escritas sem usuário autenticado respondem 401 sem tocar no banco."""
    @functools.wraps(view)
    def wrapper(*args, **kwargs):
        usuario = usuario_atual()
        if usuario is None:
            return erro("Usuário não autenticado", 401)
        return view(usuario, *args, **kwargs)
    return wrapper

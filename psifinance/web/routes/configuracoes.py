# psifinance/web/routes/configuracoes.py
import logging

from flask import Blueprint

from psifinance.core import auth, db
from psifinance.core.errors import AuthError
from psifinance.core.models import Profile
from psifinance.web.utils import dados_formulario, erro, get_client, requer_usuario, resposta, usuario_atual

logger = logging.getLogger(__name__)

bp = Blueprint("configuracoes", __name__, url_prefix="/configuracoes")


@bp.route("/perfil", methods=["GET"])
def carregar_perfil():
    usuario = usuario_atual()
    if usuario is None:
        return resposta(data=None)
    row = db.get_profile(get_client(), usuario.id)
    if row is None:
        return erro("Erro ao carregar perfil", 500)
    return resposta(data=Profile.from_row(row).to_dict())


@bp.route("/perfil", methods=["PUT"])
@requer_usuario
def salvar_perfil(usuario):
    """Atualização parcial: dados pessoais e as preferências (tema escuro, e-mails)."""
    campos = Profile.patch_from_form(dados_formulario())
    if not db.update_profile(get_client(), usuario.id, campos):
        return erro("Erro ao salvar perfil", 500)
    return resposta("Perfil atualizado com sucesso!", campos)


@bp.route("/senha", methods=["POST"])
@requer_usuario
def alterar_senha(usuario):
    dados = dados_formulario()
    try:
        auth.change_password(get_client(), dados.get("novaSenha") or "", dados.get("confirmarSenha") or "")
    except AuthError as e:
        return erro(e.message, 400)
    return resposta("Senha alterada com sucesso!")


@bp.route("/conta", methods=["DELETE"])
@requer_usuario
def excluir_conta(usuario):
    logger.warning("Exclusão de conta solicitada por %s; ainda não suportada.", usuario.id)
    return erro("Funcionalidade em desenvolvimento", 501)

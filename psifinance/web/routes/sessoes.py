# psifinance/web/routes/sessoes.py
from flask import Blueprint

from psifinance.core import aggregators, db
from psifinance.core.models import Sessao
from psifinance.web.utils import dados_formulario, erro, get_client, requer_usuario, resposta, usuario_atual

bp = Blueprint("sessoes", __name__, url_prefix="/sessoes")


@bp.route("", methods=["GET"])
def listar_sessoes():
    """Sessões com o nome do cliente e a lista de clientes ativos para o formulário."""
    usuario = usuario_atual()
    if usuario is None:
        return resposta(data={"sessoes": [], "clientes": []})

    client = get_client()
    sessoes = db.get_sessoes(client, usuario.id)
    clientes = db.get_clientes_ativos(client, usuario.id)
    return resposta(data={
        "sessoes": aggregators.sessoes_com_cliente(sessoes),
        "clientes": clientes,
    })


@bp.route("", methods=["POST"])
@requer_usuario
def criar_sessao(usuario):
    sessao = Sessao.from_form(dados_formulario())
    if not db.add_sessao(get_client(), sessao.to_payload(usuario.id)):
        return erro("Erro ao criar sessão", 500)
    return resposta("Sessão agendada com sucesso!", status=201)


@bp.route("/<sessao_id>", methods=["PUT"])
@requer_usuario
def atualizar_sessao(usuario, sessao_id):
    sessao = Sessao.from_form(dados_formulario())
    if not db.update_sessao(get_client(), usuario.id, sessao_id, sessao.to_payload(usuario.id)):
        return erro("Erro ao atualizar sessão", 500)
    return resposta("Sessão atualizada com sucesso!")


@bp.route("/<sessao_id>", methods=["DELETE"])
@requer_usuario
def remover_sessao(usuario, sessao_id):
    if not db.delete_sessao(get_client(), usuario.id, sessao_id):
        return erro("Erro ao remover sessão", 500)
    return resposta("Sessão removida com sucesso!")

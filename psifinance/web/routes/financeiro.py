# psifinance/web/routes/financeiro.py
from flask import Blueprint, request

from psifinance.core import aggregators, db
from psifinance.core.models import CATEGORIAS, Transacao, categorias_sugeridas
from psifinance.web.utils import dados_formulario, erro, get_client, requer_usuario, resposta, usuario_atual

bp = Blueprint("financeiro", __name__, url_prefix="/financeiro")


@bp.route("", methods=["GET"])
def listar_transacoes():
    """Histórico de transações e os totais de receitas, despesas e saldo."""
    usuario = usuario_atual()
    transacoes = db.get_transacoes(get_client(), usuario.id) if usuario else []
    return resposta(data={
        "transacoes": aggregators.transacoes_para_exibicao(transacoes),
        "resumo": aggregators.resumo_financeiro(transacoes).to_dict(),
    })


@bp.route("/categorias", methods=["GET"])
def listar_categorias():
    tipo = request.args.get("tipo")
    if tipo:
        return resposta(data=categorias_sugeridas(tipo))
    return resposta(data=CATEGORIAS)


@bp.route("", methods=["POST"])
@requer_usuario
def criar_transacao(usuario):
    transacao = Transacao.from_form(dados_formulario())
    if not db.add_transacao(get_client(), transacao.to_payload(usuario.id)):
        return erro("Erro ao criar transação", 500)
    return resposta("Transação registrada com sucesso!", status=201)


@bp.route("/<transacao_id>", methods=["PUT"])
@requer_usuario
def atualizar_transacao(usuario, transacao_id):
    transacao = Transacao.from_form(dados_formulario())
    if not db.update_transacao(get_client(), usuario.id, transacao_id, transacao.to_payload(usuario.id)):
        return erro("Erro ao atualizar transação", 500)
    return resposta("Transação atualizada com sucesso!")


@bp.route("/<transacao_id>", methods=["DELETE"])
@requer_usuario
def remover_transacao(usuario, transacao_id):
    if not db.delete_transacao(get_client(), usuario.id, transacao_id):
        return erro("Erro ao remover transação", 500)
    return resposta("Transação removida com sucesso!")

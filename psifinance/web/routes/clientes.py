# psifinance/web/routes/clientes.py
from flask import Blueprint

from psifinance.core import db
from psifinance.core.models import Cliente
from psifinance.web.utils import dados_formulario, erro, get_client, requer_usuario, resposta, usuario_atual

bp = Blueprint("clientes", __name__, url_prefix="/clientes")


@bp.route("", methods=["GET"])
def listar_clientes():
    """Clientes ativos, em ordem alfabética."""
    usuario = usuario_atual()
    clientes = db.get_clientes_ativos(get_client(), usuario.id) if usuario else []
    return resposta(data=clientes)


@bp.route("", methods=["POST"])
@requer_usuario
def criar_cliente(usuario):
    """Cria um cliente. Uma lista no corpo cria vários de uma vez."""
    dados = dados_formulario(permitir_lista=True)
    if isinstance(dados, list):
        payloads = [Cliente.from_form(item).to_payload(usuario.id) for item in dados]
        if not db.add_clientes(get_client(), payloads):
            return erro("Erro ao criar clientes", 500)
        return resposta("Clientes criados com sucesso!", status=201)

    cliente = Cliente.from_form(dados)
    if not db.add_cliente(get_client(), cliente.to_payload(usuario.id)):
        return erro("Erro ao criar cliente", 500)
    return resposta("Cliente criado com sucesso!", status=201)


@bp.route("/<cliente_id>", methods=["PUT"])
@requer_usuario
def atualizar_cliente(usuario, cliente_id):
    cliente = Cliente.from_form(dados_formulario())
    if not db.update_cliente(get_client(), usuario.id, cliente_id, cliente.to_payload(usuario.id)):
        return erro("Erro ao atualizar cliente", 500)
    return resposta("Cliente atualizado com sucesso!")


@bp.route("/<cliente_id>", methods=["DELETE"])
@requer_usuario
def remover_cliente(usuario, cliente_id):
    """Remoção lógica: o cliente sai da lista, mas o histórico continua."""
    if not db.desativar_cliente(get_client(), usuario.id, cliente_id):
        return erro("Erro ao remover cliente", 500)
    return resposta("Cliente removido com sucesso!")

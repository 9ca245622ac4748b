# psifinance/web/routes/relatorios.py
import logging

from flask import Blueprint, request, send_file

from psifinance.core import aggregators, charts, db
from psifinance.web.utils import erro, get_client, resposta, usuario_atual

logger = logging.getLogger(__name__)

bp = Blueprint("relatorios", __name__, url_prefix="/relatorios")


def _carregar_resumo() -> aggregators.ResumoRelatorios:
    # Trocar o período refaz a consulta, mas o cálculo usa todo o histórico
    periodo = request.args.get("periodo", aggregators.PERIODO_PADRAO)
    usuario = usuario_atual()
    if usuario is None:
        return aggregators.resumo_relatorios([], [], [], periodo)

    client = get_client()
    clientes = db.get_clientes_ativos(client, usuario.id)
    sessoes = db.get_sessoes(client, usuario.id)
    transacoes = db.get_transacoes(client, usuario.id)
    return aggregators.resumo_relatorios(clientes, sessoes, transacoes, periodo)


@bp.route("", methods=["GET"])
def relatorios():
    return resposta(data=_carregar_resumo().to_dict())


@bp.route("/exportar", methods=["POST"])
def exportar_relatorio():
    # TODO: gerar o arquivo do relatório; hoje só confirma para o usuário
    logger.warning("Exportação de relatório solicitada, mas nenhum arquivo é gerado.")
    return resposta("Relatório exportado com sucesso!")


@bp.route("/grafico/receita-mensal.png", methods=["GET"])
def grafico_receita_mensal():
    chart_buffer = charts.generate_receita_mensal_chart(_carregar_resumo())
    if chart_buffer is None:
        return erro("Ainda não há receitas para gerar o gráfico mensal.", 404)
    return send_file(chart_buffer, mimetype="image/png", download_name="receita_mensal.png")


@bp.route("/grafico/categorias.png", methods=["GET"])
def grafico_categorias():
    chart_buffer = charts.generate_categorias_chart(_carregar_resumo())
    if chart_buffer is None:
        return erro("Ainda não há receitas para gerar o gráfico de categorias.", 404)
    return send_file(chart_buffer, mimetype="image/png", download_name="receita_categorias.png")

# psifinance/web/routes/dashboard.py
from flask import Blueprint, send_file

from psifinance.core import aggregators, charts, db
from psifinance.core.models import TIPO_RECEITA
from psifinance.web.utils import erro, get_client, resposta, usuario_atual

bp = Blueprint("dashboard", __name__, url_prefix="/dashboard")

SEM_DADOS_GRAFICO = "Ainda não há dados suficientes para gerar este gráfico."


@bp.route("", methods=["GET"])
def dashboard():
    """Cartões do dashboard e as séries dos dois gráficos."""
    usuario = usuario_atual()
    if usuario is None:
        clientes, sessoes, receitas = [], [], []
    else:
        client = get_client()
        clientes = db.get_clientes_ativos(client, usuario.id)
        sessoes = db.get_sessoes(client, usuario.id)
        receitas = db.get_transacoes_por_tipo(client, usuario.id, TIPO_RECEITA)

    resumo = aggregators.resumo_dashboard(clientes, sessoes, receitas)
    data = resumo.to_dict()
    data["sessoesPorDia"] = [
        {"dia": dia, "sessoes": total} for dia, total in aggregators.sessoes_por_dia_semana(sessoes)
    ]
    return resposta(data=data)


@bp.route("/grafico/receitas-despesas.png", methods=["GET"])
def grafico_receitas_despesas():
    usuario = usuario_atual()
    transacoes = db.get_transacoes(get_client(), usuario.id) if usuario else []
    chart_buffer = charts.generate_receitas_despesas_chart(aggregators.receitas_despesas_por_mes(transacoes))
    if chart_buffer is None:
        return erro(SEM_DADOS_GRAFICO, 404)
    return send_file(chart_buffer, mimetype="image/png", download_name="receitas_despesas.png")


@bp.route("/grafico/sessoes-semana.png", methods=["GET"])
def grafico_sessoes_semana():
    usuario = usuario_atual()
    sessoes = db.get_sessoes(get_client(), usuario.id) if usuario else []
    chart_buffer = charts.generate_sessoes_semana_chart(aggregators.sessoes_por_dia_semana(sessoes))
    if chart_buffer is None:
        return erro(SEM_DADOS_GRAFICO, 404)
    return send_file(chart_buffer, mimetype="image/png", download_name="sessoes_semana.png")

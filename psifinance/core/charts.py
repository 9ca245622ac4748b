# psifinance/core/charts.py
import io
from typing import Sequence, Tuple, Union

import matplotlib
matplotlib.use('Agg')  # sem display no servidor
import matplotlib.pyplot as plt
import matplotlib.ticker as mticker
import pandas as pd

from psifinance.core.aggregators import ResumoRelatorios

# Configurações globais para os gráficos (cores, fontes, etc.)
plt.style.use('seaborn-v0_8-darkgrid')
plt.rcParams['font.family'] = 'sans-serif'
plt.rcParams['font.size'] = 10
plt.rcParams['axes.labelsize'] = 12
plt.rcParams['axes.titlesize'] = 14
plt.rcParams['xtick.labelsize'] = 10
plt.rcParams['ytick.labelsize'] = 10
plt.rcParams['legend.fontsize'] = 10

COLORS = {
    'Receita': '#28a745',
    'Despesa': '#dc3545',
    'Sessões': '#007bff',
    'Fatias_Variadas': ['#1f77b4', '#ff7f0e', '#2ca02c', '#d62728', '#9467bd', '#8c564b', '#e377c2', '#7f7f7f', '#bcbd22', '#17becf']
}

FORMATO_REAIS = mticker.FormatStrFormatter('R$%.2f')


def _salvar(fig) -> io.BytesIO:
    buf = io.BytesIO()
    fig.tight_layout()
    fig.savefig(buf, format='png', dpi=150)
    buf.seek(0)
    plt.close(fig)
    return buf


def generate_receita_mensal_chart(resumo: ResumoRelatorios) -> Union[io.BytesIO, None]:
    """Gráfico de linha da receita por mês (Jan a Dez) do relatório."""
    serie = pd.Series(dict(resumo.receita_por_mes))
    if serie.empty or not serie.any():
        return None

    fig, ax = plt.subplots(figsize=(12, 6))
    ax.plot(serie.index, serie.values, marker='o', linewidth=2, color=COLORS['Receita'], label='Receita')
    ax.set_title('Receita Mensal', fontsize=16, fontweight='bold')
    ax.set_ylabel('Valor (R$)')
    ax.set_xlabel('Mês')
    ax.yaxis.set_major_formatter(FORMATO_REAIS)
    ax.grid(axis='y', linestyle='--', alpha=0.7)
    ax.legend()
    return _salvar(fig)


def generate_categorias_chart(resumo: ResumoRelatorios) -> Union[io.BytesIO, None]:
    """Gráfico de pizza das receitas por categoria, na ordem em que aparecem."""
    categorias = pd.Series(resumo.categorias, dtype=float)
    categorias = categorias[categorias > 0]
    if categorias.empty:
        return None

    fig, ax = plt.subplots(figsize=(10, 7))
    wedges, _, _ = ax.pie(
        categorias.values,
        autopct=lambda p: f'R${(p * categorias.sum() / 100):.2f}',
        startangle=90,
        colors=COLORS['Fatias_Variadas'][:len(categorias)],
        pctdistance=0.75,
    )
    ax.set_title('Receita por Categoria', fontsize=16, fontweight='bold')
    ax.axis('equal')
    labels = [f"{nome}: R${valor:.2f}" for nome, valor in categorias.items()]
    ax.legend(wedges, labels, title="Categoria", loc="center left", bbox_to_anchor=(1, 0, 0.5, 1))
    return _salvar(fig)


def generate_receitas_despesas_chart(serie: Sequence[Tuple[str, float, float]]) -> Union[io.BytesIO, None]:
    """Gráfico de linhas Receitas vs Despesas por mês (dashboard)."""
    df = pd.DataFrame(list(serie), columns=['mes', 'Receita', 'Despesa']).set_index('mes')
    if df.empty or not df.to_numpy().any():
        return None

    fig, ax = plt.subplots(figsize=(12, 6))
    df.plot(ax=ax, kind='line', marker='o', linewidth=2,
            color=[COLORS['Receita'], COLORS['Despesa']])
    ax.set_title('Receitas vs Despesas', fontsize=16, fontweight='bold')
    ax.set_ylabel('Valor (R$)')
    ax.set_xlabel('Mês')
    ax.set_xticks(range(len(df.index)))
    ax.set_xticklabels(df.index)
    ax.yaxis.set_major_formatter(FORMATO_REAIS)
    ax.legend(title='Tipo de Transação')
    return _salvar(fig)


def generate_sessoes_semana_chart(serie: Sequence[Tuple[str, int]]) -> Union[io.BytesIO, None]:
    """Gráfico de barras com a quantidade de sessões por dia da semana (dashboard)."""
    contagem = pd.Series(dict(serie))
    if contagem.empty or not contagem.any():
        return None

    fig, ax = plt.subplots(figsize=(10, 6))
    bars = ax.bar(contagem.index, contagem.values, color=COLORS['Sessões'])
    ax.bar_label(bars, fontsize=9, padding=3)
    ax.set_title('Sessões por Dia', fontsize=16, fontweight='bold')
    ax.set_ylabel('Sessões')
    ax.yaxis.set_major_locator(mticker.MaxNLocator(integer=True))
    ax.grid(axis='y', linestyle='--', alpha=0.7)
    return _salvar(fig)

# psifinance/core/aggregators.py
"""
Métricas derivadas exibidas no Dashboard, no Financeiro e nos Relatórios.

Todas as funções são puras: recebem as linhas já filtradas pelo usuário
(dicionários vindos do Supabase) e devolvem um snapshot imutável. Valores
numéricos nulos ou inválidos contam como zero e datas inválidas não caem em
nenhum mês, então nenhuma agregação falha por causa de uma linha ruim.
"""
import datetime
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Tuple

import pandas as pd

from psifinance.core.models import TIPO_DESPESA, TIPO_RECEITA
from psifinance.utils.formatting import formatar_data, formatar_moeda, separar_data_sessao

MESES = ('Jan', 'Fev', 'Mar', 'Abr', 'Mai', 'Jun', 'Jul', 'Ago', 'Set', 'Out', 'Nov', 'Dez')
DIAS_SEMANA = ('Seg', 'Ter', 'Qua', 'Qui', 'Sex', 'Sáb', 'Dom')
PERIODOS = ('semana', 'mes', 'trimestre', 'ano')
PERIODO_PADRAO = 'mes'

# Placeholder: o percentual de crescimento do dashboard é fixo, não vem dos dados.
CRESCIMENTO_PLACEHOLDER = 12.5

SEM_CATEGORIA = 'Sem categoria'


@dataclass(frozen=True)
class ResumoDashboard:
    total_clientes: int
    sessoes_hoje: int
    receita_mes: float
    crescimento: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            'totalClientes': self.total_clientes,
            'sessoesHoje': self.sessoes_hoje,
            'receitaMes': self.receita_mes,
            'crescimento': self.crescimento,
        }


@dataclass(frozen=True)
class ResumoFinanceiro:
    receitas: float
    despesas: float
    saldo: float

    def to_dict(self) -> Dict[str, Any]:
        return {'receitas': self.receitas, 'despesas': self.despesas, 'saldo': self.saldo}


@dataclass(frozen=True)
class ResumoRelatorios:
    periodo: str
    total_clientes: int
    total_sessoes: int
    receita_total: float
    ticket_medio: float
    receita_por_mes: Tuple[Tuple[str, float], ...]
    receita_por_categoria: Tuple[Tuple[str, float], ...]

    @property
    def categorias(self) -> Dict[str, float]:
        return dict(self.receita_por_categoria)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'periodo': self.periodo,
            'totalClientes': self.total_clientes,
            'totalSessoes': self.total_sessoes,
            'receitaTotal': self.receita_total,
            'ticketMedio': self.ticket_medio,
            'receitaPorMes': [{'mes': mes, 'receita': valor} for mes, valor in self.receita_por_mes],
            'receitaPorCategoria': [{'name': nome, 'value': valor} for nome, valor in self.receita_por_categoria],
        }


# --- Funções auxiliares ---
def _lista(rows: Optional[Iterable[Dict[str, Any]]]) -> List[Dict[str, Any]]:
    # Uma consulta que falhou chega como None e conta como coleção vazia
    return [row for row in (rows or []) if row]


def _frame_transacoes(rows: List[Dict[str, Any]], campo_data: str = 'data_transacao') -> pd.DataFrame:
    """DataFrame com tipo, categoria, valor (nulo -> 0) e índice do mês (0-11, NaN se inválido)."""
    if not rows:
        return pd.DataFrame(columns=['tipo', 'categoria', 'valor', 'mes'])

    df = pd.DataFrame({
        'tipo': [row.get('tipo') for row in rows],
        'categoria': [row.get('categoria') for row in rows],
        'valor': [row.get('valor') for row in rows],
        'data': [str(row.get(campo_data) or '')[:10] for row in rows],
    })
    df['valor'] = pd.to_numeric(df['valor'], errors='coerce').fillna(0.0)
    datas = pd.to_datetime(df['data'], format='%Y-%m-%d', errors='coerce')
    df['mes'] = datas.dt.month - 1
    df['categoria'] = df['categoria'].fillna(SEM_CATEGORIA)
    return df


def _soma(valores: pd.Series) -> float:
    return float(valores.sum()) if not valores.empty else 0.0


def _soma_por_tipo(df: pd.DataFrame, tipo: str) -> float:
    if df.empty:
        return 0.0
    return _soma(df.loc[df['tipo'] == tipo, 'valor'])


def _serie_mensal(df: pd.DataFrame) -> List[float]:
    """Soma por índice de mês, sempre com 12 posições (o ano é ignorado)."""
    if df.empty:
        return [0.0] * len(MESES)
    por_mes = df.dropna(subset=['mes']).groupby('mes')['valor'].sum()
    por_mes.index = por_mes.index.astype(int)
    return [float(por_mes.get(idx, 0.0)) for idx in range(len(MESES))]


# --- Dashboard ---
def resumo_dashboard(clientes: Optional[Iterable[Dict[str, Any]]],
                     sessoes: Optional[Iterable[Dict[str, Any]]],
                     receitas: Optional[Iterable[Dict[str, Any]]],
                     hoje: Optional[datetime.date] = None) -> ResumoDashboard:
    """
    Cartões do dashboard.

    - sessões de hoje: data_sessao começando com a data de hoje (AAAA-MM-DD)
    - receita do mês: receitas cujo mês é o mês atual, comparando só o índice do mês
    - crescimento: placeholder fixo
    """
    hoje = hoje or datetime.date.today()
    hoje_str = hoje.isoformat()
    sessoes = _lista(sessoes)

    sessoes_hoje = sum(1 for s in sessoes if str(s.get('data_sessao') or '').startswith(hoje_str))

    df = _frame_transacoes(_lista(receitas))
    receita_mes = 0.0 if df.empty else _soma(df.loc[df['mes'] == hoje.month - 1, 'valor'])

    return ResumoDashboard(
        total_clientes=len(_lista(clientes)),
        sessoes_hoje=sessoes_hoje,
        receita_mes=receita_mes,
        crescimento=CRESCIMENTO_PLACEHOLDER,
    )


def receitas_despesas_por_mes(transacoes: Optional[Iterable[Dict[str, Any]]]) -> Tuple[Tuple[str, float, float], ...]:
    """Gráfico "Receitas vs Despesas": 12 meses de Jan a Dez com as duas somas."""
    df = _frame_transacoes(_lista(transacoes))
    receitas = _serie_mensal(df[df['tipo'] == TIPO_RECEITA]) if not df.empty else [0.0] * len(MESES)
    despesas = _serie_mensal(df[df['tipo'] == TIPO_DESPESA]) if not df.empty else [0.0] * len(MESES)
    return tuple(zip(MESES, receitas, despesas))


def sessoes_por_dia_semana(sessoes: Optional[Iterable[Dict[str, Any]]]) -> Tuple[Tuple[str, int], ...]:
    """Gráfico "Sessões por Dia": contagem por dia da semana, de segunda a domingo."""
    contagem = [0] * len(DIAS_SEMANA)
    for sessao in _lista(sessoes):
        try:
            dia = datetime.datetime.strptime(str(sessao.get('data_sessao') or '')[:10], '%Y-%m-%d')
        except ValueError:
            continue
        contagem[dia.weekday()] += 1
    return tuple(zip(DIAS_SEMANA, contagem))


# --- Financeiro ---
def resumo_financeiro(transacoes: Optional[Iterable[Dict[str, Any]]]) -> ResumoFinanceiro:
    """Totais de todo o histórico: receitas, despesas e saldo."""
    df = _frame_transacoes(_lista(transacoes))
    receitas = _soma_por_tipo(df, TIPO_RECEITA)
    despesas = _soma_por_tipo(df, TIPO_DESPESA)
    return ResumoFinanceiro(receitas=receitas, despesas=despesas, saldo=receitas - despesas)


def transacoes_para_exibicao(transacoes: Optional[Iterable[Dict[str, Any]]]) -> List[Dict[str, Any]]:
    """Linhas do histórico com valor assinado ("+ R$ 120.00") e data em DD/MM/AAAA."""
    linhas = []
    for transacao in _lista(transacoes):
        linha = dict(transacao)
        sinal = '+' if transacao.get('tipo') == TIPO_RECEITA else '-'
        linha['valor_formatado'] = f"{sinal} {formatar_moeda(transacao.get('valor'))}"
        linha['data_formatada'] = formatar_data(transacao.get('data_transacao'))
        linhas.append(linha)
    return linhas


# --- Sessões ---
def sessoes_com_cliente(sessoes: Optional[Iterable[Dict[str, Any]]]) -> List[Dict[str, Any]]:
    """Achata a expansão clientes(nome) em cliente_nome; None se o cliente não existir mais."""
    linhas = []
    for sessao in _lista(sessoes):
        linha = dict(sessao)
        cliente = linha.pop('clientes', None)
        if isinstance(cliente, dict) and cliente.get('nome'):
            linha['cliente_nome'] = cliente['nome']
        else:
            linha['cliente_nome'] = None
        linha['data'], linha['hora'] = separar_data_sessao(sessao.get('data_sessao'))
        linhas.append(linha)
    return linhas


# --- Relatórios ---
def resumo_relatorios(clientes: Optional[Iterable[Dict[str, Any]]],
                      sessoes: Optional[Iterable[Dict[str, Any]]],
                      transacoes: Optional[Iterable[Dict[str, Any]]],
                      periodo: str = PERIODO_PADRAO) -> ResumoRelatorios:
    """
    Relatório geral. O período escolhido fica registrado no resultado, mas
    ainda não filtra nada: os números são sempre de todo o histórico.
    """
    total_clientes = len(_lista(clientes))
    total_sessoes = len(_lista(sessoes))

    df = _frame_transacoes(_lista(transacoes))
    df_receitas = df[df['tipo'] == TIPO_RECEITA] if not df.empty else df
    receita_total = _soma(df_receitas['valor'])

    if df_receitas.empty:
        por_categoria = ()
    else:
        agrupado = df_receitas.groupby('categoria', sort=False)['valor'].sum()
        por_categoria = tuple((str(nome), float(valor)) for nome, valor in agrupado.items())

    return ResumoRelatorios(
        periodo=periodo if periodo in PERIODOS else PERIODO_PADRAO,
        total_clientes=total_clientes,
        total_sessoes=total_sessoes,
        receita_total=receita_total,
        ticket_medio=receita_total / total_sessoes if total_sessoes > 0 else 0.0,
        receita_por_mes=tuple(zip(MESES, _serie_mensal(df_receitas))),
        receita_por_categoria=por_categoria,
    )

import unittest

from psifinance.core import aggregators, charts

PNG_HEADER = b'\x89PNG'


class TestCharts(unittest.TestCase):
    def setUp(self):
        self.transacoes = [
            {'tipo': 'Receita', 'valor': 100, 'data_transacao': '2025-01-10', 'categoria': 'Sessão'},
            {'tipo': 'Receita', 'valor': 200, 'data_transacao': '2025-02-10', 'categoria': 'Workshop'},
            {'tipo': 'Despesa', 'valor': 50, 'data_transacao': '2025-02-11', 'categoria': 'Aluguel'},
        ]

    def test_receita_mensal_chart(self):
        resumo = aggregators.resumo_relatorios([], [], self.transacoes)
        buf = charts.generate_receita_mensal_chart(resumo)
        self.assertIsNotNone(buf)
        self.assertEqual(buf.read(4), PNG_HEADER)

    def test_receita_mensal_chart_without_income(self):
        resumo = aggregators.resumo_relatorios([], [], [])
        self.assertIsNone(charts.generate_receita_mensal_chart(resumo))

    def test_categorias_chart(self):
        resumo = aggregators.resumo_relatorios([], [], self.transacoes)
        buf = charts.generate_categorias_chart(resumo)
        self.assertEqual(buf.read(4), PNG_HEADER)

    def test_categorias_chart_empty(self):
        resumo = aggregators.resumo_relatorios([], [], [])
        self.assertIsNone(charts.generate_categorias_chart(resumo))

    def test_receitas_despesas_chart(self):
        buf = charts.generate_receitas_despesas_chart(aggregators.receitas_despesas_por_mes(self.transacoes))
        self.assertEqual(buf.read(4), PNG_HEADER)

    def test_receitas_despesas_chart_empty(self):
        self.assertIsNone(charts.generate_receitas_despesas_chart(aggregators.receitas_despesas_por_mes([])))

    def test_sessoes_semana_chart(self):
        serie = aggregators.sessoes_por_dia_semana([{'data_sessao': '2025-07-07T09:00:00'}])
        buf = charts.generate_sessoes_semana_chart(serie)
        self.assertEqual(buf.read(4), PNG_HEADER)

    def test_sessoes_semana_chart_empty(self):
        self.assertIsNone(charts.generate_sessoes_semana_chart(aggregators.sessoes_por_dia_semana([])))

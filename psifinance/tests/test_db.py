import unittest
from unittest.mock import MagicMock, call, patch
from supabase import Client  # Para tipagem do mock
import uuid

from psifinance.core import db
from psifinance.core.errors import AuthError

USER_ID = str(uuid.uuid4())


class TestDatabase(unittest.TestCase):
    def setUp(self):
        # Mock do cliente Supabase para todos os testes
        self.mock_supabase_client = MagicMock(spec=Client)

        # Resposta devolvida por .execute()
        self.mock_execute = MagicMock()
        self.mock_execute.data = []

        # Objeto retornado por .table("..."): todos os métodos encadeáveis devolvem ele mesmo
        self.mock_table_methods = MagicMock()
        for metodo in ('insert', 'select', 'update', 'delete', 'eq', 'order', 'limit', 'single'):
            getattr(self.mock_table_methods, metodo).return_value = self.mock_table_methods
        self.mock_table_methods.execute.return_value = self.mock_execute

        self.mock_supabase_client.table.return_value = self.mock_table_methods

    # --- Cliente do Supabase ---
    @patch('psifinance.core.db.create_client')
    def test_get_supabase_client_without_tokens(self, mock_create_client):
        client = db.get_supabase_client()
        self.assertIs(client, mock_create_client.return_value)
        client.auth.set_session.assert_not_called()

    @patch('psifinance.core.db.create_client')
    def test_get_supabase_client_with_tokens(self, mock_create_client):
        client = db.get_supabase_client('access', 'refresh')
        client.auth.set_session.assert_called_once_with('access', 'refresh')

    @patch('psifinance.core.db.create_client')
    def test_get_supabase_client_refresh_failure(self, mock_create_client):
        mock_create_client.return_value.auth.set_session.side_effect = Exception("Invalid Refresh Token")
        with self.assertRaises(AuthError):
            db.get_supabase_client('expired', 'stale-refresh')

    # --- Testes para clientes ---
    def test_get_clientes_ativos_filters_by_user_and_active_flag(self):
        self.mock_execute.data = [{'id': 'c1', 'nome': 'Ana', 'ativo': True}]

        clientes = db.get_clientes_ativos(self.mock_supabase_client, USER_ID)

        self.assertEqual(clientes, [{'id': 'c1', 'nome': 'Ana', 'ativo': True}])
        self.mock_supabase_client.table.assert_called_with('clientes')
        self.mock_table_methods.eq.assert_has_calls([call('user_id', USER_ID), call('ativo', True)])
        self.mock_table_methods.order.assert_called_once_with('nome')

    def test_get_clientes_ativos_failure_returns_empty_list(self):
        self.mock_table_methods.execute.side_effect = Exception("Database connection error")
        self.assertEqual(db.get_clientes_ativos(self.mock_supabase_client, USER_ID), [])

    def test_get_clientes_ativos_none_data(self):
        self.mock_execute.data = None
        self.assertEqual(db.get_clientes_ativos(self.mock_supabase_client, USER_ID), [])

    def test_add_cliente_success(self):
        cliente = {'user_id': USER_ID, 'nome': 'Ana', 'tipo_sessao': 'Individual', 'valor_sessao': 150.0}

        result = db.add_cliente(self.mock_supabase_client, cliente)

        self.assertTrue(result)
        self.mock_supabase_client.table.assert_called_with('clientes')
        args, _ = self.mock_table_methods.insert.call_args
        self.assertEqual(args[0], [cliente])

    def test_add_cliente_failure(self):
        self.mock_table_methods.execute.side_effect = Exception("violates row-level security policy")
        self.assertFalse(db.add_cliente(self.mock_supabase_client, {'nome': 'Ana'}))

    def test_add_clientes_bulk_single_insert(self):
        clientes = [{'nome': 'Ana'}, {'nome': 'Bruno'}]
        self.assertTrue(db.add_clientes(self.mock_supabase_client, clientes))
        self.mock_table_methods.insert.assert_called_once_with(clientes)

    def test_add_clientes_empty_list_skips_insert(self):
        self.assertTrue(db.add_clientes(self.mock_supabase_client, []))
        self.mock_table_methods.insert.assert_not_called()

    def test_update_cliente_success(self):
        payload = {'nome': 'Ana Souza'}
        self.assertTrue(db.update_cliente(self.mock_supabase_client, USER_ID, 'c1', payload))
        self.mock_table_methods.update.assert_called_once_with(payload)
        self.mock_table_methods.eq.assert_has_calls([call('id', 'c1'), call('user_id', USER_ID)])

    def test_desativar_cliente_is_a_soft_delete(self):
        self.assertTrue(db.desativar_cliente(self.mock_supabase_client, USER_ID, 'c1'))
        self.mock_table_methods.update.assert_called_once_with({'ativo': False})
        self.mock_table_methods.delete.assert_not_called()
        self.mock_table_methods.eq.assert_has_calls([call('id', 'c1'), call('user_id', USER_ID)])

    def test_desativar_cliente_failure(self):
        self.mock_table_methods.execute.side_effect = Exception("timeout")
        self.assertFalse(db.desativar_cliente(self.mock_supabase_client, USER_ID, 'c1'))

    # --- Testes para sessões ---
    def test_get_sessoes_expands_client_name_newest_first(self):
        self.mock_execute.data = [{'id': 's1', 'clientes': {'nome': 'Ana'}}]

        sessoes = db.get_sessoes(self.mock_supabase_client, USER_ID)

        self.assertEqual(len(sessoes), 1)
        self.mock_supabase_client.table.assert_called_with('sessoes')
        self.mock_table_methods.select.assert_called_once_with('*, clientes(nome)')
        self.mock_table_methods.order.assert_called_once_with('data_sessao', desc=True)

    def test_get_sessoes_failure(self):
        self.mock_table_methods.execute.side_effect = Exception("network")
        self.assertEqual(db.get_sessoes(self.mock_supabase_client, USER_ID), [])

    def test_add_sessao_success(self):
        sessao = {'user_id': USER_ID, 'cliente_id': 'c1', 'data_sessao': '2025-07-10T14:00:00', 'valor': 150.0}
        self.assertTrue(db.add_sessao(self.mock_supabase_client, sessao))
        self.mock_table_methods.insert.assert_called_once_with([sessao])

    def test_update_sessao_failure(self):
        self.mock_table_methods.execute.side_effect = Exception("invalid input syntax")
        self.assertFalse(db.update_sessao(self.mock_supabase_client, USER_ID, 's1', {'valor': 10}))

    def test_delete_sessao_is_a_hard_delete(self):
        self.assertTrue(db.delete_sessao(self.mock_supabase_client, USER_ID, 's1'))
        self.mock_table_methods.delete.assert_called_once_with()
        self.mock_table_methods.eq.assert_has_calls([call('id', 's1'), call('user_id', USER_ID)])

    # --- Testes para transações ---
    def test_get_transacoes_ordered_by_date(self):
        self.mock_execute.data = [{'id': 't1', 'tipo': 'Receita', 'valor': 100}]
        transacoes = db.get_transacoes(self.mock_supabase_client, USER_ID)
        self.assertEqual(transacoes[0]['id'], 't1')
        self.mock_table_methods.order.assert_called_once_with('data_transacao', desc=True)

    def test_get_transacoes_por_tipo(self):
        db.get_transacoes_por_tipo(self.mock_supabase_client, USER_ID, 'Receita')
        self.mock_table_methods.eq.assert_has_calls([call('user_id', USER_ID), call('tipo', 'Receita')])

    def test_add_transacao_failure(self):
        self.mock_table_methods.execute.side_effect = Exception("Database connection error")
        self.assertFalse(db.add_transacao(self.mock_supabase_client, {'tipo': 'Receita'}))

    def test_update_transacao_success(self):
        self.assertTrue(db.update_transacao(self.mock_supabase_client, USER_ID, 't1', {'valor': 90.0}))
        self.mock_supabase_client.table.assert_called_with('transacoes')

    def test_delete_transacao_success(self):
        self.assertTrue(db.delete_transacao(self.mock_supabase_client, USER_ID, 't1'))
        self.mock_table_methods.delete.assert_called_once_with()

    # --- Testes para perfil ---
    def test_get_profile_single_row(self):
        self.mock_execute.data = {'id': USER_ID, 'nome': 'Dra. Ana'}
        perfil = db.get_profile(self.mock_supabase_client, USER_ID)
        self.assertEqual(perfil['nome'], 'Dra. Ana')
        self.mock_table_methods.single.assert_called_once_with()
        self.mock_table_methods.eq.assert_called_once_with('id', USER_ID)

    def test_get_profile_failure_returns_none(self):
        self.mock_table_methods.execute.side_effect = Exception("JSON object requested, multiple (or no) rows returned")
        self.assertIsNone(db.get_profile(self.mock_supabase_client, USER_ID))

    def test_update_profile_partial_patch(self):
        campos = {'dark_mode': True}
        self.assertTrue(db.update_profile(self.mock_supabase_client, USER_ID, campos))
        self.mock_table_methods.update.assert_called_once_with(campos)

    # --- Testes para metas ---
    def test_get_metas(self):
        self.mock_execute.data = [{'id': 'm1', 'ano': 2025, 'tipo_meta': 'receita'}]
        metas = db.get_metas(self.mock_supabase_client, USER_ID)
        self.assertEqual(len(metas), 1)
        self.mock_supabase_client.table.assert_called_with('metas')


if __name__ == '__main__':
    unittest.main()

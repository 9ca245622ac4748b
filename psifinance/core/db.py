# psifinance/core/db.py
import logging
from typing import Any, Dict, List, Union

from supabase import create_client, Client

from psifinance.config import SUPABASE_URL, SUPABASE_KEY
from psifinance.core.errors import AuthError

logger = logging.getLogger(__name__)

# Toda consulta filtra por user_id. O Supabase também aplica RLS nas tabelas,
# mas a aplicação nunca depende só disso.


def get_supabase_client(access_token: Union[str, None] = None,
                        refresh_token: Union[str, None] = None) -> Client:
    """
    Retorna uma instância do cliente Supabase, autenticada se houver tokens de sessão.
    Se o token de acesso venceu, set_session tenta renová-lo pela rede; qualquer
    falha nessa etapa vira AuthError.
    """
    client = create_client(SUPABASE_URL, SUPABASE_KEY)
    if access_token and refresh_token:
        try:
            client.auth.set_session(access_token, refresh_token)
        except Exception as e:
            logger.warning("Não foi possível restaurar a sessão: %s", e)
            raise AuthError("Sua sessão expirou. Faça login novamente.")
    return client


# --- Funções para Clientes ---
def get_clientes_ativos(supabase_client: Client, user_id: str) -> list:
    """Obtém os clientes ativos do usuário, ordenados por nome."""
    try:
        response = (
            supabase_client.table('clientes')
            .select('*')
            .eq('user_id', user_id)
            .eq('ativo', True)
            .order('nome')
            .execute()
        )
        return response.data or []
    except Exception as e:
        logger.error("Erro ao carregar clientes: %s", e)
        return []


def add_cliente(supabase_client: Client, cliente: Dict[str, Any]) -> bool:
    """Adiciona um novo cliente."""
    try:
        supabase_client.table('clientes').insert([cliente]).execute()
        return True
    except Exception as e:
        logger.error("Erro ao criar cliente: %s", e)
        return False


def add_clientes(supabase_client: Client, clientes: List[Dict[str, Any]]) -> bool:
    """Adiciona vários clientes em um único insert (tudo ou nada)."""
    if not clientes:
        return True
    try:
        supabase_client.table('clientes').insert(clientes).execute()
        return True
    except Exception as e:
        logger.error("Erro ao criar clientes em lote: %s", e)
        return False


def update_cliente(supabase_client: Client, user_id: str, cliente_id: str, cliente: Dict[str, Any]) -> bool:
    """Substitui os dados de um cliente existente."""
    try:
        supabase_client.table('clientes').update(cliente).eq('id', cliente_id).eq('user_id', user_id).execute()
        return True
    except Exception as e:
        logger.error("Erro ao atualizar cliente %s: %s", cliente_id, e)
        return False


def desativar_cliente(supabase_client: Client, user_id: str, cliente_id: str) -> bool:
    """Remove o cliente da lista marcando ativo = false. Sessões e transações são mantidas."""
    try:
        supabase_client.table('clientes').update({'ativo': False}).eq('id', cliente_id).eq('user_id', user_id).execute()
        return True
    except Exception as e:
        logger.error("Erro ao remover cliente %s: %s", cliente_id, e)
        return False


# --- Funções para Sessões ---
def get_sessoes(supabase_client: Client, user_id: str) -> list:
    """Obtém as sessões do usuário com o nome do cliente, da mais recente para a mais antiga."""
    try:
        response = (
            supabase_client.table('sessoes')
            .select('*, clientes(nome)')
            .eq('user_id', user_id)
            .order('data_sessao', desc=True)
            .execute()
        )
        return response.data or []
    except Exception as e:
        logger.error("Erro ao carregar sessões: %s", e)
        return []


def add_sessao(supabase_client: Client, sessao: Dict[str, Any]) -> bool:
    """Agenda uma nova sessão."""
    try:
        supabase_client.table('sessoes').insert([sessao]).execute()
        return True
    except Exception as e:
        logger.error("Erro ao criar sessão: %s", e)
        return False


def update_sessao(supabase_client: Client, user_id: str, sessao_id: str, sessao: Dict[str, Any]) -> bool:
    """Atualiza uma sessão existente."""
    try:
        supabase_client.table('sessoes').update(sessao).eq('id', sessao_id).eq('user_id', user_id).execute()
        return True
    except Exception as e:
        logger.error("Erro ao atualizar sessão %s: %s", sessao_id, e)
        return False


def delete_sessao(supabase_client: Client, user_id: str, sessao_id: str) -> bool:
    """Remove definitivamente uma sessão."""
    try:
        supabase_client.table('sessoes').delete().eq('id', sessao_id).eq('user_id', user_id).execute()
        return True
    except Exception as e:
        logger.error("Erro ao remover sessão %s: %s", sessao_id, e)
        return False


# --- Funções para Transações ---
def get_transacoes(supabase_client: Client, user_id: str) -> list:
    """Obtém todas as transações do usuário, da mais recente para a mais antiga."""
    try:
        response = (
            supabase_client.table('transacoes')
            .select('*')
            .eq('user_id', user_id)
            .order('data_transacao', desc=True)
            .execute()
        )
        return response.data or []
    except Exception as e:
        logger.error("Erro ao carregar transações: %s", e)
        return []


def get_transacoes_por_tipo(supabase_client: Client, user_id: str, tipo: str) -> list:
    """Obtém as transações de um tipo (Receita ou Despesa)."""
    try:
        response = (
            supabase_client.table('transacoes')
            .select('*')
            .eq('user_id', user_id)
            .eq('tipo', tipo)
            .execute()
        )
        return response.data or []
    except Exception as e:
        logger.error("Erro ao carregar transações do tipo %s: %s", tipo, e)
        return []


def add_transacao(supabase_client: Client, transacao: Dict[str, Any]) -> bool:
    """Registra uma nova transação."""
    try:
        supabase_client.table('transacoes').insert([transacao]).execute()
        return True
    except Exception as e:
        logger.error("Erro ao criar transação: %s", e)
        return False


def update_transacao(supabase_client: Client, user_id: str, transacao_id: str, transacao: Dict[str, Any]) -> bool:
    """Atualiza uma transação existente."""
    try:
        supabase_client.table('transacoes').update(transacao).eq('id', transacao_id).eq('user_id', user_id).execute()
        return True
    except Exception as e:
        logger.error("Erro ao atualizar transação %s: %s", transacao_id, e)
        return False


def delete_transacao(supabase_client: Client, user_id: str, transacao_id: str) -> bool:
    """Remove definitivamente uma transação."""
    try:
        supabase_client.table('transacoes').delete().eq('id', transacao_id).eq('user_id', user_id).execute()
        return True
    except Exception as e:
        logger.error("Erro ao remover transação %s: %s", transacao_id, e)
        return False


# --- Funções para Perfil ---
def get_profile(supabase_client: Client, user_id: str) -> Union[Dict[str, Any], None]:
    """Obtém o perfil do usuário (um por identidade)."""
    try:
        response = supabase_client.table('profiles').select('*').eq('id', user_id).single().execute()
        return response.data
    except Exception as e:
        logger.error("Erro ao carregar perfil: %s", e)
        return None


def update_profile(supabase_client: Client, user_id: str, campos: Dict[str, Any]) -> bool:
    """Atualiza parcialmente o perfil do usuário."""
    try:
        supabase_client.table('profiles').update(campos).eq('id', user_id).execute()
        return True
    except Exception as e:
        logger.error("Erro ao salvar perfil: %s", e)
        return False


# --- Funções para Metas ---
def get_metas(supabase_client: Client, user_id: str) -> list:
    """Obtém as metas cadastradas, da mais recente para a mais antiga."""
    try:
        response = (
            supabase_client.table('metas')
            .select('*')
            .eq('user_id', user_id)
            .order('ano', desc=True)
            .execute()
        )
        return response.data or []
    except Exception as e:
        logger.error("Erro ao carregar metas: %s", e)
        return []

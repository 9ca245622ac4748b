# psifinance/core/models.py
import datetime
from dataclasses import dataclass, asdict
from typing import Any, Dict, List, Optional

from psifinance.core.errors import ValidationError
from psifinance.utils.formatting import montar_data_sessao, parse_valor

# Os dados chegam do Supabase como dicionários. Estes registros definem os campos
# obrigatórios e opcionais de cada tabela e validam os formulários antes da escrita.

TIPOS_SESSAO = ("Individual", "Casal", "Família")
STATUS_CLIENTE = ("Ativo", "Inativo")
STATUS_SESSAO = ("Agendada", "Realizada", "Cancelada", "Faltou")
STATUS_PAGAMENTO = ("Pendente", "Pago", "Atrasado")
TIPO_RECEITA = "Receita"
TIPO_DESPESA = "Despesa"
TIPOS_TRANSACAO = (TIPO_RECEITA, TIPO_DESPESA)

# Sugestões de categoria exibidas no formulário, por tipo de transação
CATEGORIAS = {
    TIPO_RECEITA: ["Sessão", "Consultoria", "Workshop", "Outros"],
    TIPO_DESPESA: ["Aluguel", "Materiais", "Marketing", "Transporte", "Outros"],
}

DURACAO_PADRAO_MINUTOS = 50
TAMANHO_MAXIMO_NOME = 100
TAMANHO_MAXIMO_TEXTO = 1000


# --- Funções de validação de formulário ---
def _texto(dados: Dict[str, Any], campo: str) -> Optional[str]:
    valor = dados.get(campo)
    if valor is None:
        return None
    valor = str(valor).strip()
    return valor or None


def _obrigatorio(dados: Dict[str, Any], campo: str, rotulo: str,
                 tamanho_maximo: int = TAMANHO_MAXIMO_NOME) -> str:
    valor = _texto(dados, campo)
    if not valor:
        raise ValidationError(f"O campo {rotulo} é obrigatório.")
    if len(valor) > tamanho_maximo:
        raise ValidationError(f"O campo {rotulo} deve ter no máximo {tamanho_maximo} caracteres.")
    return valor


def _opcional(dados: Dict[str, Any], campo: str, rotulo: str,
              tamanho_maximo: int = TAMANHO_MAXIMO_TEXTO) -> Optional[str]:
    valor = _texto(dados, campo)
    if valor and len(valor) > tamanho_maximo:
        raise ValidationError(f"O campo {rotulo} deve ter no máximo {tamanho_maximo} caracteres.")
    return valor


def _escolha(valor: Optional[str], opcoes: tuple, rotulo: str, padrao: Optional[str] = None) -> str:
    if not valor:
        if padrao is None:
            raise ValidationError(f"O campo {rotulo} é obrigatório.")
        return padrao
    if valor not in opcoes:
        raise ValidationError(f"{rotulo} inválido: '{valor}'. Use um de: {', '.join(opcoes)}.")
    return valor


def _monetario(dados: Dict[str, Any], campo: str, rotulo: str) -> float:
    bruto = dados.get(campo)
    if bruto is None or (isinstance(bruto, str) and not bruto.strip()):
        raise ValidationError(f"O campo {rotulo} é obrigatório.")
    try:
        valor = parse_valor(bruto)
    except ValueError:
        raise ValidationError(f"O campo {rotulo} deve ser um número.")
    if valor < 0:
        raise ValidationError(f"O campo {rotulo} não pode ser negativo.")
    return valor


def _booleano(valor: Any) -> bool:
    if isinstance(valor, str):
        return valor.strip().lower() in ("true", "1", "on", "sim")
    return bool(valor)


def _numero(valor: Any) -> float:
    try:
        return float(valor) if valor is not None else 0.0
    except (TypeError, ValueError):
        return 0.0


@dataclass
class Cliente:
    nome: str
    tipo_sessao: str
    valor_sessao: float
    email: Optional[str] = None
    telefone: Optional[str] = None
    status_pagamento: str = "Ativo"
    observacoes: Optional[str] = None
    ativo: bool = True
    id: Optional[str] = None
    user_id: Optional[str] = None
    created_at: Optional[str] = None

    @classmethod
    def from_form(cls, dados: Dict[str, Any]) -> "Cliente":
        return cls(
            nome=_obrigatorio(dados, "nome", "Nome"),
            email=_opcional(dados, "email", "E-mail", TAMANHO_MAXIMO_NOME),
            telefone=_opcional(dados, "telefone", "Telefone", 30),
            tipo_sessao=_escolha(_texto(dados, "tipo_sessao"), TIPOS_SESSAO, "Tipo de Sessão", "Individual"),
            valor_sessao=_monetario(dados, "valor_sessao", "Valor da Sessão"),
            status_pagamento=_escolha(_texto(dados, "status_pagamento"), STATUS_CLIENTE, "Status", "Ativo"),
            observacoes=_opcional(dados, "observacoes", "Observações"),
        )

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "Cliente":
        return cls(
            id=row.get("id"),
            user_id=row.get("user_id"),
            nome=row.get("nome") or "",
            email=row.get("email"),
            telefone=row.get("telefone"),
            tipo_sessao=row.get("tipo_sessao") or "Individual",
            valor_sessao=_numero(row.get("valor_sessao")),
            status_pagamento=row.get("status_pagamento") or "Ativo",
            observacoes=row.get("observacoes"),
            ativo=row.get("ativo") is not False,
            created_at=row.get("created_at"),
        )

    def to_payload(self, user_id: str) -> Dict[str, Any]:
        """Registro completo enviado no insert e na edição (substitui todos os campos)."""
        return {
            "user_id": user_id,
            "nome": self.nome,
            "email": self.email,
            "telefone": self.telefone,
            "tipo_sessao": self.tipo_sessao,
            "valor_sessao": self.valor_sessao,
            "status_pagamento": self.status_pagamento,
            "observacoes": self.observacoes,
        }


@dataclass
class Sessao:
    cliente_id: str
    data_sessao: str
    valor: float
    duracao_minutos: int = DURACAO_PADRAO_MINUTOS
    status: str = "Agendada"
    pagamento_status: str = "Pendente"
    observacoes: Optional[str] = None
    id: Optional[str] = None
    user_id: Optional[str] = None
    created_at: Optional[str] = None

    @classmethod
    def from_form(cls, dados: Dict[str, Any]) -> "Sessao":
        cliente_id = _obrigatorio(dados, "cliente_id", "Cliente")
        data = _obrigatorio(dados, "data_sessao", "Data")
        hora = _texto(dados, "hora_sessao")
        try:
            if hora:
                data_sessao = montar_data_sessao(data, hora)
            elif "T" in data:
                data_sessao = montar_data_sessao(data[:10], data[11:16])
            else:
                raise ValidationError("O campo Horário é obrigatório.")
        except ValueError:
            raise ValidationError("Data ou horário da sessão inválidos.")

        duracao_bruta = _texto(dados, "duracao_minutos")
        try:
            duracao = int(duracao_bruta) if duracao_bruta else DURACAO_PADRAO_MINUTOS
        except ValueError:
            raise ValidationError("O campo Duração deve ser um número inteiro de minutos.")
        if duracao <= 0:
            raise ValidationError("O campo Duração deve ser maior que zero.")

        return cls(
            cliente_id=cliente_id,
            data_sessao=data_sessao,
            duracao_minutos=duracao,
            valor=_monetario(dados, "valor", "Valor"),
            status=_escolha(_texto(dados, "status"), STATUS_SESSAO, "Status", "Agendada"),
            pagamento_status=_escolha(_texto(dados, "pagamento_status"), STATUS_PAGAMENTO, "Pagamento", "Pendente"),
            observacoes=_opcional(dados, "observacoes", "Observações"),
        )

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "Sessao":
        return cls(
            id=row.get("id"),
            user_id=row.get("user_id"),
            cliente_id=row.get("cliente_id") or "",
            data_sessao=row.get("data_sessao") or "",
            duracao_minutos=int(_numero(row.get("duracao_minutos")) or DURACAO_PADRAO_MINUTOS),
            valor=_numero(row.get("valor")),
            status=row.get("status") or "Agendada",
            pagamento_status=row.get("pagamento_status") or "Pendente",
            observacoes=row.get("observacoes"),
            created_at=row.get("created_at"),
        )

    def to_payload(self, user_id: str) -> Dict[str, Any]:
        return {
            "user_id": user_id,
            "cliente_id": self.cliente_id,
            "data_sessao": self.data_sessao,
            "duracao_minutos": self.duracao_minutos,
            "valor": self.valor,
            "status": self.status,
            "pagamento_status": self.pagamento_status,
            "observacoes": self.observacoes,
        }


@dataclass
class Transacao:
    tipo: str
    categoria: str
    descricao: str
    valor: float
    data_transacao: str
    sessao_id: Optional[str] = None
    id: Optional[str] = None
    user_id: Optional[str] = None
    created_at: Optional[str] = None

    @classmethod
    def from_form(cls, dados: Dict[str, Any]) -> "Transacao":
        data = _texto(dados, "data_transacao") or datetime.date.today().isoformat()
        try:
            data = datetime.datetime.strptime(data[:10], "%Y-%m-%d").date().isoformat()
        except ValueError:
            raise ValidationError("O campo Data deve estar no formato AAAA-MM-DD.")

        return cls(
            tipo=_escolha(_texto(dados, "tipo"), TIPOS_TRANSACAO, "Tipo", TIPO_RECEITA),
            categoria=_obrigatorio(dados, "categoria", "Categoria"),
            descricao=_obrigatorio(dados, "descricao", "Descrição", TAMANHO_MAXIMO_TEXTO),
            valor=_monetario(dados, "valor", "Valor"),
            data_transacao=data,
            sessao_id=_texto(dados, "sessao_id"),
        )

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "Transacao":
        return cls(
            id=row.get("id"),
            user_id=row.get("user_id"),
            tipo=row.get("tipo") or "",
            categoria=row.get("categoria") or "",
            descricao=row.get("descricao") or "",
            valor=_numero(row.get("valor")),
            data_transacao=row.get("data_transacao") or "",
            sessao_id=row.get("sessao_id"),
            created_at=row.get("created_at"),
        )

    def to_payload(self, user_id: str) -> Dict[str, Any]:
        """Registro completo; sessao_id None desfaz o vínculo com a sessão na edição."""
        return {
            "user_id": user_id,
            "tipo": self.tipo,
            "categoria": self.categoria,
            "descricao": self.descricao,
            "valor": self.valor,
            "data_transacao": self.data_transacao,
            "sessao_id": self.sessao_id,
        }


# Campos que a tela de configurações pode alterar
PERFIL_CAMPOS_EDITAVEIS = ("nome", "telefone", "crp", "especializacao", "dark_mode", "notificacoes_email")
PERFIL_CAMPOS_BOOLEANOS = ("dark_mode", "notificacoes_email")
PERFIL_ROTULOS = {
    "nome": "Nome",
    "telefone": "Telefone",
    "crp": "CRP",
    "especializacao": "Especialização",
}


@dataclass
class Profile:
    id: str
    nome: str
    email: str
    telefone: Optional[str] = None
    crp: Optional[str] = None
    especializacao: Optional[str] = None
    avatar_url: Optional[str] = None
    dark_mode: bool = False
    notificacoes_email: bool = True
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "Profile":
        return cls(
            id=row.get("id") or "",
            nome=row.get("nome") or "",
            email=row.get("email") or "",
            telefone=row.get("telefone"),
            crp=row.get("crp"),
            especializacao=row.get("especializacao"),
            avatar_url=row.get("avatar_url"),
            dark_mode=bool(row.get("dark_mode")),
            notificacoes_email=row.get("notificacoes_email") is not False,
            created_at=row.get("created_at"),
            updated_at=row.get("updated_at"),
        )

    @staticmethod
    def patch_from_form(dados: Dict[str, Any]) -> Dict[str, Any]:
        """Monta a atualização parcial: só os campos editáveis presentes no formulário."""
        patch = {}
        for campo in PERFIL_CAMPOS_EDITAVEIS:
            if campo not in dados:
                continue
            if campo in PERFIL_CAMPOS_BOOLEANOS:
                patch[campo] = _booleano(dados[campo])
            elif campo == "nome":
                patch[campo] = _obrigatorio(dados, "nome", PERFIL_ROTULOS["nome"])
            else:
                patch[campo] = _opcional(dados, campo, PERFIL_ROTULOS[campo], TAMANHO_MAXIMO_NOME)
        if not patch:
            raise ValidationError("Nenhum campo do perfil foi informado.")
        return patch

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class Meta:
    """Meta anual ou mensal. Existe no banco, mas nenhuma tela a utiliza ainda."""
    ano: int
    tipo_meta: str
    mes: Optional[int] = None
    valor_alvo: Optional[float] = None
    sessoes_alvo: Optional[int] = None
    id: Optional[str] = None
    user_id: Optional[str] = None
    created_at: Optional[str] = None

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "Meta":
        return cls(
            id=row.get("id"),
            user_id=row.get("user_id"),
            ano=int(_numero(row.get("ano"))),
            mes=row.get("mes"),
            tipo_meta=row.get("tipo_meta") or "",
            valor_alvo=row.get("valor_alvo"),
            sessoes_alvo=row.get("sessoes_alvo"),
            created_at=row.get("created_at"),
        )


def categorias_sugeridas(tipo: str) -> List[str]:
    """Lista de categorias sugeridas para o tipo (vazia para tipos desconhecidos)."""
    return list(CATEGORIAS.get(tipo, []))

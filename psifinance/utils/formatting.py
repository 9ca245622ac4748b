# psifinance/utils/formatting.py
import datetime
import math
from typing import Any, Union


def formatar_moeda(valor: Any) -> str:
    """Formata um valor monetário no padrão exibido nas telas.
    Ex: 1234.5 -> "R$ 1234.50"
    Ex: None -> "R$ 0.00"
    """
    try:
        numero = float(valor) if valor is not None else 0.0
    except (TypeError, ValueError):
        numero = 0.0
    return f"R$ {numero:.2f}"


def formatar_data(data: Union[str, datetime.date, None]) -> str:
    """Converte "AAAA-MM-DD" (ou um timestamp ISO) para "DD/MM/AAAA".
    Retorna string vazia se a data não puder ser interpretada.
    """
    if not data:
        return ""
    if isinstance(data, datetime.date):
        return data.strftime("%d/%m/%Y")
    try:
        return datetime.datetime.strptime(str(data)[:10], "%Y-%m-%d").strftime("%d/%m/%Y")
    except ValueError:
        return ""


def parse_valor(texto: Any) -> float:
    """Converte o texto digitado no formulário para float, aceitando vírgula decimal.
    Ex: "18,50" -> 18.5
    Levanta ValueError se não for um número finito ("nan" e "inf" são recusados).
    """
    if isinstance(texto, bool) or texto is None:
        raise ValueError("valor ausente")
    if isinstance(texto, (int, float)):
        numero = float(texto)
    else:
        texto = str(texto).strip().replace("R$", "").strip()
        if "," in texto:
            texto = texto.replace(".", "").replace(",", ".")
        numero = float(texto)
    if not math.isfinite(numero):
        raise ValueError(f"valor não finito: {texto}")
    return numero


def montar_data_sessao(data: str, hora: str) -> str:
    """Junta a data (AAAA-MM-DD) e a hora (HH:MM) do formulário no timestamp gravado.
    Ex: ("2025-07-10", "14:30") -> "2025-07-10T14:30:00"
    """
    dia = datetime.datetime.strptime(data.strip(), "%Y-%m-%d").date()
    horario = datetime.datetime.strptime(hora.strip(), "%H:%M").time()
    return f"{dia.isoformat()}T{horario.strftime('%H:%M')}:00"


def separar_data_sessao(data_sessao: str) -> tuple:
    """Inverso de montar_data_sessao, usado para preencher o formulário de edição."""
    texto = str(data_sessao or "")
    data = texto[:10]
    hora = texto[11:16] if len(texto) >= 16 else ""
    return data, hora

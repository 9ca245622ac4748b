# psifinance/web/routes/__init__.py

from .auth import bp as auth_bp
from .clientes import bp as clientes_bp
from .configuracoes import bp as configuracoes_bp
from .dashboard import bp as dashboard_bp
from .financeiro import bp as financeiro_bp
from .relatorios import bp as relatorios_bp
from .sessoes import bp as sessoes_bp

ALL_BLUEPRINTS = [
    auth_bp,
    dashboard_bp,
    clientes_bp,
    sessoes_bp,
    financeiro_bp,
    relatorios_bp,
    configuracoes_bp,
]

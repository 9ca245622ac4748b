# psifinance/web/app.py
import logging
from typing import Any, Dict, Union

from flask import Flask, redirect

from psifinance.config import FLASK_SECRET_KEY
from psifinance.core.errors import AuthError, ValidationError
from psifinance.web.routes import ALL_BLUEPRINTS
from psifinance.web.utils import erro, resposta, usuario_atual

logger = logging.getLogger(__name__)


def create_app(config: Union[Dict[str, Any], None] = None) -> Flask:
    """
    Monta a aplicação Flask: uma blueprint por tela (Dashboard, Clientes,
    Sessões, Financeiro, Relatórios, Configurações) mais a autenticação.
    """
    app = Flask(__name__)
    app.secret_key = FLASK_SECRET_KEY
    app.json.ensure_ascii = False
    if config:
        app.config.update(config)

    for blueprint in ALL_BLUEPRINTS:
        app.register_blueprint(blueprint)

    @app.route("/", methods=["GET"])
    def index():
        if usuario_atual() is not None:
            return redirect("/dashboard")
        return resposta(data={"autenticado": False})

    @app.errorhandler(ValidationError)
    def handle_validation_error(e: ValidationError):
        return erro(e.message, 400)

    @app.errorhandler(AuthError)
    def handle_auth_error(e: AuthError):
        return erro(e.message, 400)

    logger.debug("Aplicação Flask configurada com %d blueprints.", len(ALL_BLUEPRINTS))
    return app

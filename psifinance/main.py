# psifinance/main.py
import logging

from psifinance.config import LOG_LEVEL
from psifinance.utils.logging_setup import setup_logging
from psifinance.web import create_app

setup_logging(LOG_LEVEL)
logger = logging.getLogger(__name__)

# Ponto de entrada para o servidor WSGI (ex: gunicorn psifinance.main:wsgi_app)
flask_app = create_app()
wsgi_app = flask_app
logger.info("Aplicação WSGI pronta.")

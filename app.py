# app.py
# Servidor de desenvolvimento. Em produção use: gunicorn psifinance.main:wsgi_app
import os

from psifinance.main import flask_app

if __name__ == "__main__":
    port = int(os.getenv("PORT", "5000"))
    flask_app.run(host="0.0.0.0", port=port, debug=os.getenv("FLASK_DEBUG") == "1")

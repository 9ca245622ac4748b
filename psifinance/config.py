# psifinance/config.py
import os
from dotenv import load_dotenv

load_dotenv()

# Configurações do Supabase
SUPABASE_URL = os.getenv("SUPABASE_URL")
SUPABASE_KEY = os.getenv("SUPABASE_KEY")

# Configurações do Flask
FLASK_SECRET_KEY = os.getenv("FLASK_SECRET_KEY", "dev-secret-key")

# Endereço público usado no redirecionamento após a confirmação do cadastro
SITE_URL = os.getenv("SITE_URL", "http://localhost:5000")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

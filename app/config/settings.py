import os
from dotenv import load_dotenv
from pathlib import Path

# Carrega o .env manualmente se estiver fora do Docker
if not os.getenv("RUNNING_IN_DOCKER"):
    dotenv_path = Path(__file__).resolve().parents[2] / ".env"
    load_dotenv(dotenv_path=dotenv_path)

# Configuração de conexão
DB_CONFIG = {
    'database': os.getenv('DB_NAME'),
    'user': os.getenv('DB_USER'),
    'password': os.getenv('DB_PASSWORD'),
    'host': os.getenv('DB_HOST'),
    'port': int(os.getenv('DB_PORT', 5432)),
}

# URL completa (tem precedência sobre DB_CONFIG; ex.: sqlite:///./pizzaria.db)
DB_URL = os.getenv('DB_URL')

# SSL do banco (opcional)
DB_SSL_MODE = os.getenv('DB_SSL_MODE')  # ex.: require, verify-ca, verify-full

# CORS
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "").split(",") if o.strip()]
CORS_ALLOW_ALL = os.getenv("CORS_ALLOW_ALL", "false").lower() in ("1", "true", "yes")

# FastAPI / App
BASE_URL = os.getenv("BASE_URL", "")
ENABLE_DOCS = os.getenv("ENABLE_DOCS", "true").lower() in ("1", "true", "yes")
INIT_DB_ON_STARTUP = os.getenv("INIT_DB_ON_STARTUP", "true").lower() in ("1", "true", "yes")

# Logs
LOG_DIR = os.getenv("LOG_DIR")

# WhatsApp (número da pizzaria com código do país)
WHATSAPP_NUMBER = os.getenv("WHATSAPP_NUMBER", "5511976916761")
NOME_ESTABELECIMENTO = os.getenv("NOME_ESTABELECIMENTO", "Pizzaria Bella Vista")

# Pedidos
PEDIDOS_STORE_TIMEOUT_SECONDS = float(os.getenv("PEDIDOS_STORE_TIMEOUT_SECONDS", 10))
CODIGO_CARRINHO_MAX_TENTATIVAS = int(os.getenv("CODIGO_CARRINHO_MAX_TENTATIVAS", 5))

# Sessões de carrinho em memória (expiram após inatividade)
CARRINHO_SESSAO_TTL_SECONDS = float(os.getenv("CARRINHO_SESSAO_TTL_SECONDS", 24 * 60 * 60))

# app/database/db_connection.py

import logging
from pathlib import Path

from sqlalchemy import create_engine, event
from sqlalchemy.engine import make_url
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool

from ..config.settings import DB_CONFIG, DB_SSL_MODE, DB_URL

# Base única para todos os models
Base = declarative_base()

# Schemas usados pelos models (__table_args__ = {"schema": ...})
SCHEMAS = ["catalogo", "pedidos"]

logger = logging.getLogger(__name__)


def montar_connection_string() -> str:
    if DB_URL:
        return DB_URL

    # Validação mínima de config
    missing = [k for k in ('database', 'user', 'password', 'host', 'port') if not DB_CONFIG.get(k)]
    if missing:
        raise RuntimeError(f"Configuração do banco inválida, faltando variáveis: {', '.join(missing)}")

    # Monta a URL de conexão (com SSL opcional via query)
    ssl_query = f"?sslmode={DB_SSL_MODE}" if DB_SSL_MODE else ""
    return (
        f"postgresql://{DB_CONFIG['user']}:{DB_CONFIG['password']}"
        f"@{DB_CONFIG['host']}:{DB_CONFIG['port']}/{DB_CONFIG['database']}{ssl_query}"
    )


def _anexar_schemas_sqlite(engine, database: str | None) -> None:
    """
    SQLite não tem schemas: cada schema vira um banco anexado (ATTACH) em toda conexão.
    Arquivo `loja.db` -> `loja_catalogo.db`, `loja_pedidos.db`.
    """
    em_memoria = not database or database == ":memory:"

    @event.listens_for(engine, "connect")
    def _attach(dbapi_connection, _connection_record):
        cursor = dbapi_connection.cursor()
        for schema in SCHEMAS:
            alvo = ":memory:" if em_memoria else str(Path(database).with_suffix("")) + f"_{schema}.db"
            cursor.execute(f"ATTACH DATABASE '{alvo}' AS {schema}")
        cursor.close()


def criar_engine(connection_string: str):
    if connection_string.startswith("postgresql"):
        return create_engine(
            connection_string,
            pool_pre_ping=True,
            connect_args={
                "options": "-c timezone=America/Sao_Paulo"
            }
        )

    if connection_string.startswith("sqlite"):
        database = make_url(connection_string).database
        kwargs = {"connect_args": {"check_same_thread": False}}
        if not database or database == ":memory:":
            # uma única conexão, senão cada conexão teria o próprio banco vazio
            kwargs["poolclass"] = StaticPool
        engine = create_engine(connection_string, **kwargs)
        _anexar_schemas_sqlite(engine, database)
        return engine

    return create_engine(connection_string, pool_pre_ping=True)


_engine = None
_session_factory = None


def get_engine():
    """Cria o engine na primeira utilização (a configuração só é exigida quando o banco é usado)."""
    global _engine
    if _engine is None:
        _engine = criar_engine(montar_connection_string())
    return _engine


def get_session_factory() -> sessionmaker:
    global _session_factory
    if _session_factory is None:
        _session_factory = sessionmaker(
            autocommit=False,
            autoflush=False,
            bind=get_engine(),
        )
    return _session_factory

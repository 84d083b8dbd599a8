import logging

from sqlalchemy import inspect, text, quoted_name

from .db_connection import Base, SCHEMAS, get_engine

logger = logging.getLogger(__name__)

TABELAS_PRINCIPAIS = [
    ("catalogo", "produtos"),
    ("catalogo", "condimentos"),
    ("catalogo", "associacao_produto_condimento"),
    ("pedidos", "pedidos"),
    ("pedidos", "produtos_vendidos"),
]


def _postgres(engine) -> bool:
    return engine.dialect.name == "postgresql"


def verificar_banco_inicializado() -> bool:
    """Verifica se o banco já foi inicializado consultando se as tabelas principais existem"""
    try:
        inspector = inspect(get_engine())
        return all(inspector.has_table(tabela, schema=schema) for schema, tabela in TABELAS_PRINCIPAIS)
    except Exception as e:
        logger.warning(f"⚠️ Erro ao verificar status de inicialização: {e}")
        return False


def configurar_timezone():
    """Configura o timezone do banco de dados para America/Sao_Paulo"""
    engine = get_engine()
    if not _postgres(engine):
        return
    try:
        with engine.begin() as conn:
            conn.execute(text("SET timezone = 'America/Sao_Paulo'"))
            timezone_atual = conn.execute(text("SHOW timezone")).scalar()
            logger.info(f"✅ Timezone do banco configurado: {timezone_atual}")
    except Exception as e:
        logger.warning(f"⚠️ Erro ao configurar timezone do banco: {e}")


def criar_schemas():
    engine = get_engine()
    if not _postgres(engine):
        # SQLite: schemas são bancos anexados na conexão (db_connection)
        return
    try:
        with engine.begin() as conn:
            for schema in SCHEMAS:
                logger.info(f"🛠️ Criando/verificando schema: {schema}")
                conn.execute(text(f'CREATE SCHEMA IF NOT EXISTS {quoted_name(schema, quote=True)}'))
        logger.info("✅ Todos os schemas verificados/criados.")
    except Exception as e:
        logger.error(f"❌ Erro ao criar schemas: {e}")


def importar_models():
    # ─── Models Catálogo ────────────────────────────────────────────
    from app.api.catalogo.models.model_produto import ProdutoModel
    from app.api.catalogo.models.model_condimento import CondimentoModel
    from app.api.catalogo.models.association_tables import associacao_produto_condimento
    # ─── Models Pedidos ─────────────────────────────────────────────
    from app.api.pedidos.models.model_pedido import PedidoModel
    from app.api.pedidos.models.model_produto_vendido import ProdutoVendidoModel
    logger.info("📦 Models importados com sucesso.")


def criar_tabelas():
    importar_models()
    try:
        Base.metadata.create_all(bind=get_engine(), checkfirst=True)
        logger.info("✅ create_all concluído (%s tabelas garantidas).", len(Base.metadata.tables))
    except Exception as e:
        logger.error("❌ Erro ao criar tabelas via SQLAlchemy (create_all): %s", e, exc_info=True)
        raise


def inicializar_banco():
    logger.info("🚀 Iniciando processo de inicialização do banco de dados...")

    logger.info("📦 Passo 1/3: Configurando timezone do banco...")
    configurar_timezone()

    logger.info("📦 Passo 2/3: Criando/verificando schemas...")
    criar_schemas()

    logger.info("📋 Passo 3/3: Criando/verificando todas as tabelas...")
    criar_tabelas()

    if not verificar_banco_inicializado():
        logger.error("❌ Banco não está inicializado (tabelas principais ausentes).")
        return

    logger.info("✅ Banco inicializado com sucesso.")

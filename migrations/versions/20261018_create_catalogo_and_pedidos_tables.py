"""Create catalogo (produtos/condimentos) and pedidos (pedidos/produtos_vendidos) tables

Revision ID: 20261018_create_catalogo_and_pedidos_tables
Revises: 
Create Date: 2026-10-18 00:00:00.000000
"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "20261018_create_catalogo_and_pedidos_tables"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    # Ensure schemas exist
    op.execute("CREATE SCHEMA IF NOT EXISTS catalogo")
    op.execute("CREATE SCHEMA IF NOT EXISTS pedidos")

    # catalogo.produtos
    op.create_table(
        "produtos",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("id_produto", sa.String(50), nullable=False),
        sa.Column("titulo", sa.String(120), nullable=False),
        sa.Column("descricao", sa.String(255), nullable=True),
        sa.Column("valor", sa.Numeric(18, 2), nullable=False, server_default="0"),
        sa.Column("categoria", sa.String(60), nullable=False),
        sa.Column("link_imagem", sa.String(255), nullable=True),
        sa.Column("ativo", sa.Boolean, nullable=False, server_default=sa.text("true")),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        schema="catalogo",
    )
    op.create_index("ix_catalogo_produtos_id_produto", "produtos", ["id_produto"], unique=True, schema="catalogo")
    op.create_index("ix_produtos_categoria", "produtos", ["categoria"], schema="catalogo")

    # catalogo.condimentos
    op.create_table(
        "condimentos",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("id_condimento", sa.String(50), nullable=False),
        sa.Column("nome_condimento", sa.String(100), nullable=False),
        sa.Column("valor_adicional", sa.Numeric(18, 2), nullable=False, server_default="0"),
        sa.Column("link_imagem", sa.String(255), nullable=True),
        sa.Column("tipo_condimento", sa.String(20), nullable=False, server_default="Adicionais"),
        sa.Column("selecao_multipla", sa.String(3), nullable=False, server_default="sim"),
        sa.Column("ativo", sa.Boolean, nullable=False, server_default=sa.text("true")),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        schema="catalogo",
    )
    op.create_index("ix_catalogo_condimentos_id_condimento", "condimentos", ["id_condimento"], unique=True, schema="catalogo")

    # catalogo.associacao_produto_condimento
    op.create_table(
        "associacao_produto_condimento",
        sa.Column("id_produto", sa.String(50), sa.ForeignKey("catalogo.produtos.id_produto", ondelete="CASCADE"), primary_key=True),
        sa.Column("id_condimento", sa.String(50), sa.ForeignKey("catalogo.condimentos.id_condimento", ondelete="CASCADE"), primary_key=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        schema="catalogo",
    )

    # pedidos.pedidos (cabeçalho)
    op.create_table(
        "pedidos",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("id_pedido", sa.String(40), nullable=False, unique=True),
        sa.Column("carrinho", sa.String(6), nullable=False),
        sa.Column("nome_usuario", sa.String(120), nullable=False),
        sa.Column("telefone", sa.String(30), nullable=False),
        sa.Column("cep", sa.String(10), nullable=False),
        sa.Column("logradouro", sa.String(255), nullable=False),
        sa.Column("numero", sa.String(20), nullable=False),
        sa.Column("complemento", sa.String(120), nullable=True),
        sa.Column("cidade", sa.String(120), nullable=False),
        sa.Column("bairro", sa.String(120), nullable=False),
        sa.Column("tipo_pagamento", sa.String(30), nullable=False),
        sa.Column("data_pedido", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("aprovado", sa.String(3), nullable=False, server_default=""),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        schema="pedidos",
    )
    op.create_index("idx_pedidos_carrinho", "pedidos", ["carrinho"], unique=True, schema="pedidos")

    # pedidos.produtos_vendidos (uma linha por unidade ou por condimento de uma unidade)
    op.create_table(
        "produtos_vendidos",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("id_produtos_vendidos", sa.String(120), nullable=False, unique=True),
        sa.Column("id_pedido", sa.String(40), nullable=False),
        sa.Column("id_produto", sa.String(50), nullable=False),
        sa.Column("id_condimento", sa.String(50), nullable=True),
        sa.Column("valor", sa.Numeric(18, 2), nullable=False, server_default="0"),
        sa.Column("carrinho", sa.String(6), nullable=False),
        sa.Column("data_pedido", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("aprovado", sa.String(3), nullable=False, server_default=""),
        schema="pedidos",
    )
    op.create_index("idx_produtos_vendidos_carrinho", "produtos_vendidos", ["carrinho"], schema="pedidos")
    op.create_index("idx_produtos_vendidos_pedido", "produtos_vendidos", ["id_pedido"], schema="pedidos")


def downgrade() -> None:
    op.drop_index("idx_produtos_vendidos_pedido", table_name="produtos_vendidos", schema="pedidos")
    op.drop_index("idx_produtos_vendidos_carrinho", table_name="produtos_vendidos", schema="pedidos")
    op.drop_index("idx_pedidos_carrinho", table_name="pedidos", schema="pedidos")
    op.drop_index("ix_produtos_categoria", table_name="produtos", schema="catalogo")
    op.drop_index("ix_catalogo_condimentos_id_condimento", table_name="condimentos", schema="catalogo")
    op.drop_index("ix_catalogo_produtos_id_produto", table_name="produtos", schema="catalogo")

    op.drop_table("produtos_vendidos", schema="pedidos")
    op.drop_table("pedidos", schema="pedidos")
    op.drop_table("associacao_produto_condimento", schema="catalogo")
    op.drop_table("condimentos", schema="catalogo")
    op.drop_table("produtos", schema="catalogo")

"""skills section and snippet id allocation

Revision ID: 0002
Revises: 0001
Create Date: 2024-02-03 09:30:00

"""
from alembic import op
import sqlalchemy as sa

revision = "0002"
down_revision = "0001"
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        "text_snippet_ids",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
    )
    op.execute("INSERT INTO text_snippet_ids (id) SELECT DISTINCT id FROM text_snippets")
    if op.get_bind().dialect.name == "postgresql":
        op.execute(
            "SELECT setval(pg_get_serial_sequence('text_snippet_ids', 'id'), "
            "COALESCE((SELECT MAX(id) FROM text_snippet_ids), 0) + 1, false)"
        )

    with op.batch_alter_table("text_snippets") as batch_op:
        batch_op.create_foreign_key(
            "fk_text_snippets_id", "text_snippet_ids", ["id"], ["id"], ondelete="CASCADE"
        )

    op.create_table(
        "documents_x_skills",
        sa.Column(
            "document_id", sa.Integer,
            sa.ForeignKey("documents.id", ondelete="CASCADE"), primary_key=True
        ),
        sa.Column("text_snippet_id", sa.Integer, primary_key=True),
        sa.Column("text_snippet_version", sa.DateTime, nullable=False),
        sa.Column("position", sa.Integer, nullable=False),
        sa.ForeignKeyConstraint(
            ["text_snippet_id", "text_snippet_version"],
            ["text_snippets.id", "text_snippets.version"],
            ondelete="CASCADE",
        ),
        sa.UniqueConstraint("document_id", "position", name="uq_documents_x_skills_position"),
    )

    op.execute("INSERT INTO sections (section_name) VALUES ('Skills')")


def downgrade():
    op.execute("DELETE FROM sections WHERE section_name = 'Skills'")
    op.drop_table("documents_x_skills")
    with op.batch_alter_table("text_snippets") as batch_op:
        batch_op.drop_constraint("fk_text_snippets_id", type_="foreignkey")
    op.drop_table("text_snippet_ids")

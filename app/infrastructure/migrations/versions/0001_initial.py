"""initial schema

Revision ID: 0001
Revises:
Create Date: 2024-01-15 12:00:00

"""
from alembic import op
import sqlalchemy as sa

revision = "0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        "users",
        sa.Column("username", sa.String(30), primary_key=True),
        sa.Column("password", sa.String(255), nullable=False),
    )
    op.create_table(
        "contact_info",
        sa.Column(
            "username", sa.String(30),
            sa.ForeignKey("users.username", ondelete="CASCADE"), primary_key=True
        ),
        sa.Column("full_name", sa.String(255), nullable=False),
        sa.Column("location", sa.String(255)),
        sa.Column("email", sa.String(255)),
        sa.Column("phone", sa.String(50)),
        sa.Column("linkedin", sa.String(255)),
        sa.Column("github", sa.String(255)),
    )
    op.create_table(
        "documents",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("document_name", sa.String(50), nullable=False),
        sa.Column(
            "owner", sa.String(30),
            sa.ForeignKey("users.username", ondelete="CASCADE"), nullable=False
        ),
        sa.Column("created_on", sa.DateTime, nullable=False),
        sa.Column("last_updated", sa.DateTime),
        sa.Column("is_master", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("is_template", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("is_locked", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.UniqueConstraint("owner", "document_name", name="uq_documents_owner_name"),
    )
    sections = op.create_table(
        "sections",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("section_name", sa.String(50), nullable=False, unique=True),
    )
    op.create_table(
        "educations",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column(
            "owner", sa.String(30),
            sa.ForeignKey("users.username", ondelete="CASCADE"), nullable=False
        ),
        sa.Column("school", sa.String(255), nullable=False),
        sa.Column("location", sa.String(255), nullable=False),
        sa.Column("start_date", sa.Date, nullable=False),
        sa.Column("end_date", sa.Date),
        sa.Column("degree", sa.String(255), nullable=False),
        sa.Column("gpa", sa.String(50)),
        sa.Column("awards_and_honors", sa.String(500)),
        sa.Column("activities", sa.String(500)),
    )
    op.create_table(
        "experiences",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column(
            "owner", sa.String(30),
            sa.ForeignKey("users.username", ondelete="CASCADE"), nullable=False
        ),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("organization", sa.String(255), nullable=False),
        sa.Column("location", sa.String(255), nullable=False),
        sa.Column("start_date", sa.Date, nullable=False),
        sa.Column("end_date", sa.Date),
    )
    op.create_table(
        "text_snippets",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=False),
        sa.Column("version", sa.DateTime, primary_key=True),
        sa.Column(
            "owner", sa.String(30),
            sa.ForeignKey("users.username", ondelete="CASCADE"), nullable=False
        ),
        sa.Column("parent", sa.DateTime),
        sa.Column("type", sa.String(50), nullable=False),
        sa.Column("content", sa.Text, nullable=False),
    )
    op.create_table(
        "documents_x_sections",
        sa.Column(
            "document_id", sa.Integer,
            sa.ForeignKey("documents.id", ondelete="CASCADE"), primary_key=True
        ),
        sa.Column(
            "section_id", sa.Integer,
            sa.ForeignKey("sections.id", ondelete="CASCADE"), primary_key=True
        ),
        sa.Column("position", sa.Integer, nullable=False),
        sa.UniqueConstraint("document_id", "position", name="uq_documents_x_sections_position"),
    )
    op.create_table(
        "documents_x_educations",
        sa.Column(
            "document_id", sa.Integer,
            sa.ForeignKey("documents.id", ondelete="CASCADE"), primary_key=True
        ),
        sa.Column(
            "education_id", sa.Integer,
            sa.ForeignKey("educations.id", ondelete="CASCADE"), primary_key=True
        ),
        sa.Column("position", sa.Integer, nullable=False),
        sa.UniqueConstraint("document_id", "position", name="uq_documents_x_educations_position"),
    )
    op.create_table(
        "documents_x_experiences",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column(
            "document_id", sa.Integer,
            sa.ForeignKey("documents.id", ondelete="CASCADE"), nullable=False
        ),
        sa.Column(
            "experience_id", sa.Integer,
            sa.ForeignKey("experiences.id", ondelete="CASCADE"), nullable=False
        ),
        sa.Column("position", sa.Integer, nullable=False),
        sa.UniqueConstraint("document_id", "experience_id", name="uq_documents_x_experiences_item"),
        sa.UniqueConstraint("document_id", "position", name="uq_documents_x_experiences_position"),
    )
    op.create_table(
        "experiences_x_text_snippets",
        sa.Column(
            "document_x_experience_id", sa.Integer,
            sa.ForeignKey("documents_x_experiences.id", ondelete="CASCADE"), primary_key=True
        ),
        sa.Column("text_snippet_id", sa.Integer, primary_key=True),
        sa.Column("text_snippet_version", sa.DateTime, nullable=False),
        sa.Column("position", sa.Integer, nullable=False),
        sa.ForeignKeyConstraint(
            ["text_snippet_id", "text_snippet_version"],
            ["text_snippets.id", "text_snippets.version"],
            ondelete="CASCADE",
        ),
        sa.UniqueConstraint(
            "document_x_experience_id", "position",
            name="uq_experiences_x_text_snippets_position",
        ),
    )

    op.bulk_insert(sections, [{"section_name": name} for name in ("Education", "Experience")])


def downgrade():
    op.drop_table("experiences_x_text_snippets")
    op.drop_table("documents_x_experiences")
    op.drop_table("documents_x_educations")
    op.drop_table("documents_x_sections")
    op.drop_table("text_snippets")
    op.drop_table("experiences")
    op.drop_table("educations")
    op.drop_table("sections")
    op.drop_table("documents")
    op.drop_table("contact_info")
    op.drop_table("users")

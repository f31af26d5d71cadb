"""add unique constraint assignment grade per enrollment

Revision ID: 8b2e4d6f0a31
Revises: 3f1c2a9d7b10
Create Date: 2026-10-14 09:41:07.552913

"""
from typing import Sequence, Union

from alembic import op


# revision identifiers, used by Alembic.
revision: str = '8b2e4d6f0a31'
down_revision: Union[str, Sequence[str], None] = '3f1c2a9d7b10'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    # SQLite cannot ALTER constraints in place
    with op.batch_alter_table("assignment_grades", recreate="always") as batch_op:
        batch_op.create_unique_constraint(
            "uq_assignment_grade_assignment_enrollment",
            ["assignment_id", "enrollment_id"],
        )


def downgrade() -> None:
    """Downgrade schema."""
    with op.batch_alter_table("assignment_grades", recreate="always") as batch_op:
        batch_op.drop_constraint(
            "uq_assignment_grade_assignment_enrollment",
            type_="unique",
        )

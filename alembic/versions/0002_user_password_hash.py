"""password hash on users"""
from alembic import op
import sqlalchemy as sa

revision = "0002_user_password_hash"
down_revision = "0001_core_schema"
branch_labels = None
depends_on = None

def upgrade():
    op.add_column("users", sa.Column("password_hash", sa.String(255), nullable=True))

def downgrade():
    with op.batch_alter_table("users") as batch:
        batch.drop_column("password_hash")

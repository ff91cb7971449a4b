from alembic import op

revision = "member_directory_0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.execute("""
        CREATE TABLE IF NOT EXISTS countries (
            code VARCHAR(3) PRIMARY KEY,
            demonym VARCHAR(100) NOT NULL,
            flag_emoji VARCHAR(16)
        );

        CREATE TABLE IF NOT EXISTS students (
            id SERIAL PRIMARY KEY,
            email VARCHAR(255) NOT NULL UNIQUE,
            first_name VARCHAR(100),
            last_name VARCHAR(100),
            created_at TIMESTAMPTZ DEFAULT NOW(),
            updated_at TIMESTAMPTZ DEFAULT NOW()
        );

        ALTER TABLE students ADD COLUMN IF NOT EXISTS hometown TEXT;
        ALTER TABLE students ADD COLUMN IF NOT EXISTS hometown_coordinates POINT;

        CREATE TABLE IF NOT EXISTS member_ethnicities (
            student_id INTEGER NOT NULL REFERENCES students(id) ON DELETE CASCADE,
            country_code VARCHAR(3) NOT NULL REFERENCES countries(code),
            PRIMARY KEY (student_id, country_code)
        );

        CREATE INDEX IF NOT EXISTS idx_member_ethnicities_country_code ON member_ethnicities(country_code);
    """)


def downgrade():
    op.execute("DROP TABLE IF EXISTS member_ethnicities CASCADE;")
    op.execute("DROP TABLE IF EXISTS countries CASCADE;")
    op.execute("ALTER TABLE students DROP COLUMN IF EXISTS hometown_coordinates;")
    op.execute("ALTER TABLE students DROP COLUMN IF EXISTS hometown;")

"""
db/init_db.py
-------------
Creates the GuideResto schema (tables and id sequences) if it does not
already exist. Run this module directly to initialize a fresh database:
    python -m db.init_db
"""

from db.connection import transaction
from utils.logger import get_logger

logger = get_logger(__name__)

TABLES_SQL: tuple[str, ...] = (
    # Cities
    """
    CREATE TABLE IF NOT EXISTS villes (
        numero          INTEGER PRIMARY KEY,
        code_postal     VARCHAR(100) NOT NULL,
        nom_ville       VARCHAR(100) NOT NULL
    );
    """,
    # Gastronomic types
    """
    CREATE TABLE IF NOT EXISTS types_gastronomiques (
        numero          INTEGER PRIMARY KEY,
        libelle         VARCHAR(100) NOT NULL,
        description     VARCHAR(4000)
    );
    """,
    """
    CREATE TABLE IF NOT EXISTS restaurants (
        numero          INTEGER PRIMARY KEY,
        nom             VARCHAR(100) NOT NULL,
        adresse         VARCHAR(100) NOT NULL,
        description     VARCHAR(4000),
        site_web        VARCHAR(100),
        fk_type         INTEGER NOT NULL REFERENCES types_gastronomiques(numero),
        fk_vill         INTEGER NOT NULL REFERENCES villes(numero)
    );
    """,
    # Basic evaluations: appreciation is 'T' (like) or 'F' (dislike)
    """
    CREATE TABLE IF NOT EXISTS likes (
        numero          INTEGER PRIMARY KEY,
        appreciation    CHAR(1) NOT NULL CHECK (appreciation IN ('T', 'F')),
        date_eval       DATE NOT NULL,
        adresse_ip      VARCHAR(100) NOT NULL,
        fk_rest         INTEGER NOT NULL REFERENCES restaurants(numero)
    );
    """,
    # Complete evaluations
    """
    CREATE TABLE IF NOT EXISTS commentaires (
        numero          INTEGER PRIMARY KEY,
        date_eval       DATE NOT NULL,
        commentaire     VARCHAR(4000) NOT NULL,
        nom_utilisateur VARCHAR(100) NOT NULL,
        fk_rest         INTEGER NOT NULL REFERENCES restaurants(numero)
    );
    """,
    """
    CREATE TABLE IF NOT EXISTS criteres_evaluation (
        numero          INTEGER PRIMARY KEY,
        nom             VARCHAR(100) NOT NULL,
        description     VARCHAR(512)
    );
    """,
    # Grades: one per (complete evaluation, criterion)
    """
    CREATE TABLE IF NOT EXISTS notes (
        numero          INTEGER PRIMARY KEY,
        note            INTEGER NOT NULL,
        fk_comm         INTEGER NOT NULL REFERENCES commentaires(numero),
        fk_crit         INTEGER NOT NULL REFERENCES criteres_evaluation(numero)
    );
    """,
)

# LIKES and COMMENTAIRES share seq_eval so evaluation ids never collide.
SEQUENCES_SQL: tuple[str, ...] = (
    "CREATE SEQUENCE IF NOT EXISTS seq_villes;",
    "CREATE SEQUENCE IF NOT EXISTS seq_types_gastronomiques;",
    "CREATE SEQUENCE IF NOT EXISTS seq_restaurants;",
    "CREATE SEQUENCE IF NOT EXISTS seq_eval;",
    "CREATE SEQUENCE IF NOT EXISTS seq_criteres_evaluation;",
    "CREATE SEQUENCE IF NOT EXISTS seq_notes;",
)


def create_tables(with_sequences: bool = True) -> None:
    """
    Execute the schema DDL to create all tables (and sequences).
    Safe to call multiple times (uses IF NOT EXISTS).

    Args:
        with_sequences: Also create the id sequences. Stores that provide
            ``nextval`` some other way can skip them.
    """
    statements = TABLES_SQL + (SEQUENCES_SQL if with_sequences else ())
    try:
        with transaction() as cur:
            for statement in statements:
                cur.execute(statement)
        logger.info("Database schema initialized successfully.")
    except Exception as e:
        logger.error(f"Failed to initialize schema: {e}")
        raise


if __name__ == "__main__":
    from db.connection import init_pool
    init_pool()
    create_tables()
    print("Database schema created successfully.")

"""Resolution of driver type codes into type names.

psycopg2 reports a column's type as the OID of its ``pg_type`` row. The
names are looked up in the catalog on the same connection and upper-cased,
so ``int4`` becomes ``INT4`` and ``text`` becomes ``TEXT``.
"""

from typing import Any, Dict, List, Sequence

from sqlalchemy import bindparam, text
from sqlalchemy.engine import Connection

from pgdatasource.logging import get_logger

logger = get_logger(__name__)


_PG_TYPE_QUERY = text(
    "SELECT oid, typname FROM pg_catalog.pg_type WHERE oid IN :oids"
).bindparams(bindparam("oids", expanding=True))


class PgTypeNameResolver:
    """Resolve PostgreSQL type OIDs through ``pg_catalog.pg_type``."""

    def resolve(self, connection: Connection, type_codes: Sequence[Any]) -> List[str]:
        oids = sorted({code for code in type_codes if isinstance(code, int)})
        names: Dict[int, str] = {}
        if oids:
            rows = connection.execute(_PG_TYPE_QUERY, {"oids": oids})
            names = {int(oid): str(typname).upper() for oid, typname in rows}

        missing = [code for code in oids if code not in names]
        if missing:
            logger.warning("Unknown type OIDs in result description", extra={"oids": missing})

        return [names.get(code, "") if isinstance(code, int) else "" for code in type_codes]


class GenericTypeNameResolver:
    """Use the type code itself as the name.

    Used for drivers that report names (or nothing) rather than catalog
    identifiers.
    """

    def resolve(self, connection: Connection, type_codes: Sequence[Any]) -> List[str]:
        resolved: List[str] = []
        for code in type_codes:
            if code is None:
                resolved.append("")
            elif isinstance(code, str):
                resolved.append(code.upper())
            else:
                resolved.append(getattr(code, "__name__", str(code)).upper())
        return resolved


def resolver_for_dialect(dialect_name: str):
    """Pick the type name resolver matching a SQLAlchemy dialect name."""
    if dialect_name == "postgresql":
        return PgTypeNameResolver()
    return GenericTypeNameResolver()

"""
Script de migración de estados de operaciones.
Convierte los cuatro estados anteriores (pendiente, en_proceso, completada,
cancelada) a los tres vigentes. Con --down aplica la conversión inversa.

    python migrate_operacion_estados.py [--down]
"""
import sys
import logging

from sqlalchemy import update

from models import db, Operacion, ESTADOS_LEGADOS, ESTADOS_REVERSION

logger = logging.getLogger(__name__)


def upgrade_mapping():
    return {antiguo: nuevo.value for antiguo, nuevo in ESTADOS_LEGADOS.items()}


def downgrade_mapping():
    return {actual.value: antiguo for actual, antiguo in ESTADOS_REVERSION.items()}


def apply_mapping(mapping):
    """Actualiza en bloque, sin pasar por los validadores del modelo."""
    tabla = Operacion.__table__
    resultado = {}
    for origen, destino in mapping.items():
        res = db.session.execute(
            update(tabla).where(tabla.c.estado == origen).values(estado=destino)
        )
        resultado[origen] = res.rowcount
    db.session.commit()
    return resultado


def run_migration(down=False):
    mapping = downgrade_mapping() if down else upgrade_mapping()
    resultado = apply_mapping(mapping)
    total = sum(resultado.values())
    logger.info(f"ESTADOS_MIGRATION | direction={'down' if down else 'up'} | rows={total}")
    return resultado


if __name__ == "__main__":
    from app import create_app

    down = "--down" in sys.argv[1:]
    app = create_app({"SEED_DEFAULTS": False})

    with app.app_context():
        print(f"=== Migrando estados de operaciones ({'down' if down else 'up'}) ===\n")
        for origen, filas in run_migration(down=down).items():
            print(f"   {origen}: {filas} operaciones")
        print("\n=== Migración completada ===")

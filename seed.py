#!/usr/bin/env python3
"""
Datos iniciales de CotizAI.
Crea los usuarios admin y cotizador si no existen y, con la tabla vacía,
tres operaciones de ejemplo. Se puede ejecutar varias veces sin duplicar.
"""

import logging
from datetime import datetime

from models import db, User, Operacion, OperacionEstado

logger = logging.getLogger(__name__)

DEFAULT_PASSWORD = "12345"

DEFAULT_USERS = (
    {"nombre": "Administrador", "username": "admin", "rol": "admin", "area": "Administración"},
    {"nombre": "Cotizador", "username": "cotizador", "rol": "cotizador", "area": "Comercial"},
)

SAMPLE_OPERACIONES = (
    {
        "nombre": "Cotización Web Inmobiliaria",
        "fecha": datetime(2024, 1, 15),
        "estado": OperacionEstado.APROBADO,
        "area": "Comercial",
        "data": {
            "nombreEmpresa": "Inmobiliaria Ejemplo SAC",
            "rubro": "Inmobiliario",
            "servicio": "Web Multiproyecto",
            "tipo": "Complejo",
        },
    },
    {
        "nombre": "Desarrollo E-commerce Retail",
        "fecha": datetime(2024, 1, 20),
        "estado": OperacionEstado.EN_REVISION,
        "area": "Marketing",
        "data": {
            "nombreEmpresa": "Retail Digital SAC",
            "rubro": "Retail",
            "servicio": "E-Commerce",
            "tipo": "Complejo",
        },
    },
    {
        "nombre": "Landing Page Financiera",
        "fecha": datetime(2024, 1, 25),
        "estado": OperacionEstado.DESESTIMADO,
        "area": "TI",
        "data": {
            "nombreEmpresa": "Banco Digital SAC",
            "rubro": "Financiero",
            "servicio": "Landing",
            "tipo": "Básico",
        },
    },
)


def seed_users():
    creados = 0
    for datos in DEFAULT_USERS:
        if User.query.filter_by(username=datos["username"]).first():
            continue
        user = User(**datos)
        user.set_password(DEFAULT_PASSWORD)
        db.session.add(user)
        creados += 1
    db.session.commit()
    return creados


def seed_operaciones():
    if Operacion.query.count() > 0:
        return 0
    admin = User.query.filter_by(username="admin").first()
    if not admin:
        return 0
    for datos in SAMPLE_OPERACIONES:
        db.session.add(Operacion(user_id=admin.id, **datos))
    db.session.commit()
    return len(SAMPLE_OPERACIONES)


def seed_defaults():
    """Debe llamarse dentro de un app context."""
    usuarios = seed_users()
    operaciones = seed_operaciones()
    logger.info(f"SEED_DONE | users_created={usuarios} | operaciones_created={operaciones}")
    return {"users": usuarios, "operaciones": operaciones}


if __name__ == "__main__":
    from app import create_app

    app = create_app({"SEED_DEFAULTS": False})
    with app.app_context():
        resultado = seed_defaults()
        print(f"Usuarios creados: {resultado['users']}")
        print(f"Operaciones de ejemplo creadas: {resultado['operaciones']}")

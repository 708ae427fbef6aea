"""
Servicio de autenticación
=========================
Valida credenciales, emite tokens JWT (HS256, 24 h) y los verifica.
El área enviada al iniciar sesión se guarda en el token tal cual llega;
no se comprueba que el usuario pertenezca a esa área.
"""

import os
import logging
from datetime import datetime, timedelta, timezone

from jose import jwt, JWTError, ExpiredSignatureError

import user_service
from errors import AuthenticationError

logger = logging.getLogger(__name__)

JWT_SECRET = os.environ.get("JWT_SECRET", "your-secret-key")
JWT_ALGORITHM = "HS256"
JWT_EXPIRES_HOURS = int(os.environ.get("JWT_EXPIRES_HOURS", "24"))


def validate_user(username, password):
    user = user_service.validate_user(username, password)
    if user:
        return user.to_dict()
    return None


def create_access_token(user, area, expires_hours=None):
    now = datetime.now(timezone.utc)
    hours = JWT_EXPIRES_HOURS if expires_hours is None else expires_hours
    payload = {
        "sub": str(user["id"]),
        "username": user["username"],
        "rol": user["rol"],
        "area": area,
        "iat": int(now.timestamp()),
        "exp": int((now + timedelta(hours=hours)).timestamp()),
    }
    return jwt.encode(payload, JWT_SECRET, algorithm=JWT_ALGORITHM)


def login(user, selected_area=None):
    area = selected_area or user["area"]
    token = create_access_token(user, area)
    logger.info(f"LOGIN | user_id={user['id']} | area={area}")
    return {
        "access_token": token,
        "user": {
            "id": user["id"],
            "nombre": user["nombre"],
            "username": user["username"],
            "rol": user["rol"],
            "area": area,
        },
    }


def decode_token(token):
    """Devuelve los claims del token con 'sub' como entero."""
    if not token:
        raise AuthenticationError()
    try:
        claims = jwt.decode(token, JWT_SECRET, algorithms=[JWT_ALGORITHM])
    except ExpiredSignatureError:
        raise AuthenticationError("Token expirado")
    except JWTError:
        raise AuthenticationError("Token inválido")

    try:
        claims["sub"] = int(claims["sub"])
    except (KeyError, TypeError, ValueError):
        raise AuthenticationError("Token inválido")
    return claims


def register(data):
    user = user_service.create_user(
        nombre=(data.get("nombre") or "").strip(),
        username=(data.get("username") or "").strip(),
        password=data.get("password") or "",
        rol=data.get("rol") or "cotizador",
        area=(data.get("area") or "").strip(),
    )
    return user.to_dict()


def get_profile(user_id):
    user = user_service.get_user_by_id(user_id)
    if user:
        return user.to_dict()
    return None


def update_profile(user_id, changes):
    permitidos = {k: changes[k] for k in ("nombre", "area", "password") if k in changes}
    user = user_service.update_user(user_id, permitidos)
    if user:
        return user.to_dict()
    return None

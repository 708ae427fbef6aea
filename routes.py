import logging
from functools import wraps
from datetime import datetime, timezone

from flask import Blueprint, request, jsonify, g
from flask_login import login_required, current_user

import auth_service
import user_service
import operacion_service
import ai_generators
from errors import AuthenticationError, AuthorizationError, NotFoundError, ValidationError
from web_analyzer import analizar_con_respaldo
from web_crawler import CrawlerStrategy
from structure_analyzer import EstructuraStrategy

logger = logging.getLogger(__name__)

auth_bp = Blueprint("auth", __name__, url_prefix="/auth")

HEURISTICA = CrawlerStrategy()
ESTRUCTURA = EstructuraStrategy()


def admin_required(f):
    @wraps(f)
    @login_required
    def decorated_function(*args, **kwargs):
        if not current_user.is_admin():
            raise AuthorizationError()
        return f(*args, **kwargs)
    return decorated_function


def _payload():
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def _claims():
    return getattr(g, "token_claims", None) or {}


def _token_area():
    return _claims().get("area") or current_user.area


def _operacion_or_404(operacion_id):
    operacion = operacion_service.get_operacion_by_id(operacion_id)
    if not operacion:
        raise NotFoundError("Operación no encontrada")
    return operacion


# ---------------------------------------------------------------------------
# Autenticación y perfil
# ---------------------------------------------------------------------------

@auth_bp.route("/login", methods=["POST"])
def login():
    data = _payload()
    user = auth_service.validate_user(data.get("username"), data.get("password"))
    if not user:
        raise AuthenticationError("Credenciales inválidas")
    # El área elegida no se valida contra la del usuario
    return jsonify(auth_service.login(user, data.get("area")))


@auth_bp.route("/register", methods=["POST"])
def register():
    user = auth_service.register(_payload())
    return jsonify({"success": True, "user": user}), 201


@auth_bp.route("/profile", methods=["GET"])
@login_required
def profile():
    return jsonify({"success": True, "user": auth_service.get_profile(current_user.id)})


@auth_bp.route("/profile", methods=["PUT"])
@login_required
def update_profile():
    user = auth_service.update_profile(current_user.id, _payload())
    return jsonify({"success": True, "user": user})


@auth_bp.route("/validate", methods=["GET"])
@login_required
def validate():
    claims = _claims()
    return jsonify({
        "valid": True,
        "user": {
            "id": claims.get("sub", current_user.id),
            "username": claims.get("username", current_user.username),
            "rol": claims.get("rol", current_user.rol),
            "area": _token_area(),
        },
    })


@auth_bp.route("/usuarios", methods=["GET"])
@admin_required
def listar_usuarios():
    return jsonify({"success": True, "usuarios": [u.to_dict() for u in user_service.get_all_users()]})


@auth_bp.route("/usuarios/<int:user_id>", methods=["DELETE"])
@admin_required
def eliminar_usuario(user_id):
    if user_id == current_user.id:
        raise ValidationError("No puedes eliminar tu propio usuario")
    if not user_service.delete_user(user_id):
        raise NotFoundError("Usuario no encontrado")
    return jsonify({"success": True})


# ---------------------------------------------------------------------------
# Análisis web: siempre 200, con respaldo si la página o la IA fallan
# ---------------------------------------------------------------------------

def _respuesta_analisis(estrategia):
    data, success = analizar_con_respaldo(_payload(), estrategia)
    return jsonify({
        "success": success,
        "data": data,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    })


@auth_bp.route("/analizar-web", methods=["POST"])
def analizar_web():
    return _respuesta_analisis(HEURISTICA)


@auth_bp.route("/analizar-web-avanzado", methods=["POST"])
def analizar_web_avanzado():
    return _respuesta_analisis(ESTRUCTURA)


@auth_bp.route("/analizar-estructura-web", methods=["POST"])
def analizar_estructura_web():
    return _respuesta_analisis(ESTRUCTURA)


# ---------------------------------------------------------------------------
# Generadores de texto
# ---------------------------------------------------------------------------

@auth_bp.route("/generar-descripcion-proyecto", methods=["POST"])
def generar_descripcion_proyecto():
    data = _payload()
    descripcion = ai_generators.generar_descripcion_proyecto(data.get("rubro", ""), data.get("servicio", ""))
    return jsonify({"success": True, "descripcion": descripcion})


@auth_bp.route("/analizar-tiempo-desarrollo", methods=["POST"])
def analizar_tiempo_desarrollo():
    texto = _payload().get("tiempoDesarrollo", "")
    return jsonify({"success": True, "tiempoAnalizado": ai_generators.analizar_tiempo_desarrollo(texto)})


@auth_bp.route("/mejorar-requerimientos", methods=["POST"])
def mejorar_requerimientos():
    data = _payload()
    mejorados = ai_generators.mejorar_requerimientos(
        data.get("requerimientos", ""), data.get("rubro"), data.get("servicio")
    )
    return jsonify({"success": True, "requerimientosMejorados": mejorados})


# ---------------------------------------------------------------------------
# Operaciones
# ---------------------------------------------------------------------------

@auth_bp.route("/operaciones", methods=["GET"])
@login_required
def listar_operaciones():
    pagina = request.args.get("pagina", 1, type=int)
    por_pagina = request.args.get("porPagina", operacion_service.POR_PAGINA_DEFECTO, type=int)
    area = request.args.get("area", "todas")
    return jsonify(operacion_service.get_operaciones_con_paginacion(current_user.id, pagina, por_pagina, area))


@auth_bp.route("/operaciones", methods=["POST"])
@admin_required
def crear_operacion():
    data = _payload()
    operacion = operacion_service.create_operacion({
        "nombre": data.get("nombre"),
        "fecha": data.get("fecha"),
        "estado": data.get("estado"),
        "area": data.get("area") or _token_area(),
        "data": data.get("data"),
        "userId": current_user.id,
    })
    return jsonify(operacion.to_dict()), 201


@auth_bp.route("/guardar-cotizacion", methods=["POST"])
@login_required
def guardar_cotizacion():
    data = _payload()
    operacion = operacion_service.create_cotizacion({
        "nombre": data.get("nombre"),
        "data": data.get("data"),
        "area": _token_area(),
        "userId": current_user.id,
    })
    return jsonify(operacion.to_dict()), 201


@auth_bp.route("/operaciones/<int:operacion_id>", methods=["GET"])
@admin_required
def obtener_operacion(operacion_id):
    return jsonify(_operacion_or_404(operacion_id).to_dict())


@auth_bp.route("/operaciones/<int:operacion_id>", methods=["PUT"])
@admin_required
def actualizar_operacion(operacion_id):
    payload = _payload()
    cambios = payload.get("operacionData", payload)
    operacion = operacion_service.update_operacion(operacion_id, cambios)
    if not operacion:
        raise NotFoundError("Operación no encontrada")
    return jsonify(operacion.to_dict())


@auth_bp.route("/operaciones/<int:operacion_id>/estado", methods=["PUT"])
@admin_required
def actualizar_estado_operacion(operacion_id):
    estado = _payload().get("estado")
    if not estado:
        raise ValidationError("El estado es obligatorio")
    operacion = operacion_service.update_operacion_estado(operacion_id, estado)
    if not operacion:
        raise NotFoundError("Operación no encontrada")
    return jsonify(operacion.to_dict())


@auth_bp.route("/operaciones/<int:operacion_id>", methods=["DELETE"])
@admin_required
def eliminar_operacion(operacion_id):
    if not operacion_service.delete_operacion(operacion_id):
        raise NotFoundError("Operación no encontrada")
    return jsonify({"success": True})


@auth_bp.route("/areas", methods=["GET"])
@login_required
def listar_areas():
    return jsonify(operacion_service.get_areas_unicas())

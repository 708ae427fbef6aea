"""
Errores de dominio de CotizAI
=============================
Cada error lleva el código HTTP con el que se responde. Los handlers de
Flask en app.py los convierten en {"success": false, "error": mensaje}.
"""


class CotizaError(Exception):
    status_code = 500
    default_message = "Error interno del servidor"

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self):
        return {"success": False, "error": self.message}


class AuthenticationError(CotizaError):
    """Token ausente, inválido o expirado, o credenciales incorrectas."""
    status_code = 401
    default_message = "Token de autenticación requerido"


class AuthorizationError(CotizaError):
    status_code = 403
    default_message = "Acceso denegado. Se requieren permisos de administrador."


class ValidationError(CotizaError):
    status_code = 400
    default_message = "Datos inválidos"


class DuplicateUserError(ValidationError):
    default_message = "El usuario ya existe"


class NotFoundError(CotizaError):
    status_code = 404
    default_message = "Recurso no encontrado"


class UpstreamError(CotizaError):
    """Fallo de un servicio externo (descarga de la página o API de IA).

    Los servicios lo resuelven con un respaldo determinístico; solo llega
    al cliente si algo lo deja escapar.
    """
    status_code = 502
    default_message = "Servicio externo no disponible"


class ServerError(CotizaError):
    status_code = 500


class NarrativeGenerationError(ServerError):
    default_message = "Error interno del servidor al analizar la página web"

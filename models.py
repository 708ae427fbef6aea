from datetime import datetime
from enum import Enum

from flask_sqlalchemy import SQLAlchemy
from flask_login import UserMixin
from sqlalchemy.orm import DeclarativeBase, validates
from werkzeug.security import generate_password_hash, check_password_hash

from errors import ValidationError


class Base(DeclarativeBase):
    pass


db = SQLAlchemy(model_class=Base)


ROLES = ('admin', 'cotizador')


class OperacionEstado(str, Enum):
    EN_REVISION = 'en_revision'
    APROBADO = 'aprobado'
    DESESTIMADO = 'desestimado'


# Estados del esquema anterior (4 estados) -> estado vigente
ESTADOS_LEGADOS = {
    'pendiente': OperacionEstado.EN_REVISION,
    'en_proceso': OperacionEstado.EN_REVISION,
    'completada': OperacionEstado.APROBADO,
    'cancelada': OperacionEstado.DESESTIMADO,
}

# Inverso usado solo al revertir la migración
ESTADOS_REVERSION = {
    OperacionEstado.EN_REVISION: 'pendiente',
    OperacionEstado.APROBADO: 'completada',
    OperacionEstado.DESESTIMADO: 'cancelada',
}


def normalizar_estado(valor):
    """Devuelve el valor canónico del estado, aceptando nombres legados.

    Lanza ValidationError si el valor no pertenece a ninguno de los dos
    esquemas.
    """
    if isinstance(valor, OperacionEstado):
        return valor.value
    clave = str(valor or '').strip().lower()
    if clave in ESTADOS_LEGADOS:
        return ESTADOS_LEGADOS[clave].value
    try:
        return OperacionEstado(clave).value
    except ValueError:
        raise ValidationError(f"Estado inválido: {valor}")


def _iso(fecha):
    return fecha.isoformat() if fecha else None


class User(UserMixin, db.Model):
    __tablename__ = 'users'

    id = db.Column(db.Integer, primary_key=True)
    nombre = db.Column(db.String(120), nullable=False)
    username = db.Column(db.String(64), unique=True, nullable=False, index=True)
    password = db.Column(db.String(256), nullable=False)
    rol = db.Column(db.String(20), nullable=False, default='cotizador')
    area = db.Column(db.String(100), nullable=False, default='')
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def set_password(self, password):
        self.password = generate_password_hash(password)

    def check_password(self, password):
        return check_password_hash(self.password, password)

    def is_admin(self):
        return self.rol == 'admin'

    @validates('rol')
    def validate_rol(self, key, value):
        if value not in ROLES:
            raise ValidationError(f"Rol inválido: {value}")
        return value

    def to_dict(self):
        """Representación pública: nunca incluye el hash de la contraseña."""
        return {
            'id': self.id,
            'nombre': self.nombre,
            'username': self.username,
            'rol': self.rol,
            'area': self.area,
            'createdAt': _iso(self.created_at),
            'updatedAt': _iso(self.updated_at),
        }

    def __repr__(self):
        return f'<User {self.username}>'


class Operacion(db.Model):
    """Cotización u operación registrada por un usuario."""
    __tablename__ = 'operaciones'

    id = db.Column(db.Integer, primary_key=True)
    nombre = db.Column(db.String(255), nullable=False)
    fecha = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    estado = db.Column(db.String(20), nullable=False, default=OperacionEstado.EN_REVISION.value)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id', ondelete='SET NULL'), nullable=True, index=True)
    area = db.Column(db.String(100), nullable=True, index=True)
    data = db.Column(db.JSON, nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, index=True)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    user = db.relationship('User', backref=db.backref('operaciones', lazy='dynamic'))

    @validates('estado')
    def validate_estado(self, key, value):
        return normalizar_estado(value)

    def to_dict(self):
        return {
            'id': self.id,
            'nombre': self.nombre,
            'fecha': _iso(self.fecha),
            'estado': self.estado,
            'userId': self.user_id,
            'area': self.area,
            'data': self.data,
            'createdAt': _iso(self.created_at),
            'updatedAt': _iso(self.updated_at),
        }

    def __repr__(self):
        return f'<Operacion {self.id} {self.estado}>'

import logging
from datetime import datetime

from models import db, User, Operacion, ROLES
from errors import ValidationError, DuplicateUserError

logger = logging.getLogger(__name__)

CAMPOS_EDITABLES = ('nombre', 'area', 'rol')


def create_user(nombre, username, password, rol='cotizador', area=''):
    if not username or not password or not nombre:
        raise ValidationError("Nombre, usuario y contraseña son obligatorios")
    if rol not in ROLES:
        raise ValidationError(f"Rol inválido: {rol}")
    if find_by_username(username):
        raise DuplicateUserError()

    user = User(nombre=nombre, username=username, rol=rol, area=area or '')
    user.set_password(password)
    db.session.add(user)
    db.session.commit()
    logger.info(f"USER_CREATED | id={user.id} | username={username} | rol={rol}")
    return user


def find_by_username(username):
    if not username:
        return None
    return User.query.filter_by(username=username).first()


def validate_user(username, password):
    """Usuario si las credenciales son correctas, None en cualquier otro caso."""
    user = find_by_username(username)
    if not user:
        return None
    if not isinstance(password, str):
        return None
    return user if user.check_password(password) else None


def get_user_by_id(user_id):
    if user_id is None:
        return None
    return db.session.get(User, int(user_id))


def get_all_users():
    return User.query.order_by(User.id).all()


def update_user(user_id, changes):
    user = get_user_by_id(user_id)
    if not user:
        return None

    for campo in CAMPOS_EDITABLES:
        if campo in changes and changes[campo] is not None:
            setattr(user, campo, changes[campo])
    if changes.get('password'):
        user.set_password(changes['password'])

    user.updated_at = datetime.utcnow()
    db.session.commit()
    return user


def delete_user(user_id):
    """Elimina el usuario; sus operaciones se conservan sin propietario."""
    user = get_user_by_id(user_id)
    if not user:
        return False

    Operacion.query.filter_by(user_id=user.id).update({'user_id': None})
    db.session.delete(user)
    db.session.commit()
    logger.info(f"USER_DELETED | id={user_id}")
    return True

import math
import logging
from datetime import datetime, timezone

from sqlalchemy.exc import SQLAlchemyError

from models import db, Operacion, OperacionEstado
from errors import ValidationError

logger = logging.getLogger(__name__)

CAMPOS_ACTUALIZABLES = ('nombre', 'fecha', 'estado', 'area', 'data')
POR_PAGINA_DEFECTO = 9
AREAS_DEFECTO = ['Comercial', 'Marketing', 'TI', 'Administración', 'Medios']


def _parse_fecha(valor):
    """Acepta datetime o cadena ISO-8601 (con 'Z' final opcional)."""
    if valor is None or valor == '':
        return None
    if isinstance(valor, datetime):
        return valor
    try:
        s = str(valor).strip()
        fecha = datetime.fromisoformat(s.replace('Z', '+00:00'))
    except (TypeError, ValueError):
        raise ValidationError(f"Fecha inválida: {valor}")
    # Las columnas son naive en UTC
    if fecha.tzinfo is not None:
        fecha = fecha.astimezone(timezone.utc).replace(tzinfo=None)
    return fecha


def create_operacion(data):
    nombre = (data.get('nombre') or '').strip()
    if not nombre:
        raise ValidationError("El nombre de la operación es obligatorio")

    operacion = Operacion(
        nombre=nombre,
        fecha=_parse_fecha(data.get('fecha')) or datetime.utcnow(),
        estado=data.get('estado') or OperacionEstado.EN_REVISION.value,
        user_id=data.get('userId', data.get('user_id')),
        area=data.get('area'),
        data=data.get('data'),
    )
    db.session.add(operacion)
    db.session.commit()
    logger.info(f"OPERACION_CREATED | id={operacion.id} | user_id={operacion.user_id} | area={operacion.area}")
    return operacion


def create_cotizacion(data):
    """Guarda una cotización nueva: siempre entra en revisión con fecha actual."""
    datos = dict(data)
    datos['estado'] = OperacionEstado.EN_REVISION.value
    datos['fecha'] = datetime.utcnow()
    return create_operacion(datos)


def get_operacion_by_id(operacion_id):
    return db.session.get(Operacion, int(operacion_id))


def get_all_operaciones():
    return Operacion.query.order_by(Operacion.created_at.desc(), Operacion.id.desc()).all()


def get_operaciones_by_user_id(user_id):
    return (Operacion.query
            .filter_by(user_id=user_id)
            .order_by(Operacion.created_at.desc(), Operacion.id.desc())
            .all())


def update_operacion(operacion_id, cambios):
    operacion = get_operacion_by_id(operacion_id)
    if not operacion:
        return None

    for campo in CAMPOS_ACTUALIZABLES:
        if campo not in cambios:
            continue
        valor = cambios[campo]
        if campo == 'fecha':
            valor = _parse_fecha(valor)
            if valor is None:
                continue
        if campo == 'nombre' and not (valor or '').strip():
            raise ValidationError("El nombre de la operación es obligatorio")
        setattr(operacion, campo, valor)

    operacion.updated_at = datetime.utcnow()
    db.session.commit()
    logger.info(f"OPERACION_UPDATED | id={operacion_id} | campos={sorted(set(cambios) & set(CAMPOS_ACTUALIZABLES))}")
    return operacion


def update_operacion_estado(operacion_id, estado):
    return update_operacion(operacion_id, {'estado': estado})


def delete_operacion(operacion_id):
    operacion = get_operacion_by_id(operacion_id)
    if not operacion:
        return False
    db.session.delete(operacion)
    db.session.commit()
    logger.info(f"OPERACION_DELETED | id={operacion_id}")
    return True


def get_operaciones_con_paginacion(user_id, pagina=1, por_pagina=POR_PAGINA_DEFECTO, area=None):
    """Página de operaciones, más recientes primero.

    El user_id solo se registra en el log: todos los usuarios autenticados
    ven todas las operaciones. area None o "todas" no filtra; cualquier otro
    valor, incluida la cadena vacía, filtra por coincidencia exacta.
    """
    pagina = pagina if pagina and pagina >= 1 else 1
    por_pagina = por_pagina if por_pagina and por_pagina >= 1 else POR_PAGINA_DEFECTO

    query = Operacion.query
    if area is not None and area != 'todas':
        query = query.filter(Operacion.area == area)

    total = query.count()
    operaciones = (query
                   .order_by(Operacion.created_at.desc(), Operacion.id.desc())
                   .offset((pagina - 1) * por_pagina)
                   .limit(por_pagina)
                   .all())

    logger.info(f"OPERACIONES_PAGE | user_id={user_id} | area={area} | pagina={pagina} | total={total}")
    return {
        'operaciones': [op.to_dict() for op in operaciones],
        'totalOperaciones': total,
        'totalPaginas': math.ceil(total / por_pagina),
        'paginaActual': pagina,
    }


def get_areas_unicas():
    try:
        filas = (db.session.query(Operacion.area)
                 .filter(Operacion.area.isnot(None))
                 .distinct()
                 .all())
    except SQLAlchemyError as e:
        logger.warning(f"AREAS_QUERY_ERROR | error={e}")
        db.session.rollback()
        return list(AREAS_DEFECTO)

    areas = sorted({fila[0].strip() for fila in filas if fila[0] and fila[0].strip()})
    return areas or list(AREAS_DEFECTO)

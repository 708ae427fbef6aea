"""
Tests del almacén de operaciones: CRUD, estados y paginación.
"""

from datetime import datetime, timedelta

import pytest
from sqlalchemy.exc import SQLAlchemyError

import operacion_service
from models import db, Operacion, normalizar_estado
from errors import ValidationError


def _crear_operaciones(n, area_por_indice=None, user_id=None):
    base = datetime(2024, 1, 1)
    for i in range(n):
        area = area_por_indice(i) if area_por_indice else "Comercial"
        op = Operacion(nombre=f"Operación {i + 1}", area=area, user_id=user_id,
                       created_at=base + timedelta(hours=i))
        db.session.add(op)
    db.session.commit()


class TestEstados:

    def test_legacy_names_are_mapped(self):
        assert normalizar_estado("pendiente") == "en_revision"
        assert normalizar_estado("en_proceso") == "en_revision"
        assert normalizar_estado("completada") == "aprobado"
        assert normalizar_estado("cancelada") == "desestimado"

    def test_current_names_pass_through(self):
        assert normalizar_estado("aprobado") == "aprobado"
        assert normalizar_estado("DESESTIMADO") == "desestimado"

    def test_unknown_estado_rejected(self):
        with pytest.raises(ValidationError):
            normalizar_estado("archivado")


class TestCrud:

    def test_create_defaults_to_en_revision(self, admin_user):
        op = operacion_service.create_operacion({"nombre": "Web corporativa", "userId": admin_user.id})
        assert op.estado == "en_revision"
        assert op.fecha is not None

    def test_create_accepts_legacy_estado(self, app):
        op = operacion_service.create_operacion({"nombre": "Web", "estado": "completada"})
        assert op.estado == "aprobado"

    def test_create_requires_nombre(self, app):
        with pytest.raises(ValidationError):
            operacion_service.create_operacion({"nombre": "  "})

    def test_create_parses_iso_fecha_with_z(self, app):
        op = operacion_service.create_operacion({"nombre": "Web", "fecha": "2024-03-01T10:00:00Z"})
        assert op.fecha == datetime(2024, 3, 1, 10, 0, 0)

    def test_invalid_fecha_rejected(self, app):
        with pytest.raises(ValidationError):
            operacion_service.create_operacion({"nombre": "Web", "fecha": "ayer"})

    def test_create_cotizacion_forces_estado_and_fecha(self, admin_user):
        antes = datetime.utcnow()
        op = operacion_service.create_cotizacion({
            "nombre": "Cotización", "estado": "aprobado", "fecha": "2020-01-01",
            "userId": admin_user.id, "area": "Marketing", "data": {"rubro": "Retail"},
        })
        assert op.estado == "en_revision"
        assert op.fecha >= antes
        assert op.data == {"rubro": "Retail"}

    def test_update_only_allowed_fields(self, admin_user):
        op = operacion_service.create_operacion({"nombre": "Web", "userId": admin_user.id, "area": "TI"})
        actualizada = operacion_service.update_operacion(op.id, {
            "nombre": "Web v2", "estado": "aprobado", "userId": 999, "id": 777,
        })
        assert actualizada.id == op.id
        assert actualizada.nombre == "Web v2"
        assert actualizada.estado == "aprobado"
        assert actualizada.user_id == admin_user.id

    def test_update_missing_returns_none(self, app):
        assert operacion_service.update_operacion(404, {"nombre": "x"}) is None

    def test_update_estado(self, app):
        op = operacion_service.create_operacion({"nombre": "Web"})
        assert operacion_service.update_operacion_estado(op.id, "desestimado").estado == "desestimado"

    def test_update_estado_invalid(self, app):
        op = operacion_service.create_operacion({"nombre": "Web"})
        with pytest.raises(ValidationError):
            operacion_service.update_operacion_estado(op.id, "borrador")

    def test_delete(self, app):
        op = operacion_service.create_operacion({"nombre": "Web"})
        assert operacion_service.delete_operacion(op.id) is True
        assert operacion_service.delete_operacion(op.id) is False
        assert operacion_service.get_operacion_by_id(op.id) is None

    def test_get_by_user(self, admin_user, cotizador_user):
        operacion_service.create_operacion({"nombre": "A", "userId": admin_user.id})
        operacion_service.create_operacion({"nombre": "B", "userId": cotizador_user.id})
        propias = operacion_service.get_operaciones_by_user_id(cotizador_user.id)
        assert [op.nombre for op in propias] == ["B"]
        assert len(operacion_service.get_all_operaciones()) == 2

    def test_to_dict_shape(self, admin_user):
        op = operacion_service.create_operacion({"nombre": "Web", "userId": admin_user.id, "data": {"a": 1}})
        data = op.to_dict()
        assert data["userId"] == admin_user.id
        assert data["data"] == {"a": 1}
        assert set(data) == {"id", "nombre", "fecha", "estado", "userId", "area", "data", "createdAt", "updatedAt"}


class TestPaginacion:

    def test_second_page_newest_first(self, app):
        _crear_operaciones(20)
        pagina = operacion_service.get_operaciones_con_paginacion(1, 2, 9, "todas")

        assert pagina["totalOperaciones"] == 20
        assert pagina["totalPaginas"] == 3
        assert pagina["paginaActual"] == 2
        # Orden descendente: la página 2 contiene la 11.ª a la 3.ª más antigua
        assert [op["nombre"] for op in pagina["operaciones"]] == [f"Operación {i}" for i in range(11, 2, -1)]

    def test_last_page_is_partial(self, app):
        _crear_operaciones(20)
        pagina = operacion_service.get_operaciones_con_paginacion(1, 3, 9, "todas")
        assert len(pagina["operaciones"]) == 2

    def test_area_filter(self, app):
        _crear_operaciones(6, area_por_indice=lambda i: "TI" if i % 2 else "Comercial")
        pagina = operacion_service.get_operaciones_con_paginacion(1, 1, 9, "TI")
        assert pagina["totalOperaciones"] == 3
        assert all(op["area"] == "TI" for op in pagina["operaciones"])

    def test_empty_area_matches_literally(self, app):
        _crear_operaciones(2, area_por_indice=lambda i: "TI" if i else "")
        pagina = operacion_service.get_operaciones_con_paginacion(1, 1, 9, "")
        assert pagina["totalOperaciones"] == 1
        assert pagina["operaciones"][0]["area"] == ""

    def test_no_area_returns_everything(self, app):
        _crear_operaciones(3, area_por_indice=lambda i: "TI" if i else "Comercial")
        assert operacion_service.get_operaciones_con_paginacion(1, 1, 9)["totalOperaciones"] == 3

    def test_user_id_does_not_filter(self, admin_user, cotizador_user):
        _crear_operaciones(4, user_id=admin_user.id)
        pagina = operacion_service.get_operaciones_con_paginacion(cotizador_user.id, 1, 9, "todas")
        assert pagina["totalOperaciones"] == 4

    def test_invalid_paging_values_are_clamped(self, app):
        _crear_operaciones(12)
        pagina = operacion_service.get_operaciones_con_paginacion(1, 0, 0, None)
        assert pagina["paginaActual"] == 1
        assert len(pagina["operaciones"]) == 9
        assert pagina["totalPaginas"] == 2

    def test_empty_store(self, app):
        pagina = operacion_service.get_operaciones_con_paginacion(1, 1, 9, "todas")
        assert pagina == {"operaciones": [], "totalOperaciones": 0, "totalPaginas": 0, "paginaActual": 1}


class TestAreas:

    def test_distinct_sorted_areas(self, app):
        for area in ("TI", "Comercial", "TI", "", None, "Marketing"):
            db.session.add(Operacion(nombre="x", area=area))
        db.session.commit()
        assert operacion_service.get_areas_unicas() == ["Comercial", "Marketing", "TI"]

    def test_defaults_when_empty(self, app):
        assert operacion_service.get_areas_unicas() == operacion_service.AREAS_DEFECTO

    def test_defaults_on_query_error(self, app, monkeypatch):
        def falla(*args, **kwargs):
            raise SQLAlchemyError("db caída")

        monkeypatch.setattr(db.session, "query", falla)
        assert operacion_service.get_areas_unicas() == operacion_service.AREAS_DEFECTO

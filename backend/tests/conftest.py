"""
Fixtures comunes: un cliente Supabase en memoria y el estado local

FakeSupabase imita la cadena de consulta de supabase-py
(table().select()/insert()/update()/upsert()/delete().eq()/in_()/limit()/single().execute())
sobre tablas guardadas como listas de filas snake_case.
"""
from copy import deepcopy
from types import SimpleNamespace

import pytest
from postgrest.exceptions import APIError

from cuaderno_campo.services.cuaderno.entidades import CuadernoConfig, Entidad
from cuaderno_campo.services.cuaderno.estado import EstadoLocal

DATOS_FISCALES_ID = "00000000-0000-0000-0000-000000000001"


class FakeQuery:
    def __init__(self, db, table):
        self.db = db
        self.table = table
        self.op = None
        self.payload = None
        self.columns = "*"
        self.count = None
        self.head = False
        self.filters = []
        self._limit = None
        self._single = False

    # Operaciones
    def select(self, columns="*", count=None, head=False):
        self.op, self.columns, self.count, self.head = "select", columns, count, head
        return self

    def insert(self, rows):
        self.op, self.payload = "insert", rows
        return self

    def update(self, values):
        self.op, self.payload = "update", values
        return self

    def upsert(self, rows):
        self.op, self.payload = "upsert", rows
        return self

    def delete(self):
        self.op = "delete"
        return self

    # Filtros
    def eq(self, column, value):
        self.filters.append(("eq", column, value))
        return self

    def in_(self, column, values):
        self.filters.append(("in", column, list(values)))
        return self

    def limit(self, n):
        self._limit = n
        return self

    def single(self):
        self._single = True
        return self

    def _matches(self, row):
        for kind, column, value in self.filters:
            if kind == "eq" and row.get(column) != value:
                return False
            if kind == "in" and row.get(column) not in value:
                return False
        return True

    def execute(self):
        self.db.calls.append((self.table, self.op, list(self.filters)))
        failure = self.db.failures.get((self.table, self.op))
        if failure:
            raise APIError(failure)

        rows = self.db.tables.setdefault(self.table, [])
        if self.op == "select":
            found = [r for r in rows if self._matches(r)]
            if self._limit is not None:
                found = found[: self._limit]
            if self.db.max_rows is not None:
                # PostgREST corta cada select en db-max-rows
                found = found[: self.db.max_rows]
            if self.columns != "*":
                wanted = [c.strip() for c in self.columns.split(",")]
                found = [{c: r.get(c) for c in wanted} for r in found]
            if self._single:
                if len(found) != 1:
                    raise APIError({"message": "JSON object requested, multiple (or no) rows returned",
                                    "code": "PGRST116"})
                return SimpleNamespace(data=deepcopy(found[0]), count=None)
            return SimpleNamespace(data=[] if self.head else deepcopy(found), count=len(found))

        if self.op == "insert":
            nuevos = self.payload if isinstance(self.payload, list) else [self.payload]
            rows.extend(deepcopy(nuevos))
            return self._echo(nuevos)

        if self.op == "update":
            cambiados = []
            for row in rows:
                if self._matches(row):
                    row.update(deepcopy(self.payload))
                    cambiados.append(row)
            return self._echo(cambiados)

        if self.op == "upsert":
            nuevos = self.payload if isinstance(self.payload, list) else [self.payload]
            for nuevo in nuevos:
                existente = next((r for r in rows if r.get("id") == nuevo.get("id")), None)
                if existente is not None:
                    existente.update(deepcopy(nuevo))
                else:
                    rows.append(deepcopy(nuevo))
            return self._echo(nuevos)

        if self.op == "delete":
            if self.db.silent_deletes:
                # RLS sin política DELETE: no hay error pero no se borra nada
                return SimpleNamespace(data=[], count=None)
            borrados = [r for r in rows if self._matches(r)]
            self.db.tables[self.table] = [r for r in rows if not self._matches(r)]
            return self._echo(borrados)

        raise AssertionError(f"Operación no soportada: {self.op}")

    def _echo(self, rows):
        # Sin política SELECT, Supabase acepta la escritura pero no devuelve filas
        return SimpleNamespace(data=deepcopy(rows) if self.db.echo else [], count=None)


class FakeSupabase:
    def __init__(self, tables=None):
        self.tables = {name: deepcopy(rows) for name, rows in (tables or {}).items()}
        self.calls = []
        self.failures = {}
        self.echo = True
        self.max_rows = None
        self.silent_deletes = False

    def table(self, name):
        return FakeQuery(self, name)

    def fail(self, table, op, message="permission denied", code="42501"):
        self.failures[(table, op)] = {"message": message, "code": code}

    def writes(self):
        return [(table, op) for table, op, _ in self.calls if op != "select"]


@pytest.fixture
def config():
    return CuadernoConfig(
        datos_fiscales_id=DATOS_FISCALES_ID,
        app_name="Cuaderno de Campo Agrícola",
        export_version="1.1-supabase",
    )


@pytest.fixture
def fake_client():
    return FakeSupabase()


@pytest.fixture
def seeded_client():
    """Dos parcelas; P1 con un cultivo y trabajos de parcela y de cultivo."""
    return FakeSupabase({
        "parcelas": [
            {"id": "P1", "nombre": "La Vega", "ubicacion": "Lorca", "superficie": 2.5},
            {"id": "P2", "nombre": "El Alto", "ubicacion": "Lorca", "superficie": 1.0},
        ],
        "cultivos": [
            {"id": "C1", "parcela_id": "P1", "nombre_cultivo": "Almendro", "superficie_cultivada": 2.0},
            {"id": "C2", "parcela_id": "P2", "nombre_cultivo": "Olivo", "superficie_cultivada": 1.0},
        ],
        "trabajos": [
            {"id": "T1", "parcela_id": "P1", "cultivo_id": None, "descripcion_tarea": "Arar",
             "fecha_programada": "2024-03-01"},
            {"id": "T2", "parcela_id": None, "cultivo_id": "C1", "descripcion_tarea": "Podar",
             "fecha_programada": "2024-03-01"},
            {"id": "T3", "parcela_id": "P2", "cultivo_id": "C2", "descripcion_tarea": "Regar",
             "fecha_programada": "2024-03-01"},
            {"id": "T4", "parcela_id": None, "cultivo_id": None, "descripcion_tarea": "Revisar tractor",
             "fecha_programada": "2024-03-01"},
        ],
        "registros_financieros": [],
        "facturas": [],
        "datos_fiscales": [],
    })


@pytest.fixture
def seeded_estado():
    return EstadoLocal({
        Entidad.PARCELAS: [
            {"id": "P1", "nombre": "La Vega", "ubicacion": "Lorca", "superficie": 2.5},
            {"id": "P2", "nombre": "El Alto", "ubicacion": "Lorca", "superficie": 1.0},
        ],
        Entidad.CULTIVOS: [
            {"id": "C1", "parcelaId": "P1", "nombreCultivo": "Almendro", "superficieCultivada": 2.0},
            {"id": "C2", "parcelaId": "P2", "nombreCultivo": "Olivo", "superficieCultivada": 1.0},
        ],
        Entidad.TRABAJOS: [
            {"id": "T1", "parcelaId": "P1", "cultivoId": None, "descripcionTarea": "Arar",
             "fechaProgramada": "2024-03-01"},
            {"id": "T2", "parcelaId": None, "cultivoId": "C1", "descripcionTarea": "Podar",
             "fechaProgramada": "2024-03-01"},
            {"id": "T3", "parcelaId": "P2", "cultivoId": "C2", "descripcionTarea": "Regar",
             "fechaProgramada": "2024-03-01"},
            {"id": "T4", "parcelaId": None, "cultivoId": None, "descripcionTarea": "Revisar tractor",
             "fechaProgramada": "2024-03-01"},
        ],
    }, conectado=True)


@pytest.fixture
def make_client():
    return FakeSupabase

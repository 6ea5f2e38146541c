from types import SimpleNamespace

import pytest

from cuaderno_campo.services.cuaderno.carga_service import (
    ErrorCargaInicial,
    load_all,
    load_initial_state,
    load_into_app_state,
)
from cuaderno_campo.services.cuaderno.entidades import Entidad
from cuaderno_campo.services.supabase_client import SupabaseNotConfigured


def test_load_all_converts_rows_to_camel_case(seeded_client, config):
    estado = load_all(seeded_client, config)

    assert estado.conectado is True
    assert len(estado.get(Entidad.PARCELAS)) == 2
    assert estado.find(Entidad.CULTIVOS, "C1")["parcelaId"] == "P1"
    assert estado.get(Entidad.FACTURAS) == []
    assert estado.datos_fiscales is None
    assert {t for t, op, _ in seeded_client.calls} == {
        "parcelas", "cultivos", "registros_financieros", "facturas", "trabajos", "datos_fiscales",
    }


def test_load_all_reads_fiscal_row(seeded_client, config):
    seeded_client.tables["datos_fiscales"] = [{"id": "F", "nif_cif": "B1", "codigo_postal": "30800"}]
    estado = load_all(seeded_client, config)
    assert estado.datos_fiscales == {"id": "F", "nifCif": "B1", "codigoPostal": "30800"}


def test_load_all_failure_reports_message(seeded_client, config):
    seeded_client.fail("facturas", "select", message='relation "facturas" does not exist', code="42P01")
    with pytest.raises(ErrorCargaInicial) as info:
        load_all(seeded_client, config)
    assert str(info.value).startswith('No se pudieron cargar los datos: relation "facturas" does not exist.')
    assert "Revise la conexión" in str(info.value)


def test_missing_credentials_become_load_error(config):
    def sin_credenciales():
        raise SupabaseNotConfigured("La configuración de Supabase no está disponible.")

    with pytest.raises(ErrorCargaInicial, match="no está disponible"):
        load_initial_state(sin_credenciales, config)


def test_load_into_app_state(seeded_client, config):
    app_state = SimpleNamespace()
    assert load_into_app_state(app_state, lambda: seeded_client, config) is True
    assert app_state.error_carga is None
    assert len(app_state.estado.get(Entidad.TRABAJOS)) == 4

    seeded_client.fail("parcelas", "select")
    assert load_into_app_state(app_state, lambda: seeded_client, config) is False
    assert app_state.estado is None
    assert "permission denied" in app_state.error_carga

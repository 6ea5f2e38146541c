import pytest

from cuaderno_campo.services.cuaderno.datos_fiscales_service import build_payload, save_datos_fiscales
from cuaderno_campo.services.cuaderno.estado import EstadoLocal
from cuaderno_campo.services.supabase_client import SupabaseStoreError

from conftest import DATOS_FISCALES_ID

DATOS = {
    "nombreORazonSocial": "Finca La Vega SL",
    "nifCif": "B30000000",
    "direccion": "Camino Viejo 1",
    "codigoPostal": "30800",
    "localidad": "Lorca",
    "provincia": "Murcia",
    "pais": "España",
    "email": "",
    "telefono": "",
}


def test_payload_fixes_id_and_nulls_empty_contacts():
    payload = build_payload({**DATOS, "id": "otro"}, DATOS_FISCALES_ID)
    assert payload["id"] == DATOS_FISCALES_ID
    assert payload["email"] is None
    assert payload["telefono"] is None


def test_save_twice_keeps_single_row(fake_client, config):
    estado = EstadoLocal()
    save_datos_fiscales(fake_client, config, estado, DATOS)
    resultado = save_datos_fiscales(fake_client, config, estado, {**DATOS, "localidad": "Águilas"})

    filas = fake_client.tables["datos_fiscales"]
    assert len(filas) == 1
    assert filas[0]["id"] == DATOS_FISCALES_ID
    assert filas[0]["nombre_o_razon_social"] == "Finca La Vega SL"
    assert filas[0]["email"] is None
    assert resultado.aviso is None
    assert estado.datos_fiscales["localidad"] == "Águilas"


def test_save_without_echo_sets_payload_and_warns(fake_client, config):
    fake_client.echo = False
    estado = EstadoLocal()
    resultado = save_datos_fiscales(fake_client, config, estado, DATOS)

    assert "Los datos se guardaron, pero no se pudieron recuperar" in resultado.aviso
    assert estado.datos_fiscales["id"] == DATOS_FISCALES_ID
    assert estado.datos_fiscales["nifCif"] == "B30000000"


def test_save_failure_keeps_previous_value(fake_client, config):
    estado = EstadoLocal(datos_fiscales={"id": DATOS_FISCALES_ID, "nifCif": "X"})
    fake_client.fail("datos_fiscales", "upsert")
    with pytest.raises(SupabaseStoreError):
        save_datos_fiscales(fake_client, config, estado, DATOS)
    assert estado.datos_fiscales == {"id": DATOS_FISCALES_ID, "nifCif": "X"}

from cuaderno_campo.utils.casing import camel_keys, snake_keys, to_camel, to_snake


def test_to_snake_and_back():
    assert to_snake("nombreCultivo") == "nombre_cultivo"
    assert to_snake("superficieCultivada") == "superficie_cultivada"
    assert to_camel("nombre_o_razon_social") == "nombreORazonSocial"
    assert to_snake("nombreORazonSocial") == "nombre_o_razon_social"


def test_keys_already_in_target_case_are_unchanged():
    assert to_snake("id") == "id"
    assert to_snake("parcela_id") == "parcela_id"
    assert to_camel("parcelaId") == "parcelaId"


def test_leading_underscore_preserved():
    assert to_snake("_internoValor") == "_interno_valor"
    assert to_camel("_interno_valor") == "_internoValor"


def test_nested_structures_are_converted():
    registro = {"parcelaId": "P1", "detalles": [{"costeMateriales": 10}, {"horasTrabajo": 2}]}
    assert snake_keys(registro) == {
        "parcela_id": "P1",
        "detalles": [{"coste_materiales": 10}, {"horas_trabajo": 2}],
    }
    assert camel_keys(snake_keys(registro)) == registro


def test_scalars_pass_through():
    assert snake_keys("nombreCultivo") == "nombreCultivo"
    assert camel_keys(None) is None
    assert camel_keys(3.5) == 3.5
    assert snake_keys([1, "a"]) == [1, "a"]


def test_values_are_not_rewritten():
    assert snake_keys({"nombre": "campoNorte"}) == {"nombre": "campoNorte"}


def test_segments_starting_with_digit_keep_separator():
    assert to_camel("iva_21") == "iva_21"
    assert to_snake(to_camel("iva_21")) == "iva_21"
    assert to_camel("tipo_iva_21_reducido") == "tipoIva_21Reducido"
    assert to_snake(to_camel("tipo_iva_21_reducido")) == "tipo_iva_21_reducido"

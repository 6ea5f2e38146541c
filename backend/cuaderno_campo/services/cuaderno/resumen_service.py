"""Resumen del panel principal calculado sobre el estado local"""
from __future__ import annotations

from typing import Any, Dict, Iterable

from cuaderno_campo.schemas.finanzas import TipoRegistroFinanciero
from cuaderno_campo.schemas.trabajo import EstadoTrabajo
from cuaderno_campo.services.cuaderno.entidades import Entidad
from cuaderno_campo.services.cuaderno.estado import EstadoLocal


def _sum(registros: Iterable[Dict[str, Any]], campo: str) -> float:
    return sum(float(r.get(campo) or 0) for r in registros)


def build_resumen(estado: EstadoLocal) -> Dict[str, Any]:
    parcelas = estado.get(Entidad.PARCELAS)
    cultivos = estado.get(Entidad.CULTIVOS)
    registros = estado.get(Entidad.REGISTROS_FINANCIEROS)
    facturas = estado.get(Entidad.FACTURAS)
    trabajos = estado.get(Entidad.TRABAJOS)

    ingresos = _sum((r for r in registros if r.get("tipo") == TipoRegistroFinanciero.INGRESO.value), "cantidad")
    gastos = _sum((r for r in registros if r.get("tipo") == TipoRegistroFinanciero.GASTO.value), "cantidad")

    return {
        "parcelas_totales": len(parcelas),
        "superficie_total": round(_sum(parcelas, "superficie"), 3),
        "cultivos_totales": len(cultivos),
        "superficie_cultivada": round(_sum(cultivos, "superficieCultivada"), 3),
        "ingresos_totales": round(ingresos, 2),
        "gastos_totales": round(gastos, 2),
        "balance": round(ingresos - gastos, 2),
        "trabajos_pendientes": sum(1 for t in trabajos if t.get("estado") == EstadoTrabajo.PENDIENTE.value),
        "facturas_pendientes_pago": sum(1 for f in facturas if not f.get("pagada")),
    }

"""Endpoints del dashboard: lista de brokers y series alineadas."""

from typing import Optional

from fastapi import APIRouter, Depends

from ..render.adapter import ChartFrame
from ..runtime import DashboardRuntime, get_runtime
from ..schemas import BrokerListOut, ChartFrameOut, SeriesOut, SelectionOut
from ..selection import Selection

router = APIRouter(tags=["dashboard"])


def _selection_out(selection: Selection) -> SelectionOut:
    return SelectionOut(broker=selection.broker, topic=selection.topic, limit=selection.limit)


@router.get("/brokers", response_model=BrokerListOut)
async def list_brokers(runtime: DashboardRuntime = Depends(get_runtime)):
    """Opciones de broker (la vacía siempre primero) y selección actual."""
    state = runtime.state
    return BrokerListOut(
        options=[{"value": o.value, "label": o.label} for o in state.broker_options()],
        selection=_selection_out(state.selection),
        sequence=state.last_sequence,
    )


@router.get("/series", response_model=SeriesOut)
async def get_series(
    broker: Optional[str] = None,
    topic: Optional[str] = None,
    limit: Optional[str] = None,
    runtime: DashboardRuntime = Depends(get_runtime),
):
    """Recalcula y dibuja las series para la selección indicada.

    Selecciones inválidas (broker desconocido, limit no numérico) devuelven
    un gráfico vacío, nunca un error.
    """
    state = runtime.state
    selection = state.select(broker=broker, topic=topic, limit=limit)
    frame = runtime.adapter.render(state.current_series())
    return SeriesOut(
        **frame.to_dict(),
        selection=_selection_out(selection),
        sequence=state.last_sequence,
    )


@router.get("/chart", response_model=ChartFrameOut)
async def get_chart(runtime: DashboardRuntime = Depends(get_runtime)):
    """Último frame dibujado (vacío si todavía no hubo render)."""
    frame = runtime.sink.last_frame or ChartFrame()
    return ChartFrameOut(**frame.to_dict())

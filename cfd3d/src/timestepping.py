"""
Time integration: dimension splitting with a 3-stage SSP Runge-Kutta scheme
per one-dimensional sweep, and CFL time step selection.

One time step dt is the symmetric sequence of half-step sweeps

    Z, Y, X, X, Y, Z    (each dt/2)

and every sweep runs the stages

    U(1)   = U(n) + dt L(U(n))                            OLD, OLD -> NEW
    U(2)   = 3/4 U(n) + 1/4 (U(1) + dt L(U(1)))           OLD, NEW -> MID
    U(n+1) = 1/3 U(n) + 2/3 (U(2) + dt L(U(2)))           OLD, MID -> OLD

with the boundary treatment applied to the written level after each stage.
"""

import logging

import numpy as np

from .boundary import BoundaryTreatment
from .field import Field, GeoTag, TimeLevel
from .flux import FaceWindow, FluxReconstructor
from .grid import Axis
from .model import ConfigurationError, FlowModel
from .partition import Partition, Region
from .transform import characteristic_state

logger = logging.getLogger(__name__)

SWEEP_ORDER = (Axis.Z, Axis.Y, Axis.X, Axis.X, Axis.Y, Axis.Z)

# (coe_a, coe_b, to, tn, tm)
RK3_STAGES = (
    (0.0, 1.0, TimeLevel.OLD, TimeLevel.OLD, TimeLevel.NEW),
    (3.0 / 4.0, 1.0 / 4.0, TimeLevel.OLD, TimeLevel.NEW, TimeLevel.MID),
    (1.0 / 3.0, 2.0 / 3.0, TimeLevel.OLD, TimeLevel.MID, TimeLevel.OLD),
)


def check_ghost_depth(partition: Partition, reconstructor: FluxReconstructor) -> None:
    """The reconstruction stencil must stay inside the stored nodes."""
    if partition.ng < reconstructor.width - 1:
        raise ConfigurationError(
            f"{type(reconstructor.scheme).__name__} needs at least {reconstructor.width - 1} "
            f"ghost layers, partition has {partition.ng}")


def spatial_operator(dt: float, coe_a: float, coe_b: float, to: TimeLevel, tn: TimeLevel,
                     tm: TimeLevel, axis: Axis, field: Field, model: FlowModel,
                     reconstructor: FluxReconstructor) -> None:
    """
    One Runge-Kutta stage along one axis, written into level tm.

        U[tm] = coe_a U[to] + coe_b (U[tn] - r (F_R - F_L) + r (Fv_R - Fv_L))

    with r = dt / d_axis and the fluxes evaluated from level tn. Only interior
    fluid nodes are updated.

    Raises:
        ValueError: If tn and tm are the same level
    """
    if tn == tm:
        raise ValueError(f"Flux level and target level must differ, both are {TimeLevel(tn).name}")

    partition = field.partition
    window = FaceWindow.interior(partition, axis)
    face_axis = Axis(axis).storage_axis - 3
    r = dt * partition.dd[axis]

    Un = field[tn]
    dF = np.diff(reconstructor.numerical_convective_flux(axis, Un, window), axis=face_axis)
    if model.viscous:
        dFv = np.diff(reconstructor.numerical_diffusive_flux(axis, Un, window, partition.dd),
                      axis=face_axis)
    else:
        dFv = 0.0

    index = (slice(None),) + partition.slices(Region.INTERIOR)
    update = coe_a * field[to][index] + coe_b * (Un[index] - r * dF + r * dFv)
    np.copyto(field[tm][index], update, where=field.fluid_mask(Region.INTERIOR))


def runge_kutta(dt: float, axis: Axis, field: Field, model: FlowModel,
                boundary: BoundaryTreatment, reconstructor: FluxReconstructor) -> None:
    """Advance the OLD level by dt along one axis."""
    for coe_a, coe_b, to, tn, tm in RK3_STAGES:
        spatial_operator(dt, coe_a, coe_b, to, tn, tm, axis, field, model, reconstructor)
        boundary.apply(tm, field, model)


def advance_one_time_step(dt: float, field: Field, model: FlowModel,
                          boundary: BoundaryTreatment,
                          reconstructor: FluxReconstructor = None) -> None:
    """
    Advance the OLD level of a field by dt with symmetric dimension splitting.

    Args:
        dt: Time step
        field: Field with boundary and ghost nodes valid at the OLD level
        model: Flow model
        boundary: Boundary treatment applied after every stage
        reconstructor: Flux reconstructor (built from the model if omitted)
    """
    if reconstructor is None:
        reconstructor = FluxReconstructor(model)
    check_ghost_depth(field.partition, reconstructor)
    for axis in SWEEP_ORDER:
        runge_kutta(0.5 * dt, axis, field, model, boundary, reconstructor)


def compute_timestep(field: Field, partition: Partition, model: FlowModel, cfl: float) -> float:
    """
    Compute time step based on CFL condition.

        dt = cfl * min over axes of d_axis / max(|v_axis| + c)

    taken over the fluid nodes of the normal region at the OLD level.
    """
    index = partition.normal_slices()
    fluid = field.geo[index] == GeoTag.FLUID
    Uo = characteristic_state(model.gamma, field[TimeLevel.OLD][(slice(None),) + index][:, fluid])

    dt_axis = []
    for axis in Axis:
        wave_speed = np.abs(Uo[axis + 1]) + Uo[5]
        dt_axis.append(partition.d[axis] / np.max(wave_speed))
    return cfl * min(dt_axis)

"""
Pytest tests for the solver driver, configuration objects and boundary conditions.
"""

import matplotlib
matplotlib.use("Agg")

import numpy as np
import pytest
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from cfd3d.src import (Axis, ConfigurationError, DomainBoundary, Face, FlowModel, FlowState,
                       GasProperties, Partition, PeriodicBC, Scheme, SlipWallBC, Solver3D,
                       SolverConfig, Splitter, TimeLevel, ZeroGradientBC, dataclass_from_dict)
from cfd3d.src.field import Field
from cfd3d.src.transform import pressure, to_conservative

GAMMA = 1.4


@pytest.fixture
def gas():
    """Non-dimensional gas."""
    return GasProperties(gamma=GAMMA, R=1.0)


@pytest.fixture
def small_partition():
    return Partition(domain=((0.0, 1.0), (0.0, 1.0), (0.0, 1.0)), cells=(8, 6, 6), ng=3)


def sine_state(partition, gas):
    """Density wave along x in a uniform stream."""
    x = partition.coordinates(Axis.X)[None, None, :]
    rho = 1.0 + 0.1 * np.sin(2 * np.pi * x)
    return FlowState.from_primitives(rho, 0.5, 0.0, 0.0, 1.0, gas)


class TestFlowModel:
    """Tests for the run-wide model configuration."""

    def test_defaults(self):
        model = FlowModel()
        assert model.scheme is Scheme.WENO5
        assert model.splitter is Splitter.LAX_FRIEDRICHS
        assert not model.viscous
        assert model.reynolds == np.inf

    def test_string_options(self):
        model = FlowModel(scheme='WENO3', splitter='steger_warming', averager='arithmetic')
        assert model.scheme is Scheme.WENO3
        assert model.splitter is Splitter.STEGER_WARMING

    @pytest.mark.parametrize("kwargs", [
        dict(scheme='weno7'),
        dict(splitter='hllc'),
        dict(ref_mu=-1.0),
        dict(gas=GasProperties(gamma=1.0)),
    ])
    def test_invalid_options(self, kwargs):
        with pytest.raises(ConfigurationError):
            FlowModel(**kwargs)

    def test_from_reference(self):
        model = FlowModel.from_reference(length=0.5, density=1.2, velocity=340.0,
                                         temperature=288.0)
        assert model.gas_R == pytest.approx(287.0 * 288.0 / 340.0**2)
        assert model.cv == pytest.approx(model.gas_R / 0.4)
        assert model.ref_mu == pytest.approx(1.0 / (1.2 * 340.0 * 0.5))
        assert model.mach == pytest.approx(340.0 / np.sqrt(1.4 * 287.0 * 288.0))
        mu = 1.458e-6 * 288.0**1.5 / (288.0 + 110.4)
        assert model.reynolds == pytest.approx(1.2 * 340.0 * 0.5 / mu)

    def test_inviscid_reference(self):
        model = FlowModel.from_reference(1.0, 1.0, 100.0, 300.0, viscous=False)
        assert model.ref_mu == 0.0

    def test_from_dict(self):
        model = dataclass_from_dict(FlowModel, {
            'gas': {'gamma': 1.3, 'R': 1.0, 'prandtl': 0.72},
            'ref_mu': 0.01,
            'scheme': 'upwind1',
        })
        assert model.gas.gamma == 1.3
        assert model.scheme is Scheme.UPWIND1
        assert model.viscous


class TestBoundaryConditions:
    """Tests for the face conditions."""

    def field_with_ramp(self, partition, gas):
        field = Field(partition)
        x = partition.coordinates(Axis.X)[None, None, :]
        y = partition.coordinates(Axis.Y)[None, :, None]
        shape = partition.shape
        rho = np.broadcast_to(1.0 + 0.1 * x + 0.05 * y, shape)
        u = np.broadcast_to(0.3 + 0.0 * x, shape)
        v = np.broadcast_to(-0.2 + 0.1 * y, shape)
        U = to_conservative(GAMMA, np.stack([rho, u, v, np.zeros(shape), np.ones(shape)]))
        field.fill(TimeLevel.OLD, U)
        return field

    def test_zero_gradient(self, small_partition, gas):
        field = self.field_with_ramp(small_partition, gas)
        DomainBoundary.uniform(ZeroGradientBC()).apply(TimeLevel.OLD, field, FlowModel(gas=gas))
        U = field[TimeLevel.OLD]
        ng = small_partition.ng
        for idx in range(ng + 1):
            np.testing.assert_array_equal(U[:, :, :, idx], U[:, :, :, ng + 1])

    def test_slip_wall(self, small_partition, gas):
        field = self.field_with_ramp(small_partition, gas)
        model = FlowModel(gas=gas)
        boundary = DomainBoundary.uniform(ZeroGradientBC())
        boundary.conditions[Face.WEST] = SlipWallBC()
        boundary.apply(TimeLevel.OLD, field, model)
        U = field[TimeLevel.OLD]
        ng = small_partition.ng
        # no normal momentum at the wall, pressure kept
        np.testing.assert_array_equal(U[1, :, :, ng], 0.0)
        np.testing.assert_allclose(pressure(GAMMA, U[:, :, :, ng]),
                                   pressure(GAMMA, U[:, :, :, ng + 1]), rtol=1e-12)
        # ghosts mirror the interior with reversed normal momentum
        for g in range(1, ng + 1):
            np.testing.assert_array_equal(U[1, :, :, ng - g], -U[1, :, :, ng + g])
            np.testing.assert_array_equal(U[0, :, :, ng - g], U[0, :, :, ng + g])

    def test_periodic(self, small_partition, gas):
        field = self.field_with_ramp(small_partition, gas)
        DomainBoundary.periodic().apply(TimeLevel.OLD, field, FlowModel(gas=gas))
        U = field[TimeLevel.OLD]
        ng = small_partition.ng
        m = small_partition.m[Axis.X]
        # lower boundary layer equals the last interior layer and vice versa
        np.testing.assert_array_equal(U[:, :, :, ng], U[:, :, :, m + ng - 2])
        np.testing.assert_array_equal(U[:, :, :, m + ng - 1], U[:, :, :, ng + 1])

    def test_periodic_needs_enough_layers(self, gas):
        partition = Partition(domain=((0, 1), (0, 1), (0, 1)), cells=(4, 8, 8), ng=3)
        field = Field(partition)
        field.fill(TimeLevel.OLD, to_conservative(GAMMA, [1.0, 0.0, 0.0, 0.0, 1.0]))
        with pytest.raises(ConfigurationError):
            DomainBoundary.periodic().apply(TimeLevel.OLD, field, FlowModel(gas=gas))

    def test_missing_face(self):
        with pytest.raises(ConfigurationError):
            DomainBoundary({Face.WEST: PeriodicBC(), Face.EAST: PeriodicBC()})


class TestSolver3D:
    """Tests for the driver."""

    def test_solve_requires_setup(self, small_partition, gas):
        solver = Solver3D(small_partition, FlowModel(gas=gas))
        with pytest.raises(ConfigurationError):
            solver.solve(max_time=0.1)
        solver.set_boundary_treatment(DomainBoundary.periodic())
        with pytest.raises(ConfigurationError):
            solver.solve(max_time=0.1)

    def test_insufficient_ghost_layers(self, gas):
        partition = Partition(domain=((0, 1), (0, 1), (0, 1)), cells=(8, 8, 8), ng=1)
        with pytest.raises(ConfigurationError):
            Solver3D(partition, FlowModel(gas=gas))

    def test_periodic_advection_conserves(self, small_partition, gas):
        solver = Solver3D(small_partition, FlowModel(gas=gas), SolverConfig(cfl=0.5))
        solver.set_initial_condition(sine_state(small_partition, gas))
        solver.set_boundary_treatment(DomainBoundary.periodic())
        totals = solver.conserved_totals()

        result = solver.solve(max_time=0.05)

        assert result['completed']
        assert result['time'] == pytest.approx(0.05, rel=1e-12)
        assert result['iterations'] == len(solver.dt_history)
        np.testing.assert_allclose(solver.conserved_totals(), totals, rtol=1e-12, atol=1e-12)

    def test_max_iterations(self, small_partition, gas):
        solver = Solver3D(small_partition, FlowModel(gas=gas), SolverConfig(max_iter=2))
        solver.set_initial_condition(sine_state(small_partition, gas))
        solver.set_boundary_treatment(DomainBoundary.periodic())
        result = solver.solve(max_time=10.0)
        assert not result['completed']
        assert result['iterations'] == 2

    def test_negative_pressure_is_reported(self, small_partition, gas):
        solver = Solver3D(small_partition, FlowModel(gas=gas))
        state = FlowState.from_primitives(1.0, 0.0, 0.0, 0.0, 1.0, gas)
        solver.set_initial_condition(state)
        solver.set_boundary_treatment(DomainBoundary.uniform(ZeroGradientBC()))
        ng = small_partition.ng
        solver.field.U[TimeLevel.OLD][4, ng + 2, ng + 2, ng + 2] = -1.0
        with np.errstate(invalid='ignore', divide='ignore'):
            with pytest.raises(FloatingPointError):
                solver.step(dt=1e-3)

    def test_line_and_plot(self, small_partition, gas, tmp_path):
        solver = Solver3D(small_partition, FlowModel(gas=gas))
        solver.set_initial_condition(sine_state(small_partition, gas))
        solver.set_boundary_treatment(DomainBoundary.periodic())
        x, state = solver.line(Axis.X)
        assert x.shape == (small_partition.m[Axis.X],)
        assert x[0] == pytest.approx(0.0) and x[-1] == pytest.approx(1.0)
        np.testing.assert_allclose(state.u, 0.5)

        filename = tmp_path / "solution.png"
        solver.plot_solution(filename=str(filename), show=False)
        assert filename.exists()


if __name__ == "__main__":
    pytest.main([__file__, "-v"])

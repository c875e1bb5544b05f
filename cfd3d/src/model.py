"""
Run-wide numerical model: equation of state, transport reference values and
the selectors for reconstruction scheme, eigenvalue splitting and face
averaging.

A FlowModel is built once per run and passed explicitly to everything that
needs it.
"""

import dataclasses
import logging
from dataclasses import dataclass
from enum import Enum

import numpy as np

from .gas import GasProperties, sutherland_viscosity

logger = logging.getLogger(__name__)


class ConfigurationError(ValueError):
    """Invalid setup detected before time marching starts. Not recoverable."""


class Scheme(Enum):
    """Convective reconstruction scheme."""
    WENO5 = 'weno5'
    WENO3 = 'weno3'
    UPWIND1 = 'upwind1'


class Splitter(Enum):
    """Eigenvalue splitting method."""
    LAX_FRIEDRICHS = 'lax_friedrichs'
    STEGER_WARMING = 'steger_warming'


class Averager(Enum):
    """Symmetric face average."""
    ARITHMETIC = 'arithmetic'
    ROE = 'roe'


def parse_option(enum_cls, value):
    """Coerce an enum member or its string value, raising ConfigurationError."""
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(str(value).lower())
    except ValueError:
        options = ", ".join(repr(e.value) for e in enum_cls)
        raise ConfigurationError(
            f"Unknown {enum_cls.__name__.lower()}: {value!r}. Options: {options}") from None


def dataclass_from_dict(cls, dct):
    """Build a (possibly nested) dataclass from a plain dict, e.g. parsed JSON."""
    if dataclasses.is_dataclass(cls):
        fieldtypes = {field.name: field.type for field in dataclasses.fields(cls)}
        return cls(**{field: dataclass_from_dict(fieldtypes[field], dct[field]) for field in dct})
    else:
        return dct


@dataclass
class FlowModel:
    """
    Constants and selectors shared by every flux evaluation.

    Attributes:
        gas: Gas properties (gamma, R, Prandtl number)
        ref_mu: Viscosity scale multiplying Sutherland's law; 0 means inviscid
        ref_T: Temperature scale that turns the stored temperature into kelvin
        scheme: Convective reconstruction scheme
        splitter: Eigenvalue splitting method
        averager: Face average used to linearise the flux Jacobian
    """
    gas: GasProperties = dataclasses.field(default_factory=GasProperties)
    ref_mu: float = 0.0
    ref_T: float = 1.0
    scheme: Scheme = Scheme.WENO5
    splitter: Splitter = Splitter.LAX_FRIEDRICHS
    averager: Averager = Averager.ROE

    def __post_init__(self):
        if isinstance(self.gas, dict):
            self.gas = GasProperties(**self.gas)
        self.scheme = parse_option(Scheme, self.scheme)
        self.splitter = parse_option(Splitter, self.splitter)
        self.averager = parse_option(Averager, self.averager)
        if self.gas.gamma <= 1.0:
            raise ConfigurationError(f"gamma must exceed 1, got {self.gas.gamma}")
        if self.ref_mu < 0.0 or self.ref_T <= 0.0:
            raise ConfigurationError(
                f"Invalid transport reference values: ref_mu={self.ref_mu}, ref_T={self.ref_T}")

    @property
    def gamma(self) -> float:
        return self.gas.gamma

    @property
    def gas_R(self) -> float:
        return self.gas.R

    @property
    def cv(self) -> float:
        return self.gas.cv

    @property
    def viscous(self) -> bool:
        """Diffusive fluxes are evaluated only for a positive viscosity scale."""
        return self.ref_mu > 0.0

    @classmethod
    def from_reference(cls, length: float, density: float, velocity: float,
                       temperature: float, gas: GasProperties = None,
                       viscous: bool = True, **kwargs) -> 'FlowModel':
        """
        Non-dimensional model from dimensional reference scales.

        Lengths, densities, velocities and temperatures are scaled by the given
        references, pressure by density * velocity². This gives
            R* = R T_ref / V_ref²   (= 1 / (gamma Ma²))
            ref_mu* = 1 / (rho_ref V_ref L_ref)
        so that ref_mu* times Sutherland's law at T* T_ref is 1/Re.

        Args:
            length, density, velocity, temperature: Reference scales (SI)
            gas: Dimensional gas properties (air if omitted)
            viscous: False for an Euler (inviscid) run
            **kwargs: scheme, splitter, averager
        """
        if min(length, density, velocity, temperature) <= 0:
            raise ConfigurationError("Reference scales must be positive")
        gas = gas if gas is not None else GasProperties()
        gas_nd = GasProperties(gamma=gas.gamma, R=gas.R * temperature / velocity**2,
                               prandtl=gas.prandtl)
        ref_mu = 1.0 / (density * velocity * length) if viscous else 0.0
        model = cls(gas=gas_nd, ref_mu=ref_mu, ref_T=temperature, **kwargs)
        logger.debug("Non-dimensional model: R*=%.6g, cv*=%.6g, ref_mu*=%.6g, Ma=%.4f",
                     model.gas_R, model.cv, model.ref_mu, model.mach)
        return model

    @property
    def mach(self) -> float:
        """Reference Mach number implied by a non-dimensional gas constant."""
        return 1.0 / np.sqrt(self.gamma * self.gas_R)

    @property
    def reynolds(self) -> float:
        """Reference Reynolds number, infinite for an inviscid model."""
        if not self.viscous:
            return np.inf
        return 1.0 / (self.ref_mu * sutherland_viscosity(self.ref_T))

"""
Lumped Cell Thermal Model

Single-node thermal balance, explicit Euler:
- Cooling: Q_cool = (T_cell - T_ambient) * A / R_value * dt (Newtonian cooling
  through the compartment insulation)
- Temperature change: dT = (Q_heat - Q_cool) / (c_p * m)

No stability guard: dt must stay small relative to the thermal time constant
c_p * m * R_value / A.
"""

from dataclasses import dataclass


def cooling_energy(
    temperature_c: float,
    ambient_temp_c: float,
    r_value: float,
    area_m2: float,
    dt_s: float
) -> float:
    """Heat (J) leaving the cell through the compartment over dt."""
    return (temperature_c - ambient_temp_c) * area_m2 / r_value * dt_s


def temperature_change(
    temperature_c: float,
    heat_j: float,
    specific_heat: float,
    mass_g: float,
    ambient_temp_c: float,
    r_value: float,
    area_m2: float,
    dt_s: float
) -> float:
    """
    Temperature change (°C) of the cell over one timestep.

    Args:
        temperature_c: Current cell temperature (°C)
        heat_j: Electrical heat energy added this step (J)
        specific_heat: Specific heat capacity (J/(°C·g))
        mass_g: Cell mass (g)
        ambient_temp_c: Ambient temperature (°C)
        r_value: Compartment insulation R-value (m²·°C/W)
        area_m2: Compartment area exposed to ambient (m²)
        dt_s: Timestep (s)
    """
    cool_j = cooling_energy(temperature_c, ambient_temp_c, r_value, area_m2, dt_s)
    return (heat_j - cool_j) / (specific_heat * mass_g)


@dataclass(frozen=True)
class ThermalEnvironment:
    """
    Thermal properties of the cell and its compartment.

    Defaults describe an aluminum-bodied 150 g cell behind an air film.
    """

    specific_heat_j_per_g_c: float = 0.9
    mass_g: float = 150.0
    ambient_temp_c: float = -20.0
    r_value: float = 0.1
    exposed_area_m2: float = 0.01

    def __post_init__(self):
        for field_name in ('specific_heat_j_per_g_c', 'mass_g', 'r_value', 'exposed_area_m2'):
            value = getattr(self, field_name)
            if not value > 0.0:
                raise ValueError(f"{field_name} must be positive, got {value}")

    @property
    def heat_capacity_j_per_c(self) -> float:
        return self.specific_heat_j_per_g_c * self.mass_g

    @property
    def time_constant_s(self) -> float:
        """Thermal time constant; keep dt well below this."""
        return self.heat_capacity_j_per_c * self.r_value / self.exposed_area_m2

    @classmethod
    def from_dict(cls, config: dict) -> 'ThermalEnvironment':
        defaults = cls.__dataclass_fields__
        kwargs = {name: float(config[name]) for name in defaults if name in config}
        return cls(**kwargs)

"""
Lithium-Ion Cell Equivalent Circuit Model (ECM)

This module implements a table-calibrated ECM for rechargeable Li-ion cells with:
- Em, R0, R1, C1 bilinearly interpolated by SOC and temperature
- 1RC network (R1 || C1) for transient voltage sag and rebound
- Coulomb counting SOC
- Lumped thermal model (electrical self-heating vs. compartment cooling)
"""

import logging
from typing import Optional

from .interpolation import CellParameters, resolve_parameters
from .thermal_model import ThermalEnvironment, temperature_change

logger = logging.getLogger(__name__)

SECONDS_PER_HOUR = 3600.0


class LipoCell:
    """
    Rechargeable lithium-ion cell model

    ECM Structure:
        Em(SOC, T) - [R1 || C1] - R0 - Terminal

    Sign convention: positive current = discharge, negative current = charge.

    State is never clamped during updates. SOC may leave [0, 1] under sustained
    over/under-current; callers must check.

    Parameters:
        capacity_ah: Fully charged capacity in Ah (must be > 0)
        initial_soc: Initial state of charge (0.0 to 1.0)
        temperature_c: Initial temperature of the cell interior in °C
    """

    def __init__(self, capacity_ah: float, initial_soc: float, temperature_c: float):
        if not capacity_ah > 0.0:
            raise ValueError(f"capacity_ah must be positive, got {capacity_ah}")

        # Fully charged capacity, in amp-seconds
        self._capacity_as = float(capacity_ah) * SECONDS_PER_HOUR

        self._soc = float(initial_soc)
        self._temperature_c = float(temperature_c)

        # Charge (coulombs) borrowed from C1; starts at equilibrium
        self._c1_charge_c = 0.0

        self._soc_out_of_range = not 0.0 <= self._soc <= 1.0

    # Properties -------------------------------------------------------------

    @property
    def capacity_as(self) -> float:
        return self._capacity_as

    @property
    def capacity_ah(self) -> float:
        return self._capacity_as / SECONDS_PER_HOUR

    @property
    def soc(self) -> float:
        return self._soc

    @property
    def c1_charge_c(self) -> float:
        return self._c1_charge_c

    @property
    def temperature_c(self) -> float:
        return self._temperature_c

    # Public API -------------------------------------------------------------

    def get_parameters(self) -> CellParameters:
        """Resolve circuit parameters for the current SOC and temperature."""
        return resolve_parameters(self._soc, self._temperature_c)

    def voltage(self, current_a: float) -> float:
        """
        Estimate terminal voltage at this draw current without changing state.

        V = Em - Q_C1 / C1 - R0 * I

        Args:
            current_a: Draw current in A (positive = discharge)

        Returns:
            Terminal voltage in volts
        """
        param = self.get_parameters()

        r0_v = param.r0 * current_a
        # Voltage across R1 equals voltage across C1
        r1_v = self._c1_charge_c / param.c1

        return param.em - r1_v - r0_v

    def electrical_step(self, current_a: float, dt_s: float) -> float:
        """
        Advance the electrical state by one timestep.

        Update:
        1. Split current between R1 and C1 using the present C1 voltage
        2. Integrate C1 charge (explicit Euler)
        3. Coulomb count SOC at the full terminal current
        4. Sum ohmic heat in R0 and R1

        Args:
            current_a: Draw current in A (positive = discharge)
            dt_s: Timestep in seconds

        Returns:
            Heat energy dissipated in the cell this step (J)
        """
        param = self.get_parameters()

        r0_i = current_a
        r0_v = param.r0 * r0_i

        c1_v = self._c1_charge_c / param.c1
        r1_v = c1_v
        r1_i = r1_v / param.r1
        c1_i = current_a - r1_i  # current flowing out of C1

        self._c1_charge_c += c1_i * dt_s
        # SOC tracks the terminal current, not the R1 branch current
        self._soc -= current_a * dt_s / self._capacity_as

        self._check_soc_range()

        power_w = r0_v * r0_i + r1_v * r1_i
        return power_w * dt_s

    def thermal_step(
        self,
        heat_j: float,
        specific_heat: float,
        mass_g: float,
        ambient_temp_c: float,
        r_value: float,
        area_m2: float,
        dt_s: float
    ):
        """
        Advance cell temperature by one timestep.

        Args:
            heat_j: Electrical heat input from electrical_step() (J)
            specific_heat: Specific heat capacity (J/(°C·g))
            mass_g: Cell mass (g)
            ambient_temp_c: Ambient temperature (°C)
            r_value: Compartment insulation R-value (m²·°C/W)
            area_m2: Compartment area exposed to ambient (m²)
            dt_s: Timestep (s)
        """
        self._temperature_c += temperature_change(
            self._temperature_c, heat_j, specific_heat, mass_g,
            ambient_temp_c, r_value, area_m2, dt_s
        )

    def apply_environment(self, heat_j: float, environment: ThermalEnvironment, dt_s: float):
        """Run thermal_step() with the properties bundled in a ThermalEnvironment."""
        self.thermal_step(
            heat_j,
            environment.specific_heat_j_per_g_c,
            environment.mass_g,
            environment.ambient_temp_c,
            environment.r_value,
            environment.exposed_area_m2,
            dt_s,
        )

    def get_state(self) -> dict:
        """
        Get current cell state.

        Returns:
            Dictionary with cell state variables and the resolved parameters
        """
        param = self.get_parameters()
        return {
            'capacity_ah': self.capacity_ah,
            'soc': self._soc,
            'c1_charge_c': self._c1_charge_c,
            'temperature_c': self._temperature_c,
            'open_circuit_voltage_v': param.em,
            'r0_ohm': param.r0,
            'r1_ohm': param.r1,
            'c1_f': param.c1,
            'rc_voltage_v': self._c1_charge_c / param.c1,
        }

    def reset(self, soc: Optional[float] = None, temperature_c: Optional[float] = None):
        """
        Reset cell state; C1 returns to equilibrium.

        Args:
            soc: New SOC (fraction). If None, keep current.
            temperature_c: New temperature in °C. If None, keep current.
        """
        if soc is not None:
            self._soc = float(soc)
        if temperature_c is not None:
            self._temperature_c = float(temperature_c)
        self._c1_charge_c = 0.0
        self._soc_out_of_range = not 0.0 <= self._soc <= 1.0

    # Helpers ----------------------------------------------------------------

    def _check_soc_range(self):
        out_of_range = not 0.0 <= self._soc <= 1.0
        if out_of_range and not self._soc_out_of_range:
            logger.warning(f"SOC left [0, 1]: {self._soc:.4f}")
        self._soc_out_of_range = out_of_range

    def __repr__(self) -> str:
        return (
            f"LipoCell(capacity_ah={self.capacity_ah:.3f}, soc={self._soc:.4f}, "
            f"temperature_c={self._temperature_c:.2f}, c1_charge_c={self._c1_charge_c:.2f})"
        )

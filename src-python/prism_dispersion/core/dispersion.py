"""
Copyright 2026 prism-dispersion authors and contributors

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at

    http://www.apache.org/licenses/LICENSE-2.0

Unless required by applicable law or agreed to in writing, software
distributed under the License is distributed on an "AS IS" BASIS,
WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
See the License for the specific language governing permissions and
limitations under the License.
"""

"""
Material dispersion models.

A dispersion model maps a wavelength (in nanometers) to an index of refraction.
Bodies hold a reference to one model; several bodies may share the same model
so that a single parameter change affects all of them.
"""

import math
from abc import ABC, abstractmethod
from typing import Any, Dict

# Handle both relative imports (when used as a module) and absolute imports (when run as script)
if __name__ == "__main__":
    from prism_dispersion.core.constants import (
        SPECTRAL_SHORT, SPECTRAL_MEDIUM, SPECTRAL_LONG, SPECTRAL_SODIUM_D
    )
else:
    from .constants import SPECTRAL_SHORT, SPECTRAL_MEDIUM, SPECTRAL_LONG, SPECTRAL_SODIUM_D


class DispersionModel(ABC):
    """
    Interface for wavelength-dependent refractive index.
    """

    type: str = ''

    @abstractmethod
    def wavelength_to_ior(self, wavelength: float) -> float:
        """
        Return the index of refraction for the given wavelength.

        Args:
            wavelength: Wavelength in nanometers.
        """
        ...

    def serialize(self) -> Dict[str, Any]:
        return {'type': self.__class__.type}


class CauchyDispersion(DispersionModel):
    """
    Cauchy's equation n(lambda) = A + B / lambda^2, with lambda in micrometers.

    The coefficients are fitted from two user-facing parameters: the index of
    refraction at the sodium D line and the Abbe number. They are recomputed
    every time either parameter is assigned.

    Attributes:
        A: Cauchy coefficient A (dimensionless).
        B: Cauchy coefficient B (in um^2).

    Notes:
        - A larger Abbe number means weaker dispersion; around 8e6 the material
          is effectively non-dispersive.
        - Degenerate parameters (Abbe number of 0) yield infinite or NaN
          coefficients without raising.
    """

    type = 'CauchyDispersion'

    def __init__(self, ior_sodium_d: float, abbe: float):
        self._ior_sodium_d = ior_sodium_d
        self._abbe = abbe
        self.A: float = 0.0
        self.B: float = 0.0
        self._compute()

    @property
    def ior_sodium_d(self) -> float:
        """Index of refraction at the sodium D line."""
        return self._ior_sodium_d

    @ior_sodium_d.setter
    def ior_sodium_d(self, value: float) -> None:
        self._ior_sodium_d = value
        self._compute()

    @property
    def abbe(self) -> float:
        """Abbe number of the material."""
        return self._abbe

    @abbe.setter
    def abbe(self, value: float) -> None:
        self._abbe = value
        self._compute()

    def set_parameters(self, ior_sodium_d: float, abbe: float) -> None:
        """Assign both parameters with a single refit."""
        self._ior_sodium_d = ior_sodium_d
        self._abbe = abbe
        self._compute()

    def _compute(self) -> None:
        """Fit A and B to the current (ior_sodium_d, abbe) pair."""
        short_sq = (SPECTRAL_SHORT / 1000) ** 2
        long_sq = (SPECTRAL_LONG / 1000) ** 2
        medium_sq = (SPECTRAL_MEDIUM / 1000) ** 2
        sodium_sq = (SPECTRAL_SODIUM_D / 1000) ** 2

        d = long_sq - short_sq
        m = long_sq * short_sq
        d2 = medium_sq - sodium_sq

        numerator = self._ior_sodium_d * m - m
        denominator = self._abbe * d - m * d2
        if denominator == 0:
            # Float semantics instead of ZeroDivisionError
            self.B = math.copysign(math.inf, numerator) if numerator != 0 else math.nan
        else:
            self.B = numerator / denominator
        self.A = self._ior_sodium_d - self.B / sodium_sq

    def wavelength_to_ior(self, wavelength: float) -> float:
        return self.A + self.B / (wavelength / 1000.0) ** 2

    def dn_dlambda(self, wavelength: float) -> float:
        """
        Derivative of the index with respect to wavelength, in 1/nm.

        Always negative for normal dispersion (B > 0).
        """
        wavelength_um = wavelength / 1000.0
        return -2 * self.B / (wavelength_um ** 3) / 1000.0

    def abbe_number(self) -> float:
        """
        Abbe number recomputed from the fitted coefficients.

        V = (n_d - 1) / (n_F - n_C). Matches `abbe` up to rounding.
        """
        n_d = self.wavelength_to_ior(SPECTRAL_MEDIUM)
        n_f = self.wavelength_to_ior(SPECTRAL_SHORT)
        n_c = self.wavelength_to_ior(SPECTRAL_LONG)
        return (n_d - 1) / (n_f - n_c)

    def serialize(self) -> Dict[str, Any]:
        return {
            'type': self.__class__.type,
            'ior_sodium_d': self._ior_sodium_d,
            'abbe': self._abbe,
        }

    def __repr__(self) -> str:
        return (f"CauchyDispersion(ior_sodium_d={self._ior_sodium_d}, abbe={self._abbe}, "
                f"A={self.A:.6f}, B={self.B:.6f})")


class NoDispersion(DispersionModel):
    """A material with the same index of refraction at every wavelength."""

    type = 'NoDispersion'

    def __init__(self, ior: float = 1.0):
        self.ior = ior

    def wavelength_to_ior(self, wavelength: float) -> float:
        return self.ior

    def serialize(self) -> Dict[str, Any]:
        return {'type': self.__class__.type, 'ior': self.ior}

    def __repr__(self) -> str:
        return f"NoDispersion(ior={self.ior})"


# Example usage and testing
if __name__ == "__main__":
    glass = CauchyDispersion(1.52, 20)
    print(glass)
    for wl in (400, 486.1, 587.6, 656.3, 700):
        print(f"  n({wl}nm) = {glass.wavelength_to_ior(wl):.5f}")
    print(f"  Abbe number from fit: {glass.abbe_number():.3f}")

    glass.abbe = 8e6
    print(f"  Non-dispersive limit: n(400)={glass.wavelength_to_ior(400):.6f}, "
          f"n(700)={glass.wavelength_to_ior(700):.6f}")

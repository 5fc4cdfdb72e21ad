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
Constants used throughout the dispersion simulation.

Kept in their own module so that the dispersion model, the scene objects and
the simulation can share them without circular imports.
"""

# Fraunhofer reference lines (in nanometers) used to fit the Cauchy model
SPECTRAL_SHORT = 486.1       # F line (hydrogen, blue)
SPECTRAL_MEDIUM = 587.6      # d line (helium, yellow)
SPECTRAL_LONG = 656.3        # C line (hydrogen, red)

# Anchor wavelength of the configured index of refraction.
# The model treats the d line as "sodium D", so it coincides with SPECTRAL_MEDIUM.
SPECTRAL_SODIUM_D = 587.6

# Range of simulated photon wavelengths (in nanometers)
MIN_WAVELENGTH = 350.0
WAVELENGTH_SPAN = 400.0

# Maximum random phase offset added to each photon per trace
PHOTON_JITTER = 0.01

# Length of the final segment appended when a photon hits nothing
ESCAPE_DISTANCE = 20.0

# Minimum distance along the ray for a hit to count.
# Rejects the edge the photon has just been refracted at.
MIN_HIT_DISTANCE = 1e-6

# Abbe number large enough to make a Cauchy material effectively non-dispersive
NON_DISPERSIVE_ABBE = 8e6

# Default simulation parameters
DEFAULT_PHOTONS_PER_TICK = 4
DEFAULT_MAX_SEGMENTS = 8

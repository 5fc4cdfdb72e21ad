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
Wavelength to display color conversion.

The CIE 1931 color matching functions are approximated by sums of asymmetric
Gaussian lobes (Wyman, Sloan & Shirley, "Simple Analytic Approximations to the
CIE XYZ Color Matching Functions", JCGT 2013). The resulting XYZ tristimulus
values are converted to linear sRGB and gamma-compressed.

The output is NOT clamped: wavelengths near the spectrum edges produce
components outside [0, 1]. Use `clamp_color` before display.
"""

from typing import Tuple

import numpy as np


RGB = Tuple[float, float, float]

# (weight, center, inverse spread below center, inverse spread above center)
X_BAR_LOBES = (
    (1.056, 599.8, 0.0264, 0.0323),
    (0.362, 442.0, 0.0624, 0.0374),
    (-0.065, 501.1, 0.0490, 0.0382),
)
Y_BAR_LOBES = (
    (0.821, 568.8, 0.0213, 0.0247),
    (0.286, 530.9, 0.0613, 0.0322),
)
Z_BAR_LOBES = (
    (1.217, 437.0, 0.0845, 0.0278),
    (0.681, 459.0, 0.0385, 0.0725),
)

# XYZ (D65) to linear sRGB
XYZ_TO_LINEAR_SRGB = np.array([
    [3.2404542, -1.5371385, -0.4985314],
    [-0.9692660, 1.8760108, 0.0415560],
    [0.0556434, -0.2040259, 1.0572252],
])


def _lobe_sum(wavelength: float, lobes) -> float:
    total = 0.0
    for weight, center, spread_low, spread_high in lobes:
        t = (wavelength - center) * (spread_low if wavelength < center else spread_high)
        total += weight * np.exp(-0.5 * t * t)
    return float(total)


def wavelength_to_xyz(wavelength: float) -> np.ndarray:
    """
    CIE 1931 XYZ tristimulus values of monochromatic light.

    Args:
        wavelength: Wavelength in nanometers.

    Returns:
        numpy array [X, Y, Z].
    """
    return np.array([
        _lobe_sum(wavelength, X_BAR_LOBES),
        _lobe_sum(wavelength, Y_BAR_LOBES),
        _lobe_sum(wavelength, Z_BAR_LOBES),
    ])


def gamma_compress(c: np.ndarray) -> np.ndarray:
    """sRGB transfer function, applied per channel."""
    c = np.asarray(c, dtype=np.float64)
    # Negative components stay on the linear branch; a fractional power of a
    # negative number would be NaN.
    high = 1.055 * np.power(np.maximum(c, 0.0031308), 1 / 2.4) - 0.055
    return np.where(c <= 0.0031308, 12.92 * c, high)


def wavelength_to_color(wavelength: float) -> RGB:
    """
    Convert a wavelength (in nm) to a gamma-compressed sRGB triple.

    Deterministic and free of side effects. Values lie roughly in [0, 1] for
    the visible range but are not clamped.

    Args:
        wavelength: Wavelength in nanometers.

    Returns:
        tuple: (r, g, b) floats.
    """
    linear = XYZ_TO_LINEAR_SRGB @ wavelength_to_xyz(wavelength)
    r, g, b = gamma_compress(linear)
    return (float(r), float(g), float(b))


def clamp_color(color: RGB) -> RGB:
    """Clamp each component into [0, 1], mapping NaN to 0."""
    arr = np.nan_to_num(np.asarray(color, dtype=np.float64), nan=0.0)
    r, g, b = np.clip(arr, 0.0, 1.0)
    return (float(r), float(g), float(b))


def color_to_rgb255(color: RGB) -> Tuple[int, int, int]:
    """Clamp and scale to 8-bit integer channels."""
    r, g, b = clamp_color(color)
    return (int(round(255 * r)), int(round(255 * g)), int(round(255 * b)))


def color_to_css(color: RGB) -> str:
    """
    Convert to a CSS color string.

    Returns:
        str: e.g. 'rgb(255, 0, 0)'
    """
    r, g, b = color_to_rgb255(color)
    return f'rgb({r}, {g}, {b})'


# Example usage and testing
if __name__ == "__main__":
    for wl in range(380, 781, 40):
        rgb = wavelength_to_color(wl)
        print(f"{wl}nm -> ({rgb[0]:+.3f}, {rgb[1]:+.3f}, {rgb[2]:+.3f})  {color_to_css(rgb)}")

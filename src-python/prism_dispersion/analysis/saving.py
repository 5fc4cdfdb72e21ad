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

===============================================================================
Photon Path Export Utilities
===============================================================================
Utilities for exporting and summarizing traced photon paths:

- CSV: one row per path segment, with the photon's wavelength, color and
  termination reason
- Statistics: counts, wavelength range, lengths and exit-angle spread
- Filters: TIR-terminated paths
===============================================================================
"""

import csv
import math
from pathlib import Path
from typing import Dict, List, Union

from ..core.photon import PhotonPath, TERMINATION_ESCAPED, TERMINATION_MAX_SEGMENTS, TERMINATION_TIR


def save_paths_csv(
    paths: List[PhotonPath],
    output_path: Union[str, Path],
    filename: str = "photon_paths.csv",
    precision_coords: int = 4,
    precision_color: int = 4,
) -> Path:
    """
    Export photon paths to a CSV file, one row per segment.

    Args:
        paths: List of PhotonPath objects to export.
        output_path: Directory path where the CSV file will be saved.
            Can be a string or Path object.
        filename: Name of the output CSV file (default: "photon_paths.csv").
        precision_coords: Decimal places for coordinate values (default: 4).
        precision_color: Decimal places for color components (default: 4).

    Returns:
        Path: Full path to the created CSV file.

    Raises:
        OSError: If the output directory cannot be created or file cannot be written.

    Example:
        >>> from prism_dispersion.analysis import save_paths_csv
        >>> output_file = save_paths_csv(simulation.photon_paths(), "./output")
        >>> print(f"Saved to: {output_file}")
    """
    output_dir = Path(output_path)
    output_dir.mkdir(parents=True, exist_ok=True)

    csv_file = output_dir / filename

    with open(csv_file, 'w', newline='', encoding='utf-8') as f:
        writer = csv.writer(f)

        writer.writerow([
            'path_index',
            'segment_index',
            'source_index',
            'copy_index',
            'wavelength',
            'p1_x',
            'p1_y',
            'p2_x',
            'p2_y',
            'length',
            'color_r',
            'color_g',
            'color_b',
            'termination',
            'caused_tir',
        ])

        coord_fmt = f"{{:.{precision_coords}f}}"
        color_fmt = f"{{:.{precision_color}f}}"

        for i, path in enumerate(paths):
            r, g, b = path.color
            for j, (p1, p2) in enumerate(path.segments()):
                writer.writerow([
                    i,
                    j,
                    path.source_index,
                    path.copy_index,
                    f"{path.wavelength:.3f}",
                    coord_fmt.format(p1.x),
                    coord_fmt.format(p1.y),
                    coord_fmt.format(p2.x),
                    coord_fmt.format(p2.y),
                    coord_fmt.format(p1.distance_to(p2)),
                    color_fmt.format(r),
                    color_fmt.format(g),
                    color_fmt.format(b),
                    path.termination,
                    # Only the last segment ends at the TIR point
                    path.caused_tir and j == len(path.points) - 2,
                ])

    return csv_file


def filter_tir_paths(paths: List[PhotonPath], tir_only: bool = True) -> List[PhotonPath]:
    """
    Filter paths on whether they were stopped by total internal reflection.

    Args:
        paths: List of PhotonPath objects to filter.
        tir_only: If True, return only TIR-terminated paths.
            If False, return the others.
    """
    return [path for path in paths if path.caused_tir == tir_only]


def exit_angle(path: PhotonPath) -> float:
    """
    Direction of the last segment of a path, in radians.

    Returns NaN for paths with fewer than two points.
    """
    if len(path.points) < 2:
        return math.nan
    return path.points[-1].sub(path.points[-2]).angle()


def get_path_statistics(paths: List[PhotonPath]) -> Dict:
    """
    Compute statistics about a collection of photon paths.

    Args:
        paths: List of PhotonPath objects to analyze.

    Returns:
        dict: Dictionary containing:
            - total_paths: Number of paths
            - total_points: Sum of point counts
            - escaped_paths: Paths that left the scene
            - max_segments_paths: Paths stopped by the bounce limit
            - tir_paths: Paths stopped by total internal reflection
            - total_hits: Sum of interface hits
            - avg_hits: Average interface hits per path
            - min_wavelength / max_wavelength: Wavelength range in nm
            - total_length: Sum of polyline lengths
            - exit_angle_spread: Range (radians) of exit directions among
              escaped paths that hit at least one interface; 0.0 if fewer
              than two such paths

    Example:
        >>> stats = get_path_statistics(paths)
        >>> print(f"Escaped: {stats['escaped_paths']} / {stats['total_paths']}")
    """
    if not paths:
        return {
            'total_paths': 0,
            'total_points': 0,
            'escaped_paths': 0,
            'max_segments_paths': 0,
            'tir_paths': 0,
            'total_hits': 0,
            'avg_hits': 0.0,
            'min_wavelength': None,
            'max_wavelength': None,
            'total_length': 0.0,
            'exit_angle_spread': 0.0,
        }

    terminations = [path.termination for path in paths]
    total_hits = sum(path.hit_count for path in paths)
    wavelengths = [path.wavelength for path in paths]

    exit_angles = [
        exit_angle(path) for path in paths
        if path.termination == TERMINATION_ESCAPED and path.hit_count > 0
    ]
    exit_angles = [a for a in exit_angles if math.isfinite(a)]
    spread = max(exit_angles) - min(exit_angles) if len(exit_angles) >= 2 else 0.0

    return {
        'total_paths': len(paths),
        'total_points': sum(len(path.points) for path in paths),
        'escaped_paths': terminations.count(TERMINATION_ESCAPED),
        'max_segments_paths': terminations.count(TERMINATION_MAX_SEGMENTS),
        'tir_paths': terminations.count(TERMINATION_TIR),
        'total_hits': total_hits,
        'avg_hits': total_hits / len(paths),
        'min_wavelength': min(wavelengths),
        'max_wavelength': max(wavelengths),
        'total_length': sum(path.length() for path in paths),
        'exit_angle_spread': spread,
    }

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

import random
from typing import List, Optional, Tuple

# Handle both relative imports (when used as a module) and absolute imports (when run as script)
if __name__ == "__main__":
    from prism_dispersion.core.geometry import Vector2, Edge, EdgeHit, geometry
    from prism_dispersion.core.color import wavelength_to_color
    from prism_dispersion.core.dispersion import DispersionModel, CauchyDispersion, NoDispersion
    from prism_dispersion.core.photon import (
        PhotonPath, TERMINATION_ESCAPED, TERMINATION_MAX_SEGMENTS, TERMINATION_TIR
    )
    from prism_dispersion.core.scene import Scene
    from prism_dispersion.core.scene_objs import BaseBody, BaseSceneObj, PhotonSource
    from prism_dispersion.core import constants
else:
    from .geometry import Vector2, Edge, EdgeHit, geometry
    from .color import wavelength_to_color
    from .dispersion import DispersionModel, CauchyDispersion, NoDispersion
    from .photon import PhotonPath, TERMINATION_ESCAPED, TERMINATION_MAX_SEGMENTS, TERMINATION_TIR
    from .scene import Scene
    from .scene_objs import BaseBody, BaseSceneObj, PhotonSource
    from . import constants


class Simulation:
    """
    Time-driven dispersion simulation.

    Every call to photon_paths() emits `photons_per_tick` photons from each
    source and marches each one through the scene: at every edge it meets it
    is refracted with the index of refraction of the owning body at the
    photon's wavelength. Photons never split; each yields exactly one path.

    Wavelengths sweep the visible range over time: a photon's phase is
    (time + copy_index / photons_per_tick + jitter) mod 1 and its wavelength is
    350 + 400 * phase nm.

    Attributes:
        scene (Scene): The bodies and sources being simulated
        time (float): Simulated time in seconds; only grows, except on reset
        verbose (int): Verbosity level
        processed_photon_count (int): Photons traced by the last photon_paths()
        total_tir (int): Paths stopped by total internal reflection in the last
            photon_paths() call
    """

    def __init__(
        self,
        scene: Optional[Scene] = None,
        photons_per_tick: int = constants.DEFAULT_PHOTONS_PER_TICK,
        max_segments: int = constants.DEFAULT_MAX_SEGMENTS,
        rng: Optional[random.Random] = None,
        verbose: int = 0
    ) -> None:
        """
        Initialize the simulation.

        Args:
            scene (Scene): The scene to simulate (default: a new empty scene)
            photons_per_tick (int): Photons per source per trace (default: 4)
            max_segments (int): Maximum interface hits per photon (default: 8)
            rng (random.Random): Random generator for the wavelength jitter.
                Replaces the scene's generator when given.
            verbose (int): Verbosity level (default: 0)
                0 = silent (no debug output)
                1 = verbose (one line per traced photon)
                2 = very verbose/debug (show every refraction)

        Raises:
            ValueError: If photons_per_tick or max_segments is negative.
        """
        self.scene: Scene = scene if scene is not None else Scene()
        if rng is not None:
            self.scene.set_rng(rng)
        self.verbose: int = verbose
        self.time: float = 0.0
        self._photons_per_tick: int = 0
        self._max_segments: int = 0
        self.photons_per_tick = photons_per_tick
        self.max_segments = max_segments
        self.processed_photon_count: int = 0
        self.total_tir: int = 0

    # =========================================================================
    # Scene access
    # =========================================================================

    @property
    def objects(self) -> List[BaseBody]:
        """The refractive bodies, in scene order."""
        return self.scene.bodies

    @property
    def sources(self) -> List[PhotonSource]:
        """The photon sources, in scene order."""
        return self.scene.sources

    def add_object(self, obj: BaseSceneObj) -> BaseSceneObj:
        """Add a body or source to the scene."""
        return self.scene.add_object(obj)

    # =========================================================================
    # Parameters
    # =========================================================================

    @property
    def photons_per_tick(self) -> int:
        return self._photons_per_tick

    @photons_per_tick.setter
    def photons_per_tick(self, value: int) -> None:
        """Set the photon count per source. Resets time."""
        if value < 0:
            raise ValueError(f"photons_per_tick must be >= 0, got {value}")
        self._photons_per_tick = int(value)
        self.reset_time()

    @property
    def max_segments(self) -> int:
        return self._max_segments

    @max_segments.setter
    def max_segments(self, value: int) -> None:
        """Set the bounce limit. Resets time."""
        if value < 0:
            raise ValueError(f"max_segments must be >= 0, got {value}")
        self._max_segments = int(value)
        self.reset_time()

    def reset_time(self) -> None:
        self.time = 0.0

    def update_dispersion(
        self,
        model: DispersionModel,
        ior_sodium_d: Optional[float] = None,
        abbe: Optional[float] = None
    ) -> None:
        """
        Change the parameters of a dispersion model and reset time.

        Every body sharing `model` sees the change on the next trace.

        Args:
            model: The model to update.
            ior_sodium_d: New index of refraction at the sodium D line. For a
                NoDispersion model, the new constant index.
            abbe: New Abbe number (CauchyDispersion only).

        Raises:
            ValueError: If the model does not take one of the given parameters.
        """
        if isinstance(model, CauchyDispersion):
            model.set_parameters(
                ior_sodium_d if ior_sodium_d is not None else model.ior_sodium_d,
                abbe if abbe is not None else model.abbe,
            )
        elif isinstance(model, NoDispersion):
            if abbe is not None:
                raise ValueError(f"NoDispersion has no Abbe number, got abbe={abbe}")
            if ior_sodium_d is not None:
                model.ior = ior_sodium_d
        elif ior_sodium_d is not None or abbe is not None:
            raise ValueError(
                f"Cannot set ior_sodium_d/abbe on {type(model).__name__}"
            )
        self.reset_time()

    # =========================================================================
    # Stepping
    # =========================================================================

    def tick(self, delta: float) -> List[PhotonPath]:
        """
        Advance the clock and trace a fresh batch of photons.

        Args:
            delta: Elapsed time in milliseconds.

        Returns:
            list: The new photon paths (see photon_paths()).
        """
        self.time += delta / 1000.0
        return self.photon_paths()

    def photon_wavelength(self, copy_index: int) -> float:
        """
        Wavelength (nm) of photon `copy_index` at the current time.

        Draws one jitter value from the scene's random generator.
        """
        jitter = self.scene.rng() * constants.PHOTON_JITTER
        phase = (self.time + copy_index / self._photons_per_tick + jitter) % 1.0
        return constants.MIN_WAVELENGTH + constants.WAVELENGTH_SPAN * phase

    def photon_paths(self) -> List[PhotonPath]:
        """
        Trace `photons_per_tick` photons from every source.

        Paths are ordered by source, then by copy index. The result is built
        fresh on every call; the jitter makes repeated calls differ unless
        the random generator is seeded.

        Returns:
            list: photons_per_tick * len(sources) PhotonPath objects.
        """
        self.processed_photon_count = 0
        self.total_tir = 0
        self.scene.error = None
        self.scene.warning = None

        paths: List[PhotonPath] = []
        for source_index, source in enumerate(self.scene.sources):
            for copy_index in range(self._photons_per_tick):
                wavelength = self.photon_wavelength(copy_index)
                path = self.trace_photon(source, wavelength, source_index, copy_index)
                paths.append(path)

        if self.total_tir > 0:
            self.scene.warning = (
                f"Total internal reflection stopped {self.total_tir} of "
                f"{self.processed_photon_count} photon paths"
            )
        return paths

    def trace_photon(
        self,
        source: PhotonSource,
        wavelength: float,
        source_index: int = 0,
        copy_index: int = 0
    ) -> PhotonPath:
        """
        March one photon through the scene.

        Args:
            source: The emitting source.
            wavelength: Photon wavelength in nm.
            source_index: Index of the source, recorded on the path.
            copy_index: Index of the photon among the source's photons.

        Returns:
            PhotonPath: at most max_segments + 1 points.
        """
        position = source.position.copy()
        direction = source.forward()

        path = PhotonPath(
            points=[position.copy()],
            color=wavelength_to_color(wavelength),
            wavelength=wavelength,
            source_index=source_index,
            copy_index=copy_index,
        )
        path.source_uuid = source.uuid
        self.processed_photon_count += 1

        if self.verbose >= 1:
            print(f"\n### SIMULATION photon {source_index}:{copy_index} "
                  f"wavelength={wavelength:.2f}nm")
            print(f"  start=({position.x:.4f}, {position.y:.4f}) "
                  f"direction=({direction.x:.4f}, {direction.y:.4f})")

        path.termination = TERMINATION_MAX_SEGMENTS
        for _ in range(self._max_segments):
            intersection = self._find_nearest_intersection(position, direction)

            if intersection is None:
                path.points.append(position.add(direction.scale(constants.ESCAPE_DISTANCE)))
                path.termination = TERMINATION_ESCAPED
                break

            body, edge, hit = intersection
            ior = body.get_ior(wavelength)
            new_direction = self._refract_at(direction, edge, hit.front, ior)

            path.points.append(hit.point)
            path.hit_count += 1

            if new_direction is None:
                path.caused_tir = True
                path.termination = TERMINATION_TIR
                self.total_tir += 1
                if self.verbose >= 1:
                    print(f"  TIR at ({hit.point.x:.4f}, {hit.point.y:.4f}) "
                          f"in {body.get_display_name()}")
                break

            position = hit.point
            direction = new_direction

        if self.verbose >= 1:
            print(f"  {len(path.points)} points, termination='{path.termination}'")

        return path

    def _find_nearest_intersection(
        self,
        origin: Vector2,
        direction: Vector2
    ) -> Optional[Tuple[BaseBody, Edge, EdgeHit]]:
        """
        Find the closest edge hit along a ray over all bodies.

        Hits at or closer than MIN_HIT_DISTANCE are ignored, which excludes
        the edge the ray starts on.

        Returns:
            (body, edge, hit) for the nearest hit, or None.
        """
        nearest: Optional[Tuple[BaseBody, Edge, EdgeHit]] = None
        nearest_distance = float('inf')

        for body in self.scene.bodies:
            for edge in body.edges:
                hit = geometry.ray_edge_intersection(
                    origin, direction, edge, constants.MIN_HIT_DISTANCE
                )
                if hit is not None and hit.distance < nearest_distance:
                    nearest = (body, edge, hit)
                    nearest_distance = hit.distance

        return nearest

    def _refract_at(
        self,
        direction: Vector2,
        edge: Edge,
        front: bool,
        ior: float
    ) -> Optional[Vector2]:
        """
        Refract a direction at an edge.

        Entering a body (front face) the ratio is 1/ior and the outward edge
        normal faces the ray; leaving it (back face) the ratio is ior and the
        normal is flipped.

        Returns:
            The refracted direction, or None on total internal reflection.
        """
        normal = edge.normal()
        if front:
            eta = 1.0 / ior
        else:
            eta = ior
            normal = normal.negate()

        cos_incidence = abs(normal.dot(direction))
        refracted = geometry.refract(direction, normal, eta, cos_incidence)

        if self.verbose >= 2:
            side = 'front' if front else 'back'
            print(f"    {side} face: ior={ior:.5f} eta={eta:.5f} cos_i={cos_incidence:.5f}")
            if refracted is not None:
                print(f"    refracted=({refracted.x:.5f}, {refracted.y:.5f})")

        return refracted


# Example usage and testing
if __name__ == "__main__":
    from prism_dispersion.core.scene_objs import TrianglePrism

    print("Testing Simulation class...\n")

    print("Test 1: Single source, no bodies")
    sim = Simulation(rng=random.Random(0))
    sim.add_object(PhotonSource(Vector2(0, 0), rotation=0.0))
    paths = sim.photon_paths()
    print(f"  Paths: {len(paths)}")
    print(f"  First path: {[p.to_dict() for p in paths[0].points]}")
    print(f"  Expected: 4 paths of 2 points, ending at (20, 0)")

    print("\nTest 2: Prism dispersion")
    glass = CauchyDispersion(1.52, 20)
    sim2 = Simulation(photons_per_tick=6, rng=random.Random(1), verbose=1)
    sim2.add_object(TrianglePrism(Vector2(0, 0), 3.0, glass))
    sim2.add_object(PhotonSource(Vector2(-2, 0), rotation=0.4))
    for path in sim2.tick(16):
        last = path.points[-1]
        print(f"  {path.wavelength:6.1f}nm -> ({last.x:+.3f}, {last.y:+.3f}) {path.termination}")
    print(f"  Warning: {sim2.scene.warning}")

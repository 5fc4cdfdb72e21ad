import sys
import os
import random

# Add parent directories to path to import prism_dispersion modules
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..', '..'))

from prism_dispersion.core.geometry import Vector2
from prism_dispersion.core.dispersion import CauchyDispersion
from prism_dispersion.core.scene import Scene
from prism_dispersion.core.scene_objs import TrianglePrism, Square, PhotonSource
from prism_dispersion.core.simulator import Simulation
from prism_dispersion.core.svg_renderer import SVGRenderer
from prism_dispersion.analysis import (
    analyze_scene_geometry,
    get_path_statistics,
    save_paths_csv,
)


def build_default_simulation(seed=None, verbose=0):
    """
    The default scene: two prisms and a block of the same glass, lit by two
    sources.

    All three bodies share one CauchyDispersion, so update_dispersion()
    changes them together.
    """
    glass = CauchyDispersion(1.52, 20)

    scene = Scene(rng=random.Random(seed))
    scene.name = "Prism dispersion"

    sim = Simulation(scene, photons_per_tick=4, max_segments=8, verbose=verbose)
    sim.add_object(TrianglePrism(Vector2(0, 0), 3.0, glass, name='Large prism'))
    sim.add_object(TrianglePrism(Vector2(0, 2.2), 1.3, glass, name='Small prism'))
    sim.add_object(Square(Vector2(1.8, 0.3), 1.0, glass, name='Block'))
    sim.add_object(PhotonSource(Vector2(-2, 0), rotation=0.4, name='Source A'))
    sim.add_object(PhotonSource(Vector2(-0.5, 2.5), rotation=-1.6, name='Source B'))
    return sim, glass


def dispersion_demo():
    """Trace the default scene for one simulated second and export the result.

    Each tick emits 4 photons per source with wavelengths spread over
    350-750 nm. Accumulating the paths of all ticks fills in the spectrum
    fanning out of each prism.
    """
    output_dir = os.path.join(os.path.dirname(__file__), 'output')
    if not os.path.exists(output_dir):
        os.makedirs(output_dir)
    print("Setting up the dispersion scene...\n")

    sim, glass = build_default_simulation(seed=42)

    analysis = analyze_scene_geometry(sim.scene)
    print(analysis.summary())

    all_paths = []
    for _ in range(60):
        all_paths.extend(sim.tick(1000 / 60))

    print(f"\nSimulated time: {sim.time:.3f}s")
    print(f"Photon paths: {len(all_paths)}")
    if sim.scene.warning:
        print(f"Warning: {sim.scene.warning}")

    stats = get_path_statistics(all_paths)
    print(f"  escaped={stats['escaped_paths']} tir={stats['tir_paths']} "
          f"max_segments={stats['max_segments_paths']}")
    print(f"  wavelengths {stats['min_wavelength']:.1f}-{stats['max_wavelength']:.1f}nm")
    print(f"  exit angle spread: {stats['exit_angle_spread']:.4f} rad")

    renderer = SVGRenderer(width=800, height=600, viewbox=(-4, -3, 8, 6))
    renderer.draw_simulation(sim, all_paths)
    output_file = os.path.join(output_dir, 'prism_dispersion.svg')
    renderer.save(output_file)
    print(f"\nSaved to: {output_file}")

    csv_file = save_paths_csv(all_paths, output_dir)
    print(f"Saved paths to: {csv_file}")

    # =========================================================================
    # Same scene with weaker dispersion
    # =========================================================================
    print("\n--- Abbe number 60 (crown glass) ---")
    sim.update_dispersion(glass, abbe=60)
    paths = []
    for _ in range(60):
        paths.extend(sim.tick(1000 / 60))
    stats = get_path_statistics(paths)
    print(f"  exit angle spread: {stats['exit_angle_spread']:.4f} rad")

    renderer = SVGRenderer(width=800, height=600, viewbox=(-4, -3, 8, 6))
    renderer.draw_simulation(sim, paths)
    output_file = os.path.join(output_dir, 'prism_dispersion_abbe60.svg')
    renderer.save(output_file)
    print(f"Saved to: {output_file}")


if __name__ == "__main__":
    dispersion_demo()

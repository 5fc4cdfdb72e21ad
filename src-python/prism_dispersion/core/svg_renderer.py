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

import math

import svgwrite

# Handle both relative imports (when used as a module) and absolute imports (when run as script)
if __name__ == "__main__":
    from prism_dispersion.core.color import color_to_css
else:
    from .color import color_to_css


class SVGRenderer:
    """
    SVG renderer for the dispersion simulation.

    The SVG is organized into three layers, bottom to top:
    - objects: Bodies and photon sources
    - photons: Photon paths, one polyline each
    - labels: Text annotations

    Coordinate System:
        The renderer uses a Y-up coordinate system (positive Y points upward),
        which matches the simulation. This is achieved by applying a vertical
        flip transformation to each layer.

    Attributes:
        width (int): Canvas width in pixels
        height (int): Canvas height in pixels
        viewbox (tuple): SVG viewBox (min_x, min_y, width, height), Y-down
        dwg (svgwrite.Drawing): The SVG drawing object
        layer_objects (svgwrite.Group): Group for bodies and sources
        layer_photons (svgwrite.Group): Group for photon paths
        layer_labels (svgwrite.Group): Group for label elements
    """

    def __init__(self, width=800, height=600, viewbox=None, metadata_level='full'):
        """
        Initialize the SVG renderer.

        Args:
            width (int): Canvas width in pixels (default: 800)
            height (int): Canvas height in pixels (default: 600)
            viewbox (tuple or None): Visible region in world units, as
                (min_x, min_y, width, height) with Y pointing up.
                If None, uses (-5, -3.75, 10, 7.5).
            metadata_level (str): Controls how much simulation metadata to embed.
                - 'none': No simulation metadata (smallest files)
                - 'standard': id + inkscape:label + class
                - 'full': All of 'standard' plus data-* attributes

        Raises:
            ValueError: If metadata_level is not one of the options above.
        """
        if metadata_level not in ('none', 'standard', 'full'):
            raise ValueError(
                f"Invalid metadata_level '{metadata_level}'. "
                f"Valid options: ('none', 'standard', 'full')"
            )
        self.width = width
        self.height = height
        self.metadata_level = metadata_level
        self.user_viewbox = viewbox if viewbox is not None else (-5, -3.75, 10, 7.5)

        # SVG needs the viewbox flipped: min_y becomes -(min_y + height)
        min_x, min_y, vb_width, vb_height = self.user_viewbox
        self.viewbox = (min_x, -(min_y + vb_height), vb_width, vb_height)

        # profile='full' enables data-* attributes; debug=False disables
        # svgwrite's validation, which rejects the Inkscape namespace.
        self.dwg = svgwrite.Drawing(size=(f'{width}px', f'{height}px'),
                                    profile='full', debug=False)
        self.dwg.viewbox(*self.viewbox)
        self.dwg['xmlns:inkscape'] = 'http://www.inkscape.org/namespaces/inkscape'

        # Dark background so spectral colors stay visible
        self.dwg.add(self.dwg.rect(
            insert=(self.viewbox[0], self.viewbox[1]),
            size=(self.viewbox[2], self.viewbox[3]),
            fill='black'
        ))

        self.layer_objects = self.dwg.add(self.dwg.g(
            id='layer-objects',
            transform='scale(1, -1)',
            **{'inkscape:groupmode': 'layer', 'inkscape:label': 'Objects'}
        ))
        self.layer_photons = self.dwg.add(self.dwg.g(
            id='layer-photons',
            transform='scale(1, -1)',
            **{'inkscape:groupmode': 'layer', 'inkscape:label': 'Photons'}
        ))
        self.layer_labels = self.dwg.add(self.dwg.g(
            id='layer-labels',
            transform='scale(1, -1)',
            **{'inkscape:groupmode': 'layer', 'inkscape:label': 'Labels'}
        ))

        # Font size in world units
        self.font_size = self.user_viewbox[3] / 50

    def _normalize_coord(self, value):
        """
        Normalize a coordinate value.

        Negative zero and values within 1e-10 of zero become 0.0.
        """
        if value == 0.0 or abs(value) < 1e-10:
            return 0.0
        return value

    def _normalize_point(self, point):
        """
        Normalize a point given as a Vector2 or an {'x', 'y'} dictionary.

        Returns:
            tuple: (x, y)
        """
        if isinstance(point, dict):
            x, y = point['x'], point['y']
        else:
            x, y = point.x, point.y
        return (self._normalize_coord(x), self._normalize_coord(y))

    @staticmethod
    def _is_finite_point(point):
        return math.isfinite(point.x) and math.isfinite(point.y)

    def _attach_scene_obj_metadata(self, element, scene_obj, css_class='scene-obj'):
        """
        Attach id, inkscape:label, class, and data-uuid from a scene object.

        Respects self.metadata_level.
        """
        if self.metadata_level == 'none':
            return

        element['id'] = f'{css_class}-{scene_obj.uuid}'
        element['inkscape:label'] = scene_obj.get_display_name()
        element['class'] = css_class

        if self.metadata_level == 'full':
            element['data-uuid'] = scene_obj.uuid
            element['data-type'] = scene_obj.type

    def _draw_label(self, text, x, y, color, anchor='middle'):
        vertical_offset = self.font_size * 0.35
        label = self.dwg.text(
            text,
            insert=(x, -y + vertical_offset),
            fill=color,
            font_size=self.font_size,
            font_family='sans-serif',
            text_anchor=anchor,
            transform='scale(1, -1)'  # Flip text back to be readable
        )
        self.layer_labels.add(label)
        return label

    def draw_body(self, body, fill='white', fill_opacity=0.12, stroke='lightsteelblue',
                  stroke_width=0.02, label=None):
        """
        Draw a body outline from its display path.

        Args:
            body (BaseBody): The body to draw
            fill (str): Fill color (default: 'white')
            fill_opacity (float): Fill opacity 0.0-1.0 (default: 0.12)
            stroke (str): Outline color (default: 'lightsteelblue')
            stroke_width (float): Outline width in world units (default: 0.02)
            label (str or None): Optional label at the centroid
        """
        path = body.path
        if len(path) < 3:
            return

        points = [self._normalize_point(p) for p in path]
        polygon = self.dwg.polygon(
            points=points,
            fill=fill,
            fill_opacity=fill_opacity,
            stroke=stroke,
            stroke_width=stroke_width
        )
        self._attach_scene_obj_metadata(polygon, body, css_class='body')
        if self.metadata_level == 'full':
            polygon['data-dispersion'] = body.dispersion.type
        self.layer_objects.add(polygon)

        if label:
            cx = self._normalize_coord(sum(p['x'] for p in path) / len(path))
            cy = self._normalize_coord(sum(p['y'] for p in path) / len(path))
            text = self._draw_label(label, cx, cy, stroke)
            text['id'] = f'label-body-{body.uuid}'

    def draw_source(self, source, color='orange', radius=0.06, arrow_length=0.3,
                    label=None):
        """
        Draw a photon source as a dot with a short direction tick.

        Args:
            source (PhotonSource): The source to draw
            color (str): Fill and stroke color (default: 'orange')
            radius (float): Dot radius in world units (default: 0.06)
            arrow_length (float): Length of the direction tick (default: 0.3)
            label (str or None): Optional text label next to the source
        """
        x, y = self._normalize_point(source.position)
        circle = self.dwg.circle(center=(x, y), r=radius, fill=color)
        self._attach_scene_obj_metadata(circle, source, css_class='source')
        self.layer_objects.add(circle)

        tip = source.position.add(source.forward().scale(arrow_length))
        self.layer_objects.add(self.dwg.line(
            start=(x, y),
            end=self._normalize_point(tip),
            stroke=color,
            stroke_width=radius / 2
        ))

        if label:
            text = self._draw_label(label, x + radius * 2, y - radius * 2, color, anchor='start')
            text['id'] = f'label-source-{source.uuid}'

    def draw_photon_path(self, path, stroke_width=0.015, opacity=0.85):
        """
        Draw a photon path as a polyline in the photon's color.

        Non-finite points are skipped: the path is split around them and each
        finite run of two or more points is drawn separately.

        Args:
            path (PhotonPath): The path to draw
            stroke_width (float): Line width in world units (default: 0.015)
            opacity (float): Stroke opacity 0.0-1.0 (default: 0.85)

        Returns:
            int: Number of polylines added.
        """
        color = color_to_css(path.color)

        runs = []
        current = []
        for point in path.points:
            if self._is_finite_point(point):
                current.append(self._normalize_point(point))
            else:
                runs.append(current)
                current = []
        runs.append(current)

        drawn = 0
        for index, run in enumerate(r for r in runs if len(r) >= 2):
            polyline = self.dwg.polyline(
                points=run,
                fill='none',
                stroke=color,
                stroke_width=stroke_width,
                stroke_opacity=opacity,
                stroke_linejoin='round'
            )
            if self.metadata_level != 'none':
                suffix = f'-{index}' if index else ''
                polyline['id'] = f'photon-{path.uuid}{suffix}'
                polyline['class'] = 'photon'
                polyline['inkscape:label'] = f'{path.wavelength:.0f}nm {path.termination}'
            if self.metadata_level == 'full':
                polyline['data-wavelength'] = f'{path.wavelength:.3f}'
                polyline['data-termination'] = path.termination
                polyline['data-source-index'] = str(path.source_index)
                if path.caused_tir:
                    polyline['data-caused-tir'] = 'true'
            self.layer_photons.add(polyline)
            drawn += 1

        return drawn

    def draw_simulation(self, simulation, paths=None, draw_labels=True, **photon_kwargs):
        """
        Draw all bodies, sources and photon paths of a simulation.

        Args:
            simulation (Simulation): The simulation to draw.
            paths (list or None): Photon paths to draw. If None, a fresh batch
                is traced with simulation.photon_paths().
            draw_labels (bool): Whether to label bodies and sources.
            **photon_kwargs: Passed to draw_photon_path (stroke_width, opacity).

        Returns:
            list: The photon paths that were drawn.
        """
        if paths is None:
            paths = simulation.photon_paths()

        for body in simulation.objects:
            self.draw_body(body, label=body.get_display_name() if draw_labels else None)
        for source in simulation.sources:
            self.draw_source(source, label=source.get_display_name() if draw_labels else None)
        for path in paths:
            self.draw_photon_path(path, **photon_kwargs)

        return paths

    def save(self, filename=None):
        """
        Save the SVG to a file.

        Args:
            filename (str): Output filename (default: 'output.svg')
        """
        if filename is None:
            filename = "output.svg"
        self.dwg.saveas(filename)

    def to_string(self):
        """
        Get the SVG as a string.

        Returns:
            str: SVG content as XML string
        """
        return self.dwg.tostring()


# Example usage and testing
if __name__ == "__main__":
    import random

    from prism_dispersion.core.geometry import Vector2
    from prism_dispersion.core.dispersion import CauchyDispersion
    from prism_dispersion.core.scene_objs import TrianglePrism, PhotonSource
    from prism_dispersion.core.simulator import Simulation

    print("Testing SVGRenderer class...\n")

    sim = Simulation(photons_per_tick=24, rng=random.Random(0))
    sim.add_object(TrianglePrism(Vector2(0, 0), 3.0, CauchyDispersion(1.52, 20), name='Prism'))
    sim.add_object(PhotonSource(Vector2(-2, 0), rotation=0.4, name='Source'))

    renderer = SVGRenderer()
    drawn = renderer.draw_simulation(sim)
    print(f"  Drew {len(drawn)} photon paths")
    print(f"  SVG length: {len(renderer.to_string())} characters")

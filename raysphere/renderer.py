"""
Renderer module - drives the per-pixel sampling loop.

Implements:
- Jittered multi-sample anti-aliasing
- Tile-based rendering, optionally multi-threaded
- Seeded, reproducible random streams per tile
"""

from __future__ import annotations
import logging
import os
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Optional, Callable, Tuple

import numpy as np

from .vec3 import Color
from .camera import Camera
from .shapes import Hittable
from .integrator import get_color, MAX_DEPTH
from .image import ImageBuffer

logger = logging.getLogger(__name__)

Tile = Tuple[int, int, int, int]


@dataclass
class RenderSettings:
    """Configuration for the renderer."""
    width: int = 400
    height: int = 200
    samples_per_pixel: int = 100
    max_depth: int = MAX_DEPTH
    tile_size: int = 32
    num_threads: int = 1  # 0 = auto-detect
    seed: Optional[int] = None

    def __post_init__(self):
        if self.num_threads == 0:
            self.num_threads = os.cpu_count() or 4


class Renderer:
    """Monte Carlo path tracing renderer."""

    def __init__(self, settings: RenderSettings = None):
        """Create a renderer with the given settings.

        Args:
            settings: Render configuration (uses defaults if None)
        """
        self.settings = settings if settings else RenderSettings()
        self._progress_callback: Optional[Callable[[float], None]] = None

    def set_progress_callback(self, callback: Callable[[float], None]) -> None:
        """Set a callback function for progress updates.

        Args:
            callback: Function that takes progress as float (0.0 to 1.0)
        """
        self._progress_callback = callback

    def render(self, scene: Hittable, camera: Camera) -> np.ndarray:
        """Render the scene and return the linear image as a numpy array.

        Args:
            scene: The scene to render (any Hittable)
            camera: The camera to render from

        Returns:
            HDR image of shape (height, width, 3), top row first, values
            averaged over samples and not gamma encoded
        """
        width = self.settings.width
        height = self.settings.height
        samples = self.settings.samples_per_pixel
        max_depth = self.settings.max_depth

        image = np.zeros((height, width, 3), dtype=np.float64)

        tiles = self._generate_tiles(width, height)
        total_tiles = len(tiles)
        completed_tiles = [0]  # Use list for mutable in closure

        # One independent stream per tile keeps results independent of scheduling
        seeds = np.random.SeedSequence(self.settings.seed).spawn(total_tiles)

        logger.info(
            "Rendering %dx%d, %d samples/pixel, %d tiles on %d thread(s)",
            width, height, samples, total_tiles, self.settings.num_threads
        )

        def render_tile(tile: Tile, seed_seq: np.random.SeedSequence) -> Tuple[Tile, np.ndarray]:
            """Render a single tile."""
            rng = np.random.default_rng(seed_seq)
            x0, y0, x1, y1 = tile
            tile_image = np.zeros((y1 - y0, x1 - x0, 3), dtype=np.float64)

            for j in range(y1 - y0):
                # Image rows run top-down, v runs bottom-up
                y = height - 1 - (y0 + j)
                for i in range(x1 - x0):
                    x = x0 + i
                    pixel_color = Color(0, 0, 0)

                    for _ in range(samples):
                        u = (x + rng.random()) / width
                        v = (y + rng.random()) / height
                        ray = camera.get_ray(u, v)
                        pixel_color = pixel_color + get_color(
                            ray, scene, 0, rng, max_depth
                        )

                    tile_image[j, i] = pixel_color.to_array() / samples

            completed_tiles[0] += 1
            if self._progress_callback:
                self._progress_callback(completed_tiles[0] / total_tiles)

            return tile, tile_image

        if self.settings.num_threads > 1:
            with ThreadPoolExecutor(max_workers=self.settings.num_threads) as executor:
                results = list(executor.map(render_tile, tiles, seeds))
        else:
            results = [render_tile(tile, seed) for tile, seed in zip(tiles, seeds)]

        # Combine tiles into final image
        for tile, tile_image in results:
            x0, y0, x1, y1 = tile
            image[y0:y1, x0:x1] = tile_image

        logger.debug("Render finished")
        return image

    def render_to_buffer(self, scene: Hittable, camera: Camera) -> ImageBuffer:
        """Render the scene into a gamma encoded 8-bit image buffer."""
        return ImageBuffer.from_hdr(self.render(scene, camera))

    def _generate_tiles(self, width: int, height: int) -> list[Tile]:
        """Generate tiles for parallel rendering.

        Args:
            width: Image width
            height: Image height

        Returns:
            List of tiles as (x0, y0, x1, y1) tuples
        """
        tile_size = self.settings.tile_size
        tiles = []

        for y in range(0, height, tile_size):
            for x in range(0, width, tile_size):
                x1 = min(x + tile_size, width)
                y1 = min(y + tile_size, height)
                tiles.append((x, y, x1, y1))

        return tiles

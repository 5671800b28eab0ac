#!/usr/bin/env python3
"""
raysphere - A small Python path tracer

Main entry point for rendering scenes.
"""

import argparse
import dataclasses
import logging
import sys
import time
from pathlib import Path

from raysphere.errors import RayTracerError
from raysphere.renderer import Renderer, RenderSettings
from raysphere.scene_parser import load_scene
from raysphere.scenes import create_canonical_scene, create_canonical_camera


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='raysphere - A small Python path tracer',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog='''
Examples:
  python main.py --output foo.ppm
  python main.py --width 200 --height 100 --samples 16 --seed 1 --output small.png
  python main.py --scene-file scenes/four_spheres.yaml --threads 0
        '''
    )

    # Flags left unset fall back to the scene file, then to RenderSettings defaults
    parser.add_argument('--width', type=int, help='Image width (default: 400)')
    parser.add_argument('--height', type=int, help='Image height (default: 200)')
    parser.add_argument('--samples', type=int, help='Samples per pixel (default: 100)')
    parser.add_argument('--depth', type=int, help='Max ray depth (default: 50)')
    parser.add_argument('--threads', type=int, help='Number of threads (0=auto, default: 1)')
    parser.add_argument('--seed', type=int, help='Random seed for a reproducible image')
    parser.add_argument('--scene-file', type=str, help='YAML or JSON scene description')
    parser.add_argument('--output', type=str, default='foo.ppm', help='Output filename (default: foo.ppm)')
    parser.add_argument('--verbose', '-v', action='store_true', help='Enable info logging')
    return parser


def apply_overrides(settings: RenderSettings, args: argparse.Namespace) -> RenderSettings:
    overrides = {
        'width': args.width,
        'height': args.height,
        'samples_per_pixel': args.samples,
        'max_depth': args.depth,
        'num_threads': args.threads,
        'seed': args.seed,
    }
    # replace() re-runs __post_init__, so --threads 0 still auto-detects
    return dataclasses.replace(
        settings, **{name: value for name, value in overrides.items() if value is not None}
    )


def main(argv=None):
    """Main entry point."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format='%(asctime)s %(name)s %(levelname)s: %(message)s'
    )

    print("=" * 60)
    print("raysphere")
    print("=" * 60)

    try:
        if args.scene_file:
            print(f"\nLoading scene: {args.scene_file}")
            world, camera, settings = load_scene(args.scene_file)
        else:
            print("\nUsing built-in scene: four spheres")
            world, camera = create_canonical_scene(), create_canonical_camera()
            settings = RenderSettings()
    except RayTracerError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    settings = apply_overrides(settings, args)

    print(f"\nRender Settings:")
    print(f"  Resolution: {settings.width}x{settings.height}")
    print(f"  Samples: {settings.samples_per_pixel}")
    print(f"  Max Depth: {settings.max_depth}")
    print(f"  Threads: {settings.num_threads}")
    print(f"  Seed: {settings.seed}")
    print(f"  Objects in scene: {len(world)}")

    renderer = Renderer(settings)

    # Progress tracking
    last_progress = [0]

    def progress_callback(progress: float):
        pct = int(progress * 100)
        if pct > last_progress[0]:
            last_progress[0] = pct
            bar_len = 40
            filled = int(bar_len * progress)
            bar = '█' * filled + '░' * (bar_len - filled)
            print(f'\rRendering: [{bar}] {pct}%', end='', flush=True)

    renderer.set_progress_callback(progress_callback)

    print("\nRendering...")
    start_time = time.time()

    buffer = renderer.render_to_buffer(world, camera)

    elapsed = time.time() - start_time
    print(f"\nRender completed in {elapsed:.2f} seconds")

    output_path = Path(args.output)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    print(f"\nSaving to: {args.output}")
    buffer.save(str(output_path))

    print("\nDone!")
    return 0


if __name__ == '__main__':
    sys.exit(main())

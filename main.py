#!/usr/bin/env python3
"""
dodtracer - A data-oriented Monte Carlo path tracer

Main entry point for rendering the built-in scenes.
"""

import argparse
import logging
import sys
import time
from pathlib import Path

from dodtracer.renderer import RenderSettings
from dodtracer.scenes import SCENES


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description='dodtracer - A data-oriented Monte Carlo path tracer',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog='''
Examples:
  python main.py --scene cornell --output cornell.png
  python main.py --width 64 --height 64 --samples 4 --preview --output preview.png
  python main.py --scene spheres --samples 100 --u-samples 2 --v-samples 2 --seed 7
        '''
    )

    parser.add_argument('--width', type=int, default=256, help='Image width (default: 256)')
    parser.add_argument('--height', type=int, default=256, help='Image height (default: 256)')
    parser.add_argument('--samples', type=int, default=40,
                        help='Samples per pixel, one pass each (default: 40)')
    parser.add_argument('--u-samples', type=int, default=6,
                        help='First bounce U stratification (default: 6)')
    parser.add_argument('--v-samples', type=int, default=6,
                        help='First bounce V stratification (default: 6)')
    parser.add_argument('--depth', type=int, default=5, help='Max ray depth (default: 5)')
    parser.add_argument('--seed', type=int, default=0, help='Random seed (default: 0)')
    parser.add_argument('--preview', action='store_true',
                        help='Show diffuse colours only, no lighting')
    parser.add_argument('--output', type=str, default='output/render.png', help='Output filename')
    parser.add_argument('--scene', type=str, default='cornell', choices=sorted(SCENES),
                        help='Scene to render (default: cornell)')
    parser.add_argument('--verbose', action='store_true', help='Log every completed pass')

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s %(name)s %(levelname)s: %(message)s'
    )

    print("=" * 60)
    print("dodtracer Path Tracer")
    print("=" * 60)

    settings = RenderSettings(
        width=args.width,
        height=args.height,
        samples_per_pixel=args.samples,
        first_bounce_u_samples=args.u_samples,
        first_bounce_v_samples=args.v_samples,
        max_depth=args.depth,
        seed=args.seed,
        preview=args.preview
    )

    print(f"\nRender Settings:")
    print(f"  Resolution: {settings.width}x{settings.height}")
    print(f"  Samples: {settings.samples_per_pixel}")
    print(f"  First bounce: {settings.first_bounce_u_samples}x{settings.first_bounce_v_samples}")
    print(f"  Max Depth: {settings.max_depth}")
    print(f"  Seed: {settings.seed}")
    if settings.preview:
        print("  Preview mode: lighting disabled")

    print(f"\nCreating scene: {args.scene}")
    scene, camera = SCENES[args.scene](settings.width, settings.height)
    print(f"  Spheres: {scene.sphere_count}")
    print(f"  Triangles: {scene.triangle_count}")

    output_path = Path(args.output)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    completed = [0]

    def progress_callback(output):
        completed[0] += 1
        progress = completed[0] / settings.samples_per_pixel
        bar_len = 40
        filled = int(bar_len * progress)
        bar = '█' * filled + '░' * (bar_len - filled)
        print(f'\rRendering: [{bar}] {int(progress * 100)}%', end='', flush=True)
        # Progressive preview on disk
        output.save(output_path)

    print("\nRendering...")
    start_time = time.time()

    output = scene.render(camera, settings, progress_callback)

    elapsed = time.time() - start_time
    print(f"\nRender completed in {elapsed:.2f} seconds")
    if elapsed > 0:
        total = settings.width * settings.height * settings.samples_per_pixel
        print(f"  Camera samples per second: {total / elapsed:.0f}")

    print(f"\nSaving to: {args.output}")
    output.save(output_path)

    print("\nDone!")
    return 0


if __name__ == '__main__':
    sys.exit(main())

"""Command line entry point: generate the demo world and render it to PNG."""

import argparse
import logging
import sys
import time
from pathlib import Path
from typing import List, Optional

import structlog
from pydantic import ValidationError

from .config import settings
from .core.errors import WorldGenError
from .core.generator import WorldGenerator
from .core.presets import TILE_AIR, TILE_PALETTE, demo_settings
from .visualize import save_biome_map, save_terrain_map

logger = structlog.get_logger()


def configure_logging(level: str = "INFO", log_format: str = "console"):
    """Route structlog through the stdlib logging module."""
    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=level.upper())

    if log_format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="py-worldgen", description="Generate a layered 2-D world and render it to PNG"
    )
    parser.add_argument("--width", type=int, default=settings.default_world_width, help="World width in tiles")
    parser.add_argument("--height", type=int, default=settings.default_world_height, help="World height in tiles")
    parser.add_argument("--seed", type=int, default=settings.default_seed, help="Noise seed")
    parser.add_argument("--output-dir", default=settings.output_dir, help="Directory for biomes.png and terrain.png")
    parser.add_argument("--no-terrain", action="store_true", help="Skip the tile painting stage")
    parser.add_argument("--log-level", default=settings.log_level, help="Log level")
    parser.add_argument(
        "--log-format", choices=["json", "console"], default=settings.log_format, help="Log output format"
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level, args.log_format)

    if not 0 < args.width <= settings.max_world_width or not 0 < args.height <= settings.max_world_height:
        logger.error(
            "World size out of bounds",
            width=args.width,
            height=args.height,
            max_width=settings.max_world_width,
            max_height=settings.max_world_height,
        )
        return 2

    start = time.perf_counter()
    try:
        generator = WorldGenerator(demo_settings(args.width, args.height, args.seed))
    except (WorldGenError, ValidationError) as e:
        logger.error("Invalid generation settings", error=str(e))
        return 1

    output_dir = Path(args.output_dir)
    biome_map = generator.generate_biome_map()
    save_biome_map(output_dir / "biomes.png", biome_map, generator.biomes)

    if not args.no_terrain:
        terrain = generator.generate_terrain_map(biome_map, fill=TILE_AIR)
        save_terrain_map(output_dir / "terrain.png", terrain, TILE_PALETTE)

    logger.info("World generated", elapsed_ms=round((time.perf_counter() - start) * 1000, 1))
    return 0


if __name__ == "__main__":
    sys.exit(main())

import asyncio
import logging
import sys

from .optimization import DEFAULT_PLUGINS
from .pipeline import run

logger = logging.getLogger(__name__)

SOURCE_DIR = "svg/custom"
OUTPUT_DIR = "output"
PREFIX = "custom"

# Optional icon set metadata, e.g.
# {"author": {"name": "Your Name"}, "license": {"title": "MIT"}, "version": "1.0.0"}
INFO = None


def main():
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s"
    )

    cleanup_opts = {
        "remove_xmlns": True,
        "remove_unused_ns": True,
        "convert_shape_to_path": True,
    }

    color_opts = {
        "default_color": "currentColor",
    }

    optimizer_opts = {
        "backend": "scour",
        "plugins": DEFAULT_PLUGINS,
    }

    try:
        asyncio.run(run(
            SOURCE_DIR,
            OUTPUT_DIR,
            PREFIX,
            info=INFO,
            cleanup_opts=cleanup_opts,
            color_opts=color_opts,
            optimizer_opts=optimizer_opts,
        ))
    except Exception as e:
        logger.error(f"Icon set build failed: {type(e).__name__}: {e}")
        sys.exit(1)


if __name__ == '__main__':
    main()

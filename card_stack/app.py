from __future__ import annotations
import argparse
import sys
from pathlib import Path
from typing import List, Optional

from PySide6.QtWidgets import QApplication

from .core.errors import CardStackError
from .services import (
    DirectoryImageProvider, IConfigService, IImageProvider, ILogger, LoggingService, LogLevel,
    configure_services
)
from .ui.main_window import CardStackWindow


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="card-stack", description="Show card names as an overlapping stack of card images.")
    parser.add_argument("cards", nargs="*", help="card names, bottom of the stack first")
    parser.add_argument("--config", type=Path, help="JSON or YAML configuration file")
    parser.add_argument("--images", type=Path, help="directory holding <name>.jpg card scans")
    parser.add_argument("--vgap", type=int, help="vertical offset between cards in pixels")
    parser.add_argument("--log-file", type=Path)
    return parser.parse_args(argv)


def setup_application() -> QApplication:
    app = QApplication.instance() or QApplication(sys.argv[:1])
    app.setApplicationName("Card Stack")
    app.setApplicationVersion("1.0.0")
    return app


def build_window(args: argparse.Namespace) -> CardStackWindow:
    container = configure_services(config_path=args.config, log_file=args.log_file)
    logger = container.get(ILogger)
    config = container.get(IConfigService)

    if isinstance(logger, LoggingService):
        logger.set_console_level(LogLevel.parse(config.get_setting("ui.log_level", "INFO")))
    if args.vgap is not None:
        config.set_setting("stack.vgap", args.vgap)
    if args.images is not None:
        container.register_instance(
            IImageProvider,
            DirectoryImageProvider(args.images, config.get_setting("stack.image_extension"), logger)
        )

    provider = container.get(IImageProvider)
    cards = args.cards or config.get_setting("ui.cards", [])
    logger.info(f"Showing {len(cards)} cards", vgap=config.get_setting("stack.vgap"))
    return CardStackWindow(
        provider,
        cards,
        config.get_setting("stack.vgap"),
        config.get_setting("stack.card_width"),
        logger,
        title=config.get_setting("ui.window_title", "Card Stack"),
    )


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    app = setup_application()
    try:
        window = build_window(args)
    except CardStackError as e:
        print(f"card-stack: {e}", file=sys.stderr)
        return 2

    window.show()
    app.aboutToQuit.connect(window.card_list.release)
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from fedisync.app import export_filters, export_tags, follow_tag, import_filters, import_tags
from fedisync.config import (
    DEFAULT_CONFIG_PATH,
    ConfigurationError,
    configure_logging,
    generate_config,
    load_instance_config,
)
from fedisync.domain.errors import ImportCancelled, SyncError
from fedisync.domain.records import RecordKind
from fedisync.ui.prompt import MenuChoice, ask_menu_choice, ask_text, confirm, display

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from fedisync.config import InstanceConfig

log = logging.getLogger(__name__)

EXPORT = "export"
IMPORT = "import"
FOLLOW = "follow"

type Action = tuple[str, RecordKind]

_MENU_ACTIONS: dict[MenuChoice, Action] = {
    MenuChoice.EXPORT_FILTERS: (EXPORT, RecordKind.FILTER),
    MenuChoice.EXPORT_TAGS: (EXPORT, RecordKind.TAG),
    MenuChoice.IMPORT_FILTERS: (IMPORT, RecordKind.FILTER),
    MenuChoice.IMPORT_TAGS: (IMPORT, RecordKind.TAG),
    MenuChoice.FOLLOW_TAG: (FOLLOW, RecordKind.TAG),
}


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Export and import Mastodon filters and followed tags",
        epilog="Examples: 'fedisync export filters', 'fedisync import tags'. "
        "Without arguments an interactive menu is shown.",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=Path(DEFAULT_CONFIG_PATH),
        help="Path to the JSON config file (default: %(default)s)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log debug output, including tracebacks for errors",
    )
    parser.add_argument(
        "words",
        nargs="*",
        metavar="ACTION",
        help="'filters' and/or 'tags' together with 'import' or 'export'",
    )
    return parser.parse_args(list(argv))


def select_actions(words: Sequence[str]) -> list[Action]:
    """Map positional words to actions.

    ``import`` or ``export`` may appear anywhere (even inside another word); each
    ``filters``/``tags`` word then runs in the order given.
    """

    joined = " ".join(words)
    if IMPORT in joined:
        direction = IMPORT
    elif EXPORT in joined:
        direction = EXPORT
    else:
        return []
    return [(direction, RecordKind(word)) for word in words if word in {"filters", "tags"}]


def run_action(action: Action, config: InstanceConfig) -> None:
    direction, kind = action
    if direction == EXPORT and kind is RecordKind.FILTER:
        export_filters(config)
    elif direction == EXPORT:
        export_tags(config)
    elif direction == IMPORT and kind is RecordKind.FILTER:
        import_filters(config, confirm=confirm, display=display)
    elif direction == IMPORT:
        import_tags(config, confirm=confirm, display=display)
    elif direction == FOLLOW:
        follow_tag(config, ask_text("Enter the tag name: "), confirm=confirm, display=display)
    else:
        raise ValueError(f"Unsupported action: {direction} {kind}")


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)
    configure_logging(level=logging.DEBUG if parsed_args.verbose else logging.INFO, force=True)

    config_path: Path = parsed_args.config
    try:
        if generate_config(config_path):
            log.info("Please edit the config file and then run the program again: %s", config_path)
            return
        config = load_instance_config(config_path)
    except (ConfigurationError, OSError) as exc:
        log.error("Error loading configuration: %s", exc)
        sys.exit(1)

    try:
        if parsed_args.words:
            actions = select_actions(parsed_args.words)
            if not actions:
                words = " ".join(parsed_args.words)
                raise ValueError(f"Nothing to do for: {words}")  # noqa: TRY301
        else:
            actions = [_MENU_ACTIONS[ask_menu_choice()]]
    except ValueError as exc:
        log.error("%s", exc)
        sys.exit(1)

    for action in actions:
        direction, kind = action
        try:
            run_action(action, config)
        except ImportCancelled as exc:
            log.info("%s", exc)
            return
        except (SyncError, ConfigurationError, OSError) as exc:
            if parsed_args.verbose:
                log.exception("Error during %s of %s", direction, kind)
            else:
                log.error("Error during %s of %s: %s", direction, kind, exc)
            sys.exit(1)

    log.info("Action completed successfully.")


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    """Console-script entry point."""
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()

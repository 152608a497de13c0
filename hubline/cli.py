"""
CLI -- Interactive shell for hubline

Reads lines from the terminal and hands them to the Dispatcher; Tab asks
the SuggestionEngine for completions. Everything else (settings, hubs,
shares) lives in the Session built here.

Usage:
    hubline                   # data in HUBLINE_DIR or ~/.hubline
    hubline --dir ./profile   # separate profile
    hubline --debug           # debug logging to <dir>/hubline.log
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

try:
    import readline
except Exception:  # pragma: no cover
    readline = None

from .commands import build_registry
from .config import ConfigManager, default_data_dir
from .core.dispatcher import Dispatcher
from .core.suggest import SuggestionEngine
from .presentation.symbols import get_symbols, safe_print
from .services import OfflineServices
from .session import MessageLog, Session
from .settings import GLOBAL, VariableStore, YamlBackend
from .utils.logs import setup_logger
from .version import __version__


logger = logging.getLogger("hubline.cli")


class Shell:
    """
    One interactive client: session, command table and line editor.

    Args:
        data_dir: Profile directory (settings, log, downloads)
        config: ConfigManager for that directory
        debug: Force debug logging regardless of config
    """

    def __init__(self, data_dir: Path, config: ConfigManager, debug: bool = False):
        self.data_dir = Path(data_dir)
        cfg = config.load()
        level = logging.DEBUG if debug else cfg.logging.level_number
        setup_logger(config.log_path, level, cfg.logging.max_bytes, cfg.logging.backups)

        store = VariableStore(
            YamlBackend(config.settings_path),
            defaults={"download_dir": str(self.data_dir / "downloads")},
        )
        self.log = MessageLog(sink=safe_print)
        self.services = OfflineServices(self.log)
        self.session = Session(store, self.services, self.log, base_log_level=level)
        self.session.ensure_identity()
        if store.get_bool(GLOBAL, "log_debug"):
            logging.getLogger("hubline").setLevel(logging.DEBUG)

        self.registry = build_registry(self.session)
        self.dispatcher = Dispatcher(self.registry, self.log)
        self.engine = SuggestionEngine(self.registry)
        self.symbols = get_symbols(cfg.display.symbols)
        logger.info("shell started in %s with %d commands", self.data_dir, len(self.registry))

    @property
    def prompt(self) -> str:
        return f"{self.session.current.name} {self.symbols.prompt} "

    def complete(self, text: str, state: int) -> Optional[str]:
        """readline completer: candidates replace the whole line."""
        line = readline.get_line_buffer()[:readline.get_endidx()]
        return self.candidate(line, state)

    def candidate(self, line: str, state: int) -> Optional[str]:
        matches = self.engine.suggest(line)
        return matches[state] if state < len(matches) else None

    def setup_completions(self) -> None:
        if readline is None or not sys.stdin.isatty():
            return
        readline.set_completer_delims("")
        readline.set_completer(self.complete)
        readline.parse_and_bind("tab: complete")

    def run(self) -> int:
        self.setup_completions()
        safe_print(f"hubline {__version__}. Type /help for a list of commands.")
        while not self.services.quit_requested:
            try:
                line = input(self.prompt)
            except EOFError:
                safe_print("")
                break
            except KeyboardInterrupt:
                safe_print("")
                continue
            self.dispatcher.dispatch(line)
        logger.info("shell stopped")
        return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hubline",
        description="hubline -- text-mode Direct Connect client",
    )
    parser.add_argument(
        '--dir', '-d',
        default=None,
        help='Data directory (default: HUBLINE_DIR or ~/.hubline)'
    )
    parser.add_argument(
        '--debug',
        action='store_true',
        help='Write debug messages to the log file'
    )
    parser.add_argument(
        '--version', '-V',
        action='version',
        version=f'hubline {__version__}'
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the hubline shell."""
    args = build_parser().parse_args(argv)
    data_dir = Path(args.dir).expanduser() if args.dir else default_data_dir()

    config = ConfigManager(data_dir)
    error = config.load().validate()
    if error:
        safe_print(f"Configuration error: {error}", file=sys.stderr)
        return 2

    return Shell(data_dir, config, debug=args.debug).run()


if __name__ == '__main__':
    sys.exit(main())

"""CLI entry point for restless-economy."""
import argparse
import logging
import sys
from pathlib import Path

from .config import EconomyConfig, load_config
from .format import format_debug, format_display, format_exact
from .parse import ParseErr, ParseOptions, parse_amount
from .render import amount_error_message, render_amount_inline
from .suffixes import SUFFIX_TABLE


def setup_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Restless Economy — exact amount engine")
    parser.add_argument("--config", type=str, help="Path to config.yaml")
    parser.add_argument("--log-level", type=str, default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    parser.add_argument("--validate-config", action="store_true", help="Validate config and exit")

    sub = parser.add_subparsers(dest="command")
    parse_cmd = sub.add_parser("parse", help="Parse an amount and show every presentation")
    parse_cmd.add_argument(
        "text", nargs="+",
        help="Amount text, e.g. 2.5qa or '1 million'; put -- before negative amounts (parse -- -5)",
    )
    parse_cmd.add_argument("--allow-negative", action="store_true")
    sub.add_parser("suffixes", help="List the suffix table")
    return parser.parse_args(argv)


def _resolve_config_path(explicit: str | None) -> str | None:
    if explicit:
        return explicit
    for candidate in [
        "/etc/restless/restless-economy/config.yaml",
        "./config.yaml",
    ]:
        if Path(candidate).exists():
            return candidate
    return None


def cmd_parse(text: str, config: EconomyConfig, allow_negative: bool, logger: logging.Logger) -> int:
    options = ParseOptions(max_power=config.amounts.max_power, allow_negative=allow_negative)
    outcome = parse_amount(text, options)
    if isinstance(outcome, ParseErr):
        message = amount_error_message(outcome)
        print(f"{message['title']}: {message['description']}")
        for field in message["fields"]:
            print(f"  {field['name']}: {field['value']}")
        return 1

    logger.debug("Parsed %r -> %s", text, format_debug(outcome.value))
    display = format_display(outcome.value, config.amounts.sig_figs)
    print(f"normalized: {outcome.normalized}")
    print(f"exact:      {format_exact(outcome.value, separators=True)}")
    print(f"compact:    {display.compact}")
    if display.scientific:
        print(f"scientific: {display.scientific}")
    print(f"inline:     {render_amount_inline(outcome.value, config.amounts.sig_figs)}")
    return 0


def cmd_suffixes() -> int:
    for unit in SUFFIX_TABLE:
        aliases = f" (also {', '.join(unit.aliases)})" if unit.aliases else ""
        print(f"{unit.code:>5}  10^{unit.power:<4} {unit.word}{aliases}")
    return 0


def main(argv: list[str] | None = None) -> None:
    """Sync entry point for pyproject.toml [project.scripts]."""
    args = parse_args(argv)
    setup_logging(args.log_level)
    logger = logging.getLogger("economy")

    config_path = _resolve_config_path(args.config)
    if args.validate_config:
        if not config_path:
            logger.error("No config file found. Use --config or place config.yaml in CWD.")
            sys.exit(1)
        try:
            load_config(config_path)
            logger.info("Config is valid.")
        except Exception as e:
            logger.error("Config validation failed: %s", e)
            sys.exit(1)
        return

    config = load_config(config_path) if config_path else EconomyConfig()

    match args.command:
        case "parse":
            sys.exit(cmd_parse(" ".join(args.text), config, args.allow_negative, logger))
        case "suffixes":
            sys.exit(cmd_suffixes())
        case _:
            logger.error("No command given. Try 'parse <amount>' or 'suffixes'.")
            sys.exit(2)


if __name__ == "__main__":
    main()

import argparse
import logging
import os
from typing import Any, Dict, List, Optional

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

OUTPUT_FOLDER_DEFAULT = "e2e2documentation"


class Viewport(BaseModel):
    width: int = 1920
    height: int = 1080


class BrowserConfig(BaseModel):
    """Options handed to Playwright when the browser is launched."""
    headless: bool = False
    slow_mo: int = 300
    viewport: Viewport = Field(default_factory=Viewport)
    devtools: bool = False
    language: str = "en-US"


class E2E2DConfig(BaseModel):
    browser: BrowserConfig = Field(default_factory=BrowserConfig)
    output_folder: str = OUTPUT_FOLDER_DEFAULT
    generate_doc: bool = True
    # When true nothing is printed unless there is an error, then every
    # message emitted so far is printed.
    silent_unless_error: bool = False
    color: bool = True
    config_data_filename: str = ""
    config_file_data: Dict[str, Any] = Field(default_factory=dict)
    # A failed run raises SystemExit(1) when set, otherwise the failed
    # RunResult is returned to the caller.
    exit_on_failure: bool = True
    # Restore the recording flag after a precondition finished.
    restore_recording: bool = True
    navigation_timeout_ms: int = 5000
    log_level: str = "warning"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="End to End to Documentation")
    parser.add_argument("--config", help="YAML configuration file path (optional)")
    parser.add_argument("--output-folder", "-o", dest="output_folder", help="The output folder for the documentation.")
    parser.add_argument("--generate-doc", action=argparse.BooleanOptionalAction, default=None)
    parser.add_argument(
        "--silent-unless-error",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="When set no message is printed unless there is an error. Then all so far emitted messages are printed.",
    )
    parser.add_argument("--color", action=argparse.BooleanOptionalAction, default=None)
    parser.add_argument("--exit-on-failure", action=argparse.BooleanOptionalAction, default=None)
    parser.add_argument("--restore-recording", action=argparse.BooleanOptionalAction, default=None)
    parser.add_argument("--headless", action=argparse.BooleanOptionalAction, default=None)
    parser.add_argument("--slow-mo", "-s", dest="slow_mo", type=int)
    parser.add_argument("--screen-x", dest="screen_x", type=int)
    parser.add_argument("--screen-y", dest="screen_y", type=int)
    parser.add_argument("--dev-tools", dest="dev_tools", action=argparse.BooleanOptionalAction, default=None)
    parser.add_argument("--navigation-timeout-ms", dest="navigation_timeout_ms", type=int)
    parser.add_argument("--log-level", dest="log_level")
    parser.add_argument("--config-data-filename", dest="config_data_filename")
    parser.add_argument(
        "--config-file-data",
        "-c",
        dest="config_file_data",
        action="append",
        default=[],
        help="key:value pair added to the config file data, may be repeated",
    )
    return parser


def parse_key_value(raw: str) -> tuple[str, str]:
    """Split a ``key: value`` pair, stripping whitespace around both parts."""
    key, sep, value = raw.partition(":")
    if not sep or not key.strip():
        raise ValueError(f"Expected 'key:value', got '{raw}'")
    return key.strip(), value.strip()


def load_yaml(path: str) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a mapping")
    return data


def load_config(argv: Optional[List[str]] = None) -> E2E2DConfig:
    """Build the run configuration.

    Sources, lowest priority first: defaults, the YAML file given with
    ``--config``, environment variables (a ``.env`` file is loaded first),
    and the command line.
    """
    load_dotenv()
    args = build_parser().parse_args(argv)

    raw: Dict[str, Any] = load_yaml(args.config) if args.config else {}
    conf = E2E2DConfig.model_validate(raw)

    if os.getenv("E2E2D_OUTPUT_FOLDER"):
        conf.output_folder = os.getenv("E2E2D_OUTPUT_FOLDER")

    for field in ("output_folder", "generate_doc", "silent_unless_error", "color", "exit_on_failure",
                  "restore_recording", "navigation_timeout_ms", "log_level", "config_data_filename"):
        value = getattr(args, field)
        if value is not None:
            setattr(conf, field, value)

    if args.headless is not None:
        conf.browser.headless = args.headless
    if args.slow_mo is not None:
        conf.browser.slow_mo = args.slow_mo
    if args.screen_x is not None:
        conf.browser.viewport.width = args.screen_x
    if args.screen_y is not None:
        conf.browser.viewport.height = args.screen_y
    if args.dev_tools is not None:
        conf.browser.devtools = args.dev_tools

    for pair in args.config_file_data:
        key, value = parse_key_value(pair)
        conf.config_file_data[key] = value

    # Docker environment detection: force headless mode
    if os.getenv("DOCKER_ENV") == "true" and not conf.browser.headless:
        logger.warning("Docker environment detected, forcing headless mode")
        conf.browser.headless = True

    return conf


def load_config_data_file(conf: E2E2DConfig) -> Dict[str, Any]:
    """Replace ``config_file_data`` with the content of ``config_data_filename``.

    The file may be JSON or YAML. Without a filename the data is left alone.
    """
    if conf.config_data_filename:
        conf.config_file_data = load_yaml(conf.config_data_filename)
    return conf.config_file_data

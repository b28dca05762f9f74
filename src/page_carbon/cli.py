"""Command-line utilities for page_carbon."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from enum import Enum

from pydantic import ValidationError

from .config_loader import load_profile
from .estimation import PageImpactCalculator
from .schemas import PageLoadParams, PageUseParams
from .settings import get_settings
from .types import ContentType, DeviceType, Site

_LOGGER = logging.getLogger(__name__)


def _choices(enum_type: type[Enum]) -> list[str]:
    return [member.value for member in enum_type]


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="page-carbon",
        description="Estimate the energy and carbon of loading and using a page.",
    )
    parser.add_argument(
        "--config",
        "-c",
        help="Path to a JSON or YAML profile override file.",
    )
    parser.add_argument(
        "--profile",
        help=(
            "Registered model profile to use as the base instead of "
            "PAGE_CARBON_PROFILE. Environment and --config overrides still apply."
        ),
    )
    parser.add_argument(
        "--log-level",
        help="Logging level (defaults to PAGE_CARBON_LOG_LEVEL or WARNING).",
    )
    parser.add_argument(
        "--indent",
        type=int,
        default=None,
        help="Pretty-print the JSON output with this indent.",
    )

    commands = parser.add_subparsers(dest="command", required=True)

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--device", "-d", required=True, choices=_choices(DeviceType))
    common.add_argument(
        "--users",
        "-u",
        type=float,
        default=1.0,
        help="Audience size the result is scaled by.",
    )
    common.add_argument("--site", "-s", default=Site.DEFAULT.value, choices=_choices(Site))

    load = commands.add_parser(
        "load", parents=[common], help="Impact of loading the page."
    )
    load.add_argument(
        "--data-volume",
        type=float,
        default=None,
        help="Bytes transferred by the page load.",
    )

    use = commands.add_parser(
        "use", parents=[common], help="Impact of using the page after load."
    )
    use.add_argument("--content", required=True, choices=_choices(ContentType))
    use.add_argument(
        "--duration",
        type=float,
        required=True,
        help="Time spent on the page in seconds.",
    )
    use.add_argument(
        "--optimize-video",
        action="store_true",
        help="Assume video is served at the optimised bitrate.",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Compute a page impact breakdown and print it as JSON."""

    parser = _build_parser()
    try:
        args = parser.parse_args(argv)
    except SystemExit as exc:  # pragma: no cover - controlled via tests
        exit_code = int(exc.code) if isinstance(exc.code, int) else 1
        return 0 if exit_code == 0 else 1

    settings = get_settings()
    logging.basicConfig(
        level=(args.log_level or settings.log_level).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        profile = load_profile(
            args.config, settings=settings, profile_name=args.profile
        )
        calculator = PageImpactCalculator(profile=profile)

        if args.command == "load":
            params = PageLoadParams(
                device_type=DeviceType(args.device),
                data_volume=args.data_volume,
                user_amount=args.users,
                site=Site(args.site),
            )
            calculation = calculator.page_load(params)
        else:
            params = PageUseParams(
                device_type=DeviceType(args.device),
                content_type=ContentType(args.content),
                duration_in_seconds=args.duration,
                optimize_video=args.optimize_video,
                user_amount=args.users,
                site=Site(args.site),
            )
            calculation = calculator.page_use(params)
    except ValidationError as exc:
        print(f"Invalid parameters: {exc}", file=sys.stderr)
        return 1
    except (KeyError, ValueError) as exc:
        _LOGGER.debug("Calculation failed", exc_info=exc)
        message = exc.args[0] if isinstance(exc, KeyError) and exc.args else exc
        print(str(message), file=sys.stderr)
        return 1

    print(json.dumps(calculation.to_dict(), indent=args.indent))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

"""
Punto de entrada CLI.
Uso:
  python -m app.cli predict <fixture_id> [--window N] [--split]
  python -m app.cli probs <lambda_home> <lambda_away> [--max-goals N]
"""
from __future__ import annotations

import argparse
import json
import logging
import sys

from config.settings import settings
from core.lambdas import InsufficientDataError
from core.poisson import compute_outcome_distribution
from data.providers.errors import ProviderError
from services.prediction import FixtureNotFoundError, predict_fixture

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)


def _window(value: str) -> int:
    n = int(value)
    if not settings.is_valid_window(n):
        raise argparse.ArgumentTypeError(
            f"window debe estar entre {settings.history_window_min} y {settings.history_window_max}"
        )
    return n


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="python -m app.cli")
    sub = parser.add_subparsers(dest="command")

    p_predict = sub.add_parser("predict", help="Predicción Poisson para un fixture de API-Sports")
    p_predict.add_argument("fixture_id", type=int)
    p_predict.add_argument("--window", type=_window, default=settings.default_history_window)
    p_predict.add_argument("--split", action="store_true", help="local solo de local / visitante solo de visitante")

    p_probs = sub.add_parser("probs", help="1X2 y Over/Under a partir de dos λ (sin red)")
    p_probs.add_argument("lambda_home", type=float)
    p_probs.add_argument("lambda_away", type=float)
    p_probs.add_argument("--max-goals", type=int, default=settings.max_goals_poisson)

    return parser


def cmd_predict(args: argparse.Namespace) -> int:
    try:
        out = predict_fixture(
            args.fixture_id,
            args.window,
            args.split,
            max_goals=settings.max_goals_poisson,
        )
    except (FixtureNotFoundError, InsufficientDataError) as e:
        print(str(e))
        return 1
    except ProviderError as e:
        logger.error("Proveedor falló: %s", e)
        return 1
    # la matriz es ruido en consola
    out.pop("score_matrix", None)
    print(json.dumps(out, ensure_ascii=False, indent=2))
    return 0


def cmd_probs(args: argparse.Namespace) -> int:
    dist = compute_outcome_distribution(args.lambda_home, args.lambda_away, args.max_goals)
    print(json.dumps(dist.to_dict(), indent=2))
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(sys.argv[1:] if argv is None else argv)
    if args.command == "predict":
        return cmd_predict(args)
    if args.command == "probs":
        return cmd_probs(args)
    parser.print_help()
    return 1


if __name__ == "__main__":
    raise SystemExit(main())

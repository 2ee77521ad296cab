"""Data-quality audit: classify a HYG catalog and report which path each star took.

Usage:
    python -m plutonian.audit path/to/hygdata_v3.csv --chart results/hr.png
"""

import argparse
import json
import logging
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

from plutonian.config import load_settings  # noqa: E402
from plutonian.engine import SpectrumEngine  # noqa: E402
from plutonian.loader import CatalogError, load_catalog_json, load_hyg_csv, load_tables  # noqa: E402
from plutonian.models import StarRecord  # noqa: E402
from plutonian.renderers.static import save_hr_diagram  # noqa: E402

logger = logging.getLogger(__name__)


def load_catalog(path: Path) -> list[StarRecord]:
    """Catalog from a .json array or a HYG .csv, chosen by file suffix."""
    if path.suffix.lower() == ".json":
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise CatalogError(f"cannot read catalog {path}: {exc}") from exc
        return load_catalog_json(text)
    return load_hyg_csv(path)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("catalog", type=Path, help="HYG catalog, .csv or .json")
    parser.add_argument("--chart", type=Path, default=None, help="H-R diagram PNG path")
    parser.add_argument("--no-chart", action="store_true", help="skip the H-R diagram")
    parser.add_argument("--workers", type=int, default=1, help="worker processes")
    args = parser.parse_args(argv)

    settings = load_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        stars = load_catalog(args.catalog)
    except CatalogError as exc:
        logger.error("%s", exc)
        return 1

    engine = SpectrumEngine(load_tables(settings))
    classified = engine.classify_all(stars, workers=args.workers)
    print(json.dumps(engine.stats.as_dict(), indent=2))

    if not args.no_chart:
        path = save_hr_diagram(classified, args.chart)
        logger.info("H-R diagram saved to %s", path)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

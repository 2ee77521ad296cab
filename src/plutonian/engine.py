"""Classification pipeline: StarRecord in, augmented StarRecord out.

raw record → parse (or infer) → fill gaps → tiered lookup → merge → describe
"""

import dataclasses
import logging
from concurrent.futures import ProcessPoolExecutor
from typing import Sequence

from plutonian.inference import (
    LAST_DITCH_DEFAULT,
    compute_spect_from_hyg,
    last_ditch_spectrum,
)
from plutonian.models import (
    ROTATION_DEFAULT,
    ClassificationStats,
    LookupTables,
    SpectrumComponent,
    StarRecord,
)
from plutonian.parser import parse_spectrum
from plutonian.resolver import resolve

logger = logging.getLogger(__name__)


class SpectrumEngine:
    """Classifies catalog stars against one set of loaded lookup tables.

    The tables are read-only; ``stats`` is the only state that changes.
    """

    def __init__(self, tables: LookupTables) -> None:
        if not tables.loaded:
            logger.warning("spectrum engine created with tables that were never loaded")
        self.tables = tables
        self.stats = ClassificationStats()

    def parse(self, spect: str) -> list[SpectrumComponent]:
        return parse_spectrum(spect)

    def infer_spectrum(self, record: StarRecord) -> str:
        """Spectral key for a star without a spectral string. Updates stats."""
        spect = compute_spect_from_hyg(record, self.tables.trl)
        if spect is not None:
            self.stats.computed += 1
            return spect
        spect = last_ditch_spectrum(record)
        self.stats.last_ditch += 1
        record.guess = spect == LAST_DITCH_DEFAULT
        return spect

    def classify(self, record: StarRecord) -> StarRecord:
        """Return a classified copy of ``record``. Never raises.

        Args:
            record: Catalog star. Not modified.

        Returns:
            A new StarRecord with temperature, radius, color, classification
            and description filled in as far as the data allows.
        """
        result = _unclassified(record)
        self.stats.total += 1
        try:
            self._classify(result)
        except Exception:
            logger.exception("star %s: classification failed for spect %r", record.id, record.spect)
            self.stats.failed_lookup += 1
            result = _unclassified(record)
            result.guess = True
        return result

    def _classify(self, record: StarRecord) -> None:
        spect = record.spect.strip()
        if spect:
            self.stats.parsed += 1
        else:
            spect = self.infer_spectrum(record)
            record.computed = True
            logger.debug("star %s: inferred spectrum %s", record.id, spect)

        components = parse_spectrum(spect)
        resolve(record, components, self.tables)
        if not components[0].source:
            self.stats.failed_lookup += 1

    def classify_all(self, records: Sequence[StarRecord], workers: int = 1) -> list[StarRecord]:
        """Classify a batch, optionally sharded over worker processes.

        Output order matches input order; per-shard stats are summed into
        ``self.stats``.
        """
        if workers <= 1 or len(records) < 2:
            return [self.classify(record) for record in records]

        size = -(-len(records) // workers)
        shards = [list(records[i : i + size]) for i in range(0, len(records), size)]
        classified: list[StarRecord] = []
        with ProcessPoolExecutor(max_workers=workers) as pool:
            for shard_result, shard_stats in pool.map(
                _classify_shard, [self.tables] * len(shards), shards
            ):
                classified.extend(shard_result)
                self.stats += shard_stats
        logger.info("classified %d stars in %d shards: %s", len(classified), len(shards), self.stats.as_dict())
        return classified


def _unclassified(record: StarRecord) -> StarRecord:
    """Copy of ``record`` with every engine-computed field reset."""
    return dataclasses.replace(
        record,
        computed=False,
        guess=False,
        mass=None,
        temp=None,
        radius=None,
        r=None,
        g=None,
        b=None,
        rot=ROTATION_DEFAULT,
        var=False,
        dust=False,
        envelope=False,
        primary=None,
        intermediate=[],
        composite=[],
        description="",
    )


def _classify_shard(
    tables: LookupTables, records: list[StarRecord]
) -> tuple[list[StarRecord], ClassificationStats]:
    engine = SpectrumEngine(tables)
    return [engine.classify(record) for record in records], engine.stats

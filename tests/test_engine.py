"""End-to-end classification through SpectrumEngine."""

import logging

import pytest

import plutonian.engine as engine_module
from plutonian.engine import SpectrumEngine
from plutonian.models import LookupTables, SpectralClass, StarRecord


@pytest.fixture
def engine(shipped_tables) -> SpectrumEngine:
    return SpectrumEngine(shipped_tables)


class TestClassify:
    def test_sun(self, engine, sun):
        star = engine.classify(sun)
        assert star.primary == SpectralClass("G", "2", "V")
        assert star.temp == pytest.approx(5778, abs=200)
        assert star.radius == pytest.approx(1.0, abs=0.1)
        assert star.color is not None
        assert star.description.startswith("Type G2V, Yellow Dwarf (Main Sequence)")
        assert not star.computed
        assert not star.guess

    def test_input_record_is_not_modified(self, engine, sun):
        engine.classify(sun)
        assert sun.temp is None
        assert sun.primary is None
        assert sun.description == ""

    def test_subdwarf_prefix(self, engine):
        star = engine.classify(StarRecord(id="1", spect="sdB5", absmag=5.0, lum=0.01))
        assert star.primary == SpectralClass("B", "5", "VI")

    def test_spectrum_computed_from_color_index(self, engine):
        star = engine.classify(
            StarRecord(id="2", spect="", ci=0.0, absmag=-1.0, lum=52000.0, dist=100.0)
        )
        assert star.computed
        assert not star.guess
        assert star.primary is not None
        assert star.temp == pytest.approx(10000, abs=1200)
        assert star.description.endswith(", spectrum computed from photometry")
        assert engine.stats.computed == 1

    def test_last_ditch_guess(self, engine):
        star = engine.classify(StarRecord(id="3", absmag=5.0, lum=1.0))
        assert star.computed
        assert star.guess
        assert star.primary == SpectralClass("G", "5", "V")
        assert star.description.endswith(", spectrum guessed")
        assert engine.stats.last_ditch == 1

    def test_last_ditch_dwarf_is_not_a_guess(self, engine):
        star = engine.classify(StarRecord(id="4", absmag=12.0, lum=0.004))
        assert star.primary == SpectralClass("M", "5", "V")
        assert not star.guess

    def test_idempotent(self, engine, sun):
        once = engine.classify(sun)
        twice = engine.classify(once)
        for name in ("temp", "radius", "r", "g", "b"):
            assert getattr(twice, name) == pytest.approx(getattr(once, name), abs=1e-9)
        assert twice.description == once.description

    def test_white_dwarf(self, engine):
        star = engine.classify(StarRecord(id="5", spect="DA3", absmag=11.0, lum=0.016))
        assert star.primary == SpectralClass("DA", "3", "")
        assert star.radius == pytest.approx(0.0146, abs=1e-3)

    def test_unknown_type_counts_failed_lookup(self, engine, caplog):
        with caplog.at_level(logging.WARNING):
            star = engine.classify(StarRecord(id="6", spect="Q5", ci=0.65))
        assert engine.stats.failed_lookup == 1
        assert star.temp == pytest.approx(5778, rel=0.05)
        assert "failed lookup" in caplog.text

    def test_never_raises(self, engine, sun, monkeypatch, caplog):
        def broken(*args, **kwargs):
            raise RuntimeError("lookup exploded")

        monkeypatch.setattr(engine_module, "resolve", broken)
        with caplog.at_level(logging.ERROR):
            star = engine.classify(sun)
        assert star.guess
        assert star.temp is None
        assert star.primary is None
        assert engine.stats.failed_lookup == 1
        assert "classification failed" in caplog.text

    def test_stats(self, engine, sun):
        engine.classify(sun)
        engine.classify(StarRecord(id="7", ci=0.65))
        engine.classify(StarRecord(id="8", absmag=5.0))
        assert engine.stats.as_dict() == {
            "total": 3,
            "parsed": 1,
            "computed": 1,
            "lastDitch": 1,
            "failedLookup": 0,
        }


class TestEngineTables:
    def test_unloaded_tables_warn(self, caplog):
        with caplog.at_level(logging.WARNING):
            SpectrumEngine(LookupTables())
        assert "never loaded" in caplog.text

    def test_empty_tables_fall_back_to_defaults(self, sun):
        engine = SpectrumEngine(LookupTables(trl={}, tl={}, lum_by_mag={}, blackbody={}))
        star = engine.classify(sun)
        assert star.primary == SpectralClass("G", "2", "V")
        assert star.mass == 1.0
        assert star.color is not None

    def test_parse(self, shipped_tables):
        components = SpectrumEngine(shipped_tables).parse("G8III-K0")
        assert [c.spect for c in components] == ["G8III", "K0"]


class TestClassifyAll:
    def _stars(self) -> list[StarRecord]:
        return [
            StarRecord(id="10", spect="G2V", ci=0.65),
            StarRecord(id="11", spect="K0III", ci=1.0),
            StarRecord(id="12", ci=0.3),
            StarRecord(id="13", absmag=-5.0),
            StarRecord(id="14", spect="M2Ia"),
        ]

    def test_sequential(self, engine):
        stars = engine.classify_all(self._stars())
        assert [s.id for s in stars] == ["10", "11", "12", "13", "14"]
        assert engine.stats.total == 5

    def test_worker_processes_keep_order_and_stats(self, engine):
        stars = engine.classify_all(self._stars(), workers=2)
        assert [s.id for s in stars] == ["10", "11", "12", "13", "14"]
        assert all(s.primary is not None for s in stars)
        assert engine.stats.total == 5
        assert engine.stats.parsed == 3

"""
Tests for battleship_trainer.api
"""

import numpy as np
import pytest

from battleship_trainer import Config, train
from battleship_trainer.api import format_report
from battleship_trainer.simulation import SimulationRunner
from battleship_trainer.simulation.jobs import TrainingReport


class TestFormatReport:

    def test_line(self):
        report = TrainingReport(step=3, games=1000, elapsed=2.0, workers=4)
        assert format_report(report) == (
            "done epoch 3, in 2000ms, average games/s: 500.0, games/s/worker: 125.0"
        )

    def test_failures_shown(self):
        report = TrainingReport(step=1, games=10, elapsed=1.0, workers=1, failures=2)
        line = format_report(report, label="batch")
        assert line.startswith("done batch 1,")
        assert line.endswith("aborted batches: 2")


class TestTrain:

    def test_epochs(self, capsys):
        """Default reporter prints one line per epoch."""
        config = Config(parallel=2, epochs=2, batch_size=2, use_threads=True, seed=1)
        model = train(config)

        out = capsys.readouterr().out
        assert "Running 2 games" in out
        assert out.count("done epoch") == 2
        assert model is not None

    def test_pipeline(self):
        reports = []
        config = Config(parallel=2, epochs=2, batch_size=2, strategy="pipeline",
                        use_threads=True, seed=1)
        train(config, on_report=reports.append)
        assert len(reports) == config.total_batches

    def test_random_opponent(self):
        """One learner per instance is enough to produce a model."""
        config = Config(parallel=1, epochs=1, batch_size=3, opponent="random",
                        use_threads=True, seed=3)
        model = train(config, on_report=lambda r: None)
        assert np.all(model.base_weights > 0)

    def test_interrupt_returns_consensus(self, monkeypatch, capsys):
        """Ctrl+C stops training and still yields a model."""
        def interrupted(self, instances, games_per_instance):
            raise KeyboardInterrupt

        monkeypatch.setattr(SimulationRunner, "run_wave", interrupted)
        config = Config(parallel=2, epochs=1, batch_size=1, use_threads=True)
        model = train(config)

        assert model is not None
        assert "Interrupted" in capsys.readouterr().out

    def test_errors_logged_and_raised(self, monkeypatch, caplog):
        def broken(self, instances, games_per_instance):
            raise RuntimeError("pool exploded")

        monkeypatch.setattr(SimulationRunner, "run_wave", broken)
        with pytest.raises(RuntimeError):
            train(Config(parallel=1, epochs=1, batch_size=1, use_threads=True))
        assert "Fatal error in training loop" in caplog.text

"""Run the before/after datasets in datasets/ through the engine."""

from pathlib import Path

import pytest
import typeddiff
from typeddiff import DiffEngine, DiffResult, EngineConfig, load_document

DATASETS = sorted(Path(__file__).parent.joinpath("datasets").glob("*.json"))


@pytest.mark.parametrize("dataset_path", DATASETS, ids=lambda p: p.stem)
def test_dataset(dataset_path):
    dataset = load_document(dataset_path)
    engine = DiffEngine(EngineConfig(ignore_paths=dataset.get("ignore_paths", [])))

    if "expected_error" in dataset:
        error_type = getattr(typeddiff, dataset["expected_error"])
        with pytest.raises(error_type):
            engine.diff(dataset["before"], dataset["after"])
        return

    result = engine.diff(dataset["before"], dataset["after"])
    expected = DiffResult.from_dict(dataset["expected"])

    assert result.to_dict() == expected.to_dict()
    assert result.size() == expected.size()


def test_datasets_present():
    assert len(DATASETS) >= 4

"""Tests for the batch scoring script."""

from __future__ import annotations

import json

import pytest

import main
from bcs_finder.errors import DecodeError
from bcs_finder.scorers import BCSScorer
from bcs_finder.types import PredictionAnalysis, PredictionResult

from . import image_factory as factory


class ScriptedScorer(BCSScorer):
    method = "scripted"

    def __init__(self, scores):
        self.scores = dict(scores)
        self.closed = False

    async def predict(self, images):
        size = len(images.data)
        score = self.scores[size]
        if score is None:
            raise DecodeError("Could not load the image. Please try a different photo.")
        return PredictionResult(
            bcs_score=score,
            confidence=0.6,
            analysis=PredictionAnalysis(waist_definition=0.5, body_shape=0.5, overall_condition=0.5),
            recommendations=("See your vet",),
        )


@pytest.mark.asyncio
async def test_folder_is_scored_and_grouped_by_category(tmp_path, capsys):
    small = factory.encode_png(factory.create_blank_image(4, 4)).data
    large = factory.encode_png(factory.create_thin_dog_image(40, 40)).data
    (tmp_path / "a.png").write_bytes(small)
    (tmp_path / "b.png").write_bytes(large)
    (tmp_path / "notes.txt").write_text("not an image")
    (tmp_path / "c.jpg").write_bytes(b"xx")

    scorer = ScriptedScorer({len(small): 5, len(large): 8, 2: None})
    results = await main.score_images_in_folder(str(tmp_path), scorer)

    assert sorted(results) == ["a.png", "b.png", "c.jpg"]
    organized = main.reorganize_results(results)
    assert [item["image"] for item in organized["categories"]["Ideal"]] == ["a.png"]
    assert [item["image"] for item in organized["categories"]["Obese"]] == ["b.png"]
    assert organized["failed"] == [
        {
            "image": "c.jpg",
            "error": "Could not load the image. Please try a different photo.",
            "category": "decode",
        }
    ]
    assert organized["summary"] == {"total": 3, "scored_count": 2, "failed_count": 1}
    assert "BCS 5/9" in capsys.readouterr().out


@pytest.mark.asyncio
async def test_missing_folder_gives_no_results(tmp_path):
    assert await main.score_images_in_folder(str(tmp_path / "nope"), ScriptedScorer({})) == {}


def test_results_are_written_as_json(tmp_path):
    output = tmp_path / "report.json"
    main.save_results_to_json({"a.png": {"error": "bad", "category": "decode"}}, str(output))

    report = json.loads(output.read_text(encoding="utf-8"))
    assert report["summary"]["failed_count"] == 1
    assert all(items == [] for items in report["categories"].values())

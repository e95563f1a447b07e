#!/usr/bin/env python3
"""Batch body condition scoring for a folder of dog photos."""

from __future__ import annotations

import argparse
import asyncio
import json
from pathlib import Path
from typing import Optional

from bcs_finder import PredictionError, build_scorer, interpret
from bcs_finder.image_utils import EncodedImage
from bcs_finder.logging_config import configure_logging
from bcs_finder.scorers import METHODS, BCSScorer


IMAGE_EXTENSIONS = {".jpg", ".jpeg", ".png", ".gif", ".webp"}


async def score_images_in_folder(folder_path: str, scorer: BCSScorer) -> dict:
    """Score every image in a folder.

    Args:
        folder_path: Folder containing side-view photos
        scorer: Local or remote scorer

    Returns:
        Mapping of file name to either a prediction or an error
    """
    folder = Path(folder_path)
    if not folder.exists():
        print(f"❌ Folder does not exist: {folder_path}")
        return {}

    image_files = sorted(
        f for f in folder.iterdir()
        if f.is_file() and f.suffix.lower() in IMAGE_EXTENSIONS
    )
    if not image_files:
        print(f"⚠️  No images found in: {folder_path}")
        return {}

    print(f"📁 Found {len(image_files)} images")
    print(f"🔍 Scoring with the {scorer.method} scorer...\n")
    print("=" * 80)

    all_results = {}
    for idx, image_file in enumerate(image_files, 1):
        print(f"\n[{idx}/{len(image_files)}] {image_file.name}")
        try:
            prediction = await scorer.predict(EncodedImage.from_path(image_file))
        except PredictionError as e:
            print(f"  ❌ {e}")
            all_results[image_file.name] = {"error": e.message, "category": e.category}
            continue

        category = interpret(prediction.bcs_score).category.value
        dog_note = "" if prediction.analysis.is_dog_detected else " (no dog detected)"
        print(f"  ✅ BCS {prediction.bcs_score}/9 - {category}, confidence {prediction.confidence:.0%}{dog_note}")
        all_results[image_file.name] = prediction.to_dict()

    print("\n" + "=" * 80)
    print(f"\n✨ Done! Processed {len(image_files)} images\n")
    return all_results


def reorganize_results(results: dict) -> dict:
    """Group predictions by weight category and collect failures separately."""

    by_category = {"Underweight": [], "Ideal": [], "Overweight": [], "Obese": []}
    failed = []

    for image_name, data in results.items():
        if "error" in data:
            failed.append({"image": image_name, **data})
            continue
        category = interpret(data["bcsScore"]).category.value
        by_category[category].append({"image": image_name, **data})

    return {
        "categories": by_category,
        "failed": failed,
        "summary": {
            "total": len(results),
            "scored_count": len(results) - len(failed),
            "failed_count": len(failed),
        },
    }


def save_results_to_json(results: dict, output_file: str = "bcs_results.json") -> None:
    organized = reorganize_results(results)
    with open(output_file, "w", encoding="utf-8") as f:
        json.dump(organized, f, ensure_ascii=False, indent=2)
    print(f"💾 Results saved to: {output_file}")


def print_summary(results: dict) -> None:
    print("\n" + "=" * 80)
    print("📊 Summary")
    print("=" * 80)

    organized = reorganize_results(results)
    print(f"\nTotal images: {organized['summary']['total']}")
    for category, items in organized["categories"].items():
        print(f"  - {category}: {len(items)}")
    if organized["failed"]:
        print(f"  - Failed: {len(organized['failed'])}")
        for item in organized["failed"]:
            print(f"     {item['image']}: [{item['category']}] {item['error']}")

    print("\n" + "=" * 80)


async def run(folder: str, method: str, output: Optional[str]) -> None:
    scorer = build_scorer(method)
    try:
        results = await score_images_in_folder(folder, scorer)
    finally:
        await scorer.close()

    if results:
        print_summary(results)
        if output:
            save_results_to_json(results, output)


def main(argv: Optional[list] = None) -> None:
    script_dir = Path(__file__).parent
    parser = argparse.ArgumentParser(description="Estimate dog body condition scores for a folder of photos.")
    parser.add_argument("folder", nargs="?", default=str(script_dir / "test-images"))
    parser.add_argument("--method", choices=METHODS, default="local")
    parser.add_argument("--output", default=str(script_dir / "bcs_results.json"))
    parser.add_argument("--log-level", default=None)
    args = parser.parse_args(argv)

    configure_logging(args.log_level)

    print("\n" + "=" * 80)
    print("🐕 Batch BCS scoring")
    print("=" * 80)
    print(f"📂 Image folder: {args.folder}")
    print(f"🔧 Method: {args.method}\n")

    asyncio.run(run(args.folder, args.method, args.output))
    print("\n✅ Finished!\n")


if __name__ == "__main__":
    main()

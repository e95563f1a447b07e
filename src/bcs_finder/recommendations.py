"""Score-dependent advice and category interpretation."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple


class BCSCategory(str, Enum):
    """Weight categories on the 1-9 scale."""

    UNDERWEIGHT = "Underweight"
    IDEAL = "Ideal"
    OVERWEIGHT = "Overweight"
    OBESE = "Obese"


@dataclass(frozen=True)
class BCSInterpretation:
    """What a final score means for the owner."""

    category: BCSCategory
    description: str
    recommendations: Tuple[str, ...]


# Advice attached to image-based predictions.
PREDICTION_RECOMMENDATIONS = {
    BCSCategory.UNDERWEIGHT: (
        "The AI analysis suggests your dog may be underweight",
        "Please consult your veterinarian for confirmation",
        "A professional examination is recommended",
    ),
    BCSCategory.IDEAL: (
        "The AI analysis suggests your dog is in good condition",
        "Continue current diet and exercise routine",
        "Regular vet check-ups are still important",
    ),
    BCSCategory.OVERWEIGHT: (
        "The AI analysis suggests your dog may be overweight",
        "Consider consulting your veterinarian",
        "Gradual diet and exercise adjustments may help",
    ),
    BCSCategory.OBESE: (
        "The AI analysis suggests your dog may be significantly overweight",
        "Veterinary consultation is strongly recommended",
        "A professional weight management plan may be needed",
    ),
}

_INTERPRETATIONS = {
    BCSCategory.UNDERWEIGHT: BCSInterpretation(
        category=BCSCategory.UNDERWEIGHT,
        description="Your dog appears to be underweight.",
        recommendations=(
            "Consult your veterinarian for a health check",
            "Discuss appropriate diet and feeding schedule",
            "Rule out underlying health issues",
            "Consider increasing caloric intake gradually",
        ),
    ),
    BCSCategory.IDEAL: BCSInterpretation(
        category=BCSCategory.IDEAL,
        description="Your dog appears to be at an ideal weight!",
        recommendations=(
            "Maintain current diet and exercise routine",
            "Continue regular vet check-ups",
            "Monitor weight regularly",
            "Keep up the great work!",
        ),
    ),
    BCSCategory.OVERWEIGHT: BCSInterpretation(
        category=BCSCategory.OVERWEIGHT,
        description="Your dog appears to be overweight.",
        recommendations=(
            "Consult your veterinarian for a weight loss plan",
            "Increase daily exercise gradually",
            "Monitor portion sizes carefully",
            "Reduce treats and table scraps",
        ),
    ),
    BCSCategory.OBESE: BCSInterpretation(
        category=BCSCategory.OBESE,
        description="Your dog appears to be obese.",
        recommendations=(
            "Schedule a veterinary consultation urgently",
            "Develop a supervised weight loss program",
            "Address potential health complications",
            "Increase activity level under vet guidance",
        ),
    ),
}


def category_for(score: int) -> BCSCategory:
    if score <= 3:
        return BCSCategory.UNDERWEIGHT
    if score <= 5:
        return BCSCategory.IDEAL
    if score <= 7:
        return BCSCategory.OVERWEIGHT
    return BCSCategory.OBESE


def recommendations_for(score: int) -> Tuple[str, ...]:
    """Return the three-item advice tier for a final score."""

    return PREDICTION_RECOMMENDATIONS[category_for(score)]


def interpret(score: int) -> BCSInterpretation:
    """Return category, description and owner advice for a final score."""

    return _INTERPRETATIONS[category_for(score)]

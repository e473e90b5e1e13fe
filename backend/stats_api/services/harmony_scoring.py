"""
Deterministic Harmony scoring, used when no language model is involved.

`estimate` turns a HarmonySnapshot into a full HarmonyAnalysis-shaped dict
(engine "Harmony_Conseils_v3_Fallback"). `compare_score` blends a user's
per-module scores with friends / national / worldwide averages using
degressive coefficients (0.5 > 0.3 > 0.2).
"""
import math
from datetime import date, datetime, timedelta
from typing import Dict, List, Optional

from stats_api.schemas.harmony import (
    HarmonySnapshot,
    HarmonyAnalysis,
    HealthRecords,
    AssetTotals,
    LiabilityTotals,
    Connections,
    SocialActivity,
    Achievement,
    MODULES,
)

FALLBACK_ENGINE = "Harmony_Conseils_v3_Fallback"

PILLAR_WEIGHTS = {
    "vitality": 0.30,
    "sovereignty": 0.25,
    "connection": 0.20,
    "expansion": 0.25,
}

FRIENDS_WEIGHT = 0.5
NATIONAL_WEIGHT = 0.3
WORLDWIDE_WEIGHT = 0.2
PERSONAL_WEIGHT = 0.6
AVERAGE_WEIGHT = 0.4

GOOD_SLEEP = {"good", "excellent"}
GOOD_INTERACTION = {"good", "great"}
RARE_ACHIEVEMENT = {"rare", "epic", "legendary"}


def round_half_up(value: float) -> int:
    """Halves round up (62.5 -> 63), unlike the builtin round"""
    return int(math.floor(value + 0.5))


def _clamp(score: float) -> float:
    return min(100, max(0, score))


def health_score(health: HealthRecords) -> float:
    score = 50.0

    if health.sleep:
        avg_duration = sum(s.duration for s in health.sleep) / len(health.sleep)
        if avg_duration >= 420:  # 7+ hours
            score += 15
        elif avg_duration >= 360:  # 6+ hours
            score += 10
        else:
            score -= 10

        good_nights = sum(1 for s in health.sleep if s.quality in GOOD_SLEEP)
        score += (good_nights / len(health.sleep)) * 15

    if health.activity:
        weekly_minutes = sum(a.duration for a in health.activity)
        if weekly_minutes >= 150:
            score += 15
        elif weekly_minutes >= 75:
            score += 10

    return _clamp(score)


def finance_score(assets: AssetTotals, liabilities: LiabilityTotals) -> float:
    net_worth = assets.total - liabilities.total

    if net_worth > 1_000_000:
        return 95
    if net_worth > 500_000:
        return 85
    if net_worth > 100_000:
        return 70
    if net_worth > 50_000:
        return 60
    if net_worth > 0:
        return 45
    return 25


def social_score(connections: Connections, activities: List[SocialActivity]) -> float:
    score = 50.0

    if connections.inner_circle >= 5:
        score += 20
    elif connections.inner_circle >= 3:
        score += 10

    if connections.active_monthly >= 10:
        score += 15
    elif connections.active_monthly >= 5:
        score += 10

    if activities:
        good = sum(1 for a in activities if a.quality in GOOD_INTERACTION)
        score += (good / len(activities)) * 15

    return _clamp(score)


def _parse_date(value: str) -> Optional[datetime]:
    try:
        return datetime.fromisoformat(value[:10])
    except ValueError:
        return None


def _six_months_before(today: date) -> date:
    month = today.month - 6
    year = today.year
    if month <= 0:
        month += 12
        year -= 1
    # Clamp the day for shorter months
    for day in (today.day, 30, 29, 28):
        try:
            return date(year, month, day)
        except ValueError:
            continue
    return today - timedelta(days=182)


def growth_score(
    achievements: List[Achievement],
    countries_visited: int,
    today: Optional[date] = None,
) -> float:
    score = 40.0

    if countries_visited >= 30:
        score += 25
    elif countries_visited >= 15:
        score += 20
    elif countries_visited >= 5:
        score += 10

    if achievements:
        rare = sum(1 for a in achievements if a.rarity in RARE_ACHIEVEMENT)
        score += min(25, rare * 5)

        cutoff = _six_months_before(today or date.today())
        recent = 0
        for achievement in achievements:
            achieved = _parse_date(achievement.date)
            if achieved is not None and achieved.date() > cutoff:
                recent += 1
        score += min(10, recent * 3)

    return _clamp(score)


def tier_for(score: float) -> str:
    if score >= 90:
        return "Souverain"
    if score >= 70:
        return "Aligné"
    if score >= 50:
        return "En Construction"
    if score >= 30:
        return "Frustration"
    return "Dissonance"


def status_for(score: float) -> str:
    if score >= 85:
        return "Excellent"
    if score >= 70:
        return "Bon"
    if score >= 50:
        return "Moyen"
    if score >= 30:
        return "Préoccupant"
    return "Critique"


def weighted_harmony(pillars: Dict[str, float]) -> int:
    return round_half_up(sum(pillars[name] * weight for name, weight in PILLAR_WEIGHTS.items()))


def _fmt(score: float) -> str:
    return f"{score:g}" if float(score).is_integer() else f"{score:.1f}"


def _pillar(score: float, label: str, good: str, bad: str) -> Dict:
    return {
        "score": score,
        "status": status_for(score),
        "key_metric": f"{label}: {_fmt(score)}%",
        "honest_assessment": good if score >= 70 else bad,
    }


def estimate(snapshot: HarmonySnapshot, today: Optional[date] = None) -> Dict:
    """Fallback Harmony analysis computed from the snapshot alone"""
    today = today or date.today()

    vitality = health_score(snapshot.health_records)
    sovereignty = finance_score(snapshot.assets, snapshot.liabilities)
    connection = social_score(snapshot.connections, snapshot.social_activities)
    expansion = growth_score(snapshot.achievements, snapshot.visited_countries, today)

    harmony = weighted_harmony({
        "vitality": vitality,
        "sovereignty": sovereignty,
        "connection": connection,
        "expansion": expansion,
    })

    weakest_is_health = vitality < sovereignty and vitality < connection

    analysis = {
        "meta": {
            "engine": FALLBACK_ENGINE,
            "analysis_date": today.isoformat(),
            "language": snapshot.language or "fr",
            "data_quality": "Partielles",
        },
        "harmony_score": {
            "value": harmony,
            "tier": tier_for(harmony),
            "trend": "Convergence" if harmony > 50 else "Divergence",
            "trend_detail": "Analyse de tendance non disponible (mode fallback)",
        },
        "pillar_scores": {
            "vitality": _pillar(
                vitality, "Score santé",
                "Votre santé semble bien gérée.",
                "Des améliorations sont nécessaires dans ce domaine.",
            ),
            "sovereignty": _pillar(
                sovereignty, "Score financier",
                "Votre situation financière est stable.",
                "Votre situation financière nécessite attention.",
            ),
            "connection": _pillar(
                connection, "Score social",
                "Vos connexions sociales sont satisfaisantes.",
                "Vos connexions sociales pourraient être renforcées.",
            ),
            "expansion": _pillar(
                expansion, "Score expansion",
                "Votre croissance personnelle progresse bien.",
                "Votre croissance personnelle pourrait être stimulée.",
            ),
        },
        "weekly_trend": {
            "direction": "Stable",
            "delta": 0,
            "insight": "Analyse hebdomadaire non disponible en mode fallback.",
        },
        "monthly_trend": {
            "direction": "Stable",
            "delta": 0,
            "insight": "Analyse mensuelle non disponible en mode fallback.",
        },
        "objective_adjustments": [],
        "conseils": [
            {
                "priority": 1,
                "type": "ACTION",
                "pillar": "Vitalité" if weakest_is_health else "Général",
                "conseil": "Activez l'analyse IA pour des conseils personnalisés et détaillés.",
                "impact_attendu": "Accès à des recommandations basées sur vos données",
                "timeline": "Immédiat",
            }
        ],
        "warnings": [
            {
                "severity": "Info",
                "message": "Mode fallback actif - Configurez votre clé API Anthropic pour l'analyse complète.",
            }
        ],
        "archetype": {
            "name": "Profil en analyse",
            "description": "L'analyse complète de votre archétype nécessite l'activation de l'IA.",
            "forces": ["À déterminer"],
            "faiblesses": ["À déterminer"],
        },
    }

    # Same contract as a model answer
    return HarmonyAnalysis.model_validate(analysis).model_dump(mode="json")


def compare_score(
    user_scores: Dict[str, float],
    friends_avg: Dict[str, float],
    national_avg: Dict[str, float],
    worldwide_avg: Dict[str, float],
) -> Dict:
    """
    Degressive-coefficient comparison across modules A..E.

    A missing (or zero) average falls back to the user's own score; a
    missing user score counts as 0.
    """
    module_scores: Dict[str, float] = {}
    for module in MODULES:
        user_score = user_scores.get(module) or 0
        weighted_avg = (
            (friends_avg.get(module) or user_score) * FRIENDS_WEIGHT
            + (national_avg.get(module) or user_score) * NATIONAL_WEIGHT
            + (worldwide_avg.get(module) or user_score) * WORLDWIDE_WEIGHT
        )
        module_scores[module] = user_score * PERSONAL_WEIGHT + weighted_avg * AVERAGE_WEIGHT

    total = sum(module_scores.values()) / len(MODULES)
    return {
        "score": round_half_up(total),
        "module_scores": {k: round(v, 2) for k, v in module_scores.items()},
    }

"""
Harmony Service - cached language model analysis of a user's metrics

Flow for one analysis request:
1. Resolve the language (en/fr/es, default fr) and hash the payload
   without its `language` key, so a language switch alone keeps the hash.
2. Load the cache columns from the user's profile. A failed lookup is
   treated as an empty cache.
3. Serve from cache when the hash matches (hit A) or the cache is inside
   the freshness window (hit B), both only for the same language and
   when the caller did not force a refresh.
4. Otherwise call the model once, validate its JSON against
   HarmonyAnalysis, persist {hash, analysis, now} and return it.

The endpoint wraps every failure in a 500 with {"error": message}.
"""

import hashlib
import json
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Dict, Optional

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from stats_api.core.config import settings
from stats_api.core.exceptions import AIServiceError, AIResponseParseError, AnalysisNotFoundError
from stats_api.core.logging_config import logger
from stats_api.core.types import utcnow, as_naive_utc
from stats_api.models.profile import Profile
from stats_api.schemas.harmony import HarmonyAnalysis
from stats_api.utils.response_parser import extract_json_object

CACHE_NAME = "Harmony AI"
# Age reported for a cache that has no timestamp
UNKNOWN_AGE_HOURS = 999.0


_PROMPT_EN = """You are a Life Alignment Analyst (Data-Driven). Analyze JSON data and generate a strict JSON report.

Rules:
1. Brutal honesty. If score < 50, say "Failure".
2. No calculations. Use provided metrics.
3. JSON format only.

Example Output:
{
  "meta": { "engine": "Harmony_v4", "analysis_date": "2024-01-01", "language": "en", "data_quality": "Complètes" },
  "harmony_score": { "value": 72, "tier": "Aligné", "trend": "Convergence", "trend_detail": "+2 pts" },
  "pillar_scores": {
    "vitality": { "score": 80, "status": "Bon", "key_metric": "Sleep 7.5h", "honest_assessment": "Solid." },
    "sovereignty": { "score": 45, "status": "Préoccupant", "key_metric": "Savings 5%", "honest_assessment": "Mediocre." },
    "connection": { "score": 60, "status": "Moyen", "key_metric": "Friends 3", "honest_assessment": "Stable." },
    "expansion": { "score": 90, "status": "Excellent", "key_metric": "Trips 4", "honest_assessment": "Exceptional." }
  },
  "weekly_trend": { "direction": "Stable", "delta": 0, "insight": "Maintenance." },
  "monthly_trend": { "direction": "Amélioration", "delta": 5, "insight": "Efforts paying off." },
  "objective_adjustments": [],
  "conseils": [{ "priority": 1, "type": "ACTION", "pillar": "sovereignty", "conseil": "Save 10% auto", "impact_attendu": "+5 pts", "timeline": "This month" }],
  "warnings": [],
  "archetype": { "name": "Builder", "description": "Construction focus", "forces": ["Discipline"], "faiblesses": ["Rigidity"] }
}"""

_PROMPT_ES = """Eres un Analista de Alineación de Vida (Basado en Datos). Analiza los datos JSON y genera un informe JSON estricto.

Reglas:
1. Honestidad brutal. Si la puntuación < 50, di "Fracaso".
2. Sin cálculos. Utiliza las métricas proporcionadas.
3. Formato JSON únicamente.

Ejemplo Output:
{
  "meta": { "engine": "Harmony_v4", "analysis_date": "2024-01-01", "language": "es", "data_quality": "Complètes" },
  "harmony_score": { "value": 72, "tier": "Aligné", "trend": "Convergence", "trend_detail": "+2 pts" },
  "pillar_scores": {
    "vitality": { "score": 80, "status": "Bon", "key_metric": "Sleep 7.5h", "honest_assessment": "Sólido." },
    "sovereignty": { "score": 45, "status": "Préoccupant", "key_metric": "Savings 5%", "honest_assessment": "Mediocre." },
    "connection": { "score": 60, "status": "Moyen", "key_metric": "Friends 3", "honest_assessment": "Estable." },
    "expansion": { "score": 90, "status": "Excellent", "key_metric": "Trips 4", "honest_assessment": "Excepcional." }
  },
  "weekly_trend": { "direction": "Stable", "delta": 0, "insight": "Mantenimiento." },
  "monthly_trend": { "direction": "Amélioration", "delta": 5, "insight": "Esfuerzos dando frutos." },
  "objective_adjustments": [],
  "conseils": [{ "priority": 1, "type": "ACTION", "pillar": "sovereignty", "conseil": "Ahorra 10% auto", "impact_attendu": "+5 pts", "timeline": "Este mes" }],
  "warnings": [],
  "archetype": { "name": "Constructor", "description": "Enfoque en construcción", "forces": ["Disciplina"], "faiblesses": ["Rigidez"] }
}"""

_PROMPT_FR = """Tu es un Analyste de Vie (Data-Driven). Analyse les données JSON et génère un rapport JSON strict.

Règles:
1. Honnêteté brutale. Si score < 50, dis "Échec".
2. Pas de calculs. Utilise les métriques fournies.
3. Format JSON uniquement.

Exemple Output:
{
  "meta": { "engine": "Harmony_v4", "analysis_date": "2024-01-01", "language": "fr", "data_quality": "Complètes" },
  "harmony_score": { "value": 72, "tier": "Aligné", "trend": "Convergence", "trend_detail": "+2 pts" },
  "pillar_scores": {
    "vitality": { "score": 80, "status": "Bon", "key_metric": "Sleep 7.5h", "honest_assessment": "Solide." },
    "sovereignty": { "score": 45, "status": "Préoccupant", "key_metric": "Savings 5%", "honest_assessment": "Médiocre." },
    "connection": { "score": 60, "status": "Moyen", "key_metric": "Friends 3", "honest_assessment": "Stable." },
    "expansion": { "score": 90, "status": "Excellent", "key_metric": "Trips 4", "honest_assessment": "Exceptionnel." }
  },
  "weekly_trend": { "direction": "Stable", "delta": 0, "insight": "Maintenance." },
  "monthly_trend": { "direction": "Amélioration", "delta": 5, "insight": "Efforts payants." },
  "objective_adjustments": [],
  "conseils": [{ "priority": 1, "type": "ACTION", "pillar": "sovereignty", "conseil": "Épargne 10% auto", "impact_attendu": "+5 pts", "timeline": "Ce mois" }],
  "warnings": [],
  "archetype": { "name": "Bâtisseur", "description": "Focus construction", "forces": ["Discipline"], "faiblesses": ["Rigidité"] }
}"""


def get_system_prompt(language: str) -> str:
    """Locale-specific system prompt; anything other than en/es gets French"""
    if language == "en":
        return _PROMPT_EN
    if language == "es":
        return _PROMPT_ES
    return _PROMPT_FR


def resolve_language(payload: Dict[str, Any]) -> str:
    language = payload.get("language") or settings.HARMONY_DEFAULT_LANGUAGE
    if not isinstance(language, str) or language not in settings.HARMONY_SUPPORTED_LANGUAGES:
        return settings.HARMONY_DEFAULT_LANGUAGE
    return language


def compute_data_hash(payload: Dict[str, Any]) -> str:
    """SHA-256 of the compact JSON of the payload minus `language`, keys in received order"""
    data_for_hash = {key: value for key, value in payload.items() if key != "language"}
    data_string = json.dumps(data_for_hash, separators=(",", ":"), ensure_ascii=False)
    return hashlib.sha256(data_string.encode("utf-8")).hexdigest()


def hours_since(timestamp: Optional[datetime], now: datetime) -> float:
    if timestamp is None:
        return UNKNOWN_AGE_HOURS
    return (as_naive_utc(now) - as_naive_utc(timestamp)).total_seconds() / 3600


@dataclass
class HarmonyCacheRecord:
    data_hash: Optional[str]
    analysis: Optional[Dict[str, Any]]
    last_analyzed_at: Optional[datetime]

    @property
    def language(self) -> Optional[str]:
        meta = (self.analysis or {}).get("meta")
        return meta.get("language") if isinstance(meta, dict) else None


def evaluate_cache(
    cache: Optional[HarmonyCacheRecord],
    data_hash: str,
    language: str,
    force: bool,
    now: datetime,
) -> Optional[Dict[str, Any]]:
    """
    Decide whether the stored analysis can answer this request.

    Returns the response body on a hit, None on a miss.
    """
    if cache is None or not cache.analysis or force:
        return None

    if cache.language != language:
        return None

    if cache.data_hash == data_hash:
        logger.log_cache_event(CACHE_NAME, True, f"Hash Match - {language}", language=language)
        return cache.analysis

    hours_old = hours_since(cache.last_analyzed_at, now)
    if hours_old < settings.HARMONY_CACHE_WINDOW_HOURS:
        logger.log_cache_event(
            CACHE_NAME, True,
            f"Freshness Window: {hours_old:.1f}h old - {language}",
            language=language, hours_old=round(hours_old, 1),
        )
        meta = cache.analysis.get("meta")
        return {
            **cache.analysis,
            "_meta": {
                **(meta if isinstance(meta, dict) else {}),
                "cached_cause": "freshness_window",
                "hours_old": f"{hours_old:.1f}",
            },
        }

    return None


class HarmonyService:
    """Harmony analysis with a per-user content-addressed cache"""

    async def load_cache(self, db: AsyncSession, user_id: str) -> Optional[HarmonyCacheRecord]:
        """Read the cache columns; any database error means 'no cache'"""
        try:
            result = await db.execute(
                select(
                    Profile.harmony_data_hash,
                    Profile.harmony_analysis_cache,
                    Profile.harmony_last_analyzed_at,
                ).where(Profile.id == user_id)
            )
            row = result.first()
        except SQLAlchemyError as e:
            logger.warning(f"Harmony cache lookup failed for user {user_id}, treating as empty: {e}")
            await db.rollback()
            return None

        if row is None:
            return None
        return HarmonyCacheRecord(
            data_hash=row[0],
            analysis=row[1],
            last_analyzed_at=row[2],
        )

    async def save_cache(
        self,
        db: AsyncSession,
        user_id: str,
        data_hash: str,
        analysis: Dict[str, Any],
        analyzed_at: datetime,
    ) -> None:
        await db.execute(
            update(Profile)
            .where(Profile.id == user_id)
            .values(
                harmony_data_hash=data_hash,
                harmony_analysis_cache=analysis,
                harmony_last_analyzed_at=as_naive_utc(analyzed_at),
            )
        )
        await db.commit()

    async def request_analysis(self, client: Any, payload: Dict[str, Any], language: str) -> Dict[str, Any]:
        """Call the model once and return its validated analysis as plain JSON data"""
        result = await client.generate(
            prompt=json.dumps(payload, ensure_ascii=False),
            system_prompt=get_system_prompt(language),
            temperature=settings.CLAUDE_HARMONY_TEMPERATURE,
        )

        raw_content = (result or {}).get("content")
        if not raw_content or not raw_content.strip():
            raise AIServiceError("No content from AI")

        parsed = extract_json_object(raw_content)
        if isinstance(parsed.get("meta"), dict):
            parsed["meta"]["language"] = language

        try:
            validated = HarmonyAnalysis.model_validate(parsed)
        except PydanticValidationError as e:
            raise AIResponseParseError(
                f"AI response failed validation ({e.error_count()} errors)"
            ) from e

        return validated.model_dump(mode="json")

    async def analyze(
        self,
        db: AsyncSession,
        user_id: str,
        payload: Dict[str, Any],
        client_factory: Callable[[], Any],
        force: bool = False,
        now: Optional[datetime] = None,
    ) -> Dict[str, Any]:
        """
        Return a Harmony analysis for `payload`, from cache when allowed.

        Args:
            db: Database session
            user_id: Authenticated user
            payload: Metrics snapshot exactly as received
            client_factory: Returns the language model client; only called on a miss
            force: Skip both cache paths
            now: Clock override for tests

        Returns:
            The analysis dict (hit B adds a `_meta` block)
        """
        clock = now
        now = now or utcnow()
        language = resolve_language(payload)
        data_hash = compute_data_hash(payload)

        cache = await self.load_cache(db, user_id)
        cached = evaluate_cache(cache, data_hash, language, force, now)
        if cached is not None:
            return cached

        same_language = cache is not None and cache.language == language
        logger.log_cache_event(
            CACHE_NAME, False,
            f"Hash/Time or Language mismatch: {'Same Lang' if same_language else 'Diff Lang'}"
            f"{', forced' if force else ''} - Calling Claude ({language})",
            language=language, forced=force,
        )

        analysis = await self.request_analysis(client_factory(), payload, language)
        # Stamped when stored, not when the request started
        await self.save_cache(db, user_id, data_hash, analysis, clock or utcnow())

        logger.info(
            f"Harmony analysis stored for user {user_id}",
            extra={"event_type": "harmony_analysis", "language": language, "data_hash": data_hash[:12]},
        )
        return analysis

    async def get_latest(self, db: AsyncSession, user_id: str) -> Dict[str, Any]:
        cache = await self.load_cache(db, user_id)
        if cache is None or not cache.analysis:
            raise AnalysisNotFoundError(user_id)
        return {
            "analysis": cache.analysis,
            "data_hash": cache.data_hash,
            "last_analyzed_at": cache.last_analyzed_at.isoformat() if cache.last_analyzed_at else None,
        }

    async def clear_cache(self, db: AsyncSession, user_id: str) -> None:
        await db.execute(
            update(Profile)
            .where(Profile.id == user_id)
            .values(
                harmony_data_hash=None,
                harmony_analysis_cache=None,
                harmony_last_analyzed_at=None,
            )
        )
        await db.commit()
        logger.log_cache_event(CACHE_NAME, False, "cleared by user", user_id=user_id)


# Singleton instance
harmony_service = HarmonyService()

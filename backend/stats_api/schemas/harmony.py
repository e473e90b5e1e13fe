"""
Harmony analysis schemas.

`HarmonyAnalysis` is the contract every language model answer must satisfy
before it is cached or returned. Unknown keys are dropped during validation
(pydantic's default `extra="ignore"`), so the cached copy only ever holds
the documented shape. Numeric fields are strict: `"72"` is not a score and
`true` is not a priority. NaN and infinities are rejected everywhere, since
they cannot be rendered as JSON.

`HarmonySnapshot` is the metrics document the dashboard submits for
analysis. The analyze endpoint itself takes the raw JSON body, because the
cache hash must be computed over the keys exactly as received; the typed
snapshot is used where the server builds or scores one.
"""
from typing import Optional, List, Dict, Literal, Any

from pydantic import BaseModel, ConfigDict, Field, StrictFloat


Language = Literal["en", "fr", "es"]
DataQuality = Literal["Complètes", "Partielles", "Insuffisantes"]
Tier = Literal["Dissonance", "Frustration", "En Construction", "Aligné", "Souverain"]
Trend = Literal["Convergence", "Divergence"]
PillarStatus = Literal["Critique", "Préoccupant", "Moyen", "Bon", "Excellent"]
TrendDirection = Literal["Amélioration", "Stable", "Dégradation"]
Adjustment = Literal["Augmenter", "Maintenir", "Réduire"]
ConseilType = Literal["ACTION", "RÉDUCTION_OBJECTIF"]
Severity = Literal["Info", "Attention", "Alerte", "Critique"]


class AnalysisModel(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)


class SnapshotModel(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)


# ============================================
# Analysis response
# ============================================

class HarmonyMeta(AnalysisModel):
    engine: str
    analysis_date: str
    language: Language
    data_quality: DataQuality


class HarmonyScore(AnalysisModel):
    value: StrictFloat
    tier: Tier
    trend: Trend
    trend_detail: str


class PillarScore(AnalysisModel):
    score: StrictFloat
    status: PillarStatus
    key_metric: str
    honest_assessment: str


class PillarScores(AnalysisModel):
    vitality: PillarScore
    sovereignty: PillarScore
    connection: PillarScore
    expansion: PillarScore


class TrendAnalysis(AnalysisModel):
    direction: TrendDirection
    delta: StrictFloat
    insight: str


class ObjectiveAdjustment(AnalysisModel):
    pillar: str
    current_objective: str
    recommended_adjustment: Adjustment
    new_target: str
    justification: str


class Conseil(AnalysisModel):
    priority: StrictFloat
    type: ConseilType
    pillar: str
    conseil: str
    impact_attendu: str
    timeline: str


class HarmonyWarning(AnalysisModel):
    severity: Severity
    message: str


class Archetype(AnalysisModel):
    name: str
    description: str
    forces: List[str]
    faiblesses: List[str]


class HarmonyAnalysis(AnalysisModel):
    meta: HarmonyMeta
    harmony_score: HarmonyScore
    pillar_scores: PillarScores
    weekly_trend: TrendAnalysis
    monthly_trend: TrendAnalysis
    objective_adjustments: List[ObjectiveAdjustment]
    conseils: List[Conseil]
    warnings: List[HarmonyWarning]
    archetype: Archetype


class HarmonyLatestResponse(BaseModel):
    analysis: Dict[str, Any]
    data_hash: Optional[str] = None
    last_analyzed_at: Optional[str] = None


# ============================================
# Metrics snapshot (analysis request)
# ============================================

class SleepEntry(SnapshotModel):
    date: str
    duration: float
    quality: str


class ActivityEntry(SnapshotModel):
    date: str
    type: str
    duration: float
    intensity: str


class Measurements(SnapshotModel):
    weight: float = 0
    hrv: Optional[float] = None
    resting_heart_rate: Optional[float] = None


class HealthRecords(SnapshotModel):
    sleep: List[SleepEntry] = []
    activity: List[ActivityEntry] = []
    measurements: Measurements = Field(default_factory=Measurements)


class AssetTotals(SnapshotModel):
    total: float = 0
    liquid: float = 0
    real_estate: float = 0
    investments: float = 0


class LiabilityTotals(SnapshotModel):
    total: float = 0
    mortgages: float = 0
    other_debt: float = 0


class Career(SnapshotModel):
    position: str = ""
    years_experience: float = 0
    industry: str = ""
    satisfaction: Optional[float] = None


class Connections(SnapshotModel):
    total: int = 0
    inner_circle: int = 0
    active_monthly: int = 0


class SocialActivity(SnapshotModel):
    date: str
    type: str
    quality: str


class Achievement(SnapshotModel):
    title: str
    date: str
    category: str
    rarity: str


class HealthGoals(SnapshotModel):
    target_weight: Optional[float] = None
    sleep_hours: Optional[float] = None
    weekly_activity_minutes: Optional[float] = None
    description: Optional[str] = None


class FinanceGoals(SnapshotModel):
    net_worth_target: Optional[float] = None
    monthly_savings: Optional[float] = None
    debt_free_date: Optional[str] = None
    description: Optional[str] = None


class SocialGoals(SnapshotModel):
    close_friends_count: Optional[int] = None
    weekly_interactions: Optional[int] = None
    network_size: Optional[Literal["minimal", "moderate", "extensive"]] = None
    description: Optional[str] = None


class GrowthGoals(SnapshotModel):
    countries_to_visit: Optional[int] = None
    skills_to_learn: Optional[List[str]] = None
    career_milestone: Optional[str] = None
    description: Optional[str] = None


class UserGoals(SnapshotModel):
    health: HealthGoals = Field(default_factory=HealthGoals)
    finance: FinanceGoals = Field(default_factory=FinanceGoals)
    social: SocialGoals = Field(default_factory=SocialGoals)
    growth: GrowthGoals = Field(default_factory=GrowthGoals)


def default_user_goals() -> UserGoals:
    """Goals used when the user has not declared any"""
    return UserGoals(
        health=HealthGoals(
            target_weight=75,
            sleep_hours=7.5,
            weekly_activity_minutes=150,
            description="Maintain good health and energy",
        ),
        finance=FinanceGoals(
            net_worth_target=500000,
            monthly_savings=2000,
            description="Financial independence",
        ),
        social=SocialGoals(
            close_friends_count=10,
            weekly_interactions=3,
            network_size="moderate",
            description="Maintain meaningful relationships",
        ),
        growth=GrowthGoals(
            countries_to_visit=50,
            skills_to_learn=["leadership"],
            career_milestone="Director level",
            description="Continuous growth and exploration",
        ),
    )


class HarmonySnapshot(SnapshotModel):
    health_records: HealthRecords = Field(default_factory=HealthRecords)
    assets: AssetTotals = Field(default_factory=AssetTotals)
    liabilities: LiabilityTotals = Field(default_factory=LiabilityTotals)
    career: Career = Field(default_factory=Career)
    connections: Connections = Field(default_factory=Connections)
    social_activities: List[SocialActivity] = []
    achievements: List[Achievement] = []
    visited_countries: int = 0
    user_goals: UserGoals = Field(default_factory=default_user_goals)
    language: Optional[Language] = None


# ============================================
# Score comparison
# ============================================

MODULES = ("A", "B", "C", "D", "E")


class CompareRequest(BaseModel):
    user_scores: Dict[str, float]
    friends_avg: Dict[str, float] = {}
    national_avg: Dict[str, float] = {}
    worldwide_avg: Dict[str, float] = {}


class CompareResponse(BaseModel):
    score: int
    module_scores: Dict[str, float]

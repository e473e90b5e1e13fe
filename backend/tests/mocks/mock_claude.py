"""
Mock Claude Client for Testing
Returns a canned Harmony analysis without calling the actual API
"""
from typing import Any, Dict, List, Optional
import copy
import json


def sample_analysis(language: str = "fr") -> Dict[str, Any]:
    """A complete analysis that validates against HarmonyAnalysis"""
    return {
        "meta": {
            "engine": "Harmony_v4",
            "analysis_date": "2025-12-30",
            "language": language,
            "data_quality": "Complètes",
        },
        "harmony_score": {"value": 72, "tier": "Aligné", "trend": "Convergence", "trend_detail": "+2 pts"},
        "pillar_scores": {
            "vitality": {"score": 80, "status": "Bon", "key_metric": "Sommeil 7.5h", "honest_assessment": "Solide."},
            "sovereignty": {"score": 45, "status": "Préoccupant", "key_metric": "Épargne 5%", "honest_assessment": "Médiocre."},
            "connection": {"score": 60, "status": "Moyen", "key_metric": "Amis 3", "honest_assessment": "Stable."},
            "expansion": {"score": 90, "status": "Excellent", "key_metric": "Voyages 4", "honest_assessment": "Exceptionnel."},
        },
        "weekly_trend": {"direction": "Stable", "delta": 0, "insight": "Maintien."},
        "monthly_trend": {"direction": "Amélioration", "delta": 5, "insight": "Les efforts paient."},
        "objective_adjustments": [
            {
                "pillar": "sovereignty",
                "current_objective": "Épargne 20%",
                "recommended_adjustment": "Réduire",
                "new_target": "10%",
                "justification": "Objectif irréaliste.",
            }
        ],
        "conseils": [
            {
                "priority": 1,
                "type": "ACTION",
                "pillar": "sovereignty",
                "conseil": "Automatiser l'épargne",
                "impact_attendu": "+10 pts",
                "timeline": "1 mois",
            }
        ],
        "warnings": [{"severity": "Attention", "message": "Épargne faible"}],
        "archetype": {
            "name": "L'Aventurier Imprudent",
            "description": "Vit pour l'instant.",
            "forces": ["Curiosité"],
            "faiblesses": ["Épargne"],
        },
    }


class MockClaudeClient:
    """Mock Claude client that returns predefined responses"""

    def __init__(self):
        self.call_count = 0
        self.last_prompt: Optional[str] = None
        self.last_system: Optional[str] = None
        self.last_temperature: Optional[float] = None
        self.content: Optional[str] = None
        self.error: Optional[Exception] = None
        self.analysis = sample_analysis()

    def set_content(self, content: str):
        """Return this raw text instead of the sample analysis"""
        self.content = content

    def set_error(self, error: Exception):
        """Raise this from generate()"""
        self.error = error

    async def generate(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        max_tokens: Optional[int] = None,
        temperature: Optional[float] = None,
        messages: Optional[List[Dict[str, str]]] = None
    ) -> Dict[str, Any]:
        """Mock generate method"""
        self.call_count += 1
        self.last_prompt = prompt
        self.last_system = system_prompt
        self.last_temperature = temperature

        if self.error is not None:
            raise self.error

        content = self.content if self.content is not None else json.dumps(copy.deepcopy(self.analysis))
        return {
            "content": content,
            "model": "mock-claude",
            "input_tokens": len(prompt) // 4,
            "output_tokens": len(content) // 4,
            "total_tokens": (len(prompt) + len(content)) // 4,
            "stop_reason": "end_turn",
            "id": f"msg_mock_{self.call_count}",
        }


# Global mock instance
mock_claude_client = MockClaudeClient()


def get_mock_claude_client() -> MockClaudeClient:
    """Get the mock Claude client instance"""
    return mock_claude_client
